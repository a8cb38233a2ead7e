# This file is part of xtbscf.
#
# SPDX-Identifier: Apache-2.0
# Copyright (C) 2024 Grimme Group
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Labels: Methods
===============
"""

GFN1_XTB = 1
"""Integer code for GFN1-xTB."""

GFN1_XTB_STRS = ("gfn1", "gfn1-xtb", "gfn1_xtb", "gfn1xtb")
"""String codes for GFN1-xTB."""

GFN2_XTB = 2
"""Integer code for GFN2-xTB."""

GFN2_XTB_STRS = ("gfn2", "gfn2-xtb", "gfn2_xtb", "gfn2xtb")
"""String codes for GFN2-xTB."""

IPEA1_XTB = 3
"""Integer code for IPEA1-xTB."""

IPEA1_XTB_STRS = ("ipea1", "ipea1-xtb", "ipea1_xtb", "ipea1xtb")
"""String codes for IPEA1-xTB."""

GFN_XTB_MAP = ["", "GFN1-xTB", "GFN2-xTB", "IPEA1-xTB"]
"""Map of xTB methods."""
