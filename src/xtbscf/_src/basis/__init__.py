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
Basis
=====

Basis set of contracted Gaussian functions and the index helper that maps
between atom-, shell- and orbital-resolved quantities.
"""

from .bas import Basis
from .indexhelper import IndexHelper
from .ortho import gaussian_integral, orthogonalize
from .slater import slater_to_gauss
