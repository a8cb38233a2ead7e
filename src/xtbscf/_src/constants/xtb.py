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
`xtb` parameters
================

This module contains `xtb` parameters of the model that are not contained
in the parametrization file.
"""

DEFAULT_ES2_GEXP: float = 2.0
"""Default exponent of the second-order Coulomb interaction (2.0)."""

DEFAULT_KPOL: float = 2.0
"""Default scaling factor for polarization functions."""

DEFAULT_REPULSION_CUTOFF: float = 25.0
"""Default real space cutoff for repulsion interactions."""


# Dispersion

DEFAULT_DISP_S6: float = 1.0
"""Default scaling of dipole-dipole dispersion."""

DEFAULT_DISP_S8: float = 1.0
"""Default scaling of dipole-quadrupole dispersion."""

DEFAULT_DISP_S9: float = 1.0
"""Default scaling of three-body (ATM) dispersion."""

DEFAULT_DISP_S10: float = 0.0
"""Default scaling of quadrupole-quadrupole dispersion."""

DEFAULT_DISP_A1: float = 0.4
"""Default Becke-Johnson damping parameter (scaling of the critical radius)."""

DEFAULT_DISP_A2: float = 5.0
"""Default Becke-Johnson damping parameter (offset in Bohr)."""

DEFAULT_DISP_ALP: float = 16.0
"""Default exponent of zero damping in the ATM term."""
