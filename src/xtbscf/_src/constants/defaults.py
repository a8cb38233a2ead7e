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
Default Settings
================

This module contains the defaults for all `xtbscf` calculations.
"""

from __future__ import annotations

import torch

# General

METHOD = "gfn2"
"""General method for calculation from the xtb family."""

METHOD_CHOICES = [
    "gfn1",
    "gfn1-xtb",
    "gfn2",
    "gfn2-xtb",
    "ipea1",
    "ipea1-xtb",
]
"""List of possible choices for `METHOD`."""

CHRG = 0
"""Total charge of the system."""

SPIN = None
"""Number of unpaired electrons of the system."""

TORCH_DTYPE = torch.double
"""Default data type for floating point tensors."""

TORCH_DTYPE_CHOICES = ["float32", "float64", "double", "sp", "dp"]
"""List of possible choices for `TORCH_DTYPE`."""

TORCH_DEVICE = "cpu"
"""Default device for tensors."""

# SCF settings

GUESS = "sad"
"""Initial guess for orbital charges."""

GUESS_CHOICES = ["eeq", "sad"]
"""List of possible choices for `GUESS`."""

MIXER = "simple"
"""Mixing scheme for the charges in the SCF."""

MIXER_CHOICES = ["simple", "anderson"]
"""List of possible choices for `MIXER`."""

ACCURACY = 1.0
"""Numerical accuracy of the calculation. Smaller values are tighter."""

MAXITER = 250
"""Maximum number of SCF iterations."""

DAMP = 0.4
"""Damping factor for the charge mixing."""

GENERATIONS = 5
"""Number of stored generations in history-based mixing."""

ECONV = 1.0e-6
"""Energy convergence threshold for an accuracy of 1.0."""

PCONV = 2.0e-5
"""Charge convergence threshold (residual norm) for an accuracy of 1.0."""

FORCE_CONVERGENCE = False
"""Whether a non-converged SCF should raise an error instead of a warning."""

# Fermi smearing

FERMI_ETEMP = 300.0
"""Electronic temperature for Fermi smearing in K."""

FERMI_MAXITER = 200
"""Maximum number of steps in the search for the Fermi level."""

FERMI_THRESH = {
    torch.float16: torch.tensor(1e-2, dtype=torch.float16),
    torch.float32: torch.tensor(1e-4, dtype=torch.float32),
    torch.float64: torch.tensor(1e-10, dtype=torch.float64),
}
"""Convergence thresholds for the number of electrons in the Fermi search."""

DEGEN_THRESH = {
    torch.float16: 1e-2,
    torch.float32: 1e-5,
    torch.float64: 1e-8,
}
"""Energy window (Hartree) within which orbitals count as degenerate."""

# Overlap

OVERLAP_THRESH = {
    torch.float16: 1e-2,
    torch.float32: 1e-5,
    torch.float64: 1e-8,
}
"""Smallest overlap eigenvalue accepted before the basis counts as singular."""

# Output

VERBOSITY = 5
"""Verbosity of printout."""

LOG_LEVEL = "info"
"""Default logging level."""

LOG_LEVEL_CHOICES = ["critical", "error", "warn", "warning", "info", "debug"]
"""List of possible choices for `LOG_LEVEL`."""
