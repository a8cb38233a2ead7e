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
xTB Hamiltonians
================

Core Hamiltonians of the GFN family and a factory selecting the Hamiltonian
for a parametrization.
"""

import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.param import Param
from xtbscf._src.typing import Tensor

from .base import BaseHamiltonian
from .gfn1 import GFN1Hamiltonian
from .gfn2 import GFN2Hamiltonian

__all__ = [
    "BaseHamiltonian",
    "GFN1Hamiltonian",
    "GFN2Hamiltonian",
    "new_hamiltonian",
]


def new_hamiltonian(
    numbers: Tensor,
    par: Param,
    ihelp: IndexHelper,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> BaseHamiltonian:
    """
    Create the core Hamiltonian matching the parametrization. The coordination
    number of the parametrization decides between the GFN1 (``"exp"``) and the
    GFN2 (``"gfn"``) form.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par : Param
        Representation of an extended tight-binding model.
    ihelp : IndexHelper
        Helper class for indexing.

    Returns
    -------
    BaseHamiltonian
        Core Hamiltonian.

    Raises
    ------
    ValueError
        Unknown coordination number in the parametrization.
    """
    if par.hamiltonian is None:
        raise RuntimeError("Parametrization does not specify Hamiltonian.")

    cn = par.hamiltonian.xtb.cn
    if cn == "exp":
        return GFN1Hamiltonian(numbers, par, ihelp, device=device, dtype=dtype)
    if cn == "gfn":
        return GFN2Hamiltonian(numbers, par, ihelp, device=device, dtype=dtype)

    raise ValueError(f"Unknown coordination number '{cn}' for the Hamiltonian.")
