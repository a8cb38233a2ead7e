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
Wavefunction: Mulliken
======================

Population analysis of the density matrix in the non-orthogonal atomic
orbital basis. The density is expected as total density, i.e., with the
alpha and beta channels already summed up.
"""

from __future__ import annotations

import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import Tensor

__all__ = [
    "get_orbital_populations",
    "get_shell_populations",
    "get_atomic_populations",
    "get_mulliken_atomic_charges",
]


def get_orbital_populations(overlap: Tensor, density: Tensor) -> Tensor:
    """
    Orbital-resolved populations, the diagonal of :math:`PS`.

    Parameters
    ----------
    overlap : Tensor
        Overlap matrix.
    density : Tensor
        Density matrix.

    Returns
    -------
    Tensor
        Orbital populations.
    """
    return torch.diagonal(density @ overlap, dim1=-2, dim2=-1)


def get_shell_populations(
    overlap: Tensor, density: Tensor, ihelp: IndexHelper
) -> Tensor:
    """Shell-resolved Mulliken populations."""
    return ihelp.reduce_orbital_to_shell(get_orbital_populations(overlap, density))


def get_atomic_populations(
    overlap: Tensor, density: Tensor, ihelp: IndexHelper
) -> Tensor:
    """Atom-resolved Mulliken populations."""
    return ihelp.reduce_orbital_to_atom(get_orbital_populations(overlap, density))


def get_mulliken_atomic_charges(
    overlap: Tensor, density: Tensor, ihelp: IndexHelper, n0: Tensor
) -> Tensor:
    """
    Atom-resolved Mulliken partial charges. Positive charges correspond to
    an electron deficit with respect to the neutral reference atom.

    Parameters
    ----------
    overlap : Tensor
        Overlap matrix.
    density : Tensor
        Total density matrix.
    ihelp : IndexHelper
        Index mapping for the basis set.
    n0 : Tensor
        Atom-resolved reference occupation.

    Returns
    -------
    Tensor
        Partial charges (shape: ``(nat,)``).
    """
    return n0 - get_atomic_populations(overlap, density, ihelp)
