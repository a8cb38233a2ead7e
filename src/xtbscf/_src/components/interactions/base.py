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
Provides base class for interactions in the extended tight-binding Hamiltonian.
The `Interaction` class is not purely abstract as its methods return zero.
"""

# pylint: disable=unused-argument
from __future__ import annotations

import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import Tensor

from ..base import Component, ComponentCache

__all__ = ["Interaction", "InteractionCache"]


class InteractionCache(ComponentCache):
    """
    Restart data for individual interactions, extended by subclasses as
    needed.
    """

    __slots__: list[str] = []


class Interaction(Component):
    """
    Base class for defining interactions with the charge density.

    All charges are atom-resolved. A subclass implements
    ``get_atom_energy`` and ``get_atom_potential`` as well as a
    ``get_cache`` method that precalculates and stores all charge-independent
    variables to avoid repeated calculations during the SCF.
    """

    def __init__(
        self,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ):
        super().__init__(device, dtype)

    def get_cache(
        self,
        *,
        numbers: Tensor,
        positions: Tensor,
        ihelp: IndexHelper,
    ) -> InteractionCache:
        """
        Create restart data for individual interactions.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        ihelp: IndexHelper
            Index mapping for the basis set.

        Returns
        -------
        InteractionCache
            Restart data for the interaction.
        """
        return InteractionCache()

    def get_atom_energy(self, charges: Tensor, cache: InteractionCache) -> Tensor:
        """
        Compute the atom-resolved energy. Zero for the base class.

        Parameters
        ----------
        charges : Tensor
            Atom-resolved partial charges.
        cache : InteractionCache
            Restart data for the interaction.

        Returns
        -------
        Tensor
            Atom-resolved energy.
        """
        return torch.zeros_like(charges)

    def get_atom_potential(self, charges: Tensor, cache: InteractionCache) -> Tensor:
        """
        Compute the atom-resolved potential, i.e., the derivative of the
        energy with respect to the charges. Zero for the base class.

        Parameters
        ----------
        charges : Tensor
            Atom-resolved partial charges.
        cache : InteractionCache
            Restart data for the interaction.

        Returns
        -------
        Tensor
            Atom-resolved potential.
        """
        return torch.zeros_like(charges)
