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
Container for interactions.
"""

from __future__ import annotations

import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import Tensor

from .base import Interaction

__all__ = ["InteractionList", "InteractionListCache"]


class InteractionListCache(dict):
    """
    Restart data of all interactions, stored by their label.
    """


class InteractionList:
    """
    List of interactions.
    """

    components: list[Interaction]
    """Interactions of the list."""

    def __init__(self, *interactions: Interaction | None) -> None:
        self.components = [i for i in interactions if i is not None]

    def get_cache(
        self, numbers: Tensor, positions: Tensor, ihelp: IndexHelper
    ) -> InteractionListCache:
        """
        Create restart data for all interactions.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        ihelp : IndexHelper
            Index mapping for the basis set.

        Returns
        -------
        InteractionListCache
            Restart data for the interactions.
        """
        cache = InteractionListCache()
        for interaction in self.components:
            cache[interaction.label] = interaction.get_cache(
                numbers=numbers, positions=positions, ihelp=ihelp
            )
        return cache

    def get_energy(self, charges: Tensor, cache: InteractionListCache) -> Tensor:
        """
        Compute the energy for a list of interactions.

        Parameters
        ----------
        charges : Tensor
            Atom-resolved partial charges.
        cache : InteractionListCache
            Restart data for the interactions.

        Returns
        -------
        Tensor
            Atom-resolved energy vector.
        """
        if len(self.components) <= 0:
            return torch.zeros_like(charges)

        return torch.stack(
            [
                interaction.get_atom_energy(charges, cache[interaction.label])
                for interaction in self.components
            ]
        ).sum(dim=0)

    def get_energy_as_dict(
        self, charges: Tensor, cache: InteractionListCache
    ) -> dict[str, Tensor]:
        """
        Compute the atom-resolved energy of each interaction.

        Parameters
        ----------
        charges : Tensor
            Atom-resolved partial charges.
        cache : InteractionListCache
            Restart data for the interactions.

        Returns
        -------
        dict[str, Tensor]
            Atom-resolved energies by label of the interaction.
        """
        return {
            interaction.label: interaction.get_atom_energy(
                charges, cache[interaction.label]
            )
            for interaction in self.components
        }

    def get_potential(self, charges: Tensor, cache: InteractionListCache) -> Tensor:
        """
        Compute the potential for a list of interactions.

        Parameters
        ----------
        charges : Tensor
            Atom-resolved partial charges.
        cache : InteractionListCache
            Restart data for the interactions.

        Returns
        -------
        Tensor
            Atom-resolved potential.
        """
        pot = torch.zeros_like(charges)
        for interaction in self.components:
            pot = pot + interaction.get_atom_potential(
                charges, cache[interaction.label]
            )
        return pot

    @property
    def labels(self) -> list[str]:
        """Labels of all interactions."""
        return [i.label for i in self.components]

    def __len__(self) -> int:
        return len(self.components)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(self.labels)})"

    def __repr__(self) -> str:
        return str(self)
