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
Classicals: Base
================

Base class for classical contributions, i.e., energy terms that do not depend
on the density and are evaluated once per single point calculation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import Tensor

from ..base import Component, ComponentCache

__all__ = ["Classical", "ClassicalCache"]


class ClassicalCache(ComponentCache):
    """
    Cache for classical contributions.
    """

    __slots__: list[str] = []


class Classical(Component, ABC):
    """
    Base class for classical contributions.
    """

    @abstractmethod
    def get_cache(self, numbers: Tensor, ihelp: IndexHelper) -> ClassicalCache:
        """
        Store variables for energy calculation.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        ihelp : IndexHelper
            Helper class for indexing.

        Returns
        -------
        ClassicalCache
            Cache of the contribution.
        """

    @abstractmethod
    def get_energy(self, positions: Tensor, cache: ClassicalCache) -> Tensor:
        """
        Obtain the atom-resolved energy of the contribution.

        Parameters
        ----------
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        cache : ClassicalCache
            Cache of the contribution.

        Returns
        -------
        Tensor
            Atom-resolved energy.
        """
