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
Dispersion: D4
==============

DFT-D4 dispersion model. The atomic partial charges entering the reference
polarizabilities are EEQ charges, i.e., the dispersion energy does not
depend on the SCF density.
"""

from __future__ import annotations

import tad_dftd4 as d4
import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import Tensor

from ..base import ClassicalCache
from .base import Dispersion

__all__ = ["DispersionD4", "DispersionD4Cache"]


class DispersionD4Cache(ClassicalCache):
    """
    Cache for the dispersion settings.

    Note
    ----
    The dispersion parameters (a1, a2, ...) are given in the dispersion
    class constructor.
    """

    model: d4.model.D4Model
    """Reference polarizabilities of the atoms of the structure."""

    __slots__ = ["model"]

    def __init__(
        self,
        model: d4.model.D4Model,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device=device, dtype=dtype)
        self.model = model


class DispersionD4(Dispersion):
    """
    Representation of the DFT-D4 dispersion correction (:class:`.DispersionD4`).
    """

    def get_cache(
        self, numbers: Tensor, ihelp: IndexHelper | None = None
    ) -> DispersionD4Cache:
        """
        Obtain cache for storage of settings.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        ihelp : IndexHelper, optional
            Not used.

        Returns
        -------
        DispersionD4Cache
            Cache for the D4 dispersion.
        """
        cachvars = (numbers.detach().clone(),)

        if self.cache_is_latest(cachvars) is True:
            if not isinstance(self.cache, DispersionD4Cache):
                raise TypeError(
                    f"Cache in {self.label} is not of type '{self.label}."
                    "Cache'. This can only happen if you manually manipulate "
                    "the cache."
                )
            return self.cache

        self._cachevars = cachvars

        model = d4.model.D4Model(numbers, **self.dd)

        self.cache = DispersionD4Cache(model, **self.dd)
        return self.cache

    def get_energy(self, positions: Tensor, cache: DispersionD4Cache) -> Tensor:
        """
        Get D4 dispersion energy.

        Parameters
        ----------
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        cache : DispersionD4Cache
            Dispersion cache containing settings.

        Returns
        -------
        Tensor
            Atom-resolved D4 dispersion energy.
        """
        charge = (
            torch.tensor(0.0, **self.dd) if self.charge is None else self.charge
        )
        return d4.dftd4(
            self.numbers, positions, charge, self.param, model=cache.model
        )
