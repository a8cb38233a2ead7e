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
Dispersion: D3
==============

The DFT-D3(BJ) dispersion model.
"""

from __future__ import annotations

import tad_dftd3 as d3
import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import Tensor

from ..base import ClassicalCache
from .base import Dispersion

__all__ = ["DispersionD3", "DispersionD3Cache"]


class DispersionD3Cache(ClassicalCache):
    """
    Cache for the dispersion settings.

    Note
    ----
    The dispersion parameters (a1, a2, ...) are given in the constructor.
    """

    ref: d3.reference.Reference
    """Reference C6 coefficients and coordination numbers."""

    __slots__ = ["ref"]

    def __init__(
        self,
        ref: d3.reference.Reference,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device=device, dtype=dtype)
        self.ref = ref


class DispersionD3(Dispersion):
    """Representation of the DFT-D3(BJ) dispersion correction."""

    def get_cache(
        self, numbers: Tensor, ihelp: IndexHelper | None = None
    ) -> DispersionD3Cache:
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
        DispersionD3Cache
            Cache for the D3 dispersion.
        """
        cachvars = (numbers.detach().clone(),)

        if self.cache_is_latest(cachvars) is True:
            if not isinstance(self.cache, DispersionD3Cache):
                raise TypeError(
                    f"Cache in {self.label} is not of type '{self.label}."
                    "Cache'. This can only happen if you manually manipulate "
                    "the cache."
                )
            return self.cache

        self._cachevars = cachvars

        ref = d3.reference.Reference(**self.dd)

        self.cache = DispersionD3Cache(ref, **self.dd)
        return self.cache

    def get_energy(self, positions: Tensor, cache: DispersionD3Cache) -> Tensor:
        """
        Get D3 dispersion energy.

        Parameters
        ----------
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        cache : DispersionD3Cache
            Dispersion cache containing settings.

        Returns
        -------
        Tensor
            Atom-resolved D3 dispersion energy.
        """
        return d3.dftd3(self.numbers, positions, self.param, ref=cache.ref)
