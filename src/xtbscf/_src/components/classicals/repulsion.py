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
Classicals: Repulsion
=====================

Classical pairwise repulsion energy of the GFN methods,

.. math::

    E_\\text{rep} = \\sum_{A<B} \\frac{Z^\\text{eff}_A Z^\\text{eff}_B}{R_{AB}}
    \\exp\\left(-\\sqrt{\\alpha_A \\alpha_B} R_{AB}^{k_f}\\right).

GFN2-xTB uses a separate distance exponent if both atoms are hydrogen or
helium.

Example
-------

.. code-block:: python

    import torch
    from xtbscf import GFN2_XTB
    from xtbscf._src.basis import IndexHelper
    from xtbscf._src.components.classicals import new_repulsion

    numbers = torch.tensor([8, 1, 1])
    positions = torch.tensor([
        [0.0, 0.0, 0.0],
        [0.0, 1.43, 1.11],
        [0.0, -1.43, 1.11],
    ])

    par = GFN2_XTB.load()
    rep = new_repulsion(numbers, par)
    ihelp = IndexHelper.from_numbers(numbers, par)
    cache = rep.get_cache(numbers, ihelp)
    e = rep.get_energy(positions, cache)
"""

from __future__ import annotations

import torch
from tad_mctc import storch
from tad_mctc.batch import real_pairs

from xtbscf._src.basis import IndexHelper
from xtbscf._src.constants import xtb
from xtbscf._src.param import Param, get_elem_param
from xtbscf._src.typing import DD, Tensor, TensorLike, get_default_dtype

from .base import Classical, ClassicalCache

__all__ = ["LABEL_REPULSION", "Repulsion", "new_repulsion", "repulsion_energy"]


LABEL_REPULSION = "Repulsion"
"""Label for the 'Repulsion' component, coinciding with the class name."""


class RepulsionCache(ClassicalCache, TensorLike):
    """
    Cache for the repulsion parameters of all atom pairs.
    """

    mask: Tensor
    """Mask of real atom pairs (without diagonal)."""

    arep: Tensor
    """Pairwise screening exponents."""

    zeff: Tensor
    """Products of the effective nuclear charges."""

    kexp: Tensor
    """Pairwise distance exponents."""

    __slots__ = ["mask", "arep", "zeff", "kexp"]

    def __init__(self, mask: Tensor, arep: Tensor, zeff: Tensor, kexp: Tensor):
        super().__init__(device=arep.device, dtype=arep.dtype)
        self.mask = mask
        self.arep = arep
        self.zeff = zeff
        self.kexp = kexp


class Repulsion(Classical):
    """
    Representation of the classical repulsion.
    """

    arep: Tensor
    """Atom-specific screening parameters."""

    zeff: Tensor
    """Effective nuclear charges."""

    kexp: Tensor
    """
    Scaling of the interatomic distance in the exponential damping function of
    the repulsion energy.
    """

    klight: Tensor | None
    """
    Scaling of the interatomic distance in the exponential damping function of
    the repulsion energy for light elements, i.e., H and He (only GFN2).
    """

    cutoff: float
    """Real space cutoff for repulsion interactions (default: 25.0)."""

    __slots__ = ["arep", "zeff", "kexp", "klight", "cutoff"]

    def __init__(
        self,
        arep: Tensor,
        zeff: Tensor,
        kexp: Tensor,
        klight: Tensor | None = None,
        cutoff: float = xtb.DEFAULT_REPULSION_CUTOFF,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device, dtype)

        self.arep = arep.to(**self.dd)
        self.zeff = zeff.to(**self.dd)
        self.kexp = kexp.to(**self.dd)
        self.klight = klight if klight is None else klight.to(**self.dd)
        self.cutoff = cutoff

    def get_cache(self, numbers: Tensor, ihelp: IndexHelper) -> RepulsionCache:
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
        RepulsionCache
            Cache for repulsion.

        Note
        ----
        The cache of a classical contribution does not require ``positions``.
        """
        cachvars = (numbers.detach().clone(),)

        if self.cache_is_latest(cachvars) is True:
            if not isinstance(self.cache, RepulsionCache):
                raise TypeError(
                    f"Cache in {self.label} is not of type '{self.label}."
                    "Cache'. This can only happen if you manually manipulate "
                    "the cache."
                )
            return self.cache

        self._cachevars = cachvars

        mask = real_pairs(numbers, mask_diagonal=True)

        eps = torch.finfo(self.arep.dtype).tiny
        a = torch.where(
            mask,
            torch.sqrt(self.arep.unsqueeze(-1) * self.arep.unsqueeze(-2) + eps),
            torch.tensor(0.0, **self.dd),
        )
        z = self.zeff.unsqueeze(-1) * self.zeff.unsqueeze(-2) * mask
        k = torch.where(mask, self.kexp, torch.tensor(0.0, **self.dd))

        # GFN2 uses a different value for H and He
        if self.klight is not None:
            kmask = ~real_pairs(numbers <= 2)
            k = torch.where(kmask, k, self.klight) * mask

        self.cache = RepulsionCache(mask, a, z, k)
        return self.cache

    def get_energy(self, positions: Tensor, cache: RepulsionCache) -> Tensor:
        """
        Get repulsion energy.

        Parameters
        ----------
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        cache : RepulsionCache
            Cache for repulsion.

        Returns
        -------
        Tensor
            Atom-resolved repulsion energy.
        """
        e = repulsion_energy(
            positions, cache.mask, cache.arep, cache.kexp, cache.zeff, self.cutoff
        )
        return 0.5 * torch.sum(e, dim=-1)


def repulsion_energy(
    positions: Tensor,
    mask: Tensor,
    arep: Tensor,
    kexp: Tensor,
    zeff: Tensor,
    cutoff: float = xtb.DEFAULT_REPULSION_CUTOFF,
) -> Tensor:
    """
    Clasical repulsion energy of all atom pairs.

    Parameters
    ----------
    positions : Tensor
        Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
    mask : Tensor
        Mask of real atom pairs.
    arep : Tensor
        Pairwise screening parameters.
    kexp : Tensor
        Pairwise scaling of the interatomic distance in the exponential
        damping function of the repulsion energy.
    zeff : Tensor
        Products of effective nuclear charges.
    cutoff : float, optional
        Real-space cutoff. Defaults to `xtb.DEFAULT_REPULSION_CUTOFF`.

    Returns
    -------
    Tensor
        Pair-resolved repulsion energy (shape: ``(nat, nat)``).
    """
    dd: DD = {"device": positions.device, "dtype": positions.dtype}

    eps = torch.tensor(torch.finfo(positions.dtype).eps, **dd)
    zero = torch.tensor(0.0, **dd)

    distances = torch.where(mask, storch.cdist(positions, positions, p=2), eps)

    # Eq.13: R_AB ** k_f
    r1k = torch.pow(distances, kexp)

    # Eq.13: exp(- (alpha_A * alpha_B)**0.5 * R_AB ** k_f )
    exp_term = torch.exp(-arep * r1k)

    # Eq.13: repulsion energy
    return torch.where(
        mask * (distances <= cutoff),
        storch.divide(zeff * exp_term, distances),
        zero,
    )


def new_repulsion(
    numbers: Tensor,
    par: Param,
    cutoff: float = xtb.DEFAULT_REPULSION_CUTOFF,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> Repulsion | None:
    """
    Create new instance of :class:`.Repulsion`.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par : Param
        Representation of an extended tight-binding model.
    cutoff : float, optional
        Real space cutoff for repulsion interactions.

    Returns
    -------
    Repulsion | None
        Instance of the Repulsion class or ``None`` if no repulsion is used.
    """
    if par.repulsion is None:
        return None

    dd: DD = {
        "device": device,
        "dtype": dtype if dtype is not None else get_default_dtype(),
    }

    arep = get_elem_param(numbers, par.element, "arep", **dd)
    zeff = get_elem_param(numbers, par.element, "zeff", **dd)
    kexp = torch.tensor(par.repulsion.effective.kexp, **dd)
    klight = (
        torch.tensor(par.repulsion.effective.klight, **dd)
        if par.repulsion.effective.klight is not None
        else None
    )

    return Repulsion(arep, zeff, kexp, klight, cutoff, **dd)
