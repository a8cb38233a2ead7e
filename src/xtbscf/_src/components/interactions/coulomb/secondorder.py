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
Coulomb: Isotropic second-order electrostatic energy (ES2)
==========================================================

This module implements the atom-resolved second-order electrostatic energy
with a Klopman-Ohno kernel,

.. math::

    \\gamma_{AB} = \\left( R_{AB}^g + \\bar\\eta_{AB}^{-g} \\right)^{-1/g},

where :math:`\\bar\\eta_{AB}` is the average of the atomic hardnesses. On the
diagonal, :math:`\\gamma_{AA}` reduces to the hardness of the atom.

Example
-------

.. code-block:: python

    import torch
    from xtbscf._src.components.interactions.coulomb import secondorder as es2
    from xtbscf._src.basis import IndexHelper
    from xtbscf import GFN2_XTB

    numbers = torch.tensor([1, 1])
    positions = torch.tensor([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]])
    q = torch.tensor([0.1, -0.1])

    es = es2.new_es2(numbers, GFN2_XTB)
    ihelp = IndexHelper.from_numbers(numbers, GFN2_XTB)
    cache = es.get_cache(numbers=numbers, positions=positions, ihelp=ihelp)
    e = es.get_atom_energy(q, cache)
"""

from __future__ import annotations

import torch
from tad_mctc import storch
from tad_mctc.batch import real_pairs
from tad_mctc.math import einsum

from xtbscf._src.basis import IndexHelper
from xtbscf._src.constants import xtb
from xtbscf._src.param import Param, get_elem_param
from xtbscf._src.typing import DD, Tensor, TensorLike, get_default_dtype

from ..base import Interaction, InteractionCache
from .average import AveragingFunction, averaging_function, harmonic_average

__all__ = ["ES2", "LABEL_ES2", "coulomb_matrix_atom", "new_es2"]


LABEL_ES2 = "ES2"
"""Label for the 'ES2' interaction, coinciding with the class name."""


class ES2Cache(InteractionCache, TensorLike):
    """
    Cache for Coulomb matrix in ES2.
    """

    mat: Tensor
    """Coulomb matrix."""

    __slots__ = ["mat"]

    def __init__(self, mat: Tensor) -> None:
        super().__init__(device=mat.device, dtype=mat.dtype)
        self.mat = mat


class ES2(Interaction):
    """
    Isotropic second-order electrostatic energy (ES2).
    """

    hubbard: Tensor
    """Hubbard parameters of all atoms."""

    average: AveragingFunction
    """
    Function to use for averaging the Hubbard parameters (default:
    :func:`.harmonic_average`).
    """

    gexp: Tensor
    """Exponent of the second-order Coulomb interaction (default: 2.0)."""

    __slots__ = ["hubbard", "average", "gexp"]

    def __init__(
        self,
        hubbard: Tensor,
        average: AveragingFunction = harmonic_average,
        gexp: Tensor = torch.tensor(xtb.DEFAULT_ES2_GEXP),
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device, dtype)

        self.hubbard = hubbard.to(**self.dd)
        self.gexp = gexp.to(**self.dd)
        self.average = average

    def get_cache(
        self, *, numbers: Tensor, positions: Tensor, ihelp: IndexHelper
    ) -> ES2Cache:
        """
        Obtain the cache object containing the Coulomb matrix.

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
        ES2Cache
            Cache object for second order electrostatics.

        Note
        ----
        The cache of an interaction requires ``positions`` as they do not change
        during the self-consistent charge iterations.
        """
        cachvars = (numbers.detach().clone(), positions.detach().clone())

        if self.cache_is_latest(cachvars) is True:
            if not isinstance(self.cache, ES2Cache):
                raise TypeError(
                    f"Cache in {self.label} is not of type '{self.label}."
                    "Cache'. This can only happen if you manually manipulate "
                    "the cache."
                )
            return self.cache

        # if the cache is built, store the cachvar for validation
        self._cachevars = cachvars

        mask = real_pairs(numbers, mask_diagonal=True)
        self.cache = ES2Cache(
            coulomb_matrix_atom(mask, positions, self.hubbard, self.gexp, self.average)
        )
        return self.cache

    def get_atom_energy(self, charges: Tensor, cache: ES2Cache) -> Tensor:
        return 0.5 * charges * self.get_atom_potential(charges, cache)

    def get_atom_potential(self, charges: Tensor, cache: ES2Cache) -> Tensor:
        """
        Calculate atom-resolved potential.

        Parameters
        ----------
        charges : Tensor
            Atom-resolved partial charges.
        cache : ES2Cache
            Cache object for second order electrostatics.

        Returns
        -------
        Tensor
            Atom-resolved potential.
        """
        return einsum("...ik,...k->...i", cache.mat, charges)


def coulomb_matrix_atom(
    mask: Tensor,
    positions: Tensor,
    hubbard: Tensor,
    gexp: Tensor,
    average: AveragingFunction,
) -> Tensor:
    """
    Calculate the atom-resolved Coulomb matrix.

    Parameters
    ----------
    mask : Tensor
        Mask of real atom pairs without the diagonal (shape: ``(nat, nat)``).
    positions : Tensor
        Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
    hubbard : Tensor
        Hubbard parameters of all atoms.
    gexp: Tensor
        Exponent of the second-order Coulomb interaction (default: 2.0).
    average: AveragingFunction
        Function to use for averaging the Hubbard parameters.

    Returns
    -------
    Tensor
        Coulomb matrix.
    """
    dd: DD = {"device": positions.device, "dtype": positions.dtype}

    eps = torch.tensor(torch.finfo(positions.dtype).eps, **dd)
    zero = torch.tensor(0.0, **dd)

    dist = storch.cdist(positions, positions, p=2)

    # all distances to the power of "gexp" (R^2_AB from Eq.26)
    dist_gexp = torch.where(mask, torch.pow(dist + eps, gexp), zero)

    # re-include diagonal for hardness
    mask = mask + torch.diag_embed(torch.ones_like(hubbard).type(torch.bool))

    # Eq.30: averaging function for hardnesses (Hubbard parameter)
    avg = torch.where(mask, average(hubbard + eps), eps)

    # Eq.26: Coulomb matrix
    tmp = dist_gexp + torch.where(mask, torch.pow(avg, -gexp), eps)
    return torch.where(mask, 1.0 / torch.pow(tmp, 1.0 / gexp), zero)


def new_es2(
    numbers: Tensor,
    par: Param,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> ES2 | None:
    """
    Create new instance of :class:`.ES2`.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par : Param
        Representation of an extended tight-binding model.

    Returns
    -------
    ES2 | None
        Instance of the ES2 class or ``None`` if no ES2 is used.
    """
    if par.charge is None:
        return None

    dd: DD = {
        "device": device,
        "dtype": dtype if dtype is not None else get_default_dtype(),
    }

    hubbard = get_elem_param(numbers, par.element, "gam", **dd)
    average = averaging_function[par.charge.effective.average]
    gexp = torch.tensor(par.charge.effective.gexp, **dd)

    return ES2(hubbard, average, gexp, **dd)
