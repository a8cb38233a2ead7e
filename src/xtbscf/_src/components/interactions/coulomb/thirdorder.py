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
Coulomb: On-site third-order electrostatic energy (ES3)
=======================================================

This module implements the atom-resolved on-site third-order electrostatic
energy,

.. math::

    E_3 = \\frac{1}{3} \\sum_A \\Gamma_A q_A^3,

with the Hubbard derivatives :math:`\\Gamma_A` (``gam3``).
"""

from __future__ import annotations

import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.io import OutputHandler
from xtbscf._src.param import Param, get_elem_param
from xtbscf._src.typing import DD, Tensor, TensorLike, get_default_dtype
from xtbscf._src.typing.exceptions import ParameterWarning

from ..base import Interaction, InteractionCache

__all__ = ["ES3", "LABEL_ES3", "new_es3"]


LABEL_ES3 = "ES3"
"""Label for the :class:`.ES3` interaction, coinciding with the class name."""


class ES3Cache(InteractionCache, TensorLike):
    """
    Restart data for the :class:`.ES3` interaction.
    """

    hd: Tensor
    """Hubbard derivatives of all atoms."""

    __slots__ = ["hd"]

    def __init__(self, hd: Tensor) -> None:
        super().__init__(device=hd.device, dtype=hd.dtype)
        self.hd = hd


class ES3(Interaction):
    """
    On-site third-order electrostatic energy (:class:`.ES3`).
    """

    hubbard_derivs: Tensor
    """Hubbard derivatives of all atoms."""

    __slots__ = ["hubbard_derivs"]

    def __init__(
        self,
        hubbard_derivs: Tensor,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device, dtype)
        self.hubbard_derivs = hubbard_derivs.to(**self.dd)

    def get_cache(
        self, *, numbers: Tensor, positions: Tensor, ihelp: IndexHelper
    ) -> ES3Cache:
        """
        Create restart data for individual interactions.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        positions : Tensor
            Cartesian coordinates (unused, no positional dependence).
        ihelp : IndexHelper
            Index mapping for the basis set (unused).

        Returns
        -------
        ES3Cache
            Restart data for the interaction.
        """
        cachvars = (numbers.detach().clone(),)

        if self.cache_is_latest(cachvars) is True:
            if not isinstance(self.cache, ES3Cache):
                raise TypeError(
                    f"Cache in {self.label} is not of type '{self.label}."
                    "Cache'. This can only happen if you manually manipulate "
                    "the cache."
                )
            return self.cache

        self._cachevars = cachvars
        self.cache = ES3Cache(self.hubbard_derivs)
        return self.cache

    def get_atom_energy(self, charges: Tensor, cache: ES3Cache) -> Tensor:
        """
        Calculate the third-order electrostatic energy.

        Parameters
        ----------
        charges : Tensor
            Atomic charges of all atoms.
        cache : ES3Cache
            Restart data for the interaction.

        Returns
        -------
        Tensor
            Atomwise third-order Coulomb interaction energies.
        """
        return cache.hd * torch.pow(charges, 3.0) / 3.0

    def get_atom_potential(self, charges: Tensor, cache: ES3Cache) -> Tensor:
        """Calculate the third-order electrostatic potential.

        Parameters
        ----------
        charges : Tensor
            Atomic charges of all atoms.
        cache : ES3Cache
            Restart data for the interaction.

        Returns
        -------
        Tensor
            Atomwise third-order Coulomb interaction potential.
        """
        return cache.hd * torch.pow(charges, 2.0)


def new_es3(
    numbers: Tensor,
    par: Param,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> ES3 | None:
    """
    Create new instance of :class:`.ES3`.

    A shell-resolved third-order parametrization is evaluated atom-resolved,
    which is reported with a :class:`ParameterWarning`.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par : Param
        Representation of an extended tight-binding model.

    Returns
    -------
    ES3 | None
        Instance of the ES3 class or ``None`` if no ES3 is used.
    """
    if par.thirdorder is None:
        return None

    if par.thirdorder.shell is not False:
        OutputHandler.warn(
            "Shell-resolved third-order electrostatics are evaluated "
            "atom-resolved (no shell scaling).",
            ParameterWarning,
        )

    dd: DD = {
        "device": device,
        "dtype": dtype if dtype is not None else get_default_dtype(),
    }

    hubbard_derivs = get_elem_param(numbers, par.element, "gam3", **dd)
    return ES3(hubbard_derivs, **dd)
