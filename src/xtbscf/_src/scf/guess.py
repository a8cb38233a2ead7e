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
SCF: Guess
==========

Models for the initial guess of the atomic charges.
"""

from __future__ import annotations

import torch

from xtbscf._src.constants import labels
from xtbscf._src.typing import Tensor

__all__ = ["get_guess", "get_eeq_guess", "get_sad_guess"]


def get_guess(
    numbers: Tensor,
    positions: Tensor,
    chrg: Tensor,
    name: int | str = labels.GUESS_SAD,
) -> Tensor:
    """
    Obtain initial guess for the atomic charges.
    Currently the following methods are supported:

    - superposition of atomic densities ("sad"), i.e., neutral reference
      atoms with the total charge spread evenly
    - electronegativity equilibration charge model ("eeq")

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    positions : Tensor
        Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
    chrg : Tensor
        Total charge of system.
    name : str | int, optional
        Name of guess method, by default SAD (:attr:`labels.GUESS_SAD`).

    Returns
    -------
    Tensor
        Atomic charges.

    Raises
    ------
    ValueError
        Name of guess method is unknown.
    RuntimeError
        Total charge is not conserved by the guess.
    """
    if isinstance(name, str):
        if name.casefold() in labels.GUESS_EEQ_STRS:
            name = labels.GUESS_EEQ
        elif name.casefold() in labels.GUESS_SAD_STRS:
            name = labels.GUESS_SAD
        else:
            raise ValueError(f"Unknown guess method '{name}'.")

    if name == labels.GUESS_EEQ:
        charges = get_eeq_guess(numbers, positions, chrg)
    elif name == labels.GUESS_SAD:
        charges = get_sad_guess(positions, chrg)
    else:
        raise ValueError(f"Unknown guess method '{name}'.")

    eps = torch.finfo(charges.dtype).eps
    if torch.abs(charges.sum(-1) - chrg) > eps**0.5:
        raise RuntimeError(
            f"Total charge changed in the initial guess ({float(chrg):.6f} -> "
            f"{float(charges.sum(-1)):.6f})."
        )

    return charges


def get_sad_guess(positions: Tensor, chrg: Tensor) -> Tensor:
    """
    Neutral reference atoms with the total charge spread evenly over all
    atoms.

    Parameters
    ----------
    positions : Tensor
        Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
    chrg : Tensor
        Total charge of system.

    Returns
    -------
    Tensor
        Atomic charges.
    """
    nat = positions.shape[-2]
    return torch.zeros_like(positions[..., -1]) + chrg / nat


def get_eeq_guess(
    numbers: Tensor, positions: Tensor, chrg: Tensor, cutoff: Tensor | None = None
) -> Tensor:
    """
    Calculate atomic EEQ charges.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    positions : Tensor
        Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
    chrg : Tensor
        Total charge of system.
    cutoff : Tensor, optional
        Cutoff radius for the EEQ model. Defaults to ``None``.

    Returns
    -------
    Tensor
        Atomic charges.
    """
    # pylint: disable=import-outside-toplevel
    from tad_multicharge import get_eeq_charges

    return get_eeq_charges(numbers, positions, chrg, cutoff=cutoff)
