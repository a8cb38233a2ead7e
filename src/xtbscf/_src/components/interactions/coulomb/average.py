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
Coulomb: Averaging
==================

Pairwise averages of the atomic hardnesses entering the Klopman-Ohno kernel
of the second-order electrostatics (:class:`~.secondorder.ES2`).

Each function maps the hardnesses of all atoms (shape: ``(nat,)``) onto a
symmetric matrix of pair averages (shape: ``(nat, nat)``), whose diagonal
recovers the hardness of the atom itself. The parametrization selects the
function by name (``[charge.effective] average``): GFN1-xTB and IPEA1-xTB use
the harmonic mean, GFN2-xTB the arithmetic mean.

Example
-------
>>> import torch
>>> from xtbscf._src.components.interactions.coulomb import averaging_function
>>> eta = torch.tensor([0.4, 0.6])
>>> averaging_function["arithmetic"](eta)
tensor([[0.4000, 0.5000],
        [0.5000, 0.6000]])
"""

from __future__ import annotations

from tad_mctc import storch

from xtbscf._src.typing import Callable, Tensor

AveragingFunction = Callable[[Tensor], Tensor]

__all__ = [
    "AveragingFunction",
    "averaging_function",
    "arithmetic_average",
    "geometric_average",
    "harmonic_average",
]


def harmonic_average(hubbard: Tensor) -> Tensor:
    """
    Harmonic mean of the hardnesses of all atom pairs, used by GFN1-xTB and
    IPEA1-xTB. Small hardnesses dominate the average.

    Parameters
    ----------
    hubbard : Tensor
        Atomic hardnesses (shape: ``(nat,)``).

    Returns
    -------
    Tensor
        Pair averages :math:`2/(1/\\eta_A + 1/\\eta_B)` (shape: ``(nat, nat)``).
    """
    hubbard1 = storch.reciprocal(hubbard)
    return 2.0 / (hubbard1.unsqueeze(-1) + hubbard1.unsqueeze(-2))


def arithmetic_average(hubbard: Tensor) -> Tensor:
    """
    Arithmetic mean of the hardnesses of all atom pairs (GFN2-xTB).

    Parameters
    ----------
    hubbard : Tensor
        Atomic hardnesses (shape: ``(nat,)``).

    Returns
    -------
    Tensor
        Pair averages (shape: ``(nat, nat)``).
    """
    return 0.5 * (hubbard.unsqueeze(-1) + hubbard.unsqueeze(-2))


def geometric_average(hubbard: Tensor) -> Tensor:
    """
    Geometric mean of the hardnesses of all atom pairs. None of the built-in
    parametrizations uses it, custom ones may select it.
    """
    return storch.sqrt(hubbard.unsqueeze(-1) * hubbard.unsqueeze(-2))


averaging_function: dict[str, AveragingFunction] = {
    "arithmetic": arithmetic_average,
    "geometric": geometric_average,
    "harmonic": harmonic_average,
}
"""Averaging functions by their name in the ``[charge.effective]`` section."""
