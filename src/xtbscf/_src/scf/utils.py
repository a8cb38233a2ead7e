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
SCF: Utility
============

Utility functions for the SCF iterations.
"""

from __future__ import annotations

from tad_mctc.math import einsum

from xtbscf._src.typing import Tensor

__all__ = ["get_density"]


def get_density(coeffs: Tensor, occ: Tensor, emo: Tensor | None = None) -> Tensor:
    """
    Calculate the density matrix from the coefficients and the occupation.

    Parameters
    ----------
    coeffs : Tensor
        MO coefficients (columns are orbitals).
    occ : Tensor
        Total occupation numbers, i.e., summed over spin channels.
    emo : Tensor | None, optional
        Orbital energies for energy weighted density matrix. Defaults to ``None``.

    Returns
    -------
    Tensor
        (Energy-weighted) Density matrix.
    """
    o = occ if emo is None else occ * emo

    # equivalent: coeffs * o.unsqueeze(-2) @ coeffs.mT
    return einsum("...ik,...k,...jk->...ij", coeffs, o, coeffs)
