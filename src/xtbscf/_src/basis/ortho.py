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
Basis: Orthonormalization
=========================

Gram-Schmidt orthonormalization of a contracted Gaussian basis function
against another one of the same angular momentum on the same center.
"""

from __future__ import annotations

import math

import torch

from xtbscf._src.typing import Tensor

__all__ = ["orthogonalize", "gaussian_integral"]

_dfactorial = (1.0, 1.0, 3.0, 15.0, 105.0)


def gaussian_integral(
    ai: Tensor, aj: Tensor, ci: Tensor, cj: Tensor, l: int = 0
) -> Tensor:
    """
    One-center overlap of two contracted Gaussians of the same angular
    momentum with normalization contained in the coefficients. The Cartesian
    component along one axis (e.g. ``x^l``) is evaluated.

    Parameters
    ----------
    ai : Tensor
        Primitive exponents of CGTO i.
    aj : Tensor
        Primitive exponents of CGTO j.
    ci : Tensor
        Contraction coefficients of CGTO i.
    cj : Tensor
        Contraction coefficients of CGTO j.
    l : int, optional
        Angular momentum of both functions. Defaults to ``0``.

    Returns
    -------
    Tensor
        Overlap (summed over all primitive pairs).
    """
    oij = 1.0 / (ai.unsqueeze(-1) + aj.unsqueeze(-2))
    kab = torch.sqrt(math.pi * oij) ** 3 * (0.5 * oij) ** l * _dfactorial[l]
    return (kab * ci.unsqueeze(-1) * cj.unsqueeze(-2)).sum()


def orthogonalize(
    alpha: tuple[Tensor, Tensor], coeff: tuple[Tensor, Tensor], l: int = 0
) -> tuple[Tensor, Tensor]:
    """
    Orthonormalize the second basis function of a pair against the first.
    The result is a single contraction over the primitives of both functions.

    Parameters
    ----------
    alpha : (Tensor, Tensor)
        Primitive Gaussian exponents for the shell pair.
    coeff : (Tensor, Tensor)
        Contraction coefficients for the shell pair.
    l : int, optional
        Angular momentum of the shell pair. Defaults to ``0``.

    Returns
    -------
    (Tensor, Tensor)
        Primitive Gaussian exponents and contraction coefficients for the
        orthonormalized basis function.
    """
    alpha_i, alpha_j = alpha
    coeff_i, coeff_j = coeff

    overlap = gaussian_integral(alpha_i, alpha_j, coeff_i, coeff_j, l)

    # |j'> = |j> - <i|j> |i>
    alpha_new = torch.cat((alpha_j, alpha_i), dim=-1)
    coeff_new = torch.cat((coeff_j, -overlap * coeff_i), dim=-1)

    selfoverlap = gaussian_integral(alpha_new, alpha_new, coeff_new, coeff_new, l)
    return alpha_new, coeff_new / torch.sqrt(selfoverlap)
