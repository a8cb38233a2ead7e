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
Basis: Slater Expansion
=======================

Expansion coefficients for Slater functions into primitive Gaussian functions
(STO-nG). The expansions are least-squares fits of ``ng`` normalized Gaussians
:math:`r^l e^{-\\alpha r^2}` to a normalized Slater function
:math:`r^{n-1} e^{-r}` with unit exponent, i.e., the overlap of both functions
is maximized. The fits are obtained once per ``(ng, n, l)`` and cached. For
other Slater exponents, the Gaussian exponents scale with the square of the
Slater exponent.

- R. F. Stewart, Small Gaussian Expansions of Slater-Type Orbitals,
  *J. Chem. Phys.*, **1970**, *52*, 431-438.
  (`DOI <https://doi.org/10.1063/1.1672702>`__)

Example
-------
>>> import torch
>>> from xtbscf._src.basis.slater import slater_to_gauss
>>> alpha, coeff = slater_to_gauss(3, 1, 0, torch.tensor(1.0), norm=False)
>>> print(alpha)  # doctest: +SKIP
tensor([2.2277, 0.4058, 0.1098])
"""

from __future__ import annotations

import math
from functools import lru_cache

import torch

from xtbscf._src.typing import Tensor
from xtbscf._src.typing.exceptions import (
    CGTOAzimuthalQuantumNumberError,
    CGTOPrimitivesError,
    CGTOPrincipalQuantumNumberError,
    CGTOQuantumNumberError,
    CGTOSlaterExponentsError,
)

__all__ = ["slater_to_gauss", "fit_slater"]


# Two over pi
top = 2.0 / math.pi

dfactorial = torch.tensor([1.0, 1.0, 3.0, 15.0, 105.0, 945.0, 10395.0, 135135.0])
"""
Double factorial up to 13!! for normalization of the Gaussian basis functions.

See `OEIS A001147 <https://oeis.org/A001147>`__.
"""

MAX_PRIMITIVES = 6
"""Maximum number of primitive Gaussians in an expansion."""

MAX_PRINCIPAL = 6
"""Maximum principal quantum number."""

MAX_AZIMUTHAL = 2
"""Maximum azimuthal quantum number (limited by the overlap integrals)."""

_GRID_POINTS = 4001
_GRID_RANGE = (-14.0, 6.0)


def _radial_grid() -> tuple[Tensor, Tensor]:
    """
    Logarithmic radial grid :math:`r = e^t` with trapezoidal weights for
    integrals :math:`\\int f(r) \\mathrm{d}r = \\int f(e^t) e^t \\mathrm{d}t`.
    The integrands vanish at both ends of the grid.
    """
    t = torch.linspace(*_GRID_RANGE, _GRID_POINTS, dtype=torch.double)
    h = (_GRID_RANGE[1] - _GRID_RANGE[0]) / (_GRID_POINTS - 1)
    r = torch.exp(t)
    return r, h * r


def _slater_overlap(
    lna: Tensor, n: int, l: int, grid: tuple[Tensor, Tensor]
) -> Tensor:
    # <STO(n, zeta=1)|GTO(l, alpha)> for normalized radial functions
    r, w = grid
    lnsto = 0.5 * ((2 * n + 1) * math.log(2.0) - math.lgamma(2 * n + 1))
    lngto = 0.5 * (
        math.log(2.0) + (l + 1.5) * (math.log(2.0) + lna) - math.lgamma(l + 1.5)
    )
    expo = (n + l + 1) * torch.log(r) - r - torch.exp(lna).unsqueeze(-1) * r * r
    return torch.exp(lnsto + lngto.unsqueeze(-1) + expo) @ w


def _gaussian_overlap(lna: Tensor, l: int) -> Tensor:
    # <GTO(l, alpha_i)|GTO(l, alpha_j)> = (2 sqrt(ai aj) / (ai + aj))^(l + 3/2)
    ai = lna.unsqueeze(-1)
    aj = lna.unsqueeze(-2)
    lnratio = math.log(2.0) + 0.5 * (ai + aj) - torch.logaddexp(ai, aj)
    return torch.exp((l + 1.5) * lnratio)


def _fit_quality(
    lna: Tensor, n: int, l: int, grid: tuple[Tensor, Tensor]
) -> tuple[Tensor, Tensor]:
    b = _slater_overlap(lna, n, l, grid)
    g = _gaussian_overlap(lna, l)
    x = torch.linalg.solve(g, b)
    return b @ x, x


def _minimize(params: Tensor, loss_fn) -> Tensor:
    params = params.detach().clone().requires_grad_(True)
    optimizer = torch.optim.LBFGS(
        [params],
        lr=1.0,
        max_iter=1000,
        tolerance_grad=1e-14,
        tolerance_change=1e-18,
        history_size=50,
        line_search_fn="strong_wolfe",
    )

    def closure() -> Tensor:
        optimizer.zero_grad()
        loss = loss_fn(params)
        loss.backward()
        return loss

    optimizer.step(closure)
    return params.detach()


@lru_cache(maxsize=None)
def fit_slater(
    ng: int, n: int, l: int
) -> tuple[tuple[float, ...], tuple[float, ...], float]:
    """
    Least-squares expansion of a Slater function with unit exponent in
    normalized primitive Gaussians.

    The exponents are first optimized as an even-tempered sequence
    :math:`\\alpha_k = \\alpha_0 \\beta^k` and then relaxed individually.
    Coefficients follow from the linear least-squares condition for the
    given exponents.

    Parameters
    ----------
    ng : int
        Number of Gaussian functions for the expansion.
    n : int
        Principal quantum number of shell.
    l : int
        Azimuthal quantum number of shell.

    Returns
    -------
    tuple[tuple[float, ...], tuple[float, ...], float]
        Exponents (descending), contraction coefficients of the normalized
        primitives and the overlap between Slater function and expansion.
    """
    grid = _radial_grid()

    # even-tempered start around the exponent matching <r^2> of the STO
    center = math.log((2 * l + 3) / ((2 * n + 2) * (2 * n + 1)))
    steps = torch.tensor(
        [0.5 * (ng - 1) - k for k in range(ng)], dtype=torch.double
    )

    def even_tempered(p: Tensor) -> Tensor:
        return p[0] + steps * torch.exp(p[1])

    with torch.enable_grad():
        p = _minimize(
            torch.tensor([center, math.log(math.log(3.0))], dtype=torch.double),
            lambda p: 1.0 - _fit_quality(even_tempered(p), n, l, grid)[0],
        )
        lna_start = even_tempered(p)

        lna = lna_start
        if ng > 1:
            lna = _minimize(
                lna_start, lambda x: 1.0 - _fit_quality(x, n, l, grid)[0]
            )

    with torch.no_grad():
        quality, coeff = _fit_quality(lna, n, l, grid)
        if ng > 1:
            quality0, coeff0 = _fit_quality(lna_start, n, l, grid)
            if not torch.isfinite(quality) or quality < quality0:
                lna, quality, coeff = lna_start, quality0, coeff0

    coeff = coeff / torch.sqrt(quality)
    order = torch.argsort(lna, descending=True)

    return (
        tuple(torch.exp(lna[order]).tolist()),
        tuple(coeff[order].tolist()),
        math.sqrt(quality.item()),
    )


def slater_to_gauss(
    ng: int,
    n: int,
    l: int,
    zeta: Tensor,
    norm: bool = True,
) -> tuple[Tensor, Tensor]:
    """
    Expand Slater function in primitive gaussian functions.

    Parameters
    ----------
    ng : int
        Number of Gaussian functions for the expansion.
    n : int
        Principal quantum number of shell.
    l : int
        Azimuthal quantum number of shell.
    zeta : Tensor
        Exponent of Slater function to expand.
    norm : bool, optional
        Include normalization in contraction coefficients.
        Defaults to ``True``.

    Returns
    -------
    (Tensor, Tensor):
        Exponents of primitive gaussian functions and contraction
        coefficients of primitive gaussians (can contain normalization).

    Raises
    ------
    ValueError
        Expansion not available for the requested shell.
    """
    if not 1 <= ng <= MAX_PRIMITIVES:
        raise CGTOPrimitivesError(MAX_PRIMITIVES)
    if zeta <= 0:
        raise CGTOSlaterExponentsError()
    if l > MAX_AZIMUTHAL:
        raise CGTOAzimuthalQuantumNumberError(MAX_AZIMUTHAL)
    if n > MAX_PRINCIPAL:
        raise CGTOPrincipalQuantumNumberError(MAX_PRINCIPAL)
    if n <= l:  # l ∊ [n-1, n-2, ..., 1, 0]
        raise CGTOQuantumNumberError()

    _alpha, _coeff, _ = fit_slater(ng, n, l)

    alpha = zeta.new_tensor(_alpha) * zeta.unsqueeze(-1) ** 2
    coeff = zeta.new_tensor(_coeff)

    # normalize the gaussian if requested
    # <φ|φ> = (2i-1)!!(2j-1)!!(2k-1)!!/(4α)^(i+j+k) · sqrt(π/2α)³
    # N² = (4α)^(i+j+k)/((2i-1)!!(2j-1)!!(2k-1)!!)  · sqrt(2α/π)³
    # N = (4α)^((i+j+k)/2) / sqrt((2i-1)!!(2j-1)!!(2k-1)!!) · (2α/π)^(3/4)
    if norm:
        coeff = coeff * (
            (top * alpha) ** 0.75
            * torch.sqrt(4 * alpha) ** l
            / torch.sqrt(dfactorial[l].to(alpha))
        )

    return alpha, coeff
