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
Integrals: Overlap
==================

Calculation of overlap integrals over contracted Cartesian Gaussians using the
McMurchie-Davidson algorithm.

- L. E. McMurchie, E. R. Davidson, One- and two-electron integrals over
  cartesian gaussian functions, *J. Comput. Phys.*, **1978**, *26*, 218-231.
  (`DOI <https://doi.org/10.1016/0021-9991(78)90092-X>`__)

The basis contains s-, p- and d-functions, so the E-coefficients are written
down explicitly up to the second order. The Cartesian integrals are
transformed to real spherical harmonics, which are ordered by the magnetic
quantum number, i.e., (y, z, x) for p and (xy, yz, z², xz, x²-y²) for d.
"""

from __future__ import annotations

from math import pi, sqrt

import torch

from xtbscf._src.typing import Tensor
from xtbscf._src.typing.exceptions import CGTOAzimuthalQuantumNumberError

from ..basis import Basis, IndexHelper

__all__ = ["overlap", "overlap_gto"]

sqrtpi3 = sqrt(pi) ** 3
s3 = sqrt(3.0)

MAX_AZIMUTHAL = 2
"""Maximum angular momentum of the explicit E-coefficients."""

NLM_CART = (
    ((0, 0, 0),),  # s
    ((0, 1, 0), (0, 0, 1), (1, 0, 0)),  # py, pz, px
    (
        (2, 0, 0),  # dxx
        (0, 2, 0),  # dyy
        (0, 0, 2),  # dzz
        (1, 1, 0),  # dxy
        (1, 0, 1),  # dxz
        (0, 1, 1),  # dyz
    ),
)
"""Cartesian exponents of the basis functions for each angular momentum."""

TRAFO_D = torch.tensor(
    [
        [0.0, 0.0, 0.0, s3, 0.0, 0.0],  # xy
        [0.0, 0.0, 0.0, 0.0, 0.0, s3],  # yz
        [-0.5, -0.5, 1.0, 0.0, 0.0, 0.0],  # z²
        [0.0, 0.0, 0.0, 0.0, s3, 0.0],  # xz
        [0.5 * s3, -0.5 * s3, 0.0, 0.0, 0.0, 0.0],  # x²-y²
    ],
    dtype=torch.double,
)
"""
Transformation of the six Cartesian d-functions to the five real spherical
harmonics. The Cartesian functions are normalized like ``dxx``, hence the
factor of √3 for the mixed components.
"""


def ecoeffs(xij: Tensor, rpi: Tensor, rpj: Tensor) -> list[list[Tensor]]:
    """
    E-coefficients (t = 0) for all combinations of s-, p- and d-functions.

    Parameters
    ----------
    xij : Tensor
        Prefactor. (`1/2p` with `p` from Gaussian product theorem)
    rpi : Tensor
        Distance between aufpunkt of Gaussian `i` and new Gaussian `p`.
    rpj : Tensor
        Distance between aufpunkt of Gaussian `j` and new Gaussian `p`.

    Returns
    -------
    list[list[Tensor]]
        E-coefficients indexed by the Cartesian exponents of `i` and `j`.
    """
    # e{i}{j}{t}
    e000 = torch.ones_like(rpi)
    e100 = rpi
    e010 = rpj
    e101 = xij * e000
    e011 = xij * e000

    e110 = rpj * e100 + e101
    e200 = rpi * e100 + e101
    e020 = rpj * e010 + e011

    e111 = xij * e100 + rpj * e101
    e112 = xij * e101

    e210 = rpi * e110 + e111
    e120 = rpj * e110 + e111
    e211 = xij * e110 + rpi * e111 + 2.0 * e112
    e220 = rpj * e210 + e211

    return [
        [e000, e010, e020],
        [e100, e110, e120],
        [e200, e210, e220],
    ]


def _to_spherical(s: Tensor, li: int, lj: int) -> Tensor:
    if li == 2:
        s = TRAFO_D.to(s) @ s
    if lj == 2:
        s = s @ TRAFO_D.to(s).mT
    return s


def overlap_gto(
    angular: tuple[int, int],
    alpha: tuple[Tensor, Tensor],
    coeff: tuple[Tensor, Tensor],
    vec: Tensor,
) -> Tensor:
    """
    Overlap block of a shell pair.

    Parameters
    ----------
    angular : (int, int)
        Angular momentum of the shell pair.
    alpha : (Tensor, Tensor)
        Primitive Gaussian exponents of the shell pair.
    coeff : (Tensor, Tensor)
        Contraction coefficients of the shell pair.
    vec : Tensor
        Displacement vector from the first to the second center
        (shape: ``(3,)``).

    Returns
    -------
    Tensor
        Overlap integrals of the shell pair (shape: ``(2li+1, 2lj+1)``).

    Raises
    ------
    CGTOAzimuthalQuantumNumberError
        Angular momentum larger than two.
    """
    li, lj = angular
    if li > MAX_AZIMUTHAL or lj > MAX_AZIMUTHAL:
        raise CGTOAzimuthalQuantumNumberError(MAX_AZIMUTHAL)

    ai, aj = alpha[0].unsqueeze(-1), alpha[1].unsqueeze(-2)
    ci, cj = coeff[0].unsqueeze(-1), coeff[1].unsqueeze(-2)
    oij = 1.0 / (ai + aj)
    xij = 0.5 * oij

    # K_AB * [Gaussian integral (√(pi/(a+b))) in 3D] * c_A * c_B
    r2 = torch.sum(vec * vec, dim=-1)
    sij = torch.exp(-ai * aj * oij * r2) * sqrtpi3 * torch.pow(oij, 1.5) * ci * cj

    # ss does not require E-coefficients (e000 = 1)
    if li == 0 and lj == 0:
        return sij.sum((-2, -1)).reshape(1, 1)

    # (3, ai, aj)
    rpi = +vec.reshape(3, 1, 1) * aj * oij
    rpj = -vec.reshape(3, 1, 1) * ai * oij
    e = ecoeffs(xij, rpi, rpj)

    cart_i, cart_j = NLM_CART[li], NLM_CART[lj]
    s3d = vec.new_zeros((len(cart_i), len(cart_j)))
    for mi, ni in enumerate(cart_i):
        for mj, nj in enumerate(cart_j):
            sx = e[ni[0]][nj[0]][0]
            sy = e[ni[1]][nj[1]][1]
            sz = e[ni[2]][nj[2]][2]
            s3d[mi, mj] = (sij * sx * sy * sz).sum((-2, -1))

    return _to_spherical(s3d, li, lj)


def overlap(positions: Tensor, bas: Basis, ihelp: IndexHelper) -> Tensor:
    """
    Calculate the full overlap matrix.

    On-site blocks are the identity, since all functions on one atom are
    normalized and mutually orthogonal. Only the upper triangle is computed
    and mirrored to the lower part.

    Parameters
    ----------
    positions : Tensor
        Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
    bas : Basis
        Basis set information.
    ihelp : IndexHelper
        Helper class for indexing.

    Returns
    -------
    Tensor
        Orbital-resolved overlap matrix of shape ``(nao, nao)``.
    """
    alphas, coeffs = bas.create_cgtos()

    angular = ihelp.angular.tolist()
    shells_per_atom = ihelp.shells_per_atom.tolist()
    shell_index = ihelp.shell_index.tolist()
    orbital_index = ihelp.orbital_index.tolist()

    s = torch.zeros(
        (ihelp.nao, ihelp.nao), device=positions.device, dtype=positions.dtype
    )

    for iat in range(ihelp.nat):
        for jat in range(iat + 1, ihelp.nat):
            vec = positions[jat, :] - positions[iat, :]

            for ish in range(shells_per_atom[iat]):
                ii = shell_index[iat] + ish
                io = orbital_index[ii]
                ni = 2 * angular[ii] + 1

                for jsh in range(shells_per_atom[jat]):
                    jj = shell_index[jat] + jsh
                    jo = orbital_index[jj]
                    nj = 2 * angular[jj] + 1

                    s[io : io + ni, jo : jo + nj] = overlap_gto(
                        (angular[ii], angular[jj]),
                        (alphas[ii], alphas[jj]),
                        (coeffs[ii], coeffs[jj]),
                        vec,
                    )

    s = s + s.mT
    s = s + torch.eye(ihelp.nao, device=s.device, dtype=s.dtype)
    return s
