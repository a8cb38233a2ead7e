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
Basis: Main Class
=================

Main basis set class for creating the contracted Gaussian type orbitals (CGTOs)
from the parametrization. Each shell is a Slater function expanded into
primitive Gaussians. Non-valence (polarization) shells are orthonormalized
against the valence shell of the same angular momentum on the same atom.
"""

from __future__ import annotations

import torch
from tad_mctc.data import pse

from xtbscf._src.param import Param, get_elem_param, get_elem_pqn, get_elem_valence
from xtbscf._src.typing import Tensor, TensorLike

from .indexhelper import IndexHelper
from .ortho import gaussian_integral, orthogonalize
from .slater import slater_to_gauss

__all__ = ["Basis"]


angular2label = {
    0: "s",
    1: "p",
    2: "d",
}


class Basis(TensorLike):
    """Atomic orbital basis set."""

    ngauss: Tensor
    """Number of Gaussians used in expansion from Slater orbital."""

    slater: Tensor
    """Exponent of Slater function."""

    pqn: Tensor
    """Principal quantum number of each shell"""

    valence: Tensor
    """Whether the shell is part of the valence shell."""

    __slots__ = ["numbers", "ihelp", "ngauss", "slater", "pqn", "valence"]

    def __init__(
        self,
        numbers: Tensor,
        par: Param,
        ihelp: IndexHelper,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device, dtype)
        self.numbers = numbers
        self.ihelp = ihelp

        self.ngauss = get_elem_param(
            numbers, par.element, "ngauss", device=self.device, dtype=torch.long
        )
        self.slater = get_elem_param(numbers, par.element, "slater", **self.dd)
        self.pqn = get_elem_pqn(numbers, par.element, device=self.device)
        self.valence = get_elem_valence(numbers, par.element, device=self.device)

    def create_cgtos(self) -> tuple[list[Tensor], list[Tensor]]:
        """
        Create contracted Gaussian type orbitals from parametrization.

        Returns
        -------
        tuple[list[Tensor], list[Tensor]]
            List of primitive Gaussian exponents and contraction coefficients
            for the orthonormalized basis functions for each shell.

        Raises
        ------
        ValueError
            The expansion of a shell is not available.
        """
        alphas: list[Tensor] = []
        coeffs: list[Tensor] = []

        angular = self.ihelp.angular.tolist()
        sh2at = self.ihelp.shells_to_atom.tolist()

        # valence shell of each (atom, angular momentum)
        valence_shell: dict[tuple[int, int], int] = {}

        for i, l in enumerate(angular):
            alpha, coeff = slater_to_gauss(
                int(self.ngauss[i]), int(self.pqn[i]), l, self.slater[i]
            )

            # renormalize the contracted function
            norm = gaussian_integral(alpha, alpha, coeff, coeff, l)
            coeff = coeff / torch.sqrt(norm)

            if bool(self.valence[i]):
                valence_shell[(sh2at[i], l)] = i
            else:
                j = valence_shell[(sh2at[i], l)]
                alpha, coeff = orthogonalize(
                    (alphas[j], alpha), (coeffs[j], coeff), l
                )

            alphas.append(alpha)
            coeffs.append(coeff)

        return alphas, coeffs

    def shell_labels(self) -> list[str]:
        """
        Labels of all shells, e.g., ``["C:2s", "C:2p", "H:1s"]``.

        Returns
        -------
        list[str]
            Shell labels in the order of the basis.
        """
        sh2at = self.ihelp.shells_to_atom.tolist()
        return [
            f"{pse.Z2S.get(int(self.numbers[at]), 'X')}:"
            f"{int(n)}{angular2label.get(l, '?')}"
            for at, n, l in zip(sh2at, self.pqn.tolist(), self.ihelp.angular.tolist())
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(nsh={self.ihelp.nsh}, nao={self.ihelp.nao})"

    def __repr__(self) -> str:  # pragma: no cover
        return str(self)
