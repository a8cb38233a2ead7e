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
xTB Hamiltonians: Base
======================

Base class for the extended Hückel-type core Hamiltonian of the xTB methods.
The core Hamiltonian only depends on the geometry and is built once per
single point calculation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import torch
from tad_mctc import storch
from tad_mctc.batch import real_pairs
from tad_mctc.convert import symmetrize
from tad_mctc.data.radii import ATOMIC_RADII
from tad_mctc.exceptions import DtypeError
from tad_mctc.units import EV2AU

from xtbscf._src.basis import IndexHelper
from xtbscf._src.param import (
    Param,
    get_elem_param,
    get_elem_valence,
    get_pair_param,
)
from xtbscf._src.typing import CountingFunction, Tensor, TensorLike

__all__ = ["BaseHamiltonian"]

PAD = -1
"""Value used for padding of tensors."""

angular2label = {
    0: "s",
    1: "p",
    2: "d",
    3: "f",
    4: "g",
}


class BaseHamiltonian(ABC, TensorLike):
    """
    Base class for GFN Hamiltonians.

    All parameters are stored shell-resolved for the atoms of the structure.
    Subclasses only differ in the shell-pair scaling factors
    (:meth:`_get_hscale`) and the coordination number.
    """

    numbers: Tensor
    """Atomic numbers of the atoms in the system."""

    ihelp: IndexHelper
    """Helper class for indexing."""

    hscale: Tensor
    """Off-site scaling factor for the Hamiltonian."""
    kcn: Tensor
    """Coordination number dependent shift of the self energy."""
    kpair: Tensor
    """Element-pair-specific parameters for scaling the Hamiltonian."""
    refocc: Tensor
    """Reference occupation numbers."""
    selfenergy: Tensor
    """Self-energy of each shell."""
    shpoly: Tensor
    """Polynomial parameters for the distant dependent scaling."""
    valence: Tensor
    """Whether the shell belongs to the valence shell."""

    en: Tensor
    """Pauling electronegativity of each atom."""
    enscale: float
    """Electronegativity scaling factor."""
    rad: Tensor
    """Covalent radius of each atom."""

    cn: CountingFunction | None
    """Coordination number function."""

    __slots__ = [
        "numbers",
        "ihelp",
        "par",
        "label",
        "hscale",
        "kcn",
        "kpair",
        "refocc",
        "selfenergy",
        "shpoly",
        "valence",
        "en",
        "enscale",
        "rad",
        "cn",
        "_matrix",
    ]

    def __init__(
        self,
        numbers: Tensor,
        par: Param,
        ihelp: IndexHelper,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(device, dtype)

        if par.hamiltonian is None:
            raise RuntimeError("Parametrization does not specify Hamiltonian.")

        self.numbers = numbers
        self.ihelp = ihelp
        self.par = par

        self.label = self.__class__.__name__
        self._matrix = None
        self.cn = None

        # atom-resolved parameters
        self.rad = ATOMIC_RADII(**self.dd)[numbers]
        self.en = get_elem_param(numbers, par.element, "en", pad_val=PAD, **self.dd)
        self.enscale = par.hamiltonian.xtb.enscale

        # shell-resolved element parameters
        self.kcn = get_elem_param(numbers, par.element, "kcn", pad_val=PAD, **self.dd)
        self.selfenergy = get_elem_param(
            numbers, par.element, "levels", pad_val=PAD, **self.dd
        )
        self.shpoly = get_elem_param(
            numbers, par.element, "shpoly", pad_val=PAD, **self.dd
        )
        self.refocc = get_elem_param(
            numbers, par.element, "refocc", pad_val=PAD, **self.dd
        )
        self.valence = get_elem_valence(numbers, par.element, device=self.device)

        # shell-pair-resolved pair parameters
        self.hscale = self._get_hscale()
        self.kpair = get_pair_param(
            numbers.tolist(), par.hamiltonian.xtb.kpair, **self.dd
        )

        # unit conversion
        self.selfenergy = self.selfenergy * EV2AU
        self.kcn = self.kcn * EV2AU

        tensors = [
            ("hscale", self.hscale),
            ("kcn", self.kcn),
            ("kpair", self.kpair),
            ("refocc", self.refocc),
            ("selfenergy", self.selfenergy),
            ("shpoly", self.shpoly),
            ("en", self.en),
            ("rad", self.rad),
        ]
        for name, tensor in tensors:
            if tensor.dtype != self.dtype:
                raise DtypeError(
                    f"Tensor '{name}' has dtype '{tensor.dtype}'; "
                    f"expected '{self.dtype}'."
                )

    @abstractmethod
    def _get_hscale(self) -> Tensor:
        """
        Obtain the shell-pair scaling factors of the off-site blocks.

        Returns
        -------
        Tensor
            Scaling factors (shape: ``(nsh, nsh)``).
        """

    def _angular_labels(self) -> list[str]:
        return [angular2label[l] for l in self.ihelp.angular.tolist()]

    @property
    def matrix(self) -> Tensor | None:
        """Hamiltonian matrix."""
        return self._matrix

    @matrix.setter
    def matrix(self, mat: Tensor) -> None:
        self._matrix = mat

    def clear(self) -> None:
        """Clear the integral matrix."""
        self._matrix = None

    def get_occupation(self) -> Tensor:
        """
        Obtain the reference occupation numbers for each shell.

        Returns
        -------
        Tensor
            Shell-resolved reference occupation.
        """
        return self.refocc

    def build(self, positions: Tensor, overlap: Tensor) -> Tensor:
        """
        Build the xTB core Hamiltonian.

        Parameters
        ----------
        positions : Tensor
            Cartesian coordinates of all atoms (shape: ``(nat, 3)``).
        overlap : Tensor
            Overlap matrix (shape: ``(nao, nao)``).

        Returns
        -------
        Tensor
            Hamiltonian (always symmetric).
        """
        # masks
        mask_atom_diagonal = real_pairs(self.numbers, mask_diagonal=True)
        mask_shell_diagonal = self.ihelp.spread_atom_to_shell(
            mask_atom_diagonal, dim=(-2, -1)
        )

        zero = torch.tensor(0.0, **self.dd)

        # ----------------
        # Eq.29: H_(mu,mu)
        # ----------------
        if self.cn is None:
            cn = torch.zeros(self.numbers.shape, **self.dd)
        else:
            cn = self.cn(self.numbers, positions)

        selfenergy = self.selfenergy - self.kcn * self.ihelp.spread_atom_to_shell(cn)

        # ----------------------
        # Eq.24: PI(R_AB, l, l')
        # ----------------------
        distances = storch.cdist(positions, positions, p=2)
        rr = storch.divide(distances, self.rad.unsqueeze(-1) + self.rad.unsqueeze(-2))
        rr_shell = self.ihelp.spread_atom_to_shell(
            torch.where(mask_atom_diagonal, storch.sqrt(rr), zero),
            (-2, -1),
        )

        var_pi = (1.0 + self.shpoly.unsqueeze(-1) * rr_shell) * (
            1.0 + self.shpoly.unsqueeze(-2) * rr_shell
        )

        # --------------------
        # Eq.28: X(EN_A, EN_B)
        # --------------------
        en = self.ihelp.spread_atom_to_shell(self.en)
        var_x = torch.where(
            mask_shell_diagonal,
            1.0 + self.enscale * torch.pow(en.unsqueeze(-1) - en.unsqueeze(-2), 2.0),
            zero,
        )

        # --------------------
        # Eq.23: K_{AB}^{l,l'}
        # --------------------
        kpair = self.ihelp.spread_atom_to_shell(self.kpair, dim=(-2, -1))
        valence = self.valence.unsqueeze(-1) & self.valence.unsqueeze(-2)
        var_k = torch.where(valence, self.hscale * kpair * var_x, self.hscale)

        # ------------
        # Eq.23: H_EHT
        # ------------
        var_h = 0.5 * (selfenergy.unsqueeze(-1) + selfenergy.unsqueeze(-2))

        hcore = self.ihelp.spread_shell_to_orbital(
            torch.where(
                mask_shell_diagonal,
                var_pi * var_k * var_h,  # scale only off-diagonals
                var_h,
            ),
            dim=(-2, -1),
        )

        # force symmetry to avoid problems through numerical errors
        h0 = symmetrize(hcore * overlap)
        self.matrix = h0
        return h0

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.label}(nat={self.ihelp.nat}, nao={self.ihelp.nao})"

    def __repr__(self) -> str:  # pragma: no cover
        return str(self)
