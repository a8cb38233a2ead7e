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
Parametrization: Element
========================

Element parametrization record containing the adjustable parameters for each
species. Fields of the record format that are not used by the calculator
(e.g. multipole kernels) are ignored when reading a parameter file.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, model_validator

__all__ = ["Element"]


class Element(BaseModel):
    """
    Representation of the parameters for a species.
    """

    model_config = ConfigDict(frozen=True)

    shells: List[str]
    """Included shells with principal quantum number and angular momentum."""

    levels: List[float]
    """Atomic level energies for each shell (in eV)."""

    slater: List[float]
    """Slater exponents of the STO-NG functions for each shell."""

    ngauss: List[int]
    """
    Number of primitive Gaussian functions used in the STO-NG expansion for
    each shell.
    """

    ############################################################################

    refocc: List[float]
    """Reference occupation for each shell."""

    shpoly: List[float]
    """Polynomial enhancement for Hamiltonian elements."""

    kcn: List[float]
    """CN dependent shift of the self energy for each shell (in eV)."""

    ############################################################################

    gam: float
    """Chemical hardness / Hubbard parameter."""

    gam3: float = 0.0
    """Atomic Hubbard derivative."""

    ############################################################################

    zeff: float
    """Effective nuclear charge used in repulsion."""

    arep: float
    """Repulsion exponent."""

    ############################################################################

    en: float
    """Electronegativity."""

    @model_validator(mode="after")
    def check_shell_records(self) -> Element:
        """
        All shell-resolved records must have one entry per shell.
        """
        nsh = len(self.shells)
        for key in ("levels", "slater", "ngauss", "refocc", "shpoly", "kcn"):
            if len(getattr(self, key)) != nsh:
                raise ValueError(
                    f"Record '{key}' has {len(getattr(self, key))} entries, "
                    f"but {nsh} shells are defined."
                )
        return self
