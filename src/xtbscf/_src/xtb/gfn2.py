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
xTB Hamiltonians: GFN2-xTB
==========================

The GFN2-xTB Hamiltonian. The shell-pair scaling additionally depends on the
Slater exponents of both shells.
"""

from __future__ import annotations

from functools import partial

import torch
from tad_mctc import storch
from tad_mctc.ncoord import cn_d3, gfn2_count

from xtbscf._src.basis import IndexHelper
from xtbscf._src.param import Param, get_elem_param
from xtbscf._src.typing import Tensor

from .base import PAD, BaseHamiltonian

__all__ = ["GFN2Hamiltonian"]


class GFN2Hamiltonian(BaseHamiltonian):
    """
    The GFN2-xTB Hamiltonian.
    """

    def __init__(
        self,
        numbers: Tensor,
        par: Param,
        ihelp: IndexHelper,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        super().__init__(numbers, par, ihelp, device, dtype)

        # coordination number function
        self.cn = partial(cn_d3, counting_function=gfn2_count)

    def _get_hscale(self) -> Tensor:
        """
        Obtain the off-site scaling factor for the Hamiltonian.

        Returns
        -------
        Tensor
            Off-site scaling factor for the Hamiltonian.

        Raises
        ------
        KeyError
            Diagonal shell-pair parameter missing in the parametrization.
        """
        shell = self.par.hamiltonian.xtb.shell
        wexp = self.par.hamiltonian.xtb.wexp
        labels = self._angular_labels()

        # ----------------------
        # Eq.37: Y(z^A_l, z^B_m)
        # ----------------------
        z = get_elem_param(
            self.numbers, self.par.element, "slater", pad_val=PAD, **self.dd
        )
        zi = z.unsqueeze(-1)
        zj = z.unsqueeze(-2)
        zmat = storch.pow(2 * storch.divide(storch.sqrt(zi * zj), (zi + zj)), wexp)

        ksh = torch.ones((len(labels), len(labels)), **self.dd)
        for i, ang_i in enumerate(labels):
            for j, ang_j in enumerate(labels):
                key1 = f"{ang_i}{ang_j}"
                key2 = f"{ang_j}{ang_i}"

                # Mixed pairs (e.g. "sp") are the average of the diagonal
                # pairs if not given explicitly.
                if key1 in shell:
                    kij = shell[key1]
                elif key2 in shell:
                    kij = shell[key2]
                else:
                    for key in (f"{ang_i}{ang_i}", f"{ang_j}{ang_j}"):
                        if key not in shell:
                            raise KeyError(
                                f"GFN2 Core Hamiltonian: Missing '{key}' in shell."
                            )
                    kij = 0.5 * (shell[f"{ang_i}{ang_i}"] + shell[f"{ang_j}{ang_j}"])

                ksh[i, j] = kij * zmat[i, j]

        return ksh
