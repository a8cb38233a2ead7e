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
xTB Hamiltonians: GFN1-xTB
==========================

The GFN1-xTB Hamiltonian. Polarization functions (e.g. the second s-function
of hydrogen) are scaled with ``kpol`` instead of the shell-pair parameters.
The same Hamiltonian is used for IPEA1-xTB.
"""

from __future__ import annotations

from functools import partial

import torch
from tad_mctc.ncoord import cn_d3, exp_count

from xtbscf._src.basis import IndexHelper
from xtbscf._src.param import Param
from xtbscf._src.typing import Tensor

from .base import BaseHamiltonian

__all__ = ["GFN1Hamiltonian"]


class GFN1Hamiltonian(BaseHamiltonian):
    """Hamiltonian from GFN1-xTB parametrization."""

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
        self.cn = partial(cn_d3, counting_function=exp_count)

    def _get_hscale(self) -> Tensor:
        """
        Obtain the off-site scaling factor for the Hamiltonian.

        Returns
        -------
        Tensor
            Off-site scaling factor for the Hamiltonian.
        """
        shell = self.par.hamiltonian.xtb.shell
        kpol = self.par.hamiltonian.xtb.kpol

        labels = self._angular_labels()
        valence = self.valence.tolist()

        # precompute kii values outside loop with slightly faster listcomp
        kii_values = [
            shell.get(f"{ang}{ang}", 1.0) if valence[i] else kpol
            for i, ang in enumerate(labels)
        ]

        ksh = torch.ones((len(labels), len(labels)), **self.dd)
        for i, ang_i in enumerate(labels):
            kii = kii_values[i]

            # Iterate only over upper triangle and diagonal
            for j in range(i + 1):
                ang_j = labels[j]
                kjj = kii_values[j]

                # only if both belong to the valence shell,
                # we will read from the parametrization
                if valence[i] and valence[j]:
                    ksh_value = shell.get(
                        f"{ang_i}{ang_j}",
                        shell.get(f"{ang_j}{ang_i}", (kii + kjj) / 2.0),
                    )
                else:
                    ksh_value = (kii + kjj) / 2.0

                ksh[i, j] = ksh[j, i] = ksh_value

        return ksh
