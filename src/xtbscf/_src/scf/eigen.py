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
SCF: Eigensolver
================

Solution of the generalized eigenvalue problem :math:`HC = SC\\varepsilon`.
The overlap matrix is checked for positive definiteness before the solve. An
ill-conditioned basis is reported and never regularized.
"""

from __future__ import annotations

import logging

import torch
from tad_mctc import storch

from xtbscf._src.constants import defaults
from xtbscf._src.typing import Tensor
from xtbscf._src.typing.exceptions import SingularOverlapError

__all__ = ["check_overlap", "solve"]


logger = logging.getLogger(__name__)


def check_overlap(overlap: Tensor, thresh: float | None = None) -> None:
    """
    Check that the overlap matrix is positive definite.

    Parameters
    ----------
    overlap : Tensor
        Overlap matrix.
    thresh : float | None, optional
        Smallest accepted eigenvalue. Defaults to the dtype-dependent value
        of :data:`defaults.OVERLAP_THRESH`.

    Raises
    ------
    SingularOverlapError
        Cholesky factorization fails or the smallest eigenvalue is below the
        threshold.
    """
    if thresh is None:
        thresh = defaults.OVERLAP_THRESH.get(overlap.dtype, 1e-8)

    _, info = torch.linalg.cholesky_ex(overlap)
    if (info > 0).any():
        raise SingularOverlapError(
            "Overlap matrix is not positive definite (Cholesky factorization "
            f"failed at leading minor {int(info.max())})."
        )

    smallest = torch.linalg.eigvalsh(overlap).min()
    logger.debug("Smallest overlap eigenvalue: %.3e", float(smallest))
    if smallest < thresh:
        raise SingularOverlapError(
            f"Overlap matrix is ill-conditioned (smallest eigenvalue "
            f"{float(smallest):.3e} below {thresh:.1e})."
        )


def solve(hamiltonian: Tensor, overlap: Tensor) -> tuple[Tensor, Tensor]:
    """
    Solve the generalized eigenvalue problem.

    Parameters
    ----------
    hamiltonian : Tensor
        Hamiltonian matrix.
    overlap : Tensor
        Overlap matrix (positive definite).

    Returns
    -------
    tuple[Tensor, Tensor]
        Orbital energies in ascending order and coefficients (columns),
        normalized such that :math:`C^T S C = 1`.
    """
    return storch.eighb(
        a=hamiltonian,
        b=overlap,
        is_posdef=True,
        factor=torch.finfo(hamiltonian.dtype).eps ** 0.5,
        broadening_method=None,
    )
