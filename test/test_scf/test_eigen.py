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
Test the generalized eigenvalue solver and the overlap check.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf._src.scf.eigen import check_overlap, solve
from xtbscf._src.typing import DD
from xtbscf._src.typing.exceptions import SingularOverlapError

from ..conftest import DEVICE


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_solve(dtype: torch.dtype) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}
    tol = 1e-5 if dtype == torch.float else 1e-10

    h = torch.tensor(
        [
            [-0.50, -0.30, -0.05],
            [-0.30, -0.40, -0.10],
            [-0.05, -0.10, 0.20],
        ],
        **dd,
    )
    s = torch.tensor(
        [
            [1.00, 0.40, 0.05],
            [0.40, 1.00, 0.20],
            [0.05, 0.20, 1.00],
        ],
        **dd,
    )

    emo, coeffs = solve(h, s)

    # ascending order
    assert (emo[1:] >= emo[:-1]).all()

    # S-orthonormal
    eye = torch.eye(3, **dd)
    assert pytest.approx(eye.cpu(), abs=tol) == (coeffs.mT @ s @ coeffs).cpu()

    # H C = S C e
    assert pytest.approx((s @ coeffs * emo).cpu(), abs=tol) == (h @ coeffs).cpu()


def test_solve_orthogonal() -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}

    h = torch.diag(torch.tensor([0.3, -0.2, 0.1], **dd))
    emo, _ = solve(h, torch.eye(3, **dd))

    assert pytest.approx([-0.2, 0.1, 0.3]) == emo.tolist()


def test_check_overlap() -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}

    s = torch.tensor([[1.0, 0.5], [0.5, 1.0]], **dd)
    check_overlap(s)


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_check_overlap_singular(dtype: torch.dtype) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}

    # linearly dependent functions (atoms on top of each other)
    s = torch.ones((2, 2), **dd)
    with pytest.raises(SingularOverlapError):
        check_overlap(s)

    # not positive definite
    s = torch.tensor([[1.0, 1.5], [1.5, 1.0]], **dd)
    with pytest.raises(SingularOverlapError):
        check_overlap(s)


def test_check_overlap_ill_conditioned() -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}

    # positive definite, but smallest eigenvalue 1e-9 below threshold
    s = torch.tensor([[1.0, 1.0 - 1e-9], [1.0 - 1e-9, 1.0]], **dd)
    with pytest.raises(SingularOverlapError):
        check_overlap(s)

    # custom threshold
    check_overlap(s, thresh=1e-10)
