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
Test the initial guess for the atomic charges.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf._src.constants import labels
from xtbscf._src.scf.guess import get_guess, get_sad_guess
from xtbscf._src.typing import DD

from ..conftest import DEVICE
from ..utils import samples


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
@pytest.mark.parametrize("name", ["H2", "H2O", "CH4"])
@pytest.mark.parametrize("chrg", [0.0, 1.0, -1.0])
def test_sad(dtype: torch.dtype, name: str, chrg: float) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}

    sample = samples[name]
    numbers = sample["numbers"].to(DEVICE)
    positions = sample["positions"].to(**dd)
    charge = torch.tensor(chrg, **dd)

    q = get_guess(numbers, positions, charge, "sad")
    assert q.shape == numbers.shape
    assert q.dtype == dtype

    # total charge spread evenly
    ref = torch.full(numbers.shape, chrg / len(numbers), **dd)
    assert pytest.approx(ref.cpu(), abs=1e-6) == q.cpu()
    assert pytest.approx(q.cpu(), abs=1e-6) == get_sad_guess(positions, charge).cpu()


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
@pytest.mark.parametrize("name", ["H2", "H2O", "CH4"])
@pytest.mark.parametrize("chrg", [0.0, 1.0])
def test_eeq(dtype: torch.dtype, name: str, chrg: float) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}

    sample = samples[name]
    numbers = sample["numbers"].to(DEVICE)
    positions = sample["positions"].to(**dd)
    charge = torch.tensor(chrg, **dd)

    q = get_guess(numbers, positions, charge, labels.GUESS_EEQ)
    assert q.shape == numbers.shape
    assert pytest.approx(chrg, abs=1e-4) == q.sum().item()


def test_eeq_polarity() -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}

    sample = samples["H2O"]
    numbers = sample["numbers"].to(DEVICE)
    positions = sample["positions"].to(**dd)

    q = get_guess(numbers, positions, torch.tensor(0.0, **dd), "eeq")

    # oxygen is negative, both hydrogens are equivalent
    assert q[0] < 0.0
    assert pytest.approx(q[1].item()) == q[2].item()


def test_fail() -> None:
    numbers = torch.tensor([1, 1])
    positions = torch.zeros((2, 3))
    charge = torch.tensor(0.0)

    with pytest.raises(ValueError):
        get_guess(numbers, positions, charge, "fail")

    with pytest.raises(ValueError):
        get_guess(numbers, positions, charge, -1)
