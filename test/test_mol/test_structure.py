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
Test the molecular structure.
"""

from __future__ import annotations

import pytest
import torch
from tad_mctc.units.length import AA2AU

from xtbscf import Structure
from xtbscf._src.typing.exceptions import MalformedStructureError

from ..utils import coordfile


def test_init() -> None:
    mol = Structure([1, 1], [[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]], charge=1)

    assert mol.nat == 2
    assert mol.numbers.dtype == torch.long
    assert mol.positions.shape == (2, 3)
    assert mol.charge.item() == 1.0
    assert mol.charge.shape == torch.Size([])
    assert mol.uhf is None


def test_dtype_from_positions() -> None:
    positions = torch.zeros((1, 3), dtype=torch.float)
    mol = Structure(torch.tensor([2]), positions)

    assert mol.dtype == torch.float
    assert mol.charge.dtype == torch.float


def test_empty() -> None:
    mol = Structure(torch.tensor([], dtype=torch.long), torch.zeros((0, 3)))
    assert mol.nat == 0


def test_immutable() -> None:
    mol = Structure([1], [[0.0, 0.0, 0.0]], uhf=1)

    with pytest.raises(AttributeError):
        mol.uhf = 0  # type: ignore

    with pytest.raises(AttributeError):
        mol._positions = torch.ones((1, 3))  # type: ignore

    assert mol.uhf == 1


@pytest.mark.parametrize(
    "numbers, positions",
    [
        ([1, 1], [[0.0, 0.0, 0.0]]),
        ([1], [[0.0, 0.0]]),
        ([[1, 1]], [[0.0, 0.0, 0.0], [0.0, 0.0, 1.0]]),
        ([0], [[0.0, 0.0, 0.0]]),
        ([-1], [[0.0, 0.0, 0.0]]),
    ],
)
def test_fail_shape(numbers: list, positions: list) -> None:
    with pytest.raises(MalformedStructureError):
        Structure(numbers, positions)


@pytest.mark.parametrize("uhf", [-1, 1.5])
def test_fail_uhf(uhf) -> None:
    with pytest.raises(MalformedStructureError):
        Structure([1], [[0.0, 0.0, 0.0]], uhf=uhf)


def test_from_file() -> None:
    mol = Structure.from_file(coordfile, charge=0, uhf=0)

    assert mol.nat == 2
    assert mol.numbers.tolist() == [1, 1]
    assert mol.dtype == torch.double
    assert mol.uhf == 0

    # xyz files are given in Angstrom, structures are stored in Bohr
    distance = torch.linalg.norm(mol.positions[0] - mol.positions[1])
    assert distance.item() > 1.0
    assert pytest.approx(0.74 * AA2AU, abs=1e-6) == distance.item()


@pytest.mark.parametrize("value", [float("nan"), float("inf"), -float("inf")])
def test_fail_nonfinite_positions(value: float) -> None:
    with pytest.raises(MalformedStructureError):
        Structure([1, 1], [[0.0, 0.0, 0.0], [0.0, 0.0, value]])

    # still a ValueError for callers that do not know the library errors
    with pytest.raises(ValueError):
        Structure([1, 1], [[0.0, 0.0, 0.0], [0.0, 0.0, value]])


def test_fail_nonfinite_charge() -> None:
    with pytest.raises(MalformedStructureError):
        Structure([1], [[0.0, 0.0, 0.0]], charge=float("nan"))
