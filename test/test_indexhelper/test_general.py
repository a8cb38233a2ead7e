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
Test the index helper.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.param import GFN1_XTB, GFN2_XTB

from ..conftest import DEVICE


def test_gfn2_water() -> None:
    numbers = torch.tensor([8, 1, 1], device=DEVICE)
    ihelp = IndexHelper.from_numbers(numbers, GFN2_XTB.load())

    assert ihelp.nat == 3
    assert ihelp.nsh == 4
    assert ihelp.nao == 6

    assert ihelp.angular.tolist() == [0, 1, 0, 0]
    assert ihelp.shells_per_atom.tolist() == [2, 1, 1]
    assert ihelp.shell_index.tolist() == [0, 2, 3]
    assert ihelp.shells_to_atom.tolist() == [0, 0, 1, 2]
    assert ihelp.orbitals_per_shell.tolist() == [1, 3, 1, 1]
    assert ihelp.orbital_index.tolist() == [0, 1, 4, 5]
    assert ihelp.orbitals_to_shell.tolist() == [0, 1, 1, 1, 2, 3]
    assert ihelp.orbitals_to_atom.tolist() == [0, 0, 0, 0, 1, 2]
    assert ihelp.orbitals_per_atom.tolist() == [4, 1, 1]


def test_gfn1_hydrogen() -> None:
    numbers = torch.tensor([1, 1], device=DEVICE)
    ihelp = IndexHelper.from_numbers(numbers, GFN1_XTB.load())

    assert ihelp.nsh == 4
    assert ihelp.nao == 4
    assert ihelp.shells_to_atom.tolist() == [0, 0, 1, 1]


def test_unknown_element() -> None:
    # elements without entry get a single s-shell
    numbers = torch.tensor([1, 99], device=DEVICE)
    ihelp = IndexHelper.from_numbers_angular(numbers, {1: [0]})

    assert ihelp.angular.tolist() == [0, 0]
    assert ihelp.nao == 2


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_spread_reduce(dtype: torch.dtype) -> None:
    numbers = torch.tensor([6, 1, 1, 1, 1], device=DEVICE)
    ihelp = IndexHelper.from_numbers(numbers, GFN2_XTB.load())

    x = torch.arange(1, 6, device=DEVICE, dtype=dtype)
    xorb = ihelp.spread_atom_to_orbital(x)
    assert xorb.tolist() == [1.0, 1.0, 1.0, 1.0, 2.0, 3.0, 4.0, 5.0]

    xsh = ihelp.spread_atom_to_shell(x)
    assert xsh.tolist() == [1.0, 1.0, 2.0, 3.0, 4.0, 5.0]

    # reduction of ones counts the orbitals of each atom
    ones = torch.ones(ihelp.nao, device=DEVICE, dtype=dtype)
    assert ihelp.reduce_orbital_to_atom(ones).tolist() == [4.0, 1.0, 1.0, 1.0, 1.0]
    assert ihelp.reduce_orbital_to_shell(ones).tolist() == [1.0, 3.0, 1, 1, 1, 1]

    # spreading and reducing of a matrix
    mat = torch.ones((ihelp.nao, ihelp.nao), device=DEVICE, dtype=dtype)
    red = ihelp.reduce_orbital_to_atom(mat, dim=(-2, -1))
    assert red.shape == (5, 5)
    assert pytest.approx(red.sum().item()) == mat.sum().item()
    assert red[0, 0].item() == 16.0

    atmat = torch.eye(5, device=DEVICE, dtype=dtype)
    spread = ihelp.spread_atom_to_orbital(atmat, dim=(-2, -1))
    assert spread.shape == (8, 8)
    assert spread[:4, :4].sum().item() == 16.0
