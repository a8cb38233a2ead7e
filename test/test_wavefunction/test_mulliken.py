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
Test the Mulliken population analysis.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.typing import DD
from xtbscf._src.wavefunction import (
    get_atomic_populations,
    get_mulliken_atomic_charges,
    get_orbital_populations,
    get_shell_populations,
)

from ..conftest import DEVICE


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_orthogonal(dtype: torch.dtype) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}

    # atom 0 with s and p shell, atom 1 with a single s-shell
    ihelp = IndexHelper.from_numbers_angular(
        torch.tensor([6, 1], device=DEVICE), {6: [0, 1], 1: [0]}
    )
    overlap = torch.eye(5, **dd)
    density = torch.diag(torch.tensor([2.0, 1.0, 0.5, 0.5, 1.0], **dd))

    pop = get_orbital_populations(overlap, density)
    assert pytest.approx(density.diagonal().cpu()) == pop.cpu()

    shpop = get_shell_populations(overlap, density, ihelp)
    assert pytest.approx([2.0, 2.0, 1.0]) == shpop.tolist()

    atpop = get_atomic_populations(overlap, density, ihelp)
    assert pytest.approx([4.0, 1.0]) == atpop.tolist()

    n0 = torch.tensor([4.0, 1.0], **dd)
    charges = get_mulliken_atomic_charges(overlap, density, ihelp, n0)
    assert pytest.approx([0.0, 0.0]) == charges.tolist()


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_dimer(dtype: torch.dtype) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}

    ihelp = IndexHelper.from_numbers_angular(
        torch.tensor([1, 1], device=DEVICE), {1: [0]}
    )
    s12 = 0.6
    overlap = torch.tensor([[1.0, s12], [s12, 1.0]], **dd)

    # doubly occupied bonding orbital, normalized with respect to S
    c = torch.tensor([1.0, 1.0], **dd) / torch.sqrt(torch.tensor(2.0 + 2.0 * s12))
    density = 2.0 * torch.outer(c, c)

    # total population is conserved: tr(PS) = nel
    pop = get_atomic_populations(overlap, density, ihelp)
    assert pytest.approx(2.0, abs=1e-6) == pop.sum().item()

    # symmetric molecule has no partial charges
    n0 = torch.tensor([1.0, 1.0], **dd)
    charges = get_mulliken_atomic_charges(overlap, density, ihelp, n0)
    assert pytest.approx([0.0, 0.0], abs=1e-6) == charges.tolist()

    # polarized bond: positive charge on the electron-poor atom
    c = torch.tensor([1.0, 0.5], **dd)
    c = c / torch.sqrt(c @ overlap @ c)
    density = 2.0 * torch.outer(c, c)

    charges = get_mulliken_atomic_charges(overlap, density, ihelp, n0)
    assert charges[0] < 0.0 < charges[1]
    assert pytest.approx(0.0, abs=1e-6) == charges.sum().item()
