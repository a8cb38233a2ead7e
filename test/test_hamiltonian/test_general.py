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
Test the core Hamiltonian of GFN1-xTB and GFN2-xTB.
"""

from __future__ import annotations

import pytest
import torch
from tad_mctc.units import EV2AU

from xtbscf._src.basis import Basis, IndexHelper
from xtbscf._src.integral import overlap
from xtbscf._src.param import GFN1_XTB, GFN2_XTB, IPEA1_XTB, Param
from xtbscf._src.typing import DD, Tensor
from xtbscf._src.xtb import GFN1Hamiltonian, GFN2Hamiltonian, new_hamiltonian

from ..conftest import DEVICE
from ..utils import samples


def get_hcore(par: Param, numbers: Tensor, positions: Tensor, dd: DD) -> Tensor:
    ihelp = IndexHelper.from_numbers(numbers, par)
    bas = Basis(numbers, par, ihelp, **dd)
    s = overlap(positions, bas, ihelp)
    return new_hamiltonian(numbers, par, ihelp, **dd).build(positions, s)


def test_factory() -> None:
    numbers = torch.tensor([1, 1], device=DEVICE)

    for par, cls in (
        (GFN1_XTB, GFN1Hamiltonian),
        (IPEA1_XTB, GFN1Hamiltonian),
        (GFN2_XTB, GFN2Hamiltonian),
    ):
        p = par.load()
        ihelp = IndexHelper.from_numbers(numbers, p)
        assert isinstance(new_hamiltonian(numbers, p, ihelp), cls)


def test_no_hamiltonian() -> None:
    par = Param(element=GFN2_XTB.load().element)
    numbers = torch.tensor([1, 1], device=DEVICE)
    ihelp = IndexHelper.from_numbers(numbers, par)

    with pytest.raises(RuntimeError):
        new_hamiltonian(numbers, par, ihelp)


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
@pytest.mark.parametrize("name", ["H2", "LiH", "H2O", "CH4"])
@pytest.mark.parametrize("par", [GFN1_XTB, GFN2_XTB, IPEA1_XTB])
def test_symmetric(dtype: torch.dtype, name: str, par: Param) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}
    tol = 1e-6 if dtype == torch.float else 1e-12

    sample = samples[name]
    numbers = sample["numbers"].to(DEVICE)
    positions = sample["positions"].to(**dd)

    h = get_hcore(par.load(), numbers, positions, dd)
    assert h.dtype == dtype
    assert pytest.approx(h.cpu(), abs=tol) == h.mT.cpu()


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_atom(dtype: torch.dtype) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}
    par = GFN2_XTB.load()

    numbers = torch.tensor([6], device=DEVICE)
    positions = torch.zeros((1, 3), **dd)

    # isolated atom: diagonal of atomic levels, no coupling
    h = get_hcore(par, numbers, positions, dd)
    levels = torch.tensor(par.element["C"].levels, **dd) * EV2AU
    ref = torch.diag(torch.stack([levels[0], levels[1], levels[1], levels[1]]))

    assert pytest.approx(ref.cpu(), abs=1e-6) == h.cpu()


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
def test_bonding(dtype: torch.dtype) -> None:
    dd: DD = {"device": DEVICE, "dtype": dtype}

    sample = samples["H2"]
    numbers = sample["numbers"].to(DEVICE)
    positions = sample["positions"].to(**dd)

    h = get_hcore(GFN2_XTB.load(), numbers, positions, dd)

    # bonding interaction between the s-functions
    assert h[0, 1] < 0.0
    assert pytest.approx(h[0, 0].item()) == h[1, 1].item()


def test_matrix_property() -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}
    par = GFN1_XTB.load()

    sample = samples["LiH"]
    numbers = sample["numbers"].to(DEVICE)
    positions = sample["positions"].to(**dd)

    ihelp = IndexHelper.from_numbers(numbers, par)
    s = overlap(positions, Basis(numbers, par, ihelp, **dd), ihelp)

    h0 = new_hamiltonian(numbers, par, ihelp, **dd)
    assert h0.matrix is None

    h = h0.build(positions, s)
    assert h0.matrix is h

    # reference occupation of Li (2s1) and H (1s1, 2s0)
    assert h0.get_occupation().tolist() == [1.0, 0.0, 1.0, 0.0]

    h0.clear()
    assert h0.matrix is None
