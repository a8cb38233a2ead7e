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
Test the dispersion corrections (D3 for GFN1/IPEA1, D4 for GFN2).
"""

from __future__ import annotations

import pytest
import torch
from pydantic import ValidationError

from xtbscf._src.components.classicals import (
    DispersionD3,
    DispersionD4,
    new_dispersion,
)
from xtbscf._src.io import OutputHandler
from xtbscf._src.param import (
    GFN1_XTB,
    GFN2_XTB,
    IPEA1_XTB,
    D3Model,
    D4Model,
    Dispersion,
    Param,
)
from xtbscf._src.typing import Tensor
from xtbscf._src.typing.exceptions import ParameterWarning

from ..conftest import DEVICE
from ..utils import samples


def get_energy(par: Param, numbers: Tensor, positions: Tensor) -> Tensor:
    charge = torch.tensor(0.0, device=DEVICE, dtype=positions.dtype)
    disp = new_dispersion(numbers, par, charge=charge, dtype=positions.dtype)
    assert disp is not None

    return disp.get_energy(positions, disp.get_cache(numbers))


@pytest.mark.parametrize("dtype", [torch.float, torch.double])
@pytest.mark.parametrize("lazy", [GFN1_XTB, GFN2_XTB, IPEA1_XTB])
@pytest.mark.parametrize("name", ["H2O", "CH4", "SiH4"])
def test_negative(dtype: torch.dtype, lazy, name: str) -> None:
    par = lazy.load()
    numbers = samples[name]["numbers"].to(DEVICE)
    positions = samples[name]["positions"].to(device=DEVICE, dtype=dtype)

    e = get_energy(par, numbers, positions)
    assert e.shape == numbers.shape
    assert e.dtype == dtype
    assert e.sum().item() < 0.0


@pytest.mark.parametrize("lazy", [GFN1_XTB, GFN2_XTB])
def test_single_atom(lazy) -> None:
    numbers = torch.tensor([6], device=DEVICE)
    positions = torch.zeros((1, 3), device=DEVICE, dtype=torch.double)

    e = get_energy(lazy.load(), numbers, positions)
    assert pytest.approx(0.0, abs=1e-14) == e.sum().item()


def test_distance() -> None:
    par = GFN1_XTB.load()
    numbers = torch.tensor([18, 18], device=DEVICE)

    energies = []
    for r in (7.0, 9.0, 12.0, 20.0):
        positions = torch.tensor(
            [[0.0, 0.0, 0.0], [0.0, 0.0, r]], device=DEVICE, dtype=torch.double
        )
        energies.append(get_energy(par, numbers, positions).sum().item())

    # attractive and decaying
    assert energies == sorted(energies)
    assert energies[-1] < 0.0


def test_factory() -> None:
    numbers = torch.tensor([1, 1], device=DEVICE)

    assert isinstance(new_dispersion(numbers, GFN1_XTB.load()), DispersionD3)
    assert isinstance(new_dispersion(numbers, IPEA1_XTB.load()), DispersionD3)
    assert isinstance(new_dispersion(numbers, GFN2_XTB.load()), DispersionD4)


def test_label() -> None:
    numbers = torch.tensor([1, 1], device=DEVICE)

    disp = new_dispersion(numbers, GFN2_XTB.load())
    assert disp is not None
    assert disp.label == "DispersionD4"


def test_cache() -> None:
    numbers = samples["H2O"]["numbers"].to(DEVICE)

    disp = new_dispersion(numbers, GFN2_XTB.load(), dtype=torch.double)
    assert disp is not None

    cache1 = disp.get_cache(numbers)
    cache2 = disp.get_cache(numbers)
    assert cache1 is cache2


def test_no_dispersion() -> None:
    par = Param(element=GFN1_XTB.load().element)
    assert new_dispersion(torch.tensor([1, 1]), par) is None


def test_single_model() -> None:
    with pytest.raises(ValidationError):
        Dispersion(d3=D3Model(), d4=D4Model())


def test_self_consistent_d4() -> None:
    OutputHandler.clear_warnings()

    par = GFN2_XTB.load()
    d4 = par.dispersion.d4.model_copy(update={"sc": True})
    par = par.model_copy(update={"dispersion": Dispersion(d4=d4)})

    disp = new_dispersion(torch.tensor([1, 1]), par)
    assert isinstance(disp, DispersionD4)
    assert any(w is ParameterWarning for _, w in OutputHandler.warnings)

    OutputHandler.clear_warnings()
