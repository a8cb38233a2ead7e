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
Test single point calculations on difficult and broken inputs.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf import Calculator, Context, Result, Structure
from xtbscf._src.constants import labels
from xtbscf._src.scf import driver as scf_driver
from xtbscf._src.typing import DD, Tensor
from xtbscf._src.typing.exceptions import (
    InternalNumericalFailureError,
    SingularOverlapError,
)

from ..conftest import DEVICE
from ..utils import samples

SUCCESS = labels.STATUS_MAP[labels.STATUS_SUCCESS]
FAILED = labels.STATUS_MAP[labels.STATUS_FAILED]


def get_structure(name: str, dd: DD) -> Structure:
    sample = samples[name]
    return Structure(sample["numbers"].to(DEVICE), sample["positions"].to(**dd))


@pytest.mark.parametrize("name", ["C", "O", "O2"])
@pytest.mark.parametrize("accuracy", [1e-4, 1e-6])
def test_degenerate_frontier_tight_accuracy(name: str, accuracy: float) -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}
    ctx = Context()

    calc = Calculator.gfn2(accuracy=accuracy, **dd)
    res = Result()
    status = calc.singlepoint(get_structure(name, dd), res, ctx)

    assert status == SUCCESS, ctx.last_error
    assert ctx.last_error is None

    nel = res.get("populations").sum().item()
    assert pytest.approx(nel, abs=1e-8) == res.get("occupations").sum().item()


@pytest.mark.parametrize("method", ["gfn1", "gfn2"])
def test_degenerate_frontier_tiny_temperature(method: str) -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}
    ctx = Context()

    calc = getattr(Calculator, method)(accuracy=1.0, fermi_etemp=1e-3, **dd)
    res = Result()
    status = calc.singlepoint(get_structure("O", dd), res, ctx)

    assert status == SUCCESS, ctx.last_error
    assert pytest.approx(6.0, abs=1e-8) == res.get("occupations").sum().item()


def test_nonfinite_hamiltonian(monkeypatch: pytest.MonkeyPatch) -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}
    ctx = Context()

    def broken(hcore: Tensor, overlap: Tensor, potential: Tensor) -> Tensor:
        return torch.full_like(hcore, float("nan"))

    monkeypatch.setattr(scf_driver, "build_hamiltonian", broken)

    calc = Calculator.gfn2(**dd)
    res = Result()
    status = calc.singlepoint(get_structure("H2", dd), res, ctx)

    assert status == FAILED
    assert len(res) == 0
    assert calc.iterations == 0
    assert isinstance(ctx.last_error, InternalNumericalFailureError)


def test_nonfinite_hamiltonian_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}

    def broken(hcore: Tensor, overlap: Tensor, potential: Tensor) -> Tensor:
        return hcore + float("inf")

    monkeypatch.setattr(scf_driver, "build_hamiltonian", broken)

    calc = Calculator.gfn2(**dd)
    with pytest.raises(InternalNumericalFailureError):
        calc.singlepoint(get_structure("H2", dd), Result(), Context(raise_errors=True))


@pytest.mark.parametrize("method", ["gfn1", "gfn2"])
def test_coincident_atoms(method: str) -> None:
    dd: DD = {"device": DEVICE, "dtype": torch.double}
    ctx = Context()

    numbers = torch.tensor([1, 1], device=DEVICE)
    positions = torch.zeros((2, 3), **dd)

    calc = getattr(Calculator, method)(**dd)
    res = Result()
    status = calc.singlepoint(Structure(numbers, positions), res, ctx)

    assert status == FAILED
    assert len(res) == 0
    assert calc.iterations == 0
    assert calc.state is not None
    assert calc.state.status == labels.SCF_STATE_FAILED
    assert isinstance(ctx.last_error, SingularOverlapError)
