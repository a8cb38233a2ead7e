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
Test the result container and the knobs of the calculator.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf import GFN2_XTB, Calculator, Param, Result
from xtbscf._src.typing.exceptions import InvalidConfigurationError


def test_result_write_once() -> None:
    res = Result()
    assert len(res) == 0

    res.set("energy", torch.tensor(-1.0))
    assert "energy" in res
    assert res.get("energy").item() == -1.0
    assert res["energy"].item() == -1.0

    with pytest.raises(KeyError):
        res.set("energy", torch.tensor(-2.0))

    # value unchanged
    assert res.get("energy").item() == -1.0


def test_result_missing() -> None:
    res = Result()
    with pytest.raises(KeyError):
        res.get("energy")


def test_result_clear() -> None:
    res = Result()
    res.set("energy", torch.tensor(-1.0))
    res.set("charges", torch.zeros(2))
    assert res.keys() == ["energy", "charges"]

    res.clear()
    assert len(res) == 0

    # reusable after clearing
    res.set("energy", torch.tensor(-3.0))
    assert res.get("energy").item() == -3.0


def test_result_energies() -> None:
    res = Result()
    res.set("energies", {"hcore": torch.tensor([-1.0, -0.5])})
    res.set("energy", torch.tensor(-1.25))
    res.set("repulsion", torch.tensor(0.25))

    energies = res.get_energies()
    assert energies == {"hcore": -1.5, "repulsion": 0.25, "energy": -1.25}


def test_calculator_param() -> None:
    # lazily loaded and explicitly loaded parametrization
    calc1 = Calculator(GFN2_XTB)
    calc2 = Calculator(GFN2_XTB.load())
    assert calc1.par is calc2.par
    assert calc1.method_name == "GFN2-xTB"

    with pytest.raises(TypeError):
        Calculator({"element": {}})  # type: ignore

    # custom parametrization without meta data
    calc3 = Calculator(Param(element=GFN2_XTB.load().element))
    assert calc3.method_name == "custom"


def test_calculator_dtype() -> None:
    assert Calculator.gfn1().dtype == torch.double
    assert Calculator.gfn1(dtype=torch.float).opts.dtype == torch.float


def test_knobs() -> None:
    calc = Calculator.gfn2()

    calc.accuracy = 0.5
    assert calc.accuracy == 0.5
    assert pytest.approx(0.5e-6) == calc.opts.econv

    calc.max_iterations = 12
    assert calc.max_iterations == 12

    calc.mixer_damping = 0.7
    assert calc.mixer_damping == 0.7

    calc.electronic_temperature = 0.001
    assert calc.electronic_temperature == 0.001

    for name, value in (
        ("accuracy", -1.0),
        ("max_iterations", 0),
        ("mixer_damping", 0.0),
        ("electronic_temperature", -0.1),
    ):
        with pytest.raises(InvalidConfigurationError):
            setattr(calc, name, value)

    # previous values are kept
    assert calc.accuracy == 0.5
    assert calc.max_iterations == 12


def test_invalid_options() -> None:
    with pytest.raises(InvalidConfigurationError):
        Calculator.gfn2(maxiter=-1)

    # the electronic temperature is set with the prefixed keyword
    with pytest.raises(TypeError):
        Calculator.gfn2(etemp=0.0)


def test_zero_temperature_keyword() -> None:
    calc = Calculator.gfn2(fermi_etemp=0.0)
    assert calc.electronic_temperature == 0.0
    assert calc.opts.fermi.etemp == 0.0


def test_info() -> None:
    calc = Calculator.gfn1(mixer="anderson")
    info = calc.info()

    assert info["Method"] == "GFN1-xTB"
    assert "H" in info["Elements"]
    assert "GFN1-xTB" in str(calc)
