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
Test the SCF configuration.
"""

from __future__ import annotations

import pytest
import torch
from tad_mctc.units.energy import KELVIN2AU

from xtbscf._src.calculators.config import ConfigFermi, ConfigSCF
from xtbscf._src.constants import defaults, labels
from xtbscf._src.io import OutputHandler
from xtbscf._src.typing import Any
from xtbscf._src.typing.exceptions import (
    InvalidConfigurationError,
    ToleranceWarning,
)


def test_defaults() -> None:
    config = ConfigSCF()

    assert config.accuracy == defaults.ACCURACY
    assert config.maxiter == defaults.MAXITER
    assert config.damp == defaults.DAMP
    assert config.generations == defaults.GENERATIONS
    assert config.guess == labels.GUESS_SAD
    assert config.mixer == labels.MIXER_SIMPLE
    assert config.force_convergence is False
    assert config.dtype == torch.double

    assert pytest.approx(defaults.FERMI_ETEMP) == config.fermi.etemp
    assert config.fermi.maxiter == defaults.FERMI_MAXITER
    assert config.fermi.thresh is defaults.FERMI_THRESH


def test_thresholds_scale_with_accuracy() -> None:
    config = ConfigSCF(accuracy=0.1)

    assert pytest.approx(0.1 * defaults.ECONV) == config.econv
    assert pytest.approx(0.1 * defaults.PCONV) == config.pconv

    config.accuracy = 10
    assert pytest.approx(10 * defaults.ECONV) == config.econv
    assert isinstance(config.accuracy, float)


@pytest.mark.parametrize(
    "value, ref",
    [
        ("anderson", labels.MIXER_ANDERSON),
        ("Simple", labels.MIXER_SIMPLE),
        (labels.MIXER_ANDERSON, labels.MIXER_ANDERSON),
    ],
)
def test_mixer(value: str | int, ref: int) -> None:
    assert ConfigSCF(mixer=value).mixer == ref


@pytest.mark.parametrize(
    "value, ref",
    [
        ("eeq", labels.GUESS_EEQ),
        ("SAD", labels.GUESS_SAD),
        (labels.GUESS_EEQ, labels.GUESS_EEQ),
    ],
)
def test_guess(value: str | int, ref: int) -> None:
    assert ConfigSCF(guess=value).guess == ref


@pytest.mark.parametrize(
    "kwargs",
    [
        {"accuracy": 0.0},
        {"accuracy": -1.0},
        {"accuracy": float("nan")},
        {"accuracy": "high"},
        {"maxiter": 0},
        {"maxiter": 2.5},
        {"maxiter": True},
        {"damp": 0.0},
        {"damp": 1.5},
        {"generations": 0},
        {"mixer": "broyden"},
        {"mixer": 7},
        {"mixer": 1.0},
        {"guess": "huckel"},
        {"force_convergence": 1},
        {"fermi_etemp": -300.0},
        {"fermi_maxiter": -1},
        {"fermi_thresh": 1e-8},
    ],
)
def test_invalid(kwargs: dict[str, Any]) -> None:
    with pytest.raises(InvalidConfigurationError):
        ConfigSCF(**kwargs)


def test_invalid_is_value_error() -> None:
    with pytest.raises(ValueError):
        ConfigSCF(damp=-1.0)


def test_invalid_assignment_keeps_value() -> None:
    config = ConfigSCF(damp=0.3)

    with pytest.raises(InvalidConfigurationError):
        config.damp = 2.0

    # never clamped
    assert config.damp == 0.3


def test_tolerance_warning() -> None:
    OutputHandler.clear_warnings()

    ConfigSCF(accuracy=1e-12)
    assert any(w is ToleranceWarning for _, w in OutputHandler.warnings)

    OutputHandler.clear_warnings()


def test_fermi_units() -> None:
    fermi = ConfigFermi(etemp=300.0)
    assert pytest.approx(300.0 * KELVIN2AU) == fermi.kt

    fermi.kt = 0.01
    assert pytest.approx(0.01 / KELVIN2AU) == fermi.etemp

    fermi.etemp = 0.0
    assert fermi.kt == 0.0

    with pytest.raises(InvalidConfigurationError):
        fermi.kt = -0.01


def test_info() -> None:
    config = ConfigSCF(mixer="anderson", guess="eeq")
    info = config.info()["SCF Options"]

    assert info["Mixer"] == "Anderson"
    assert info["Guess Method"] == "EEQ"
    assert "Fermi Smearing" in info

    assert "Anderson" in str(config)
    assert "ConfigFermi" in str(config.fermi)


def test_fermi_thresh() -> None:
    thr = {torch.double: torch.tensor(1e-6, dtype=torch.double)}
    config = ConfigSCF(fermi_thresh=thr)
    assert config.fermi.thresh is thr

    fermi = ConfigFermi(thresh=thr)
    assert fermi.thresh[torch.double].item() == pytest.approx(1e-6)
