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
Test the command line driver.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from xtbscf import OutputHandler
from xtbscf._src.cli import Driver, parser
from xtbscf._src.cli.driver import read_chrg
from xtbscf._src.constants import labels

from ..utils import coordfile


@pytest.fixture(autouse=True)
def restore_verbosity():
    default = OutputHandler.verbosity
    yield
    OutputHandler.verbosity = default
    OutputHandler.clear_warnings()


@pytest.mark.parametrize("method", ["gfn1", "gfn2", "ipea1"])
def test_singlepoint(method: str) -> None:
    args = parser().parse_args(
        ["--verbosity", "0", "--method", method, str(coordfile)]
    )
    status, result = Driver(args).singlepoint()

    assert status == "success"
    assert result.get(labels.KEY_ENERGY).item() < 0.0
    assert result.get(labels.KEY_CONVERGED) is True


def _copy_structure(tmp_path: Path) -> Path:
    target = tmp_path / "mol.xyz"
    shutil.copyfile(coordfile, target)
    return target


def test_charge_file(tmp_path: Path) -> None:
    target = _copy_structure(tmp_path)
    (tmp_path / ".CHRG").write_text("1\n", encoding="utf-8")
    (tmp_path / ".UHF").write_text("1\n", encoding="utf-8")

    assert read_chrg(tmp_path / ".CHRG") == 1

    driver = Driver(parser().parse_args(["--verbosity", "0", str(target)]))
    assert driver.chrg == 1
    assert driver.spin == 1

    status, result = driver.singlepoint()
    assert status == "success"
    assert pytest.approx(1.0) == result.get(labels.KEY_OCCUPATION).sum().item()


def test_charge_option_over_file(tmp_path: Path) -> None:
    target = _copy_structure(tmp_path)
    (tmp_path / ".CHRG").write_text("1\n", encoding="utf-8")

    args = parser().parse_args(["--chrg", "0", str(target)])
    driver = Driver(args)
    assert driver.chrg == 0
    assert driver.spin is None


def test_no_charge_file(tmp_path: Path) -> None:
    target = _copy_structure(tmp_path)

    driver = Driver(parser().parse_args([str(target)]))
    assert driver.chrg == 0
    assert driver.spin is None


def test_failed(tmp_path: Path) -> None:
    target = tmp_path / "feh.xyz"
    target.write_text(
        "2\n\nFe 0.0 0.0 0.0\nH 0.0 0.0 1.6\n", encoding="utf-8"
    )

    args = parser().parse_args(["--verbosity", "0", str(target)])
    status, result = Driver(args).singlepoint()

    assert status == "failed"
    assert len(result) == 0
