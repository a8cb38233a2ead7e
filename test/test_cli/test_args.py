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
Test the command line parser.
"""

from __future__ import annotations

import pytest
import torch

from xtbscf._src.cli import parser
from xtbscf._src.constants import defaults

from ..utils import coordfile


def test_defaults() -> None:
    args = parser().parse_args([])

    assert args.file is None
    assert args.chrg is None
    assert args.spin == defaults.SPIN
    assert args.dtype == defaults.TORCH_DTYPE
    assert args.method == defaults.METHOD
    assert args.guess == defaults.GUESS
    assert args.acc == defaults.ACCURACY
    assert args.maxiter == defaults.MAXITER
    assert args.mixer == defaults.MIXER
    assert args.damp == defaults.DAMP
    assert args.generations == defaults.GENERATIONS
    assert args.force_convergence is False
    assert args.etemp == defaults.FERMI_ETEMP
    assert args.fermi_maxiter == defaults.FERMI_MAXITER
    assert args.verbosity == defaults.VERBOSITY
    assert args.loglevel == defaults.LOG_LEVEL


def test_options() -> None:
    argv = [
        "--chrg", "1",
        "--uhf", "1",
        "--dtype", "sp",
        "--method", "gfn1",
        "--guess", "eeq",
        "--acc", "0.1",
        "--maxiter", "50",
        "--mixer", "anderson",
        "--damp", "0.2",
        "--generations", "3",
        "--force-convergence",
        "--etemp", "0",
        "-vv",
        "-s",
        str(coordfile),
    ]  # fmt: skip
    args = parser().parse_args(argv)

    assert args.chrg == 1
    assert args.spin == 1
    assert args.dtype == torch.float32
    assert args.method == "gfn1"
    assert args.guess == "eeq"
    assert args.acc == 0.1
    assert args.maxiter == 50
    assert args.mixer == "anderson"
    assert args.damp == 0.2
    assert args.generations == 3
    assert args.force_convergence is True
    assert args.etemp == 0.0
    assert args.v == 2
    assert args.s == 1
    assert args.file == str(coordfile)


@pytest.mark.parametrize("dtype", ["float64", "double", "dp"])
def test_dtype(dtype: str) -> None:
    args = parser().parse_args(["--dtype", dtype])
    assert args.dtype == torch.float64


@pytest.mark.parametrize(
    "argv",
    [
        ["--uhf", "-1"],
        ["--acc", "0"],
        ["--maxiter", "0"],
        ["--etemp", "-10"],
        ["--generations", "0"],
        ["--method", "gfn0"],
        ["--mixer", "broyden"],
        ["--dtype", "half"],
    ],
)
def test_fail_option(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        parser().parse_args(argv)


def test_fail_file(tmp_path) -> None:
    with pytest.raises(SystemExit):
        parser().parse_args([str(tmp_path)])

    with pytest.raises(SystemExit):
        parser().parse_args([str(tmp_path / "missing.xyz")])
