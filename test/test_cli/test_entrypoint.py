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
Test the command line entry point.
"""

from __future__ import annotations

import logging

import pytest

from xtbscf import OutputHandler, __version__
from xtbscf._src.cli import console_entry_point

from ..utils import coordfile


def test_version(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit):
        console_entry_point(["--version"])

    out, _ = capsys.readouterr()
    assert __version__ in out


def test_no_file(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        with pytest.raises(SystemExit) as excinfo:
            console_entry_point([])

    assert excinfo.value.code == 1
    assert "No coordinate file given." in caplog.text


def test_entry_point() -> None:
    default = OutputHandler.verbosity

    try:
        ret = console_entry_point(["--verbosity", "0", str(coordfile)])
    finally:
        OutputHandler.verbosity = default
        OutputHandler.clear_warnings()

    assert ret == 0
