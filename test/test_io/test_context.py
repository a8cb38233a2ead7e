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
Test the diagnostic context.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from xtbscf import Context, OutputHandler
from xtbscf._src.typing.exceptions import SCFConvergenceWarning


def test_init() -> None:
    ctx = Context()

    assert ctx.messages == []
    assert ctx.warnings == []
    assert ctx.errors == []
    assert ctx.verbosity is None
    assert ctx.raise_errors is False
    assert ctx.failed is False
    assert ctx.last_error is None


def test_fail_verbosity() -> None:
    with pytest.raises(TypeError):
        Context(verbosity="high")  # type: ignore


def test_collect() -> None:
    OutputHandler.clear_warnings()
    ctx = Context(verbosity=0)

    ctx.message("Starting.")
    ctx.warn("Odd.")
    ctx.warn("Not converged.", SCFConvergenceWarning)

    assert ctx.messages == ["Starting."]
    assert ctx.warnings == [
        ("Odd.", UserWarning),
        ("Not converged.", SCFConvergenceWarning),
    ]

    # warnings are forwarded to the output handler
    assert len(OutputHandler.warnings) == 2
    OutputHandler.clear_warnings()


def test_errors() -> None:
    ctx = Context()

    first = ValueError("first")
    second = RuntimeError("second")
    ctx.error(first)
    ctx.error(second)

    assert ctx.failed is True
    assert ctx.last_error is second
    assert ctx.errors == [first, second]

    ctx.clear()
    assert ctx.failed is False
    assert ctx.last_error is None


def test_scope() -> None:
    default = OutputHandler.verbosity
    ctx = Context(verbosity=0)

    with ctx.scope():
        assert OutputHandler.verbosity == 0
    assert OutputHandler.verbosity == default

    # no verbosity given leaves the handler untouched
    with Context().scope():
        assert OutputHandler.verbosity == default


def test_scope_concurrent() -> None:
    default = OutputHandler.verbosity

    def run(level: int) -> list[int]:
        seen = []
        with Context(verbosity=level).scope():
            for _ in range(200):
                seen.append(OutputHandler.verbosity)
        return seen

    levels = [0, 3, 6, 9]
    with ThreadPoolExecutor(max_workers=len(levels)) as pool:
        results = list(pool.map(run, levels))

    # every thread only sees the verbosity of its own context
    for level, seen in zip(levels, results):
        assert set(seen) == {level}

    assert OutputHandler.verbosity == default


def test_message_printed(caplog: pytest.LogCaptureFixture) -> None:
    console = logging.getLogger("xtbscf_console")
    console.propagate = True

    try:
        with caplog.at_level(logging.INFO, logger="xtbscf_console"):
            Context(verbosity=10).message("loud", v=5)
            Context(verbosity=0).message("quiet", v=5)
    finally:
        console.propagate = False

    assert "loud" in caplog.text
    assert "quiet" not in caplog.text
