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
Setup for pytest.
"""

from __future__ import annotations

import pytest
import torch

# avoid randomness and non-deterministic algorithms
torch.manual_seed(0)
torch.use_deterministic_algorithms(True)

torch.set_printoptions(precision=10)


DEVICE: torch.device | None = None
"""Name of Device."""


def pytest_addoption(parser: pytest.Parser) -> None:
    """Set up additional command line options."""

    parser.addoption(
        "--cuda",
        action="store_true",
        help="Use GPU as default device.",
    )

    parser.addoption(
        "--tpo-precision",
        action="store",
        default=6,
        type=int,
        help="Number of digits of precision for floating point output.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Pytest configuration hook."""

    global DEVICE

    if config.getoption("--cuda"):
        if not torch.cuda.is_available():
            raise RuntimeError("No cuda devices available.")

        DEVICE = torch.device("cuda:0")
        torch.use_deterministic_algorithms(False)

    if config.getoption("--tpo-precision"):
        torch.set_printoptions(precision=config.getoption("--tpo-precision"))

    # register an additional marker
    config.addinivalue_line("markers", "cuda: mark test that require CUDA.")


def pytest_runtest_setup(item: pytest.Function) -> None:
    """Custom marker for tests requiring CUDA."""

    for _ in item.iter_markers(name="cuda"):
        if not torch.cuda.is_available():
            pytest.skip("Torch not compiled with CUDA or no CUDA device available.")
