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
Collection of utility functions and molecules for testing.
"""

from __future__ import annotations

from pathlib import Path

import torch

from xtbscf._src.typing import Tensor, TypedDict

coordfile = Path(Path(__file__).parent, "mols/H2/mol.xyz").resolve()
"""Path to xyz file of H2."""

coordfile_lih = Path(Path(__file__).parent, "mols/LiH/mol.xyz").resolve()
"""Path to xyz file of LiH."""


class Molecule(TypedDict):
    """Representation of a molecule (positions in Bohr)."""

    numbers: Tensor
    positions: Tensor


samples: dict[str, Molecule] = {
    "H": {
        "numbers": torch.tensor([1]),
        "positions": torch.tensor([[0.0, 0.0, 0.0]]),
    },
    "He": {
        "numbers": torch.tensor([2]),
        "positions": torch.tensor([[0.0, 0.0, 0.0]]),
    },
    "C": {
        "numbers": torch.tensor([6]),
        "positions": torch.tensor([[0.0, 0.0, 0.0]]),
    },
    "O": {
        "numbers": torch.tensor([8]),
        "positions": torch.tensor([[0.0, 0.0, 0.0]]),
    },
    "O2": {
        "numbers": torch.tensor([8, 8]),
        "positions": torch.tensor(
            [
                [0.0, 0.0, -1.14010500],
                [0.0, 0.0, +1.14010500],
            ]
        ),
    },
    "H2": {
        "numbers": torch.tensor([1, 1]),
        "positions": torch.tensor(
            [
                [0.0, 0.0, -0.70014273],
                [0.0, 0.0, +0.70014273],
            ]
        ),
    },
    "LiH": {
        "numbers": torch.tensor([3, 1]),
        "positions": torch.tensor(
            [
                [0.0, 0.0, 0.0],
                [0.0, 0.0, 3.01407585],
            ]
        ),
    },
    "H2O": {
        "numbers": torch.tensor([8, 1, 1]),
        "positions": torch.tensor(
            [
                [0.00000000, 0.00000000, -0.74288549],
                [-1.43472674, 0.00000000, 0.37144275],
                [1.43472674, 0.00000000, 0.37144275],
            ]
        ),
    },
    "CH4": {
        "numbers": torch.tensor([6, 1, 1, 1, 1]),
        "positions": torch.tensor(
            [
                [0.00000000, 0.00000000, 0.00000000],
                [1.19077690, 1.19077690, 1.19077690],
                [-1.19077690, -1.19077690, 1.19077690],
                [1.19077690, -1.19077690, -1.19077690],
                [-1.19077690, 1.19077690, -1.19077690],
            ]
        ),
    },
    "HCl": {
        "numbers": torch.tensor([17, 1]),
        "positions": torch.tensor(
            [
                [0.0, 0.0, 0.0],
                [0.0, 0.0, 2.40867930],
            ]
        ),
    },
    "H2S": {
        "numbers": torch.tensor([16, 1, 1]),
        "positions": torch.tensor(
            [
                [0.00000000, 0.00000000, 0.00000000],
                [-1.81730000, 0.00000000, 1.75240000],
                [1.81730000, 0.00000000, 1.75240000],
            ]
        ),
    },
    "SiH4": {
        "numbers": torch.tensor([14, 1, 1, 1, 1]),
        "positions": torch.tensor(
            [
                [0.00000000, 0.00000000, 0.00000000],
                [1.61474000, 1.61474000, 1.61474000],
                [-1.61474000, -1.61474000, 1.61474000],
                [1.61474000, -1.61474000, -1.61474000],
                [-1.61474000, 1.61474000, -1.61474000],
            ]
        ),
    },
    "FeH": {
        "numbers": torch.tensor([26, 1]),
        "positions": torch.tensor(
            [
                [0.0, 0.0, 0.0],
                [0.0, 0.0, 3.0],
            ]
        ),
    },
}
"""Small molecules of the first three periods (and FeH without parameters)."""
