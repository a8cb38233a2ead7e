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
Typing
======

Type annotations for this project. The bulk of the types is provided by
:mod:`tad_mctc.typing`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, TypedDict, Union

from tad_mctc.typing import (
    DD,
    Any,
    Generator,
    Literal,
    NoReturn,
    Tensor,
    TensorLike,
    get_default_dtype,
    override,
)

__all__ = [
    "DD",
    "Any",
    "Callable",
    "CountingFunction",
    "Dict",
    "Generator",
    "List",
    "Literal",
    "NoReturn",
    "Optional",
    "PathLike",
    "Sequence",
    "Tensor",
    "TensorLike",
    "TypedDict",
    "Union",
    "get_default_dtype",
    "override",
]


PathLike = Union[str, Path]

CountingFunction = Callable[..., Tensor]
