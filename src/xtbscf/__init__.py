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
xtbscf
======

Self-consistent field calculations with the extended tight-binding methods
GFN1-xTB, GFN2-xTB and IPEA1-xTB.

Example
-------
>>> import torch
>>> import xtbscf
>>>
>>> numbers = torch.tensor([1, 1])
>>> positions = torch.tensor([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]])
>>> structure = xtbscf.Structure(numbers, positions)
>>>
>>> calc = xtbscf.Calculator.gfn2()
>>> result = xtbscf.Result()
>>> calc.singlepoint(structure, result)
'success'
"""

from xtbscf.__version__ import __version__

# order is important here
from xtbscf._src.io import Context as Context
from xtbscf._src.io import OutputHandler as OutputHandler
from xtbscf._src.basis.indexhelper import IndexHelper as IndexHelper
from xtbscf._src.mol import Structure as Structure
from xtbscf._src.param import Param as Param
from xtbscf._src.param.gfn1 import GFN1_XTB as GFN1_XTB
from xtbscf._src.param.gfn2 import GFN2_XTB as GFN2_XTB
from xtbscf._src.param.ipea1 import IPEA1_XTB as IPEA1_XTB
from xtbscf._src.calculators import Calculator as Calculator
from xtbscf._src.calculators import Result as Result

from xtbscf import config as config
from xtbscf import exceptions as exceptions
from xtbscf import labels as labels
from xtbscf import typing as typing

__all__ = [
    "Calculator",
    "Context",
    "GFN1_XTB",
    "GFN2_XTB",
    "IPEA1_XTB",
    "IndexHelper",
    "OutputHandler",
    "Param",
    "Result",
    "Structure",
    "config",
    "exceptions",
    "labels",
    "typing",
    "__version__",
]
