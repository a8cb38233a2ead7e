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
Parametrization
===============

Pydantic models for the parametrization of the extended tight-binding
methods, the built-in parameter sets and helpers to convert the records to
tensors.
"""

from .base import Param
from .charge import Charge, ChargeEffective
from .dispersion import D3Model, D4Model, Dispersion
from .element import Element
from .gfn1 import GFN1_XTB
from .gfn2 import GFN2_XTB
from .hamiltonian import Hamiltonian, XTBHamiltonian
from .ipea1 import IPEA1_XTB
from .meta import Meta
from .repulsion import EffectiveRepulsion, Repulsion
from .thirdorder import ThirdOrder, ThirdOrderShell
from .utils import (
    get_elem_angular,
    get_elem_param,
    get_elem_pqn,
    get_elem_valence,
    get_pair_param,
)
