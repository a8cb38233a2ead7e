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
Classicals: Dispersion
======================

London dispersion corrections of the GFN methods. GFN1-xTB and IPEA1-xTB use
DFT-D3(BJ), GFN2-xTB uses DFT-D4. The energies are evaluated with the
`tad-dftd3`_ and `tad-dftd4`_ libraries.

.. _tad-dftd3: https://github.com/dftd3/tad-dftd3

.. _tad-dftd4: https://github.com/dftd4/tad-dftd4

Example
-------

.. code-block:: python

    import torch
    from xtbscf import GFN1_XTB
    from xtbscf._src.components.classicals import new_dispersion

    numbers = torch.tensor([6, 1, 1, 1, 1])
    positions = torch.tensor([
        [0.0, 0.0, 0.0],
        [1.19, 1.19, 1.19],
        [-1.19, -1.19, 1.19],
        [1.19, -1.19, -1.19],
        [-1.19, 1.19, -1.19],
    ])

    disp = new_dispersion(numbers, GFN1_XTB.load(), charge=torch.tensor(0.0))
    cache = disp.get_cache(numbers)
    e = disp.get_energy(positions, cache)
"""

from .base import Dispersion
from .d3 import DispersionD3, DispersionD3Cache
from .d4 import DispersionD4, DispersionD4Cache
from .factory import LABEL_DISPERSION, new_dispersion
