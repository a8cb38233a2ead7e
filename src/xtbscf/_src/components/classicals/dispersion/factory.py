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
Dispersion: Factory
===================

A factory function to create instances of the dispersion classes.
"""

from __future__ import annotations

import torch

from xtbscf._src.io import OutputHandler
from xtbscf._src.param import Param
from xtbscf._src.typing import DD, Tensor, get_default_dtype
from xtbscf._src.typing.exceptions import ParameterWarning

from .base import Dispersion
from .d3 import DispersionD3
from .d4 import DispersionD4

__all__ = ["LABEL_DISPERSION", "new_dispersion"]


LABEL_DISPERSION = "Dispersion"
"""Common label of the dispersion classes (prefix of the class names)."""


def new_dispersion(
    numbers: Tensor,
    par: Param,
    charge: Tensor | None = None,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> Dispersion | None:
    """
    Create the proper instance of the dispersion class for the given
    parametrization.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par : Param
        Representation of an extended tight-binding model.
    charge : Tensor | None, optional
        Total charge of the system. Only used by D4. Defaults to ``None``,
        i.e., a neutral system.

    Returns
    -------
    Dispersion | None
        Instance of the Dispersion class or ``None`` if no dispersion is used.
    """
    if par.dispersion is None:
        return None

    dd: DD = {
        "device": device,
        "dtype": dtype if dtype is not None else get_default_dtype(),
    }

    if par.dispersion.d3 is not None:
        d3 = par.dispersion.d3
        param = {
            "s6": torch.tensor(d3.s6, **dd),
            "s8": torch.tensor(d3.s8, **dd),
            "s9": torch.tensor(d3.s9, **dd),
            "a1": torch.tensor(d3.a1, **dd),
            "a2": torch.tensor(d3.a2, **dd),
        }
        return DispersionD3(numbers, param, **dd)

    if par.dispersion.d4 is not None:
        d4 = par.dispersion.d4
        if d4.sc is True:
            OutputHandler.warn(
                "Self-consistent D4 dispersion is not available. The D4 "
                "energy is evaluated with EEQ charges instead.",
                ParameterWarning,
            )

        param = {
            "s6": torch.tensor(d4.s6, **dd),
            "s8": torch.tensor(d4.s8, **dd),
            "s9": torch.tensor(d4.s9, **dd),
            "s10": torch.tensor(d4.s10, **dd),
            "alp": torch.tensor(d4.alp, **dd),
            "a1": torch.tensor(d4.a1, **dd),
            "a2": torch.tensor(d4.a2, **dd),
        }
        if charge is not None:
            charge = charge.to(**dd)
        return DispersionD4(numbers, param, charge=charge, **dd)

    return None
