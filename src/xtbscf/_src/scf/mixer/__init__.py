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
SCF: Mixer
==========

Charge mixers of the self-consistent field iterations.

Example
-------

>>> import torch
>>> from xtbscf._src.scf.mixer import new_mixer
>>>
>>> mixer = new_mixer("simple", damp=0.5)
>>> x_mix, residual = mixer.mix(torch.tensor([0.0]), torch.tensor([1.0]))
>>> print(x_mix, residual)
tensor([0.5000]) tensor(1.)
"""

from __future__ import annotations

from xtbscf._src.constants import defaults, labels

from .anderson import Anderson
from .base import Mixer
from .simple import Simple

__all__ = ["Anderson", "Mixer", "Simple", "new_mixer"]


def new_mixer(
    mixer: int | str = defaults.MIXER,
    damp: float = defaults.DAMP,
    generations: int = defaults.GENERATIONS,
) -> Mixer:
    """
    Create a new charge mixer.

    Parameters
    ----------
    mixer : int | str, optional
        Integer label or name of the mixer. Defaults to simple mixing.
    damp : float, optional
        Damping factor.
    generations : int, optional
        History capacity (Anderson mixing only).

    Returns
    -------
    Mixer
        Fresh mixer instance without history.

    Raises
    ------
    ValueError
        Unknown mixer.
    """
    if isinstance(mixer, str):
        mixer = mixer.casefold()

    if mixer == labels.MIXER_SIMPLE or mixer in labels.MIXER_SIMPLE_STRS:
        return Simple({"damp": damp})
    if mixer == labels.MIXER_ANDERSON or mixer in labels.MIXER_ANDERSON_STRS:
        return Anderson({"damp": damp, "generations": generations})

    raise ValueError(f"Unknown mixer '{mixer}'.")
