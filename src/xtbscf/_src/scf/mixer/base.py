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
ABC: SCF Mixer
==============

This module contains the abstract base class for all charge mixers.

A mixer receives the charges produced by the current iteration together with
the charges that went into it and returns the input for the next iteration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import torch

from xtbscf._src.constants import defaults
from xtbscf._src.typing import Any, Tensor

__all__ = ["Mixer", "DEFAULT_OPTS"]


DEFAULT_OPTS = {"damp": defaults.DAMP, "generations": defaults.GENERATIONS}


class Mixer(ABC):
    """
    Abstract base class for mixer.
    """

    label: str
    """Label for the Mixer."""

    iter_step: int
    """Number of mixing iterations taken."""

    options: dict[str, Any]
    """Options for the mixer (damping, history length, ...)."""

    _delta: Tensor | None
    """Difference between the current output and input systems."""

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        opts = dict(DEFAULT_OPTS)
        if options is not None:
            opts.update(options)

        self.label = self.__class__.__name__
        self.options = opts
        self.iter_step = 0
        self._delta = None

    def __str__(self) -> str:
        """Returns representative string."""
        return f"{self.__class__.__name__}({self.iter_step}, {self.options})"

    def __repr__(self) -> str:
        return str(self)

    @property
    def damp(self) -> float:
        """Damping factor of the mixer."""
        return self.options["damp"]

    @abstractmethod
    def iter(self, x_new: Tensor, x_old: Tensor | None = None) -> Tensor:
        """
        Performs the mixing operation & returns the newly mixed system.

        Parameters
        ----------
        x_new : Tensor
            New system, i.e., the output of the current iteration.
        x_old : Tensor | None, optional
            Old system, i.e., the input of the current iteration. Defaults to
            the last mixed system stored internally.

        Returns
        -------
        Tensor
            Newly mixed system.
        """

    def mix(self, x_old: Tensor, x_new: Tensor) -> tuple[Tensor, Tensor]:
        """
        Mix two systems and report the residual norm.

        Parameters
        ----------
        x_old : Tensor
            Input of the current iteration.
        x_new : Tensor
            Output of the current iteration.

        Returns
        -------
        tuple[Tensor, Tensor]
            Mixed system and the 2-norm of ``x_new - x_old``.
        """
        x_mix = self.iter(x_new, x_old)
        return x_mix, self.residual

    @property
    def delta(self) -> Tensor:
        """
        Difference between the current output and input systems.
        """
        if self._delta is None:
            raise RuntimeError("Mixer has not been started yet.")
        return self._delta

    @property
    def residual(self) -> Tensor:
        """2-norm of the last difference between output and input."""
        return torch.norm(self.delta)

    def reset(self) -> None:
        """
        Resets the mixer to its initial state.

        Calling this function will reset the internal history. However, any
        options set during the initialisation process will be retained.
        """
        self.iter_step = 0
        self._delta = None
