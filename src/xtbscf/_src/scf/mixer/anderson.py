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
Anderson Mixing
===============

This module contains the Anderson mixing algorithm for the atomic charges.
"""

from __future__ import annotations

import torch
from tad_mctc.math import einsum

from xtbscf._src.typing import Any, Tensor

from .base import Mixer

__all__ = ["Anderson"]


class Anderson(Mixer):
    """
    Accelerated Anderson mixing algorithm.

    Instead of mixing the input and output vectors directly together (simple
    mixing), Anderson mixing uses the optimal linear combination of the input
    and output vectors within the space spanned by the vectors of the
    previous iterations.

    The history has a fixed capacity of ``generations`` entries (including
    the current one). Once full, the oldest entry is dropped. As long as no
    previous entry is available (first step or ``generations=1``), simple
    damped mixing is used. Hence, a damping of one with a single generation
    reduces to a plain replacement of the charges.

    The equations follow Eyert [Eyert]_.

    References
    ----------
    .. [Eyert] Eyert, V. (1996). A Comparative Study on Methods for
       Convergence Acceleration of Iterative Vector Sequences. Journal of
       Computational Physics, 124(2), 271–285.
    """

    generations: int
    """Capacity of the history, including the current step."""

    diagonal_offset: float
    """
    Offset added to the equation system's diagonal to prevent a linear
    dependence of the residuals (0.01).
    """

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        super().__init__(options)
        self.options.setdefault("diagonal_offset", 0.01)

        self.generations = int(self.options["generations"])
        self.diagonal_offset = self.options["diagonal_offset"]

        if self.generations < 1:
            raise ValueError(
                f"Anderson mixing requires at least one generation "
                f"({self.generations} given)."
            )

        # input history and difference history, index 0 is the current step
        self._x_hist: Tensor | None = None
        self._f: Tensor | None = None

    def _setup_hook(self, x_new: Tensor) -> None:
        size = (self.generations, *x_new.shape)
        self._x_hist = x_new.new_zeros(size)
        self._f = x_new.new_zeros(size)

    def iter(self, x_new: Tensor, x_old: Tensor | None = None) -> Tensor:
        """
        Performs the mixing operation & returns the newly mixed system.

        Parameters
        ----------
        x_new : Tensor
            New system.
        x_old : Tensor | None, optional
            Old system. Must be given in the first step, where it is the
            starting guess.

        Returns
        -------
        Tensor
            Newly mixed system.
        """
        if self.iter_step == 0:
            if x_old is None:
                raise RuntimeError(
                    "In the first iteration, the `x_old` argument cannot be "
                    "``None`` as it is the starting guess."
                )
            self._setup_hook(x_new)

        if self._x_hist is None or self._f is None:
            raise RuntimeError("The history of the mixer was not initialized.")

        if x_old is not None:
            self._x_hist[0] = x_old
        x_old = self._x_hist[0]

        self.iter_step += 1

        # Eyert's notation: F = x_new - x_old
        self._f[0] = x_new - x_old
        nprev = min(self.iter_step, self.generations) - 1

        if nprev > 0:
            # Setup and solve the linear equation system, eq. 4.3 (Eyert):
            #   a(i,j) = <F(l) - F(l-i)|F(l) - F(l-j)>
            #   b(i)   = <F(l) - F(l-i)|F(l)>
            df = self._f[0] - self._f[1 : nprev + 1]
            a = einsum("i...,j...->ij", df, df)
            b = einsum("h...,...->h", df, self._f[0])

            # rescale diagonal to prevent linear dependence, eq. 8.2 (Eyert)
            eye = torch.eye(nprev, device=x_new.device, dtype=x_new.dtype)
            a = a * (1.0 + eye * self.diagonal_offset**2)

            thetas = torch.linalg.solve(a, b.unsqueeze(-1)).squeeze(-1)

            # averaged histories of x and F, eq. 4.1 and 4.2 (Eyert)
            x_bar = x_old + einsum(
                "h,h...->...", thetas, self._x_hist[1 : nprev + 1] - x_old
            )
            f_bar = self._f[0] + einsum("h,h...->...", thetas, -df)

            # eq. 4.4 (Eyert)
            x_mix = x_bar + self.damp * f_bar
        else:
            x_mix = x_old + self.damp * self._f[0]

        self._delta = self._f[0].clone()

        # roll followed by reassignment avoids inplace modification
        self._f = torch.roll(self._f, 1, 0)
        self._x_hist = torch.roll(self._x_hist, 1, 0)
        self._x_hist[0] = x_mix

        return x_mix

    def reset(self) -> None:
        """Reset mixer to its initial state."""
        super().reset()
        self._x_hist = self._f = None
