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
Simple Mixing
=============
"""

from __future__ import annotations

from xtbscf._src.typing import Any, Tensor

from .base import Mixer

__all__ = ["Simple"]


class Simple(Mixer):
    r"""
    Simple linear mixer mixing algorithm.

    Iteratively mixes pairs of systems via a damped linear combination:

    .. math::

        x_{mix} = x_{old} + f (x_{new} - x_{old})

    Where :math:`x_{new}`/:math:`x_{old}` are the output/input systems of an
    iteration & :math:`f` is the damping factor. A damping of one replaces
    the old system with the new one. The mixer keeps no history besides the
    last mixed system.

    Examples
    --------
    The attractive fixed point of the function

    >>> import torch
    >>>
    >>> def func(x: torch.Tensor) -> torch.Tensor:
    >>>     return torch.tensor(
    >>>         [0.5 * torch.sqrt(x[0] + x[1]), 1.5 * x[0] + 0.5 * x[1]]
    >>>     )

    can be identified using the ``Simple`` mixer as follows:

    >>> from xtbscf._src.scf.mixer import Simple
    >>>
    >>> x = torch.tensor([2., 2.])  # Initial guess
    >>> mixer = Simple({"damp": 0.3})
    >>> for i in range(200):
    >>>     x = mixer.iter(func(x), x)
    >>> print(x)
    >>> # tensor([1., 3.])
    """

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        super().__init__(options)

        # Holds the mixed system of the previous iteration.
        self._x_old: Tensor | None = None

    def iter(self, x_new: Tensor, x_old: Tensor | None = None) -> Tensor:
        self.iter_step += 1

        # Use the previous mixed value if none was specified
        x_old = self._x_old if x_old is None else x_old
        if x_old is None:
            raise RuntimeError(
                "In the first iteration, the `x_old` argument cannot be "
                "``None`` as it is the starting guess."
            )

        if x_new.shape != x_old.shape:
            raise RuntimeError(
                f"Shape mismatch encountered - x_new {x_new.shape}, "
                f"x_old {x_old.shape}."
            )

        self._delta = x_new - x_old
        x_mix = x_old + self._delta * self.damp

        self._x_old = x_mix
        return x_mix

    def reset(self) -> None:
        super().reset()
        self._x_old = None
