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
SCF: State
==========

Mutable state of the self-consistent field iterations. A fresh state is
created for every single point calculation and never shared between
calculations.
"""

from __future__ import annotations

from xtbscf._src.constants import labels
from xtbscf._src.typing import Tensor

__all__ = ["SCFState"]


class SCFState:
    """
    Iteration state of the SCF.

    The state starts as ``Initialized`` and moves to ``Iterating`` with the
    first iteration. The terminal states are ``Converged``,
    ``MaxIterationsReached`` and ``Failed``.
    """

    charges: Tensor
    """
    Atomic charges. Before convergence, these are the (mixed) input charges of
    the next iteration. After convergence, they are the output charges of the
    last iteration.
    """

    density: Tensor | None
    """Total density matrix of the last iteration."""

    coefficients: Tensor | None
    """Orbital coefficients of the last iteration."""

    emo: Tensor | None
    """Orbital energies of the last iteration."""

    occupation: Tensor | None
    """Alpha and beta occupations of the last iteration (shape: ``(2, nao)``)."""

    hamiltonian: Tensor | None
    """Hamiltonian matrix of the last iteration."""

    energy: Tensor | None
    """Electronic energy of the last iteration (or the guess energy)."""

    free_energy: Tensor | None
    """Electronic free energy (-TS) of the last iteration."""

    residual: Tensor | None
    """Norm of the difference between output and input charges."""

    __slots__ = [
        "charges",
        "density",
        "coefficients",
        "emo",
        "occupation",
        "hamiltonian",
        "energy",
        "free_energy",
        "residual",
        "_iteration",
        "_status",
    ]

    def __init__(self, charges: Tensor) -> None:
        self.charges = charges
        self.density = None
        self.coefficients = None
        self.emo = None
        self.occupation = None
        self.hamiltonian = None
        self.energy = None
        self.free_energy = None
        self.residual = None

        self._iteration = 0
        self._status = labels.SCF_STATE_INITIALIZED

    @property
    def iteration(self) -> int:
        """Number of completed iterations. Never decreases."""
        return self._iteration

    def increment(self) -> int:
        """
        Increment the iteration counter.

        Returns
        -------
        int
            New value of the counter.
        """
        self._iteration += 1
        return self._iteration

    @property
    def status(self) -> int:
        """Integer label of the state (see :mod:`labels`)."""
        return self._status

    @status.setter
    def status(self, value: int) -> None:
        if self.terminal:
            raise RuntimeError(
                f"SCF state already terminated as "
                f"'{labels.SCF_STATE_MAP[self._status]}'."
            )
        if value not in range(len(labels.SCF_STATE_MAP)):
            raise ValueError(f"Unknown SCF state '{value}'.")
        self._status = value

    @property
    def terminal(self) -> bool:
        """Whether the state has reached a terminal state."""
        return self._status in (
            labels.SCF_STATE_CONVERGED,
            labels.SCF_STATE_MAXITER,
            labels.SCF_STATE_FAILED,
        )

    @property
    def converged(self) -> bool:
        """Whether the SCF met the convergence criteria."""
        return self._status == labels.SCF_STATE_CONVERGED

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"status={labels.SCF_STATE_MAP[self._status]}, "
            f"iteration={self._iteration}, "
            f"energy={None if self.energy is None else float(self.energy)}, "
            f"residual={None if self.residual is None else float(self.residual)})"
        )

    def __repr__(self) -> str:
        return str(self)
