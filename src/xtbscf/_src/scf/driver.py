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
SCF: Driver
===========

The self-consistent field iterations on atomic charges. Each iteration

1. builds the Hamiltonian from the core Hamiltonian and the potential of the
   input charges,
2. solves the generalized eigenvalue problem,
3. occupies the orbitals (aufbau or Fermi smearing),
4. obtains the density and the Mulliken charges,
5. evaluates the energy and
6. mixes input and output charges.

The iterations stop once the change in energy and the residual norm of the
charges fall below the accuracy-dependent thresholds, or once the maximum
number of iterations is exhausted.

Example
-------
The driver is usually set up by the :class:`~xtbscf.Calculator`. Given the
integrals and the interactions, it runs from an initial guess:

.. code-block:: python

    driver = SCFDriver(config, interactions, cache, overlap, hcore, ihelp, n0, nel)
    state = driver.run(guess)
    print(state.energy, state.iteration)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import torch

from xtbscf._src.basis import IndexHelper
from xtbscf._src.components.interactions import (
    InteractionList,
    InteractionListCache,
)
from xtbscf._src.constants import labels
from xtbscf._src.io import Context, OutputHandler
from xtbscf._src.typing import Tensor
from xtbscf._src.typing.exceptions import (
    InternalNumericalFailureError,
    SCFConvergenceError,
    SCFConvergenceWarning,
    XTBSCFError,
)
from xtbscf._src.wavefunction import (
    get_electronic_free_energy,
    get_mulliken_atomic_charges,
    get_occupation,
)

from .eigen import check_overlap, solve
from .mixer import Mixer, new_mixer
from .state import SCFState
from .utils import get_density

if TYPE_CHECKING:
    from xtbscf._src.calculators.config import ConfigSCF

__all__ = [
    "SCFDriver",
    "build_hamiltonian",
    "get_hcore_energy",
]


logger = logging.getLogger(__name__)


def build_hamiltonian(hcore: Tensor, overlap: Tensor, potential: Tensor) -> Tensor:
    """
    Add the charge-dependent potential to the core Hamiltonian.

    .. math::

        H_{\\mu\\nu} = H^0_{\\mu\\nu} - \\frac{1}{2} S_{\\mu\\nu} (v_\\mu + v_\\nu)

    Parameters
    ----------
    hcore : Tensor
        Core Hamiltonian (shape: ``(nao, nao)``).
    overlap : Tensor
        Overlap matrix (shape: ``(nao, nao)``).
    potential : Tensor
        Orbital-resolved potential (shape: ``(nao,)``).

    Returns
    -------
    Tensor
        Hamiltonian matrix.
    """
    vsum = potential.unsqueeze(-1) + potential.unsqueeze(-2)
    return hcore - 0.5 * overlap * vsum


def get_hcore_energy(hcore: Tensor, density: Tensor, ihelp: IndexHelper) -> Tensor:
    """
    Atom-resolved band energy of the core Hamiltonian, i.e., the Mulliken
    partitioning of :math:`\\mathrm{tr}(PH^0)`.

    Parameters
    ----------
    hcore : Tensor
        Core Hamiltonian.
    density : Tensor
        Total density matrix.
    ihelp : IndexHelper
        Index mapping for the basis set.

    Returns
    -------
    Tensor
        Atom-resolved energies (shape: ``(nat,)``).
    """
    return ihelp.reduce_orbital_to_atom((density * hcore).sum(-1))


class SCFDriver:
    """
    Fixed-point iterations of the atomic charges.

    The driver owns the iteration counter, the thresholds and the failure
    policy. Integrals and interactions are computed once by the caller and
    are only read by the driver.
    """

    config: ConfigSCF
    """Configuration of the SCF (thresholds, mixing, smearing)."""

    interactions: InteractionList
    """Charge-dependent interactions (second and third order)."""

    cache: InteractionListCache
    """Restart data of the interactions."""

    overlap: Tensor
    """Overlap matrix."""

    hcore: Tensor
    """Core Hamiltonian."""

    ihelp: IndexHelper
    """Index mapping for the basis set."""

    n0: Tensor
    """Atom-resolved reference occupation."""

    nel: Tensor
    """Number of alpha and beta electrons."""

    mixer: Mixer
    """Charge mixer, reset at the start of every run."""

    ctx: Context | None
    """Diagnostic channel."""

    state: SCFState | None
    """State of the current (or last) run."""

    def __init__(
        self,
        config: ConfigSCF,
        interactions: InteractionList,
        cache: InteractionListCache,
        overlap: Tensor,
        hcore: Tensor,
        ihelp: IndexHelper,
        n0: Tensor,
        nel: Tensor,
        ctx: Context | None = None,
    ) -> None:
        self.config = config
        self.interactions = interactions
        self.cache = cache
        self.overlap = overlap
        self.hcore = hcore
        self.ihelp = ihelp
        self.n0 = n0
        self.nel = nel
        self.ctx = ctx
        self.state = None

        # fixed for the whole run
        self.damp = config.damp
        self.mixer = new_mixer(
            config.mixer, damp=self.damp, generations=config.generations
        )

        self.kt = (
            None
            if config.fermi.kt == 0.0
            else torch.tensor(config.fermi.kt, device=hcore.device, dtype=hcore.dtype)
        )

    def get_hamiltonian(self, charges: Tensor) -> Tensor:
        """
        Hamiltonian for the given atomic charges.

        Parameters
        ----------
        charges : Tensor
            Atomic charges.

        Returns
        -------
        Tensor
            Hamiltonian matrix.
        """
        potential = self.interactions.get_potential(charges, self.cache)
        return build_hamiltonian(
            self.hcore, self.overlap, self.ihelp.spread_atom_to_orbital(potential)
        )

    def get_energy(self, charges: Tensor, density: Tensor) -> Tensor:
        """
        Electronic energy (band energy and charge-dependent interactions).

        Parameters
        ----------
        charges : Tensor
            Atomic charges.
        density : Tensor
            Total density matrix.

        Returns
        -------
        Tensor
            Electronic energy.
        """
        ehcore = get_hcore_energy(self.hcore, density, self.ihelp)
        eint = self.interactions.get_energy(charges, self.cache)
        return (ehcore + eint).sum(-1)

    def get_energy_as_dict(
        self, charges: Tensor, density: Tensor
    ) -> dict[str, Tensor]:
        """Atom-resolved energies of all electronic contributions."""
        return {
            "hcore": get_hcore_energy(self.hcore, density, self.ihelp),
            **self.interactions.get_energy_as_dict(charges, self.cache),
        }

    def step(self, state: SCFState) -> tuple[Tensor, Tensor]:
        """
        Perform a single iteration on the input charges of the state.

        The state receives the orbitals, occupation, density and energy of
        this iteration. The charges of the state are not modified.

        Parameters
        ----------
        state : SCFState
            Current state with the input charges.

        Returns
        -------
        tuple[Tensor, Tensor]
            Output (Mulliken) charges and electronic energy of this iteration.

        Raises
        ------
        InternalNumericalFailureError
            Hamiltonian, energy or charges are not finite.
        """
        hamiltonian = self.get_hamiltonian(state.charges)
        if not torch.isfinite(hamiltonian).all():
            raise InternalNumericalFailureError(
                f"Non-finite Hamiltonian encountered in iteration "
                f"{state.iteration + 1}."
            )

        emo, coeffs = solve(hamiltonian, self.overlap)

        occ = get_occupation(
            self.nel,
            emo,
            kt=self.kt,
            thr=self.config.fermi.thresh,
            maxiter=self.config.fermi.maxiter,
            accuracy=self.config.accuracy,
        )
        density = get_density(coeffs, occ.sum(-2))
        charges = get_mulliken_atomic_charges(
            self.overlap, density, self.ihelp, self.n0
        )

        # energy of the guess charges with the first density
        if state.energy is None:
            state.energy = self.get_energy(state.charges, density)

        energy = self.get_energy(charges, density)

        if not torch.isfinite(energy) or not torch.isfinite(charges).all():
            raise InternalNumericalFailureError(
                f"Non-finite energy ({float(energy)}) or charges encountered "
                f"in iteration {state.iteration + 1}."
            )

        state.hamiltonian = hamiltonian
        state.emo = emo
        state.coefficients = coeffs
        state.occupation = occ
        state.density = density
        state.free_energy = get_electronic_free_energy(occ, self.kt)

        return charges, energy

    def run(self, guess: Tensor) -> SCFState:
        """
        Run the SCF iterations until a terminal state is reached.

        Parameters
        ----------
        guess : Tensor
            Initial atomic charges.

        Returns
        -------
        SCFState
            Final state (``Converged`` or ``MaxIterationsReached``).

        Raises
        ------
        SingularOverlapError
            Overlap matrix is not positive definite.
        OccupationNotConvergedError
            Fermi level search failed.
        InternalNumericalFailureError
            Energy or charges are not finite.
        SCFConvergenceError
            SCF did not converge and convergence was enforced.
        """
        state = self.state = SCFState(guess)
        self.mixer.reset()
        econv, pconv = self.config.econv, self.config.pconv

        try:
            check_overlap(self.overlap)

            OutputHandler.write_stdout(
                f"Starting SCF iterations ({labels.MIXER_MAP[self.config.mixer]} "
                f"mixing, damping {self.damp}).",
                v=3,
            )
            OutputHandler.write_row(
                [
                    f"{'Iter':>4}",
                    f"{'Energy':>20}",
                    f"{'Delta E':>12}",
                    f"{'Delta q':>12}",
                ],
                v=4,
            )

            state.status = labels.SCF_STATE_ITERATING
            while True:
                # energy of the previous iteration (or the guess)
                charges, energy = self.step(state)
                ediff = torch.abs(energy - state.energy)

                it = state.increment()
                state.energy = energy

                mixed, residual = self.mixer.mix(state.charges, charges)
                state.residual = residual

                OutputHandler.write_row(
                    [
                        f"{it:4d}",
                        f"{float(state.energy):20.12f}",
                        f"{float(ediff):12.4e}",
                        f"{float(residual):12.4e}",
                    ],
                    v=4,
                )
                logger.debug(
                    "SCF iteration %d: E=%.12f dE=%.4e dq=%.4e",
                    it,
                    float(state.energy),
                    float(ediff),
                    float(residual),
                )

                if ediff < econv and residual < pconv:
                    state.charges = charges
                    state.status = labels.SCF_STATE_CONVERGED
                    break

                if it >= self.config.maxiter:
                    state.charges = charges
                    state.status = labels.SCF_STATE_MAXITER
                    break

                state.charges = mixed

        except XTBSCFError:
            state.status = labels.SCF_STATE_FAILED
            raise

        if state.converged:
            OutputHandler.write_stdout(
                f"SCF converged in {state.iteration} iterations.", v=3
            )
            return state

        msg = (
            f"SCF not converged in {state.iteration} iterations "
            f"(Delta E={float(ediff):.3e}, Delta q={float(residual):.3e})."
        )
        if self.config.force_convergence:
            raise SCFConvergenceError(msg)

        if self.ctx is not None:
            self.ctx.warn(msg, SCFConvergenceWarning)
        else:
            OutputHandler.warn(msg, SCFConvergenceWarning)

        return state
