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
Calculators: Base
=================

Calculator for the extended tight-binding (xTB) models. The calculator owns a
read-only reference to the parametrization and the SCF configuration. The
structure is passed to every single point calculation.

Example
-------
.. code-block:: python

    import torch
    from xtbscf import Calculator, Context, Result, Structure

    numbers = torch.tensor([1, 1])
    positions = torch.tensor([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]])

    with Calculator.gfn2(fermi_etemp=0.0) as calc:
        res = Result()
        status = calc.singlepoint(Structure(numbers, positions), res, Context())

    print(status, res.get("energy"))
"""

from __future__ import annotations

import logging

import torch
from tad_mctc.data import pse

from xtbscf._src.basis import Basis, IndexHelper
from xtbscf._src.components.classicals import (
    Classical,
    Dispersion,
    new_dispersion,
    new_repulsion,
)
from xtbscf._src.components.interactions import InteractionList
from xtbscf._src.components.interactions.coulomb import new_es2, new_es3
from xtbscf._src.constants import labels
from xtbscf._src.integral import overlap
from xtbscf._src.io import Context, OutputHandler
from xtbscf._src.loader.lazy import LazyLoaderParam
from xtbscf._src.mol import Structure
from xtbscf._src.param import GFN1_XTB, GFN2_XTB, IPEA1_XTB, Param
from xtbscf._src.scf import SCFDriver, SCFState, get_guess
from xtbscf._src.typing import Any, TensorLike
from xtbscf._src.typing.exceptions import (
    InternalNumericalFailureError,
    MalformedStructureError,
    XTBSCFError,
)
from xtbscf._src.wavefunction import get_alpha_beta_occupation
from xtbscf._src.xtb import new_hamiltonian

from .config import ConfigSCF
from .result import Result

__all__ = ["Calculator"]


logger = logging.getLogger(__name__)


class Calculator(TensorLike):
    """
    Calculator for the extended tight-binding models (xTB).
    """

    par: Param
    """Representation of an extended tight-binding model (read-only)."""

    opts: ConfigSCF
    """SCF configuration."""

    state: SCFState | None
    """State of the last single point calculation."""

    def __init__(
        self,
        par: Param | LazyLoaderParam,
        *,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Instantiate the Calculator.

        Parameters
        ----------
        par : Param | LazyLoaderParam
            Representation of an extended tight-binding model (full xtb
            parametrization). Built-in parametrizations are loaded on first
            use.
        device : torch.device | None, optional
            Device to store the tensor on. If ``None`` (default), the default
            device is used.
        dtype : torch.dtype | None, optional
            Floating point type of the calculation. Defaults to double
            precision.
        kwargs : Any
            SCF options, see :class:`~xtbscf.config.ConfigSCF`.

        Raises
        ------
        InvalidConfigurationError
            An option has an invalid value.
        """
        super().__init__(device, dtype if dtype is not None else torch.double)

        if isinstance(par, LazyLoaderParam):
            par = par.load()
        if not isinstance(par, Param):
            raise TypeError(
                f"Expected parametrization of type 'Param', but got "
                f"'{type(par).__name__}'."
            )

        self.par = par
        self.opts = ConfigSCF(**kwargs, dtype=self.dtype)
        self.state = None

    @classmethod
    def gfn1(cls, **kwargs: Any) -> Calculator:
        """Calculator with the built-in GFN1-xTB parametrization."""
        return cls(GFN1_XTB, **kwargs)

    @classmethod
    def gfn2(cls, **kwargs: Any) -> Calculator:
        """Calculator with the built-in GFN2-xTB parametrization."""
        return cls(GFN2_XTB, **kwargs)

    @classmethod
    def ipea1(cls, **kwargs: Any) -> Calculator:
        """Calculator with the built-in IPEA1-xTB parametrization."""
        return cls(IPEA1_XTB, **kwargs)

    # context manager

    def __enter__(self) -> Calculator:
        return self

    def __exit__(self, *_: Any) -> None:
        self.state = None

    # knobs

    @property
    def accuracy(self) -> float:
        """Numerical accuracy. Smaller values give tighter thresholds."""
        return self.opts.accuracy

    @accuracy.setter
    def accuracy(self, value: float) -> None:
        self.opts.accuracy = value

    @property
    def max_iterations(self) -> int:
        """Maximum number of SCF iterations."""
        return self.opts.maxiter

    @max_iterations.setter
    def max_iterations(self, value: int) -> None:
        self.opts.maxiter = value

    @property
    def mixer_damping(self) -> float:
        """Damping factor of the charge mixer."""
        return self.opts.damp

    @mixer_damping.setter
    def mixer_damping(self, value: float) -> None:
        self.opts.damp = value

    @property
    def electronic_temperature(self) -> float:
        """Electronic temperature in Hartree."""
        return self.opts.fermi.kt

    @electronic_temperature.setter
    def electronic_temperature(self, value: float) -> None:
        self.opts.fermi.kt = value

    @property
    def iterations(self) -> int:
        """Number of SCF iterations of the last single point calculation."""
        return 0 if self.state is None else self.state.iteration

    # calculation

    def check_structure(self, structure: Structure) -> None:
        """
        Check that the structure can be described by the parametrization.

        Parameters
        ----------
        structure : Structure
            Molecular structure.

        Raises
        ------
        MalformedStructureError
            No atoms or elements without parameters.
        """
        if structure.nat == 0:
            raise MalformedStructureError("Structure does not contain any atoms.")

        missing = self.par.missing_elements(structure.numbers.tolist())
        if len(missing) > 0:
            symbols = ", ".join(pse.Z2S.get(z, str(z)) for z in missing)
            raise MalformedStructureError(
                f"No parameters for element(s) {symbols} in the "
                f"parametrization '{self.method_name}'."
            )

    def singlepoint(
        self, structure: Structure, result: Result, ctx: Context | None = None
    ) -> str:
        """
        Entry point for performing single point calculations.

        Parameters
        ----------
        structure : Structure
            Molecular structure (read only).
        result : Result
            Container receiving the properties. Nothing is written if the
            calculation fails.
        ctx : Context | None, optional
            Diagnostic channel. If ``None``, a fresh context is used.

        Returns
        -------
        str
            Status of the calculation, i.e., ``"success"``,
            ``"not_converged"`` or ``"failed"``.

        Raises
        ------
        XTBSCFError
            Only if ``ctx.raise_errors`` is set.
        """
        ctx = ctx if ctx is not None else Context()
        self.state = None

        with ctx.scope():
            try:
                props = self._singlepoint(structure, ctx)
            except XTBSCFError as e:
                ctx.error(e)
                if ctx.raise_errors:
                    raise
                return labels.STATUS_MAP[labels.STATUS_FAILED]

            for key in props:
                if key in result:
                    raise KeyError(f"Property '{key}' was already written.")
            for key, value in props.items():
                result.set(key, value)

        if props[labels.KEY_CONVERGED]:
            return labels.STATUS_MAP[labels.STATUS_SUCCESS]
        return labels.STATUS_MAP[labels.STATUS_NOT_CONVERGED]

    def _singlepoint(self, structure: Structure, ctx: Context) -> dict[str, Any]:
        self.check_structure(structure)

        dd = self.dd
        numbers = structure.numbers.to(self.device)
        positions = structure.positions.to(**dd)
        charge = structure.charge.to(**dd)

        ctx.message(
            f"Singlepoint with {self.method_name} ({structure.nat} atoms, "
            f"charge {float(charge):g}).",
            v=3,
        )

        ihelp = IndexHelper.from_numbers(numbers, self.par)

        #############
        # INTEGRALS #
        #############

        OutputHandler.write_stdout(" - Overlap           ... ", v=4, newline=False)
        basis = Basis(numbers, self.par, ihelp, **dd)
        ovlp = overlap(positions, basis, ihelp)
        OutputHandler.write_stdout("done", v=4)

        OutputHandler.write_stdout(" - Core Hamiltonian  ... ", v=4, newline=False)
        h0 = new_hamiltonian(numbers, self.par, ihelp, **dd)
        hcore = h0.build(positions, ovlp)
        OutputHandler.write_stdout("done", v=4)

        # electrons from reference occupation
        n0 = ihelp.reduce_shell_to_atom(h0.get_occupation())
        nel = get_alpha_beta_occupation(n0.sum(-1) - charge, structure.uhf)
        logger.debug("Alpha/beta electrons: %s", nel.tolist())
        if (nel > ihelp.nao).any():
            raise MalformedStructureError(
                f"Number of electrons per spin channel ({nel.tolist()}) exceeds "
                f"the number of orbitals ({ihelp.nao})."
            )

        ##############
        # COMPONENTS #
        ##############

        interactions = InteractionList(
            new_es2(numbers, self.par, **dd),
            new_es3(numbers, self.par, **dd),
        )
        cache = interactions.get_cache(numbers, positions, ihelp)

        classicals: list[Classical] = [
            c
            for c in (
                new_repulsion(numbers, self.par, **dd),
                new_dispersion(numbers, self.par, charge=charge, **dd),
            )
            if c is not None
        ]

        #######
        # SCF #
        #######

        guess = get_guess(numbers, positions, charge, self.opts.guess)
        driver = SCFDriver(
            self.opts, interactions, cache, ovlp, hcore, ihelp, n0, nel, ctx=ctx
        )
        try:
            state = driver.run(guess)
        finally:
            self.state = driver.state

        assert state.density is not None and state.energy is not None
        assert state.occupation is not None and state.free_energy is not None

        energies = driver.get_energy_as_dict(state.charges, state.density)

        ##############
        # CLASSICALS #
        ##############

        erep = torch.zeros_like(n0)
        edisp = torch.zeros_like(n0)
        for c in classicals:
            ecl = c.get_energy(positions, c.get_cache(numbers, ihelp))
            energies[c.label] = ecl

            if isinstance(c, Dispersion):
                edisp = edisp + ecl
            else:
                erep = erep + ecl

        eel = state.energy
        etot = eel + erep.sum(-1) + edisp.sum(-1)
        if not torch.isfinite(etot):
            raise InternalNumericalFailureError(
                f"Non-finite total energy ({float(etot)}) from the classical "
                "contributions."
            )

        ctx.message(
            f"Total energy: {float(etot):.12f} Eh "
            f"({labels.SCF_STATE_MAP[state.status]} after "
            f"{state.iteration} iterations).",
            v=3,
        )

        return {
            labels.KEY_ENERGY: etot,
            labels.KEY_ENERGIES: energies,
            labels.KEY_ELECTRONIC: eel,
            labels.KEY_REPULSION: erep.sum(-1),
            labels.KEY_DISPERSION: edisp.sum(-1),
            labels.KEY_FREE_ENERGY: etot + state.free_energy,
            labels.KEY_EMO: state.emo,
            labels.KEY_OCCUPATION: state.occupation.sum(-2),
            labels.KEY_COEFFICIENTS: state.coefficients,
            labels.KEY_DENSITY: state.density,
            labels.KEY_CHARGES: state.charges,
            labels.KEY_POPULATIONS: n0 - state.charges,
            labels.KEY_CONVERGED: state.converged,
            labels.KEY_ITERATIONS: state.iteration,
            labels.KEY_RESIDUAL: state.residual,
        }

    # introspection

    @property
    def method_name(self) -> str:
        """Name of the parametrization."""
        if self.par.meta is not None and self.par.meta.name is not None:
            return self.par.meta.name
        return "custom"

    def info(self) -> dict[str, Any]:
        """
        Return a dictionary with the setup of the calculator.

        Returns
        -------
        dict[str, Any]
            Method, elements and SCF configuration.
        """
        return {
            "Method": self.method_name,
            "Elements": ", ".join(self.par.element.keys()),
            "Device": str(self.device),
            "Data Type": str(self.dtype),
            **self.opts.info(),
        }

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}(method={self.method_name}, "
            f"accuracy={self.accuracy}, maxiter={self.max_iterations}, "
            f"damp={self.mixer_damping}, kt={self.electronic_temperature:.3e})"
        )

    def __repr__(self) -> str:
        return str(self)
