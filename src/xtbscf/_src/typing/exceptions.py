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
Exceptions
==========

Custom errors and warnings. All errors raised by a single point calculation
derive from :class:`XTBSCFError`, which allows catching the whole family at
once, while still being instances of the matching built-in exception.
"""

from __future__ import annotations

__all__ = [
    "XTBSCFError",
    "InvalidConfigurationError",
    "MalformedStructureError",
    "SingularOverlapError",
    "OccupationNotConvergedError",
    "InternalNumericalFailureError",
    "SCFConvergenceError",
    "SCFConvergenceWarning",
    "ParameterWarning",
    "ToleranceWarning",
    "CGTOAzimuthalQuantumNumberError",
    "CGTOPrimitivesError",
    "CGTOPrincipalQuantumNumberError",
    "CGTOQuantumNumberError",
    "CGTOSlaterExponentsError",
]


class XTBSCFError(Exception):
    """
    Base class of all errors raised during a single point calculation.
    """

    def __init__(self, msg: str) -> None:
        self.message = msg
        super().__init__(self.message)


class InvalidConfigurationError(XTBSCFError, ValueError):
    """
    A configuration knob (accuracy, iterations, damping, temperature, ...)
    was given an out-of-range value.
    """


class MalformedStructureError(XTBSCFError, ValueError):
    """
    The structure cannot be treated with the given parametrization, e.g.,
    because it contains no atoms or an element without parameters.
    """


class SingularOverlapError(XTBSCFError, RuntimeError):
    """
    The overlap matrix is not positive definite (linear dependent basis).
    """


class OccupationNotConvergedError(XTBSCFError, RuntimeError):
    """
    The search for the Fermi level did not converge.
    """


class InternalNumericalFailureError(XTBSCFError, RuntimeError):
    """
    Non-finite values (NaN/Inf) appeared in the Hamiltonian, the energy or
    the charges.
    """


class SCFConvergenceError(XTBSCFError, RuntimeError):
    """
    The SCF did not converge and convergence was enforced.
    """


class SCFConvergenceWarning(RuntimeWarning):
    """
    Warning for failed SCF convergence.
    """


class ParameterWarning(UserWarning):
    """
    Warning for incomplete or questionable parameters.
    """


class ToleranceWarning(UserWarning):
    """
    Warning for unreasonable tolerances.

    Very small thresholds cannot be reached within the precision of the
    floating point type and the SCF will exhaust all iterations.
    """


# basis set errors


class CGTOAzimuthalQuantumNumberError(ValueError):
    def __init__(self, l: int) -> None:
        s = ["s", "p", "d", "f", "g", "h"][l]
        self.message = f"Maximum azimuthal QN supported is {l} ({s}-orbitals)."
        super().__init__(self.message)


class CGTOPrimitivesError(ValueError):
    def __init__(self, ng: int) -> None:
        self.message = f"Only STO-1G to STO-{ng}G expansions are available."
        super().__init__(self.message)


class CGTOPrincipalQuantumNumberError(ValueError):
    def __init__(self, n: int) -> None:
        self.message = f"Maximum principal QN supported is {n}."
        super().__init__(self.message)


class CGTOQuantumNumberError(ValueError):
    def __init__(self) -> None:
        self.message = (
            "Azimuthal QN 'l' and principal QN 'n' must adhere to "
            "l ∊ [n-1, n-2, ..., 1, 0]."
        )
        super().__init__(self.message)


class CGTOSlaterExponentsError(ValueError):
    def __init__(self) -> None:
        self.message = "Negative Slater exponents not allowed."
        super().__init__(self.message)
