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
SCF configuration.

All knobs are validated on assignment. Invalid values raise
:class:`InvalidConfigurationError` and are never clamped.
"""

from __future__ import annotations

import math

import torch
from tad_mctc.units.energy import KELVIN2AU

from xtbscf._src.constants import defaults, labels
from xtbscf._src.io import OutputHandler
from xtbscf._src.typing import Any
from xtbscf._src.typing.exceptions import InvalidConfigurationError, ToleranceWarning

__all__ = ["ConfigSCF", "ConfigFermi"]


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _select(value: str | int, choices: dict[int, tuple[str, ...]], name: str) -> int:
    """Convert an option given as string or integer label to its label."""
    valid = tuple(s for strs in choices.values() for s in strs)

    if isinstance(value, str):
        for label, strs in choices.items():
            if value.casefold() in strs:
                return label
    elif _is_int(value):
        if value in choices:
            return value
    else:
        raise InvalidConfigurationError(
            f"The {name} must be of type 'int' or 'str', but "
            f"'{type(value)}' was given."
        )

    raise InvalidConfigurationError(
        f"Unknown {name} '{value}'. Use one of '{', '.join(valid)}'."
    )


class ConfigSCF:
    """
    Configuration for the SCF.

    Guess and mixer are represented as integers. String options are converted
    to integers on assignment.

    The settings for Fermi smearing are stored separately in the
    :class:`ConfigFermi` class, which can be accessed via the :attr:`fermi`
    attribute.
    """

    fermi: ConfigFermi
    """Configuration of the Fermi smearing."""

    force_convergence: bool
    """Raise an error instead of warning if the SCF does not converge."""

    dtype: torch.dtype
    """Data type for calculations."""

    def __init__(
        self,
        *,
        accuracy: float = defaults.ACCURACY,
        guess: str | int = defaults.GUESS,
        maxiter: int = defaults.MAXITER,
        mixer: str | int = defaults.MIXER,
        damp: float = defaults.DAMP,
        generations: int = defaults.GENERATIONS,
        force_convergence: bool = defaults.FORCE_CONVERGENCE,
        # Fermi
        fermi_etemp: float = defaults.FERMI_ETEMP,
        fermi_maxiter: int = defaults.FERMI_MAXITER,
        fermi_thresh: dict | None = None,
        # PyTorch
        dtype: torch.dtype = defaults.TORCH_DTYPE,
    ) -> None:
        self.dtype = dtype

        self.accuracy = accuracy
        self.guess = guess
        self.maxiter = maxiter
        self.mixer = mixer
        self.damp = damp
        self.generations = generations

        if not isinstance(force_convergence, bool):
            raise InvalidConfigurationError(
                "The 'force_convergence' flag must be a boolean."
            )
        self.force_convergence = force_convergence

        self.fermi = ConfigFermi(
            etemp=fermi_etemp,
            maxiter=fermi_maxiter,
            thresh=defaults.FERMI_THRESH if fermi_thresh is None else fermi_thresh,
        )

    # accuracy and thresholds

    @property
    def accuracy(self) -> float:
        """Numerical accuracy. Smaller values give tighter thresholds."""
        return self._accuracy

    @accuracy.setter
    def accuracy(self, value: float) -> None:
        if not _is_real(value) or not math.isfinite(value) or value <= 0.0:
            raise InvalidConfigurationError(
                f"Accuracy must be a positive number ({value!r} given)."
            )
        self._accuracy = float(value)

        eps = torch.finfo(self.dtype).eps
        if self.econv < eps:
            OutputHandler.warn(
                f"Energy threshold ({self.econv:.2E}) is smaller than the "
                f"machine precision of {self.dtype} ({eps:.2E}).",
                ToleranceWarning,
            )

    @property
    def econv(self) -> float:
        """Energy convergence threshold."""
        return defaults.ECONV * self._accuracy

    @property
    def pconv(self) -> float:
        """Charge convergence threshold (residual norm)."""
        return defaults.PCONV * self._accuracy

    # iterations

    @property
    def maxiter(self) -> int:
        """Maximum number of SCF iterations."""
        return self._maxiter

    @maxiter.setter
    def maxiter(self, value: int) -> None:
        if not _is_int(value) or value <= 0:
            raise InvalidConfigurationError(
                f"Maximum number of iterations must be a positive integer "
                f"({value!r} given)."
            )
        self._maxiter = value

    # guess and mixing

    @property
    def guess(self) -> int:
        """Initial guess for the SCF."""
        return self._guess

    @guess.setter
    def guess(self, value: str | int) -> None:
        self._guess = _select(
            value,
            {
                labels.GUESS_EEQ: labels.GUESS_EEQ_STRS,
                labels.GUESS_SAD: labels.GUESS_SAD_STRS,
            },
            "guess method",
        )

    @property
    def mixer(self) -> int:
        """Mixing scheme for SCF iterations."""
        return self._mixer

    @mixer.setter
    def mixer(self, value: str | int) -> None:
        self._mixer = _select(
            value,
            {
                labels.MIXER_SIMPLE: labels.MIXER_SIMPLE_STRS,
                labels.MIXER_ANDERSON: labels.MIXER_ANDERSON_STRS,
            },
            "mixer",
        )

    @property
    def damp(self) -> float:
        """Damping factor of the mixer, within (0, 1]."""
        return self._damp

    @damp.setter
    def damp(self, value: float) -> None:
        if not _is_real(value) or not 0.0 < value <= 1.0:
            raise InvalidConfigurationError(
                f"Damping factor must be within (0, 1] ({value!r} given)."
            )
        self._damp = float(value)

    @property
    def generations(self) -> int:
        """Capacity of the history of the Anderson mixer."""
        return self._generations

    @generations.setter
    def generations(self, value: int) -> None:
        if not _is_int(value) or value < 1:
            raise InvalidConfigurationError(
                f"Number of generations must be a positive integer "
                f"({value!r} given)."
            )
        self._generations = value

    def info(self) -> dict[str, Any]:
        """
        Return a dictionary with the SCF configuration.

        Returns
        -------
        dict[str, Any]
            Dictionary with the SCF configuration.
        """
        return {
            "SCF Options": {
                "Guess Method": labels.GUESS_MAP[self.guess],
                "Accuracy": self.accuracy,
                "Energy Threshold": self.econv,
                "Charge Threshold": self.pconv,
                "Maxiter": self.maxiter,
                "Mixer": labels.MIXER_MAP[self.mixer],
                "Damping Factor": self.damp,
                "Generations": self.generations,
                "Force Convergence": self.force_convergence,
                **self.fermi.info(),
            }
        }

    def __str__(self) -> str:
        config_str = [
            "Configuration for SCF:",
            f"  Guess Method: {labels.GUESS_MAP[self.guess]}",
            f"  Accuracy: {self.accuracy} (econv={self.econv:.1e}, "
            f"pconv={self.pconv:.1e})",
            f"  Maximum Iterations: {self.maxiter}",
            f"  Mixer: {labels.MIXER_MAP[self.mixer]}",
            f"  Damping Factor: {self.damp}",
            f"  Force Convergence: {self.force_convergence}",
            f"  Data Type: {self.dtype}",
            f"  Fermi Configuration: {self.fermi}",
        ]
        return "\n".join(config_str)

    def __repr__(self) -> str:
        return str(self)


class ConfigFermi:
    """
    Configuration for Fermi smearing.

    The electronic temperature can be set in Kelvin (:attr:`etemp`) or as
    thermal energy in Hartree (:attr:`kt`). Both views share the same value.
    """

    thresh: dict
    """Float data type dependent threshold for the Fermi level search."""

    def __init__(
        self,
        *,
        etemp: float = defaults.FERMI_ETEMP,
        maxiter: int = defaults.FERMI_MAXITER,
        thresh: dict = defaults.FERMI_THRESH,
    ) -> None:
        self.etemp = etemp
        self.maxiter = maxiter

        if not isinstance(thresh, dict):
            raise InvalidConfigurationError(
                f"Fermi thresholds must be given per dtype ({thresh!r} given)."
            )
        self.thresh = thresh

    @property
    def kt(self) -> float:
        """Electronic temperature in Hartree."""
        return self._kt

    @kt.setter
    def kt(self, value: float) -> None:
        if not _is_real(value) or not math.isfinite(value) or value < 0.0:
            raise InvalidConfigurationError(
                f"Electronic temperature must be a non-negative number "
                f"({value!r} given)."
            )
        self._kt = float(value)

    @property
    def etemp(self) -> float:
        """Electronic temperature in Kelvin."""
        return self._kt / KELVIN2AU

    @etemp.setter
    def etemp(self, value: float) -> None:
        if not _is_real(value) or not math.isfinite(value) or value < 0.0:
            raise InvalidConfigurationError(
                f"Electronic temperature must be a non-negative number "
                f"({value!r} given)."
            )
        self._kt = float(value) * KELVIN2AU

    @property
    def maxiter(self) -> int:
        """Maximum number of steps in the search for the Fermi level."""
        return self._maxiter

    @maxiter.setter
    def maxiter(self, value: int) -> None:
        if not _is_int(value) or value <= 0:
            raise InvalidConfigurationError(
                f"Maximum number of Fermi iterations must be a positive "
                f"integer ({value!r} given)."
            )
        self._maxiter = value

    def info(self) -> dict[str, dict[str, float | int]]:
        """
        Return a dictionary with the Fermi smearing configuration.

        Returns
        -------
        dict[str, dict[str, float | int]]
            Dictionary with the Fermi smearing configuration.
        """
        return {
            "Fermi Smearing": {
                "Temperature": self.etemp,
                "kT": self.kt,
                "Maxiter": self.maxiter,
            }
        }

    def __str__(self) -> str:
        info = self.info()["Fermi Smearing"]
        info_str = ", ".join(f"{key}={value}" for key, value in info.items())
        return f"{self.__class__.__name__}({info_str})"

    def __repr__(self) -> str:
        return str(self)
