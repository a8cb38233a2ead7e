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
Calculators: Result
===================

Write-once result container of a single point calculation. Each property can
be set exactly once. Reading a property that was never written raises a
:class:`KeyError`, just like writing a property twice.

Example
-------
>>> import torch
>>> from xtbscf import Result
>>> res = Result()
>>> res.set("energy", torch.tensor(-1.0))
>>> "energy" in res
True
>>> res.set("energy", torch.tensor(-2.0))
Traceback (most recent call last):
    ...
KeyError: "Property 'energy' was already written."
"""

from __future__ import annotations

from xtbscf._src.constants import labels
from xtbscf._src.io import OutputHandler
from xtbscf._src.typing import Any, Tensor

__all__ = ["Result"]


class Result:
    """
    Result container for single point calculation.
    """

    __slots__ = ["_data"]

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """
        Write a property.

        Parameters
        ----------
        key : str
            Name of the property.
        value : Any
            Value of the property.

        Raises
        ------
        KeyError
            Property was already written.
        """
        if key in self._data:
            raise KeyError(f"Property '{key}' was already written.")
        self._data[key] = value

    def get(self, key: str) -> Any:
        """
        Read a property.

        Parameters
        ----------
        key : str
            Name of the property.

        Returns
        -------
        Any
            Value of the property.

        Raises
        ------
        KeyError
            Property was never written.
        """
        if key not in self._data:
            raise KeyError(
                f"Property '{key}' not available. Written properties: "
                f"{', '.join(self._data) or 'none'}."
            )
        return self._data[key]

    def keys(self) -> list[str]:
        """Names of all written properties in order of writing."""
        return list(self._data.keys())

    def clear(self) -> None:
        """Remove all properties, allowing the container to be reused."""
        self._data = {}

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.keys()})"

    def __repr__(self) -> str:
        return str(self)

    def get_energies(self) -> dict[str, float]:
        """
        Collect the written energies as floats.

        Returns
        -------
        dict[str, float]
            Energies in Hartree by contribution.
        """
        energies = {}

        if labels.KEY_ENERGIES in self._data:
            for name, value in self._data[labels.KEY_ENERGIES].items():
                energies[name] = float(value.sum())

        for key in (
            labels.KEY_ELECTRONIC,
            labels.KEY_REPULSION,
            labels.KEY_DISPERSION,
            labels.KEY_ENERGY,
            labels.KEY_FREE_ENERGY,
        ):
            if key in self._data:
                value = self._data[key]
                energies[key] = float(value.sum() if isinstance(value, Tensor) else value)

        return energies

    def print_energies(self, v: int = 4) -> None:  # pragma: no cover
        """Print the energies through the output handler."""
        OutputHandler.write_info("Energies (Eh)", self.get_energies(), v=v)
