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
Parametrization: Base
=====================

Definition of the full parametrization data for the extended tight-binding
methods.

The model can represent a parametrization file produced by the `tblite`_
library, however it only stores the raw data rather than the full
representation, i.e., the transformation to the corresponding atom-resolved
quantities must be carried out separately. All records are frozen, i.e., a
parametrization cannot be changed after it was loaded.

.. _tblite: https://tblite.readthedocs.io
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

import tomli as toml
from pydantic import BaseModel, ConfigDict
from tad_mctc.data import pse

from xtbscf._src.typing import Any, PathLike

from .charge import Charge
from .dispersion import Dispersion
from .element import Element
from .hamiltonian import Hamiltonian
from .meta import Meta
from .repulsion import Repulsion
from .thirdorder import ThirdOrder

__all__ = ["Param"]


class Param(BaseModel):
    """
    Complete self-contained representation of an extended tight-binding model.

    The parametrization of a calculator with the model data must account for
    missing transformations, like extracting the principal quantum numbers from
    the shells. The respective checks are therefore deferred to the
    single point calculation, where the elements of the structure are known.
    """

    model_config = ConfigDict(frozen=True)

    meta: Optional[Meta] = None
    """Descriptive data on the model."""

    element: Dict[str, Element]
    """Element specific parameter records."""

    hamiltonian: Optional[Hamiltonian] = None
    """Definition of the Hamiltonian, always required."""

    repulsion: Optional[Repulsion] = None
    """Definition of the repulsion contribution."""

    dispersion: Optional[Dispersion] = None
    """Definition of the dispersion correction."""

    charge: Optional[Charge] = None
    """Definition of the isotropic second-order charge interactions."""

    thirdorder: Optional[ThirdOrder] = None
    """Definition of the isotropic third-order charge interactions."""

    def clean_model_dump(self) -> dict[str, Any]:
        """
        Clean the model from any `None` values.
        """
        return self.model_dump(exclude_none=True)

    def missing_elements(self, numbers: list[int]) -> list[int]:
        """
        Atomic numbers without an element record in this parametrization.

        Parameters
        ----------
        numbers : list[int]
            Atomic numbers to check.

        Returns
        -------
        list[int]
            Sorted unique atomic numbers without parameters.
        """
        missing = set()
        for number in numbers:
            if pse.Z2S.get(int(number), "X") not in self.element:
                missing.add(int(number))
        return sorted(missing)

    @classmethod
    def from_file(cls, filepath: PathLike) -> Param:
        """
        Load a parametrization from a file. The file format is determined by the
        file extension. Supported formats are JSON and TOML.

        Parameters
        ----------
        filepath : PathLike
            The file path to the parametrization file.

        Returns
        -------
        Param
            The loaded parametrization data.

        Raises
        ------
        ValueError
            If the file format is not supported.
        """
        filepath = Path(filepath)
        if filepath.suffix == ".json":
            return cls.from_json_file(filepath)
        if filepath.suffix == ".toml":
            return cls.from_toml_file(filepath)

        raise ValueError(f"Unsupported file format: {filepath.suffix}")

    @classmethod
    def from_json_file(cls, filepath: PathLike) -> Param:
        with open(filepath, encoding="utf-8") as fd:
            return cls(**json.load(fd))

    def to_json_file(self, filepath: PathLike, **kwargs) -> None:
        with open(filepath, "w", encoding="utf-8") as fd:
            json.dump(self.clean_model_dump(), fd, **kwargs)

    @classmethod
    def from_toml_file(cls, filepath: PathLike) -> Param:
        with open(filepath, "rb") as fd:
            return cls(**toml.load(fd))

    @classmethod
    def from_toml(cls, data: str) -> Param:
        """
        Load a parametrization from a TOML string.

        Parameters
        ----------
        data : str
            Content of a TOML parametrization file.

        Returns
        -------
        Param
            The loaded parametrization data.
        """
        return cls(**toml.loads(data))
