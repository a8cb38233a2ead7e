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
Molecule: Structure
===================

Representation of a molecular structure: atomic numbers, Cartesian
coordinates (in Bohr), the total charge and the number of unpaired
electrons. A structure is immutable after construction, i.e., it can safely
be shared between calculations.

Example
-------
>>> import torch
>>> from xtbscf import Structure
>>> numbers = torch.tensor([1, 1])
>>> positions = torch.tensor([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]])
>>> mol = Structure(numbers, positions)
>>> mol.nat
2
"""

from __future__ import annotations

import torch
from tad_mctc.io import read

from xtbscf._src.typing import Any, PathLike, Tensor, TensorLike
from xtbscf._src.typing.exceptions import MalformedStructureError

__all__ = ["Structure"]


class Structure(TensorLike):
    """
    Molecular structure with total charge and spin.
    """

    __slots__ = ["_numbers", "_positions", "_charge", "_uhf", "_frozen"]

    def __init__(
        self,
        numbers: Tensor | list[int],
        positions: Tensor | list[list[float]],
        charge: float | int | Tensor = 0,
        uhf: int | None = None,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        if isinstance(positions, Tensor):
            device = positions.device if device is None else device
            dtype = positions.dtype if dtype is None else dtype
        super().__init__(device, dtype)

        numbers = torch.as_tensor(numbers, dtype=torch.long, device=self.device)
        positions = torch.as_tensor(positions, **self.dd)

        if numbers.ndim != 1:
            raise MalformedStructureError(
                f"Atomic numbers must be a 1D tensor (shape: {numbers.shape})."
            )
        if numbers.numel() == 0:
            positions = positions.reshape(0, 3)
        if positions.shape != (numbers.shape[0], 3):
            raise MalformedStructureError(
                f"Shape of positions ({tuple(positions.shape)}) does not match "
                f"the number of atoms ({numbers.shape[0]})."
            )
        if (numbers < 1).any():
            raise MalformedStructureError("Atomic numbers must be positive.")
        if not torch.isfinite(positions).all():
            raise MalformedStructureError(
                "Positions contain non-finite values (NaN or Inf)."
            )

        if uhf is not None:
            if not isinstance(uhf, int) or uhf < 0:
                raise MalformedStructureError(
                    f"Number of unpaired electrons must be a non-negative "
                    f"integer ({uhf})."
                )

        self._numbers = numbers
        self._positions = positions
        _charge = torch.as_tensor(charge, **self.dd).reshape(())
        if not torch.isfinite(_charge):
            raise MalformedStructureError(f"Total charge must be finite ({charge}).")

        self._charge = _charge
        self._uhf = uhf
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(
                f"'{self.__class__.__name__}' is immutable, cannot set '{name}'."
            )
        super().__setattr__(name, value)

    @classmethod
    def from_file(
        cls,
        filepath: PathLike,
        charge: float | int = 0,
        uhf: int | None = None,
        ftype: str | None = None,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ) -> Structure:
        """
        Read a structure from a coordinate file (xyz, Turbomole coord, ...).

        Parameters
        ----------
        filepath : PathLike
            Path to the coordinate file.
        charge : float | int, optional
            Total charge. Defaults to ``0``.
        uhf : int | None, optional
            Number of unpaired electrons. Defaults to ``None``.
        ftype : str | None, optional
            File type. If ``None``, inferred from the file name.

        Returns
        -------
        Structure
            The structure with coordinates in Bohr.
        """
        dd = {"device": device, "dtype": dtype if dtype is not None else torch.double}
        numbers, positions = read.read(filepath, ftype=ftype, **dd)
        return cls(numbers, positions, charge=charge, uhf=uhf, **dd)

    @property
    def numbers(self) -> Tensor:
        """Atomic numbers (shape: ``(nat,)``)."""
        return self._numbers

    @property
    def positions(self) -> Tensor:
        """Cartesian coordinates in Bohr (shape: ``(nat, 3)``)."""
        return self._positions

    @property
    def charge(self) -> Tensor:
        """Total charge of the structure."""
        return self._charge

    @property
    def uhf(self) -> int | None:
        """Number of unpaired electrons (``None``: determined automatically)."""
        return self._uhf

    @property
    def nat(self) -> int:
        """Number of atoms."""
        return int(self._numbers.shape[0])

    def __str__(self) -> str:  # pragma: no cover
        return (
            f"{self.__class__.__name__}(nat={self.nat}, "
            f"charge={self.charge.item()}, uhf={self.uhf})"
        )

    def __repr__(self) -> str:  # pragma: no cover
        return str(self)
