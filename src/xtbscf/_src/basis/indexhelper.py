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
Basis: IndexHelper
==================

Index helper utility to create index maps between atomic, shell-resolved, and
orbital resolved representations of quantities.

Example
-------

.. code-block:: python

    import torch
    from xtbscf._src.basis import IndexHelper

    numbers = torch.tensor([6, 1, 1, 1, 1])
    angular = {1: [0], 6: [0, 1]}

    ihelp = IndexHelper.from_numbers_angular(numbers, angular)
    print(ihelp.nao)  # 8
"""

from __future__ import annotations

import torch

from xtbscf._src.typing import Tensor, TensorLike, override

from ..param import Param, get_elem_angular

__all__ = ["IndexHelper"]


def _fill(index: Tensor, repeat: Tensor) -> Tensor:
    """
    Fill an index map using index offsets and number of repeats
    """
    return torch.repeat_interleave(
        torch.arange(index.shape[-1], device=index.device), repeat
    )


class IndexHelper(TensorLike):
    """
    Index helper for the basis set of a single structure.
    """

    angular: Tensor
    """Angular momenta for all shells"""

    shells_per_atom: Tensor
    """Number of shells for each atom"""

    shell_index: Tensor
    """Offset index for starting the next atom block"""

    shells_to_atom: Tensor
    """Mapping of shells to atoms"""

    orbitals_per_shell: Tensor
    """Number of orbitals for each shell"""

    orbital_index: Tensor
    """Offset index for starting the next shell block"""

    orbitals_to_shell: Tensor
    """Mapping of orbitals to shells"""

    __slots__ = [
        "angular",
        "shells_per_atom",
        "shell_index",
        "shells_to_atom",
        "orbitals_per_shell",
        "orbital_index",
        "orbitals_to_shell",
    ]

    def __init__(
        self,
        angular: Tensor,
        shells_per_atom: Tensor,
        shell_index: Tensor,
        shells_to_atom: Tensor,
        orbitals_per_shell: Tensor,
        orbital_index: Tensor,
        orbitals_to_shell: Tensor,
        device: torch.device | None = None,
    ) -> None:
        super().__init__(device, torch.long)

        self.angular = angular
        self.shells_per_atom = shells_per_atom
        self.shell_index = shell_index
        self.shells_to_atom = shells_to_atom
        self.orbitals_per_shell = orbitals_per_shell
        self.orbital_index = orbital_index
        self.orbitals_to_shell = orbitals_to_shell

    @classmethod
    def from_numbers(cls, numbers: Tensor, par: Param) -> IndexHelper:
        """
        Construct an index helper instance from atomic numbers and a
        parametrization.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        par : Param
            Representation of an extended tight-binding model.

        Returns
        -------
        IndexHelper
            Instance of index helper for given basis set.
        """
        angular = get_elem_angular(par.element)
        return cls.from_numbers_angular(numbers, angular)

    @classmethod
    def from_numbers_angular(
        cls, numbers: Tensor, angular: dict[int, list[int]]
    ) -> IndexHelper:
        """
        Construct an index helper instance from atomic numbers and their
        angular momenta.

        The look up requires native for-loops and is therefore carried out
        on the CPU. Only the resulting tensors are moved to the device of
        ``numbers``.

        Parameters
        ----------
        numbers : Tensor
            Atomic numbers for all atoms in the system (shape: ``(nat,)``).
        angular : dict[int, list[int]]
            Map between atomic numbers and angular momenta of all shells.
            Elements without entry are assigned a single s-shell.

        Returns
        -------
        IndexHelper
            Instance of index helper for given basis set.
        """
        device = numbers.device
        cpu = torch.device("cpu")

        lsh = torch.tensor(
            [l for number in numbers.tolist() for l in angular.get(number, [0])],
            dtype=torch.long,
            device=cpu,
        )
        shells_per_atom = torch.tensor(
            [len(angular.get(number, [0])) for number in numbers.tolist()],
            dtype=torch.long,
            device=cpu,
        )
        shell_index = torch.cumsum(shells_per_atom, -1) - shells_per_atom
        shells_to_atom = _fill(shell_index, shells_per_atom)

        orbitals_per_shell = 2 * lsh + 1
        orbital_index = torch.cumsum(orbitals_per_shell, -1) - orbitals_per_shell
        orbitals_to_shell = _fill(orbital_index, orbitals_per_shell)

        return cls(
            angular=lsh.to(device),
            shells_per_atom=shells_per_atom.to(device),
            shell_index=shell_index.to(device),
            shells_to_atom=shells_to_atom.to(device),
            orbitals_per_shell=orbitals_per_shell.to(device),
            orbital_index=orbital_index.to(device),
            orbitals_to_shell=orbitals_to_shell.to(device),
            device=device,
        )

    # reduction (scatter)

    def _reduce(self, x: Tensor, dim: int | tuple[int, int], index: Tensor, size: int):
        if isinstance(dim, int):
            dim = (dim,)

        for d in dim:
            shape = list(x.shape)
            shape[d] = size
            x = torch.zeros(shape, device=x.device, dtype=x.dtype).index_add(
                d, index, x
            )
        return x

    def reduce_orbital_to_shell(
        self, x: Tensor, dim: int | tuple[int, int] = -1
    ) -> Tensor:
        """
        Reduce orbital-resolved tensor to shell-resolved tensor.

        Parameters
        ----------
        x : Tensor
            Orbital-resolved tensor.
        dim : int | (int, int)
            Dimension(s) to reduce over, defaults to -1.

        Returns
        -------
        Tensor
            Shell-resolved tensor.
        """
        return self._reduce(x, dim, self.orbitals_to_shell, self.nsh)

    def reduce_shell_to_atom(
        self, x: Tensor, dim: int | tuple[int, int] = -1
    ) -> Tensor:
        """
        Reduce shell-resolved tensor to atom-resolved tensor.

        Parameters
        ----------
        x : Tensor
            Shell-resolved tensor.
        dim : int | (int, int)
            Dimension(s) to reduce over, defaults to -1.

        Returns
        -------
        Tensor
            Atom-resolved tensor.
        """
        return self._reduce(x, dim, self.shells_to_atom, self.nat)

    def reduce_orbital_to_atom(
        self, x: Tensor, dim: int | tuple[int, int] = -1
    ) -> Tensor:
        """
        Reduce orbital-resolved tensor to atom-resolved tensor.

        Parameters
        ----------
        x : Tensor
            Orbital-resolved tensor.
        dim : int | (int, int)
            Dimension(s) to reduce over, defaults to -1.

        Returns
        -------
        Tensor
            Atom-resolved tensor.
        """
        return self.reduce_shell_to_atom(
            self.reduce_orbital_to_shell(x, dim=dim), dim=dim
        )

    # spreading (gather)

    def _spread(self, x: Tensor, dim: int | tuple[int, int], index: Tensor):
        if isinstance(dim, int):
            dim = (dim,)

        for d in dim:
            x = torch.index_select(x, d, index)
        return x

    def spread_atom_to_shell(
        self, x: Tensor, dim: int | tuple[int, int] = -1
    ) -> Tensor:
        """
        Spread atom-resolved tensor to shell-resolved tensor.

        Parameters
        ----------
        x : Tensor
            Atom-resolved tensor.
        dim : int | (int, int)
            Dimension(s) to spread over, defaults to -1.

        Returns
        -------
        Tensor
            Shell-resolved tensor.
        """
        return self._spread(x, dim, self.shells_to_atom)

    def spread_shell_to_orbital(
        self, x: Tensor, dim: int | tuple[int, int] = -1
    ) -> Tensor:
        """
        Spread shell-resolved tensor to orbital-resolved tensor.

        Parameters
        ----------
        x : Tensor
            Shell-resolved tensor.
        dim : int | (int, int)
            Dimension(s) to spread over, defaults to -1.

        Returns
        -------
        Tensor
            Orbital-resolved tensor.
        """
        return self._spread(x, dim, self.orbitals_to_shell)

    def spread_atom_to_orbital(
        self, x: Tensor, dim: int | tuple[int, int] = -1
    ) -> Tensor:
        """
        Spread atom-resolved tensor to orbital-resolved tensor.

        Parameters
        ----------
        x : Tensor
            Atom-resolved tensor.
        dim : int | (int, int)
            Dimension(s) to spread over, defaults to -1.

        Returns
        -------
        Tensor
            Orbital-resolved tensor.
        """
        return self._spread(x, dim, self.orbitals_to_atom)

    @property
    def orbitals_to_atom(self) -> Tensor:
        """Mapping of orbitals to atoms"""
        return self.shells_to_atom[self.orbitals_to_shell]

    @property
    def orbitals_per_atom(self) -> Tensor:
        """Number of orbitals for each atom"""
        return self.reduce_shell_to_atom(self.orbitals_per_shell)

    @property
    def nat(self) -> int:
        return int(self.shells_per_atom.shape[-1])

    @property
    def nsh(self) -> int:
        return int(self.shells_per_atom.sum())

    @property
    def nao(self) -> int:
        return int(self.orbitals_per_shell.sum())

    @property
    @override
    def allowed_dtypes(self) -> tuple[torch.dtype, ...]:
        return (torch.int16, torch.int32, torch.int64, torch.long)

    def __str__(self) -> str:
        return (
            f"IndexHelper(\n"
            f"  angular={self.angular},\n"
            f"  shells_per_atom={self.shells_per_atom},\n"
            f"  shell_index={self.shell_index},\n"
            f"  shells_to_atom={self.shells_to_atom},\n"
            f"  orbitals_per_shell={self.orbitals_per_shell},\n"
            f"  orbital_index={self.orbital_index},\n"
            f"  orbitals_to_shell={self.orbitals_to_shell},\n"
            f"  device={self.device}\n"
            ")"
        )

    def __repr__(self) -> str:
        return str(self)
