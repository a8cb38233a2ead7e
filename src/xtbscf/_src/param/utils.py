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
Parametrization: Utility
========================

Contains functions to obtain the parametrization of elements and pairs.
Most functions convert the parametrization dictionary to a tensor.
"""

from __future__ import annotations

import torch
from tad_mctc.data import pse

from xtbscf._src.typing import Tensor, get_default_dtype

from .element import Element

__all__ = [
    "get_pair_param",
    "get_elem_param",
    "get_elem_angular",
    "get_elem_valence",
    "get_elem_pqn",
]


label2angular = {
    "s": 0,
    "p": 1,
    "d": 2,
    "f": 3,
    "g": 4,
}


def get_pair_param(
    symbols: list[str] | list[int],
    par_pair: dict[str, float],
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> Tensor:
    """
    Obtain tensor of a pair-wise parametrized quantity for all pairs.

    Parameters
    ----------
    symbols : list[str | int]
        List of atomic symbols or atomic numbers.
    par_pair : dict[str, float]
        Parametrization of pairs. Missing pairs default to one.
    device : torch.device | None, optional
        Device to store the tensor. If ``None`` (default), the default device is used.
    dtype : torch.dtype | None, optional
        Data type of the tensor. If ``None`` (default), the data type is inferred.

    Returns
    -------
    Tensor
        Parametrization of all pairs of ``symbols``.
    """
    # convert atomic numbers to symbols
    symbols = [pse.Z2S.get(i, "X") if isinstance(i, int) else i for i in symbols]

    if dtype is None:
        dtype = get_default_dtype()

    ndim = len(symbols)
    pair_mat = torch.ones(*(ndim, ndim), dtype=dtype, device=device)
    for i, isp in enumerate(symbols):
        for j, jsp in enumerate(symbols):
            # Watch format! ("element1-element2")
            pair_mat[i, j] = par_pair.get(
                f"{isp}-{jsp}", par_pair.get(f"{jsp}-{isp}", 1.0)
            )

    return pair_mat


def get_elem_param(
    numbers: Tensor,
    par_element: dict[str, Element],
    key: str,
    pad_val: int = -1,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> Tensor:
    """
    Obtain a element-wise parametrized quantity for selected atomic numbers.
    Shell-resolved records are concatenated in the order of the atoms.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par_element : dict[str, Element]
        Parametrization of elements.
    key : str
        Name of the quantity to obtain (e.g. gam3 for Hubbard derivatives).
    pad_val : int, optional
        Value to use for elements without parameters. Default is `-1`.
    device : torch.device | None
        Device to store the tensor. If ``None`` (default), the default device is used.
    dtype : torch.dtype | None
        Data type of the tensor. If ``None`` (default), the data type is inferred.

    Returns
    -------
    Tensor
        Parametrization of selected elements.

    Raises
    ------
    KeyError
        The record does not contain the requested quantity.
    """
    l = []

    for number in numbers:
        el = pse.Z2S.get(int(number.item()), "X")
        if el in par_element:
            p = par_element[el]

            if key not in type(p).model_fields:
                raise KeyError(
                    f"The key '{key}' is not in the element parameterization"
                )

            vals = getattr(p, key)

            # convert to list so that we can use the same function
            # for atom-resolved parameters too
            if isinstance(vals, (float, int)):
                vals = [vals]
        else:
            vals = [pad_val]

        l.extend(vals)

    return torch.tensor(l, device=device, dtype=dtype)


def get_elem_angular(par_element: dict[str, Element]) -> dict[int, list[int]]:
    """
    Obtain angular momenta of the shells of all atoms.

    Parameters
    ----------
    par_element : dict[str, Element]
        Parametrization of elements.

    Returns
    -------
    dict[int, list[int]]
        Angular momenta of all elements.
    """
    return {
        pse.S2Z[sym]: [label2angular[label[-1]] for label in par.shells]
        for sym, par in par_element.items()
    }


def get_elem_valence(
    numbers: Tensor,
    par_element: dict[str, Element],
    device: torch.device | None = None,
) -> Tensor:
    """
    Obtain valence of the shells of all atoms. The first shell of each
    angular momentum is the valence shell, all further shells of the same
    angular momentum are polarization (diffuse) shells.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par_element : dict[str, Element]
        Parametrization of elements.
    device : torch.device | None
        Device to store the tensor. If ``None`` (default), the default device
        is used.

    Returns
    -------
    Tensor
        Boolean valence mask of all shells.

    Raises
    ------
    ValueError
        Unknown angular momentum label.
    """
    l = []

    for number in numbers:
        el = pse.Z2S.get(int(number.item()), "X")
        if el not in par_element:
            l.append(False)
            continue

        seen = set()
        for shell in par_element[el].shells:
            ang = shell[-1]
            if ang not in label2angular:
                raise ValueError(f"Unknown shell type '{ang}'.")

            l.append(label2angular[ang] not in seen)
            seen.add(label2angular[ang])

    return torch.tensor(l, dtype=torch.bool, device=device)


def get_elem_pqn(
    numbers: Tensor,
    par_element: dict[str, Element],
    pad_val: int = -1,
    device: torch.device | None = None,
    dtype: torch.dtype | None = None,
) -> Tensor:
    """
    Obtain principal quantum numbers of the shells of all atoms.

    Parameters
    ----------
    numbers : Tensor
        Atomic numbers for all atoms in the system (shape: ``(nat,)``).
    par_element : dict[str, Element]
        Parametrization of elements.
    pad_val : int, optional
        Value to pad the tensor with. Default is `-1`.
    device : torch.device | None, optional
        Device to store the tensor. If ``None`` (default), the default device
        is used.
    dtype : torch.dtype | None, optional
        Data type of the tensor. If ``None`` (default), the data type is
        inferred.

    Returns
    -------
    Tensor
        Principal quantum numbers of the shells of all atoms.
    """
    shells = []

    for number in numbers:
        el = pse.Z2S.get(int(number.item()), "X")
        if el in par_element:
            for shell in par_element[el].shells:
                shells.append(int(shell[0]))
        else:
            shells.append(pad_val)

    return torch.tensor(shells, device=device, dtype=dtype)
