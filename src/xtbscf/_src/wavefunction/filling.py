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
Wavefunction: Filling
=====================

Handle the occupation of the orbitals with electrons. All functions work on a
single structure. Occupations are resolved into an alpha and a beta channel
(shape ``(2, nao)``), each orbital of a channel holding at most one electron.
"""

from __future__ import annotations

import math

import torch

from xtbscf._src.typing import DD, Tensor
from xtbscf._src.typing.exceptions import (
    MalformedStructureError,
    OccupationNotConvergedError,
)

from ..constants import defaults

__all__ = [
    "get_alpha_beta_occupation",
    "get_aufbau_occupation",
    "get_fermi_energy",
    "get_fermi_occupation",
    "get_fermi_threshold",
    "get_electronic_free_energy",
    "get_occupation",
]


def get_alpha_beta_occupation(nel: Tensor, uhf: int | None = None) -> Tensor:
    """
    Generate alpha and beta electrons from total number of electrons.

    Parameters
    ----------
    nel : Tensor
        Total number of electrons.
    uhf : int | None
        Number of unpaired electrons. If ``None``, the spin is figured out
        automatically (singlet or doublet).

    Returns
    -------
    Tensor
        Alpha (index 0) and beta (index 1) electrons.

    Raises
    ------
    MalformedStructureError
        Number of electrons and unpaired electrons does not match.

    Note
    ----
    The number of electrons is rounded to integers via `torch.round` for
    numerical stability, i.e., non-integer electrons are not supported.
    """
    nel = nel.round()

    if (nel < 0).any():
        raise MalformedStructureError(
            f"Number of electrons ({nel}) must not be negative."
        )

    if uhf is not None:
        _uhf = torch.tensor(uhf, device=nel.device, dtype=nel.dtype)

        if (_uhf > nel).any():
            raise MalformedStructureError(
                f"Number of unpaired electrons ({uhf}) larger than "
                f"number of electrons ({int(nel)})."
            )

        # odd/even spin and even/odd number of electrons
        if (torch.remainder(_uhf, 2) != torch.remainder(nel, 2)).any():
            raise MalformedStructureError(
                f"Odd (even) number of unpaired electrons ({uhf}) but even "
                f"(odd) number of electrons ({int(nel)}) given."
            )
    else:
        # figure out via remainder
        _uhf = torch.remainder(nel, 2)

    nb = (nel - _uhf) / 2.0
    na = nb + _uhf

    return torch.stack([na, nb], dim=-1)


def get_aufbau_occupation(
    norb: int,
    nel: Tensor,
    emo: Tensor | None = None,
    degen_thresh: float | None = None,
) -> Tensor:
    """
    Set occupation numbers according to the aufbau principle.

    If orbital energies are given, all orbitals degenerate with the frontier
    orbital (within ``degen_thresh``) share their electrons equally.

    Parameters
    ----------
    norb : int
        Number of available orbitals.
    nel : Tensor
        Number of electrons per channel (shape: ``(2,)``) or a single
        channel (scalar).
    emo : Tensor | None, optional
        Orbital energies in ascending order (shape: ``(norb,)``).
    degen_thresh : float | None, optional
        Energy window for degeneracy. Defaults to the dtype-dependent value
        of :data:`defaults.DEGEN_THRESH`.

    Returns
    -------
    Tensor
        Occupation numbers (shape: ``(*nel.shape, norb)``).

    Examples
    --------
    >>> get_aufbau_occupation(5, torch.tensor(1.))
    tensor([1., 0., 0., 0., 0.])
    >>> get_aufbau_occupation(4, torch.tensor([2.0, 1.5]))
    tensor([[1.0000, 1.0000, 0.0000, 0.0000],
            [1.0000, 0.5000, 0.0000, 0.0000]])
    """
    # We represent the aufbau filling with a heaviside function:
    # 1. creating orbital indices using arange from 1 to norb, inclusively
    # 2. remove the orbital index from the total number of electrons
    #    (negative numbers are filled with ones, positive numbers with zeros)
    # 3. fractional occupation will be in the range [-1, 0], therefore we round up
    # 4. heaviside uses the actual values at 0, therefore we provide the remainder
    idxs = torch.arange(1, 1 + norb, device=nel.device, dtype=nel.dtype)
    occupation = torch.heaviside(
        torch.ceil(nel.unsqueeze(-1) - idxs),
        torch.remainder(nel, -1).unsqueeze(-1) + 1,
    )

    if emo is None:
        return occupation

    if degen_thresh is None:
        degen_thresh = defaults.DEGEN_THRESH.get(emo.dtype, 1e-5)

    channels = occupation.view(-1, norb)
    for i, n in enumerate(nel.view(-1).tolist()):
        if n <= 0 or n >= norb:
            continue

        frontier = emo[math.ceil(n) - 1]
        degen = torch.abs(emo - frontier) <= degen_thresh
        if degen.sum() > 1:
            shared = channels[i][degen].sum() / degen.sum()
            channels[i] = torch.where(degen, shared, channels[i])

    return channels.view(occupation.shape)


def get_fermi_energy(nel: Tensor, emo: Tensor) -> Tensor:
    """
    Get the Fermi energy of a channel as midpoint between HOMO and LUMO.

    Parameters
    ----------
    nel : Tensor
        Number of electrons of the channel.
    emo : Tensor
        Orbital energies in ascending order.

    Returns
    -------
    Tensor
        Fermi energy. If no LUMO exists (e.g. He with a minimal basis), the
        HOMO energy is returned.
    """
    norb = emo.shape[-1]
    homo = min(max(math.ceil(float(nel)) - 1, 0), norb - 1)
    lumo = min(homo + 1, norb - 1)
    return 0.5 * (emo[homo] + emo[lumo])


def _distribute_remainder(fermi: Tensor, diff: Tensor) -> Tensor:
    """
    Remove the deviation in the electron count from the partially occupied
    orbitals, weighted by their derivative ``f(1 - f)``.
    """
    weight = fermi * (1.0 - fermi)
    wsum = weight.sum(-1)

    # a sharp step cannot be corrected smoothly
    if wsum <= 0.0:
        return fermi

    return torch.clamp(fermi - diff * weight / wsum, min=0.0, max=1.0)


def get_fermi_threshold(
    emo: Tensor,
    thr: dict[torch.dtype, Tensor] | None = None,
    accuracy: float = defaults.ACCURACY,
) -> Tensor:
    """
    Convergence threshold for the number of electrons in the Fermi search.

    The scaled threshold is bounded from below by the round-off error of
    summing the occupations of all orbitals.

    Parameters
    ----------
    emo : Tensor
        Orbital energies.
    thr : dict[torch.dtype, Tensor] | None, optional
        Thresholds per dtype. Defaults to :data:`defaults.FERMI_THRESH`.
    accuracy : float, optional
        Scaling of the threshold. Defaults to ``1.0``.

    Returns
    -------
    Tensor
        Threshold for the deviation of the electron count.
    """
    if thr is None:
        thr = defaults.FERMI_THRESH

    thresh = thr.get(emo.dtype, torch.tensor(1e-5)).to(emo) * accuracy
    floor = 50.0 * emo.shape[-1] * torch.finfo(emo.dtype).eps
    return torch.clamp(thresh, min=floor)


def _fermi_channel(
    nel: Tensor, emo: Tensor, kt: Tensor, thresh: Tensor, maxiter: int
) -> Tensor:
    """
    Fermi occupation of a single channel. The chemical potential is obtained
    from a Newton search that falls back to bisection whenever the Newton
    step leaves the current bracket.

    If the bracket shrinks to machine precision before the electron count
    meets the threshold (very low temperatures), the remaining deviation is
    distributed over the fractionally occupied orbitals.
    """
    dd: DD = {"device": emo.device, "dtype": emo.dtype}
    norb = emo.shape[-1]
    eps = torch.finfo(emo.dtype).eps

    if nel <= 0:
        return torch.zeros_like(emo)
    if nel >= norb:
        return torch.ones_like(emo)

    # the bracket encloses the chemical potential for any electron count
    lower = emo.min() - 50.0 * kt - 1.0
    upper = emo.max() + 50.0 * kt + 1.0

    mu = get_fermi_energy(nel, emo)
    tiny = torch.tensor(torch.finfo(emo.dtype).tiny, **dd)
    diff = -nel

    for _ in range(maxiter):
        fermi = torch.sigmoid(-(emo - mu) / kt)
        diff = fermi.sum(-1) - nel

        if torch.abs(diff) <= thresh:
            return fermi

        # too many electrons: mu is too high
        if diff > 0:
            upper = mu
        else:
            lower = mu

        if upper - lower <= 4.0 * eps * torch.clamp(torch.abs(mu), min=1.0):
            return _distribute_remainder(fermi, diff)

        dfermi = torch.sum(fermi * (1.0 - fermi), -1) / kt
        step = mu - diff / torch.maximum(dfermi, tiny)
        mu = torch.where(
            (step > lower) & (step < upper), step, 0.5 * (lower + upper)
        )

    raise OccupationNotConvergedError(
        f"Fermi energy failed to converge in {maxiter} steps "
        f"(electrons: {float(nel)}, remaining deviation: {float(diff):.3e})."
    )


def get_fermi_occupation(
    nel: Tensor,
    emo: Tensor,
    kt: Tensor | None = None,
    thr: dict[torch.dtype, Tensor] | None = None,
    maxiter: int = defaults.FERMI_MAXITER,
    accuracy: float = defaults.ACCURACY,
) -> Tensor:
    """
    Set occupation numbers according to the Fermi-Dirac distribution

    .. math::

        f(\\varepsilon) = \\frac{1}{1 + \\exp((\\varepsilon - \\mu)/k_BT)}

    with the chemical potential :math:`\\mu` of each channel chosen such that
    the occupations sum up to the number of electrons of that channel.

    Parameters
    ----------
    nel : Tensor
        Number of alpha and beta electrons (shape: ``(2,)``).
    emo : Tensor
        Orbital energies (shape: ``(nao,)``).
    kt : Tensor | None, optional
        Electronic temperature in atomic units. If ``None`` or zero, the
        aufbau occupation is returned.
    thr : dict[torch.dtype, Tensor] | None, optional
        Thresholds for converging the number of electrons. Defaults to
        :data:`defaults.FERMI_THRESH`.
    maxiter : int, optional
        Maximum number of iterations for converging Fermi energy.
    accuracy : float, optional
        Scaling of the threshold. Defaults to ``1.0``.

    Returns
    -------
    Tensor
        Occupation numbers (shape: ``(2, nao)``).

    Raises
    ------
    OccupationNotConvergedError
        Fermi energy fails to converge.
    TypeError
        Electronic temperature is not given as `Tensor`.
    ValueError
        Electronic temperature is negative.
    """
    # wrong type of kt
    if not isinstance(kt, Tensor) and kt is not None:
        raise TypeError("Electronic temperature must be `Tensor` or ``None``.")

    # negative etemp
    if kt is not None and torch.any(kt < 0.0):
        raise ValueError(f"Electronic Temperature must be positive or None ({kt}).")

    if kt is None or kt == 0.0:
        return get_aufbau_occupation(emo.shape[-1], nel, emo=emo)

    thresh = get_fermi_threshold(emo, thr, accuracy)

    return torch.stack(
        [_fermi_channel(n, emo, kt, thresh, maxiter) for n in nel.view(-1)]
    ).view(*nel.shape, -1)


def get_occupation(
    nel: Tensor,
    emo: Tensor,
    kt: Tensor | None = None,
    thr: dict[torch.dtype, Tensor] | None = None,
    maxiter: int = defaults.FERMI_MAXITER,
    accuracy: float = defaults.ACCURACY,
) -> Tensor:
    """
    Occupy the orbitals of both spin channels.

    Parameters
    ----------
    nel : Tensor
        Number of alpha and beta electrons (shape: ``(2,)``).
    emo : Tensor
        Orbital energies in ascending order (shape: ``(nao,)``).
    kt : Tensor | None, optional
        Electronic temperature in atomic units. Zero or ``None`` selects the
        aufbau filling.
    thr : dict[torch.dtype, Tensor] | None, optional
        Thresholds for converging the number of electrons.
    maxiter : int, optional
        Maximum number of iterations for converging Fermi energy.
    accuracy : float, optional
        Scaling of the Fermi threshold.

    Returns
    -------
    Tensor
        Occupation numbers (shape: ``(2, nao)``).

    Raises
    ------
    MalformedStructureError
        More electrons in one channel than orbitals.
    """
    norb = emo.shape[-1]
    if (nel > norb).any():
        raise MalformedStructureError(
            f"Number of electrons per spin channel ({nel.tolist()}) exceeds "
            f"the number of orbitals ({norb})."
        )

    return get_fermi_occupation(
        nel, emo, kt, thr=thr, maxiter=maxiter, accuracy=accuracy
    )


def get_electronic_free_energy(occupation: Tensor, kt: Tensor | None) -> Tensor:
    """
    Calculate electronic free energy from entropy.

    .. math::

        G = -TS = k_BT \\sum_{i} f_i \\ln(f_i) + (1 - f_i) \\ln(1 - f_i)

    Parameters
    ----------
    occupation : Tensor
        Occupation numbers of both channels (shape: ``(2, nao)``).
    kt : Tensor | None
        Electronic temperature in atomic units.

    Returns
    -------
    Tensor
        Electronic free energy (G = -TS), always smaller or equal to zero.
    """
    if kt is None:
        return occupation.new_tensor(0.0)

    occ1 = 1.0 - occupation
    s = torch.xlogy(occupation, occupation) + torch.xlogy(occ1, occ1)
    return kt * s.sum()
