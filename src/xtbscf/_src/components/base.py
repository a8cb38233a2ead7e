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
Components: Base Class
======================

Base class for all tight-binding components, i.e., the charge-dependent
interactions and the classical (charge-independent) energy terms.
"""

from __future__ import annotations

import torch

from xtbscf._src.typing import Tensor, TensorLike

__all__ = ["Component", "ComponentCache"]


class ComponentCache(TensorLike):
    """Cache of a component."""

    __slots__: list[str] = []

    def __init__(
        self,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ):
        super().__init__(device, dtype)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __repr__(self) -> str:
        return str(self)


class Component(TensorLike):
    """
    Base class for all tight-binding terms.
    """

    label: str
    """Label for the tight-binding component."""

    _cache: ComponentCache | None
    """Cache for the component."""

    _cachevars: tuple[Tensor, ...] | None
    """
    Cache variable for the component.
    If this variable changes, the cache has to be rebuild.
    """

    __slots__ = ["label", "_cache", "_cachevars"]

    def __init__(
        self,
        device: torch.device | None = None,
        dtype: torch.dtype | None = None,
    ):
        super().__init__(device, dtype)
        self.label = self.__class__.__name__
        self._cache = None
        self._cachevars = None

    @property
    def cache(self) -> ComponentCache | None:
        """Cache for the component."""
        return self._cache

    @cache.setter
    def cache(self, value: ComponentCache | None) -> None:
        self._cache = value

    def cache_is_latest(self, vars: tuple[Tensor, ...]) -> bool:
        """
        Check if the cache was built for the given variables.

        Parameters
        ----------
        vars : tuple[Tensor, ...]
            Variables the cache depends on (e.g. atomic numbers, positions).

        Returns
        -------
        bool
            Whether the cache can be reused.
        """
        if self._cache is None or self._cachevars is None:
            return False

        if len(vars) != len(self._cachevars):
            return False

        for old, new in zip(self._cachevars, vars):
            if old.shape != new.shape or not torch.equal(old, new):
                return False

        return True

    def __str__(self) -> str:
        return f"{self.label}()"

    def __repr__(self) -> str:
        return str(self)
