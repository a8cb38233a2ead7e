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
Loaders: Lazy Parameter Loader
==============================

A lazy loader class for loading TOML parametrization upon member access.
This is used for the built-in GFN1-xTB, GFN2-xTB and IPEA1-xTB
parametrizations, which are process-wide read-only constants.

Example
-------
.. code-block:: python

    from xtbscf._src.loader.lazy import LazyLoaderParam
    param = LazyLoaderParam("../param/gfn1/gfn1-xtb.toml")
"""

from __future__ import annotations

import threading

import tomli as toml

from xtbscf._src.typing import Any, PathLike

__all__ = ["LazyLoaderParam"]


class LazyLoaderParam:
    """
    A lazy loader class for loading TOML parametrization files as needed.

    This class is designed to delay the loading of a TOML file until an
    attribute from the file is accessed. The file is parsed exactly once,
    even if several threads access the parametrization simultaneously, and
    the resulting (frozen) `Param` object is shared by all users.

    Parameters
    ----------
    filepath : PathLike
        The file path to the TOML file that needs to be lazily loaded.
    """

    def __init__(self, filepath: PathLike) -> None:
        self.filepath = filepath
        self._loaded = None
        self._lock = threading.Lock()

    def load(self):
        """
        Load the parametrization (only on first call).

        Returns
        -------
        Param
            The loaded parametrization.
        """
        if self._loaded is None:
            with self._lock:
                if self._loaded is None:
                    # pylint: disable=import-outside-toplevel
                    from xtbscf._src.param.base import Param

                    with open(self.filepath, "rb") as fd:
                        self._loaded = Param(**toml.load(fd))

        return self._loaded

    def __getattr__(self, item: Any) -> Any:
        """
        Loads the TOML file and initializes the `Param` object upon first
        attribute access.
        Subsequent accesses will use the already loaded `Param` object.

        Parameters
        ----------
        item : Any
            The attribute name to be accessed from the `Param` object.

        Returns
        -------
        Any
            The value of the attribute from the `Param` object.
        """
        # avoid recursion for attributes missing during unpickling
        if item.startswith("_"):
            raise AttributeError(item)

        return getattr(self.load(), item)

    def __str__(self) -> str:
        return f"LazyLoaderParam({str(self.filepath)})"

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, LazyLoaderParam):
            other = other.load()
        return self.load() == other

    def __hash__(self) -> int:
        return hash(str(self.filepath))
