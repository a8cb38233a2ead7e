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
I/O: Context
============

Diagnostic channel of a calculation. The context receives messages, warnings
and errors from the calculator. It never provides data for the calculation
itself.

Example
-------
>>> from xtbscf import Context
>>> ctx = Context(verbosity=0)
>>> ctx.warn("Something odd happened.")
>>> ctx.warnings
[('Something odd happened.', <class 'UserWarning'>)]
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from xtbscf._src.typing import Any, Generator

from .handler import OutputHandler

__all__ = ["Context"]


logger = logging.getLogger(__name__)


class Context:
    """
    Collector for the diagnostics of one or more calculations.
    """

    messages: list[str]
    """Informational messages in order of arrival."""

    warnings: list[tuple[str, type[Warning]]]
    """Warnings together with their category."""

    errors: list[Exception]
    """Errors that aborted a calculation."""

    verbosity: int | None
    """
    Verbosity used for console output while the context is active. If
    ``None``, the verbosity of the :data:`OutputHandler` is used.
    """

    raise_errors: bool
    """Whether the calculator re-raises errors instead of returning a status."""

    __slots__ = ["messages", "warnings", "errors", "verbosity", "raise_errors"]

    def __init__(
        self, verbosity: int | None = None, raise_errors: bool = False
    ) -> None:
        if verbosity is not None and not isinstance(verbosity, int):
            raise TypeError("Verbosity level must be an integer.")

        self.messages = []
        self.warnings = []
        self.errors = []
        self.verbosity = verbosity
        self.raise_errors = raise_errors

    @contextmanager
    def scope(self) -> Generator[None, Any, None]:
        """
        Apply the verbosity of this context to the output handler. The level
        only applies to the calling thread, i.e., contexts with different
        verbosities can be used in concurrent calculations.
        """
        if self.verbosity is None:
            yield
            return

        with OutputHandler.with_verbosity(self.verbosity):
            yield

    def message(self, msg: str, v: int = 5) -> None:
        """
        Record an informational message and print it.

        Parameters
        ----------
        msg : str
            The message.
        v : int, optional
            Verbosity level at which the message is printed. Defaults to 5.
        """
        self.messages.append(msg)
        logger.debug(msg)

        with self.scope():
            OutputHandler.write_stdout(msg, v=v)

    def warn(self, msg: str, warning_type: type[Warning] = UserWarning) -> None:
        """
        Record a warning.

        Parameters
        ----------
        msg : str
            The warning message.
        warning_type : type[Warning], optional
            Category of the warning. Defaults to `UserWarning`.
        """
        self.warnings.append((msg, warning_type))
        logger.warning(msg)
        OutputHandler.warn(msg, warning_type)

    def error(self, err: Exception) -> None:
        """
        Record an error that aborted a calculation.

        Parameters
        ----------
        err : Exception
            The error.
        """
        self.errors.append(err)
        logger.error("[%s] %s", type(err).__name__, getattr(err, "message", err))

    @property
    def failed(self) -> bool:
        """Whether any error was recorded."""
        return len(self.errors) > 0

    @property
    def last_error(self) -> Exception | None:
        """The most recent error or ``None``."""
        if len(self.errors) == 0:
            return None
        return self.errors[-1]

    def clear(self) -> None:
        """Remove all recorded diagnostics."""
        self.messages = []
        self.warnings = []
        self.errors = []

    def __str__(self) -> str:  # pragma: no cover
        return (
            f"{self.__class__.__name__}(messages={len(self.messages)}, "
            f"warnings={len(self.warnings)}, errors={len(self.errors)})"
        )

    def __repr__(self) -> str:  # pragma: no cover
        return str(self)
