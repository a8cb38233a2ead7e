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
Parser for command line options.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import torch

from xtbscf.__version__ import __version__
from xtbscf._src.constants import defaults
from xtbscf._src.typing import Any

__all__ = ["parser"]


def is_file(path: str | Path) -> str | Path:
    p = Path(path)
    if p.is_dir():
        raise argparse.ArgumentTypeError(
            f"Cannot open '{path}': Is a directory.",
        )

    if p.is_file() is False:
        raise argparse.ArgumentTypeError(
            f"Cannot open '{path}': No such file.",
        )

    return path


def action_not_less_than(min_value: float = 0.0):
    class CustomAction(argparse.Action):
        """
        Custom action for limiting possible input values.
        """

        def __call__(
            self,
            p: argparse.ArgumentParser,
            args: argparse.Namespace,
            values: Any,
            option_string: str | None = None,
        ) -> None:
            if values < min_value:
                p.error(
                    f"Option '{option_string}' takes only values not less "
                    f"than {min_value} ({values})."
                )

            setattr(args, self.dest, values)

    return CustomAction


def action_greater_than(min_value: float = 0.0):
    class CustomAction(argparse.Action):
        """
        Custom action for strictly positive input values.
        """

        def __call__(
            self,
            p: argparse.ArgumentParser,
            args: argparse.Namespace,
            values: Any,
            option_string: str | None = None,
        ) -> None:
            if values <= min_value:
                p.error(
                    f"Option '{option_string}' takes only values greater "
                    f"than {min_value} ({values})."
                )

            setattr(args, self.dest, values)

    return CustomAction


class ConvertToTorchDtype(argparse.Action):
    """
    Custom action for converting an input value string to a PyTorch dtype.
    """

    def __call__(
        self,
        p: argparse.ArgumentParser,
        args: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if values in ("float32", torch.float32, "sp"):
            values = torch.float32
        elif values in ("float64", torch.float64, "double", torch.double, "dp"):
            values = torch.float64
        # unreachable due to choices
        else:  # pragma: no cover
            p.error(f"Option '{option_string}' was passed unknown keyword ({values}).")

        setattr(args, self.dest, values)


class Formatter(argparse.HelpFormatter):
    """
    Custom format for help message.
    """

    def _get_help_string(
        self, action: argparse.Action
    ) -> str | None:  # pragma: no cover
        """
        Append default value and type of action to help string.

        Parameters
        ----------
        action : argparse.Action
            Command line option.

        Returns
        -------
        str | None
            Help string.
        """
        helper = action.help
        if helper is not None and "%(default)" not in helper:
            if action.default is not argparse.SUPPRESS:
                defaulting_nargs = [argparse.OPTIONAL, argparse.ZERO_OR_MORE]

                if action.option_strings or action.nargs in defaulting_nargs:
                    helper += "\n - default: %(default)s"
                if action.type:
                    helper += "\n - type: %(type)s"

        return helper

    def _split_lines(self, text: str, width: int) -> list[str]:
        """
        Re-implementation of `RawTextHelpFormatter._split_lines` that includes
        line breaks for strings starting with 'R|'.

        Parameters
        ----------
        text : str
            Help message.
        width : int
            Text width.

        Returns
        -------
        list[str]
            Split text.
        """
        if text.startswith("R|"):
            return text[2:].splitlines()

        # pylint: disable=protected-access
        return argparse.HelpFormatter._split_lines(self, text, width)


def parser(name: str = "xtbscf", **kwargs: Any) -> argparse.ArgumentParser:
    """
    Parses the command line arguments.

    Returns
    -------
    argparse.ArgumentParser
        Container for command line arguments.
    """

    desc = kwargs.pop(
        "description",
        "xtbscf - Self-consistent extended tight-binding single points.",
    )

    p = argparse.ArgumentParser(
        description=desc,
        prog=name,
        formatter_class=lambda prog: Formatter(prog, max_help_position=60),
        add_help=False,
        **kwargs,
    )
    p.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="R|Show this help message and exit.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=__version__,
        help="Show version and exit.",
    )
    p.add_argument(
        "-c",
        "--chrg",
        type=int,
        default=None,
        help="R|Molecular charge. Read from '.CHRG' file if not given.",
    )
    p.add_argument(
        "--spin",
        "--uhf",
        action=action_not_less_than(0),
        type=int,
        default=defaults.SPIN,
        help="R|Number of unpaired electrons. Read from '.UHF' file if not given.",
    )
    p.add_argument(
        "--dtype",
        action=ConvertToTorchDtype,
        type=str,
        default=defaults.TORCH_DTYPE,
        choices=defaults.TORCH_DTYPE_CHOICES,
        help="R|Data type for PyTorch floating point tensors.",
    )

    # method
    p.add_argument(
        "--method",
        type=str,
        default=defaults.METHOD,
        choices=defaults.METHOD_CHOICES,
        help="R|Method for calculation.",
    )
    p.add_argument(
        "--guess",
        type=str,
        default=defaults.GUESS,
        choices=defaults.GUESS_CHOICES,
        help="R|Model for initial charges.",
    )

    # Fermi
    p.add_argument(
        "--etemp",
        "--fermi-etemp",
        "--fermi_etemp",
        action=action_not_less_than(0.0),
        type=float,
        default=defaults.FERMI_ETEMP,
        help="R|Electronic temperature in K.",
    )
    p.add_argument(
        "--fermi-maxiter",
        "--fermi_maxiter",
        action=action_greater_than(0),
        type=int,
        default=defaults.FERMI_MAXITER,
        help="R|Maximum number of steps in the search for the Fermi level.",
    )

    # SCF
    p.add_argument(
        "--acc",
        "--accuracy",
        action=action_greater_than(0.0),
        type=float,
        default=defaults.ACCURACY,
        help="R|Accuracy of the SCF. Smaller values give tighter thresholds.",
    )
    p.add_argument(
        "--maxiter",
        action=action_greater_than(0),
        type=int,
        default=defaults.MAXITER,
        help="R|Maximum number of SCF iterations.",
    )
    p.add_argument(
        "--mixer",
        type=str,
        default=defaults.MIXER,
        choices=defaults.MIXER_CHOICES,
        help="R|Mixing algorithm for the charges.",
    )
    p.add_argument(
        "--damp",
        type=float,
        default=defaults.DAMP,
        help="R|Damping factor for mixing in SCF iterations, within (0, 1].",
    )
    p.add_argument(
        "--generations",
        action=action_greater_than(0),
        type=int,
        default=defaults.GENERATIONS,
        help="R|Number of stored generations in Anderson mixing.",
    )
    p.add_argument(
        "--force-convergence",
        "--force_convergence",
        action="store_true",
        help="R|Treat a non-converged SCF as an error.",
    )

    # printing
    p.add_argument(
        "--verbosity",
        type=int,
        default=defaults.VERBOSITY,
        help="R|Verbosity level of printout.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        dest="v",
        action="count",
        default=0,
        help="R|Increase verbosity level of printout by one.",
    )
    p.add_argument(
        "-s",
        action="count",
        default=0,
        help="R|Reduce verbosity level of printout by one.",
    )
    p.add_argument(
        "--loglevel",
        "--log-level",
        type=str,
        default=defaults.LOG_LEVEL,
        choices=defaults.LOG_LEVEL_CHOICES,
        help="R|Logging level.",
    )

    # input files
    p.add_argument(
        "--filetype",
        type=str,
        choices=["xyz", "tm", "tmol", "turbomole", "json", "qcschema"],
        help="R|Explicitly set file type of input.",
    )
    p.add_argument(
        "file",
        nargs="?",
        type=is_file,  # manual validation
        help="R|Path to coordinate file.",
    )

    return p
