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
Driver class for running xtbscf from the command line.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from xtbscf._src import io
from xtbscf._src.calculators import Calculator, Result
from xtbscf._src.constants import labels
from xtbscf._src.mol import Structure
from xtbscf._src.typing import PathLike

__all__ = ["Driver", "read_chrg"]


logger = logging.getLogger(__name__)

FILES = {"spin": ".UHF", "chrg": ".CHRG"}


def read_chrg(fp: PathLike) -> int:
    """Read an integer (charge or spin) from the first line of a file."""
    with open(fp, encoding="utf-8") as file:
        return int(file.read().split()[0])


class Driver:
    """
    Driver class for running xtbscf.
    """

    def __init__(self, args: Namespace) -> None:
        self.args = args
        self.base = Path(args.file).resolve().parent
        self.chrg = self._set_attr("chrg")
        self.spin = self._set_attr("spin")

    def _set_attr(self, attr: str) -> int | None:
        val = getattr(self.args, attr)

        # only search for file if not specified
        if val is not None:
            return val

        path = Path(self.base, FILES[attr])
        if path.is_file():
            return read_chrg(path)

        return 0 if attr == "chrg" else None

    def singlepoint(self) -> tuple[str, Result]:
        """
        Run a single point calculation for the given coordinate file.

        Returns
        -------
        tuple[str, Result]
            Status of the calculation and the result container.
        """
        args = self.args

        config = io.get_logging_config(level=args.loglevel)
        logging.basicConfig(**config)

        # args.verbosity contains default if not set, v/s are zero
        io.OutputHandler.verbosity = args.verbosity + args.v - args.s

        structure = Structure.from_file(
            args.file,
            charge=self.chrg,
            uhf=self.spin,
            ftype=args.filetype,
            dtype=args.dtype,
        )

        method = args.method.casefold()
        if method in labels.GFN1_XTB_STRS:
            factory = Calculator.gfn1
        elif method in labels.GFN2_XTB_STRS:
            factory = Calculator.gfn2
        elif method in labels.IPEA1_XTB_STRS:
            factory = Calculator.ipea1
        else:
            raise ValueError(f"Unknown method '{args.method}'.")

        calc = factory(
            dtype=args.dtype,
            accuracy=args.acc,
            guess=args.guess,
            maxiter=args.maxiter,
            mixer=args.mixer,
            damp=args.damp,
            generations=args.generations,
            force_convergence=args.force_convergence,
            fermi_etemp=args.etemp,
            fermi_maxiter=args.fermi_maxiter,
        )
        io.OutputHandler.write_info("Calculator", calc.info(), v=4)

        result = Result()
        ctx = io.Context()
        with calc:
            status = calc.singlepoint(structure, result, ctx)

        if status == labels.STATUS_MAP[labels.STATUS_FAILED]:
            err = ctx.last_error
            io.OutputHandler.write_stdout(
                f"Calculation failed: {getattr(err, 'message', err)}", v=1
            )
        else:
            result.print_energies(v=2)
            io.OutputHandler.write_stdout(
                f"Total energy: {float(result.get(labels.KEY_ENERGY)):.12f} Eh",
                v=1,
            )

        io.OutputHandler.dump_warnings()
        return status, result
