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
Labels: SCF
===========

Labels for SCF-related options.
"""

# guess

GUESS_EEQ = 0
"""Integer code for EEQ guess."""

GUESS_EEQ_STRS = ("eeq", "equilibration")
"""String codes for EEQ guess."""

GUESS_SAD = 1
"""Integer code for SAD guess."""

GUESS_SAD_STRS = ("sad", "reference", "zero")
"""String codes for SAD guess."""

GUESS_MAP = ["EEQ", "SAD"]
"""String map (for printing) of initial guesses."""

# mixers

MIXER_SIMPLE = 0
"""Integer code for simple (damped linear) mixing."""

MIXER_SIMPLE_STRS = ("simple", "linear", "damped")
"""String codes for simple mixing."""

MIXER_ANDERSON = 1
"""Integer code for Anderson mixing."""

MIXER_ANDERSON_STRS = ("anderson", "pulay", "diis")
"""String codes for Anderson mixing."""

MIXER_MAP = ["Simple", "Anderson"]
"""String map (for printing) of mixers."""

# states of the SCF driver

SCF_STATE_INITIALIZED = 0
"""The SCF state is set up but no iteration ran yet."""

SCF_STATE_ITERATING = 1
"""The SCF is iterating."""

SCF_STATE_CONVERGED = 2
"""The SCF met the convergence criteria."""

SCF_STATE_MAXITER = 3
"""The SCF exhausted the maximum number of iterations."""

SCF_STATE_FAILED = 4
"""The SCF was aborted by an error."""

SCF_STATE_MAP = [
    "Initialized",
    "Iterating",
    "Converged",
    "MaxIterationsReached",
    "Failed",
]
"""String map (for printing) of SCF states."""

# status of a single point calculation

STATUS_SUCCESS = 0
"""Single point calculation finished with a converged SCF."""

STATUS_NOT_CONVERGED = 1
"""Single point calculation finished without SCF convergence."""

STATUS_FAILED = 2
"""Single point calculation was aborted, no results written."""

STATUS_MAP = ["success", "not_converged", "failed"]
"""String map (for printing) of single point status codes."""
