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
Labels: Dictionary Keys
=======================

All labels related to the property keys of the result container.
"""

__all__ = [
    "KEY_ENERGY",
    "KEY_ENERGIES",
    "KEY_ELECTRONIC",
    "KEY_REPULSION",
    "KEY_DISPERSION",
    "KEY_FREE_ENERGY",
    #
    "KEY_EMO",
    "KEY_OCCUPATION",
    "KEY_COEFFICIENTS",
    "KEY_DENSITY",
    "KEY_CHARGES",
    "KEY_POPULATIONS",
    #
    "KEY_CONVERGED",
    "KEY_ITERATIONS",
    "KEY_RESIDUAL",
    "RESULT_KEYS",
]

KEY_ENERGY = "energy"
KEY_ENERGIES = "energies"
KEY_ELECTRONIC = "electronic"
KEY_REPULSION = "repulsion"
KEY_DISPERSION = "dispersion"
KEY_FREE_ENERGY = "free_energy"

KEY_EMO = "orbital_energies"
KEY_OCCUPATION = "occupations"
KEY_COEFFICIENTS = "coefficients"
KEY_DENSITY = "density"
KEY_CHARGES = "charges"
KEY_POPULATIONS = "populations"

KEY_CONVERGED = "converged"
KEY_ITERATIONS = "iterations"
KEY_RESIDUAL = "residual"

RESULT_KEYS = (
    KEY_ENERGY,
    KEY_ENERGIES,
    KEY_ELECTRONIC,
    KEY_REPULSION,
    KEY_DISPERSION,
    KEY_FREE_ENERGY,
    KEY_EMO,
    KEY_OCCUPATION,
    KEY_COEFFICIENTS,
    KEY_DENSITY,
    KEY_CHARGES,
    KEY_POPULATIONS,
    KEY_CONVERGED,
    KEY_ITERATIONS,
    KEY_RESIDUAL,
)
"""All property keys a single point calculation can write."""
