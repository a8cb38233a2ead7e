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
Configuration
=============

This module contains the configuration classes for the
:class:`xtbscf.Calculator`.

All knobs can be passed to the calculator as keyword arguments, from which the
:class:`~xtbscf.config.ConfigSCF` object is created.

.. code-block:: python

    import xtbscf

    calc = xtbscf.Calculator.gfn2(maxiter=100, damp=0.3)
    print(calc.opts.maxiter)

All options can be accessed and modified through the calculator's properties
or directly on the :attr:`~xtbscf.Calculator.opts` attribute. Every assignment
is validated. The defaults are stored in
:mod:`~xtbscf._src.constants.defaults`.
"""

from .scf import *
