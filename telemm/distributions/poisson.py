# -*- coding: utf-8 -*-
#
# poisson.py
#
# Copyright 2022 Antoine Passemiers <antoine.passemiers@gmail.com>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston,
# MA 02110-1301, USA.

import numpy as np
import scipy.stats

from telemm.distributions.base import BaseDistribution
from telemm.distributions.support import Integer, NonNegative
from telemm.parameter import ParamKind, ParamSlot


class Poisson(BaseDistribution):

    name = 'poisson'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.RATE, 0)
        self.add_support(Integer())
        self.add_support(NonNegative())

    def _log_pdf(self, data, params):
        return scipy.stats.poisson.logpmf(data, params[ParamSlot(ParamKind.RATE)])

    def _sample(self, n, params):
        return np.random.poisson(lam=params[ParamSlot(ParamKind.RATE)], size=n)
