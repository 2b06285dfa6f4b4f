# -*- coding: utf-8 -*-
#
# positive.py
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
from telemm.distributions.support import NonNegative, Positive
from telemm.parameter import ParamKind, ParamSlot


class Weibull(BaseDistribution):

    name = 'weibull'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.SHAPE, 0)
        self.add_parameter(ParamKind.SCALE, 0)
        self.add_support(Positive())

    def _log_pdf(self, data, params):
        return scipy.stats.weibull_min.logpdf(
            data, params[ParamSlot(ParamKind.SHAPE)], scale=params[ParamSlot(ParamKind.SCALE)])

    def _sample(self, n, params):
        return scipy.stats.weibull_min.rvs(
            params[ParamSlot(ParamKind.SHAPE)], scale=params[ParamSlot(ParamKind.SCALE)], size=n)


class LogNormal(BaseDistribution):

    name = 'lognormal'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.LOCATION)
        self.add_parameter(ParamKind.SCALE, 0)
        self.add_support(Positive())

    def _log_pdf(self, data, params):
        return scipy.stats.lognorm.logpdf(
            data, params[ParamSlot(ParamKind.SCALE)],
            scale=np.exp(params[ParamSlot(ParamKind.LOCATION)]))

    def _sample(self, n, params):
        return scipy.stats.lognorm.rvs(
            params[ParamSlot(ParamKind.SCALE)],
            scale=np.exp(params[ParamSlot(ParamKind.LOCATION)]), size=n)


class Exponential(BaseDistribution):

    name = 'exponential'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.RATE, 0)
        self.add_support(NonNegative())

    def _log_pdf(self, data, params):
        return scipy.stats.expon.logpdf(data, scale=1. / params[ParamSlot(ParamKind.RATE)])

    def _sample(self, n, params):
        return scipy.stats.expon.rvs(scale=1. / params[ParamSlot(ParamKind.RATE)], size=n)
