# -*- coding: utf-8 -*-
#
# gamma.py
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

MEAN = ParamSlot(ParamKind.MEAN)
SD = ParamSlot(ParamKind.SD)
ZERO_MASS = ParamSlot(ParamKind.ZERO_MASS)


def _shape_scale(params):
    # Moment matching from the (mean, sd) parameterization
    mean, sd = params[MEAN], params[SD]
    return (mean / sd) ** 2, sd ** 2 / mean


class Gamma(BaseDistribution):

    name = 'gamma'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.MEAN, 0)
        self.add_parameter(ParamKind.SD, 0)
        self.add_support(Positive())

    def _log_pdf(self, data, params):
        shape, scale = _shape_scale(params)
        return scipy.stats.gamma.logpdf(data, shape, scale=scale)

    def _sample(self, n, params):
        shape, scale = _shape_scale(params)
        return scipy.stats.gamma.rvs(shape, scale=scale, size=n)


class ZeroInflatedGamma(BaseDistribution):
    """Gamma distribution with an additional point mass at zero.

    Typical for dive depths or step lengths where the animal
    stays put for a whole time step.
    """

    name = 'zero-inflated-gamma'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.MEAN, 0)
        self.add_parameter(ParamKind.SD, 0)
        self.add_parameter(ParamKind.ZERO_MASS, 0, 1)
        self.add_support(NonNegative())

    def _log_pdf(self, data, params):
        shape, scale = _shape_scale(params)
        zero_mass = params[ZERO_MASS]
        out = np.full(data.shape, np.log(zero_mass), dtype=float)
        positive = data > 0
        out[positive] = np.log1p(-zero_mass) + scipy.stats.gamma.logpdf(
            data[positive], shape, scale=scale)
        return out

    def _sample(self, n, params):
        shape, scale = _shape_scale(params)
        data = scipy.stats.gamma.rvs(shape, scale=scale, size=n)
        data[np.random.rand(n) < params[ZERO_MASS]] = 0
        return data
