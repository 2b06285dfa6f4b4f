# -*- coding: utf-8 -*-
#
# circular.py
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
import scipy.special
import scipy.stats

from telemm.distributions.base import BaseDistribution
from telemm.distributions.support import Bounds
from telemm.parameter import ParamKind, ParamSlot

MEAN = ParamSlot(ParamKind.MEAN)
CONCENTRATION = ParamSlot(ParamKind.CONCENTRATION)


def wrap(angles: np.ndarray) -> np.ndarray:
    return np.mod(angles + np.pi, 2. * np.pi) - np.pi


class VonMises(BaseDistribution):
    """Turning angles, in radians, between -pi and pi."""

    name = 'von-mises'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.MEAN, -np.pi, np.pi)
        self.add_parameter(ParamKind.CONCENTRATION, 0)
        self.add_support(Bounds(-np.pi, np.pi))

    def _log_pdf(self, data, params):
        kappa = params[CONCENTRATION]
        # log(I0(kappa)) computed from the exponentially scaled Bessel function
        log_norm = np.log(2. * np.pi * scipy.special.i0e(kappa)) + kappa
        return kappa * np.cos(data - params[MEAN]) - log_norm

    def _sample(self, n, params):
        return wrap(scipy.stats.vonmises.rvs(params[CONCENTRATION], size=n) + params[MEAN])


class WrappedCauchy(BaseDistribution):

    name = 'wrapped-cauchy'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.MEAN, -np.pi, np.pi)
        self.add_parameter(ParamKind.CONCENTRATION, 0, 1)
        self.add_support(Bounds(-np.pi, np.pi))

    def _log_pdf(self, data, params):
        rho = params[CONCENTRATION]
        return np.log1p(-rho ** 2) - np.log(
            2. * np.pi * (1. + rho ** 2 - 2. * rho * np.cos(data - params[MEAN])))

    def _sample(self, n, params):
        return wrap(scipy.stats.wrapcauchy.rvs(params[CONCENTRATION], size=n) + params[MEAN])
