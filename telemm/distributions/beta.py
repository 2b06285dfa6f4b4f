# -*- coding: utf-8 -*-
#
# beta.py
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

from scipy.stats import beta

from telemm.distributions.base import BaseDistribution
from telemm.distributions.support import Bounds
from telemm.parameter import ParamKind, ParamSlot


class Beta(BaseDistribution):

    name = 'beta'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.SHAPE, 0)
        self.add_parameter(ParamKind.SHAPE, 0)
        self.add_support(Bounds(0, 1))

    def _log_pdf(self, data, params):
        return beta.logpdf(data, params[ParamSlot(ParamKind.SHAPE, 0)],
                           params[ParamSlot(ParamKind.SHAPE, 1)])

    def _sample(self, n, params):
        return beta.rvs(params[ParamSlot(ParamKind.SHAPE, 0)],
                        params[ParamSlot(ParamKind.SHAPE, 1)], size=n)
