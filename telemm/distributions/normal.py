# -*- coding: utf-8 -*-
#
# normal.py
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

import scipy.stats

from telemm.distributions.base import BaseDistribution
from telemm.parameter import ParamKind, ParamSlot


class Normal(BaseDistribution):

    name = 'normal'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.MEAN)
        self.add_parameter(ParamKind.SD, 0)

    def _log_pdf(self, data, params):
        return scipy.stats.norm.logpdf(
            data, loc=params[ParamSlot(ParamKind.MEAN)], scale=params[ParamSlot(ParamKind.SD)])

    def _sample(self, n, params):
        return scipy.stats.norm.rvs(
            loc=params[ParamSlot(ParamKind.MEAN)], scale=params[ParamSlot(ParamKind.SD)], size=n)
