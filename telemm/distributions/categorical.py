# -*- coding: utf-8 -*-
#
# categorical.py
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
from telemm.distributions.support import Bounds, Integer
from telemm.parameter import ParamKind, ParamSlot


class Bernoulli(BaseDistribution):

    name = 'bernoulli'

    def __init__(self):
        super().__init__()
        self.add_parameter(ParamKind.PROB, 0, 1)
        self.add_support(Integer())
        self.add_support(Bounds(0, 1))

    def _log_pdf(self, data, params):
        return scipy.stats.bernoulli.logpmf(data, params[ParamSlot(ParamKind.PROB)])

    def _sample(self, n, params):
        return (np.random.rand(n) < params[ParamSlot(ParamKind.PROB)]).astype(int)


class Categorical(BaseDistribution):
    """Categories are labelled 1 to n_categories.

    The probability of the last category is implied by the
    n_categories - 1 others.
    """

    def __init__(self, n_categories: int):
        super().__init__()
        if n_categories < 2:
            raise ValueError('A categorical distribution needs at least 2 categories')
        self.n_categories: int = int(n_categories)
        self.name = f'cat{self.n_categories}'
        for _ in range(self.n_categories - 1):
            self.add_parameter(ParamKind.PROB, 0, 1)
        self.add_support(Integer())
        self.add_support(Bounds(1, self.n_categories))

    def valid_parameters(self, params) -> bool:
        total = np.sum([np.asarray(params[slot], dtype=float) for slot in self.slots], axis=0)
        return bool(np.all(total < 1))

    def probabilities(self, params) -> np.ndarray:
        p = np.asarray([params[slot] for slot in self.slots], dtype=float)
        last = 1. - np.sum(p)
        if last <= 0:
            raise ValueError(f'Category probabilities of {self.name} must sum to less than 1')
        return np.append(p, last)

    def _log_pdf(self, data, params):
        p = self.probabilities(params)
        return np.log(p[data.astype(int) - 1])

    def _sample(self, n, params):
        p = self.probabilities(params)
        return np.random.choice(np.arange(1, self.n_categories + 1), size=n, p=p)
