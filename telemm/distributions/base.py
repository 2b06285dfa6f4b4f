# -*- coding: utf-8 -*-
#
# base.py
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

from abc import ABCMeta, abstractmethod
from typing import Dict, List, Mapping, Tuple

import numpy as np

from telemm.distributions.support import Support
from telemm.parameter import ParamKind, ParamSlot


class BaseDistribution(metaclass=ABCMeta):
    """Distribution family of an observed data stream.

    A family knows its ordered parameter slots, the bounds of each
    parameter on the natural scale and the support of its data.
    It holds no parameter values: these are passed explicitly to
    `log_pdf` and `sample`, one scalar per slot.
    """

    name: str = ''

    def __init__(self):
        self.supports: List[Support] = []
        self.slots: Tuple[ParamSlot, ...] = tuple()
        self.bounds: Dict[ParamSlot, Tuple[float, float]] = {}

    def add_support(self, support: Support):
        self.supports.append(support)

    def add_parameter(self, kind: ParamKind, lb: float = -float('inf'),
                      ub: float = float('inf')):
        index = sum(slot.kind == kind for slot in self.slots)
        slot = ParamSlot(kind, index)
        self.slots = self.slots + (slot,)
        self.bounds[slot] = (float(lb), float(ub))

    @property
    def n_params(self) -> int:
        return len(self.slots)

    def check_data(self, data: np.ndarray, name: str = 'data'):
        for support in self.supports:
            support(data, name=name)

    def in_bounds(self, slot: ParamSlot, values: np.ndarray) -> bool:
        lb, ub = self.bounds[slot]
        values = np.asarray(values, dtype=float)
        return bool(np.all(values > lb) and np.all(values < ub))

    def valid_parameters(self, params: Mapping[ParamSlot, np.ndarray]) -> bool:
        """Joint constraints between parameters, on top of the bounds
        of each one. Values are arrays with one entry per state."""
        return True

    def resolve(self, params: Mapping) -> Dict[ParamSlot, float]:
        resolved = {ParamSlot.parse(key): value for key, value in params.items()}
        missing = [str(slot) for slot in self.slots if slot not in resolved]
        if len(missing) > 0:
            raise ValueError(f'Missing parameters for {self.name}: {missing}')
        return {slot: float(resolved[slot]) for slot in self.slots}

    def log_pdf(self, data: np.ndarray, params: Mapping) -> np.ndarray:
        data = np.asarray(data, dtype=float)
        self.check_data(data)
        params = self.resolve(params)
        observed = ~np.isnan(data)
        out = np.zeros(data.shape, dtype=float)
        out[observed] = self._log_pdf(data[observed], params)
        return out

    @abstractmethod
    def _log_pdf(self, data: np.ndarray, params: Dict[ParamSlot, float]) -> np.ndarray:
        pass

    def sample(self, n: int, params: Mapping) -> np.ndarray:
        return self._sample(n, self.resolve(params))

    @abstractmethod
    def _sample(self, n: int, params: Dict[ParamSlot, float]) -> np.ndarray:
        pass

    def __eq__(self, other) -> bool:
        return isinstance(other, BaseDistribution) and (self.name == other.name)

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.name!r})'

    def __str__(self) -> str:
        return self.name
