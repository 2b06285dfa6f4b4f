# -*- coding: utf-8 -*-
#
# parameter.py
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

import enum
import math
import re
from abc import ABCMeta, abstractmethod
from typing import NamedTuple, Tuple, Union

import torch


class ParamKind(enum.Enum):
    MEAN = 'mean'
    SD = 'sd'
    ZERO_MASS = 'zeromass'
    CONCENTRATION = 'concentration'
    SHAPE = 'shape'
    SCALE = 'scale'
    RATE = 'rate'
    LOCATION = 'location'
    PROB = 'prob'


class ParamSlot(NamedTuple):
    """Identifies one parameter of a distribution family.

    Families with several parameters of the same kind (beta shapes,
    categorical probabilities) tell them apart by ``index``.
    """

    kind: ParamKind
    index: int = 0

    def __str__(self) -> str:
        if self.index == 0:
            return self.kind.value
        return f'{self.kind.value}{self.index + 1}'

    @staticmethod
    def parse(key: Union['ParamSlot', ParamKind, str]) -> 'ParamSlot':
        if isinstance(key, ParamSlot):
            return key
        if isinstance(key, ParamKind):
            return ParamSlot(key)
        match = re.fullmatch(r'([a-z_]+?)(\d*)', str(key).strip().lower())
        if match is None:
            raise ValueError(f'Invalid parameter name "{key}"')
        name, number = match.groups()
        kind = ParamKind(name.replace('_', ''))
        index = int(number) - 1 if number else 0
        if index < 0:
            raise ValueError(f'Invalid parameter name "{key}"')
        return ParamSlot(kind, index)


class BaseParameter(torch.nn.Module, metaclass=ABCMeta):

    def __init__(self, shape: tuple):
        super().__init__()
        self.raw: torch.nn.Parameter = torch.nn.Parameter(
            torch.zeros(*shape, dtype=torch.float64))

    def get(self) -> torch.Tensor:
        return self.transform(self.raw)

    @abstractmethod
    def transform(self, x: torch.Tensor) -> torch.Tensor:
        pass

    @abstractmethod
    def set(self, x: torch.Tensor):
        pass


class Parameter(BaseParameter):

    def transform(self, x: torch.Tensor) -> torch.Tensor:
        return x

    def set(self, x: torch.Tensor):
        self.raw.data = torch.as_tensor(x, dtype=torch.float64)


class DoublyBoundedParameter(BaseParameter):

    def __init__(self, shape: tuple, lb: float, ub: float):
        super().__init__(shape)
        self.lb: float = lb
        self.ub: float = ub

    def transform(self, x: torch.Tensor) -> torch.Tensor:
        x = torch.sigmoid(x)
        return (self.ub - self.lb) * x + self.lb

    def set(self, x: torch.Tensor):
        x = torch.as_tensor(x, dtype=torch.float64)
        x = (x - self.lb) / (self.ub - self.lb)
        self.raw.data = torch.logit(x)


class PositiveParameter(BaseParameter):

    def transform(self, x: torch.Tensor) -> torch.Tensor:
        return torch.exp(torch.clamp(x, -100, 100))

    def set(self, x: torch.Tensor):
        self.raw.data = torch.log(torch.as_tensor(x, dtype=torch.float64))


def make_parameter(bounds: Tuple[float, float], shape: tuple) -> BaseParameter:
    lb, ub = bounds
    if math.isinf(lb) and math.isinf(ub):
        return Parameter(shape)
    if lb == 0 and math.isinf(ub):
        return PositiveParameter(shape)
    if not (math.isinf(lb) or math.isinf(ub)):
        return DoublyBoundedParameter(shape, lb, ub)
    raise ValueError(f'No link function for bounds ({lb}, {ub})')
