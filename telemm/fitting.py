# -*- coding: utf-8 -*-
#
# fitting.py
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
from typing import Any, Dict

from telemm.parameter import BaseParameter, ParamSlot


class BaseFitter(metaclass=ABCMeta):
    """Entry point of an external estimation engine.

    The engine receives a validated model specification, the observed
    data and one working-scale parameter per stream and parameter,
    holding the free (constrained) values as ``torch`` tensors. It returns
    a fitted model object of its own, or raises `telemm.exceptions.FittingError`
    when it fails to converge or rejects its inputs.
    """

    @abstractmethod
    def fit(self, model, data, parameters: Dict[str, Dict[ParamSlot, BaseParameter]]) -> Any:
        pass
