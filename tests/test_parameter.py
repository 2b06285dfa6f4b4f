# -*- coding: utf-8 -*-
#
# test_parameter.py
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
import pytest
import torch
from numpy.testing import assert_array_almost_equal

from telemm import ParamKind, ParamSlot
from telemm.parameter import DoublyBoundedParameter, Parameter, PositiveParameter, make_parameter


def test_parse_slots():
    assert ParamSlot.parse('mean') == ParamSlot(ParamKind.MEAN, 0)
    assert ParamSlot.parse('prob2') == ParamSlot(ParamKind.PROB, 1)
    assert ParamSlot.parse('prob1') == ParamSlot(ParamKind.PROB, 0)
    assert ParamSlot.parse('zero_mass') == ParamSlot(ParamKind.ZERO_MASS)
    assert ParamSlot.parse(ParamKind.SD) == ParamSlot(ParamKind.SD)
    slot = ParamSlot(ParamKind.SHAPE, 1)
    assert ParamSlot.parse(slot) is slot
    assert str(slot) == 'shape2'
    assert ParamSlot.parse(str(slot)) == slot
    for key in ['foo', 'mean0', 'mean-1']:
        with pytest.raises(ValueError):
            ParamSlot.parse(key)


def test_make_parameter():
    inf = float('inf')
    assert isinstance(make_parameter((-inf, inf), (2,)), Parameter)
    assert isinstance(make_parameter((0, inf), (2,)), PositiveParameter)
    assert isinstance(make_parameter((0, 1), (2,)), DoublyBoundedParameter)
    with pytest.raises(ValueError):
        make_parameter((1, inf), (2,))


def test_set_get():
    values = np.array([0.2, 3., 40.])
    param = PositiveParameter((3,))
    param.set(torch.as_tensor(values))
    assert_array_almost_equal(param.get().detach().numpy(), values)
    assert_array_almost_equal(param.raw.detach().numpy(), np.log(values))

    param = DoublyBoundedParameter((2,), -np.pi, np.pi)
    param.set(torch.as_tensor([-3., 1.]))
    assert_array_almost_equal(param.get().detach().numpy(), [-3., 1.])

    param = Parameter((2,))
    param.set(torch.as_tensor([-5., 5.]))
    assert_array_almost_equal(param.get().detach().numpy(), [-5., 5.])
