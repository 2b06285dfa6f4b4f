# -*- coding: utf-8 -*-
#
# test_config.py
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

import json
import logging

import pytest
from numpy.testing import assert_array_equal

from telemm import InconsistentSpecification, UnknownLevel
from telemm.config import load_model, model_from_dict, model_to_dict, save_model
from telemm.logging_config import get_logger, setup_logging


CONFIG = {
    'root': 'narwhal',
    'states': {'resting': ['rest1', 'rest2'], 'foraging': ['dive1', 'dive2']},
    'distributions': {
        'level1': [['step', 'gamma']],
        'level2': [['depth', 'zero-inflated-gamma']],
    },
    'constraints': {'depth': {'mean': [['dive1', 'rest1'], ['dive2', 'rest2']]}},
}


def test_model_from_dict():
    model = model_from_dict(CONFIG)
    assert model.hierarchy.leaf_names == ['rest1', 'rest2', 'dive1', 'dive2']
    assert model.distributions.level_of('depth') == 'level2'
    assert model.constraints['depth'].groups('mean') == ((1, 3), (2, 4))


def test_model_to_dict():
    config = model_to_dict(model_from_dict(CONFIG))
    assert config['root'] == 'narwhal'
    assert config['states'] == {
        'resting': [('rest1', 1), ('rest2', 2)],
        'foraging': [('dive1', 3), ('dive2', 4)]}
    assert config['distributions'] == {
        'level1': [('step', 'gamma')],
        'level2': [('depth', 'zero-inflated-gamma')]}
    assert config['constraints'] == {'depth': {'mean': [['rest1', 'dive1'], ['rest2', 'dive2']]}}


def test_load_and_save(tmp_path):
    filepath = tmp_path / 'narwhal.json'
    filepath.write_text(json.dumps(CONFIG))
    model = load_model(str(filepath))
    copy_path = tmp_path / 'copy.json'
    save_model(model, str(copy_path))
    copy = load_model(str(copy_path))
    assert copy.hierarchy.leaf_names == model.hierarchy.leaf_names
    assert copy.distributions.to_declarations() == model.distributions.to_declarations()
    for stream in model.stream_names:
        assert_array_equal(copy.constraints[stream].matrix, model.constraints[stream].matrix)


def test_invalid_configurations():
    with pytest.raises(InconsistentSpecification):
        model_from_dict({'states': CONFIG['states']})
    config = dict(CONFIG, distributions={'level3': [['depth', 'gamma']]})
    with pytest.raises(UnknownLevel):
        model_from_dict(config)


def test_setup_logging(tmp_path):
    log_file = tmp_path / 'telemm.log'
    setup_logging(logging.WARNING, log_file=str(log_file))
    root_logger = logging.getLogger()
    try:
        assert len(root_logger.handlers) == 2
        get_logger('telemm.test').debug('built')
        for handler in root_logger.handlers:
            handler.flush()
        assert 'built' in log_file.read_text()
    finally:
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers = []
