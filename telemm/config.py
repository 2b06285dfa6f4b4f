# -*- coding: utf-8 -*-
#
# config.py
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
from typing import Any, Dict, Mapping

from telemm.exceptions import InconsistentSpecification
from telemm.model import HierarchicalModel


logger = logging.getLogger(__name__)


def model_from_dict(config: Mapping[str, Any]) -> HierarchicalModel:
    """Builds a model from a parsed configuration.

    Expected keys are "root" and "states" (hierarchy description),
    "distributions" (level name to list of [stream, family] pairs)
    and optionally "constraints" (stream name to parameter groupings).
    """
    for key in ('root', 'states'):
        if key not in config:
            raise InconsistentSpecification(f'Model configuration lacks the "{key}" entry')
    return HierarchicalModel.build(
        config['root'],
        config['states'],
        config.get('distributions', {}),
        constraints=config.get('constraints'))


def model_to_dict(model: HierarchicalModel) -> Dict[str, Any]:
    hierarchy = model.hierarchy
    constraints = {}
    for stream, matrix in model.constraints.items():
        groupings = {
            slot: [[hierarchy.node_for_state(state).name for state in group] for group in groups]
            for slot, groups in matrix.to_groupings().items()
        }
        if len(groupings) > 0:
            constraints[stream] = groupings
    return {
        'root': hierarchy.root.name,
        'states': hierarchy.to_description(),
        'distributions': model.distributions.to_declarations(),
        'constraints': constraints,
    }


def load_model(filepath: str) -> HierarchicalModel:
    with open(filepath, 'r') as f:
        config = json.load(f)
    logger.debug(f'Model configuration loaded from {filepath}')
    return model_from_dict(config)


def save_model(model: HierarchicalModel, filepath: str):
    with open(filepath, 'w') as f:
        json.dump(model_to_dict(model), f, indent=2)
