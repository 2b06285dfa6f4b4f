# -*- coding: utf-8 -*-
#
# model.py
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

import logging
import numbers
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import torch

from telemm.constraints import ConstraintMatrix, build_constraint_matrix
from telemm.exceptions import (
    BadInitialParameters, FittingError, GroupingMismatch,
    InconsistentSpecification, InvalidData)
from telemm.fitting import BaseFitter
from telemm.hierarchy import Description, Hierarchy, build_hierarchy
from telemm.observation import Declarations, DistributionMap, build_distribution_map
from telemm.parameter import BaseParameter, ParamSlot, make_parameter


logger = logging.getLogger(__name__)


def _to_numpy(values) -> np.ndarray:
    if isinstance(values, torch.Tensor):
        values = values.detach().cpu().numpy()
    return np.atleast_1d(np.asarray(values, dtype=float))


class HierarchicalModel:
    """State hierarchy, observation model and parameter constraints
    of a hierarchical HMM, checked for mutual consistency.

    Streams without an explicit constraint matrix are unconstrained:
    every state has its own value for every parameter.
    """

    def __init__(self, hierarchy: Hierarchy, distributions: DistributionMap,
                 constraints: Optional[Mapping[str, ConstraintMatrix]] = None):
        self.hierarchy: Hierarchy = hierarchy
        self.distributions: DistributionMap = distributions
        constraints = dict(constraints or {})
        self._check(constraints)
        self.constraints: Dict[str, ConstraintMatrix] = {}
        for stream, family in distributions.streams.items():
            if stream in constraints:
                self.constraints[stream] = constraints[stream]
            else:
                self.constraints[stream] = build_constraint_matrix(hierarchy.n_states, family.slots)

    def _check(self, constraints: Mapping[str, ConstraintMatrix]):
        if self.distributions.level_names != self.hierarchy.level_names:
            raise InconsistentSpecification(
                f'Distribution levels {self.distributions.level_names} do not match '
                f'hierarchy levels {self.hierarchy.level_names}')
        for stream, matrix in constraints.items():
            if stream not in self.distributions.streams:
                raise InconsistentSpecification(f'Constraints given for unknown stream "{stream}"')
            if matrix.n_states != self.hierarchy.n_states:
                raise InconsistentSpecification(
                    f'Constraints of "{stream}" cover {matrix.n_states} states, '
                    f'hierarchy has {self.hierarchy.n_states}')
            family = self.distributions.family(stream)
            if matrix.slots != family.slots:
                raise InconsistentSpecification(
                    f'Constraints of "{stream}" do not match the parameters of {family.name}')

    @classmethod
    def build(cls, root: str, states: Description, distributions: Declarations,
              constraints: Optional[Mapping[str, Mapping]] = None) -> 'HierarchicalModel':
        """Builds the hierarchy, the distribution map and the constraint
        matrices in one go.

        Groups in `constraints` may refer to states by integer, by leaf
        name, or by category name (standing for all the states below it).
        """
        hierarchy = build_hierarchy(root, states)
        distribution_map = build_distribution_map(hierarchy, distributions)
        matrices = {}
        for stream, groupings in (constraints or {}).items():
            if stream not in distribution_map.streams:
                raise InconsistentSpecification(f'Constraints given for unknown stream "{stream}"')
            resolved = {
                key: [resolve_group(hierarchy, group) for group in groups]
                for key, groups in groupings.items()
            }
            family = distribution_map.family(stream)
            matrices[stream] = build_constraint_matrix(hierarchy.n_states, family.slots, resolved)
        return cls(hierarchy, distribution_map, matrices)

    @property
    def n_states(self) -> int:
        return self.hierarchy.n_states

    @property
    def n_free(self) -> int:
        return sum(matrix.n_free for matrix in self.constraints.values())

    @property
    def stream_names(self) -> List[str]:
        return self.distributions.stream_names

    def check_data(self, data) -> int:
        """Checks every stream of `data` (a mapping or a data frame)
        against the support of its family and returns the number of
        time steps."""
        lengths = set()
        for stream, family in self.distributions.streams.items():
            try:
                column = data[stream]
            except KeyError:
                raise InvalidData(f'Missing data stream "{stream}"')
            column = np.asarray(column, dtype=float)
            family.check_data(column, name=stream)
            lengths.add(len(column))
        if len(lengths) > 1:
            raise InvalidData(f'Data streams have different lengths: {sorted(lengths)}')
        return lengths.pop() if lengths else 0

    def working_parameters(self, initial: Mapping[str, Mapping]) -> Dict[str, Dict[ParamSlot, BaseParameter]]:
        """Converts natural-scale initial values to working-scale parameters.

        Args:
            initial: For each stream, a mapping from parameter to values,
                either one per state or one per group of the stream's
                constraint matrix. States of a group must share their value.

        Returns:
            For each stream and parameter, a `BaseParameter` holding one
            free value per group.
        """
        parameters = {}
        for stream, family in self.distributions.streams.items():
            if stream not in initial:
                raise BadInitialParameters(f'No initial values for stream "{stream}"')
            try:
                values = {ParamSlot.parse(key): value for key, value in initial[stream].items()}
            except ValueError as e:
                raise BadInitialParameters(f'Stream "{stream}": {e}') from e
            unknown = [str(slot) for slot in values if slot not in family.slots]
            if len(unknown) > 0:
                raise BadInitialParameters(f'Stream "{stream}" has no parameters {unknown}')
            matrix = self.constraints[stream]
            parameters[stream] = {}
            per_state = {}
            for slot in family.slots:
                if slot not in values:
                    raise BadInitialParameters(f'No initial value for "{slot}" of stream "{stream}"')
                free = self._free_values(stream, slot, _to_numpy(values[slot]))
                if not family.in_bounds(slot, free):
                    lb, ub = family.bounds[slot]
                    raise BadInitialParameters(
                        f'Initial "{slot}" of stream "{stream}" must lie in ({lb}, {ub}), got {free}')
                per_state[slot] = free[matrix.group_index(slot)]
                param = make_parameter(family.bounds[slot], (len(free),))
                param.set(torch.as_tensor(free, dtype=torch.float64))
                parameters[stream][slot] = param
            if not family.valid_parameters(per_state):
                raise BadInitialParameters(
                    f'Initial values of stream "{stream}" are not valid {family.name} parameters')
        return parameters

    def _free_values(self, stream: str, slot: ParamSlot, x: np.ndarray) -> np.ndarray:
        groups = self.constraints[stream].groups(slot)
        if len(x) == self.n_states:
            free = []
            for members in groups:
                shared = x[np.asarray(members) - 1]
                if not np.allclose(shared, shared[0]):
                    raise BadInitialParameters(
                        f'States {list(members)} share "{slot}" of stream "{stream}" '
                        f'but have different initial values {shared.tolist()}')
                free.append(shared[0])
            return np.asarray(free, dtype=float)
        if len(x) == len(groups):
            return x
        raise BadInitialParameters(
            f'Expected {self.n_states} or {len(groups)} initial values for "{slot}" '
            f'of stream "{stream}", got {len(x)}')

    def natural_parameters(self, working: Mapping[str, Mapping[ParamSlot, BaseParameter]]
                           ) -> Dict[str, Dict[ParamSlot, torch.Tensor]]:
        """Expands free working-scale parameters into one natural-scale
        value per state, through each stream's constraint matrix."""
        natural = {}
        for stream, params in working.items():
            matrix = self.constraints[stream]
            free = torch.cat([params[slot].raw for slot in matrix.slots])
            raw = matrix.expand(free).reshape(self.n_states, matrix.n_slots)
            natural[stream] = {
                slot: params[slot].transform(raw[:, j]) for j, slot in enumerate(matrix.slots)}
        return natural

    def _state_parameters(self, stream: str, natural: Mapping) -> List[Dict[ParamSlot, float]]:
        family = self.distributions.family(stream)
        if stream not in natural:
            raise ValueError(f'No parameters for stream "{stream}"')
        values = {ParamSlot.parse(key): _to_numpy(value) for key, value in natural[stream].items()}
        for slot in family.slots:
            if slot not in values or len(values[slot]) != self.n_states:
                raise ValueError(f'Expected {self.n_states} values for "{slot}" of stream "{stream}"')
        return [{slot: values[slot][i] for slot in family.slots} for i in range(self.n_states)]

    def emission_log_likelihood(self, data, natural: Mapping[str, Mapping]) -> np.ndarray:
        """Log-density of every time step under every state, summed over
        streams. Missing observations contribute nothing."""
        n_steps = self.check_data(data)
        log_lik = np.zeros((n_steps, self.n_states), dtype=float)
        for stream, family in self.distributions.streams.items():
            x = np.asarray(data[stream], dtype=float)
            for i, params in enumerate(self._state_parameters(stream, natural)):
                log_lik[:, i] += family.log_pdf(x, params)
        return log_lik

    def sample_emissions(self, states: Sequence[int], natural: Mapping[str, Mapping]) -> Dict[str, np.ndarray]:
        """Draws one observation per time step and stream given a state sequence."""
        states = np.asarray(states, dtype=int)
        if np.any(states < 1) or np.any(states > self.n_states):
            raise ValueError(f'States must lie in 1..{self.n_states}')
        data = {}
        for stream, family in self.distributions.streams.items():
            per_state = self._state_parameters(stream, natural)
            data[stream] = np.empty(len(states), dtype=float)
            for state in np.unique(states):
                idx = np.where(states == state)[0]
                data[stream][idx] = family.sample(len(idx), per_state[state - 1])
        return data

    def fit(self, data, initial: Mapping[str, Mapping], fitter: BaseFitter):
        """Validates the data and initial values, then hands the model
        over to an external estimation engine."""
        n_steps = self.check_data(data)
        parameters = self.working_parameters(initial)
        logger.info(
            f'Fitting {self.n_states}-state model ({self.n_free} free emission parameters) '
            f'on {n_steps} time steps with {fitter.__class__.__name__}')
        try:
            return fitter.fit(self, data, parameters)
        except FittingError:
            raise
        except Exception as e:
            raise FittingError(f'{fitter.__class__.__name__} failed: {e}') from e

    def __str__(self) -> str:
        return f'{self.hierarchy}\n\n{self.distributions}'


def resolve_group(hierarchy: Hierarchy, group) -> List[int]:
    """Turns a group of state integers, leaf names or category names
    into a list of state integers."""
    if isinstance(group, (str, numbers.Integral)):
        group = [group]
    elif not isinstance(group, Iterable):
        raise GroupingMismatch(f'Invalid group of states: {group!r}')
    states = []
    for item in group:
        if isinstance(item, str):
            if item not in hierarchy:
                raise GroupingMismatch(f'Unknown state or category "{item}"')
            states.extend(hierarchy.states_under(item))
        else:
            states.append(item)
    return states
