# -*- coding: utf-8 -*-
#
# constraints.py
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
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from telemm.exceptions import GroupingMismatch
from telemm.parameter import ParamKind, ParamSlot


logger = logging.getLogger(__name__)

SlotKey = Union[ParamSlot, ParamKind, str]
Groupings = Mapping[SlotKey, Sequence[Iterable[int]]]


class ConstraintMatrix:
    """Design matrix forcing groups of states to share parameter values.

    Rows are ordered state-major, parameter-minor: row r describes
    state ``r // n_slots + 1`` and parameter ``slots[r % n_slots]``.
    Columns are ordered parameter-major, group-minor, groups of a given
    parameter being sorted by their smallest state. Each row holds a
    single 1, in the column of the group its state belongs to.
    """

    def __init__(self, n_states: int, slots: Sequence[ParamSlot],
                 groups: Mapping[ParamSlot, Sequence[Tuple[int, ...]]]):
        self.n_states: int = n_states
        self.slots: Tuple[ParamSlot, ...] = tuple(slots)
        self._groups: Dict[ParamSlot, Tuple[Tuple[int, ...], ...]] = {
            slot: tuple(groups[slot]) for slot in self.slots}

        self.row_labels: List[Tuple[int, ParamSlot]] = [
            (state, slot) for state in range(1, n_states + 1) for slot in self.slots]
        self.column_labels: List[Tuple[ParamSlot, Tuple[int, ...]]] = [
            (slot, members) for slot in self.slots for members in self._groups[slot]]

        matrix = np.zeros((len(self.row_labels), len(self.column_labels)), dtype=int)
        for c, (slot, members) in enumerate(self.column_labels):
            for state in members:
                matrix[self.row_index(state, slot), c] = 1
        matrix.setflags(write=False)
        self.matrix: np.ndarray = matrix

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    @property
    def n_free(self) -> int:
        return self.matrix.shape[1]

    @property
    def n_slots(self) -> int:
        return len(self.slots)

    def row_index(self, state: int, slot: SlotKey) -> int:
        return (state - 1) * self.n_slots + self.slots.index(ParamSlot.parse(slot))

    def groups(self, slot: SlotKey) -> Tuple[Tuple[int, ...], ...]:
        return self._groups[ParamSlot.parse(slot)]

    def columns(self, slot: SlotKey) -> List[int]:
        slot = ParamSlot.parse(slot)
        return [c for c, (other, _) in enumerate(self.column_labels) if other == slot]

    def rows(self, slot: SlotKey) -> List[int]:
        return [self.row_index(state, slot) for state in range(1, self.n_states + 1)]

    def block(self, slot: SlotKey) -> np.ndarray:
        """Sub-matrix of one parameter, with one row per state
        and one column per group."""
        return self.matrix[np.ix_(self.rows(slot), self.columns(slot))]

    def group_index(self, slot: SlotKey) -> np.ndarray:
        """Position of each state's group among the groups of a parameter."""
        return np.argmax(self.block(slot), axis=1)

    def is_constrained(self, slot: SlotKey) -> bool:
        return len(self.groups(slot)) < self.n_states

    def expand(self, free):
        """Maps free parameter values (one per column) to the raw vector
        (one value per row)."""
        if isinstance(free, torch.Tensor):
            return torch.tensor(self.matrix.astype(float), dtype=free.dtype) @ free
        free = np.asarray(free, dtype=float)
        if free.shape[0] != self.n_free:
            raise ValueError(f'Expected {self.n_free} free values, got {free.shape[0]}')
        return self.matrix @ free

    def to_groupings(self) -> Dict[str, List[List[int]]]:
        return {
            str(slot): [list(members) for members in self._groups[slot]]
            for slot in self.slots if self.is_constrained(slot)
        }

    def __repr__(self) -> str:
        return f'ConstraintMatrix(shape={self.shape}, slots={[str(s) for s in self.slots]})'


def _partition(n_states: int, slot: ParamSlot, groups: Sequence[Iterable[int]]) -> List[Tuple[int, ...]]:
    if isinstance(groups, (str, bytes)):
        raise GroupingMismatch(f'Groups of "{slot}" must be a list of lists of states')
    seen: Dict[int, int] = {}
    partition = []
    for g, group in enumerate(groups):
        if isinstance(group, (str, bytes)) or not isinstance(group, Iterable):
            raise GroupingMismatch(f'Group {g} of "{slot}" must be a list of states, got {group!r}')
        members = tuple(group)
        if len(members) == 0:
            raise GroupingMismatch(f'Group {g} of "{slot}" is empty')
        for state in members:
            if isinstance(state, bool) or not isinstance(state, (int, np.integer)):
                raise GroupingMismatch(f'Group {g} of "{slot}" holds a non-integer state {state!r}')
            if not (1 <= state <= n_states):
                raise GroupingMismatch(
                    f'State {state} in group {g} of "{slot}" is outside of 1..{n_states}')
            if state in seen:
                raise GroupingMismatch(
                    f'State {state} of "{slot}" appears in both group {seen[state]} and group {g}')
            seen[state] = g
        partition.append(tuple(sorted(int(state) for state in members)))
    omitted = sorted(set(range(1, n_states + 1)) - set(seen.keys()))
    if len(omitted) > 0:
        raise GroupingMismatch(f'States {omitted} of "{slot}" are not in any group')
    return sorted(partition, key=lambda members: members[0])


def build_constraint_matrix(n_states: int, slots: Sequence[SlotKey],
                            groupings: Optional[Groupings] = None) -> ConstraintMatrix:
    """Builds the 0/1 design matrix of a data stream.

    Args:
        n_states: Number of states (leaves of the hierarchy).
        slots: Ordered parameters of the stream's distribution family.
        groupings: For each constrained parameter, a partition of the
            states 1..n_states into equality groups. Parameters left out
            are unconstrained: every state gets its own column.

    Raises:
        GroupingMismatch: A grouping is not an exact partition of the
            states, or names a parameter that is not in `slots`.
    """
    if n_states < 1:
        raise GroupingMismatch(f'Number of states must be positive, got {n_states}')
    slots = [ParamSlot.parse(slot) for slot in slots]
    groups: Dict[ParamSlot, List[Tuple[int, ...]]] = {
        slot: [(state,) for state in range(1, n_states + 1)] for slot in slots}
    for key, partition in (groupings or {}).items():
        try:
            slot = ParamSlot.parse(key)
        except ValueError as e:
            raise GroupingMismatch(f'Unknown parameter "{key}"') from e
        if slot not in groups:
            raise GroupingMismatch(
                f'Parameter "{slot}" is not one of {", ".join(str(s) for s in slots)}')
        groups[slot] = _partition(n_states, slot, partition)
    matrix = ConstraintMatrix(n_states, slots, groups)
    logger.debug(f'Constraint matrix of shape {matrix.shape} built for {n_states} states')
    return matrix
