# -*- coding: utf-8 -*-
#
# hierarchy.py
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
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from telemm.exceptions import DuplicateIdentifier, InconsistentSpecification, InvalidStateNumbering


logger = logging.getLogger(__name__)

Description = Union[Mapping[str, 'Description'], Sequence[Union[str, Tuple[str, int], Mapping]]]


class HierarchyNode:
    """Node of a state hierarchy.

    Leaves are the primitive behavioural states and carry a state
    integer, internal nodes are coarse-scale categories and carry none.
    Children are owned by their parent: nodes keep no reference
    to their parent.
    """

    def __init__(self, name: str, state: Optional[int] = None):
        self.name: str = str(name)
        self.state: Optional[int] = state
        self.children: List['HierarchyNode'] = []
        self._frozen: bool = False

    def add_child(self, name: str, state: Optional[int] = None) -> 'HierarchyNode':
        if self._frozen:
            raise InconsistentSpecification(
                f'Cannot add "{name}" to "{self.name}": hierarchy is already built')
        child = HierarchyNode(name, state=state)
        self.children.append(child)
        return child

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, 'HierarchyNode']]:
        """Depth-first, left-to-right, pre-order traversal."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def leaves(self) -> List['HierarchyNode']:
        return [node for _, node in self.walk() if node.is_leaf]

    def freeze(self):
        for _, node in self.walk():
            node._frozen = True
            node.children = tuple(node.children)

    def __repr__(self) -> str:
        if self.state is None:
            return f'HierarchyNode({self.name!r}, children={len(self.children)})'
        return f'HierarchyNode({self.name!r}, state={self.state})'


class Hierarchy:
    """Validated, immutable state hierarchy with a flat lookup table.

    The children of the root form level "level1", their children
    form "level2", and so on down to the deepest leaves.
    """

    def __init__(self, root: HierarchyNode):
        self.root: HierarchyNode = root
        self._by_name: Dict[str, HierarchyNode] = {}
        self._by_state: Dict[int, HierarchyNode] = {}
        self._depths: Dict[str, int] = {}
        self._parents: Dict[str, Optional[str]] = {}
        self._index()
        self.root.freeze()

    def _index(self):
        if self.root.is_leaf:
            raise InconsistentSpecification(f'Hierarchy "{self.root.name}" has no states')

        claimed: Dict[int, str] = {}
        unnumbered: List[HierarchyNode] = []
        stack: List[Tuple[HierarchyNode, Optional[str], int]] = [(self.root, None, 0)]
        while stack:
            node, parent, depth = stack.pop()
            if node.name in self._by_name:
                raise DuplicateIdentifier(f'Node name "{node.name}" is used more than once')
            self._by_name[node.name] = node
            self._parents[node.name] = parent
            self._depths[node.name] = depth
            stack.extend((child, node.name, depth + 1) for child in reversed(node.children))

            if not node.is_leaf:
                if node.state is not None:
                    raise InvalidStateNumbering(
                        f'Category "{node.name}" cannot carry a state integer')
            elif node.state is None:
                unnumbered.append(node)
            else:
                state = node.state
                if isinstance(state, bool) or not isinstance(state, int) or state < 1:
                    raise InvalidStateNumbering(
                        f'State of "{node.name}" must be a positive integer, got {state!r}')
                if state in claimed:
                    raise DuplicateIdentifier(
                        f'State {state} is used by both "{claimed[state]}" and "{node.name}"')
                claimed[state] = node.name

        # Leaves without an explicit state take the next free integers,
        # in depth-first order
        assignment: Dict[int, HierarchyNode] = {}
        state = 1
        for node in unnumbered:
            while state in claimed:
                state += 1
            assignment[state] = node
            state += 1

        n_states = len(claimed) + len(unnumbered)
        used = set(claimed.keys()) | set(assignment.keys())
        if used != set(range(1, n_states + 1)):
            raise InvalidStateNumbering(
                f'States must be numbered 1 to {n_states} without gaps, got {sorted(used)}')

        for state, node in assignment.items():
            node.state = state
        for node in self.root.leaves():
            self._by_state[node.state] = node
        logger.debug(f'Hierarchy "{self.root.name}": {n_states} states, {self.depth} levels')

    @property
    def n_states(self) -> int:
        return len(self._by_state)

    @property
    def states(self) -> List[int]:
        return sorted(self._by_state.keys())

    @property
    def leaf_names(self) -> List[str]:
        return [self._by_state[state].name for state in self.states]

    @property
    def depth(self) -> int:
        return max(self._depths.values())

    @property
    def level_names(self) -> List[str]:
        return [f'level{k}' for k in range(1, self.depth + 1)]

    def level(self, name: str) -> List[HierarchyNode]:
        """Nodes of a level, in depth-first order."""
        if name not in self.level_names:
            raise KeyError(name)
        k = self.level_names.index(name) + 1
        return [node for depth, node in self.root.walk() if depth == k]

    def node(self, name: str) -> HierarchyNode:
        return self._by_name[name]

    def node_for_state(self, state: int) -> HierarchyNode:
        return self._by_state[state]

    def state_of(self, name: str) -> int:
        node = self._by_name[name]
        if not node.is_leaf:
            raise KeyError(f'"{name}" is a category, not a state')
        return node.state

    def states_under(self, name: str) -> List[int]:
        return sorted(leaf.state for leaf in self._by_name[name].leaves())

    def ancestors(self, name: str) -> List[str]:
        """Names from the root down to the parent of the given node."""
        path = []
        parent = self._parents[name]
        while parent is not None:
            path.append(parent)
            parent = self._parents[parent]
        return path[::-1]

    def category_of(self, state: int, level: str = 'level1') -> str:
        name = self._by_state[state].name
        k = self.level_names.index(level) + 1
        path = self.ancestors(name) + [name]
        return path[min(k, len(path) - 1)]

    def to_description(self) -> Description:
        return _describe(self.root)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return self.n_states

    def __str__(self) -> str:
        lines = []
        for depth, node in self.root.walk():
            label = node.name if node.state is None else f'{node.name} [{node.state}]'
            lines.append('    ' * depth + label)
        return '\n'.join(lines)


def _describe(node: HierarchyNode) -> Description:
    if all(not child.is_leaf for child in node.children):
        return {child.name: _describe(child) for child in node.children}
    items = []
    for child in node.children:
        if child.is_leaf:
            items.append((child.name, child.state))
        else:
            items.append({child.name: _describe(child)})
    return items


def _attach(parent: HierarchyNode, description: Description):
    if isinstance(description, Mapping):
        for name, sub in description.items():
            if not isinstance(sub, (Mapping, list, tuple)) or len(sub) == 0:
                raise InconsistentSpecification(f'Category "{name}" has no states')
            _attach(parent.add_child(name), sub)
        return
    if isinstance(description, (str, bytes)):
        raise InconsistentSpecification(
            f'Children of "{parent.name}" must be a list or a mapping, got "{description}"')
    for item in description:
        if isinstance(item, str):
            parent.add_child(item)
        elif isinstance(item, Mapping):
            _attach(parent, item)
        elif isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[0], str):
            parent.add_child(item[0], state=item[1])
        else:
            raise InconsistentSpecification(f'Invalid state description: {item!r}')


def build_hierarchy(root: str, description: Description) -> Hierarchy:
    """Builds a state hierarchy from a nested description.

    Args:
        root: Name of the root node.
        description: Mapping from category names to their children. Children
            are either a nested mapping of sub-categories or a list of
            leaves, where a leaf is a state name or a (name, state) pair.
            A plain list of leaves describes a single-level model.

    Returns:
        A validated hierarchy. Leaves without an explicit state are
        numbered depth-first, left to right.

    Raises:
        DuplicateIdentifier: Two nodes share a name, or two leaves share a state.
        InvalidStateNumbering: States are not exactly 1 to n.
        InconsistentSpecification: A category has no children.
    """
    root_node = HierarchyNode(root)
    _attach(root_node, description)
    return Hierarchy(root_node)
