# -*- coding: utf-8 -*-
#
# test_hierarchy.py
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

import pytest

from telemm import (
    DuplicateIdentifier, Hierarchy, HierarchyNode, InconsistentSpecification,
    InvalidStateNumbering, build_hierarchy)


def two_level():
    return build_hierarchy('X', {'A': ['a1', 'a2', 'a3'], 'B': ['b1', 'b2', 'b3']})


def test_states_are_contiguous():
    hierarchy = two_level()
    assert hierarchy.n_states == 6
    assert hierarchy.states == [1, 2, 3, 4, 5, 6]
    assert hierarchy.leaf_names == ['a1', 'a2', 'a3', 'b1', 'b2', 'b3']
    assert [leaf.state for leaf in hierarchy.root.leaves()] == [1, 2, 3, 4, 5, 6]


def test_states_of_various_shapes():
    for sizes in [(1,), (2, 3), (4, 1, 2), (3, 3, 3, 3)]:
        description = {
            f'cat{i}': [f's{i}_{j}' for j in range(size)] for i, size in enumerate(sizes)}
        hierarchy = build_hierarchy('root', description)
        assert hierarchy.states == list(range(1, sum(sizes) + 1))
        for _, node in hierarchy.root.walk():
            assert (node.state is None) != node.is_leaf


def test_levels():
    hierarchy = two_level()
    assert hierarchy.depth == 2
    assert hierarchy.level_names == ['level1', 'level2']
    assert [node.name for node in hierarchy.level('level1')] == ['A', 'B']
    assert len(hierarchy.level('level2')) == 6
    with pytest.raises(KeyError):
        hierarchy.level('level3')


def test_lookup():
    hierarchy = two_level()
    assert hierarchy.node('b2').state == 5
    assert hierarchy.node_for_state(5).name == 'b2'
    assert hierarchy.state_of('a3') == 3
    assert hierarchy.states_under('B') == [4, 5, 6]
    assert hierarchy.states_under('X') == [1, 2, 3, 4, 5, 6]
    assert hierarchy.ancestors('b2') == ['X', 'B']
    assert hierarchy.category_of(5) == 'B'
    assert hierarchy.category_of(5, level='level2') == 'b2'
    assert 'A' in hierarchy
    assert 'C' not in hierarchy
    with pytest.raises(KeyError):
        hierarchy.state_of('A')


def test_duplicate_leaf_name_across_categories():
    with pytest.raises(DuplicateIdentifier):
        build_hierarchy('X', {'A': ['a1', 'a2', 'a3'], 'B': ['b1', 'a2', 'b3']})


def test_duplicate_category_and_root_names():
    with pytest.raises(DuplicateIdentifier):
        build_hierarchy('X', {'A': ['A', 'a2']})
    with pytest.raises(DuplicateIdentifier):
        build_hierarchy('X', {'A': ['X']})


def test_explicit_states():
    hierarchy = build_hierarchy('X', {'A': [('a1', 2), 'a2'], 'B': ['b1']})
    assert hierarchy.state_of('a1') == 2
    assert hierarchy.state_of('a2') == 1
    assert hierarchy.state_of('b1') == 3


def test_duplicate_states():
    with pytest.raises(DuplicateIdentifier):
        build_hierarchy('X', {'A': [('a1', 1), ('a2', 2)], 'B': [('b1', 2)]})


def test_state_numbering_errors():
    with pytest.raises(InvalidStateNumbering):
        build_hierarchy('X', {'A': [('a1', 1), ('a2', 3)]})
    with pytest.raises(InvalidStateNumbering):
        build_hierarchy('X', {'A': [('a1', 0), 'a2']})
    with pytest.raises(InvalidStateNumbering):
        build_hierarchy('X', {'A': [('a1', 'one')]})

    root = HierarchyNode('X')
    root.add_child('A', state=1).add_child('a1')
    with pytest.raises(InvalidStateNumbering):
        Hierarchy(root)


def test_empty_categories():
    with pytest.raises(InconsistentSpecification):
        build_hierarchy('X', {'A': ['a1'], 'B': []})
    with pytest.raises(InconsistentSpecification):
        Hierarchy(HierarchyNode('X'))


def test_hierarchy_is_frozen():
    hierarchy = two_level()
    with pytest.raises(InconsistentSpecification):
        hierarchy.node('A').add_child('a4')
    assert isinstance(hierarchy.root.children, tuple)


def test_node_construction():
    root = HierarchyNode('whale')
    travel = root.add_child('travel')
    travel.add_child('slow')
    travel.add_child('fast')
    root.add_child('rest')
    hierarchy = Hierarchy(root)
    assert hierarchy.leaf_names == ['slow', 'fast', 'rest']
    assert hierarchy.level_names == ['level1', 'level2']
    assert hierarchy.category_of(3) == 'rest'


def test_unbalanced_hierarchy():
    hierarchy = build_hierarchy('X', {'A': {'A1': ['x', 'y']}, 'B': ['z']})
    assert hierarchy.depth == 3
    assert hierarchy.level_names == ['level1', 'level2', 'level3']
    assert [node.name for node in hierarchy.level('level3')] == ['x', 'y']
    assert hierarchy.leaf_names == ['x', 'y', 'z']
    assert hierarchy.category_of(3, level='level2') == 'z'


def test_flat_hierarchy():
    hierarchy = build_hierarchy('r', ['s1', 's2', 's3'])
    assert hierarchy.level_names == ['level1']
    assert hierarchy.states == [1, 2, 3]


def test_description_round_trip():
    hierarchy = build_hierarchy('X', {'A': {'A1': ['x', ('y', 3)]}, 'B': ['z', {'B1': ['w']}]})
    rebuilt = build_hierarchy('X', hierarchy.to_description())
    assert rebuilt.leaf_names == hierarchy.leaf_names
    assert [rebuilt.state_of(name) for name in rebuilt.leaf_names] == \
        [hierarchy.state_of(name) for name in hierarchy.leaf_names]
    assert str(rebuilt) == str(hierarchy)
