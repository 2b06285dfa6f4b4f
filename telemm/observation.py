# -*- coding: utf-8 -*-
#
# observation.py
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
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from telemm.distributions import BaseDistribution, get_family
from telemm.exceptions import DuplicateIdentifier, InconsistentSpecification, UnknownLevel
from telemm.hierarchy import Hierarchy


logger = logging.getLogger(__name__)

Declarations = Mapping[str, Sequence[Tuple[str, Union[str, BaseDistribution]]]]


class DistributionNode:
    """One level of the observation model: the data streams observed at
    that level, each with its distribution family."""

    def __init__(self, name: str, streams=(), children=()):
        self.name: str = name
        self.streams: Tuple[Tuple[str, BaseDistribution], ...] = tuple(streams)
        self.children: Tuple['DistributionNode', ...] = tuple(children)

    @property
    def n_params(self) -> int:
        return sum(family.n_params for _, family in self.streams)

    def walk(self) -> Iterator['DistributionNode']:
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        streams = ', '.join(f'{stream}: {family}' for stream, family in self.streams)
        return f'DistributionNode({self.name!r}, [{streams}])'


class DistributionMap:

    def __init__(self, root: DistributionNode):
        self.root: DistributionNode = root
        self._levels: Dict[str, DistributionNode] = {}
        self._families: Dict[str, BaseDistribution] = {}
        self._stream_levels: Dict[str, str] = {}
        for child in root.children:
            for node in child.walk():
                self._index(node)

    def _index(self, node: DistributionNode):
        self._levels[node.name] = node
        for stream, family in node.streams:
            self._families[stream] = family
            self._stream_levels[stream] = node.name

    @property
    def level_names(self) -> List[str]:
        return list(self._levels.keys())

    @property
    def streams(self) -> Dict[str, BaseDistribution]:
        return dict(self._families)

    @property
    def stream_names(self) -> List[str]:
        return list(self._families.keys())

    def family(self, stream: str) -> BaseDistribution:
        return self._families[stream]

    def level_of(self, stream: str) -> str:
        return self._stream_levels[stream]

    def node(self, level: str) -> DistributionNode:
        return self._levels[level]

    def to_declarations(self) -> Dict[str, List[Tuple[str, str]]]:
        return {
            level: [(stream, family.name) for stream, family in node.streams]
            for level, node in self._levels.items() if len(node.streams) > 0
        }

    def __str__(self) -> str:
        lines = [self.root.name]
        for depth, node in enumerate(self._levels.values(), start=1):
            streams = ', '.join(f'{stream} ~ {family}' for stream, family in node.streams)
            lines.append('    ' * depth + f'{node.name}: {streams or "-"}')
        return '\n'.join(lines)


def build_distribution_map(hierarchy: Hierarchy, declarations: Declarations) -> DistributionMap:
    """Assigns data streams and their distribution families to the
    levels of a state hierarchy.

    Every declaration is checked before any node is built. Levels without
    declared streams are still part of the map, with no streams.

    Raises:
        UnknownLevel: A level is not part of the hierarchy.
        UnknownDistributionFamily: A family is not in the catalog.
        DuplicateIdentifier: A stream is declared more than once.
    """
    known = hierarchy.level_names
    resolved: Dict[str, List[Tuple[str, BaseDistribution]]] = {}
    seen: Dict[str, str] = {}
    for level, streams in declarations.items():
        if level not in known:
            raise UnknownLevel(
                f'Level "{level}" is not part of hierarchy "{hierarchy.root.name}" '
                f'(levels: {", ".join(known)})')
        resolved[level] = []
        for entry in streams:
            if not isinstance(entry, (tuple, list)) or len(entry) != 2:
                raise InconsistentSpecification(
                    f'Expected a (stream, family) pair in level "{level}", got {entry!r}')
            stream, family = entry
            if stream in seen:
                raise DuplicateIdentifier(
                    f'Stream "{stream}" is declared in both "{seen[stream]}" and "{level}"')
            seen[stream] = level
            resolved[level].append((stream, get_family(family)))

    node = None
    for level in reversed(known):
        node = DistributionNode(level, resolved.get(level, ()), () if node is None else (node,))
    distributions = DistributionMap(DistributionNode(hierarchy.root.name, (), (node,)))
    logger.debug(f'Distribution map: {len(seen)} streams over {len(known)} levels')
    return distributions
