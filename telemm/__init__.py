# -*- coding: utf-8 -*-
#
# __init__.py
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

from telemm.constraints import ConstraintMatrix, build_constraint_matrix
from telemm.distributions import get_family
from telemm.exceptions import (
    BadInitialParameters, DuplicateIdentifier, FittingError, GroupingMismatch,
    InconsistentSpecification, InvalidData, InvalidStateNumbering, InvalidTelemetry,
    SpecificationError, UnknownDistributionFamily, UnknownLevel)
from telemm.fitting import BaseFitter
from telemm.hierarchy import Hierarchy, HierarchyNode, build_hierarchy
from telemm.model import HierarchicalModel
from telemm.observation import DistributionMap, DistributionNode, build_distribution_map
from telemm.parameter import ParamKind, ParamSlot

__version__ = '1.0.0'
