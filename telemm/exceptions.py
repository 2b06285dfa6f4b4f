# -*- coding: utf-8 -*-
#
# exceptions.py
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


class SpecificationError(Exception):
    """ Base class of all the errors raised while assembling
    a model specification. None of them is transient: they all
    point at a misconfiguration that the caller has to fix.
    """
    pass


class DuplicateIdentifier(SpecificationError):
    """ Exception raised when two nodes of a hierarchy share a name,
    when two leaves share a state integer, or when a data stream
    is declared twice.
    """
    pass


class InvalidStateNumbering(SpecificationError):
    """ Exception raised when state integers are not positive,
    not contiguous from 1, or attached to a non-leaf node.
    """
    pass


class UnknownLevel(SpecificationError):
    """ Exception raised when a level name has no counterpart
    in the state hierarchy.
    """
    pass


class UnknownDistributionFamily(SpecificationError):
    """ Exception raised when a distribution family name is not
    part of the catalog.
    """
    pass


class GroupingMismatch(SpecificationError):
    """ Exception raised when parameter groups do not partition
    the full set of states exactly once per parameter.
    """
    pass


class InconsistentSpecification(SpecificationError):
    """ Exception raised when the state hierarchy, the distribution map
    and the constraint matrices do not describe the same model.
    """
    pass


class BadInitialParameters(SpecificationError):
    """ Exception raised when initial parameter values have the wrong
    size, lie outside of their bounds or break an equality constraint.
    """
    pass


class InvalidData(SpecificationError):
    """ Exception raised when observations of a data stream are missing
    or lie outside of the support of the stream's distribution.
    """
    pass


class FittingError(Exception):
    """ Exception raised when the external fitting routine fails,
    either to converge or to validate its inputs.
    """
    pass


class InvalidTelemetry(Exception):
    """ Exception raised when a telemetry table lacks a required column. """
    pass
