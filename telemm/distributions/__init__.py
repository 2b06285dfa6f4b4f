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

import re
from typing import Callable, Dict, Union

from telemm.distributions.base import BaseDistribution
from telemm.distributions.beta import Beta
from telemm.distributions.categorical import Bernoulli, Categorical
from telemm.distributions.circular import VonMises, WrappedCauchy
from telemm.distributions.gamma import Gamma, ZeroInflatedGamma
from telemm.distributions.normal import Normal
from telemm.distributions.poisson import Poisson
from telemm.distributions.positive import Exponential, LogNormal, Weibull
from telemm.exceptions import UnknownDistributionFamily


CATALOG: Dict[str, Callable[[], BaseDistribution]] = {
    'gamma': Gamma,
    'zero-inflated-gamma': ZeroInflatedGamma,
    'weibull': Weibull,
    'lognormal': LogNormal,
    'exponential': Exponential,
    'normal': Normal,
    'von-mises': VonMises,
    'wrapped-cauchy': WrappedCauchy,
    'beta': Beta,
    'poisson': Poisson,
    'bernoulli': Bernoulli,
}

ALIASES: Dict[str, str] = {
    'zigamma': 'zero-inflated-gamma',
    'lnorm': 'lognormal',
    'exp': 'exponential',
    'norm': 'normal',
    'vm': 'von-mises',
    'wrpcauchy': 'wrapped-cauchy',
    'pois': 'poisson',
    'bern': 'bernoulli',
}


def get_family(family: Union[str, BaseDistribution]) -> BaseDistribution:
    """Returns a distribution family from its catalog name.

    Categorical families are requested as ``cat<N>`` (or
    ``categorical<N>``) where N is the number of categories.
    """
    if isinstance(family, BaseDistribution):
        return family
    if not isinstance(family, str):
        raise UnknownDistributionFamily(f'Unknown distribution family: {family!r}')
    name = family.strip().lower().replace('_', '-')
    name = ALIASES.get(name, name)
    if name in CATALOG:
        return CATALOG[name]()
    if name in ('cat', 'categorical'):
        raise UnknownDistributionFamily(
            f'Categorical families need a number of categories, e.g. "cat3" (got "{family}")')
    match = re.fullmatch(r'cat(?:egorical)?(\d+)', name)
    if match is not None and int(match.group(1)) >= 2:
        return Categorical(int(match.group(1)))
    raise UnknownDistributionFamily(f'Unknown distribution family: "{family}"')


__all__ = [
    'BaseDistribution', 'Beta', 'Bernoulli', 'Categorical', 'Exponential',
    'Gamma', 'LogNormal', 'Normal', 'Poisson', 'VonMises', 'Weibull',
    'WrappedCauchy', 'ZeroInflatedGamma', 'CATALOG', 'get_family',
]
