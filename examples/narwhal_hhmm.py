import logging

import numpy as np

from telemm import HierarchicalModel
from telemm.logging_config import setup_logging


setup_logging(logging.DEBUG)

# Coarse scale: daily behaviour. Fine scale: dive types within a day.
model = HierarchicalModel.build(
    'narwhal',
    {
        'resident': ['shallow_resident', 'deep_resident', 'rest_resident'],
        'migrating': ['shallow_migrating', 'deep_migrating', 'rest_migrating'],
    },
    {
        'level1': [('step', 'gamma')],
        'level2': [('depth', 'zero-inflated-gamma')],
    },
    constraints={
        # Dive types share their depth distribution across daily behaviours
        'depth': {
            'mean': [['shallow_resident', 'shallow_migrating'],
                     ['deep_resident', 'deep_migrating'],
                     ['rest_resident', 'rest_migrating']],
            'sd': [['shallow_resident', 'shallow_migrating'],
                   ['deep_resident', 'deep_migrating'],
                   ['rest_resident', 'rest_migrating']],
        },
    })

print(model)
print(f'Constraint matrix of depth:\n{model.constraints["depth"].matrix}')

initial = {
    'step': {'mean': [5., 5., 5., 40., 40., 40.], 'sd': [3., 3., 3., 20., 20., 20.]},
    'depth': {'mean': [20., 250., 5.], 'sd': [10., 80., 3.], 'zeromass': [.05] * 6},
}
natural = model.natural_parameters(model.working_parameters(initial))

states = np.repeat([1, 2, 1, 3, 4, 5, 6], 10)
data = model.sample_emissions(states, natural)
log_lik = model.emission_log_likelihood(data, natural)
print(f'Most likely state per time step: {np.argmax(log_lik, axis=1) + 1}')
