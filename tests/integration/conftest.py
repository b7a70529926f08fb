"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np

from evodrive.run.config import Config


@pytest.fixture
def target_inputs():
    """Input patterns of the target mapping."""
    return np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0], [0.0, 0.0]])


@pytest.fixture
def target_outputs():
    """Expected outputs of the target mapping: the first input passes, the second is ignored."""
    return np.array([1.0, 0.0, 1.0, 0.0])


@pytest.fixture
def evolution_config():
    """A seeded configuration for a small evolution run."""
    config = Config()
    config.population_size        = 30
    config.topology               = (2, 3, 1)
    config.activation             = 'sigmoid'
    config.seed                   = 42
    config.restart_after          = 0
    config.max_restarts           = 0
    config.max_number_generations = 40
    return config
