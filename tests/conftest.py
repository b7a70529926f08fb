"""Pytest configuration and shared fixtures."""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_population():
    """Create a population of genotypes with the given fitness values."""
    from evodrive.genotype import Genotype

    def _make(fitness_values, parameter_count=4):
        population = []
        for index, fitness in enumerate(fitness_values):
            genotype = Genotype(np.full(parameter_count, float(index)))
            genotype.fitness = fitness
            genotype.evaluation = fitness
            population.append(genotype)
        return population

    return _make
