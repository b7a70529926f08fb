"""
Unit tests for evodrive.operators.mutation module.
"""

import pytest
import numpy as np

from evodrive.genotype  import Genotype
from evodrive.operators import MutateAll, MutateAllButBestTwo, mutate_genotype


# ============================================================================
# Test mutate_genotype
# ============================================================================

class TestMutateGenotype:
    """Test the mutate_genotype function."""

    def test_zero_probability(self, rng):
        """Test that nothing changes with a mutation probability of 0."""
        genotype = Genotype(np.ones(20))

        mutate_genotype(genotype, 0.0, 2.0, rng)

        np.testing.assert_array_equal(genotype.copy_parameters(), np.ones(20))

    def test_perturbation_bounds(self, rng):
        """Test that every parameter moves by less than the mutation amount."""
        genotype = Genotype(np.zeros(500))

        mutate_genotype(genotype, 1.0, 0.5, rng)
        params = genotype.copy_parameters()

        assert np.all(params >= -0.5)
        assert np.all(params < 0.5)
        assert np.count_nonzero(params) == 500

    def test_mutation_frequency(self, rng):
        """Test that about 'mutation_prob' of the parameters change."""
        genotype = Genotype(np.zeros(5000))

        mutate_genotype(genotype, 0.3, 1.0, rng)

        assert np.count_nonzero(genotype.copy_parameters()) / 5000 == pytest.approx(0.3, abs=0.03)


# ============================================================================
# Test Mutation Operators
# ============================================================================

class TestMutationOperators:
    """Test MutateAll and MutateAllButBestTwo."""

    def test_mutate_all(self, make_population, rng):
        """Test that every genotype changes when everything is mutated."""
        population = make_population([1.0] * 5, parameter_count=10)

        MutateAll(mutation_perc=1.0, mutation_prob=1.0, mutation_amount=1.0)(population, rng)

        for index, genotype in enumerate(population):
            assert np.all(genotype.copy_parameters() != float(index))

    def test_mutate_all_but_best_two(self, make_population, rng):
        """Test that the first two genotypes are never mutated."""
        population = make_population([1.0] * 5, parameter_count=10)

        MutateAllButBestTwo(mutation_perc=1.0, mutation_prob=1.0, mutation_amount=1.0)(population, rng)

        np.testing.assert_array_equal(population[0].copy_parameters(), np.full(10, 0.0))
        np.testing.assert_array_equal(population[1].copy_parameters(), np.full(10, 1.0))
        for index, genotype in enumerate(population[2:], start=2):
            assert np.all(genotype.copy_parameters() != float(index))

    def test_mutate_all_but_best_two_small_population(self, make_population, rng):
        """Test that a population of two is left untouched."""
        population = make_population([1.0, 1.0])

        MutateAllButBestTwo(mutation_prob=1.0)(population, rng)

        np.testing.assert_array_equal(population[1].copy_parameters(), np.full(4, 1.0))

    def test_zero_mutation_percentage(self, make_population, rng):
        """Test that no genotype is mutated when 'mutation_perc' is 0."""
        population = make_population([1.0] * 5)

        MutateAll(mutation_perc=0.0, mutation_prob=1.0)(population, rng)

        for index, genotype in enumerate(population):
            np.testing.assert_array_equal(genotype.copy_parameters(), np.full(4, float(index)))

    def test_default_parameters(self):
        """Test the default mutation parameters."""
        mutation = MutateAllButBestTwo()

        assert mutation.mutation_perc == 1.0
        assert mutation.mutation_prob == 0.3
        assert mutation.mutation_amount == 2.0

    @pytest.mark.parametrize("kwargs", [
        {'mutation_perc': 1.5},
        {'mutation_prob': -0.1},
        {'mutation_amount': -1.0},
    ])
    def test_invalid_parameters(self, kwargs):
        """Test that out-of-range mutation parameters are rejected."""
        with pytest.raises(ValueError):
            MutateAll(**kwargs)
