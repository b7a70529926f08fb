"""
Unit tests for evodrive.operators.fitness module.
"""

import pytest

from evodrive.operators import RelativeFitness


class TestRelativeFitness:
    """Test RelativeFitness."""

    def test_fitness_relative_to_average(self, make_population):
        """Test that fitness is the evaluation divided by the average evaluation."""
        population = make_population([2.0, 4.0, 6.0])

        RelativeFitness()(population)

        assert [g.fitness for g in population] == pytest.approx([0.5, 1.0, 1.5])

    def test_fitness_sums_to_population_size(self, make_population):
        """Test that relative fitness values add up to the population size."""
        population = make_population([0.1, 0.9, 0.35, 0.0, 0.6])

        RelativeFitness()(population)

        assert sum(g.fitness for g in population) == pytest.approx(5.0)

    def test_zero_average(self, make_population):
        """Test that an all-zero evaluation yields zero fitness everywhere."""
        population = make_population([0.0, 0.0, 0.0])
        for genotype in population:
            genotype.fitness = 7.0

        RelativeFitness()(population)

        assert all(g.fitness == 0.0 for g in population)

    def test_evaluations_untouched(self, make_population):
        """Test that the evaluations are not modified."""
        population = make_population([1.0, 3.0])

        RelativeFitness()(population)

        assert [g.evaluation for g in population] == [1.0, 3.0]

    def test_empty_population(self):
        """Test that an empty population is accepted."""
        RelativeFitness()([])
