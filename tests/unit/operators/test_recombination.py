"""
Unit tests for evodrive.operators.recombination module.
"""

import pytest
import numpy as np

from evodrive.exceptions import InvalidOperatorInput
from evodrive.genotype   import Genotype
from evodrive.operators  import RandomRecombination, complete_crossover


# ============================================================================
# Test complete_crossover
# ============================================================================

class TestCompleteCrossover:
    """Test the complete_crossover function."""

    def test_no_swap(self, rng):
        """Test that a swap probability of 0 reproduces the parents."""
        p1, p2 = Genotype(np.zeros(10)), Genotype(np.ones(10))

        c1, c2 = complete_crossover(p1, p2, 0.0, rng)

        np.testing.assert_array_equal(c1.copy_parameters(), np.zeros(10))
        np.testing.assert_array_equal(c2.copy_parameters(), np.ones(10))

    def test_full_swap(self, rng):
        """Test that a swap probability of 1 exchanges the parents."""
        p1, p2 = Genotype(np.zeros(10)), Genotype(np.ones(10))

        c1, c2 = complete_crossover(p1, p2, 1.0, rng)

        np.testing.assert_array_equal(c1.copy_parameters(), np.ones(10))
        np.testing.assert_array_equal(c2.copy_parameters(), np.zeros(10))

    def test_offspring_are_complementary(self, rng):
        """Test that at every position the offspring hold one value of each parent."""
        p1, p2 = Genotype(np.zeros(200)), Genotype(np.ones(200))

        c1, c2 = complete_crossover(p1, p2, 0.6, rng)

        np.testing.assert_array_equal(c1.copy_parameters() + c2.copy_parameters(), np.ones(200))
        assert 0 < np.count_nonzero(c1.copy_parameters()) < 200

    def test_parents_untouched(self, rng):
        """Test that crossover creates new genotypes and leaves the parents alone."""
        p1, p2 = Genotype(np.zeros(5)), Genotype(np.ones(5))

        c1, c2 = complete_crossover(p1, p2, 1.0, rng)

        assert c1 is not p1 and c2 is not p2
        np.testing.assert_array_equal(p1.copy_parameters(), np.zeros(5))

    def test_parameter_count_mismatch(self, rng):
        """Test that parents of different lengths are rejected."""
        with pytest.raises(InvalidOperatorInput):
            complete_crossover(Genotype(np.zeros(3)), Genotype(np.zeros(4)), 0.5, rng)


# ============================================================================
# Test RandomRecombination
# ============================================================================

class TestRandomRecombination:
    """Test RandomRecombination."""

    def test_exact_population_size(self, make_population, rng):
        """Test that exactly the requested number of genotypes is created."""
        intermediate = make_population([1.0, 1.0, 1.0])

        for size in (2, 3, 10, 11):
            assert len(RandomRecombination()(intermediate, size, rng)) == size

    def test_best_two_carried_over(self, make_population, rng):
        """Test that the first two intermediate genotypes are kept unmodified."""
        intermediate = make_population([1.0, 1.0, 1.0, 1.0])

        new_population = RandomRecombination()(intermediate, 10, rng)

        assert new_population[0] is intermediate[0]
        assert new_population[1] is intermediate[1]

    def test_two_genotypes_only(self, make_population, rng):
        """Test the smallest valid intermediate population."""
        intermediate = make_population([1.0, 1.0])

        new_population = RandomRecombination()(intermediate, 6, rng)

        assert len(new_population) == 6
        assert new_population[0] is intermediate[0]
        assert new_population[1] is intermediate[1]

    def test_too_small_intermediate_population(self, make_population, rng):
        """Test that fewer than two genotypes raise InvalidOperatorInput."""
        with pytest.raises(InvalidOperatorInput):
            RandomRecombination()(make_population([1.0]), 5, rng)

    def test_offspring_without_swap(self, make_population, rng):
        """Test that offspring are copies of two distinct parents when nothing is swapped."""
        intermediate = make_population([1.0, 1.0, 1.0], parameter_count=3)

        new_population = RandomRecombination(swap_prob=0.0)(intermediate, 20, rng)

        for genotype in new_population[2:]:
            assert genotype.copy_parameters()[0] in (0.0, 1.0, 2.0)
            assert len(set(genotype.copy_parameters())) == 1
            assert all(genotype is not parent for parent in intermediate)

    def test_invalid_swap_probability(self):
        """Test that a swap probability outside [0, 1] is rejected."""
        with pytest.raises(ValueError):
            RandomRecombination(swap_prob=1.5)
