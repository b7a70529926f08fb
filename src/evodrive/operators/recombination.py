"""
Recombination Operators Module

A recombination operator receives the intermediate population produced by
selection and creates a new population of the requested size from it.

Functions:
    complete_crossover: Uniform crossover producing two offspring

Classes:
    RecombinationOperator: Abstract base class of all recombination operators
    RandomRecombination:   Elitism plus complete crossover of random parent pairs
"""

from abc import ABC, abstractmethod

import numpy as np

from evodrive.exceptions import InvalidOperatorInput
from evodrive.genotype   import Genotype

def complete_crossover(parent1   : Genotype,
                       parent2   : Genotype,
                       swap_prob : float,
                       rng       : np.random.Generator) -> tuple[Genotype, Genotype]:
    """
    Cross two parents over, parameter by parameter.

    For each parameter position, with probability 'swap_prob' the first
    offspring inherits the value of the second parent and vice versa;
    otherwise each offspring inherits the value of its own parent.

    Parameters:
        parent1:   the first parent
        parent2:   the second parent, with the same number of parameters
        swap_prob: the probability of swapping the values at a position
        rng:       the source of randomness

    Returns:
        the two offspring
    """
    if parent1.parameter_count != parent2.parameter_count:
        raise InvalidOperatorInput(f"Parents must have the same parameter count, "
                                   f"got {parent1.parameter_count} and {parent2.parameter_count}")

    params1 = parent1.copy_parameters()
    params2 = parent2.copy_parameters()

    swap = rng.random(parent1.parameter_count) < swap_prob
    params1[swap], params2[swap] = params2[swap], params1[swap]

    return Genotype(params1), Genotype(params2)

class RecombinationOperator(ABC):
    """
    Abstract base class for recombination operators.

    Subclasses must implement __call__(intermediate_population, new_population_size, rng),
    which returns a list of exactly 'new_population_size' genotypes.
    """

    @abstractmethod
    def __call__(self,
                 intermediate_population: list[Genotype],
                 new_population_size    : int,
                 rng                    : np.random.Generator) -> list[Genotype]:
        pass

class RandomRecombination(RecombinationOperator):
    """
    Recombination of random pairs of the intermediate population.

    The first two genotypes of the intermediate population are carried over
    unmodified (elitism). The rest of the new population is filled with the
    offspring of complete crossovers between two distinct, randomly chosen
    members of the intermediate population.
    """

    def __init__(self, swap_prob: float = 0.6):
        if not 0.0 <= swap_prob <= 1.0:
            raise ValueError(f"Crossover swap probability must lie in [0, 1], got {swap_prob}")
        self.swap_prob = swap_prob

    def __call__(self,
                 intermediate_population: list[Genotype],
                 new_population_size    : int,
                 rng                    : np.random.Generator) -> list[Genotype]:
        if len(intermediate_population) < 2:
            raise InvalidOperatorInput(f"The intermediate population has to be at least of size 2 for this operator, "
                                       f"got {len(intermediate_population)}")

        # Always add the best two (unmodified)
        new_population = list(intermediate_population[:min(2, new_population_size)])

        while len(new_population) < new_population_size:
            # Two random indices that are not the same
            index1, index2 = rng.choice(len(intermediate_population), size=2, replace=False)

            offspring1, offspring2 = complete_crossover(intermediate_population[index1],
                                                        intermediate_population[index2],
                                                        self.swap_prob, rng)
            new_population.append(offspring1)
            if len(new_population) < new_population_size:
                new_population.append(offspring2)

        return new_population
