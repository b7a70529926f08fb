"""
Mutation Operators Module

A mutation operator changes the genotypes of the new population in place,
after recombination.

Functions:
    mutate_genotype: Perturb each parameter of a genotype with a given probability

Classes:
    MutationOperator:    Abstract base class of all mutation operators
    MutateAll:           Mutate every genotype of the population
    MutateAllButBestTwo: Mutate every genotype except the two elite ones
"""

from abc import ABC, abstractmethod

import numpy as np

from evodrive.genotype import Genotype

def mutate_genotype(genotype       : Genotype,
                    mutation_prob  : float,
                    mutation_amount: float,
                    rng            : np.random.Generator) -> None:
    """
    Mutate a genotype in place.

    Each parameter is, with probability 'mutation_prob', increased by a value
    drawn uniformly from [-mutation_amount, mutation_amount).

    Parameters:
        genotype:        the genotype to mutate
        mutation_prob:   the probability of mutating a parameter
        mutation_amount: the maximum magnitude of a perturbation
        rng:             the source of randomness
    """
    for i in range(genotype.parameter_count):
        if rng.random() < mutation_prob:
            genotype[i] = genotype[i] + rng.uniform(-mutation_amount, mutation_amount)

class MutationOperator(ABC):
    """
    Abstract base class for mutation operators.

    Subclasses must implement __call__(new_population, rng), which mutates
    the genotypes of the population in place.

    Public Attributes:
        mutation_perc:   probability that a genotype is mutated at all
        mutation_prob:   probability that a parameter of a mutated genotype changes
        mutation_amount: maximum magnitude of a parameter perturbation
    """

    def __init__(self, mutation_perc: float = 1.0, mutation_prob: float = 0.3, mutation_amount: float = 2.0):
        for name, value in (('mutation_perc', mutation_perc), ('mutation_prob', mutation_prob)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"'{name}' must lie in [0, 1], got {value}")
        if mutation_amount < 0:
            raise ValueError(f"'mutation_amount' must be non-negative, got {mutation_amount}")

        self.mutation_perc   = mutation_perc
        self.mutation_prob   = mutation_prob
        self.mutation_amount = mutation_amount

    @abstractmethod
    def __call__(self, new_population: list[Genotype], rng: np.random.Generator) -> None:
        pass

    def _mutate_members(self, genotypes: list[Genotype], rng: np.random.Generator) -> None:
        for genotype in genotypes:
            if rng.random() < self.mutation_perc:
                mutate_genotype(genotype, self.mutation_prob, self.mutation_amount, rng)

class MutateAll(MutationOperator):
    """
    Mutate every member of the new population.
    """

    def __call__(self, new_population: list[Genotype], rng: np.random.Generator) -> None:
        self._mutate_members(new_population, rng)

class MutateAllButBestTwo(MutationOperator):
    """
    Mutate every member of the new population except the first two, which are
    the elite genotypes carried over by recombination.
    """

    def __call__(self, new_population: list[Genotype], rng: np.random.Generator) -> None:
        self._mutate_members(new_population[2:], rng)
