"""
Selection Operators Module

A selection operator receives the current population, sorted by descending
fitness, and returns the intermediate population from which the recombination
operator draws parents. The intermediate population holds fresh copies of the
selected genotypes, never the genotypes of the current population themselves,
so that nothing is shared across the swap into the next generation.

Classes:
    SelectionOperator:           Abstract base class of all selection operators
    EliteSelection:              Copies of the single best genotype
    RemainderStochasticSampling: Fitness-proportional sampling of integer and fractional parts
"""

from abc    import ABC, abstractmethod

import numpy as np

from evodrive.exceptions import InvalidOperatorInput
from evodrive.genotype   import Genotype

class SelectionOperator(ABC):
    """
    Abstract base class for selection operators.

    Subclasses must implement __call__(sorted_population, rng), which returns
    the intermediate population. The order of the returned list carries no
    guarantee beyond what the concrete operator documents.
    """

    @abstractmethod
    def __call__(self, sorted_population: list[Genotype], rng: np.random.Generator) -> list[Genotype]:
        """
        Parameters:
            sorted_population: the current population, sorted by descending fitness
            rng:               the source of randomness

        Returns:
            the intermediate population
        """
        pass

class EliteSelection(SelectionOperator):
    """
    Elitist selection: the intermediate population consists of 'copies'
    copies of the best genotype, guaranteeing that its genetic material
    survives into the next generation.
    """

    def __init__(self, copies: int = 3):
        if copies < 1:
            raise ValueError(f"Elite selection needs at least one copy, got {copies}")
        self.copies = copies

    def __call__(self, sorted_population: list[Genotype], rng: np.random.Generator) -> list[Genotype]:
        if not sorted_population:
            raise InvalidOperatorInput("Elite selection requires a non-empty population")

        best = sorted_population[0]
        return [Genotype(best.copy_parameters()) for _ in range(self.copies)]

class RemainderStochasticSampling(SelectionOperator):
    """
    Remainder stochastic sampling.

    Every genotype contributes int(fitness) copies to the intermediate
    population, plus one more copy with probability equal to the fractional
    part of its fitness. Fitness being relative to the population average,
    the expected size of the intermediate population equals the size of the
    current population.

    The integer pass stops at the first genotype whose fitness is below 1; the
    population must therefore be sorted by descending fitness, as it is when
    handed over by the genetic algorithm.
    """

    def __call__(self, sorted_population: list[Genotype], rng: np.random.Generator) -> list[Genotype]:
        intermediate_population = []

        # Integer portion of the fitness
        for genotype in sorted_population:
            if genotype.fitness < 1:
                break
            for _ in range(int(genotype.fitness)):
                intermediate_population.append(Genotype(genotype.copy_parameters()))

        # Remainder portion of the fitness
        for genotype in sorted_population:
            remainder = genotype.fitness - int(genotype.fitness)
            if rng.random() < remainder:
                intermediate_population.append(Genotype(genotype.copy_parameters()))

        return intermediate_population
