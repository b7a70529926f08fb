"""
Fitness Calculation Module

A fitness calculation turns the raw evaluations assigned by the external
evaluator into the fitness values the selection operators work with.

Classes:
    FitnessCalculation: Abstract base class of all fitness calculations
    RelativeFitness:    Evaluation relative to the population average
"""

from abc import ABC, abstractmethod

from evodrive.genotype import Genotype

class FitnessCalculation(ABC):
    """
    Abstract base class for fitness calculations.

    Subclasses must implement __call__(population), which sets the 'fitness'
    of every genotype in place.
    """

    @abstractmethod
    def __call__(self, population: list[Genotype]) -> None:
        pass

class RelativeFitness(FitnessCalculation):
    """
    Fitness = evaluation / average evaluation of the population.

    If the average evaluation is zero, every genotype gets a fitness of zero.
    """

    def __call__(self, population: list[Genotype]) -> None:
        if not population:
            return

        average = sum(genotype.evaluation for genotype in population) / len(population)
        for genotype in population:
            genotype.fitness = genotype.evaluation / average if average != 0 else 0.0
