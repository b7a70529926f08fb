"""
Termination Criteria Module

A termination criterion is checked by the genetic algorithm once per
generation, after the fitness of the population has been calculated. When
it returns True the algorithm stops instead of producing a new generation.

Classes:
    TerminationCriterion:        Abstract base class of all termination criteria
    GenerationCountTermination:  Stop after a maximum number of generations
    FitnessThresholdTermination: Stop once the population evaluation reaches a threshold
"""

from abc        import ABC, abstractmethod
from statistics import mean

from evodrive.genotype import Genotype

class TerminationCriterion(ABC):
    """
    Abstract base class for termination criteria.

    Subclasses must implement __call__(sorted_population, generation_count).
    """

    @abstractmethod
    def __call__(self, sorted_population: list[Genotype], generation_count: int) -> bool:
        """
        Parameters:
            sorted_population: the current population, sorted by descending fitness
            generation_count:  the number of the generation just evaluated

        Returns:
            True if the genetic algorithm should terminate
        """
        pass

class GenerationCountTermination(TerminationCriterion):
    """
    Terminate once 'max_generations' generations have been evaluated.
    """

    def __init__(self, max_generations: int):
        if max_generations < 1:
            raise ValueError(f"'max_generations' must be positive, got {max_generations}")
        self.max_generations = max_generations

    def __call__(self, sorted_population: list[Genotype], generation_count: int) -> bool:
        return generation_count >= self.max_generations

class FitnessThresholdTermination(TerminationCriterion):
    """
    Terminate once a measure of the population's evaluation reaches a threshold.

    Allowed criteria:
        "max"  the evaluation of the best genotype in the population
        "mean" the mean evaluation across the entire population
    """

    def __init__(self, threshold: float, criterion: str = 'max'):
        if criterion not in ('max', 'mean'):
            raise ValueError(f"bad fitness criterion '{criterion}', use 'max' or 'mean'")
        self.threshold = threshold
        self.criterion = criterion

    def __call__(self, sorted_population: list[Genotype], generation_count: int) -> bool:
        evaluations = [genotype.evaluation for genotype in sorted_population]
        if not evaluations:
            return False

        overall = max(evaluations) if self.criterion == 'max' else mean(evaluations)
        return overall >= self.threshold
