"""
Genetic Algorithm Module

This module implements the GeneticAlgorithm class, the engine that owns the
current population and drives it from one generation to the next.

The engine is cooperative and never blocks: evaluating a population is the
job of an external evaluator, which the engine hands the population to through
its 'evaluation' callback. Control returns to the caller right away, and the
engine does nothing more until the evaluator reports back by calling
'evaluation_finished', however long the evaluation takes.

Generation cycle:
    EVALUATING  -> fitness calculation, sort by descending fitness,
                   fitness listeners, termination check
    SELECTING   -> selection operator builds the intermediate population
    RECOMBINING -> recombination operator builds the new population
    MUTATING    -> mutation operator changes the new population in place
    EVALUATING  -> the new population replaces the old one and is evaluated

Classes:
    GAState:          States of the generational state machine
    GeneticAlgorithm: The generational genetic algorithm engine
"""

import logging
from enum   import Enum
from typing import Callable, Optional

import numpy as np

from evodrive.exceptions import InvalidOperatorInput
from evodrive.genotype   import Genotype
from evodrive.operators  import (EliteSelection,
                                 FitnessCalculation,
                                 MutateAllButBestTwo,
                                 MutationOperator,
                                 RandomRecombination,
                                 RecombinationOperator,
                                 RelativeFitness,
                                 SelectionOperator,
                                 TerminationCriterion)

logger = logging.getLogger(__name__)

class GAState(Enum):
    IDLE        = 'idle'
    EVALUATING  = 'evaluating'
    SELECTING   = 'selecting'
    RECOMBINING = 'recombining'
    MUTATING    = 'mutating'
    TERMINATED  = 'terminated'

class GeneticAlgorithm:
    """
    A generational genetic algorithm over fixed-length real-valued genotypes.

    The operators are strategy objects, which can be replaced any time before
    'start' is called. The single source of randomness of the engine ('rng')
    is passed to every operator call, so that a seeded engine is reproducible.

    Public Attributes:
        evaluation:                   Callback receiving the population to evaluate
        fitness_calculation:          Turns evaluations into fitness values
        selection:                    Builds the intermediate population
        recombination:                Builds the new population
        mutation:                     Mutates the new population in place
        termination_criteria:         The engine terminates if any of them returns True
        fitness_calculation_finished: Listeners receiving the sorted population once per generation
        algorithm_terminated:         Listeners receiving the engine when it terminates
        rng:                          The source of randomness
        init_param_min:               Minimum (inclusive) value of an initial parameter
        init_param_max:               Maximum (exclusive) value of an initial parameter

    Public Properties:
        parameter_count:  Number of parameters of every genotype
        population_size:  Number of genotypes in every generation
        population:       The current population
        generation_count: The number of the generation currently being evaluated
        state:            The current state of the engine
        running:          Whether the engine has been started and has not terminated

    Public Methods:
        start():               Start (or resume) the evolutionary process
        evaluation_finished(): Report that every genotype of the population has been evaluated
    """

    # Default initialization range of the parameters of new genotypes
    DEF_INIT_PARAM_MIN = -1.0
    DEF_INIT_PARAM_MAX =  1.0

    def __init__(self,
                 parameter_count: int,
                 population_size: int,
                 rng            : Optional[np.random.Generator] = None,
                 seed           : Optional[int]                 = None):
        """
        Parameters:
            parameter_count: the number of parameters of every genotype
            population_size: the number of genotypes in every generation
            rng:             the source of randomness (takes precedence over 'seed')
            seed:            seed for a new source of randomness, when 'rng' is None
        """
        if population_size <= 0:
            raise ValueError(f"Population size must be positive, got {population_size}")
        if parameter_count < 0:
            raise ValueError(f"Parameter count must be non-negative, got {parameter_count}")

        self._parameter_count : int                      = parameter_count
        self._population_size : int                      = population_size
        self._population      : Optional[list[Genotype]] = None
        self._generation_count: int                      = 1
        self._state           : GAState                  = GAState.IDLE

        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng(seed)

        self.init_param_min: float = self.DEF_INIT_PARAM_MIN
        self.init_param_max: float = self.DEF_INIT_PARAM_MAX

        # Operators
        self.evaluation          : Optional[Callable[[list[Genotype]], None]] = None
        self.fitness_calculation : FitnessCalculation    = RelativeFitness()
        self.selection           : SelectionOperator     = EliteSelection()
        self.recombination       : RecombinationOperator = RandomRecombination()
        self.mutation            : MutationOperator      = MutateAllButBestTwo()
        self.termination_criteria: list[TerminationCriterion] = []

        # Listeners
        self.fitness_calculation_finished: list[Callable[[list[Genotype]], None]]  = []
        self.algorithm_terminated        : list[Callable[['GeneticAlgorithm'], None]] = []

    @property
    def parameter_count(self) -> int:
        """The number of parameters of every genotype."""
        return self._parameter_count

    @property
    def population_size(self) -> int:
        """The number of genotypes in every generation."""
        return self._population_size

    @property
    def population(self) -> Optional[list[Genotype]]:
        """The current population (None before the engine is started)."""
        return self._population

    @property
    def generation_count(self) -> int:
        """The number of the generation currently being evaluated, starting from 1."""
        return self._generation_count

    @property
    def state(self) -> GAState:
        """The current state of the generational state machine."""
        return self._state

    @property
    def running(self) -> bool:
        """Whether the engine has been started and has not terminated yet."""
        return self._state not in (GAState.IDLE, GAState.TERMINATED)

    def start(self) -> None:
        """
        Start the evolutionary process.

        Creates a random initial population, unless one already exists (e.g.
        after a termination), and hands it to the evaluation callback. After a
        termination the generation count starts again from 1.
        """
        if self.evaluation is None:
            raise RuntimeError("No evaluation callback has been set")
        if self.running:
            raise RuntimeError(f"The genetic algorithm is already running (state: {self._state.value})")

        # A restart keeps the last population but counts generations anew
        if self._state is GAState.TERMINATED:
            self._generation_count = 1

        if self._population is None:
            self._population = [Genotype.generate_random(self._parameter_count,
                                                         self.init_param_min,
                                                         self.init_param_max,
                                                         self.rng)
                                for _ in range(self._population_size)]

        logger.info("Starting genetic algorithm: population size %d, %d parameters per genotype",
                    self._population_size, self._parameter_count)
        self._evaluate()

    def evaluation_finished(self) -> None:
        """
        Report that every genotype of the current population has been evaluated.

        Runs the rest of the generation cycle: fitness calculation, termination
        check, selection, recombination and mutation; then hands the new
        population to the evaluation callback.

        If an operator raises, the engine terminates (without notifying the
        'algorithm_terminated' listeners) and the error propagates.
        """
        if self._state is not GAState.EVALUATING:
            raise RuntimeError(f"'evaluation_finished' called while not evaluating (state: {self._state.value})")

        # Calculate fitness from evaluation and sort by descending fitness
        self.fitness_calculation(self._population)
        self._population.sort()

        for listener in self.fitness_calculation_finished:
            listener(self._population)

        logger.debug("Generation %d evaluated: best evaluation %.4f, best fitness %.4f",
                     self._generation_count, self._population[0].evaluation, self._population[0].fitness)

        # Check termination criteria
        if any(criterion(self._population, self._generation_count) for criterion in self.termination_criteria):
            self._terminate()
            return

        try:
            # Apply selection
            self._state = GAState.SELECTING
            intermediate_population = self.selection(self._population, self.rng)

            # Apply recombination
            self._state = GAState.RECOMBINING
            new_population = self.recombination(intermediate_population, self._population_size, self.rng)
            if len(new_population) != self._population_size:
                raise InvalidOperatorInput(f"Recombination returned {len(new_population)} genotypes, "
                                           f"expected {self._population_size}")

            # Apply mutation
            self._state = GAState.MUTATING
            self.mutation(new_population, self.rng)
        except Exception:
            # The current population is unchanged; start() may be called again
            logger.error("Genetic algorithm stopped in generation %d: operator failed while %s",
                         self._generation_count, self._state.value)
            self._state = GAState.TERMINATED
            raise

        # Set the new population and start its evaluation
        self._population = new_population
        self._generation_count += 1
        self._evaluate()

    def _evaluate(self) -> None:
        self._state = GAState.EVALUATING
        self.evaluation(self._population)

    def _terminate(self) -> None:
        self._state = GAState.TERMINATED
        logger.info("Genetic algorithm terminated after %d generations (best evaluation %.4f)",
                    self._generation_count, self._population[0].evaluation)

        for listener in self.algorithm_terminated:
            listener(self)

    def __repr__(self):
        return (f"GeneticAlgorithm(parameter_count={self._parameter_count}, population_size={self._population_size}, "
                f"generation={self._generation_count}, state={self._state.value})")
