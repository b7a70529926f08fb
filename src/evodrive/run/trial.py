"""
Trial Module

This module defines the abstract base class for trials: complete evolutionary
runs in which a genetic algorithm evolves the networks of a population of
agents, with built-in support for CPU-based parallel evaluation using joblib.

The trial is the external evaluator of the genetic algorithm. When the engine
hands over a population, the trial builds one Agent per genotype and keeps
count of the agents still alive. The trial then evaluates every agent, stores
the result in the agent's genotype and kills the agent; when the last agent
dies the trial reports back to the engine, which produces the next generation.

Classes:
    Trial: Abstract base class for evolutionary runs
"""

import logging
from abc      import ABC, abstractmethod
from datetime import datetime
from pathlib  import Path
from typing   import Optional

import numpy as np
from joblib import Parallel, delayed

from evodrive.activations import activations
from evodrive.genotype    import Genotype
from evodrive.operators   import (EliteSelection,
                                  FitnessThresholdTermination,
                                  GenerationCountTermination,
                                  RemainderStochasticSampling,
                                  mutation_operators,
                                  recombination_operators)
from evodrive.phenotype   import Agent, NeuralNetwork
from evodrive.pool        import GAState, GeneticAlgorithm
from evodrive.run.config     import Config
from evodrive.run.statistics import FinishedGenotypeSaver, StatisticsWriter

logger = logging.getLogger(__name__)

class Trial(ABC):
    """
    Abstract base class for implementing a trial.

    A trial represents one run of the genetic algorithm, from a random initial
    population until a stop condition is met:
    - 'max_number_generations' generations have been evaluated (if > 0)
    - the fitness threshold has been reached (if 'fitness_termination_check')
    - the genetic algorithm terminated after 'restart_after' generations and
      it has already been restarted 'max_restarts' times (never, if None)

    Every restart starts a new genetic algorithm from a new random population.

    Subclasses must implement:
    - _evaluate_fitness(agent): Evaluate a single agent and return its evaluation
    - _generation_report(sorted_population): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _reset(): Reset trial-specific state (call super()._reset())
    - _terminate(sorted_population, generation_count): Custom stop logic

    Public Properties:
        engine: The genetic algorithm of the current run
        agents: The agents of the generation being evaluated

    Public Attributes:
        best_genotype:   Copy of the genotype with the highest evaluation seen so far
        restart_counter: How many times the genetic algorithm has been restarted
        failed:          False if the run stopped because the fitness threshold was reached

    Public Methods:
        run(num_jobs): Execute the trial

    Parallelization of the evaluation of agents:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : Config                     = config
        self._suppress_output   : bool                       = suppress_output
        self._engine            : Optional[GeneticAlgorithm] = None
        self._agents            : list[Agent]                = []
        self._agents_alive      : int                        = 0
        self._generation_counter: int                        = 0
        self._finished          : bool                       = False
        self._fitness_check     : Optional[FitnessThresholdTermination] = None
        self._rng               : np.random.Generator        = np.random.default_rng(config.seed)
        self.best_genotype      : Optional[Genotype]         = None
        self.restart_counter    : int                        = 0
        self.failed             : bool                       = True

    @property
    def engine(self) -> Optional[GeneticAlgorithm]:
        """The genetic algorithm of the current run."""
        return self._engine

    @property
    def agents(self) -> list[Agent]:
        """The agents of the generation currently being evaluated."""
        return self._agents

    def run(self, num_jobs: int = 1) -> None:
        """
        Run the trial.

        Parameters:
            num_jobs: Number of parallel processes for the evaluation of agents
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        self._reset()
        self._start_engine()

        while True:
            if self._engine.state is GAState.EVALUATING:
                self._evaluate_agents(num_jobs)
                continue

            # The genetic algorithm terminated: stop, or start over
            max_restarts = self._config.max_restarts
            if self._finished or (max_restarts is not None and self.restart_counter >= max_restarts):
                break
            self.restart_counter += 1
            logger.info("Restarting genetic algorithm (restart %d of %s)", self.restart_counter,
                        max_restarts if max_restarts is not None else "unlimited")
            self._start_engine()

        if not self._suppress_output:
            self._final_report()

    def _reset(self) -> None:
        """
        Reset the trial state before starting a new run.

        Subclasses overriding this method must call super()._reset().
        """
        self._engine             = None
        self._agents             = []
        self._agents_alive       = 0
        self._generation_counter = 0
        self._finished           = False
        self._fitness_check      = None
        self._rng                = np.random.default_rng(self._config.seed)
        self.best_genotype       = None
        self.restart_counter     = 0
        self.failed              = True

    def _start_engine(self) -> None:
        """
        Create a genetic algorithm as configured, and start it.
        """
        config = self._config

        # The network topology determines the number of parameters of a genotype
        parameter_count = NeuralNetwork(config.topology).weight_count

        engine = GeneticAlgorithm(parameter_count, config.population_size, rng=self._rng)
        engine.init_param_min = config.init_param_min
        engine.init_param_max = config.init_param_max
        engine.evaluation     = self._start_evaluation

        if config.selection == 'elitist':
            engine.selection = EliteSelection(config.elite_copies)
        elif config.selection == 'remainder_stochastic':
            engine.selection = RemainderStochasticSampling()
        else:
            raise ValueError(f"Unknown selection operator '{config.selection}'")

        engine.recombination = recombination_operators[config.recombination](config.crossover_swap_prob)
        engine.mutation      = mutation_operators[config.mutation](config.mutation_perc,
                                                                   config.mutation_prob,
                                                                   config.mutation_amount)

        self._fitness_check = None
        if config.fitness_termination_check:
            self._fitness_check = FitnessThresholdTermination(config.fitness_threshold, config.fitness_criterion)

        # Stop logic first, so that the trial stops rather than restarts when both apply
        engine.termination_criteria.append(self._terminate)
        if config.restart_after > 0:
            engine.termination_criteria.append(GenerationCountTermination(config.restart_after))

        # Statistics
        run_name = f"Evaluation - {datetime.now().strftime('%Y_%m_%d_%H-%M-%S')} run {self.restart_counter}"
        if config.save_statistics:
            writer = StatisticsWriter(Path(config.statistics_dir) / f"{run_name}.txt", engine)
            engine.fitness_calculation_finished.append(writer)
        if config.save_first_n_genotypes > 0:
            saver = FinishedGenotypeSaver(Path(config.statistics_dir) / run_name, config.save_first_n_genotypes)
            engine.fitness_calculation_finished.append(saver)
        engine.fitness_calculation_finished.append(self._on_fitness_calculated)

        self._engine = engine
        engine.start()

    def _start_evaluation(self, population: list[Genotype]) -> None:
        """
        Evaluation callback of the genetic algorithm: create one living agent per genotype.
        """
        activation = activations[self._config.activation]

        self._agents       = []
        self._agents_alive = 0
        for genotype in population:
            agent = Agent(genotype, activation, self._config.topology)
            agent.add_death_listener(self._on_agent_died)
            agent.reset()
            self._agents.append(agent)
            self._agents_alive += 1

    def _on_agent_died(self, agent: Agent) -> None:
        self._agents_alive -= 1
        if self._agents_alive == 0:
            self._engine.evaluation_finished()

    def _evaluate_agents(self, num_jobs: int) -> None:
        """
        Evaluate all agents of the current generation, then kill them.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Killing the last agent reports the end of the evaluation to the
        genetic algorithm.
        """
        agents = list(self._agents)

        if num_jobs == 1:
            evaluations = [self._evaluate_fitness(agent) for agent in agents]
        else:
            evaluations = Parallel(num_jobs)(delayed(self._evaluate_fitness)(agent) for agent in agents)

        for agent, evaluation in zip(agents, evaluations):
            agent.genotype.evaluation = evaluation
        for agent in agents:
            agent.kill()

    def _on_fitness_calculated(self, sorted_population: list[Genotype]) -> None:
        self._generation_counter += 1

        best = sorted_population[0]
        if self.best_genotype is None or best.evaluation > self.best_genotype.evaluation:
            self.best_genotype = Genotype(best.copy_parameters())
            self.best_genotype.evaluation = best.evaluation
            self.best_genotype.fitness    = best.fitness

        if not self._suppress_output:
            self._generation_report(sorted_population)

    def _terminate(self, sorted_population: list[Genotype], generation_count: int) -> bool:
        """
        Determine whether the whole trial should stop (as opposed to a restart).

        This default implementation stops the trial after a maximum number of
        generations and (optionally) also stops it if a given measure of the
        population's evaluation has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        max_generations = self._config.max_number_generations
        terminate = max_generations > 0 and self._generation_counter >= max_generations

        if self._fitness_check is not None:
            success   = self._fitness_check(sorted_population, generation_count)
            terminate = terminate or success
            if terminate:
                self.failed = not success

        if terminate:
            self._finished = True
        return terminate

    @abstractmethod
    def _evaluate_fitness(self, agent: Agent) -> float:
        """
        Evaluate an agent and return its evaluation.

        This method should run the agent's network on the problem domain (e.g.
        drive a car around a track) and compute a score. Higher values are
        better. The evaluation must be a positive number (or zero).

        The agent must not be killed here: the trial kills every agent once
        its evaluation has been stored.

        Parameters:
            agent: The Agent to evaluate

        Returns:
            float: Evaluation of the agent
        """
        pass

    @abstractmethod
    def _generation_report(self, sorted_population: list[Genotype]) -> None:
        """
        Report trial progress after each generation.

        Called once per generation, after the fitness calculation, with the
        population sorted by descending fitness. Suppressed by setting
        'suppress_output' to 'True'.
        """
        pass

    @abstractmethod
    def _final_report(self) -> None:
        """
        Produce final report at the end of the trial.

        Suppressed by setting 'suppress_output' to 'True'.
        """
        pass
