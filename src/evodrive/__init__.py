"""
evodrive - Evolving feedforward neural network controllers with a genetic algorithm.

This package evolves a population of real-valued parameter vectors (genotypes),
each of which decodes into the weights of a small fully connected feedforward
neural network controlling an agent (e.g. a car driving around a track). An
external evaluator scores every agent once per generation; the genetic
algorithm turns the scores into relative fitness, then selects, recombines and
mutates the genotypes to produce the next generation.

Main components:
- genotype:    Genetic encoding (fixed-length parameter vectors, serialization)
- phenotype:   Neural layers, feedforward networks, and agents
- operators:   Fitness calculation, selection, recombination, mutation, termination
- pool:        The generational genetic algorithm engine
- run:         Configuration, trials, and statistics
- activations: Activation functions for neural networks

Example:
    >>> from evodrive import Config, Trial
    >>> config = Config("config.ini")
    >>> class MyTrial(Trial):
    ...     def _evaluate_fitness(self, agent):
    ...         # Drive the agent and return its evaluation
    ...         pass
    >>> trial = MyTrial(config)
    >>> trial.run()
"""

__version__ = "0.1.0"

from evodrive.exceptions import (EvoDriveError,
                                 InvalidTopology,
                                 DimensionMismatch,
                                 ParameterCountMismatch,
                                 InvalidOperatorInput,
                                 MalformedData)
from evodrive.genotype   import Genotype
from evodrive.phenotype  import Agent, NeuralLayer, NeuralNetwork
from evodrive.pool       import GAState, GeneticAlgorithm
from evodrive.run        import Config, Trial

__all__ = [
    "Agent",
    "Config",
    "DimensionMismatch",
    "EvoDriveError",
    "GAState",
    "GeneticAlgorithm",
    "Genotype",
    "InvalidOperatorInput",
    "InvalidTopology",
    "MalformedData",
    "NeuralLayer",
    "NeuralNetwork",
    "ParameterCountMismatch",
    "Trial",
]
