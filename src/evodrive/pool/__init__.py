"""
Pool Package

This package contains the genetic algorithm engine, which manages the
population and drives it through the generational cycle.

Modules:
    genetic_algorithm: The generational genetic algorithm engine

Exported Classes:
    GAState:          States of the generational state machine
    GeneticAlgorithm: The generational genetic algorithm engine
"""

from evodrive.pool.genetic_algorithm import GAState, GeneticAlgorithm

__all__ = ['GAState',
           'GeneticAlgorithm']
