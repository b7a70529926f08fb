"""
Operators Package

This package implements the pluggable strategies applied by the genetic
algorithm in each generation: fitness calculation, selection, recombination,
mutation and termination. The engine only depends on the abstract base
classes; concrete operators are injected when the engine is configured.

Modules:
    fitness:       Fitness calculation from raw evaluations
    selection:     Selection of the intermediate population
    recombination: Creation of the new population through crossover
    mutation:      In-place mutation of the new population
    termination:   Termination criteria

Exported:
    selection_operators:     Dictionary mapping configuration names to selection classes
    recombination_operators: Dictionary mapping configuration names to recombination classes
    mutation_operators:      Dictionary mapping configuration names to mutation classes
"""

from evodrive.operators.fitness       import FitnessCalculation, RelativeFitness
from evodrive.operators.selection     import SelectionOperator, EliteSelection, RemainderStochasticSampling
from evodrive.operators.recombination import RecombinationOperator, RandomRecombination, complete_crossover
from evodrive.operators.mutation      import MutationOperator, MutateAll, MutateAllButBestTwo, mutate_genotype
from evodrive.operators.termination   import (TerminationCriterion,
                                              GenerationCountTermination,
                                              FitnessThresholdTermination)

selection_operators = {
    "elitist"             : EliteSelection,
    "remainder_stochastic": RemainderStochasticSampling
    }

recombination_operators = {
    "random": RandomRecombination
    }

mutation_operators = {
    "all"             : MutateAll,
    "all_but_best_two": MutateAllButBestTwo
    }

__all__ = ['FitnessCalculation',
           'RelativeFitness',
           'SelectionOperator',
           'EliteSelection',
           'RemainderStochasticSampling',
           'RecombinationOperator',
           'RandomRecombination',
           'complete_crossover',
           'MutationOperator',
           'MutateAll',
           'MutateAllButBestTwo',
           'mutate_genotype',
           'TerminationCriterion',
           'GenerationCountTermination',
           'FitnessThresholdTermination',
           'selection_operators',
           'recombination_operators',
           'mutation_operators']
