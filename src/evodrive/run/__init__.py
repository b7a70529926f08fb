"""
Run Package

This package implements the execution of evolutionary runs: the configuration
of the genetic algorithm, the trial which evaluates each generation of agents,
and the listeners which persist statistics about the run.

Modules:
    config:     Configuration management (INI files)
    trial:      Abstract base class for trials with joblib parallelization
    statistics: Statistics file writer and finished-genotype saver

Exported Classes:
    Config:                Configuration parameters for the genetic algorithm
    Trial:                 Abstract base class for evolutionary runs
    StatisticsWriter:      Writes the best evaluation of each generation to file
    FinishedGenotypeSaver: Saves the first genotypes which finish the course
"""

from evodrive.run.config     import Config
from evodrive.run.statistics import FinishedGenotypeSaver, StatisticsWriter
from evodrive.run.trial      import Trial

__all__ = ['Config',
           'FinishedGenotypeSaver',
           'StatisticsWriter',
           'Trial']
