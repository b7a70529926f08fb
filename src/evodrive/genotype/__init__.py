"""
Genotype Package

This package implements the genetic representation evolved by the genetic
algorithm: a fixed-length vector of real-valued parameters, together with the
evaluation and fitness scores assigned to it.

Modules:
    genotype: Genotype class

Exported Classes:
    Genotype: One member of a population
"""

from evodrive.genotype.genotype import Genotype

__all__ = ['Genotype']
