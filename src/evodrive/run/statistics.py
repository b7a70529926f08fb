"""
Statistics Module

This module implements listeners which persist the progress of a genetic
algorithm. Both are registered with the engine's 'fitness_calculation_finished'
listeners and receive the population, sorted by descending fitness, once per
generation. They only read the population, never modify it.

Classes:
    StatisticsWriter:      Writes the best evaluation of each generation to a text file
    FinishedGenotypeSaver: Saves the first genotypes which finish the course
"""

import logging
from pathlib import Path

from evodrive.genotype import Genotype
from evodrive.pool     import GeneticAlgorithm

logger = logging.getLogger(__name__)

class StatisticsWriter:
    """
    Writes the evaluation of the best genotype of each generation to a text file.

    The file starts with a header stating the population size and the
    operators of the engine, followed by one '<generation>\\t<evaluation>'
    line per generation.
    """

    def __init__(self, file_path: str | Path, engine: GeneticAlgorithm, description: str = ''):
        """
        Parameters:
            file_path:   the statistics file, overwritten if it exists
            engine:      the genetic algorithm whose progress is recorded
            description: optional text added to the header (e.g. the track name)
        """
        self.file_path = Path(file_path)
        self._engine   = engine

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        header = (f"Evaluation of a Population with size {engine.population_size}"
                  f"{', ' + description if description else ''}, using the following GA operators:\n"
                  f"Selection: {type(engine.selection).__name__}\n"
                  f"Recombination: {type(engine.recombination).__name__}\n"
                  f"Mutation: {type(engine.mutation).__name__}\n"
                  f"FitnessCalculation: {type(engine.fitness_calculation).__name__}\n\n")
        self.file_path.write_text(header, encoding='utf-8')

    def __call__(self, sorted_population: list[Genotype]) -> None:
        if not sorted_population:
            return

        with self.file_path.open('a', encoding='utf-8') as file:
            file.write(f"{self._engine.generation_count}\t{sorted_population[0].evaluation}\n")

class FinishedGenotypeSaver:
    """
    Saves the first 'save_first_n' genotypes whose evaluation reaches 1
    (i.e. that completed the whole course) to individual files.

    Files are named 'Genotype - Finished as <k>.txt', k counting from 1
    across all generations.
    """

    def __init__(self, directory: str | Path, save_first_n: int):
        """
        Parameters:
            directory:    the directory the genotype files are written to
            save_first_n: the maximum number of genotypes to save
        """
        self.directory       = Path(directory)
        self.save_first_n    = save_first_n
        self.genotypes_saved = 0

    def __call__(self, sorted_population: list[Genotype]) -> None:
        for genotype in sorted_population:
            if self.genotypes_saved >= self.save_first_n:
                return
            # The population is sorted, so no genotype after this one has finished either
            if genotype.evaluation < 1:
                return

            self.directory.mkdir(parents=True, exist_ok=True)
            self.genotypes_saved += 1
            file_path = self.directory / f"Genotype - Finished as {self.genotypes_saved}.txt"
            genotype.save_to_file(file_path)
            logger.info("Saved finished genotype to '%s'", file_path)
