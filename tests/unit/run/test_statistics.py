"""
Unit tests for evodrive.run.statistics module.
"""

import pytest
import numpy as np

from evodrive.genotype  import Genotype
from evodrive.operators import MutateAll, RemainderStochasticSampling
from evodrive.pool      import GeneticAlgorithm
from evodrive.run       import FinishedGenotypeSaver, StatisticsWriter


@pytest.fixture
def engine():
    engine = GeneticAlgorithm(parameter_count=4, population_size=10, seed=0)
    engine.selection = RemainderStochasticSampling()
    engine.mutation  = MutateAll()
    return engine


# ============================================================================
# Test StatisticsWriter
# ============================================================================

class TestStatisticsWriter:
    """Test StatisticsWriter."""

    def test_header(self, tmp_path, engine):
        """Test that the header names the population size and the operators."""
        file_path = tmp_path / "stats" / "run.txt"

        StatisticsWriter(file_path, engine, description="ring track")
        lines = file_path.read_text().splitlines()

        assert lines[0] == ("Evaluation of a Population with size 10, ring track, "
                            "using the following GA operators:")
        assert lines[1] == "Selection: RemainderStochasticSampling"
        assert lines[2] == "Recombination: RandomRecombination"
        assert lines[3] == "Mutation: MutateAll"
        assert lines[4] == "FitnessCalculation: RelativeFitness"

    def test_one_line_per_generation(self, tmp_path, engine, make_population):
        """Test that the best evaluation is appended for every call."""
        file_path = tmp_path / "run.txt"
        writer = StatisticsWriter(file_path, engine)

        writer(make_population([0.75, 0.5]))
        writer(make_population([0.8, 0.1]))
        lines = file_path.read_text().splitlines()

        assert lines[-2:] == ["1\t0.75", "1\t0.8"]

    def test_records_generation_count(self, tmp_path, engine):
        """Test that the line is labelled with the engine's current generation."""
        file_path = tmp_path / "run.txt"
        writer = StatisticsWriter(file_path, engine)
        engine.fitness_calculation_finished.append(writer)
        engine.evaluation = lambda population: None
        engine.start()

        for _ in range(2):
            for genotype in engine.population:
                genotype.evaluation = 0.5
            engine.evaluation_finished()

        assert file_path.read_text().splitlines()[-2:] == ["1\t0.5", "2\t0.5"]

    def test_overwrites_existing_file(self, tmp_path, engine):
        """Test that a new writer starts the file afresh."""
        file_path = tmp_path / "run.txt"
        file_path.write_text("old content\n")

        StatisticsWriter(file_path, engine)

        assert "old content" not in file_path.read_text()


# ============================================================================
# Test FinishedGenotypeSaver
# ============================================================================

class TestFinishedGenotypeSaver:
    """Test FinishedGenotypeSaver."""

    def test_saves_finished_genotypes(self, tmp_path, make_population):
        """Test that only genotypes with an evaluation of at least 1 are saved."""
        saver = FinishedGenotypeSaver(tmp_path / "genotypes", 5)
        population = make_population([1.0, 1.0, 0.5])

        saver(population)

        assert saver.genotypes_saved == 2
        assert sorted(p.name for p in (tmp_path / "genotypes").iterdir()) == [
            "Genotype - Finished as 1.txt", "Genotype - Finished as 2.txt"]

    def test_saved_genotype_can_be_loaded(self, tmp_path, make_population):
        """Test that the saved file holds the genotype's parameters."""
        saver = FinishedGenotypeSaver(tmp_path, 1)
        population = make_population([1.0])
        population[0][0] = 0.125

        saver(population)
        restored = Genotype.load_from_file(tmp_path / "Genotype - Finished as 1.txt")

        np.testing.assert_array_equal(restored.copy_parameters(), population[0].copy_parameters())

    def test_limit_across_generations(self, tmp_path, make_population):
        """Test that no more than 'save_first_n' genotypes are saved in total."""
        saver = FinishedGenotypeSaver(tmp_path, 3)

        saver(make_population([1.0, 1.0]))
        saver(make_population([1.0, 1.0]))
        saver(make_population([1.0, 1.0]))

        assert saver.genotypes_saved == 3
        assert len(list(tmp_path.iterdir())) == 3

    def test_nothing_finished(self, tmp_path, make_population):
        """Test that no directory is created when no genotype finished."""
        saver = FinishedGenotypeSaver(tmp_path / "genotypes", 3)

        saver(make_population([0.99, 0.5]))

        assert saver.genotypes_saved == 0
        assert not (tmp_path / "genotypes").exists()
