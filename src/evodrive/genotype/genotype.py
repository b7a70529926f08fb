"""
Genotype Module

This module implements the Genotype class, the evolvable unit of the genetic
algorithm. A genotype is a fixed-length vector of real-valued parameters which,
once decoded by an Agent, become the weights of a feedforward neural network.

Besides its parameters, a genotype carries two scalars:
- evaluation: the raw score assigned by the external evaluator (e.g. the
              fraction of the track completed by the car it controls)
- fitness:    the score assigned by the genetic algorithm, relative to the
              rest of the population (e.g. evaluation / average evaluation)

Serialization format:
    A single text record 'value_0;value_1;...;value_{N-1}', without trailing
    delimiter. Each value is written with 'repr', which is locale-invariant
    and round-trips exactly. An empty record encodes a genotype without
    parameters. When reading, a field is any decimal or exponent notation
    accepted by 'float', including 'inf' and 'nan' (which 'repr' writes for
    non-finite values); underscore digit separators are rejected.

Classes:
    Genotype: One member of a population
"""

import numpy as np
from pathlib import Path
from typing  import Iterator, Optional, Sequence

from evodrive.exceptions import MalformedData

class Genotype:
    """
    One member of a population, consisting of a parameter vector and its scores.

    Genotypes are ordered by fitness in descending order: 'a < b' means that
    'a' has the higher fitness and therefore comes first when a population is
    sorted. Since Python's sort is stable, genotypes of equal fitness keep
    their relative order in the population.

    Public Attributes:
        evaluation: Raw score assigned by the external evaluator (default 0)
        fitness:    Relative score assigned by the genetic algorithm (default 0)

    Public Properties:
        parameter_count: Number of parameters (fixed for the genotype's lifetime)

    Public Methods:
        set_random_parameters(min_value, max_value, rng): Randomize all parameters
        copy_parameters():                                Independent copy of the parameters
        to_string() / from_string(data):                  Text serialization
        save_to_file(path) / load_from_file(path):        File serialization
        generate_random(...):                             Create a random genotype
    """

    DELIMITER = ';'

    def __init__(self, parameters: Sequence[float]):
        """
        Parameters:
            parameters: the parameter vector; it is copied into a new float64 array
        """
        self._parameters: np.ndarray = np.array(parameters, dtype=np.float64).reshape(-1)
        self.evaluation : float      = 0.0
        self.fitness    : float      = 0.0

    @property
    def parameter_count(self) -> int:
        """The number of parameters stored in this genotype."""
        return self._parameters.shape[0]

    @property
    def parameters(self) -> np.ndarray:
        """Read-only view of the parameter vector."""
        view = self._parameters.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self.parameter_count

    def __getitem__(self, index: int) -> float:
        return float(self._parameters[index])

    def __setitem__(self, index: int, value: float) -> None:
        self._parameters[index] = value

    def __iter__(self) -> Iterator[float]:
        return (float(p) for p in self._parameters)

    def __lt__(self, other: 'Genotype') -> bool:
        # reversed, so that the fittest genotype comes first when sorting
        return self.fitness > other.fitness

    @staticmethod
    def compare(a: 'Genotype', b: 'Genotype') -> int:
        """
        Three-way comparison in descending fitness order.

        Returns:
            -1 if 'a' comes before 'b', 1 if it comes after, 0 if they tie
        """
        if a.fitness > b.fitness:
            return -1
        if a.fitness < b.fitness:
            return 1
        return 0

    def set_random_parameters(self, min_value: float, max_value: float, rng: np.random.Generator) -> None:
        """
        Set all parameters to random values drawn uniformly from [min_value, max_value).

        Parameters:
            min_value: the minimum (inclusive) value of a parameter
            max_value: the maximum (exclusive) value of a parameter
            rng:       the source of randomness
        """
        if min_value > max_value:
            raise ValueError("Minimum value may not exceed maximum value.")

        self._parameters[:] = rng.uniform(min_value, max_value, size=self.parameter_count)

    def copy_parameters(self) -> np.ndarray:
        """
        Return a copy of the parameter vector; changing it does not affect the genotype.
        """
        return self._parameters.copy()

    def to_string(self) -> str:
        """
        Serialize the parameters as a single ';'-delimited text record.
        """
        return self.DELIMITER.join(repr(float(p)) for p in self._parameters)

    @classmethod
    def from_string(cls, data: str) -> 'Genotype':
        """
        Create a genotype from a text record produced by 'to_string'.

        Parameters:
            data: the serialized parameters

        Returns:
            the deserialized genotype (with zero evaluation and fitness)
        """
        data = data.strip()
        if not data:
            return cls([])

        parameters = []
        for position, field in enumerate(data.split(cls.DELIMITER)):
            message = f"Field {position} ('{field}') of the serialized genotype is not a valid float"
            # float() also accepts digit separators such as "1_0"
            if '_' in field:
                raise MalformedData(message)
            try:
                parameters.append(float(field))
            except ValueError:
                raise MalformedData(message) from None

        return cls(parameters)

    def save_to_file(self, file_path: str | Path) -> None:
        """
        Save the parameters of this genotype to a file, overwriting it if it exists.
        """
        Path(file_path).write_text(self.to_string(), encoding='utf-8')

    @classmethod
    def load_from_file(cls, file_path: str | Path) -> 'Genotype':
        """
        Load a genotype from a file written by 'save_to_file'.
        """
        return cls.from_string(Path(file_path).read_text(encoding='utf-8'))

    @classmethod
    def generate_random(cls,
                        parameter_count: int,
                        min_value      : float,
                        max_value      : float,
                        rng            : Optional[np.random.Generator] = None) -> 'Genotype':
        """
        Generate a genotype whose parameters are drawn uniformly from [min_value, max_value).

        Parameters:
            parameter_count: the number of parameters of the genotype (may be 0)
            min_value:       the minimum (inclusive) value of a parameter
            max_value:       the maximum (exclusive) value of a parameter
            rng:             the source of randomness (a fresh one if None)

        Returns:
            the new genotype
        """
        if parameter_count < 0:
            raise ValueError(f"Parameter count must be non-negative, got {parameter_count}")

        genotype = cls(np.zeros(parameter_count, dtype=np.float64))
        if parameter_count > 0:
            genotype.set_random_parameters(min_value, max_value, rng if rng is not None else np.random.default_rng())
        return genotype

    def __str__(self):
        return f"evaluation={self.evaluation:.4f}, fitness={self.fitness:.4f}, parameters={self.parameter_count}"

    def __repr__(self):
        return f"Genotype(parameters={self._parameters.tolist()})"
