"""
Exceptions Module

This module defines the errors raised by the evodrive package. All of them are
raised synchronously at the point where a precondition is violated (construction
of a network or agent, invocation of a genetic operator, parsing of a serialized
genotype) and none of them is ever retried automatically.

Classes:
    EvoDriveError:          Common base class of all evodrive errors
    InvalidTopology:        Malformed list of layer sizes
    DimensionMismatch:      Weight vector or input vector of the wrong length
    ParameterCountMismatch: Genotype size disagrees with network weight count
    InvalidOperatorInput:   Genetic operator invoked with an invalid population
    MalformedData:          Serialized genotype cannot be parsed
"""

class EvoDriveError(Exception):
    """Base class for all errors raised by evodrive."""

class InvalidTopology(EvoDriveError, ValueError):
    """A network topology has fewer than two layers, or a layer without nodes."""

class DimensionMismatch(EvoDriveError, ValueError):
    """A weight vector or an input vector does not have the expected length."""

class ParameterCountMismatch(EvoDriveError, ValueError):
    """The parameter count of a genotype does not match the weight count of a network."""

class InvalidOperatorInput(EvoDriveError, ValueError):
    """The preconditions of a selection, recombination or mutation operator are violated."""

class MalformedData(EvoDriveError, ValueError):
    """A serialized genotype contains a field which is not a valid float."""
