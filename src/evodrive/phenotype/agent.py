"""
Agent Module

This module implements the Agent class, which combines a genotype with the
feedforward neural network decoded from it. An agent is what the external
evaluator (e.g. a car in a driving simulation) actually runs: the evaluator
feeds sensor readings to the network, acts on its outputs, writes a score into
the genotype's 'evaluation' and finally kills the agent.

Classes:
    Agent: A genotype bound to the neural network it encodes
"""

from typing import Callable, Sequence

import numpy as np

from evodrive.exceptions             import ParameterCountMismatch
from evodrive.genotype               import Genotype
from evodrive.phenotype.network      import NeuralNetwork
from evodrive.phenotype.neural_layer import ActivationFunction

class Agent:
    """
    A genotype bound to the feedforward neural network decoded from it.

    The network weights are a one-time copy of the genotype's parameters, made
    when the agent is created; later changes to the genotype do not affect the
    network.

    An agent is either alive (taking part in the evaluation) or dead. Death
    listeners are notified exactly once for every alive-to-dead transition.

    Public Properties:
        genotype: The underlying genotype
        fnn:      The feedforward neural network constructed from the genotype
        is_alive: Whether the agent is currently taking part in the evaluation

    Public Methods:
        reset():                   Clear the genotype's scores and revive the agent
        kill():                    Mark the agent as dead, notifying death listeners
        add_death_listener(fn):    Register a callback receiving the dead agent
        remove_death_listener(fn): Unregister a callback
        process_inputs(inputs):    Forward pass through the agent's network
    """

    def __init__(self, genotype: Genotype, default_activation: ActivationFunction, topology: Sequence[int]):
        """
        Parameters:
            genotype:           the genotype to initialize this agent from
            default_activation: the activation function of every layer of the network
            topology:           node count of each layer of the network, from input to output
        """
        self._genotype       : Genotype                      = genotype
        self._is_alive       : bool                          = False
        self._death_listeners: list[Callable[['Agent'], None]] = []

        self._fnn: NeuralNetwork = NeuralNetwork(topology)
        self._fnn.set_activation(default_activation)

        if self._fnn.weight_count != genotype.parameter_count:
            raise ParameterCountMismatch(f"The genotype's parameter count ({genotype.parameter_count}) must match "
                                         f"the weight count of topology {list(self._fnn.topology)} ({self._fnn.weight_count})")

        # Decode the genotype, layer after layer, each layer row-major
        self._fnn.set_weights(genotype.copy_parameters())

    @property
    def genotype(self) -> Genotype:
        """The underlying genotype of this agent."""
        return self._genotype

    @property
    def fnn(self) -> NeuralNetwork:
        """The feedforward neural network constructed from the genotype of this agent."""
        return self._fnn

    @property
    def is_alive(self) -> bool:
        """Whether this agent is currently alive (actively participating in the evaluation)."""
        return self._is_alive

    def add_death_listener(self, listener: Callable[['Agent'], None]) -> None:
        """
        Register a callback invoked with this agent when it dies.
        """
        self._death_listeners.append(listener)

    def remove_death_listener(self, listener: Callable[['Agent'], None]) -> None:
        """
        Unregister a callback previously registered with 'add_death_listener'.
        """
        self._death_listeners.remove(listener)

    def reset(self) -> None:
        """
        Reset the scores of the underlying genotype and make this agent alive again.
        """
        self._genotype.evaluation = 0.0
        self._genotype.fitness    = 0.0
        self._is_alive = True

    def kill(self) -> None:
        """
        Kill this agent; death listeners fire only if it was alive.
        """
        if not self._is_alive:
            return

        self._is_alive = False
        for listener in list(self._death_listeners):
            listener(self)

    def process_inputs(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Feed the given inputs (e.g. sensor readings) through the agent's network.
        """
        return self._fnn.process_inputs(inputs)

    def __lt__(self, other: 'Agent') -> bool:
        return self._genotype < other._genotype

    def __repr__(self):
        return f"Agent(alive={self._is_alive}, genotype={self._genotype})"
