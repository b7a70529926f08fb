"""
Neural Layer Module

This module implements a single layer of a fully connected feedforward neural
network. A layer connects its 'neuron_count' nodes to the 'output_count' nodes
of the next layer; in addition, an always-on bias node (constant input 1.0) is
connected to every node of the next layer, so that each neuron has a learnable
bias folded into the weight matrix.

Weight layout:
    weights[i, j] is the weight of the connection from node i of this layer to
    node j of the next layer; row 'neuron_count' holds the bias weights. Flat
    weight vectors are read and written row-major: all weights leaving node 0,
    then all weights leaving node 1, and so on, ending with the bias row.

Classes:
    NeuralLayer: One layer of a fully connected feedforward neural network
"""

import numpy as np
from typing import Callable, Optional, Sequence

from evodrive.activations import sigmoid_activation
from evodrive.exceptions  import DimensionMismatch, InvalidTopology

ActivationFunction = Callable[[np.ndarray], np.ndarray]

class NeuralLayer:
    """
    A single layer of a fully connected feedforward neural network.

    Public Attributes:
        activation: The activation function applied elementwise to the weighted
                    sums (sigmoid by default; None for a linear layer)

    Public Properties:
        neuron_count: Number of nodes in this layer
        output_count: Number of nodes in the next layer
        weights:      Weight matrix of shape (neuron_count + 1, output_count)
        weight_count: Total number of weights, bias weights included

    Public Methods:
        set_weights(weights):                    Copy a flat weight vector into the matrix
        process_inputs(inputs):                  Compute the outputs of the next layer
        set_random_weights(min, max, rng):       Randomize all weights
        deep_copy():                             Independent copy of this layer
    """

    def __init__(self, neuron_count: int, output_count: int):
        """
        Parameters:
            neuron_count: the number of nodes in this layer
            output_count: the number of nodes in the next layer
        """
        if neuron_count <= 0 or output_count <= 0:
            raise InvalidTopology(f"Layers must have at least one node, got {neuron_count} -> {output_count}")

        self._neuron_count: int        = int(neuron_count)
        self._output_count: int        = int(output_count)
        self._weights     : np.ndarray = np.zeros((self._neuron_count + 1, self._output_count), dtype=np.float64)  # +1 for bias node
        self.activation   : Optional[ActivationFunction] = sigmoid_activation

    @property
    def neuron_count(self) -> int:
        """The number of nodes in this layer."""
        return self._neuron_count

    @property
    def output_count(self) -> int:
        """The number of nodes in the next layer."""
        return self._output_count

    @property
    def weights(self) -> np.ndarray:
        """The weight matrix, bias row last."""
        return self._weights

    @property
    def weight_count(self) -> int:
        """The number of weights of this layer, bias weights included."""
        return self._weights.size

    def set_weights(self, weights: Sequence[float]) -> None:
        """
        Set the weights of this layer from a flat vector, in row-major order.

        In a layer of two nodes feeding a layer of three, values [0-2] are the
        weights from node 0 to nodes 0-2 of the next layer, values [3-5] those
        from node 1, and values [6-8] those from the bias node.

        Parameters:
            weights: flat vector holding exactly 'weight_count' values
        """
        flat = np.asarray(weights, dtype=np.float64).reshape(-1)
        if flat.shape[0] != self.weight_count:
            raise DimensionMismatch(f"Layer expects {self.weight_count} weights, got {flat.shape[0]}")

        self._weights[:, :] = flat.reshape(self._weights.shape)

    def get_weights(self) -> np.ndarray:
        """
        Return a copy of the weights as a flat vector, in the order used by 'set_weights'.
        """
        return self._weights.reshape(-1).copy()

    def process_inputs(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Propagate the given inputs to the next layer.

        Parameters:
            inputs: one value per node of this layer

        Returns:
            one value per node of the next layer
        """
        inputs = np.asarray(inputs, dtype=np.float64).reshape(-1)
        if inputs.shape[0] != self._neuron_count:
            raise DimensionMismatch(f"Layer expects {self._neuron_count} inputs, got {inputs.shape[0]}")

        # Add the bias (always on) node to the inputs
        biased_inputs = np.append(inputs, 1.0)

        # Weighted sum of inputs and bias, for each node of the next layer
        sums = biased_inputs @ self._weights

        if self.activation is not None:
            sums = np.asarray(self.activation(sums), dtype=np.float64)
        return sums

    def set_random_weights(self, min_value: float, max_value: float, rng: np.random.Generator) -> None:
        """
        Set all weights to random values drawn uniformly from [min_value, max_value).
        """
        self._weights[:, :] = rng.uniform(min_value, max_value, size=self._weights.shape)

    def deep_copy(self) -> 'NeuralLayer':
        """
        Copy this layer, including its weights and activation function.
        """
        layer = NeuralLayer(self._neuron_count, self._output_count)
        layer._weights[:, :] = self._weights
        layer.activation = self.activation
        return layer

    def __str__(self):
        rows = []
        for i in range(self._weights.shape[0]):
            rows.append(''.join(f"[{i},{j}]: {self._weights[i, j]} " for j in range(self._weights.shape[1])).rstrip())
        return '\n'.join(rows) + '\n'

    def __repr__(self):
        return f"NeuralLayer(neuron_count={self._neuron_count}, output_count={self._output_count})"
