"""
Neural Network Module

This module implements the fully connected feedforward neural network which
controls an agent. The network is a chain of NeuralLayer objects; its topology
(the node count of each layer, from input to output) is fixed when the network
is created.

The flat weight vector of a network is the concatenation of the flat weight
vectors of its layers, ordered from input to output layer. This is the order in
which an Agent decodes the parameters of a genotype.

Classes:
    NeuralNetwork: A fully connected feedforward neural network
"""

import graphviz  # type: ignore
import numpy as np
from typing import Sequence

from evodrive.exceptions             import DimensionMismatch, InvalidTopology
from evodrive.phenotype.neural_layer import ActivationFunction, NeuralLayer

class NeuralNetwork:
    """
    A fully connected feedforward neural network.

    Public Properties:
        topology:     Node count of each layer, from input to output layer
        layers:       The NeuralLayer objects, from input to output layer
        weight_count: Total number of weights of the network, bias weights included

    Public Methods:
        process_inputs(inputs):            Forward pass through all layers (alias: forward)
        set_weights(weights):              Set all weights from a flat vector
        get_weights():                     Flat copy of all weights
        set_activation(activation):        Use the same activation function in every layer
        set_random_weights(min, max, rng): Randomize all weights
        get_topology_copy():               Same topology and activations, zero weights
        deep_copy():                       Independent copy, weights included
        visualize(view):                   Draw the network with Graphviz
    """

    def __init__(self, topology: Sequence[int]):
        """
        Parameters:
            topology: node count of each layer, from input to output layer
        """
        topology = tuple(int(n) for n in topology)
        if len(topology) < 2:
            raise InvalidTopology(f"A network needs at least an input and an output layer, got topology {topology}")
        if any(n <= 0 for n in topology):
            raise InvalidTopology(f"Every layer must have at least one node, got topology {topology}")

        self._topology: tuple[int, ...]   = topology
        self._layers  : list[NeuralLayer] = [NeuralLayer(n_in, n_out) for n_in, n_out in zip(topology[:-1], topology[1:])]

    @property
    def topology(self) -> tuple[int, ...]:
        """The node count of each layer, from input to output layer."""
        return self._topology

    @property
    def layers(self) -> list[NeuralLayer]:
        """The layers of this network, from input to output layer."""
        return self._layers

    @property
    def weight_count(self) -> int:
        """The number of weights of this network: sum of (n_in + 1) * n_out over all layers."""
        return sum(layer.weight_count for layer in self._layers)

    @staticmethod
    def compute_weight_count(topology: Sequence[int]) -> int:
        """
        The weight count of a network with the given topology, without building it.
        """
        return sum((n_in + 1) * n_out for n_in, n_out in zip(topology[:-1], topology[1:]))

    def process_inputs(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Propagate the given inputs through all layers of the network.

        Parameters:
            inputs: one value per node of the input layer

        Returns:
            one value per node of the output layer
        """
        outputs = np.asarray(inputs, dtype=np.float64).reshape(-1)
        if outputs.shape[0] != self._topology[0]:
            raise DimensionMismatch(f"Network expects {self._topology[0]} inputs, got {outputs.shape[0]}")

        for layer in self._layers:
            outputs = layer.process_inputs(outputs)
        return outputs

    forward = process_inputs

    def set_weights(self, weights: Sequence[float]) -> None:
        """
        Set the weights of all layers from a flat vector.

        Parameters:
            weights: flat vector of exactly 'weight_count' values, layers
                     ordered from input to output, each layer row-major
        """
        flat = np.asarray(weights, dtype=np.float64).reshape(-1)
        if flat.shape[0] != self.weight_count:
            raise DimensionMismatch(f"Network expects {self.weight_count} weights, got {flat.shape[0]}")

        start = 0
        for layer in self._layers:
            stop = start + layer.weight_count
            layer.set_weights(flat[start:stop])
            start = stop

    def get_weights(self) -> np.ndarray:
        """
        Return a copy of all weights as a flat vector, in the order used by 'set_weights'.
        """
        return np.concatenate([layer.get_weights() for layer in self._layers])

    def set_activation(self, activation: ActivationFunction | None) -> None:
        """
        Use the given activation function in every layer.
        """
        for layer in self._layers:
            layer.activation = activation

    def set_random_weights(self, min_value: float, max_value: float, rng: np.random.Generator) -> None:
        """
        Set all weights to random values drawn uniformly from [min_value, max_value).
        """
        for layer in self._layers:
            layer.set_random_weights(min_value, max_value, rng)

    def get_topology_copy(self) -> 'NeuralNetwork':
        """
        Return a new network with the same topology and activation functions,
        but with all weights set to zero.
        """
        copy = NeuralNetwork(self._topology)
        for layer_copy, layer in zip(copy._layers, self._layers):
            layer_copy.activation = layer.activation
        return copy

    def deep_copy(self) -> 'NeuralNetwork':
        """
        Copy this network, including its topology, weights and activation functions.
        """
        copy = NeuralNetwork(self._topology)
        copy._layers = [layer.deep_copy() for layer in self._layers]
        return copy

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Nodes are grouped in one cluster per layer; bias nodes are drawn as
        boxes. Edges are labelled with their weights, positive weights in black
        and negative ones in red.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')  # Left to right layout

        node_attrs = {'style': 'filled', 'shape': 'circle', 'fontsize': '6',
                      'width': '0.4', 'height': '0.4', 'fixedsize': 'true', 'penwidth': '0.5'}
        bias_attrs = dict(node_attrs, shape='box', fillcolor='lightgrey')

        for index, count in enumerate(self._topology):
            fillcolor = 'lightgrey' if index == 0 else 'white' if index == len(self._topology) - 1 else 'lightblue'
            with dot.subgraph(name=f'cluster_{index}') as cluster:
                cluster.attr(label=f'Layer {index}', style='invisible')
                for node in range(count):
                    cluster.node(f'{index}_{node}', label=f'{node}', fillcolor=fillcolor, **node_attrs)
                if index < len(self._layers):
                    cluster.node(f'{index}_bias', label='bias', **bias_attrs)

        for index, layer in enumerate(self._layers):
            for i in range(layer.neuron_count + 1):
                source = f'{index}_bias' if i == layer.neuron_count else f'{index}_{i}'
                for j in range(layer.output_count):
                    weight = layer.weights[i, j]
                    dot.edge(source, f'{index + 1}_{j}',
                             label=f'{weight:.2f}', fontsize='5', penwidth='0.5', arrowsize='0.5',
                             color='black' if weight >= 0 else 'red')

        if view:
            dot.view(cleanup=True)

        return dot

    def __str__(self):
        return ''.join(f"Layer {i}:\n{layer}" for i, layer in enumerate(self._layers))

    def __repr__(self):
        return f"NeuralNetwork(topology={list(self._topology)})"
