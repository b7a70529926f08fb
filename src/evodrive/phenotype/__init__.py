"""
Phenotype Package

This package implements the phenotype side of the evolutionary process: the
fully connected feedforward neural networks decoded from genotypes, and the
agents that bind a genotype to its network during evaluation.

Modules:
    neural_layer: One layer of a fully connected feedforward network
    network:      Fully connected feedforward network (chain of layers)
    agent:        Genotype bound to the network decoded from it

Exported Classes:
    NeuralLayer:   One layer of a fully connected feedforward network
    NeuralNetwork: A fully connected feedforward neural network
    Agent:         A genotype bound to the neural network it encodes
"""

from evodrive.phenotype.neural_layer import NeuralLayer
from evodrive.phenotype.network      import NeuralNetwork
from evodrive.phenotype.agent        import Agent

__all__ = ['Agent',
           'NeuralLayer',
           'NeuralNetwork']
