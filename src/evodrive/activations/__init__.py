"""
Activations Package

This package provides the activation functions applied by the neurons of the
feedforward networks controlling the agents.

Exported:
    activations: Dictionary mapping activation function names to functions
    Individual activation functions: identity_activation, clamped_activation,
                                     relu_activation, sigmoid_activation,
                                     soft_sign_activation, tanh_activation
"""

from evodrive.activations.basic_activations import (
    activations,
    identity_activation,
    clamped_activation,
    relu_activation,
    sigmoid_activation,
    soft_sign_activation,
    tanh_activation
)

__all__ = [
    'activations',
    'identity_activation',
    'clamped_activation',
    'relu_activation',
    'sigmoid_activation',
    'soft_sign_activation',
    'tanh_activation'
]
