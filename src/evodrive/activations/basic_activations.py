import numpy as np

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.clip(z, -1.0, 1.0)

def relu_activation(z):
    return np.maximum(0.0, z)

def sigmoid_activation(z):
    # Clip input to prevent overflow when calculating exp
    z_clipped = np.clip(z, -500.0, 500.0)
    return 1.0 / (1.0 + np.exp(-z_clipped))

def soft_sign_activation(z):
    return z / (1.0 + np.abs(z))

def tanh_activation(z):
    return np.tanh(z)

activations = {
    "identity" : identity_activation,
    "clamped"  : clamped_activation,
    "relu"     : relu_activation,
    "sigmoid"  : sigmoid_activation,
    "soft_sign": soft_sign_activation,
    "tanh"     : tanh_activation
    }
