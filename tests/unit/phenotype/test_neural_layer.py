"""
Unit tests for evodrive.phenotype.neural_layer module.
"""

import pytest
import numpy as np

from evodrive.activations import identity_activation, sigmoid_activation
from evodrive.exceptions  import DimensionMismatch, InvalidTopology
from evodrive.phenotype   import NeuralLayer


# ============================================================================
# Test Construction
# ============================================================================

class TestNeuralLayerInit:
    """Test NeuralLayer.__init__ method."""

    def test_weight_matrix_shape(self):
        """Test that the weight matrix has a bias row."""
        layer = NeuralLayer(3, 2)

        assert layer.weights.shape == (4, 2)
        assert layer.weight_count == 8

    def test_weights_start_at_zero(self):
        """Test that a new layer has all weights set to zero."""
        layer = NeuralLayer(3, 2)

        assert np.all(layer.weights == 0.0)

    def test_default_activation_is_sigmoid(self):
        """Test that layers use the sigmoid activation by default."""
        assert NeuralLayer(1, 1).activation is sigmoid_activation

    @pytest.mark.parametrize("neuron_count, output_count", [(0, 2), (2, 0), (-1, 3)])
    def test_invalid_sizes(self, neuron_count, output_count):
        """Test that layers without nodes are rejected."""
        with pytest.raises(InvalidTopology):
            NeuralLayer(neuron_count, output_count)


# ============================================================================
# Test Weights
# ============================================================================

class TestWeights:
    """Test setting and getting weights."""

    def test_set_weights_row_major(self):
        """Test that flat weights fill the matrix row by row, bias row last."""
        layer = NeuralLayer(2, 3)
        layer.set_weights(np.arange(9.0))

        np.testing.assert_array_equal(layer.weights[0], [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(layer.weights[1], [3.0, 4.0, 5.0])
        np.testing.assert_array_equal(layer.weights[2], [6.0, 7.0, 8.0])

    def test_get_weights_round_trip(self):
        """Test that get_weights returns the flat vector given to set_weights."""
        layer = NeuralLayer(2, 3)
        layer.set_weights(np.arange(9.0))

        np.testing.assert_array_equal(layer.get_weights(), np.arange(9.0))

    def test_get_weights_is_a_copy(self):
        """Test that changing the returned vector does not change the layer."""
        layer = NeuralLayer(1, 1)
        flat = layer.get_weights()
        flat[0] = 5.0

        assert layer.weights[0, 0] == 0.0

    @pytest.mark.parametrize("count", [8, 10])
    def test_set_weights_wrong_length(self, count):
        """Test that a vector of the wrong length raises DimensionMismatch."""
        layer = NeuralLayer(2, 3)

        with pytest.raises(DimensionMismatch):
            layer.set_weights(np.zeros(count))

    def test_set_random_weights(self, rng):
        """Test that random weights lie within the requested range."""
        layer = NeuralLayer(4, 4)
        layer.set_random_weights(-0.5, 0.5, rng)

        assert np.all(layer.weights >= -0.5)
        assert np.all(layer.weights < 0.5)
        assert np.any(layer.weights != 0.0)


# ============================================================================
# Test Forward Pass
# ============================================================================

class TestProcessInputs:
    """Test NeuralLayer.process_inputs method."""

    def test_weighted_sum_with_bias(self):
        """Test the linear output of a layer without activation."""
        layer = NeuralLayer(2, 1)
        layer.activation = None
        layer.set_weights([2.0, 3.0, 0.5])

        outputs = layer.process_inputs([1.0, 1.0])

        np.testing.assert_allclose(outputs, [5.5])

    def test_identity_activation(self):
        """Test that an identity activation leaves the sums unchanged."""
        layer = NeuralLayer(2, 2)
        layer.activation = identity_activation
        layer.set_weights([1.0, 0.0, 0.0, 1.0, 1.0, -1.0])

        outputs = layer.process_inputs([2.0, 3.0])

        np.testing.assert_allclose(outputs, [3.0, 2.0])

    def test_sigmoid_of_zero_weights(self):
        """Test that a layer with zero weights outputs 0.5 everywhere."""
        layer = NeuralLayer(3, 2)

        np.testing.assert_allclose(layer.process_inputs([1.0, 2.0, 3.0]), [0.5, 0.5])

    def test_wrong_input_count(self):
        """Test that a wrong number of inputs raises DimensionMismatch."""
        layer = NeuralLayer(3, 2)

        with pytest.raises(DimensionMismatch):
            layer.process_inputs([1.0, 2.0])


# ============================================================================
# Test Copies
# ============================================================================

class TestDeepCopy:
    """Test NeuralLayer.deep_copy method."""

    def test_copy_is_independent(self):
        """Test that the copy has equal weights but its own matrix."""
        layer = NeuralLayer(2, 2)
        layer.set_weights(np.arange(6.0))
        layer.activation = identity_activation

        copy = layer.deep_copy()
        copy.weights[0, 0] = 100.0

        assert layer.weights[0, 0] == 0.0
        assert copy.activation is identity_activation
        np.testing.assert_array_equal(copy.weights[1:], layer.weights[1:])
