"""Feed-forward neural network assembled from dense layers."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence

from scratchnet.activations import relu, relu_derivative, sigmoid, sigmoid_derivative
from scratchnet.layer import Layer
from scratchnet.losses import (
    cross_entropy,
    cross_entropy_derivative,
    mean_squared_error,
    mean_squared_error_derivative,
)
from scratchnet.optimizers import SGD, Adam, Momentum, Optimizer

logger = logging.getLogger(__name__)

LossFn = Callable[[Sequence[float], Sequence[float]], float]
LossDerivativeFn = Callable[[Sequence[float], Sequence[float]], list[float]]

_ACTIVATIONS = {
    "sigmoid": (sigmoid, sigmoid_derivative),
    "relu": (relu, relu_derivative),
}

_LOSSES: dict[str, tuple[LossFn, LossDerivativeFn]] = {
    "crossEntropy": (cross_entropy, cross_entropy_derivative),
    "meanSquaredError": (mean_squared_error, mean_squared_error_derivative),
}

_OPTIMIZERS: dict[str, Callable[[], Optimizer]] = {
    "SGD": SGD,
    "Momentum": lambda: Momentum(0.9),
    "Adam": lambda: Adam(0.9, 0.999, 1e-8),
}

_BINARY_EPSILON = 1e-9
_LOG_EVERY = 100


def _argmax(values: Sequence[float]) -> int:
    return max(range(len(values)), key=values.__getitem__, default=0)


def _is_one(value: float) -> bool:
    return abs(value - 1.0) < _BINARY_EPSILON


def _is_zero(value: float) -> bool:
    return abs(value) < _BINARY_EPSILON


def _is_one_hot(target: Sequence[float]) -> bool:
    if len(target) <= 1:
        return False
    ones = sum(1 for value in target if _is_one(value))
    non_binary = any(not _is_one(value) and abs(value) > _BINARY_EPSILON for value in target)
    return ones == 1 and not non_binary


def _is_correct(output: Sequence[float], target: Sequence[float], tolerance: float) -> bool:
    if _is_one_hot(target):
        return _argmax(output) == _argmax(target)
    if len(target) == 1:
        predicted, actual = output[0], target[0]
        if _is_one(actual):
            return predicted >= 0.5
        if _is_zero(actual):
            return predicted < 0.5
        return abs(predicted - actual) <= tolerance
    return all(abs(o - t) <= tolerance for o, t in zip(output, target))


class NeuralNetwork:
    """A stack of dense layers trained sample by sample.

    With no ``layer_sizes`` the network starts empty and layers are added with
    :meth:`add_layer`. ``loss`` and ``optimizer`` may be left unset, but
    :meth:`train` needs both.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int] | None = None,
        activation: str | None = None,
        loss: str | None = None,
        optimizer: str | None = None,
        seed: int = 0,
    ) -> None:
        self.layers: list[Layer] = []
        self.loss: LossFn | None = None
        self.loss_derivative: LossDerivativeFn | None = None
        self.optimizer: Optimizer | None = None

        if layer_sizes is not None:
            try:
                act, act_derivative = _ACTIVATIONS[activation]
            except KeyError:
                raise ValueError(f"Unsupported activation function: {activation}") from None
            sizes = list(layer_sizes)
            for i, (n_in, n_out) in enumerate(zip(sizes, sizes[1:]), start=1):
                layer_seed = seed + i if seed else 0
                self.layers.append(Layer(n_in, n_out, act, act_derivative, layer_seed))

        if loss is not None:
            try:
                self.loss, self.loss_derivative = _LOSSES[loss]
            except KeyError:
                raise ValueError(f"Unsupported loss function: {loss}") from None

        if optimizer is not None:
            try:
                self.optimizer = _OPTIMIZERS[optimizer]()
            except KeyError:
                raise ValueError(f"Unsupported optimizer: {optimizer}") from None

    def add_layer(self, layer: Layer) -> None:
        """Append a layer to the end of the network."""
        self.layers.append(layer)

    def predict(self, inputs: Sequence[float]) -> list[float]:
        """Run ``inputs`` through every layer and return the final output."""
        output = list(inputs)
        for layer in self.layers:
            output = layer.forward(output)
        return output

    def train(
        self,
        inputs: Sequence[Sequence[float]],
        targets: Sequence[Sequence[float]],
        epochs: int,
        learning_rate: float,
    ) -> list[float]:
        """Train on every sample for ``epochs`` passes.

        Returns the mean loss of each epoch.
        """
        if self.loss is None or self.loss_derivative is None:
            raise RuntimeError("no loss function configured")
        if self.optimizer is None:
            raise RuntimeError("no optimizer configured")
        if len(inputs) != len(targets):
            raise ValueError(f"{len(inputs)} inputs but {len(targets)} targets")

        history: list[float] = []
        for epoch in range(epochs):
            total = 0.0
            for sample, target in zip(inputs, targets):
                output = self.predict(sample)
                total += self.loss(output, target)
                gradients = self.loss_derivative(output, target)
                for layer in reversed(self.layers):
                    self.optimizer.update_weights(
                        layer.weights, layer.compute_weight_gradients(gradients), learning_rate
                    )
                    self.optimizer.update_biases(
                        layer.biases, layer.compute_bias_gradients(gradients), learning_rate
                    )
                    gradients = layer.backward(gradients)

            mean_loss = total / len(inputs) if inputs else math.nan
            history.append(mean_loss)
            if epoch % _LOG_EVERY == 0:
                logger.info("Epoch %d, Loss: %g", epoch, mean_loss)
        return history

    def evaluate(
        self,
        inputs: Sequence[Sequence[float]],
        targets: Sequence[Sequence[float]],
        tolerance: float = 0.01,
    ) -> float:
        """Fraction of samples predicted correctly.

        One-hot targets compare the index of the largest value, single 0/1
        targets threshold the output at 0.5, and anything else must lie
        within ``tolerance`` of the target.
        """
        if len(inputs) != len(targets):
            raise ValueError(f"{len(inputs)} inputs but {len(targets)} targets")
        if not inputs:
            return math.nan
        correct = sum(
            1
            for sample, target in zip(inputs, targets)
            if _is_correct(self.predict(sample), target, tolerance)
        )
        return correct / len(inputs)