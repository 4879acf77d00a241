"""A fully connected layer with a scalar activation function."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence

from scratchnet.activations import sigmoid, sigmoid_derivative

Activation = Callable[[float], float]


class Layer:
    """Dense layer: ``activation(W @ x + b)``.

    ``activation_derivative`` is evaluated on the layer's outputs, so for a
    sigmoid it takes the sigmoid's value rather than the raw input.
    A ``seed`` of 0 draws initial weights from system entropy.
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        activation: Activation = sigmoid,
        activation_derivative: Activation = sigmoid_derivative,
        seed: int = 0,
    ) -> None:
        self.input_size = input_size
        self.output_size = output_size
        self.activation = activation
        self.activation_derivative = activation_derivative

        rng = random.Random(seed) if seed else random.Random()
        limit = math.sqrt(2.0 / (input_size + output_size)) * 0.5
        self.weights: list[list[float]] = []
        self.biases: list[float] = []
        for _ in range(output_size):
            self.weights.append([rng.uniform(-limit, limit) for _ in range(input_size)])
            self.biases.append(rng.uniform(-limit, limit))

        self.weight_gradients = [[0.0] * input_size for _ in range(output_size)]
        self.bias_gradients = [0.0] * output_size
        self._inputs: list[float] | None = None
        self._outputs: list[float] | None = None

    def forward(self, inputs: Sequence[float]) -> list[float]:
        """Compute and remember the layer's output for ``inputs``."""
        if len(inputs) < self.input_size:
            raise ValueError(
                f"expected {self.input_size} inputs, got {len(inputs)}"
            )
        self._inputs = list(inputs[: self.input_size])
        self._outputs = [
            self.activation(sum((w * x for w, x in zip(row, self._inputs)), bias))
            for row, bias in zip(self.weights, self.biases)
        ]
        return list(self._outputs)

    def _deltas(self, gradients: Sequence[float]) -> list[float]:
        if self._outputs is None:
            raise RuntimeError("forward must be called before computing gradients")
        if len(gradients) < self.output_size:
            raise ValueError(
                f"expected {self.output_size} gradients, got {len(gradients)}"
            )
        return [
            g * self.activation_derivative(out)
            for g, out in zip(gradients, self._outputs)
        ]

    def backward(self, gradients: Sequence[float]) -> list[float]:
        """Store parameter gradients and return the gradient for the inputs."""
        deltas = self._deltas(gradients)
        columns = zip(*self.weights) if self.weights else ([] for _ in range(self.input_size))
        input_gradients = [sum(w * d for w, d in zip(col, deltas)) for col in columns]
        self.weight_gradients = [[d * x for x in self._inputs] for d in deltas]
        self.bias_gradients = deltas
        return [float(g) for g in input_gradients]

    def compute_weight_gradients(self, gradients: Sequence[float]) -> list[list[float]]:
        """Weight gradients for ``gradients`` without changing the layer."""
        return [[d * x for x in self._inputs] for d in self._deltas(gradients)]

    def compute_bias_gradients(self, gradients: Sequence[float]) -> list[float]:
        """Bias gradients for ``gradients`` without changing the layer."""
        return self._deltas(gradients)