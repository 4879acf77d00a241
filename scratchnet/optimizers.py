"""Gradient-descent optimizers that update weights and biases in place."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

Matrix = list[list[float]]
Vector = list[float]


def _matrix_shape(matrix: Matrix) -> tuple[int, ...]:
    return tuple(len(row) for row in matrix)


def _zeros_like(matrix: Matrix) -> Matrix:
    return [[0.0] * len(row) for row in matrix]


class _ParameterSlots:
    """Per-parameter optimizer state, reset when a parameter changes shape."""

    def __init__(self) -> None:
        self._slots: dict[int, tuple[Any, Any, Any]] = {}

    def get(self, param: Any, shape: Any, make: Callable[[], Any]) -> Any:
        entry = self._slots.get(id(param))
        if entry is None or entry[0] is not param or entry[1] != shape:
            entry = (param, shape, make())
            self._slots[id(param)] = entry
        return entry[2]


class Optimizer(ABC):
    """Base class for optimizers."""

    @abstractmethod
    def update_weights(
        self, weights: Matrix, weight_gradients: Matrix, learning_rate: float
    ) -> None:
        """Apply one update step to a weight matrix in place."""

    @abstractmethod
    def update_biases(
        self, biases: Vector, bias_gradients: Vector, learning_rate: float
    ) -> None:
        """Apply one update step to a bias vector in place."""


class SGD(Optimizer):
    """Plain stochastic gradient descent."""

    def update_weights(
        self, weights: Matrix, weight_gradients: Matrix, learning_rate: float
    ) -> None:
        for row, grads in zip(weights, weight_gradients):
            self.update_biases(row, grads, learning_rate)

    def update_biases(
        self, biases: Vector, bias_gradients: Vector, learning_rate: float
    ) -> None:
        for j, (_, g) in enumerate(zip(biases, bias_gradients)):
            biases[j] -= learning_rate * g


class Momentum(Optimizer):
    """Gradient descent with classical momentum."""

    def __init__(self, momentum: float = 0.9) -> None:
        self.momentum = momentum
        self._weight_velocities = _ParameterSlots()
        self._bias_velocities = _ParameterSlots()

    def _step(
        self, params: Vector, grads: Vector, velocities: Vector, learning_rate: float
    ) -> None:
        for j, (_, g) in enumerate(zip(params, grads)):
            velocities[j] = self.momentum * velocities[j] - learning_rate * g
            params[j] += velocities[j]

    def update_weights(
        self, weights: Matrix, weight_gradients: Matrix, learning_rate: float
    ) -> None:
        velocities = self._weight_velocities.get(
            weights, _matrix_shape(weights), lambda: _zeros_like(weights)
        )
        for row, grads, vel_row in zip(weights, weight_gradients, velocities):
            self._step(row, grads, vel_row, learning_rate)

    def update_biases(
        self, biases: Vector, bias_gradients: Vector, learning_rate: float
    ) -> None:
        velocities = self._bias_velocities.get(
            biases, len(biases), lambda: [0.0] * len(biases)
        )
        self._step(biases, bias_gradients, velocities, learning_rate)


class Adam(Optimizer):
    """Adam optimizer with bias-corrected first and second moments.

    The time step advances once per :meth:`update_weights` call; bias
    updates use the current time step.
    """

    def __init__(
        self, beta1: float = 0.9, beta2: float = 0.999, epsilon: float = 1e-8
    ) -> None:
        self.beta1 = beta1
        self.beta2 = beta2
        self.epsilon = epsilon
        self.time_step = 0
        self._weight_moments = _ParameterSlots()
        self._bias_moments = _ParameterSlots()

    def _step(
        self, params: Vector, grads: Vector, m: Vector, v: Vector, learning_rate: float
    ) -> None:
        m_correction = 1.0 - self.beta1**self.time_step
        v_correction = 1.0 - self.beta2**self.time_step
        for j, (_, g) in enumerate(zip(params, grads)):
            m[j] = self.beta1 * m[j] + (1.0 - self.beta1) * g
            v[j] = self.beta2 * v[j] + (1.0 - self.beta2) * g * g
            m_hat = m[j] / m_correction
            v_hat = v[j] / v_correction
            params[j] -= learning_rate * m_hat / (math.sqrt(v_hat) + self.epsilon)

    def update_weights(
        self, weights: Matrix, weight_gradients: Matrix, learning_rate: float
    ) -> None:
        if not weights or not weight_gradients:
            return
        m, v = self._weight_moments.get(
            weights,
            _matrix_shape(weights),
            lambda: (_zeros_like(weights), _zeros_like(weights)),
        )
        self.time_step += 1
        for row, grads, m_row, v_row in zip(weights, weight_gradients, m, v):
            self._step(row, grads, m_row, v_row, learning_rate)

    def update_biases(
        self, biases: Vector, bias_gradients: Vector, learning_rate: float
    ) -> None:
        if not biases or not bias_gradients:
            return
        m, v = self._bias_moments.get(
            biases, len(biases), lambda: ([0.0] * len(biases), [0.0] * len(biases))
        )
        self._step(biases, bias_gradients, m, v, learning_rate)