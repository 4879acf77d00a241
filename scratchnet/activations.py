"""Activation functions and their derivatives."""

from __future__ import annotations

import math
from collections.abc import Iterable


def sigmoid(x: float) -> float:
    """Logistic function 1 / (1 + e^-x)."""
    try:
        return 1.0 / (1.0 + math.exp(-x))
    except OverflowError:
        # e^-x overflows only for very negative x, where the limit is 0.
        return 0.0


def sigmoid_all(values: Iterable[float]) -> list[float]:
    """Apply :func:`sigmoid` to every value."""
    return [sigmoid(x) for x in values]


def relu(x: float) -> float:
    """Rectified linear unit: max(0, x)."""
    return max(0.0, float(x))


def relu_all(values: Iterable[float]) -> list[float]:
    """Apply :func:`relu` to every value."""
    return [relu(x) for x in values]


def sigmoid_derivative_from_input(x: float) -> float:
    """Derivative of the sigmoid, evaluated at the raw input ``x``."""
    sig = sigmoid(x)
    return sig * (1 - sig)


def sigmoid_derivative(sigmoid_output: float) -> float:
    """Derivative of the sigmoid, given the sigmoid's own output."""
    return sigmoid_output * (1.0 - sigmoid_output)


def relu_derivative(x: float) -> float:
    """Derivative of ReLU: 1 for positive values, 0 otherwise."""
    return 1.0 if x > 0.0 else 0.0