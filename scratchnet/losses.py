"""Loss functions and their gradients with respect to the prediction."""

from __future__ import annotations

import math
from collections.abc import Sequence

_LOG_EPSILON = 1e-15


def _pairs(predicted: Sequence[float], actual: Sequence[float]):
    if len(actual) < len(predicted):
        raise ValueError(
            f"actual has {len(actual)} values, predicted has {len(predicted)}"
        )
    return zip(predicted, actual)


def mean_squared_error(predicted: Sequence[float], actual: Sequence[float]) -> float:
    """Mean of squared differences between prediction and target."""
    total = sum((p - a) * (p - a) for p, a in _pairs(predicted, actual))
    return total / len(predicted)


def mean_squared_error_derivative(
    predicted: Sequence[float], actual: Sequence[float]
) -> list[float]:
    """Gradient of :func:`mean_squared_error` with respect to ``predicted``."""
    n = len(predicted)
    return [2 * (p - a) / n for p, a in _pairs(predicted, actual)]


def cross_entropy(predicted: Sequence[float], actual: Sequence[float]) -> float:
    """Cross entropy averaged over the number of outputs."""
    total = sum(a * math.log(p + _LOG_EPSILON) for p, a in _pairs(predicted, actual))
    return -total / len(predicted)


def cross_entropy_derivative(
    predicted: Sequence[float], actual: Sequence[float]
) -> list[float]:
    """Gradient used with cross entropy: prediction minus target."""
    return [p - a for p, a in _pairs(predicted, actual)]