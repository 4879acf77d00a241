"""Loading, normalising and splitting datasets such as Iris."""

from __future__ import annotations

import logging
import math
import random
import re
import urllib.request
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

IRIS_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/iris/iris.data"
DEFAULT_IRIS_PATH = "data/iris.csv"
FEATURE_COUNT = 4

_TRIM_CHARS = " \t\r\n\"'"
_STD_EPSILON = 1e-8
_RATIO_EPSILON = 1e-6
_NUMBER = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


@dataclass
class Dataset:
    """Samples with their targets and the names of features and classes."""

    inputs: list[list[float]] = field(default_factory=list)
    targets: list[list[float]] = field(default_factory=list)
    feature_names: list[str] = field(default_factory=list)
    class_names: list[str] = field(default_factory=list)

    def _subset(self, indices: Sequence[int]) -> Dataset:
        return Dataset(
            inputs=[list(self.inputs[i]) for i in indices],
            targets=[list(self.targets[i]) for i in indices],
            feature_names=list(self.feature_names),
            class_names=list(self.class_names),
        )


def _parse_number(text: str) -> float | None:
    """Parse the leading number of ``text``, or return None if there is none."""
    match = _NUMBER.match(text)
    if match is None:
        return None
    literal = match.group()
    value = float(literal)
    if math.isinf(value) and "inf" not in literal.lower():
        return None
    return value


def _split_fields(line: str) -> list[str]:
    fields = line.split(",")
    if line.endswith(","):
        fields.pop()
    return fields


def _records(text: str) -> Iterator[tuple[list[float], str | None]]:
    for line in text.split("\n"):
        if not line:
            continue
        fields = _split_fields(line)
        features = []
        for index, cell in enumerate(fields[:FEATURE_COUNT]):
            value = _parse_number(cell)
            if value is None:
                logger.warning("Error parsing feature %d in line: %s", index, line)
            else:
                features.append(value)
        species = fields[FEATURE_COUNT].strip(_TRIM_CHARS) if len(fields) > FEATURE_COUNT else None
        yield features, species


def download_iris_dataset(filename: str | Path) -> bool:
    """Fetch the Iris data into ``filename``; return whether it succeeded."""
    logger.info("Downloading Iris dataset...")
    path = Path(filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with urllib.request.urlopen(IRIS_URL, timeout=60) as response:
            payload = response.read()
        path.write_bytes(payload)
    except OSError as exc:
        logger.warning("Failed to download Iris dataset: %s", exc)
        return False
    logger.info("Successfully downloaded Iris dataset to %s", path)
    return True


def load_iris_from_csv(filename: str | Path) -> Dataset:
    """Read Iris-style rows (four features then a class name).

    The file is downloaded first if it does not exist. Targets are one-hot
    over the class names in sorted order.
    """
    path = Path(filename)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("CSV file not found. Attempting to download...")
        if not download_iris_dataset(path):
            raise FileNotFoundError(
                f"Could not download or find Iris dataset file: {filename}"
            ) from None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FileNotFoundError(
                f"Could not open downloaded Iris dataset file: {filename}"
            ) from exc

    records = list(_records(text))
    inputs = [
        features
        for features, species in records
        if species is not None and len(features) == FEATURE_COUNT
    ]
    if not inputs:
        raise ValueError(f"No data loaded from file: {filename}")

    class_names = sorted(
        {
            species
            for features, species in records
            if species is not None and len(features) == FEATURE_COUNT
        }
    )
    class_index = {name: i for i, name in enumerate(class_names)}

    targets: list[list[float]] = []
    for _, species in records:
        if len(targets) >= len(inputs):
            break
        if species is None:
            continue
        index = class_index.get(species)
        if index is None:
            logger.warning("Unknown species during encoding: %s", species)
            continue
        target = [0.0] * len(class_names)
        target[index] = 1.0
        targets.append(target)

    dataset = Dataset(
        inputs=inputs,
        targets=targets,
        feature_names=[f"feature_{i}" for i in range(1, FEATURE_COUNT + 1)],
        class_names=class_names,
    )
    logger.info("Loaded %d samples from %s", len(inputs), filename)
    logger.info("Discovered %d classes: %s", len(class_names), ", ".join(class_names))
    return dataset


def load_iris_dataset() -> Dataset:
    """Load the Iris dataset from its default location."""
    return load_iris_from_csv(DEFAULT_IRIS_PATH)


def _compute_mean(data: Sequence[Sequence[float]]) -> list[float]:
    mean = [0.0] * len(data[0])
    for sample in data:
        for i, value in enumerate(sample):
            mean[i] += value
    return [total / len(data) for total in mean]


def _compute_std(data: Sequence[Sequence[float]], mean: Sequence[float]) -> list[float]:
    variance = [0.0] * len(mean)
    for sample in data:
        for i, value in enumerate(sample):
            diff = value - mean[i]
            variance[i] += diff * diff
    return [math.sqrt(total / len(data)) for total in variance]


def normalize_features(data: list[list[float]]) -> None:
    """Standardise every column in place to zero mean and unit deviation.

    Columns with (almost) no spread are left unchanged.
    """
    if not data:
        return
    mean = _compute_mean(data)
    std = _compute_std(data, mean)
    for sample in data:
        for i, value in enumerate(sample):
            if std[i] > _STD_EPSILON:
                sample[i] = (value - mean[i]) / std[i]


def _shuffled_indices(count: int, seed: int) -> list[int]:
    rng = random.Random(seed) if seed else random.Random()
    indices = list(range(count))
    rng.shuffle(indices)
    return indices


def train_test_split(
    dataset: Dataset, test_ratio: float = 0.2, seed: int = 0
) -> tuple[Dataset, Dataset]:
    """Shuffle and split into (train, test). A seed of 0 is non-deterministic."""
    total = len(dataset.inputs)
    train_size = total - int(total * test_ratio)
    indices = _shuffled_indices(total, seed)
    train = dataset._subset(indices[:train_size])
    test = dataset._subset(indices[train_size:])
    logger.info(
        "Train/Test split: %d train samples, %d test samples",
        len(train.inputs),
        len(test.inputs),
    )
    return train, test


def train_validation_test_split(
    dataset: Dataset,
    train_ratio: float,
    validation_ratio: float,
    test_ratio: float = 0.2,
    seed: int = 0,
) -> tuple[Dataset, Dataset, Dataset]:
    """Shuffle and split into (train, validation, test).

    The ratios must sum to 1. A seed of 0 is non-deterministic.
    """
    if abs(train_ratio + validation_ratio + test_ratio - 1.0) > _RATIO_EPSILON:
        raise ValueError("Train, validation, and test ratios must sum to 1.0")
    total = len(dataset.inputs)
    train_size = int(total * train_ratio)
    validation_end = train_size + int(total * validation_ratio)
    indices = _shuffled_indices(total, seed)
    train = dataset._subset(indices[:train_size])
    validation = dataset._subset(indices[train_size:validation_end])
    test = dataset._subset(indices[validation_end:])
    logger.info(
        "Train/Validation/Test split: %d train, %d validation, %d test samples",
        len(train.inputs),
        len(validation.inputs),
        len(test.inputs),
    )
    return train, validation, test


def one_hot_encode(labels: Sequence[int], num_classes: int) -> list[list[float]]:
    """One-hot encode integer labels; out-of-range labels give all zeros."""
    encoded = []
    for label in labels:
        row = [0.0] * num_classes
        if 0 <= label < num_classes:
            row[label] = 1.0
        encoded.append(row)
    return encoded