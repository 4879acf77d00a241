import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from scratchnet.data_loader import (
    Dataset,
    download_iris_dataset,
    load_iris_dataset,
    load_iris_from_csv,
    normalize_features,
    one_hot_encode,
    train_test_split,
    train_validation_test_split,
)

SAMPLE_CSV = (
    "5.1,3.5,1.4,0.2,Iris-setosa\n"
    "7.0,3.2,4.7,1.4,Iris-versicolor\r\n"
    "\n"
    "6.3,3.3,6.0,2.5,\"Iris-virginica\"\n"
    "4.9,3.0,1.4,0.2, Iris-setosa \n"
    "\n"
)


def _indexed_dataset(count):
    return Dataset(
        inputs=[[float(i)] for i in range(count)],
        targets=[[float(i) * 2] for i in range(count)],
        feature_names=["x"],
        class_names=["a", "b"],
    )


def test_one_hot_encode():
    assert one_hot_encode([0, 2, 1], 3) == [
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0],
        [0.0, 1.0, 0.0],
    ]


def test_one_hot_encode_out_of_range_is_zero():
    assert one_hot_encode([-1, 3], 3) == [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]


def test_normalize_features():
    data = [[1.0, 10.0], [3.0, 10.0]]
    normalize_features(data)
    assert data == [[-1.0, 10.0], [1.0, 10.0]]


def test_normalize_features_zero_mean_unit_std():
    data = [[2.0], [4.0], [6.0], [8.0]]
    normalize_features(data)
    values = [row[0] for row in data]
    assert sum(values) == pytest.approx(0.0)
    assert sum(v * v for v in values) / len(values) == pytest.approx(1.0)


def test_normalize_features_empty():
    data = []
    normalize_features(data)
    assert data == []


def test_load_csv(tmp_path):
    path = tmp_path / "iris.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    dataset = load_iris_from_csv(path)
    assert dataset.inputs == [
        [5.1, 3.5, 1.4, 0.2],
        [7.0, 3.2, 4.7, 1.4],
        [6.3, 3.3, 6.0, 2.5],
        [4.9, 3.0, 1.4, 0.2],
    ]
    assert dataset.class_names == ["Iris-setosa", "Iris-versicolor", "Iris-virginica"]
    assert dataset.feature_names == ["feature_1", "feature_2", "feature_3", "feature_4"]
    assert dataset.targets == [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 0.0, 0.0],
    ]


def test_load_csv_skips_incomplete_rows(tmp_path):
    path = tmp_path / "iris.csv"
    path.write_text(
        "1,2,3,4,a\n1,2,3\nx,2,3,4,a\n5,6,7,8,b\n", encoding="utf-8"
    )
    dataset = load_iris_from_csv(path)
    assert dataset.inputs == [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]]
    assert dataset.class_names == ["a", "b"]
    assert len(dataset.targets) == 2


def test_load_csv_without_data_raises(tmp_path):
    path = tmp_path / "iris.csv"
    path.write_text("a,b,c\n\n", encoding="utf-8")
    with pytest.raises(ValueError, match="No data loaded"):
        load_iris_from_csv(path)


def test_missing_file_and_failed_download_raises(tmp_path):
    path = tmp_path / "data" / "iris.csv"
    with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("offline")):
        with pytest.raises(FileNotFoundError, match="Could not download"):
            load_iris_from_csv(path)


def test_download_failure_returns_false(tmp_path):
    with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("offline")):
        assert download_iris_dataset(tmp_path / "iris.csv") is False


def test_load_iris_dataset_default_path(tmp_path, monkeypatch):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "iris.csv").write_text(SAMPLE_CSV, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    dataset = load_iris_dataset()
    assert dataset.inputs[0] == [5.1, 3.5, 1.4, 0.2]
    assert dataset.class_names[0] == "Iris-setosa"


def test_train_test_split_sizes_and_coverage():
    dataset = _indexed_dataset(10)
    train, test = train_test_split(dataset, 0.2, seed=42)
    assert len(train.inputs) == 8
    assert len(test.inputs) == 2
    assert sorted(r[0] for r in train.inputs + test.inputs) == [float(i) for i in range(10)]
    assert train.class_names == ["a", "b"]
    assert test.feature_names == ["x"]


def test_train_test_split_keeps_pairs():
    train, test = train_test_split(_indexed_dataset(20), 0.25, seed=3)
    for part in (train, test):
        for x, t in zip(part.inputs, part.targets):
            assert t[0] == x[0] * 2


def test_train_test_split_seed_is_reproducible():
    dataset = _indexed_dataset(30)
    first = train_test_split(dataset, 0.2, seed=42)
    second = train_test_split(dataset, 0.2, seed=42)
    assert first[0].inputs == second[0].inputs
    assert first[1].inputs == second[1].inputs


def test_train_validation_test_split_sizes():
    dataset = _indexed_dataset(150)
    train, validation, test = train_validation_test_split(dataset, 0.6, 0.2, 0.2, 42)
    assert (len(train.inputs), len(validation.inputs), len(test.inputs)) == (90, 30, 30)
    combined = train.inputs + validation.inputs + test.inputs
    assert sorted(r[0] for r in combined) == [float(i) for i in range(150)]
    for part in (train, validation, test):
        for x, t in zip(part.inputs, part.targets):
            assert t[0] == x[0] * 2


def test_train_validation_test_split_bad_ratios():
    with pytest.raises(ValueError, match="sum to 1.0"):
        train_validation_test_split(_indexed_dataset(10), 0.5, 0.2, 0.2, 1)


def test_split_copies_rows():
    dataset = _indexed_dataset(5)
    train, test = train_test_split(dataset, 0.2, seed=1)
    train.inputs[0][0] = -100.0
    assert all(row[0] >= 0.0 for row in dataset.inputs)