import numpy as np
import pytest

from arbor.data.data_loader import (
    as_dataset,
    as_vector,
    load_dataset,
    load_labels,
    save_predictions,
    save_probabilities,
)
from arbor.data.schema import CATEGORICAL, NUMERIC, Dataset, DatasetInfo
from arbor.errors import InvalidInputError


def test_load_numeric_csv_is_dimension_major(write_lines):
    path = write_lines("train.csv", ["1,10", "2,20", "3,30"])
    dataset = load_dataset(path)

    assert dataset.matrix.shape == (2, 3)
    np.testing.assert_array_equal(dataset.matrix[0], [1, 2, 3])
    np.testing.assert_array_equal(dataset.matrix[1], [10, 20, 30])
    assert dataset.info.types == [NUMERIC, NUMERIC]


def test_load_whitespace_separated_file(write_lines):
    path = write_lines("train.txt", ["1 10", "2 20"])
    dataset = load_dataset(path)
    assert dataset.matrix.shape == (2, 2)


def test_non_numeric_columns_become_categorical(write_lines):
    path = write_lines("train.csv", ["red,1.5", "blue,2.5", "red,3.5", "green,4.5"])
    dataset = load_dataset(path)

    assert dataset.info.types == [CATEGORICAL, NUMERIC]
    assert dataset.info.mappings[0] == {"red": 0, "blue": 1, "green": 2}
    assert dataset.info.num_mappings(0) == 3
    np.testing.assert_array_equal(dataset.matrix[0], [0, 1, 0, 2])


def test_reference_schema_maps_tokens_consistently(write_lines):
    train = load_dataset(write_lines("train.csv", ["red,1", "blue,2"]))
    test = load_dataset(
        write_lines("test.csv", ["blue,5", "red,6", "purple,7"]), info=train.info
    )

    np.testing.assert_array_equal(test.matrix[0], [1, 0, 2])
    # The reference schema itself is not modified.
    assert train.info.num_mappings(0) == 2


def test_reference_schema_dimension_mismatch(write_lines):
    path = write_lines("test.csv", ["1,2,3"])
    with pytest.raises(InvalidInputError):
        load_dataset(path, info=DatasetInfo.numeric(2))


def test_reference_schema_rejects_tokens_in_numeric_dimension(write_lines):
    train = load_dataset(write_lines("train.csv", ["1,0", "2,0", "3,1", "4,1"]))
    info = train.info.without_dimension(-1)
    path = write_lines("test.csv", ["abc", "4"])

    with pytest.raises(InvalidInputError, match="dimension 0.*'abc'"):
        load_dataset(path, info=info)
    assert info.types == [NUMERIC]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "nope.csv")


def test_labels_accept_column_or_row(write_lines):
    column = load_labels(write_lines("col.csv", ["0", "1", "2"]))
    row = load_labels(write_lines("row.csv", ["0,1,2"]))
    np.testing.assert_array_equal(column, row)


def test_as_dataset_replaces_schema_of_in_memory_dataset():
    dataset = Dataset.from_matrix(np.zeros((2, 3)))
    info = DatasetInfo(types=[CATEGORICAL, NUMERIC])
    resolved = as_dataset(dataset, info=info)

    assert resolved.info.types == [CATEGORICAL, NUMERIC]
    assert resolved.info is not info


def test_as_vector_passes_arrays_through():
    np.testing.assert_array_equal(as_vector([[0, 1], [1, 0]]), [0, 1, 1, 0])
    assert as_vector(None) is None


def test_dataset_rejects_schema_mismatch():
    with pytest.raises(InvalidInputError):
        Dataset(matrix=np.zeros((3, 2)), info=DatasetInfo.numeric(2))


def test_save_outputs_one_line_per_point(tmp_path):
    pred_path = save_predictions(np.array([0, 2, 1]), tmp_path / "out" / "p.csv")
    prob_path = save_probabilities(
        np.array([[1.0, 0.0, 0.5], [0.0, 1.0, 0.5]]), tmp_path / "probs.csv"
    )

    assert pred_path.read_text().split() == ["0", "2", "1"]
    lines = prob_path.read_text().strip().splitlines()
    assert len(lines) == 3
    assert lines[2].split(",") == ["0.5", "0.5"]
