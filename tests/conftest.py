from pathlib import Path

import numpy as np
import pytest

from arbor.data.schema import Dataset
from arbor.models.classifier import TrainableClassifier


class RecordingClassifier(TrainableClassifier):
    """Fake classifier that records training calls and predicts class 0."""

    def __init__(self):
        self.train_calls = []
        self.num_classes = 0

    def train(self, features, info, labels, num_classes, **kwargs):
        self.train_calls.append(
            {
                "features": np.array(features),
                "info": info,
                "labels": np.array(labels),
                "num_classes": num_classes,
                "kwargs": kwargs,
            }
        )
        self.num_classes = num_classes

    def classify(self, features):
        n_points = features.shape[1]
        probabilities = np.zeros((self.num_classes, n_points))
        probabilities[0] = 1.0
        return np.zeros(n_points, dtype=int), probabilities


@pytest.fixture
def separable_matrix() -> np.ndarray:
    """One feature row plus a label row; a single split separates the classes."""
    return np.array([[1.0, 2.0, 3.0, 4.0], [0.0, 0.0, 1.0, 1.0]])


@pytest.fixture
def three_class_dataset() -> Dataset:
    rng = np.random.default_rng(0)
    features = np.hstack(
        [
            rng.normal(loc=center, scale=0.3, size=(2, 20))
            for center in (0.0, 3.0, 6.0)
        ]
    )
    return Dataset.from_matrix(features)


@pytest.fixture
def three_class_labels() -> np.ndarray:
    return np.repeat([0, 1, 2], 20)


@pytest.fixture
def write_lines(tmp_path: Path):
    def _write(name: str, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
