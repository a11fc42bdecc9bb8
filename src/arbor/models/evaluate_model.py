# path: src/arbor/models/evaluate_model.py
"""
Classify test sets with a trained decision tree model and evaluate the
predictions.

The test set's schema is always replaced with the model's own; a test set is
never allowed to describe its categorical dimensions independently.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np

from arbor.data.schema import Dataset
from arbor.errors import InvalidInputError
from arbor.models.metrics import AccuracyReport, compute_accuracy
from arbor.models.model import DecisionTreeModel
from arbor.utils.logging_utils import get_logger
from arbor.utils.paths import PathLike, ensure_parent_dir

logger = get_logger(__name__)


def classify_test_set(
    model: DecisionTreeModel,
    test: Dataset,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Classify every point of `test`.

    Returns
    -------
    (np.ndarray, np.ndarray)
        Predicted class per point, and probabilities of shape
        (num_classes, n_points).
    """
    if test.n_dimensions != model.info.dimensionality:
        raise InvalidInputError(
            f"Test set has {test.n_dimensions} dimensions but the model was "
            f"trained on {model.info.dimensionality}."
        )
    test.info = model.info.copy()

    logger.info("Classifying %d test points...", test.n_points)
    return model.classifier.classify(test.matrix)


def report_test_accuracy(
    predictions: np.ndarray,
    test_labels: np.ndarray,
) -> AccuracyReport:
    """Log and return accuracy of `predictions` against `test_labels`."""
    report = compute_accuracy(predictions, test_labels)
    logger.info(report.describe("test"))
    return report


def plot_confusion_matrix(
    cm: np.ndarray,
    out_path: PathLike,
) -> Path:
    """Plot and save a confusion matrix with one row/column per class index."""
    cm = np.asarray(cm, dtype=int)
    out_path = ensure_parent_dir(out_path)
    class_ids = np.arange(cm.shape[0])

    fig, ax = plt.subplots(figsize=(6, 5))
    im = ax.imshow(cm, interpolation="nearest")
    ax.figure.colorbar(im, ax=ax)

    ax.set_xticks(class_ids)
    ax.set_yticks(class_ids)
    ax.set_xlabel("Predicted class")
    ax.set_ylabel("True class")
    ax.set_title("Confusion Matrix")

    # Annotate cells
    thresh = cm.max() / 2.0 if cm.max() > 0 else 0.5
    for i in range(cm.shape[0]):
        for j in range(cm.shape[1]):
            ax.text(
                j,
                i,
                format(cm[i, j], "d"),
                ha="center",
                va="center",
                color="white" if cm[i, j] > thresh else "black",
            )

    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    logger.info("Saved confusion matrix plot to %s", out_path)
    return out_path
