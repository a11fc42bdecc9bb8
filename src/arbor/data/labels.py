"""
Label resolution for training.

Labels are either supplied explicitly or taken from the last dimension of the
training set, which is then removed from the features.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from arbor.data.schema import Dataset
from arbor.errors import InvalidInputError
from arbor.utils.logging_utils import get_logger

logger = get_logger(__name__)


def as_class_indices(values: np.ndarray, source: str) -> np.ndarray:
    """Check that `values` are non-negative integers and return them as int."""
    arr = np.asarray(values, dtype=float).ravel()
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{source} contain non-finite values.")
    if np.any(arr != np.round(arr)):
        raise InvalidInputError(f"{source} must be integer class indices.")
    if np.any(arr < 0):
        raise InvalidInputError(
            f"{source} must be non-negative (found {arr.min():g})."
        )
    return arr.astype(int)


def resolve_labels(
    dataset: Dataset,
    labels: Optional[np.ndarray] = None,
) -> Tuple[Dataset, np.ndarray]:
    """
    Return the training features and their labels.

    Parameters
    ----------
    dataset : Dataset
        Training set, shape (n_dimensions, n_points).
    labels : np.ndarray | None
        Explicit labels, one per point. If None, the last dimension of
        `dataset` is rounded to integers and used as labels, and removed
        from the returned features and schema.

    Returns
    -------
    (Dataset, np.ndarray)
        Features to train on and integer labels.

    Raises
    ------
    InvalidInputError
        If the label count differs from the point count, or labels are not
        non-negative integers.
    """
    if labels is not None:
        resolved = as_class_indices(labels, "Labels")
        if resolved.shape[0] != dataset.n_points:
            raise InvalidInputError(
                f"Got {resolved.shape[0]} labels for {dataset.n_points} "
                "training points."
            )
        return dataset, resolved

    if dataset.n_dimensions < 2:
        raise InvalidInputError(
            "Cannot take labels from the last dimension of a training set "
            "with fewer than two dimensions; pass labels explicitly."
        )

    logger.info("Using the last dimension of training set as labels.")
    label_row = np.rint(dataset.matrix[-1])
    resolved = as_class_indices(label_row, "Labels in the last dimension")
    features = Dataset(
        matrix=dataset.matrix[:-1],
        info=dataset.info.without_dimension(-1),
    )
    return features, resolved


def infer_num_classes(labels: np.ndarray) -> int:
    """
    Number of classes, taken as max(label) + 1.

    Classes below the maximum that have no samples are reported but still
    counted, so probability outputs keep one row per class index.
    """
    labels = np.asarray(labels, dtype=int)
    if labels.size == 0:
        raise InvalidInputError("Cannot infer the number of classes from no labels.")

    num_classes = int(labels.max()) + 1
    counts = np.bincount(labels, minlength=num_classes)
    empty = np.flatnonzero(counts == 0)
    if empty.size:
        logger.warning(
            "Labels span %d classes but classes %s have no samples.",
            num_classes,
            empty.tolist(),
        )
    logger.info("Class counts: %s", counts.tolist())
    return num_classes


def validate_weights(weights: np.ndarray, n_points: int) -> np.ndarray:
    """Return weights as a 1-D float array, checking length and sign."""
    arr = np.asarray(weights, dtype=float).ravel()
    if arr.shape[0] != n_points:
        raise InvalidInputError(
            f"Got {arr.shape[0]} weights for {n_points} training points."
        )
    if not np.all(np.isfinite(arr)) or np.any(arr < 0):
        raise InvalidInputError("Weights must be finite and non-negative.")
    return arr
