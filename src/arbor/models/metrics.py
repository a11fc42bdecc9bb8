# path: src/arbor/models/metrics.py
"""
Metrics utilities for Arbor models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix, log_loss

from arbor.errors import InvalidInputError


@dataclass(frozen=True)
class AccuracyReport:
    """Number of correctly classified points out of a total."""

    correct: int
    total: int

    @property
    def percent(self) -> float:
        if self.total == 0:
            return float("nan")
        return self.correct / self.total * 100.0

    def describe(self, set_name: str) -> str:
        return (
            f"{self.percent:g}% correct on {set_name} set "
            f"({self.correct} / {self.total})."
        )


def compute_accuracy(predictions: np.ndarray, labels: np.ndarray) -> AccuracyReport:
    """Compare predictions with labels position by position."""
    predictions = np.asarray(predictions).ravel()
    labels = np.asarray(labels).ravel()
    if predictions.shape[0] != labels.shape[0]:
        raise InvalidInputError(
            f"Got {labels.shape[0]} labels for {predictions.shape[0]} points."
        )
    correct = int(np.sum(predictions.astype(int) == labels.astype(int)))
    return AccuracyReport(correct=correct, total=int(labels.shape[0]))


def compute_classification_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_proba: np.ndarray,
    num_classes: int,
) -> Dict[str, Any]:
    """
    Compute a set of basic classification metrics.

    Parameters
    ----------
    y_true : np.ndarray
        True class indices.
    y_pred : np.ndarray
        Predicted class indices.
    y_proba : np.ndarray
        Predicted probabilities with shape (num_classes, n_samples), as
        returned by the classifier.
    num_classes : int
        Number of classes the model was trained with. The confusion matrix
        is num_classes x num_classes, grown to cover any true label the
        model never saw.

    Returns
    -------
    dict
        {
          "accuracy": float,
          "log_loss": float,
          "baseline_accuracy": float,
          "confusion_matrix": list[list[int]],
        }
    """
    y_true = np.asarray(y_true).astype(int)
    y_pred = np.asarray(y_pred).astype(int)
    if np.any(y_true < 0):
        raise InvalidInputError("True labels must be non-negative class indices.")
    class_ids = np.arange(num_classes)
    n_cm = int(
        max(num_classes, y_true.max(initial=-1) + 1, y_pred.max(initial=-1) + 1)
    )

    acc = accuracy_score(y_true, y_pred) if len(y_true) > 0 else float("nan")

    # Majority-class baseline accuracy
    counts = np.bincount(y_true) if len(y_true) > 0 else np.array([0])
    if counts.sum() > 0:
        baseline_acc = counts.max() / counts.sum()
    else:
        baseline_acc = float("nan")

    try:
        ll = log_loss(y_true, np.asarray(y_proba).T, labels=class_ids)
    except ValueError:
        # Single class, or test labels outside the trained classes
        ll = float("nan")

    if len(y_true) > 0:
        cm = confusion_matrix(y_true, y_pred, labels=np.arange(n_cm))
    else:
        cm = np.zeros((n_cm, n_cm), dtype=int)

    return {
        "accuracy": float(acc),
        "log_loss": float(ll),
        "baseline_accuracy": float(baseline_acc),
        "confusion_matrix": cm.tolist(),
    }
