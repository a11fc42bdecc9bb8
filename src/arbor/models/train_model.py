"""
Train decision tree models.

Training itself is delegated to a `TrainableClassifier`; this module picks the
weighted or unweighted call, bundles the result with its schema, and can
report accuracy on the training set.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from arbor.config import DEFAULT_MINIMUM_GAIN_SPLIT, DEFAULT_MINIMUM_LEAF_SIZE
from arbor.data.schema import Dataset
from arbor.models.classifier import ClassifierFactory, SklearnDecisionTree
from arbor.models.metrics import AccuracyReport, compute_accuracy
from arbor.models.model import DecisionTreeModel
from arbor.utils.logging_utils import get_logger

logger = get_logger(__name__)


def train_decision_tree(
    dataset: Dataset,
    labels: np.ndarray,
    num_classes: int,
    weights: Optional[np.ndarray] = None,
    minimum_leaf_size: int = DEFAULT_MINIMUM_LEAF_SIZE,
    minimum_gain_split: float = DEFAULT_MINIMUM_GAIN_SPLIT,
    classifier_factory: ClassifierFactory = SklearnDecisionTree,
) -> DecisionTreeModel:
    """
    Train a classifier on `dataset` and return it as a model.

    Parameters
    ----------
    dataset : Dataset
        Training features (labels already removed) and their schema.
    labels : np.ndarray
        Integer class index per training point.
    num_classes : int
        Number of classes.
    weights : np.ndarray | None
        Optional per-point weights. Passed to the classifier only if given.
    minimum_leaf_size : int
        Minimum number of points in a leaf.
    minimum_gain_split : float
        Minimum gain for a node to be split.
    classifier_factory : callable
        Builds the untrained classifier.

    Returns
    -------
    DecisionTreeModel
        The trained classifier with a copy of the training schema.
    """
    classifier = classifier_factory()
    logger.info(
        "Training %s on %d points (%d dimensions, %d classes)...",
        type(classifier).__name__,
        dataset.n_points,
        dataset.n_dimensions,
        num_classes,
    )

    if weights is None:
        classifier.train(
            dataset.matrix,
            dataset.info,
            labels,
            num_classes,
            minimum_leaf_size=minimum_leaf_size,
            minimum_gain_split=minimum_gain_split,
        )
    else:
        logger.info("Using per-point weights.")
        classifier.train(
            dataset.matrix,
            dataset.info,
            labels,
            num_classes,
            weights=weights,
            minimum_leaf_size=minimum_leaf_size,
            minimum_gain_split=minimum_gain_split,
        )

    return DecisionTreeModel(
        classifier=classifier,
        info=dataset.info.copy(),
        num_classes=num_classes,
    )


def report_training_accuracy(
    model: DecisionTreeModel,
    dataset: Dataset,
    labels: np.ndarray,
) -> AccuracyReport:
    """Classify the training set and log how many points come out right."""
    predictions, _ = model.classifier.classify(dataset.matrix)
    report = compute_accuracy(predictions, labels)
    logger.info(report.describe("training"))
    return report
