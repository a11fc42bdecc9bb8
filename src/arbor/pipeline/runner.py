"""
End-to-end decision tree run.

Usage (library):

    from arbor.pipeline.options import DecisionTreeOptions
    from arbor.pipeline.runner import run_decision_tree

    result = run_decision_tree(
        DecisionTreeOptions(
            training="data.csv",
            output_model="tree.joblib",
            print_training_error=True,
        )
    )

This will:
- Validate the option combination
- Train a model (or load the input model)
- Optionally report training accuracy
- Optionally classify a test set and report test accuracy
- Save predictions, probabilities and the model where requested
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from arbor.data.data_loader import (
    as_dataset,
    as_vector,
    save_predictions,
    save_probabilities,
)
from arbor.data.labels import (
    as_class_indices,
    infer_num_classes,
    resolve_labels,
    validate_weights,
)
from arbor.models.classifier import ClassifierFactory, SklearnDecisionTree
from arbor.models.evaluate_model import (
    classify_test_set,
    plot_confusion_matrix,
    report_test_accuracy,
)
from arbor.models.metrics import AccuracyReport, compute_classification_metrics
from arbor.models.model import DecisionTreeModel, as_model, save_model
from arbor.models.train_model import report_training_accuracy, train_decision_tree
from arbor.pipeline.options import DecisionTreeOptions
from arbor.pipeline.validation import validate_options
from arbor.utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class DecisionTreeResult:
    """Everything a run produced, whether or not it was written to disk."""

    model: DecisionTreeModel
    predictions: Optional[np.ndarray] = None
    probabilities: Optional[np.ndarray] = None
    training_accuracy: Optional[AccuracyReport] = None
    test_accuracy: Optional[AccuracyReport] = None
    test_metrics: Optional[Dict[str, Any]] = None
    warnings: List[str] = field(default_factory=list)


def _train(
    options: DecisionTreeOptions,
    classifier_factory: ClassifierFactory,
) -> tuple[DecisionTreeModel, Optional[AccuracyReport]]:
    dataset = as_dataset(options.training)
    explicit_labels = as_vector(options.labels, kind="labels")
    dataset, labels = resolve_labels(dataset, explicit_labels)
    num_classes = infer_num_classes(labels)

    weights = as_vector(options.weights, kind="weights")
    if weights is not None:
        weights = validate_weights(weights, dataset.n_points)

    model = train_decision_tree(
        dataset,
        labels,
        num_classes,
        weights=weights,
        minimum_leaf_size=int(options.minimum_leaf_size),
        minimum_gain_split=float(options.minimum_gain_split),
        classifier_factory=classifier_factory,
    )

    training_accuracy = None
    if options.print_training_error:
        training_accuracy = report_training_accuracy(model, dataset, labels)
    return model, training_accuracy


def run_decision_tree(
    options: DecisionTreeOptions,
    classifier_factory: ClassifierFactory = SklearnDecisionTree,
) -> DecisionTreeResult:
    """
    Run one train-or-load / classify / save cycle.

    Parameters
    ----------
    options : DecisionTreeOptions
        Options for this run. Validated before any data is loaded.
    classifier_factory : callable
        Builds the classifier when training.

    Returns
    -------
    DecisionTreeResult
        The model plus any predictions, probabilities and accuracy reports.

    Raises
    ------
    ConfigurationError
        If the option combination or a hyper-parameter is invalid.
    InvalidInputError
        If datasets, labels, weights or the input model are malformed.
    """
    options, warnings = validate_options(options)

    training_accuracy = None
    if options.training is not None:
        model, training_accuracy = _train(options, classifier_factory)
    else:
        model = as_model(options.input_model)

    result = DecisionTreeResult(
        model=model,
        training_accuracy=training_accuracy,
        warnings=warnings,
    )

    if options.test is not None:
        test = as_dataset(options.test, info=model.info)
        predictions, probabilities = classify_test_set(model, test)
        result.predictions = predictions
        result.probabilities = probabilities

        if options.predictions is not None:
            save_predictions(predictions, options.predictions)
        if options.probabilities is not None:
            save_probabilities(probabilities, options.probabilities)

        test_labels = as_vector(options.test_labels, kind="labels")
        if test_labels is not None:
            test_labels = as_class_indices(test_labels, "Test labels")
            result.test_accuracy = report_test_accuracy(predictions, test_labels)
            result.test_metrics = compute_classification_metrics(
                y_true=test_labels,
                y_pred=predictions,
                y_proba=probabilities,
                num_classes=model.num_classes,
            )
            logger.info("Test metrics: %s", result.test_metrics)
            if options.confusion_matrix_plot is not None:
                plot_confusion_matrix(
                    np.array(result.test_metrics["confusion_matrix"], dtype=int),
                    options.confusion_matrix_plot,
                )

    if options.output_model is not None:
        save_model(model, options.output_model)

    return result
