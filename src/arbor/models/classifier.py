"""
Trainable classifier interface and its scikit-learn decision tree backend.

The orchestrator only talks to `TrainableClassifier`; tree construction,
split search and categorical handling all live behind it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

import numpy as np
from sklearn.compose import ColumnTransformer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder
from sklearn.tree import DecisionTreeClassifier

from arbor.config import (
    DEFAULT_MINIMUM_GAIN_SPLIT,
    DEFAULT_MINIMUM_LEAF_SIZE,
    RANDOM_STATE,
    SPLIT_CRITERION,
)
from arbor.data.schema import DatasetInfo
from arbor.errors import ClassifierError
from arbor.utils.logging_utils import get_logger

logger = get_logger(__name__)


class TrainableClassifier(ABC):
    """
    A classifier that can be trained on dimension-major data and classify
    new points.

    Implementations must be picklable; models are persisted with joblib.
    """

    @abstractmethod
    def train(
        self,
        features: np.ndarray,
        info: DatasetInfo,
        labels: np.ndarray,
        num_classes: int,
        weights: Optional[np.ndarray] = None,
        minimum_leaf_size: int = DEFAULT_MINIMUM_LEAF_SIZE,
        minimum_gain_split: float = DEFAULT_MINIMUM_GAIN_SPLIT,
    ) -> None:
        """Fit on `features` of shape (n_dimensions, n_points)."""

    @abstractmethod
    def classify(self, features: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Classify the columns of `features`.

        Returns
        -------
        (np.ndarray, np.ndarray)
            Predicted class index per point, and probabilities of shape
            (num_classes, n_points).
        """


ClassifierFactory = Callable[[], TrainableClassifier]


def _build_encoder(info: DatasetInfo) -> Optional[ColumnTransformer]:
    """One-hot encode categorical dimensions; pass numeric ones through."""
    categorical = info.categorical_dimensions()
    if not categorical:
        return None

    categories = [
        np.arange(max(info.num_mappings(d), 1), dtype=float) for d in categorical
    ]
    return ColumnTransformer(
        [
            (
                "categorical",
                OneHotEncoder(
                    categories=categories,
                    handle_unknown="ignore",
                    sparse_output=False,
                ),
                categorical,
            )
        ],
        remainder="passthrough",
    )


class SklearnDecisionTree(TrainableClassifier):
    """
    Decision tree classifier backed by scikit-learn.

    Parameters
    ----------
    criterion : str
        Split criterion passed to DecisionTreeClassifier.
    random_state : int
        Seed for tie-breaking between equally good splits.
    """

    def __init__(
        self,
        criterion: str = SPLIT_CRITERION,
        random_state: int = RANDOM_STATE,
    ) -> None:
        self.criterion = criterion
        self.random_state = random_state
        self.pipeline: Optional[Pipeline] = None
        self.num_classes: int = 0
        self.dimensionality: int = 0

    def train(
        self,
        features: np.ndarray,
        info: DatasetInfo,
        labels: np.ndarray,
        num_classes: int,
        weights: Optional[np.ndarray] = None,
        minimum_leaf_size: int = DEFAULT_MINIMUM_LEAF_SIZE,
        minimum_gain_split: float = DEFAULT_MINIMUM_GAIN_SPLIT,
    ) -> None:
        tree = DecisionTreeClassifier(
            criterion=self.criterion,
            min_samples_leaf=minimum_leaf_size,
            min_impurity_decrease=minimum_gain_split,
            random_state=self.random_state,
        )
        steps = []
        encoder = _build_encoder(info)
        if encoder is not None:
            steps.append(("encode", encoder))
        steps.append(("tree", tree))
        pipeline = Pipeline(steps)

        fit_params = {}
        if weights is not None:
            fit_params["tree__sample_weight"] = np.asarray(weights, dtype=float)

        pipeline.fit(np.asarray(features, dtype=float).T, labels, **fit_params)

        self.pipeline = pipeline
        self.num_classes = int(num_classes)
        self.dimensionality = int(features.shape[0])
        logger.info(
            "Trained decision tree: %d leaves, depth %d.",
            tree.get_n_leaves(),
            tree.get_depth(),
        )

    def classify(self, features: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        if self.pipeline is None:
            raise ClassifierError("The decision tree has not been trained.")

        X = np.asarray(features, dtype=float).T
        predictions = np.asarray(self.pipeline.predict(X), dtype=int)

        # The tree only knows classes seen in training; expand to every class.
        seen_classes = np.asarray(self.pipeline.classes_, dtype=int)
        probabilities = np.zeros((self.num_classes, X.shape[0]), dtype=float)
        probabilities[seen_classes, :] = self.pipeline.predict_proba(X).T
        return predictions, probabilities
