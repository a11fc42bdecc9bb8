"""
The persisted decision tree model: a trained classifier plus the dataset
schema it was trained with.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import joblib

from arbor.config import MODEL_FORMAT_VERSION
from arbor.data.schema import DatasetInfo
from arbor.errors import InvalidInputError
from arbor.models.classifier import TrainableClassifier
from arbor.utils.logging_utils import get_logger
from arbor.utils.paths import PathLike, ensure_parent_dir

logger = get_logger(__name__)

_ARTIFACT_KEYS = ("format_version", "classifier", "dataset_info", "num_classes")


@dataclass
class DecisionTreeModel:
    """
    A trained classifier and the categorical schema used to train it.

    The schema is re-attached to every dataset classified with this model.
    """

    classifier: TrainableClassifier
    info: DatasetInfo
    num_classes: int


def save_model(model: DecisionTreeModel, path: PathLike) -> Path:
    """Serialize `model` to `path` with joblib and return the path."""
    artifact: Dict[str, Any] = {
        "format_version": MODEL_FORMAT_VERSION,
        "classifier": model.classifier,
        "dataset_info": model.info,
        "num_classes": model.num_classes,
    }
    model_path = ensure_parent_dir(path)
    joblib.dump(artifact, model_path)
    logger.info("Saved decision tree model to %s", model_path)
    return model_path


def load_model(path: PathLike) -> DecisionTreeModel:
    """
    Load a model saved by `save_model`.

    Raises
    ------
    FileNotFoundError
        If the model file does not exist.
    InvalidInputError
        If the file does not hold a compatible model artifact.
    """
    model_path = Path(path)
    if not model_path.exists():
        raise FileNotFoundError(
            f"Model file not found at {model_path}. Train the model first."
        )

    artifact = joblib.load(model_path)
    if not isinstance(artifact, dict) or any(k not in artifact for k in _ARTIFACT_KEYS):
        raise InvalidInputError(f"{model_path} is not a decision tree model file.")
    if artifact["format_version"] != MODEL_FORMAT_VERSION:
        raise InvalidInputError(
            f"{model_path} has model format version {artifact['format_version']}, "
            f"expected {MODEL_FORMAT_VERSION}."
        )

    logger.info("Loaded decision tree model from %s", model_path)
    return DecisionTreeModel(
        classifier=artifact["classifier"],
        info=artifact["dataset_info"],
        num_classes=int(artifact["num_classes"]),
    )


def as_model(source: DecisionTreeModel | PathLike) -> DecisionTreeModel:
    """Resolve an input-model option that may be a path or a loaded model."""
    if isinstance(source, DecisionTreeModel):
        return source
    return load_model(source)
