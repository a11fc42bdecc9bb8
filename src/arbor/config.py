"""
Global configuration for the Arbor project.

This module centralizes paths and default hyper-parameters for decision tree
training, so you can tweak them in one place.
"""

from pathlib import Path

# Project root = folder that contains "src", "models", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Models directory
MODELS_DIR: Path = PROJECT_ROOT / "models"
DEFAULT_MODEL_FILENAME: str = "decision_tree.joblib"

# Tree hyper-parameters
DEFAULT_MINIMUM_LEAF_SIZE: int = 20
DEFAULT_MINIMUM_GAIN_SPLIT: float = 1e-7
SPLIT_CRITERION: str = "gini"

# Reproducibility
RANDOM_STATE: int = 42

# Bump when the layout of the saved model artifact changes.
MODEL_FORMAT_VERSION: int = 1
