"""
Options for a decision tree run.

`DecisionTreeOptions` carries every recognized option for one invocation.
`PARAMETERS` describes the same options as data (flags, type, default, help)
and is what the command-line parser is generated from.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Optional, Tuple

from arbor.config import DEFAULT_MINIMUM_GAIN_SPLIT, DEFAULT_MINIMUM_LEAF_SIZE


@dataclass
class DecisionTreeOptions:
    """
    Configuration for a single train / classify run.

    Data options (training, labels, test, weights, test_labels, input_model)
    accept a file path or an already loaded object. Output options
    (output_model, predictions, probabilities, confusion_matrix_plot) are
    paths; None means "do not write".
    """

    training: Any = None
    labels: Any = None
    test: Any = None
    weights: Any = None
    test_labels: Any = None
    input_model: Any = None

    minimum_leaf_size: int = DEFAULT_MINIMUM_LEAF_SIZE
    minimum_gain_split: float = DEFAULT_MINIMUM_GAIN_SPLIT
    print_training_error: bool = False

    output_model: Any = None
    predictions: Any = None
    probabilities: Any = None
    confusion_matrix_plot: Any = None

    def is_passed(self, name: str) -> bool:
        """Whether option `name` was given (flags count only when set)."""
        value = getattr(self, name)
        if isinstance(value, bool):
            return value
        return value is not None


@dataclass(frozen=True)
class ParamSpec:
    """Description of one option: command-line flags, type, default, help."""

    name: str
    help: str
    short: Optional[str] = None
    type: Optional[Callable[[str], Any]] = None
    is_flag: bool = False

    @property
    def default(self) -> Any:
        for f in fields(DecisionTreeOptions):
            if f.name == self.name:
                return f.default
        raise KeyError(self.name)


PARAMETERS: Tuple[ParamSpec, ...] = (
    # Datasets.
    ParamSpec("training", "Training dataset (may be categorical).", "t"),
    ParamSpec("labels", "Training labels.", "l"),
    ParamSpec("test", "Testing dataset (may be categorical).", "T"),
    ParamSpec("weights", "The weight of labels.", "w"),
    ParamSpec(
        "test_labels",
        "Test point labels, if accuracy calculation is desired.",
        "L",
    ),
    # Training parameters.
    ParamSpec(
        "minimum_leaf_size", "Minimum number of points in a leaf.", "n", int
    ),
    ParamSpec(
        "minimum_gain_split", "Minimum gain for node splitting.", "g", float
    ),
    ParamSpec(
        "print_training_error", "Print the training error.", "e", is_flag=True
    ),
    # Models.
    ParamSpec(
        "input_model",
        "Pre-trained decision tree, to be used with test points.",
        "m",
    ),
    ParamSpec("output_model", "Output for trained decision tree.", "M"),
    # Outputs.
    ParamSpec(
        "probabilities", "Class probabilities for each test point.", "P"
    ),
    ParamSpec("predictions", "Class predictions for each test point.", "p"),
    ParamSpec(
        "confusion_matrix_plot",
        "Save a confusion matrix plot of the test predictions (PNG).",
    ),
)
