import numpy as np
import pytest

from arbor.config import DEFAULT_MINIMUM_GAIN_SPLIT, DEFAULT_MINIMUM_LEAF_SIZE
from arbor.errors import ConfigurationError
from arbor.pipeline.options import PARAMETERS, DecisionTreeOptions
from arbor.pipeline.validation import (
    RequireParamValue,
    validate_options,
)


def test_defaults_match_config():
    options = DecisionTreeOptions()
    assert options.minimum_leaf_size == DEFAULT_MINIMUM_LEAF_SIZE == 20
    assert options.minimum_gain_split == DEFAULT_MINIMUM_GAIN_SPLIT == 1e-7

    defaults = {spec.name: spec.default for spec in PARAMETERS}
    assert defaults["minimum_leaf_size"] == 20
    assert defaults["print_training_error"] is False


def test_valid_training_run_has_no_warnings():
    options = DecisionTreeOptions(training="train.csv", output_model="tree.joblib")
    cleaned, warnings = validate_options(options)

    assert warnings == []
    assert cleaned == options


def test_training_and_input_model_are_exclusive():
    options = DecisionTreeOptions(
        training="train.csv", input_model="tree.joblib", output_model="x"
    )
    with pytest.raises(ConfigurationError):
        validate_options(options)


def test_training_or_input_model_is_required():
    with pytest.raises(ConfigurationError):
        validate_options(DecisionTreeOptions(output_model="x"))


@pytest.mark.parametrize("leaf_size", [0, -3, 2.5, True])
def test_minimum_leaf_size_must_be_positive_int(leaf_size):
    options = DecisionTreeOptions(
        training="t.csv", output_model="x", minimum_leaf_size=leaf_size
    )
    with pytest.raises(ConfigurationError):
        validate_options(options)


def test_numpy_leaf_size_is_accepted():
    options = DecisionTreeOptions(
        training="t.csv", output_model="x", minimum_leaf_size=np.int64(5)
    )
    validate_options(options)


@pytest.mark.parametrize("gain", [0.0, 1.0, -0.1, 1.5])
def test_minimum_gain_split_must_be_open_fraction(gain):
    options = DecisionTreeOptions(
        training="t.csv", output_model="x", minimum_gain_split=gain
    )
    with pytest.raises(ConfigurationError):
        validate_options(options)


def test_test_labels_without_test_are_ignored():
    options = DecisionTreeOptions(
        training="t.csv", output_model="x", test_labels="labels.csv"
    )
    cleaned, warnings = validate_options(options)

    assert cleaned.test_labels is None
    assert any("'test_labels' ignored" in w for w in warnings)


def test_training_error_without_training_is_ignored():
    options = DecisionTreeOptions(
        input_model="tree.joblib",
        test="test.csv",
        predictions="p.csv",
        print_training_error=True,
    )
    cleaned, warnings = validate_options(options)

    assert cleaned.print_training_error is False
    assert any("'print_training_error' ignored" in w for w in warnings)


def test_missing_outputs_warn_but_do_not_fail():
    cleaned, warnings = validate_options(DecisionTreeOptions(training="t.csv"))

    assert cleaned.training == "t.csv"
    assert any("no output will be saved" in w for w in warnings)


def test_prediction_outputs_without_test_are_ignored():
    options = DecisionTreeOptions(
        training="t.csv", predictions="p.csv", probabilities="P.csv"
    )
    cleaned, warnings = validate_options(options)

    assert cleaned.predictions is None
    assert cleaned.probabilities is None
    assert len(warnings) == 3
    assert "no output will be saved" in warnings[-1]


def test_confusion_plot_needs_test_labels():
    options = DecisionTreeOptions(
        training="t.csv",
        test="test.csv",
        predictions="p.csv",
        confusion_matrix_plot="cm.png",
    )
    cleaned, warnings = validate_options(options)

    assert cleaned.confusion_matrix_plot is None
    assert len(warnings) == 1


def test_custom_rule_list():
    rules = (
        RequireParamValue(
            "minimum_leaf_size", lambda x: x >= 50, "need a big leaf", fatal=False
        ),
    )
    _, warnings = validate_options(DecisionTreeOptions(), rules=rules)
    assert warnings == ["Invalid value of 'minimum_leaf_size' specified (20); need a big leaf."]


def test_ignored_predictions_leave_no_output():
    options = DecisionTreeOptions(training="t.csv", predictions="p.csv")
    cleaned, warnings = validate_options(options)

    assert cleaned.predictions is None
    assert any("'predictions' ignored" in w for w in warnings)
    assert any("no output will be saved" in w for w in warnings)
