"""
Declarative checks on a `DecisionTreeOptions`.

All parameter rules live in `DECISION_TREE_RULES` and are evaluated once,
in order, before any data is loaded. A rule either raises
`ConfigurationError`, or returns warnings and possibly a copy of the options
with an ignored parameter cleared.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Sequence, Tuple

from arbor.errors import ConfigurationError
from arbor.pipeline.options import DecisionTreeOptions
from arbor.utils.logging_utils import get_logger

logger = get_logger(__name__)

RuleResult = Tuple[DecisionTreeOptions, List[str]]


def _cleared(options: DecisionTreeOptions, name: str) -> DecisionTreeOptions:
    value = False if isinstance(getattr(options, name), bool) else None
    return replace(options, **{name: value})


def _param_list(names: Sequence[str]) -> str:
    return ", ".join(f"'{n}'" for n in names)


@dataclass(frozen=True)
class RequireOnlyOnePassed:
    """Exactly one of `names` must be given."""

    names: Tuple[str, ...]
    fatal: bool = True

    def apply(self, options: DecisionTreeOptions) -> RuleResult:
        passed = [n for n in self.names if options.is_passed(n)]
        if len(passed) == 1:
            return options, []
        if passed:
            message = f"Can only pass one of {_param_list(self.names)}."
        else:
            message = f"Must pass one of {_param_list(self.names)}."
        if self.fatal:
            raise ConfigurationError(message)
        return options, [message]


@dataclass(frozen=True)
class RequireAtLeastOnePassed:
    """At least one of `names` should be given."""

    names: Tuple[str, ...]
    fatal: bool = False
    message: str = ""

    def apply(self, options: DecisionTreeOptions) -> RuleResult:
        if any(options.is_passed(n) for n in self.names):
            return options, []
        text = f"Should pass one of {_param_list(self.names)}"
        if self.message:
            text += f"; {self.message}"
        text += "."
        if self.fatal:
            raise ConfigurationError(text)
        return options, [text]


@dataclass(frozen=True)
class ReportIgnoredParam:
    """
    `name` is ignored unless every (param, expected_passed) condition holds.

    When a condition fails and `name` was given, a warning is emitted and the
    option is cleared.
    """

    conditions: Tuple[Tuple[str, bool], ...]
    name: str

    def apply(self, options: DecisionTreeOptions) -> RuleResult:
        if not options.is_passed(self.name):
            return options, []
        for param, expected in self.conditions:
            if options.is_passed(param) != expected:
                state = "not specified" if expected else "specified"
                message = f"'{self.name}' ignored because '{param}' is {state}."
                return _cleared(options, self.name), [message]
        return options, []


@dataclass(frozen=True)
class RequireParamValue:
    """The value of `name` must satisfy `predicate`."""

    name: str
    predicate: Callable[[Any], bool]
    message: str
    fatal: bool = True

    def apply(self, options: DecisionTreeOptions) -> RuleResult:
        value = getattr(options, self.name)
        if self.predicate(value):
            return options, []
        text = f"Invalid value of '{self.name}' specified ({value!r}); {self.message}."
        if self.fatal:
            raise ConfigurationError(text)
        return options, [text]


def _positive_int(x: Any) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool) and x > 0


def _open_unit_interval(x: Any) -> bool:
    if not isinstance(x, numbers.Real) or isinstance(x, bool):
        return False
    return 0.0 < x < 1.0


DECISION_TREE_RULES = (
    RequireOnlyOnePassed(("training", "input_model")),
    ReportIgnoredParam((("test", True),), "test_labels"),
    ReportIgnoredParam((("training", True),), "print_training_error"),
    ReportIgnoredParam((("test", True),), "predictions"),
    ReportIgnoredParam((("test", True),), "probabilities"),
    ReportIgnoredParam((("test_labels", True),), "confusion_matrix_plot"),
    RequireAtLeastOnePassed(
        ("output_model", "probabilities", "predictions"),
        message="no output will be saved",
    ),
    RequireParamValue(
        "minimum_leaf_size", _positive_int, "leaf size must be positive"
    ),
    RequireParamValue(
        "minimum_gain_split",
        _open_unit_interval,
        "gain split must be a fraction in range (0, 1)",
    ),
)


def validate_options(
    options: DecisionTreeOptions,
    rules: Sequence[Any] = DECISION_TREE_RULES,
) -> RuleResult:
    """
    Apply `rules` in order.

    Returns
    -------
    (DecisionTreeOptions, list[str])
        Options with ignored parameters cleared, and the warnings emitted.

    Raises
    ------
    ConfigurationError
        On the first fatal rule violation.
    """
    warnings: List[str] = []
    for rule in rules:
        options, rule_warnings = rule.apply(options)
        for message in rule_warnings:
            logger.warning(message)
        warnings.extend(rule_warnings)
    return options, warnings
