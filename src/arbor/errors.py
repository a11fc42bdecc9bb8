"""
Error types raised by Arbor.

Errors coming from scikit-learn itself are never wrapped; they propagate to
the caller unchanged.
"""


class ArborError(Exception):
    """Base class for all Arbor errors."""


class ConfigurationError(ArborError, ValueError):
    """Invalid parameter combination or out-of-range hyper-parameter."""


class InvalidInputError(ArborError, ValueError):
    """Malformed dataset, label, weight or model artifact."""


class ClassifierError(ArborError, RuntimeError):
    """The classifier adapter was used incorrectly (e.g. before training)."""
