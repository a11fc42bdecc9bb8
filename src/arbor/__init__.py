"""
Arbor: train, evaluate and persist decision tree classifiers.

- `data` loads datasets, labels and weights and resolves labels.
- `models` wraps the decision tree classifier, its persistence and metrics.
- `pipeline` validates options and orchestrates a full run (and the CLI).
"""
