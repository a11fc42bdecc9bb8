"""
Decision tree training, evaluation, and persistence for Arbor.

- `classifier` defines the trainable-classifier interface and its
  scikit-learn implementation.
- `model` bundles a classifier with its dataset schema and saves/loads it.
- `train_model` trains a model and reports training accuracy.
- `evaluate_model` classifies test sets and reports test accuracy.
- `metrics` provides metric helpers.
"""
