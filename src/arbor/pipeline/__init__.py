"""
Option handling and orchestration for decision tree runs.

- `options` defines the run configuration and the parameter table.
- `validation` checks option combinations declaratively.
- `runner` wires training, evaluation and persistence together.
- `cli` is the command-line entry point.
"""
