"""
Command-line entry point for training and using decision trees.

Usage:

    arbor-decision-tree --training data.csv --labels labels.csv \
        --output_model tree.joblib --minimum_leaf_size 20 \
        --minimum_gain_split 1e-3 --print_training_error

    arbor-decision-tree --input_model tree.joblib --test test_set.csv \
        --test_labels test_labels.csv --predictions predictions.csv

If --labels is not given, the last column of the training file is used as
the labels. Labels must lie in [0, num_classes - 1].
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from arbor.errors import ArborError
from arbor.pipeline.options import PARAMETERS, DecisionTreeOptions, ParamSpec
from arbor.pipeline.runner import run_decision_tree
from arbor.utils.logging_utils import get_logger, set_verbosity
from arbor.utils.paths import get_model_path

logger = get_logger(__name__)


def _add_parameter(parser: argparse.ArgumentParser, spec: ParamSpec) -> None:
    flags = [f"--{spec.name}"]
    if "_" in spec.name:
        flags.append(f"--{spec.name.replace('_', '-')}")
    if spec.short:
        flags.append(f"-{spec.short}")

    if spec.is_flag:
        parser.add_argument(
            *flags, dest=spec.name, action="store_true", help=spec.help
        )
    elif spec.type is not None:
        parser.add_argument(
            *flags,
            dest=spec.name,
            type=spec.type,
            default=spec.default,
            help=f"{spec.help} (default: {spec.default:g})",
        )
    elif spec.name == "output_model":
        parser.add_argument(
            *flags,
            dest=spec.name,
            nargs="?",
            const=str(get_model_path()),
            default=None,
            help=f"{spec.help} Without a value, writes to {get_model_path()}.",
        )
    else:
        parser.add_argument(*flags, dest=spec.name, default=None, help=spec.help)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arbor-decision-tree",
        description=(
            "Train and evaluate using a decision tree. Given a dataset "
            "containing numeric or categorical features, and associated "
            "labels for each point in the dataset, this program can train a "
            "decision tree on that data, classify a test set with it, and "
            "save the model for later use."
        ),
    )
    for spec in PARAMETERS:
        _add_parameter(parser, spec)
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbosity(args.verbose)

    options = DecisionTreeOptions(
        **{spec.name: getattr(args, spec.name) for spec in PARAMETERS}
    )

    try:
        run_decision_tree(options)
    except (ArborError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
