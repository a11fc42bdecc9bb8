"""
Data loading utilities for Arbor.

This module loads feature matrices, labels and weights from delimited text
files and writes predictions and class probabilities back out.

Files store one point per line; in memory, matrices are dimension-major
(rows are dimensions, columns are points), so loaders transpose.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from arbor.data.schema import NUMERIC, Dataset, DatasetInfo
from arbor.errors import InvalidInputError
from arbor.utils.logging_utils import get_logger
from arbor.utils.paths import PathLike, ensure_parent_dir

logger = get_logger(__name__)

DatasetSource = Union[PathLike, Dataset, np.ndarray]
VectorSource = Union[PathLike, np.ndarray, list]


def _separator_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return ","
    if suffix == ".tsv":
        return "\t"
    return r"\s+"


def _read_table(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = pd.read_csv(
        path,
        sep=_separator_for(path),
        header=None,
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
        engine="python",
    )
    if df.empty:
        raise InvalidInputError(f"Data file is empty: {path}")
    return df.apply(lambda col: col.str.strip())


def load_dataset(
    path: PathLike,
    info: Optional[DatasetInfo] = None,
) -> Dataset:
    """
    Load a dataset and its categorical schema from a delimited text file.

    Parameters
    ----------
    path : pathlib.Path | str
        File with one point per line.
    info : DatasetInfo | None
        Schema to load the file with. If given, categorical dimensions are
        mapped with (a copy of) its token mappings; if None, a schema is
        inferred: any column with a non-numeric token is categorical.

    Returns
    -------
    Dataset
        Matrix of shape (n_dimensions, n_points) and its schema.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InvalidInputError
        If the file is empty or does not match the given schema.
    """
    csv_path = Path(path)
    df = _read_table(csv_path)
    n_points, n_dims = df.shape

    infer_types = info is None
    if info is None:
        info = DatasetInfo.numeric(n_dims)
    else:
        if info.dimensionality != n_dims:
            raise InvalidInputError(
                f"{csv_path} has {n_dims} dimensions but the schema "
                f"describes {info.dimensionality}."
            )
        info = info.copy()

    matrix = np.empty((n_dims, n_points), dtype=float)
    for dim in range(n_dims):
        column = df.iloc[:, dim]
        numeric = pd.to_numeric(column, errors="coerce")
        if info.types[dim] == NUMERIC and not numeric.isna().any():
            matrix[dim] = numeric.to_numpy(dtype=float)
            continue

        if info.types[dim] == NUMERIC and not infer_types:
            bad = column[numeric.isna()].iloc[0]
            raise InvalidInputError(
                f"{csv_path}: dimension {dim} is numeric in the schema but "
                f"contains the non-numeric token {bad!r}."
            )

        was_categorical = info.is_categorical(dim)
        if not was_categorical:
            logger.debug("Dimension %d of %s is categorical.", dim, csv_path)
        before = info.num_mappings(dim)
        matrix[dim] = [info.map_string(token, dim) for token in column]
        if was_categorical and info.num_mappings(dim) > before:
            logger.warning(
                "Dimension %d of %s contains %d categories not present in "
                "the schema.",
                dim,
                csv_path,
                info.num_mappings(dim) - before,
            )

    logger.info(
        "Loaded %s (%d points, %d dimensions, %d categorical).",
        csv_path,
        n_points,
        n_dims,
        len(info.categorical_dimensions()),
    )
    return Dataset(matrix=matrix, info=info)


def _load_vector(path: PathLike) -> np.ndarray:
    csv_path = Path(path)
    df = _read_table(csv_path)
    values = df.apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
    if np.isnan(values).any():
        raise InvalidInputError(f"Non-numeric values found in {csv_path}.")
    # Accept either one value per line or a single row.
    return values.ravel()


def load_labels(path: PathLike) -> np.ndarray:
    """Load a label vector (one label per line, or one row)."""
    values = _load_vector(path)
    logger.info("Loaded %d labels from %s", values.shape[0], path)
    return values


def load_weights(path: PathLike) -> np.ndarray:
    """Load a per-point weight vector (one weight per line, or one row)."""
    values = _load_vector(path)
    logger.info("Loaded %d weights from %s", values.shape[0], path)
    return values


def as_dataset(
    source: DatasetSource,
    info: Optional[DatasetInfo] = None,
) -> Dataset:
    """
    Resolve a dataset option that may be a path, a Dataset or a raw matrix.

    In-memory datasets keep their matrix; when `info` is given it replaces
    their schema.
    """
    if isinstance(source, Dataset):
        if info is None:
            return source
        return Dataset(matrix=source.matrix, info=info.copy())
    if isinstance(source, np.ndarray):
        dataset = Dataset.from_matrix(source)
        if info is None:
            return dataset
        return Dataset(matrix=dataset.matrix, info=info.copy())
    return load_dataset(source, info=info)


def as_vector(
    source: Optional[VectorSource],
    kind: str = "labels",
) -> Optional[np.ndarray]:
    """Resolve a labels / weights option that may be a path or an array."""
    if source is None:
        return None
    if isinstance(source, (np.ndarray, list, tuple)):
        return np.asarray(source, dtype=float).ravel()
    if kind == "weights":
        return load_weights(source)
    return load_labels(source)


def save_predictions(predictions: np.ndarray, path: PathLike) -> Path:
    """Write one predicted class index per line."""
    out_path = ensure_parent_dir(path)
    pd.DataFrame(np.asarray(predictions, dtype=int).reshape(-1, 1)).to_csv(
        out_path, header=False, index=False
    )
    logger.info("Saved %d predictions to %s", len(predictions), out_path)
    return out_path


def save_probabilities(probabilities: np.ndarray, path: PathLike) -> Path:
    """
    Write class probabilities, one line per point.

    `probabilities` has shape (num_classes, n_points), as returned by the
    classifier; it is transposed on write.
    """
    out_path = ensure_parent_dir(path)
    pd.DataFrame(np.asarray(probabilities, dtype=float).T).to_csv(
        out_path, header=False, index=False
    )
    logger.info("Saved class probabilities to %s", out_path)
    return out_path
