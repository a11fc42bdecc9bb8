"""
Schema types for datasets: per-dimension categorical metadata and the
dimension-major feature matrix it describes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from arbor.errors import InvalidInputError
from arbor.utils.logging_utils import get_logger

logger = get_logger(__name__)

NUMERIC = "numeric"
CATEGORICAL = "categorical"


@dataclass
class DatasetInfo:
    """
    Categorical metadata for a dataset.

    Attributes
    ----------
    types : list[str]
        One entry per dimension, either "numeric" or "categorical".
    mappings : list[dict[str, int]]
        Token -> integer mapping per dimension. Always empty for numeric
        dimensions; for categorical dimensions the ids are dense and
        zero-based in order of first appearance.
    """

    types: List[str] = field(default_factory=list)
    mappings: List[Dict[str, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.mappings:
            self.mappings = [{} for _ in self.types]
        if len(self.mappings) != len(self.types):
            raise InvalidInputError(
                "DatasetInfo needs one mapping per dimension "
                f"({len(self.mappings)} mappings for {len(self.types)} types)."
            )
        unknown = set(self.types) - {NUMERIC, CATEGORICAL}
        if unknown:
            raise InvalidInputError(f"Unknown dimension types: {sorted(unknown)}")

    @classmethod
    def numeric(cls, dimensionality: int) -> "DatasetInfo":
        """Schema with `dimensionality` numeric dimensions."""
        return cls(types=[NUMERIC] * dimensionality)

    @property
    def dimensionality(self) -> int:
        return len(self.types)

    def is_categorical(self, dimension: int) -> bool:
        return self.types[dimension] == CATEGORICAL

    def categorical_dimensions(self) -> List[int]:
        return [d for d, t in enumerate(self.types) if t == CATEGORICAL]

    def num_mappings(self, dimension: int) -> int:
        """Number of categories in a dimension (0 for numeric dimensions)."""
        return len(self.mappings[dimension])

    def map_string(self, token: str, dimension: int) -> int:
        """
        Return the integer id of `token` in a categorical dimension, adding a
        new mapping if the token has not been seen before.
        """
        if self.types[dimension] != CATEGORICAL:
            self.types[dimension] = CATEGORICAL
        mapping = self.mappings[dimension]
        if token not in mapping:
            mapping[token] = len(mapping)
            logger.debug(
                "Mapped token %r to %d in dimension %d.",
                token,
                mapping[token],
                dimension,
            )
        return mapping[token]

    def without_dimension(self, dimension: int) -> "DatasetInfo":
        """Return a copy of this schema with one dimension removed."""
        dimension = range(self.dimensionality)[dimension]
        return DatasetInfo(
            types=[t for d, t in enumerate(self.types) if d != dimension],
            mappings=[
                dict(m) for d, m in enumerate(self.mappings) if d != dimension
            ],
        )

    def copy(self) -> "DatasetInfo":
        return DatasetInfo(
            types=list(self.types),
            mappings=[dict(m) for m in self.mappings],
        )


@dataclass
class Dataset:
    """
    A feature matrix plus its schema.

    `matrix` has shape (n_dimensions, n_points): each column is one sample.
    """

    matrix: np.ndarray
    info: DatasetInfo

    def __post_init__(self) -> None:
        matrix = np.asarray(self.matrix, dtype=float)
        if matrix.ndim == 1:
            matrix = matrix.reshape(1, -1)
        if matrix.ndim != 2:
            raise InvalidInputError(
                f"Dataset matrix must be 2-D, got {matrix.ndim} dimensions."
            )
        if matrix.shape[0] != self.info.dimensionality:
            raise InvalidInputError(
                f"Dataset has {matrix.shape[0]} dimensions but its schema "
                f"describes {self.info.dimensionality}."
            )
        self.matrix = matrix

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "Dataset":
        """Wrap an all-numeric (n_dimensions, n_points) matrix."""
        arr = np.asarray(matrix, dtype=float)
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        return cls(matrix=arr, info=DatasetInfo.numeric(arr.shape[0]))

    @property
    def n_dimensions(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_points(self) -> int:
        return self.matrix.shape[1]
