"""
Helper functions for file and directory paths used in Arbor.
"""

from pathlib import Path
from typing import Union

from arbor.config import (
    MODELS_DIR,
    DEFAULT_MODEL_FILENAME,
)


PathLike = Union[str, Path]


def get_model_path(filename: str | None = None) -> Path:
    """
    Return the path to a model artifact file.

    Parameters
    ----------
    filename : str | None
        Specific filename, or None for the default model file.

    Returns
    -------
    Path
        Full path to the model artifact.
    """
    if filename is None:
        filename = DEFAULT_MODEL_FILENAME
    return MODELS_DIR / filename


def ensure_parent_dir(path: PathLike) -> Path:
    """Create the parent directory of `path` if needed and return it as a Path."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    return out_path
