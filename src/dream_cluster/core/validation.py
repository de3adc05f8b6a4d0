"""Input validation with clear error messages for bioinformaticians."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd


class InputShapeError(ValueError):
    """Raised when vectors, matrices or orders have an unusable shape."""


def _preview(items: list) -> str:
    """Format up to five offending items, noting how many were cut."""
    return f"{items[:5]}" + (f" (and {len(items) - 5} more)" if len(items) > 5 else "")


def validate_dataframe_matrix(data: Any) -> pd.DataFrame:
    """Validate that data is a numeric DataFrame suitable for clustering.

    Returns the validated DataFrame (unchanged).
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(data).__name__}. "
            "Wrap your data with pd.DataFrame(data, index=row_ids, columns=col_ids)."
        )
    if data.empty:
        raise ValueError("DataFrame is empty. Provide at least one row and one column.")
    if data.index.has_duplicates:
        dupes = data.index[data.index.duplicated()].unique().tolist()
        raise ValueError(f"Row IDs must be unique. Found duplicates: {_preview(dupes)}")
    if data.columns.has_duplicates:
        dupes = data.columns[data.columns.duplicated()].unique().tolist()
        raise ValueError(f"Column IDs must be unique. Found duplicates: {_preview(dupes)}")
    numeric_df = data.select_dtypes(include=[np.number])
    if numeric_df.shape[1] != data.shape[1]:
        non_numeric = [c for c in data.columns if c not in numeric_df.columns]
        raise TypeError(f"All columns must be numeric. Non-numeric columns: {_preview(non_numeric)}")
    return data


def validate_vectors(a: Any, b: Any) -> tuple[np.ndarray, np.ndarray]:
    """Coerce two feature vectors to 1-D float64 arrays of equal length."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.ndim != 1 or b.ndim != 1:
        raise InputShapeError(
            f"Distance metrics take 1-D vectors, got shapes {a.shape} and {b.shape}."
        )
    if a.shape[0] != b.shape[0]:
        raise InputShapeError(
            f"Vectors must have equal length, got {a.shape[0]} and {b.shape[0]}."
        )
    return a, b


def validate_data_matrix(data: Any) -> np.ndarray:
    """Coerce item vectors (one per row) to a 2-D float64 array.

    A 1-D input is read as n items with a single feature each.
    """
    try:
        arr = np.asarray(data, dtype=np.float64)
    except ValueError as err:
        # numpy refuses ragged nested sequences
        raise InputShapeError(f"Item vectors must all have the same length: {err}") from err
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise InputShapeError(
            f"Expected a 2-D array of item vectors (n_items, n_features), got shape {arr.shape}."
        )
    return arr


def validate_distance_matrix(
    dist: Any, *, rtol: float = 1e-9, atol: float = 1e-12
) -> np.ndarray:
    """Check that dist is a square, symmetric, finite, non-negative matrix.

    Symmetry is checked up to rounding (relative ``rtol`` plus absolute
    ``atol``). Returns a float64 copy with the upper triangle mirrored
    into the lower one, so both triangles hold identical values. The
    diagonal is not inspected beyond symmetry; the clusterer never reads it.
    """
    arr = np.asarray(dist, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InputShapeError(f"Distance matrix must be square, got shape {arr.shape}.")
    if arr.size == 0:
        return arr
    if not np.all(np.isfinite(arr)):
        raise InputShapeError("Distance matrix contains NaN or infinite values.")
    if np.any(arr < 0):
        raise InputShapeError("Distance matrix contains negative values.")
    if not np.allclose(arr, arr.T, rtol=rtol, atol=atol):
        bad = np.argwhere(~np.isclose(arr, arr.T, rtol=rtol, atol=atol))
        pairs = [tuple(int(v) for v in p) for p in bad if p[0] < p[1]]
        raise InputShapeError(f"Distance matrix is not symmetric at {_preview(pairs)}.")
    upper = np.triu(arr)
    return upper + np.triu(arr, 1).T


def validate_order(order: Any, size: int, axis_name: str) -> np.ndarray:
    """Validate that order holds integer indices into an axis of length size.

    Parameters
    ----------
    order : sequence of int
    size : length of the axis being gathered from
    axis_name : 'row' or 'col' for error messages
    """
    arr = np.asarray(order)
    if arr.ndim != 1:
        raise InputShapeError(f"{axis_name} order must be 1-D, got shape {arr.shape}.")
    if arr.size == 0:
        return arr.astype(np.intp)
    if not np.issubdtype(arr.dtype, np.integer):
        raise InputShapeError(f"{axis_name} order must hold integer indices, got dtype {arr.dtype}.")
    out_of_range = arr[(arr < 0) | (arr >= size)].tolist()
    if out_of_range:
        raise InputShapeError(
            f"{axis_name} order has indices outside 0..{size - 1}: {_preview(out_of_range)}"
        )
    return arr.astype(np.intp)
