"""ReorderEngine: apply row and column orders to a matrix."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..core.validation import InputShapeError, validate_order


class ReorderEngine:
    """Gather rows and columns of a matrix by independent orders.

    ``result[i][j] == original[row_order[i]][col_order[j]]``. No clustering
    logic lives here.
    """

    @staticmethod
    def reorder_matrix(values, row_order, col_order) -> np.ndarray:
        """Return a new array with rows and columns gathered by the orders.

        Parameters
        ----------
        values : 2-D array-like
        row_order : sequence of row indices
        col_order : sequence of column indices

        Returns
        -------
        ndarray of shape (len(row_order), len(col_order)).
        """
        arr = np.asarray(values)
        if arr.ndim != 2:
            raise InputShapeError(f"Expected a 2-D matrix, got shape {arr.shape}.")
        rows = validate_order(row_order, arr.shape[0], "row")
        cols = validate_order(col_order, arr.shape[1], "col")
        return arr[np.ix_(rows, cols)]

    @staticmethod
    def reorder_dataframe(df: pd.DataFrame, row_order, col_order) -> pd.DataFrame:
        """Positional reorder of a DataFrame; labels travel with their data."""
        rows = validate_order(row_order, df.shape[0], "row")
        cols = validate_order(col_order, df.shape[1], "col")
        return df.iloc[rows, cols]

    @staticmethod
    def identity(n: int) -> np.ndarray:
        """Order for an axis that is left as-is."""
        return np.arange(n, dtype=np.intp)
