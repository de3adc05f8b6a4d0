"""MatrixData: validated, immutable matrix container."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..transform.reorder import ReorderEngine
from .validation import validate_dataframe_matrix

VALID_AXES = ("row", "col")


class MatrixData:
    """Immutable container for a validated numeric matrix.

    Stores the matrix as a contiguous float64 numpy array (row-major)
    alongside the original row and column IDs.
    """

    __slots__ = ("_values", "_row_ids", "_col_ids")

    def __init__(self, df: pd.DataFrame) -> None:
        df = validate_dataframe_matrix(df)
        self._values: np.ndarray = np.ascontiguousarray(df.values, dtype=np.float64)
        self._row_ids: np.ndarray = np.array(df.index, dtype=object)
        self._col_ids: np.ndarray = np.array(df.columns, dtype=object)

    @property
    def values(self) -> np.ndarray:
        """Float64 matrix (n_rows, n_cols), read-only view."""
        v = self._values.view()
        v.flags.writeable = False
        return v

    @property
    def row_ids(self) -> np.ndarray:
        return self._row_ids

    @property
    def col_ids(self) -> np.ndarray:
        return self._col_ids

    @property
    def shape(self) -> tuple[int, int]:
        return self._values.shape

    @property
    def n_rows(self) -> int:
        return self._values.shape[0]

    @property
    def n_cols(self) -> int:
        return self._values.shape[1]

    def items(self, axis: str) -> tuple[np.ndarray, np.ndarray]:
        """Feature vectors and IDs of the items clustered along axis.

        Rows are items for axis="row"; for axis="col" the columns are
        items, i.e. the rows of the transposed matrix.
        """
        if axis == "row":
            return self.values, self._row_ids
        if axis == "col":
            return self.values.T, self._col_ids
        raise ValueError(f"axis must be one of {VALID_AXES}, got '{axis}'.")

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._values.copy(), index=self._row_ids, columns=self._col_ids)

    @classmethod
    def from_array(cls, values, row_ids=None, col_ids=None) -> MatrixData:
        """Build from a bare 2-D array; IDs default to positional indices."""
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {values.shape}.")
        return cls(pd.DataFrame(values, index=row_ids, columns=col_ids))

    @classmethod
    def from_submatrix(
        cls,
        values: np.ndarray,
        row_ids: np.ndarray,
        col_ids: np.ndarray,
    ) -> MatrixData:
        """Create a MatrixData from pre-validated arrays (bypasses DataFrame validation)."""
        obj = object.__new__(cls)
        obj._values = np.ascontiguousarray(values, dtype=np.float64)
        obj._row_ids = np.asarray(row_ids, dtype=object)
        obj._col_ids = np.asarray(col_ids, dtype=object)
        return obj

    def take(self, row_order: np.ndarray, col_order: np.ndarray) -> MatrixData:
        """Positional gather of rows and columns. Returns a new MatrixData."""
        sub_values = ReorderEngine.reorder_matrix(self._values, row_order, col_order)
        return MatrixData.from_submatrix(
            sub_values, self._row_ids[np.asarray(row_order, dtype=np.intp)],
            self._col_ids[np.asarray(col_order, dtype=np.intp)],
        )
