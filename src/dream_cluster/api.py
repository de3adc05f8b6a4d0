"""ClusteredMatrix: the main user-facing API (builder pattern)."""

from __future__ import annotations

import numpy as np
import pandas as pd

from .config import ClusterOptions
from .core.matrix import MatrixData
from .layout.dendrogram_layout import DendrogramLayout, DendrogramSpec
from .transform.cluster import VALID_METHODS
from .transform.distance import VALID_METRICS
from .transform.pipeline import ClusterPipeline, PipelineResult


class ClusteredMatrix:
    """Cluster the rows and columns of a labelled matrix.

    Usage::

        import dream_cluster as dc

        cm = dc.ClusteredMatrix(expression_df)
        cm.cluster_rows(metric="correlation", method="average")
        cm.cluster_cols(metric="euclidean", method="complete")
        ordered = cm.reordered()
        lines = cm.row_dendrogram(width=80, height=400).lines

    Settings are collected lazily; the first accessor that needs a result
    runs the pipeline, and any setter invalidates the cached result.
    """

    def __init__(self, data: pd.DataFrame, options: ClusterOptions | None = None) -> None:
        self._matrix = MatrixData(data)
        # Own copy: setters below must not leak into the caller's options
        if options is None:
            self._options = ClusterOptions()
        else:
            self._options = ClusterOptions(**{
                name: value for name, value in options.param.values().items() if name != "name"
            })
        # Per-axis metric/method overrides; fall back to the shared options
        self._row_params: dict[str, str] = {}
        self._col_params: dict[str, str] = {}
        self._result: PipelineResult | None = None

    @property
    def options(self) -> ClusterOptions:
        return self._options

    @property
    def matrix(self) -> MatrixData:
        return self._matrix

    # --- Settings ---

    def cluster_rows(
        self,
        metric: str | None = None,
        method: str | None = None,
        enabled: bool = True,
    ) -> ClusteredMatrix:
        """Enable (or disable) row clustering, optionally overriding metric/method."""
        self._row_params = self._axis_params(metric, method)
        self._options.cluster_rows = enabled
        self._result = None
        return self

    def cluster_cols(
        self,
        metric: str | None = None,
        method: str | None = None,
        enabled: bool = True,
    ) -> ClusteredMatrix:
        """Enable (or disable) column clustering, optionally overriding metric/method."""
        self._col_params = self._axis_params(metric, method)
        self._options.cluster_cols = enabled
        self._result = None
        return self

    def scale(self, method: str = "zscore") -> ClusteredMatrix:
        """Row scaling applied before clustering: "zscore", "center" or "none"."""
        self._options.scale = method
        self._result = None
        return self

    def _axis_params(self, metric: str | None, method: str | None) -> dict[str, str]:
        params = {}
        if metric is not None:
            if metric not in VALID_METRICS:
                raise ValueError(
                    f"Unknown distance metric '{metric}'. Valid: {sorted(VALID_METRICS)}"
                )
            params["metric"] = metric
        if method is not None:
            if method not in VALID_METHODS:
                raise ValueError(
                    f"Unknown linkage method '{method}'. Valid: {sorted(VALID_METHODS)}"
                )
            params["method"] = method
        return params

    # --- Results ---

    def result(self) -> PipelineResult:
        """Run (or reuse) the clustering pipeline."""
        if self._result is None:
            self._result = ClusterPipeline.run(
                self._matrix,
                self._options,
                row_params=self._row_params,
                col_params=self._col_params,
            )
        return self._result

    @property
    def row_order(self) -> np.ndarray:
        return self.result().rows.order

    @property
    def col_order(self) -> np.ndarray:
        return self.result().cols.order

    def reordered(self) -> pd.DataFrame:
        """The (scaled) matrix with rows and columns in clustered order."""
        return self.result().matrix.to_dataframe()

    def row_dendrogram(
        self,
        width: float = 1.0,
        height: float = 1.0,
        side: str | None = None,
    ) -> DendrogramSpec | None:
        """Row dendrogram lines scaled to a width x height box."""
        rows = self.result().rows
        if rows.cluster is None:
            return None
        return DendrogramLayout.compute(
            rows.cluster.root,
            side=side or self._options.row_dendro_side,
            width=width,
            height=height,
            padding=self._options.dendro_padding,
        )

    def col_dendrogram(
        self,
        width: float = 1.0,
        height: float = 1.0,
        side: str | None = None,
    ) -> DendrogramSpec | None:
        """Column dendrogram lines scaled to a width x height box."""
        cols = self.result().cols
        if cols.cluster is None:
            return None
        return DendrogramLayout.compute(
            cols.cluster.root,
            side=side or self._options.col_dendro_side,
            width=width,
            height=height,
            padding=self._options.dendro_padding,
        )

    def to_dict(self) -> dict:
        return {"options": self._options.to_dict(), **self.result().to_dict()}
