"""ClusterPipeline: orchestrates scale → cluster → layout → reorder."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..config import ClusterOptions
from ..core.matrix import MatrixData
from ..layout.dendrogram_layout import DEFAULT_PADDING, DendrogramLayout, DendrogramSpec
from .cluster import ClusterEngine, ClusterResult
from .reorder import ReorderEngine
from .scaler import apply_scaling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisResult:
    """Output of the pipeline for one axis.

    ``cluster`` and ``layout`` are None when the axis was not clustered.
    ``layout`` is in normalized [0, 1] coordinates, with the depth axis
    scaled by the padding the axis was run with.
    """

    axis: str
    order: np.ndarray
    ids: np.ndarray
    cluster: ClusterResult | None = None
    layout: DendrogramSpec | None = None

    @property
    def clustered(self) -> bool:
        return self.cluster is not None

    @property
    def ordered_ids(self) -> np.ndarray:
        return self.ids[self.order]

    def to_dict(self) -> dict:
        return {
            "axis": self.axis,
            "order": self.order.tolist(),
            "orderedIds": self.ordered_ids.tolist(),
            "dendrogram": (
                self.cluster.root.to_dict()
                if self.cluster is not None and self.cluster.root is not None
                else None
            ),
            "layout": self.layout.to_dict() if self.layout is not None else None,
        }


@dataclass(frozen=True)
class PipelineResult:
    """Row and column results plus the reordered matrix."""

    rows: AxisResult
    cols: AxisResult
    matrix: MatrixData

    def to_dict(self) -> dict:
        return {"rows": self.rows.to_dict(), "cols": self.cols.to_dict()}


class ClusterPipeline:
    """Runs the clustering chain on both axes of a matrix.

    1. Scale rows (options.scale)
    2. Cluster rows and/or columns independently
    3. Lay out each dendrogram for its side
    4. Reorder the scaled matrix by both orders
    """

    @staticmethod
    def run_axis(
        items: np.ndarray,
        ids: np.ndarray,
        axis: str,
        *,
        cluster: bool = True,
        method: str = "average",
        metric: str = "euclidean",
        side: str | None = None,
        padding: float = DEFAULT_PADDING,
    ) -> AxisResult:
        """Cluster one axis; items holds one feature vector per row.

        Axes with fewer than two items, or with ``cluster=False``, keep
        their input order.
        """
        n = items.shape[0]
        if not cluster:
            logger.debug("Skipping %s clustering (disabled)", axis)
            return AxisResult(axis=axis, order=ReorderEngine.identity(n), ids=ids)

        result = ClusterEngine.cluster(items, ids, method=method, metric=metric)
        if side is None:
            side = "left" if axis == "row" else "top"
        layout = DendrogramLayout.compute(result.root, side=side, padding=padding)
        logger.debug("Clustered %d %ss into %d layout lines", n, axis, len(layout.lines))
        return AxisResult(axis=axis, order=result.order, ids=ids, cluster=result, layout=layout)

    @classmethod
    def run(
        cls,
        data: pd.DataFrame | MatrixData,
        options: ClusterOptions | None = None,
        *,
        row_params: dict[str, str] | None = None,
        col_params: dict[str, str] | None = None,
    ) -> PipelineResult:
        """Run the full pipeline for both axes.

        Parameters
        ----------
        data : DataFrame or MatrixData
            Rows are e.g. genes, columns samples.
        options : ClusterOptions, optional
            Defaults to ``ClusterOptions()``.
        row_params, col_params : dict, optional
            Per-axis ``metric``/``method`` overrides of the shared options.
        """
        options = options if options is not None else ClusterOptions()
        matrix = data if isinstance(data, MatrixData) else MatrixData(data)

        if options.scale != "none":
            scaled = apply_scaling(matrix.to_dataframe(), options.scale, axis=1)
            matrix = MatrixData.from_submatrix(scaled.values, matrix.row_ids, matrix.col_ids)

        shared = {"metric": options.metric, "method": options.method}
        row_items, row_ids = matrix.items("row")
        col_items, col_ids = matrix.items("col")
        rows = cls.run_axis(
            row_items, row_ids, "row",
            cluster=options.cluster_rows,
            side=options.row_dendro_side,
            padding=options.dendro_padding,
            **{**shared, **(row_params or {})},
        )
        cols = cls.run_axis(
            col_items, col_ids, "col",
            cluster=options.cluster_cols,
            side=options.col_dendro_side,
            padding=options.dendro_padding,
            **{**shared, **(col_params or {})},
        )
        return PipelineResult(rows=rows, cols=cols, matrix=matrix.take(rows.order, cols.order))
