"""ClusterOptions: validated settings for clustering a matrix."""

from __future__ import annotations

import param

from .layout.dendrogram_layout import COL_SIDES, ROW_SIDES
from .transform.cluster import VALID_METHODS
from .transform.distance import VALID_METRICS
from .transform.scaler import VALID_SCALES


class ClusterOptions(param.Parameterized):
    """Settings shared by the row and column clustering passes.

    Invalid values are rejected on assignment, e.g.
    ``ClusterOptions(method="ward")`` raises ``ValueError``.
    """

    # --- Clustering ---
    metric = param.Selector(default="correlation", objects=sorted(VALID_METRICS))
    method = param.Selector(default="average", objects=sorted(VALID_METHODS))
    cluster_rows = param.Boolean(default=True)
    cluster_cols = param.Boolean(default=True)

    # --- Row scaling before clustering ---
    scale = param.Selector(default="zscore", objects=sorted(VALID_SCALES))

    # --- Dendrogram projection ---
    dendro_padding = param.Number(default=0.95, bounds=(0, 1), inclusive_bounds=(False, True))
    row_dendro_side = param.Selector(default="left", objects=list(ROW_SIDES))
    col_dendro_side = param.Selector(default="top", objects=list(COL_SIDES))

    def to_dict(self) -> dict:
        return {
            "metric": self.metric,
            "method": self.method,
            "clusterRows": self.cluster_rows,
            "clusterCols": self.cluster_cols,
            "scale": self.scale,
            "dendroPadding": self.dendro_padding,
            "rowDendroSide": self.row_dendro_side,
            "colDendroSide": self.col_dendro_side,
        }
