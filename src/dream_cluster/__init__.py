"""dream-cluster: hierarchical clustering and dendrogram layout for heatmap matrices."""

from ._version import __version__
from .api import ClusteredMatrix
from .config import ClusterOptions
from .core.validation import InputShapeError
from .layout.dendrogram_layout import DendrogramLayout, DendrogramSpec, LayoutLine
from .transform.cluster import ClusterEngine, ClusterResult, DendrogramNode, agglomerate, leaf_order
from .transform.distance import correlation_distance, distance_matrix, euclidean_distance
from .transform.pipeline import ClusterPipeline
from .transform.reorder import ReorderEngine


def cluster(data, method: str = "average", metric: str = "euclidean") -> ClusterResult:
    """Cluster the rows of data; shorthand for ``ClusterEngine.cluster``."""
    return ClusterEngine.cluster(data, method=method, metric=metric)


__all__ = [
    "__version__",
    "ClusteredMatrix",
    "ClusterOptions",
    "ClusterEngine",
    "ClusterResult",
    "ClusterPipeline",
    "DendrogramNode",
    "DendrogramLayout",
    "DendrogramSpec",
    "LayoutLine",
    "InputShapeError",
    "ReorderEngine",
    "agglomerate",
    "cluster",
    "correlation_distance",
    "distance_matrix",
    "euclidean_distance",
    "leaf_order",
]
