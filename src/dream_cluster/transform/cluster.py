"""ClusterEngine: agglomerative hierarchical clustering with deterministic ordering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

import numpy as np

from ..core.validation import validate_data_matrix, validate_distance_matrix
from .distance import DistanceFn, distance_matrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DendrogramNode:
    """A node of the merge tree.

    Leaves carry the original item index as ``id`` and have no children.
    Internal nodes get ids ``>= n`` in merge order and record the linkage
    distance at which their two children were merged.
    """

    id: int
    height: float = 0.0
    left: DendrogramNode | None = None
    right: DendrogramNode | None = None
    # Original item indices in this subtree, in leaf order
    members: tuple[int, ...] = field(default=())

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    @property
    def size(self) -> int:
        return len(self.members)

    def iter_nodes(self) -> Iterator[DendrogramNode]:
        """Yield every node of the subtree, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node.right)
                stack.append(node.left)

    def iter_postorder(self) -> Iterator[DendrogramNode]:
        """Yield every node of the subtree, children (left first) before parents."""
        out = []
        stack = [self]
        while stack:
            node = stack.pop()
            out.append(node)
            if not node.is_leaf:
                stack.append(node.left)
                stack.append(node.right)
        return reversed(out)

    def iter_leaves(self) -> Iterator[DendrogramNode]:
        """Yield the leaves of the subtree, left to right."""
        return (node for node in self.iter_nodes() if node.is_leaf)

    def max_height(self) -> float:
        return max((node.height for node in self.iter_nodes()), default=0.0)

    def to_dict(self) -> dict:
        """Nested dict form of the subtree (leaves have no children keys)."""
        out = self._shallow_dict()
        if self.is_leaf:
            return out
        # Iterative post-order to stay clear of the recursion limit on chains
        built: dict[int, dict] = {}
        for node in self.iter_postorder():
            d = node._shallow_dict()
            if not node.is_leaf:
                d["left"] = built.pop(node.left.id)
                d["right"] = built.pop(node.right.id)
            built[node.id] = d
        return built[self.id]

    def _shallow_dict(self) -> dict:
        return {
            "id": self.id,
            "isLeaf": self.is_leaf,
            "height": self.height,
            "members": list(self.members),
        }

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"DendrogramNode(leaf={self.id})"
        return (
            f"DendrogramNode(id={self.id}, height={self.height:.4g}, "
            f"left={self.left.id}, right={self.right.id}, size={self.size})"
        )


def _single(d_a, d_b, n_a, n_b):
    return np.minimum(d_a, d_b)


def _complete(d_a, d_b, n_a, n_b):
    return np.maximum(d_a, d_b)


def _average(d_a, d_b, n_a, n_b):
    # UPGMA: weight each side by its member count
    return (d_a * n_a + d_b * n_b) / (n_a + n_b)


LinkageUpdate = Callable[[np.ndarray, np.ndarray, int, int], np.ndarray]

LINKAGE_UPDATES: dict[str, LinkageUpdate] = {
    "single": _single,
    "complete": _complete,
    "average": _average,
}

VALID_METHODS = frozenset(LINKAGE_UPDATES)


def _check_method(method: str) -> LinkageUpdate:
    try:
        return LINKAGE_UPDATES[method]
    except KeyError:
        raise ValueError(
            f"Unknown linkage method '{method}'. "
            f"Valid: {sorted(VALID_METHODS)}"
        ) from None


def agglomerate(dist, method: str = "average") -> DendrogramNode | None:
    """Merge the two closest active clusters until one remains.

    Parameters
    ----------
    dist : (n, n) array
        Symmetric, non-negative distance matrix between the items.
    method : str
        Linkage rule: "single", "complete" or "average".

    Returns
    -------
    The root DendrogramNode, or None when n == 0.

    Notes
    -----
    Cluster-to-cluster distances live in a (2n-1, 2n-1) table indexed by
    cluster id. After a merge, the row for the new cluster is derived from
    the rows of its two children; raw vectors are never revisited.

    Ties at the minimum distance go to the first pair in ascending
    (id_a, id_b) order with id_a < id_b, scanning id_a in the outer loop.
    """
    update = _check_method(method)
    dist = validate_distance_matrix(dist)
    n = dist.shape[0]
    if n == 0:
        return None

    nodes: dict[int, DendrogramNode] = {
        i: DendrogramNode(id=i, members=(i,)) for i in range(n)
    }
    if n == 1:
        return nodes[0]

    table = np.full((2 * n - 1, 2 * n - 1), np.inf)
    table[:n, :n] = dist
    # Kept in ascending id order: new ids are always the largest so far.
    active: list[int] = list(range(n))

    for new_id in range(n, 2 * n - 1):
        k = len(active)
        ids = np.asarray(active, dtype=np.intp)
        iu, ju = np.triu_indices(k, 1)
        # triu_indices is row-major, so argmin returns the first pair in
        # nested-loop order on ties.
        pair_dists = table[ids[iu], ids[ju]]
        best = int(np.argmin(pair_dists))
        a = int(ids[iu[best]])
        b = int(ids[ju[best]])
        height = float(pair_dists[best])

        left, right = nodes.pop(a), nodes.pop(b)
        merged = DendrogramNode(
            id=new_id,
            height=height,
            left=left,
            right=right,
            members=left.members + right.members,
        )
        nodes[new_id] = merged

        others = ids[(ids != a) & (ids != b)]
        if others.size:
            new_row = update(table[a, others], table[b, others], left.size, right.size)
            table[new_id, others] = new_row
            table[others, new_id] = new_row

        active.remove(a)
        active.remove(b)
        active.append(new_id)

    (root,) = nodes.values()
    return root


def leaf_order(root: DendrogramNode | None) -> np.ndarray:
    """Original item indices in left-then-right traversal order."""
    if root is None:
        return np.empty(0, dtype=np.intp)
    return np.fromiter((leaf.id for leaf in root.iter_leaves()), dtype=np.intp, count=root.size)


def linkage_matrix(root: DendrogramNode | None) -> np.ndarray:
    """SciPy-format linkage matrix ``[left_id, right_id, height, size]``.

    Rows are in merge order, so row i describes cluster ``n + i``.
    """
    if root is None or root.is_leaf:
        return np.empty((0, 4))
    n = root.size
    Z = np.empty((n - 1, 4))
    for node in root.iter_nodes():
        if node.is_leaf:
            continue
        Z[node.id - n] = (node.left.id, node.right.id, node.height, node.size)
    return Z


@dataclass(frozen=True)
class ClusterResult:
    """Result of clustering a set of items along one axis."""

    order: np.ndarray              # item indices in clustered order
    root: DendrogramNode | None    # None when there were no items
    ids: np.ndarray                # original IDs (in input order)
    method: str = "average"
    metric: str = "euclidean"

    @property
    def leaf_ids(self) -> np.ndarray:
        """IDs in clustered order."""
        return self.ids[self.order]

    @property
    def n_leaves(self) -> int:
        return int(self.order.shape[0])

    @property
    def n_merges(self) -> int:
        return max(self.n_leaves - 1, 0)

    @property
    def linkage_matrix(self) -> np.ndarray:
        return linkage_matrix(self.root)

    @property
    def max_height(self) -> float:
        return self.root.max_height() if self.root is not None else 0.0

    def to_dict(self) -> dict:
        return {
            "order": self.order.tolist(),
            "ids": self.ids.tolist(),
            "method": self.method,
            "metric": self.metric,
            "dendrogram": self.root.to_dict() if self.root is not None else None,
        }


class ClusterEngine:
    """Hierarchical clustering with deterministic ordering.

    Produces:
    1. A leaf ordering for reordering one axis of a matrix
    2. The merge tree, for layout and rendering
    """

    VALID_METHODS = VALID_METHODS

    @classmethod
    def cluster(
        cls,
        data,
        ids=None,
        method: str = "average",
        metric: str | DistanceFn = "euclidean",
    ) -> ClusterResult:
        """Perform hierarchical clustering on the rows of data.

        Parameters
        ----------
        data : (n, m) float64 array
            Data matrix. Rows are the items to cluster.
        ids : (n,) array, optional
            IDs corresponding to each row of data. Defaults to 0..n-1.
        method : str
            Linkage method: "single", "complete" or "average".
        metric : str or callable
            "euclidean", "correlation", or a ``f(a, b) -> float``.

        Returns
        -------
        ClusterResult
        """
        _check_method(method)
        values = validate_data_matrix(data)
        if np.isinf(values).any():
            raise ValueError(
                "Data contains infinite values. Replace or drop them before clustering."
            )
        ids = cls._resolve_ids(ids, values.shape[0])
        metric_name = metric if isinstance(metric, str) else getattr(metric, "__name__", "custom")
        logger.debug(
            "Clustering %d items (metric=%s, method=%s)", values.shape[0], metric_name, method
        )

        dist = distance_matrix(cls._handle_nan(values), metric)
        return cls._finish(dist, ids, method, metric_name)

    @classmethod
    def cluster_distances(cls, dist, ids=None, method: str = "average") -> ClusterResult:
        """Cluster from a precomputed (n, n) distance matrix."""
        dist = validate_distance_matrix(dist)
        ids = cls._resolve_ids(ids, dist.shape[0])
        return cls._finish(dist, ids, method, "precomputed")

    @staticmethod
    def _finish(dist: np.ndarray, ids: np.ndarray, method: str, metric: str) -> ClusterResult:
        root = agglomerate(dist, method)
        order = leaf_order(root)
        if root is not None:
            logger.debug("Clustered %d items, root height %.6g", root.size, root.height)
        return ClusterResult(order=order, root=root, ids=ids, method=method, metric=metric)

    @staticmethod
    def _resolve_ids(ids, n: int) -> np.ndarray:
        if ids is None:
            return np.arange(n)
        ids = np.asarray(ids, dtype=object)
        if ids.shape != (n,):
            raise ValueError(f"Expected {n} IDs, got {ids.shape[0] if ids.ndim else 0}.")
        return ids

    @staticmethod
    def _handle_nan(data: np.ndarray) -> np.ndarray:
        """Replace NaN values with row means for distance computation."""
        if not np.any(np.isnan(data)):
            return data
        clean = data.copy()
        for i in range(clean.shape[0]):
            row = clean[i]
            mask = np.isnan(row)
            if np.all(mask):
                clean[i] = 0.0
            elif np.any(mask):
                clean[i, mask] = np.nanmean(row)
        return clean
