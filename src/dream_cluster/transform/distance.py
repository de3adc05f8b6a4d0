"""Distance metrics and pairwise distance matrices."""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..core.validation import validate_data_matrix, validate_vectors

DistanceFn = Callable[[np.ndarray, np.ndarray], float]


def _pow2_scale(values: np.ndarray) -> float:
    """Power of two at or above the largest magnitude in values (1.0 if none).

    Dividing by it is exact and keeps squared differences from overflowing.
    """
    peak = float(np.max(np.abs(values), initial=0.0))
    if peak == 0 or not np.isfinite(peak):
        return 1.0
    return float(np.ldexp(1.0, int(np.frexp(peak)[1])))


def euclidean_distance(a, b) -> float:
    """L2 norm of the element-wise difference."""
    a, b = validate_vectors(a, b)
    scale = max(_pow2_scale(a), _pow2_scale(b))
    diff = a / scale - b / scale
    return float(np.sqrt(np.dot(diff, diff)) * scale)


def correlation_distance(a, b) -> float:
    """Pearson correlation distance, ``1 - r``.

    Returns 1.0 (maximum dissimilarity for uncorrelated vectors) when
    either vector is constant, since r is undefined there.
    """
    a, b = validate_vectors(a, b)
    if a.size == 0:
        return 1.0
    dev_a = a - a.mean()
    dev_b = b - b.mean()
    denom = np.sqrt(np.dot(dev_a, dev_a)) * np.sqrt(np.dot(dev_b, dev_b))
    if denom == 0 or not np.isfinite(denom):
        return 1.0
    r = float(np.dot(dev_a, dev_b) / denom)
    if np.isnan(r):
        return 1.0
    # Rounding can push |r| a hair past 1.
    return max(0.0, 1.0 - r)


_METRICS: dict[str, DistanceFn] = {
    "euclidean": euclidean_distance,
    "correlation": correlation_distance,
}

VALID_METRICS = frozenset(_METRICS)


def get_metric(metric: str | DistanceFn) -> DistanceFn:
    """Resolve a metric name (or pass through a callable)."""
    if callable(metric):
        return metric
    try:
        return _METRICS[metric]
    except KeyError:
        raise ValueError(
            f"Unknown distance metric '{metric}'. "
            f"Valid: {sorted(VALID_METRICS)}"
        ) from None


def distance_matrix(data, metric: str | DistanceFn = "euclidean") -> np.ndarray:
    """Compute the symmetric (n, n) distance matrix between the rows of data.

    Only the upper triangle is evaluated (one metric call per unordered
    pair); it is mirrored into the lower triangle and the diagonal is 0.
    The built-in metrics run in SciPy's compiled pdist with the same
    results as ``euclidean_distance`` and ``correlation_distance``.
    """
    values = validate_data_matrix(data)
    fn = get_metric(metric)
    n = values.shape[0]
    if n < 2:
        return np.zeros((n, n), dtype=np.float64)

    # Lazy import scipy (heavy, ~1-2s cold start)
    from scipy.spatial.distance import pdist, squareform

    if values.shape[1] == 0:
        condensed = pdist(values, metric=fn)
    elif fn is euclidean_distance:
        scale = _pow2_scale(values)
        condensed = pdist(values / scale, metric="euclidean") * scale
    elif fn is correlation_distance:
        with np.errstate(divide="ignore", invalid="ignore"):
            condensed = pdist(values, metric="correlation")
        # Constant rows have undefined r: score them as uncorrelated
        condensed = np.where(np.isnan(condensed), 1.0, np.maximum(condensed, 0.0))
    else:
        condensed = pdist(values, metric=fn)
    return squareform(condensed, checks=False)
