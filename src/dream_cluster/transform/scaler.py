"""Value scaling applied to expression matrices before clustering."""

from __future__ import annotations

import pandas as pd


def scale_zscore(df: pd.DataFrame, axis: int = 1) -> pd.DataFrame:
    """Z-score with the population standard deviation.

    axis=1 -> row-wise, axis=0 -> column-wise. Constant rows (or columns)
    center to zero and stay zero.
    """
    mean = df.mean(axis=axis)
    std = df.std(axis=axis, ddof=0).replace(0, 1)
    if axis == 1:
        return df.sub(mean, axis=0).div(std, axis=0)
    return df.sub(mean, axis=1).div(std, axis=1)


def scale_center(df: pd.DataFrame, axis: int = 1) -> pd.DataFrame:
    """Subtract the mean along the axis."""
    mean = df.mean(axis=axis)
    if axis == 1:
        return df.sub(mean, axis=0)
    return df.sub(mean, axis=1)


SCALERS = {"zscore": scale_zscore, "center": scale_center}
VALID_SCALES = frozenset(SCALERS) | {"none"}


def apply_scaling(df: pd.DataFrame, method: str, axis: int = 1) -> pd.DataFrame:
    """Dispatch to the scaling function for method ("none", "zscore", "center")."""
    if method == "none":
        return df
    if method not in SCALERS:
        raise ValueError(f"Unknown scaling '{method}'. Valid: {sorted(VALID_SCALES)}")
    return SCALERS[method](df, axis)
