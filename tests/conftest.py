"""Shared test fixtures for dream-cluster."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def small_matrix_df():
    """4x3 matrix DataFrame for basic tests."""
    data = np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [7.0, 8.0, 9.0],
        [10.0, 11.0, 12.0],
    ])
    return pd.DataFrame(
        data,
        index=["gene_A", "gene_B", "gene_C", "gene_D"],
        columns=["sample_1", "sample_2", "sample_3"],
    )


@pytest.fixture
def two_group_df():
    """6x4 matrix with two well separated row groups, interleaved.

    Rows up_1..up_3 rise across samples, down_1..down_3 fall, so they
    separate under both Euclidean and correlation distance.
    """
    data = np.array([
        [1.0, 2.0, 3.0, 4.0],     # up_1
        [4.0, 3.0, 2.0, 1.0],     # down_1
        [1.1, 2.2, 2.9, 4.2],     # up_2
        [4.1, 2.9, 2.1, 0.8],     # down_2
        [0.9, 1.8, 3.1, 3.9],     # up_3
        [3.9, 3.2, 1.9, 1.1],     # down_3
    ])
    return pd.DataFrame(
        data,
        index=["up_1", "down_1", "up_2", "down_2", "up_3", "down_3"],
        columns=["s1", "s2", "s3", "s4"],
    )


@pytest.fixture
def four_points():
    """Four 1-D points: two tight pairs far apart."""
    return np.array([[0.0], [1.0], [5.0], [6.0]])


@pytest.fixture
def nan_matrix_df():
    """Matrix with NaN values."""
    data = np.array([
        [1.0, np.nan, 3.0],
        [np.nan, 5.0, 6.0],
    ])
    return pd.DataFrame(
        data,
        index=["row_1", "row_2"],
        columns=["col_1", "col_2", "col_3"],
    )


@pytest.fixture
def large_matrix_df():
    """60x20 matrix for permutation and scipy cross-check tests."""
    rng = np.random.default_rng(42)
    data = rng.standard_normal((60, 20))
    rows = [f"gene_{i:03d}" for i in range(60)]
    cols = [f"sample_{j:03d}" for j in range(20)]
    return pd.DataFrame(data, index=rows, columns=cols)
