"""Tests for DendrogramLayout."""

import numpy as np
import pytest

from dream_cluster.layout.dendrogram_layout import (
    DendrogramLayout,
    DendrogramSegment,
    DendrogramSpec,
    LayoutLine,
    resolve_side,
)
from dream_cluster.transform.cluster import ClusterEngine, agglomerate
from dream_cluster.transform.distance import distance_matrix


@pytest.fixture
def four_point_root(four_points):
    return agglomerate(distance_matrix(four_points), "average")


def _coords(lines):
    return np.array([[line.x1, line.y1, line.x2, line.y2] for line in lines])


class TestSegments:
    def test_three_segments_per_merge(self, four_point_root):
        assert len(DendrogramLayout.segments(four_point_root)) == 9

    def test_positions_and_depths(self, four_point_root):
        segments = DendrogramLayout.segments(four_point_root)
        verticals = [s for s in segments if s.kind == "vertical"]
        # Children before parents: the two pair merges, then the root
        first, second, root = verticals
        assert (first.pos1, first.pos2) == (0.125, 0.375)
        assert (second.pos1, second.pos2) == (0.625, 0.875)
        assert first.depth1 == pytest.approx(0.2)
        assert (root.pos1, root.pos2) == (0.25, 0.75)
        assert root.depth1 == 1.0
        assert root.depth2 == 1.0

    def test_horizontal_connectors_span_child_to_parent(self, four_point_root):
        segments = DendrogramLayout.segments(four_point_root)
        horizontals = [s for s in segments if s.kind == "horizontal"]
        assert len(horizontals) == 6
        leaf_connectors = [s for s in horizontals if s.depth1 == 0.0]
        assert sorted(s.pos1 for s in leaf_connectors) == [0.125, 0.375, 0.625, 0.875]
        root_connectors = [s for s in horizontals if s.depth2 == 1.0]
        assert sorted((s.pos1, s.depth1) for s in root_connectors) == [
            (0.25, pytest.approx(0.2)), (0.75, pytest.approx(0.2)),
        ]
        assert all(s.pos1 == s.pos2 for s in horizontals)

    def test_all_in_unit_range(self, large_matrix_df):
        root = ClusterEngine.cluster(large_matrix_df.values).root
        for s in DendrogramLayout.segments(root):
            for v in (s.depth1, s.depth2, s.pos1, s.pos2):
                assert 0.0 <= v <= 1.0

    def test_root_depth_is_one(self, large_matrix_df):
        root = ClusterEngine.cluster(large_matrix_df.values, method="complete").root
        depths = [s.depth2 for s in DendrogramLayout.segments(root)]
        assert max(depths) == 1.0
        assert depths[-1] == 1.0

    def test_no_tree(self):
        assert DendrogramLayout.segments(None) == []

    def test_single_leaf(self):
        root = agglomerate(np.zeros((1, 1)))
        assert DendrogramLayout.segments(root) == []

    def test_zero_max_height(self):
        root = agglomerate(distance_matrix(np.ones((3, 2))))
        assert root.height == 0.0
        assert DendrogramLayout.segments(root) == []


class TestProjection:
    def test_left_side(self, four_point_root):
        spec = DendrogramLayout.compute(four_point_root, side="left")
        assert isinstance(spec, DendrogramSpec)
        assert spec.side == "left"
        kinds = [line.orientation for line in spec.lines]
        assert kinds.count("vertical") == 3
        assert kinds.count("horizontal") == 6
        # Root connector on the far edge, leaves against the matrix
        root_line = spec.lines[-3]
        assert root_line.orientation == "vertical"
        assert root_line.x1 == 0.0
        assert (root_line.y1, root_line.y2) == (0.25, 0.75)
        assert max(line.x2 for line in spec.lines) <= 1.0
        assert max(line.x1 for line in spec.lines) == 1.0

    def test_side_alias(self, four_point_root):
        spec = DendrogramLayout.compute(four_point_root, side="side")
        assert spec.side == "left"
        assert spec == DendrogramLayout.compute(four_point_root, side="left")

    def test_right_side_mirrors_left(self, four_point_root):
        left = _coords(DendrogramLayout.compute(four_point_root, side="left").lines)
        right = _coords(DendrogramLayout.compute(four_point_root, side="right").lines)
        np.testing.assert_allclose(right[:, [0, 2]], 1.0 - left[:, [0, 2]])
        np.testing.assert_allclose(right[:, [1, 3]], left[:, [1, 3]])

    def test_top_swaps_axes(self, four_point_root):
        left = DendrogramLayout.compute(four_point_root, side="left")
        top = DendrogramLayout.compute(four_point_root, side="top")
        for a, b in zip(left.lines, top.lines):
            assert (a.x1, a.y1, a.x2, a.y2) == (b.y1, b.x1, b.y2, b.x2)
            assert a.orientation != b.orientation
        root_line = top.lines[-3]
        assert root_line.orientation == "horizontal"
        assert root_line.y1 == 0.0

    def test_bottom_mirrors_top(self, four_point_root):
        top = _coords(DendrogramLayout.compute(four_point_root, side="top").lines)
        bottom = _coords(DendrogramLayout.compute(four_point_root, side="bottom").lines)
        np.testing.assert_allclose(bottom[:, [1, 3]], 1.0 - top[:, [1, 3]])
        np.testing.assert_allclose(bottom[:, [0, 2]], top[:, [0, 2]])

    @pytest.mark.parametrize("side", ["left", "right", "top", "bottom"])
    def test_unit_box(self, large_matrix_df, side):
        root = ClusterEngine.cluster(large_matrix_df.values, metric="correlation").root
        coords = _coords(DendrogramLayout.compute(root, side=side).lines)
        assert coords.size > 0
        assert coords.min() >= 0.0
        assert coords.max() <= 1.0

    def test_pixel_scaling_with_padding(self, four_point_root):
        spec = DendrogramLayout.compute(
            four_point_root, side="left", width=80.0, height=400.0, padding=0.95
        )
        root_line = spec.lines[-3]
        assert root_line.x1 == pytest.approx(80.0 * 0.05)
        assert (root_line.y1, root_line.y2) == (100.0, 300.0)
        assert spec.width == 80.0
        assert spec.height == 400.0

    def test_project_single_segment(self):
        seg = DendrogramSegment("horizontal", 0.0, 0.5, 0.25, 0.25)
        line = DendrogramLayout.project(seg, side="top", width=10.0, height=20.0)
        assert line == LayoutLine("vertical", 2.5, 20.0, 2.5, 10.0)

    def test_empty_layout(self):
        spec = DendrogramLayout.compute(None, side="top")
        assert spec.lines == ()
        assert spec.side == "top"

    def test_invalid_side(self, four_point_root):
        with pytest.raises(ValueError, match="Unknown dendrogram side"):
            DendrogramLayout.compute(four_point_root, side="diagonal")

    @pytest.mark.parametrize("padding", [0.0, -0.5, 1.5])
    def test_invalid_padding(self, four_point_root, padding):
        with pytest.raises(ValueError, match="padding"):
            DendrogramLayout.compute(four_point_root, padding=padding)

    def test_resolve_side(self):
        assert resolve_side("side") == "left"
        assert resolve_side("bottom") == "bottom"


class TestSerialization:
    def test_line_to_dict(self):
        line = LayoutLine("vertical", 0.5, 0.1, 0.5, 0.9)
        assert line.to_dict() == {"type": "vertical", "x1": 0.5, "y1": 0.1, "x2": 0.5, "y2": 0.9}

    def test_spec_to_dict(self, four_point_root):
        d = DendrogramLayout.compute(four_point_root, side="top").to_dict()
        assert d["side"] == "top"
        assert len(d["lines"]) == 9
        assert set(d["lines"][0]) == {"type", "x1", "y1", "x2", "y2"}
