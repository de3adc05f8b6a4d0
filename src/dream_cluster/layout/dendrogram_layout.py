"""Dendrogram layout: convert a merge tree to drawable line segments."""

from __future__ import annotations

from dataclasses import dataclass

from ..transform.cluster import DendrogramNode, leaf_order


@dataclass(frozen=True)
class DendrogramSegment:
    """A line in abstract dendrogram space.

    ``depth`` runs from 0 at the leaves to 1 at the root; ``position``
    runs along the leaf axis in [0, 1]. A "vertical" segment joins two
    positions at one depth, a "horizontal" one joins two depths at one
    position.
    """

    kind: str
    depth1: float
    depth2: float
    pos1: float
    pos2: float


@dataclass(frozen=True)
class LayoutLine:
    """A single drawable segment in the target coordinate box.

    ``orientation`` is the physical direction of the segment after the
    side-specific axis mapping.
    """

    orientation: str
    x1: float
    y1: float
    x2: float
    y2: float

    def to_dict(self) -> dict:
        return {
            "type": self.orientation,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
        }


@dataclass(frozen=True)
class DendrogramSpec:
    """Complete dendrogram rendering specification."""

    lines: tuple[LayoutLine, ...]
    # Which side: "left", "right", "top", "bottom"
    side: str
    width: float
    height: float

    def to_dict(self) -> dict:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "side": self.side,
            "width": self.width,
            "height": self.height,
        }


ROW_SIDES = ("left", "right")
COL_SIDES = ("top", "bottom")
VALID_SIDES = ROW_SIDES + COL_SIDES
SIDE_ALIASES = {"side": "left"}

DEFAULT_PADDING = 1.0


def resolve_side(side: str) -> str:
    side = SIDE_ALIASES.get(side, side)
    if side not in VALID_SIDES:
        raise ValueError(
            f"Unknown dendrogram side '{side}'. "
            f"Valid: {sorted(VALID_SIDES + tuple(SIDE_ALIASES))}"
        )
    return side


class DendrogramLayout:
    """Lays out a DendrogramNode tree for any rendering technology.

    The tree is laid out once in (depth, position) space and then mapped
    onto physical axes. Row dendrograms ("left"/"right") put depth on x;
    column dendrograms ("top"/"bottom") put depth on y. Leaves sit on the
    edge facing the matrix.
    """

    @staticmethod
    def segments(root: DendrogramNode | None) -> list[DendrogramSegment]:
        """Abstract segments, three per internal node, children first.

        Returns an empty list when the tree has no positive merge height.
        """
        if root is None or root.is_leaf:
            return []
        max_height = root.max_height()
        if max_height <= 0:
            return []

        order = leaf_order(root)
        n = len(order)
        # (position, depth) per node id
        coords: dict[int, tuple[float, float]] = {
            int(leaf): ((i + 0.5) / n, 0.0) for i, leaf in enumerate(order)
        }
        segments: list[DendrogramSegment] = []
        for node in root.iter_postorder():
            if node.is_leaf:
                continue
            left_pos, left_depth = coords[node.left.id]
            right_pos, right_depth = coords[node.right.id]
            depth = node.height / max_height
            pos = (left_pos + right_pos) / 2
            segments.append(DendrogramSegment("vertical", depth, depth, left_pos, right_pos))
            segments.append(DendrogramSegment("horizontal", left_depth, depth, left_pos, left_pos))
            segments.append(DendrogramSegment("horizontal", right_depth, depth, right_pos, right_pos))
            coords[node.id] = (pos, depth)
        return segments

    @staticmethod
    def project(
        segment: DendrogramSegment,
        side: str = "left",
        width: float = 1.0,
        height: float = 1.0,
        padding: float = DEFAULT_PADDING,
    ) -> LayoutLine:
        """Map one abstract segment onto the physical axes of ``side``.

        ``padding`` is the fraction of the depth extent the tree may use.
        """
        side = resolve_side(side)
        d1 = segment.depth1 * padding
        d2 = segment.depth2 * padding
        p1, p2 = segment.pos1, segment.pos2

        if side in ROW_SIDES:
            if side == "left":
                d1, d2 = 1.0 - d1, 1.0 - d2
            orientation = segment.kind
            return LayoutLine(orientation, d1 * width, p1 * height, d2 * width, p2 * height)

        if side == "top":
            d1, d2 = 1.0 - d1, 1.0 - d2
        orientation = "horizontal" if segment.kind == "vertical" else "vertical"
        return LayoutLine(orientation, p1 * width, d1 * height, p2 * width, d2 * height)

    @classmethod
    def compute(
        cls,
        root: DendrogramNode | None,
        side: str = "left",
        width: float = 1.0,
        height: float = 1.0,
        padding: float = DEFAULT_PADDING,
    ) -> DendrogramSpec:
        """Compute the line list for a dendrogram drawn on ``side``.

        Parameters
        ----------
        root : DendrogramNode or None
            Tree from ClusterEngine.cluster().
        side : str
            "left"/"right" for row dendrograms, "top"/"bottom" for column
            dendrograms. "side" is accepted for "left".
        width, height : float
            Size of the target box. The defaults give normalized [0, 1]
            coordinates.
        padding : float
            Fraction of the depth axis used by the tree, in (0, 1].
        """
        side = resolve_side(side)
        if not 0 < padding <= 1:
            raise ValueError(f"padding must be in (0, 1], got {padding}.")
        lines = tuple(
            cls.project(seg, side, width, height, padding) for seg in cls.segments(root)
        )
        return DendrogramSpec(lines=lines, side=side, width=width, height=height)
