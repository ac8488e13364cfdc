"""
Growth curves and the adjacency rule that connects their points.

A curve is plain data: an ordered (N, 2) position array plus a closed flag.
Point i is connected to i-1 and i+1, and for closed curves the last point
wraps to the first. Nothing else in the package encodes adjacency.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError
from .vector import Vector2D, magnitudes

MIN_CURVE_POINTS = 2


def as_point_array(points, name: str = 'starting_points') -> np.ndarray:
    """Copy Vector2D objects, (x, y) pairs or an (N, 2) array into float64."""
    if isinstance(points, np.ndarray):
        arr = np.array(points, dtype=np.float64)
    else:
        rows = [p.to_tuple() if isinstance(p, Vector2D) else tuple(p) for p in points]
        arr = np.array(rows, dtype=np.float64)
        if len(rows) == 0:
            arr = arr.reshape(0, 2)

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ConfigurationError(name, f"expected a sequence of 2D points, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ConfigurationError(name, "coordinates must be finite")
    return arr


def curve_neighbors(n: int, closed: bool) -> Tuple[np.ndarray, np.ndarray]:
    """
    Local (prev, next) index arrays for a curve of n points.
    Missing neighbours of open-curve endpoints are -1.
    """
    idx = np.arange(n)
    prev_idx = idx - 1
    next_idx = idx + 1
    if closed:
        prev_idx[0] = n - 1
        next_idx[-1] = 0
    else:
        prev_idx[0] = -1
        next_idx[-1] = -1
    return prev_idx, next_idx


def edge_indices(n: int, closed: bool) -> Tuple[np.ndarray, np.ndarray]:
    starts = np.arange(n - 1)
    if closed and n > 2:
        starts = np.arange(n)
    return starts, (starts + 1) % n


class GrowthCurve:
    __slots__ = ('points', 'closed')

    def __init__(self, points, closed: bool = True):
        self.points = as_point_array(points)
        self.closed = bool(closed)
        if len(self.points) < MIN_CURVE_POINTS:
            raise ConfigurationError(
                'starting_points',
                f"a curve needs at least {MIN_CURVE_POINTS} points, got {len(self.points)}"
            )

    def __len__(self) -> int:
        return len(self.points)

    def neighbors(self) -> Tuple[np.ndarray, np.ndarray]:
        return curve_neighbors(len(self.points), self.closed)

    def edges(self) -> Tuple[np.ndarray, np.ndarray]:
        return edge_indices(len(self.points), self.closed)

    def edge_lengths(self) -> np.ndarray:
        starts, ends = self.edges()
        return magnitudes(self.points[ends] - self.points[starts])

    def segments(self) -> List[tuple]:
        """Edges as ((x1, y1), (x2, y2)) tuples for drawing."""
        starts, ends = self.edges()
        return [
            (tuple(self.points[s]), tuple(self.points[e]))
            for s, e in zip(starts, ends)
        ]

    def copy(self) -> 'GrowthCurve':
        return GrowthCurve(self.points, self.closed)

    def __repr__(self) -> str:
        kind = "closed" if self.closed else "open"
        return f"GrowthCurve({len(self.points)} points, {kind})"


class CurveTopology:
    """
    Several curves flattened into one position array with global neighbour
    indices, so all curves share one spatial index and one force pass.
    """
    __slots__ = ('positions', 'prev_idx', 'next_idx', 'offsets', 'closed')

    def __init__(self, positions: np.ndarray, prev_idx: np.ndarray, next_idx: np.ndarray,
                 offsets: np.ndarray, closed: List[bool]):
        self.positions = positions
        self.prev_idx = prev_idx
        self.next_idx = next_idx
        self.offsets = offsets
        self.closed = closed

    def __len__(self) -> int:
        return len(self.positions)

    def split(self, arr: np.ndarray) -> List[np.ndarray]:
        """Cut a per-point array back into per-curve pieces."""
        return [arr[self.offsets[i]:self.offsets[i + 1]] for i in range(len(self.closed))]


def build_topology(curves: Sequence[GrowthCurve]) -> CurveTopology:
    sizes = [len(c) for c in curves]
    offsets = np.zeros(len(curves) + 1, dtype=np.intp)
    offsets[1:] = np.cumsum(sizes)

    prevs, nexts = [], []
    for curve, start in zip(curves, offsets[:-1]):
        prev_idx, next_idx = curve.neighbors()
        prevs.append(np.where(prev_idx >= 0, prev_idx + start, -1))
        nexts.append(np.where(next_idx >= 0, next_idx + start, -1))

    if curves:
        positions = np.concatenate([c.points for c in curves], axis=0)
        prev_all = np.concatenate(prevs)
        next_all = np.concatenate(nexts)
    else:
        positions = np.empty((0, 2))
        prev_all = np.empty(0, dtype=np.intp)
        next_all = np.empty(0, dtype=np.intp)

    return CurveTopology(positions, prev_all, next_all, offsets, [c.closed for c in curves])
