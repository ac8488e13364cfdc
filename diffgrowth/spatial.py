"""
Spatial partitioning for radius-bounded neighbour queries.
Uses scipy's KDTree for O(log n) lookups instead of O(n^2) all-pairs distances.

The index stores array indices into the flat position array it was built
from. Every point may move each step, so the engine rebuilds it each step.
"""

from typing import Iterator, Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .profiling import profile
from .vector import Vector2D


class PointSpatialIndex:
    """KD-Tree based spatial index over curve points."""

    def __init__(self, positions: Optional[np.ndarray] = None):
        self._tree: cKDTree = None
        self._positions: np.ndarray = np.empty((0, 2))
        if positions is not None:
            self.rebuild(positions)

    @profile
    def rebuild(self, positions: np.ndarray):
        self._positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)

        if len(self._positions) == 0:
            self._tree = None
            return

        self._tree = cKDTree(self._positions)

    def query_radius(self, point, radius: float) -> Iterator[Tuple[int, float]]:
        """
        Yield (index, distance) for every stored point within `radius`.
        `point` may be a Vector2D or any (x, y) pair. Stored points at
        distance 0 are skipped: the query point itself and any coincident
        duplicates of it.
        """
        if self._tree is None or radius < 0:
            return

        if isinstance(point, Vector2D):
            point = point.to_array()
        query = np.asarray(point, dtype=np.float64)
        for idx in self._tree.query_ball_point(query, radius):
            dist = float(np.linalg.norm(self._positions[idx] - query))
            if dist == 0.0:
                continue
            yield int(idx), dist

    @profile
    def query_pairs(self, radius: float) -> np.ndarray:
        """
        All unordered index pairs (i, j), i < j, closer than or at `radius`.
        Rows are sorted so accumulation over them is reproducible.
        """
        if self._tree is None or len(self._positions) < 2 or radius <= 0:
            return np.empty((0, 2), dtype=np.intp)

        pairs = self._tree.query_pairs(radius, output_type='ndarray')
        if len(pairs) == 0:
            return np.empty((0, 2), dtype=np.intp)

        pairs = np.sort(pairs, axis=1)
        order = np.lexsort((pairs[:, 1], pairs[:, 0]))
        return pairs[order]

    def __len__(self) -> int:
        return len(self._positions)

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def tree(self) -> Optional[cKDTree]:
        return self._tree
