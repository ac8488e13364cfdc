"""
Growth rule - split over-long edges at their midpoint.
"""

from typing import Optional, Tuple

import numpy as np

from .curve import edge_indices
from .profiling import profile
from .vector import magnitudes, midpoints


@profile
def subdivide(positions: np.ndarray, closed: bool, max_edge_length: float,
              velocities: Optional[np.ndarray] = None
              ) -> Tuple[np.ndarray, Optional[np.ndarray], int]:
    """
    Insert one point at the exact midpoint of every edge longer than
    max_edge_length, wrap edge included for closed curves.

    Lengths are measured on the positions as passed in, so each edge is
    split at most once per call even if its halves are still too long.
    Inserted points start at rest (zero velocity).

    Returns (positions, velocities, inserted_count).
    """
    n = len(positions)
    if n < 2:
        return positions.copy(), None if velocities is None else velocities.copy(), 0

    starts, ends = edge_indices(n, closed)
    lengths = magnitudes(positions[ends] - positions[starts])
    # zero-length edges never pass a positive threshold
    long_edges = lengths > max_edge_length

    count = int(np.count_nonzero(long_edges))
    if count == 0:
        return positions.copy(), None if velocities is None else velocities.copy(), 0

    s, e = starts[long_edges], ends[long_edges]
    new_points = midpoints(positions[s], positions[e])
    # np.insert places each value before the given original index; s + 1 == n appends
    new_positions = np.insert(positions, s + 1, new_points, axis=0)

    new_velocities = None
    if velocities is not None:
        new_velocities = np.insert(velocities, s + 1, np.zeros_like(new_points), axis=0)

    return new_positions, new_velocities, count
