"""
Starting-point generators.

Any ordered sequence of at least two points works as a starting curve;
these helpers produce the usual seeds.
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError
from .vector import Vector2D


def _require_count(amount_of_points: int):
    if amount_of_points < 1:
        raise ConfigurationError('amount_of_points', f"must be >= 1, got {amount_of_points}")


def generate_points_on_circle(origin_x: float, origin_y: float, radius: float,
                              amount_of_points: int) -> List[Vector2D]:
    """Exactly `amount_of_points` points, evenly spaced counter-clockwise from angle 0."""
    _require_count(amount_of_points)
    step = 2.0 * math.pi / amount_of_points
    return [
        Vector2D(origin_x + radius * math.cos(k * step), origin_y + radius * math.sin(k * step))
        for k in range(amount_of_points)
    ]


def generate_points_on_line(start: Tuple[float, float], end: Tuple[float, float],
                            amount_of_points: int) -> List[Vector2D]:
    """Evenly spaced points from start to end inclusive, for open curves."""
    _require_count(amount_of_points)
    a = Vector2D(*start)
    b = Vector2D(*end)
    if amount_of_points == 1:
        return [a]
    return [a + (b - a) * (k / (amount_of_points - 1)) for k in range(amount_of_points)]


def generate_points_on_polygon(vertices: Sequence[Tuple[float, float]],
                               spacing: float) -> List[Vector2D]:
    """
    Outline of a closed polygon, resampled so no two consecutive points are
    further apart than `spacing`. The polygon vertices are kept.
    """
    if not spacing > 0:
        raise ConfigurationError('spacing', f"must be > 0, got {spacing}")
    corners = [Vector2D(*v) for v in vertices]
    points: List[Vector2D] = []
    for i, a in enumerate(corners):
        b = corners[(i + 1) % len(corners)]
        pieces = max(1, math.ceil(a.distance_to(b) / spacing))
        for k in range(pieces):
            points.append(a + (b - a) * (k / pieces))
    return points


def generate_random_blob(origin_x: float, origin_y: float, radius: float, amount_of_points: int,
                         jitter: float = 0.2, seed: Optional[int] = None) -> List[Vector2D]:
    """A circle whose radius is perturbed by up to +-jitter * radius per point."""
    _require_count(amount_of_points)
    rng = np.random.default_rng(seed)
    noise = rng.uniform(-jitter, jitter, size=amount_of_points)
    step = 2.0 * math.pi / amount_of_points
    return [
        Vector2D(origin_x + radius * (1.0 + n) * math.cos(k * step),
                 origin_y + radius * (1.0 + n) * math.sin(k * step))
        for k, n in enumerate(noise)
    ]
