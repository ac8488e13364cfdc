"""
Force model - the per-point steering force of one growth step.

Three rules act on every point, all read from the same pre-step snapshot:

- separation: push away from nearby points that are not curve neighbours
- cohesion: spring toward the midpoint of the curve neighbours
- alignment: straighten kinks by pulling toward the neighbours' chord

Each rule is turned into a Reynolds steering force: a desired velocity
minus the velocity the point already carries, capped to max_force.
Separation always wants full speed. Cohesion and alignment are springs:
their desired speed scales with the offset and saturates at max_speed once
the offset reaches max_edge_length. This differs from a full-speed seek
toward the neighbour midpoint, which outpulls separation on small
circles so they shrink instead of grow. The weighted sum is capped to
max_force again.
"""

from typing import Callable, Union

import numpy as np

from .config import GrowthConfig
from .curve import CurveTopology
from .errors import ConfigurationError
from .profiling import profile
from .spatial import PointSpatialIndex
from .vector import EPSILON, cap_magnitudes, magnitudes, safe_normalize, set_magnitudes

Falloff = Callable[[np.ndarray], np.ndarray]

FALLOFFS = {
    'linear': lambda d: 1.0 / d,
    'inverse_square': lambda d: 1.0 / (d * d),
    'constant': lambda d: np.ones_like(d),
}


def resolve_falloff(falloff: Union[str, Falloff]) -> Falloff:
    if callable(falloff):
        return falloff
    try:
        return FALLOFFS[falloff]
    except KeyError:
        raise ConfigurationError('falloff', f"unknown falloff {falloff!r}") from None


def steer(desired: np.ndarray, velocities: np.ndarray, max_speed: float, max_force: float) -> np.ndarray:
    """Rows with no desired direction get no force at all."""
    forces = np.zeros_like(desired)
    active = magnitudes(desired) >= EPSILON
    if np.any(active):
        forces[active] = set_magnitudes(desired[active], max_speed) - velocities[active]
    return cap_magnitudes(forces, max_force)


def spring(offsets: np.ndarray, velocities: np.ndarray, max_speed: float, max_force: float,
           length_scale: float) -> np.ndarray:
    """
    Steering whose desired speed grows linearly with the offset and reaches
    max_speed once the offset is length_scale long.
    """
    forces = np.zeros_like(offsets)
    mags = magnitudes(offsets)
    active = mags >= EPSILON
    if np.any(active):
        speed = max_speed * np.minimum(1.0, mags[active] / length_scale)
        forces[active] = safe_normalize(offsets[active]) * speed[:, None] - velocities[active]
    return cap_magnitudes(forces, max_force)


def non_adjacent_pairs(pairs: np.ndarray, prev_idx: np.ndarray, next_idx: np.ndarray) -> np.ndarray:
    if len(pairs) == 0:
        return pairs
    i, j = pairs[:, 0], pairs[:, 1]
    adjacent = (prev_idx[i] == j) | (next_idx[i] == j)
    return pairs[~adjacent]


def separation_directions(positions: np.ndarray, pairs: np.ndarray, falloff: Falloff) -> np.ndarray:
    """
    Average falloff-weighted push away from each point's neighbours.
    Coincident pairs contribute nothing; a point with no neighbours gets zero.
    """
    n = len(positions)
    total = np.zeros((n, 2))
    if len(pairs) == 0:
        return total

    i, j = pairs[:, 0], pairs[:, 1]
    diff = positions[i] - positions[j]
    dist = magnitudes(diff)

    ok = dist > EPSILON
    i, j, diff, dist = i[ok], j[ok], diff[ok], dist[ok]
    if len(i) == 0:
        return total

    weights = np.asarray(falloff(dist), dtype=np.float64)
    push = diff / dist[:, None] * weights[:, None]

    np.add.at(total, i, push)
    np.add.at(total, j, -push)
    counts = np.bincount(i, minlength=n) + np.bincount(j, minlength=n)

    has = counts > 0
    total[has] /= counts[has, None]
    return total


def cohesion_directions(positions: np.ndarray, prev_idx: np.ndarray, next_idx: np.ndarray) -> np.ndarray:
    """Offset from each point to the midpoint of its neighbours (or its only neighbour)."""
    has_prev = prev_idx >= 0
    has_next = next_idx >= 0
    prev_pos = positions[np.where(has_prev, prev_idx, 0)]
    next_pos = positions[np.where(has_next, next_idx, 0)]

    target = positions.copy()
    both = has_prev & has_next
    target[both] = (prev_pos[both] + next_pos[both]) / 2.0
    only_prev = has_prev & ~has_next
    target[only_prev] = prev_pos[only_prev]
    only_next = has_next & ~has_prev
    target[only_next] = next_pos[only_next]

    return target - positions


def alignment_directions(positions: np.ndarray, prev_idx: np.ndarray, next_idx: np.ndarray) -> np.ndarray:
    """
    Component of (neighbour midpoint - point) normal to the neighbours' chord.
    Moving along it turns the incoming and outgoing edges toward a common
    tangent without changing spacing along the curve.
    """
    out = np.zeros_like(positions)
    both = (prev_idx >= 0) & (next_idx >= 0)
    if not np.any(both):
        return out

    p = positions[both]
    a = positions[prev_idx[both]]
    b = positions[next_idx[both]]

    chord = b - a
    tangent = safe_normalize(chord)
    to_mid = (a + b) / 2.0 - p
    along = np.einsum('ij,ij->i', to_mid, tangent)
    normal = to_mid - along[:, None] * tangent
    normal[magnitudes(chord) < EPSILON] = 0.0

    out[both] = normal
    return out


class ForceModel:
    def __init__(self, config: GrowthConfig):
        self.max_force = config.max_force
        self.max_speed = config.max_speed
        self.desired_separation = config.desired_separation
        self.separation_weight = config.separation_weight
        self.cohesion_weight = config.cohesion_weight
        self.alignment_weight = config.alignment_weight
        self.max_edge_length = config.max_edge_length
        self.falloff = resolve_falloff(config.falloff)

    def _steer(self, desired: np.ndarray, velocities: np.ndarray) -> np.ndarray:
        return steer(desired, velocities, self.max_speed, self.max_force)

    def _spring(self, offsets: np.ndarray, velocities: np.ndarray) -> np.ndarray:
        return spring(offsets, velocities, self.max_speed, self.max_force, self.max_edge_length)

    @profile
    def separation(self, topology: CurveTopology, index: PointSpatialIndex,
                   velocities: np.ndarray) -> np.ndarray:
        pairs = index.query_pairs(self.desired_separation)
        pairs = non_adjacent_pairs(pairs, topology.prev_idx, topology.next_idx)
        desired = separation_directions(topology.positions, pairs, self.falloff)
        return self._steer(desired, velocities)

    @profile
    def cohesion(self, topology: CurveTopology, velocities: np.ndarray) -> np.ndarray:
        desired = cohesion_directions(topology.positions, topology.prev_idx, topology.next_idx)
        return self._spring(desired, velocities)

    @profile
    def alignment(self, topology: CurveTopology, velocities: np.ndarray) -> np.ndarray:
        desired = alignment_directions(topology.positions, topology.prev_idx, topology.next_idx)
        return self._spring(desired, velocities)

    def compute(self, topology: CurveTopology, index: PointSpatialIndex,
                velocities: np.ndarray) -> np.ndarray:
        """Net force per point, capped to max_force."""
        net = np.zeros_like(topology.positions)

        if self.separation_weight > 0:
            net += self.separation_weight * self.separation(topology, index, velocities)
        if self.cohesion_weight > 0:
            net += self.cohesion_weight * self.cohesion(topology, velocities)
        if self.alignment_weight > 0:
            net += self.alignment_weight * self.alignment(topology, velocities)

        return cap_magnitudes(net, self.max_force)
