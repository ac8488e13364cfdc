"""
DifferentialGrowth - owns the curves and advances the simulation.

One step:
  1. rebuild the spatial index over every point of every curve
  2. compute all forces from that snapshot
  3. integrate all positions
  4. split over-long edges

Point count never decreases. It is also never capped: the caller decides
how many steps to run, and a max_edge_length far below the starting
spacing makes the point count grow quickly.
"""

import logging
from typing import Callable, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from .config import GrowthConfig
from .curve import GrowthCurve, build_topology
from .errors import ConfigurationError
from .forces import ForceModel
from .integrator import integrate
from .profiling import profile
from .spatial import PointSpatialIndex
from .subdivision import subdivide

logger = logging.getLogger(__name__)


class DifferentialGrowth:
    """
    Differential growth over one or more open or closed curves.

    Example:
        points = generate_points_on_circle(0.0, 0.0, 10.0, 10)
        dg = DifferentialGrowth(points, 1.5, 1.0, 14.0, 1.1, 5.0)
        dg.step()
        points_to_draw = dg.get_points()
    """

    def __init__(
        self,
        starting_points,
        max_force: float,
        max_speed: float,
        desired_separation: float,
        cohesion_weight: float,
        max_edge_length: float,
        *,
        closed: bool = True,
        alignment_weight: float = 0.0,
        separation_weight: float = 1.0,
        damping: float = 0.0,
        falloff='linear',
    ):
        config = GrowthConfig(
            max_force=max_force,
            max_speed=max_speed,
            desired_separation=desired_separation,
            cohesion_weight=cohesion_weight,
            max_edge_length=max_edge_length,
            alignment_weight=alignment_weight,
            separation_weight=separation_weight,
            damping=damping,
            falloff=falloff,
            closed=closed,
        )
        self._setup([GrowthCurve(starting_points, closed=closed)], config)

    @classmethod
    def from_config(cls, curves: Sequence[GrowthCurve], config: GrowthConfig) -> 'DifferentialGrowth':
        """Grow several curves together; every curve repels points of every other."""
        if not curves:
            raise ConfigurationError('curves', "at least one curve is required")
        engine = cls.__new__(cls)
        engine._setup([c.copy() for c in curves], config)
        return engine

    def _setup(self, curves: List[GrowthCurve], config: GrowthConfig):
        self._config = config
        self._curves = curves
        self._velocities = [np.zeros_like(c.points) for c in curves]
        self._forces = ForceModel(config)
        self._index = PointSpatialIndex()
        self.iteration = 0

        logger.info(
            f"Initialized DifferentialGrowth: {len(curves)} curve(s), "
            f"{self.point_count} points"
        )

    @property
    def config(self) -> GrowthConfig:
        return self._config

    @property
    def point_count(self) -> int:
        return sum(len(c) for c in self._curves)

    @property
    def curves(self) -> List[GrowthCurve]:
        return [c.copy() for c in self._curves]

    @profile
    def _differentiate(self):
        topology = build_topology(self._curves)
        self._index.rebuild(topology.positions)

        velocities = np.concatenate(self._velocities, axis=0)
        if self._config.damping > 0:
            carried = self._config.damping * velocities
        else:
            carried = np.zeros_like(velocities)

        forces = self._forces.compute(topology, self._index, carried)
        positions, velocities = integrate(
            topology.positions, forces, velocities,
            self._config.max_speed, self._config.damping
        )

        for curve, new_points in zip(self._curves, topology.split(positions)):
            curve.points = new_points
        self._velocities = topology.split(velocities)

    @profile
    def _growth(self) -> int:
        added = 0
        for i, curve in enumerate(self._curves):
            points, velocities, count = subdivide(
                curve.points, curve.closed, self._config.max_edge_length, self._velocities[i]
            )
            curve.points = points
            self._velocities[i] = velocities
            added += count
        return added

    def step(self) -> int:
        """
        Advance the simulation by one iteration.
        Returns the number of points inserted by this step.
        """
        self._differentiate()
        added = self._growth()
        self.iteration += 1

        logger.debug(f"Step {self.iteration}: +{added} points, {self.point_count} total")
        return added

    tick = step

    def grow(self, steps: int, callback: Optional[Callable[['DifferentialGrowth', int], None]] = None,
             progress: bool = False) -> int:
        """
        Run `steps` iterations.
        Optional callback is called after each iteration with (engine, iteration).
        Returns the final point count.
        """
        logger.info(f"Growing for {steps} steps from {self.point_count} points...")
        log_interval = self._config.log_interval

        iterator = tqdm(range(steps), desc="Growing") if progress else range(steps)
        for _ in iterator:
            self.step()

            if callback:
                callback(self, self.iteration)

            if self.iteration % log_interval == 0:
                logger.info(f"  Iteration {self.iteration}: {self.point_count} points")

        logger.info(f"Growth complete after {self.iteration} iterations: {self.point_count} points")
        return self.point_count

    def get_points(self, curve: int = 0) -> np.ndarray:
        """Read-only copy of one curve's positions as an (N, 2) array."""
        points = self._curves[curve].points.copy()
        points.flags.writeable = False
        return points

    snapshot = get_points

    def get_curves(self) -> List[np.ndarray]:
        return [self.get_points(i) for i in range(len(self._curves))]

    def get_segments(self) -> List[tuple]:
        """All curve edges as ((x1,y1), (x2,y2)) tuples for drawing."""
        segments = []
        for curve in self._curves:
            segments.extend(curve.segments())
        return segments

    def edge_lengths(self) -> np.ndarray:
        if not self._curves:
            return np.empty(0)
        return np.concatenate([c.edge_lengths() for c in self._curves])

    def mean_edge_length(self) -> float:
        lengths = self.edge_lengths()
        return float(lengths.mean()) if len(lengths) else 0.0

    def __repr__(self) -> str:
        return f"DifferentialGrowth({len(self._curves)} curve(s), {self.point_count} points, iteration {self.iteration})"
