"""
Differential growth for 2D curves.

Open or closed polylines grow into organic, space-filling shapes: every
point is pushed away from nearby points, pulled toward its curve
neighbours, and edges that stretch too far are split at their midpoint.

See: https://inconvergent.net/generative/differential-line/
"""

from .vector import Vector2D
from .errors import ConfigurationError
from .config import GrowthConfig, load_config, save_config
from .curve import GrowthCurve
from .spatial import PointSpatialIndex
from .forces import ForceModel
from .integrator import integrate
from .subdivision import subdivide
from .engine import DifferentialGrowth
from .point_generators import (
    generate_points_on_circle,
    generate_points_on_line,
    generate_points_on_polygon,
    generate_random_blob,
)
from .logging_config import setup_logging
from .profiling import profiler

__all__ = [
    'Vector2D',
    'ConfigurationError',
    'GrowthConfig',
    'load_config',
    'save_config',
    'GrowthCurve',
    'PointSpatialIndex',
    'ForceModel',
    'integrate',
    'subdivide',
    'DifferentialGrowth',
    'generate_points_on_circle',
    'generate_points_on_line',
    'generate_points_on_polygon',
    'generate_random_blob',
    'setup_logging',
    'profiler',
]
