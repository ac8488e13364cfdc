"""
Configuration for the differential growth simulation.

The first block of fields is what the engine itself uses. The rest only
drives main_growth.py (seeding, run length, output).
"""

import json
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Callable, Literal, Optional, Tuple, Union

from .curve import MIN_CURVE_POINTS
from .errors import ConfigurationError

FalloffName = Literal['linear', 'inverse_square', 'constant']
FALLOFF_NAMES = ('linear', 'inverse_square', 'constant')


@dataclass(frozen=True)
class GrowthConfig:
    # Defaults are the values the algorithm was tuned with on a radius-10 circle
    max_force: float = 1.5
    max_speed: float = 1.0
    desired_separation: float = 14.0
    cohesion_weight: float = 1.1
    max_edge_length: float = 5.0

    separation_weight: float = 1.0
    alignment_weight: float = 0.0     # 0 = no kink smoothing
    damping: float = 0.0              # 0 = no momentum, 1 = full carry-over
    falloff: Union[FalloffName, Callable] = 'linear'

    # ==================== DRIVER SETTINGS ====================
    closed: bool = True
    start_center: Tuple[float, float] = (0.0, 0.0)
    start_radius: float = 10.0
    start_points: int = 10
    iterations: int = 500
    frame_skip: int = 5
    log_interval: int = 100
    animate: bool = False
    output_dir: str = 'outputs/growth'
    random_seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.start_center, list):
            object.__setattr__(self, 'start_center', tuple(self.start_center))
        self.validate()

    def validate(self):
        for name in ('max_force', 'max_speed', 'desired_separation', 'cohesion_weight',
                     'separation_weight', 'alignment_weight', 'damping'):
            _require_non_negative(name, getattr(self, name))

        _require_finite('max_edge_length', self.max_edge_length)
        if self.max_edge_length <= 0:
            raise ConfigurationError('max_edge_length', f"must be > 0, got {self.max_edge_length}")

        if self.damping > 1:
            raise ConfigurationError('damping', f"must be in [0, 1], got {self.damping}")

        if not callable(self.falloff) and self.falloff not in FALLOFF_NAMES:
            raise ConfigurationError(
                'falloff', f"expected one of {FALLOFF_NAMES} or a callable, got {self.falloff!r}"
            )

        _require_finite('start_radius', self.start_radius)
        if self.start_radius <= 0:
            raise ConfigurationError('start_radius', f"must be > 0, got {self.start_radius}")

        _require_int('start_points', self.start_points, MIN_CURVE_POINTS)
        _require_int('iterations', self.iterations, 0)
        _require_int('frame_skip', self.frame_skip, 1)
        _require_int('log_interval', self.log_interval, 1)

    @property
    def engine_params(self) -> dict:
        """Keyword arguments understood by DifferentialGrowth."""
        return {
            'max_force': self.max_force,
            'max_speed': self.max_speed,
            'desired_separation': self.desired_separation,
            'cohesion_weight': self.cohesion_weight,
            'max_edge_length': self.max_edge_length,
            'separation_weight': self.separation_weight,
            'alignment_weight': self.alignment_weight,
            'damping': self.damping,
            'falloff': self.falloff,
        }


def _require_finite(name: str, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(name, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(name, f"must be finite, got {value}")


def _require_non_negative(name: str, value):
    _require_finite(name, value)
    if value < 0:
        raise ConfigurationError(name, f"must be >= 0, got {value}")


def _require_int(name: str, value, minimum: int):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(name, f"must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(name, f"must be >= {minimum}, got {value}")


def load_config(path: str = 'config/growth.json') -> GrowthConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return GrowthConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    known = {f.name for f in fields(GrowthConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(str(config_path), f"unknown settings: {', '.join(unknown)}")

    return GrowthConfig(**data)


def save_config(config: GrowthConfig, path: str = 'config/growth.json'):
    """Save config to JSON file."""
    if callable(config.falloff):
        raise ConfigurationError('falloff', "a callable falloff cannot be written to JSON")

    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(config)
    data['start_center'] = list(config.start_center)

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)
