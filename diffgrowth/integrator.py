"""
Position update for one time step.
"""

from typing import Tuple

import numpy as np

from .profiling import profile
from .vector import cap_magnitudes


@profile
def integrate(positions: np.ndarray, forces: np.ndarray, velocities: np.ndarray,
              max_speed: float, damping: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    velocity = clamp(damping * velocity + force, max_speed)
    position = position + velocity

    Returns fresh (positions, velocities). With damping 0 the previous
    velocity is ignored, so no point carries momentum between steps.
    No point moves further than max_speed.
    """
    new_velocities = cap_magnitudes(damping * velocities + forces, max_speed)
    return positions + new_velocities, new_velocities
