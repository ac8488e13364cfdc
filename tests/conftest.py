import matplotlib
matplotlib.use('Agg')

import math

import pytest

from diffgrowth import DifferentialGrowth, generate_points_on_circle
from diffgrowth.profiling import profiler


@pytest.fixture
def circle_points():
    return generate_points_on_circle(0.0, 0.0, 10.0, 10)


@pytest.fixture
def engine(circle_points):
    return DifferentialGrowth(circle_points, 1.5, 1.0, 14.0, 1.1, 5.0)


@pytest.fixture
def chord_length():
    def _chord(radius, n):
        return 2.0 * radius * math.sin(math.pi / n)
    return _chord


@pytest.fixture
def clean_profiler():
    profiler.reset()
    profiler.enable()
    yield profiler
    profiler.disable()
    profiler.reset()
