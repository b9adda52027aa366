"""
Shared pytest fixtures for the path-integral tests.

- small_parameters: a cheap parameter set (40 paths, 10 time steps)
- simulation: controller built from small_parameters with the default seed
- zero_noise / StubGenerator: fixed-sequence generators replacing numpy's
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from feynman_paths import PathIntegralSimulation, SimulationParameters


class StubGenerator:
    """Deterministic stand-in for numpy.random.Generator that replays a fixed sequence."""

    def __init__(self, values=(0.0,)):
        self.values = list(values)
        self.index = 0
        self.calls = 0

    def standard_normal(self, size):
        self.calls += 1
        drawn = []
        for _ in range(size):
            drawn.append(self.values[self.index % len(self.values)])
            self.index += 1
        return np.array(drawn, dtype=float)


@pytest.fixture
def small_parameters():
    return SimulationParameters(path_count=40, time_steps=10)


@pytest.fixture
def simulation(small_parameters):
    return PathIntegralSimulation(small_parameters)


@pytest.fixture
def zero_noise():
    return StubGenerator([0.0])


@pytest.fixture
def make_stub():
    """Factory for StubGenerator instances with a chosen sequence."""
    return StubGenerator
