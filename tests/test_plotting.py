"""
tests/test_plotting.py - amplitude colouring and the static ensemble figure.
"""

import math

import matplotlib.pyplot as plt
import numpy as np
import pytest

from feynman_paths import PathIntegralSimulation, SimulationParameters
from feynman_paths.plotting import amplitude_color, plot_ensemble


class TestAmplitudeColor:
    """Phase to hue, magnitude to opacity."""

    def test_zero_phase_full_magnitude(self):
        """Phase 0 is red-dominated; |a| >= 1/15 saturates the opacity."""
        red, green, blue, alpha = amplitude_color(1.0 + 0j)

        assert red == pytest.approx(1.0)
        assert green == pytest.approx(0.25)
        assert blue == pytest.approx(0.25)
        assert alpha == pytest.approx(0.8)

    def test_small_magnitude_floor(self):
        """Tiny amplitudes are still drawn at 10% opacity."""
        red, _, _, alpha = amplitude_color(1e-6 + 0j)
        assert alpha == pytest.approx(0.1 * 0.8)
        assert red == pytest.approx(0.1)

    def test_intermediate_magnitude(self):
        _, _, _, alpha = amplitude_color(0.04j)
        assert alpha == pytest.approx(0.6 * 0.8)

    def test_phase_rotates_channels(self):
        """A phase of 2π/3 moves the peak to the blue channel."""
        red, green, blue, _ = amplitude_color(np.exp(1j * 2 * math.pi / 3))
        assert blue == pytest.approx(1.0)
        assert red == pytest.approx(0.25)
        assert green == pytest.approx(0.25)


class TestPlotEnsemble:
    """Rendering reads the ensemble without touching it."""

    def test_draws_one_line_per_path(self):
        simulation = PathIntegralSimulation(SimulationParameters(path_count=12, time_steps=8))
        ensemble = simulation.current_ensemble()

        ax = plot_ensemble(ensemble, simulation.parameters, simulation.potential)
        try:
            (collection,) = ax.collections
            assert len(collection.get_segments()) == 12
            assert len(ax.lines) == 2
        finally:
            plt.close(ax.figure)

        assert simulation.current_ensemble() is ensemble

    def test_uses_given_axes(self):
        simulation = PathIntegralSimulation(SimulationParameters(path_count=3, time_steps=4))
        figure, ax = plt.subplots()
        try:
            assert plot_ensemble(simulation.current_ensemble(), simulation.parameters, ax=ax) is ax
        finally:
            plt.close(figure)
