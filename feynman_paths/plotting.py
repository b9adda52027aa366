"""
plotting.py

Static matplotlib rendering of an ensemble.

Each trajectory is drawn as position against time, coloured by the phase of its
amplitude and made more opaque the larger its magnitude. The potential curve is
drawn along the bottom and the two boundary points are marked. The ensemble is only
read, never modified.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

from .potential import harmonic_oscillator_potential

# Opacity per unit |amplitude|, clipped to [MIN_ALPHA, 1]
MAGNITUDE_GAIN = 15.0
MIN_ALPHA = 0.1
LINE_ALPHA = 0.8

POTENTIAL_SCALE = 0.15
POTENTIAL_X = np.arange(-39, 41) * 0.1


def amplitude_color(amplitude):
    """
    Map a complex amplitude to an RGBA tuple.

    The phase θ picks the hue through three cosines shifted by 2π/3; the magnitude sets
    the opacity, which also darkens the colour.
    """
    phase = np.angle(amplitude)
    red = 0.5 + 0.5 * np.cos(phase)
    green = 0.5 + 0.5 * np.cos(phase + 2 * np.pi / 3)
    blue = 0.5 + 0.5 * np.cos(phase + 4 * np.pi / 3)

    alpha = float(np.clip(abs(amplitude) * MAGNITUDE_GAIN, MIN_ALPHA, 1.0))
    return (red * alpha, green * alpha, blue * alpha, alpha * LINE_ALPHA)


def plot_ensemble(ensemble, parameters, potential=harmonic_oscillator_potential, ax=None):
    """
    Draw every trajectory of `ensemble` plus the potential curve and the boundary points.

    Parameters:
        ensemble : Ensemble
            The ensemble to draw.
        parameters : SimulationParameters
            Supplies Δt, ħ and the boundary positions for axes and labels.
        potential : callable
            Potential drawn along the bottom of the plot.
        ax : matplotlib Axes, optional
            Axes to draw into; a new figure is created when omitted.

    Returns:
        matplotlib Axes holding the plot.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    times = np.arange(parameters.time_steps + 1) * parameters.time_step_dt
    segments = [np.column_stack([trajectory.positions, times]) for trajectory in ensemble]
    colors = [amplitude_color(trajectory.amplitude) for trajectory in ensemble]
    ax.add_collection(LineCollection(segments, colors=colors, linewidths=0.8))

    # Potential curve sits just below the start of the time axis
    baseline = times[0] - 0.1 * times[-1]
    potential_values = np.array([potential(x) for x in POTENTIAL_X])
    ax.plot(POTENTIAL_X, baseline + POTENTIAL_SCALE * potential_values, color=(0.3, 0.3, 1.0), alpha=0.8, label="V(x)")

    ax.plot([parameters.x_start, parameters.x_end], [times[0], times[-1]], 'o', color=(1.0, 0.2, 0.2), label="boundary points")

    ax.set_xlim(-5, 5)
    ax.set_ylim(baseline - 0.05 * times[-1], times[-1] * 1.05)
    ax.set_facecolor("black")
    ax.set_xlabel("Position x")
    ax.set_ylabel("Time t")
    ax.set_title(f"Path integral ensemble (paths={len(ensemble)}, ħ={parameters.hbar:g}, generation {ensemble.generation})")
    ax.legend(loc="upper left")
    return ax
