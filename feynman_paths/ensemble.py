"""
ensemble.py

Value objects handed to whatever displays or analyses the simulation.

Trajectories and ensembles are immutable: a regeneration builds a brand new
Ensemble and never edits an existing one, so a reader holding a reference always
sees a complete and consistent generation.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _read_only(values, dtype):
    array = np.array(values, dtype=dtype)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Trajectory:
    """One sampled path: positions at time steps 0..N, its action and its amplitude."""

    positions: np.ndarray
    action: float
    amplitude: complex

    def __post_init__(self):
        object.__setattr__(self, "positions", _read_only(self.positions, float))
        object.__setattr__(self, "action", float(self.action))
        object.__setattr__(self, "amplitude", complex(self.amplitude))

    @property
    def magnitude(self):
        return abs(self.amplitude)


@dataclass(frozen=True, eq=False)
class Ensemble:
    """
    Ordered collection of trajectories from one regeneration.

    Attributes:
        trajectories: The trajectories, in generation order.
        amplitude_sum: Σ amplitude before normalization.
        normalized: False when the sum was too small and normalization was skipped.
        generation: Number of regenerations that produced this ensemble (1 for the first).
    """

    trajectories: tuple
    amplitude_sum: complex = 0j
    normalized: bool = False
    generation: int = 0

    def __post_init__(self):
        object.__setattr__(self, "trajectories", tuple(self.trajectories))
        object.__setattr__(self, "amplitude_sum", complex(self.amplitude_sum))

    def __len__(self):
        return len(self.trajectories)

    def __iter__(self):
        return iter(self.trajectories)

    def __getitem__(self, index):
        return self.trajectories[index]

    @property
    def positions(self):
        """Positions as a read-only array of shape (path_count, time_steps + 1)."""
        if not self.trajectories:
            return _read_only(np.empty((0, 0)), float)
        return _read_only([trajectory.positions for trajectory in self.trajectories], float)

    @property
    def actions(self):
        return _read_only([trajectory.action for trajectory in self.trajectories], float)

    @property
    def amplitudes(self):
        return _read_only([trajectory.amplitude for trajectory in self.trajectories], complex)

    def total_amplitude(self) -> complex:
        """Sum of the current (normalized, unless skipped) amplitudes."""
        return complex(np.sum(self.amplitudes))

    def dominant(self) -> Trajectory | None:
        """Trajectory with the largest |amplitude|, or None for an empty ensemble."""
        if not self.trajectories:
            return None
        return max(self.trajectories, key=lambda trajectory: trajectory.magnitude)
