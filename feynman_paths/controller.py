"""
controller.py

Simulation controller: owns the parameters and the current trajectory ensemble and
decides when a new ensemble is generated.

A regeneration runs synchronously from start to finish:

    sample trajectory -> discrete action -> exp(-i S / ħ)      (path_count times)
    -> normalize over the ensemble -> swap the new Ensemble in

The new ensemble is assembled in a fresh collection and only replaces the current
one once it is complete, so current_ensemble() never returns a partial generation.
All trajectories are drawn from one generator, in order, which keeps a run
reproducible for a fixed seed and a fixed sequence of parameter changes.
"""

import enum
import logging

import numpy as np

from .action import discrete_action
from .amplitude import normalize_amplitudes, phase_amplitude
from .ensemble import Ensemble, Trajectory
from .parameters import InvalidParameterError, SimulationParameters
from .potential import harmonic_oscillator_potential
from .sampler import generate_trajectory

logger = logging.getLogger(__name__)

# ===============================================================
#                   Regeneration Cadence
# ===============================================================

DEFAULT_SEED = 42
#: int: seed of the shared generator when none is injected.

FRAME_DURATION = 0.016
#: float: simulated seconds advanced by one presentation frame.

DESKTOP_REGENERATION_FRAMES = 120
#: int: frames between periodic regenerations in the desktop viewer.

EMBEDDED_REGENERATION_FRAMES = 180
#: int: frames between periodic regenerations in the embedded (browser) viewer.

# Absorbs rounding when many frame durations are summed up to a period
TICK_TOLERANCE = 1e-9

REGENERATE_KEYS = ("r", "R", 82, 114)


class SimulationState(enum.Enum):
    IDLE = "idle"
    REGENERATING = "regenerating"


class PathIntegralSimulation:
    """
    Owner of the trajectory ensemble and its parameters.

    A new ensemble is generated on construction, on regenerate(), on a pointer click
    or the regenerate key, when the accumulated tick() time reaches the regeneration
    period, and after every accepted parameter change.

    Parameters:
        parameters : SimulationParameters, optional
            Initial parameters; defaults to SimulationParameters().
        potential : callable
            Potential energy V(x); harmonic oscillator by default.
        rng : object, optional
            Generator exposing ``standard_normal(size)``. When omitted a
            ``numpy.random.Generator`` seeded with `seed` is created.
        seed : int
            Seed used when `rng` is not given.
        regeneration_frames : int or None
            Frames between periodic regenerations; None disables them.
        frame_duration : float
            Simulated seconds per frame, used to turn the frame cadence into a period.
    """

    def __init__(self, parameters=None, potential=harmonic_oscillator_potential, rng=None,
                 seed=DEFAULT_SEED, regeneration_frames=DESKTOP_REGENERATION_FRAMES,
                 frame_duration=FRAME_DURATION):
        if regeneration_frames is not None and regeneration_frames <= 0:
            raise ValueError(f"regeneration_frames must be positive or None, got {regeneration_frames}")
        if frame_duration <= 0:
            raise ValueError(f"frame_duration must be positive, got {frame_duration}")

        self._parameters = parameters if parameters is not None else SimulationParameters()
        self._potential = potential
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self.regeneration_frames = regeneration_frames
        self.frame_duration = frame_duration

        self.state = SimulationState.IDLE
        self.frame_count = 0
        self.total_time = 0.0
        self._time_since_regeneration = 0.0
        self._generation = 0
        self._ensemble = Ensemble(())

        self.regenerate()

    # ---------------- Read-only views ----------------

    @property
    def parameters(self):
        return self._parameters

    @property
    def potential(self):
        return self._potential

    @property
    def regeneration_period(self):
        """Simulated time between periodic regenerations, or None when disabled."""
        if self.regeneration_frames is None:
            return None
        return self.regeneration_frames * self.frame_duration

    def current_ensemble(self):
        """Return the latest complete ensemble (immutable)."""
        return self._ensemble

    # ---------------- Regeneration ----------------

    def regenerate(self):
        """Discard the current ensemble and generate a new one with the current parameters."""
        self.state = SimulationState.REGENERATING
        params = self._parameters

        # A failure part way through leaves the previous ensemble in place
        try:
            sampled = []
            for _ in range(params.path_count):
                positions = generate_trajectory(params.x_start, params.x_end, params.time_steps, self._rng)
                action = discrete_action(positions, params.mass, params.time_step_dt, self._potential)
                sampled.append((positions, action, phase_amplitude(action, params.hbar)))

            amplitudes, amplitude_sum, normalized = normalize_amplitudes([amplitude for _, _, amplitude in sampled])
            if not normalized:
                logger.info("Skipping normalization: |sum of amplitudes| = %.3e", abs(amplitude_sum))

            trajectories = tuple(
                Trajectory(positions, action, amplitude)
                for (positions, action, _), amplitude in zip(sampled, amplitudes)
            )
            self._generation += 1
            self._ensemble = Ensemble(trajectories, amplitude_sum, normalized, self._generation)
            self._time_since_regeneration = 0.0
        finally:
            self.state = SimulationState.IDLE

        logger.debug("Generation %d: %d paths, |sum of amplitudes| = %.4f",
                     self._generation, params.path_count, abs(amplitude_sum))

    def tick(self, delta_time=FRAME_DURATION):
        """
        Advance simulated time by one frame of `delta_time` seconds.

        Returns True when the accumulated time reached the regeneration period and a new
        ensemble was generated.
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must not be negative, got {delta_time}")

        self.frame_count += 1
        self.total_time += delta_time
        period = self.regeneration_period
        if period is None:
            return False

        self._time_since_regeneration += delta_time
        if self._time_since_regeneration + TICK_TOLERANCE >= period:
            self.regenerate()
            return True
        return False

    def pointer_clicked(self, x=None, y=None):
        """A click anywhere regenerates, like the regenerate key."""
        self.regenerate()

    def key_pressed(self, key):
        """Regenerate on 'r' / 'R' (or their key codes). Returns True if the key was handled."""
        if key in REGENERATE_KEYS:
            self.regenerate()
            return True
        return False

    def reseed(self, seed):
        """Replace the shared generator with a fresh one; takes effect at the next regeneration."""
        self._rng = np.random.default_rng(seed)

    # ---------------- Parameter setters ----------------

    def _update(self, name, value):
        try:
            updated = self._parameters.with_value(name, value)
        except InvalidParameterError as error:
            logger.warning("Ignoring parameter update: %s", error)
            return False
        previous = self._parameters
        self._parameters = updated
        try:
            self.regenerate()
        except Exception:
            self._parameters = previous
            raise
        return True

    def set_hbar(self, hbar):
        return self._update("hbar", hbar)

    def set_mass(self, mass):
        return self._update("mass", mass)

    def set_time_step(self, time_step_dt):
        return self._update("time_step_dt", time_step_dt)

    def set_spatial_step(self, spatial_step_dx):
        return self._update("spatial_step_dx", spatial_step_dx)

    def set_time_steps(self, time_steps):
        return self._update("time_steps", time_steps)

    def set_path_count(self, path_count):
        return self._update("path_count", path_count)

    def set_lattice_size(self, lattice_size):
        return self._update("lattice_size", lattice_size)

    def set_potential(self, potential):
        """Swap the potential energy function and regenerate."""
        if not callable(potential):
            logger.warning("Ignoring potential update: %r is not callable", potential)
            return False
        previous = self._potential
        self._potential = potential
        try:
            self.regenerate()
        except Exception:
            self._potential = previous
            raise
        return True
