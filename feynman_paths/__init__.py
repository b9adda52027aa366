"""
feynman_paths - Monte Carlo sampling of discretized Feynman paths for a 1D particle.

Trajectories between two fixed points are sampled, scored with their discrete
classical action, given the amplitude exp(-i S / ħ) and normalized over the ensemble.
"""

from .action import discrete_action, free_particle_action
from .amplitude import NORMALIZATION_EPSILON, normalize_amplitudes, phase_amplitude
from .controller import (
    DEFAULT_SEED,
    DESKTOP_REGENERATION_FRAMES,
    EMBEDDED_REGENERATION_FRAMES,
    FRAME_DURATION,
    PathIntegralSimulation,
    SimulationState,
)
from .ensemble import Ensemble, Trajectory
from .parameters import (
    EMBEDDED_PARAMETERS,
    MAX_PATH_COUNT,
    X_END,
    X_START,
    InvalidParameterError,
    SimulationParameters,
    load_parameters,
    validate_parameter,
)
from .potential import free_particle_potential, harmonic_oscillator_potential
from .sampler import NOISE_SCALE, generate_trajectory, straight_line_path

__version__ = "0.1.0"
