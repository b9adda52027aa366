"""
potential.py

Potential energy functions V(x) for the one-dimensional particle.

Any real -> real callable can stand in for these: the sampler never looks at the
potential and the action evaluator only calls it, so swapping the potential does
not touch either of them. Both functions below are vectorizable (accept numpy arrays).
"""

import numpy as np


def harmonic_oscillator_potential(position):
    """
    Harmonic oscillator potential function V(x) = (1/2) * x^2.

    This is the default potential of the simulation. It can be replaced by any other
    function of position to represent a different one-dimensional system.
    """
    return 0.5 * position**2


def free_particle_potential(position):
    """Zero potential V(x) = 0, leaving only the kinetic part of the action."""
    return np.zeros_like(position, dtype=float)
