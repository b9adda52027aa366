"""
@file sampler.py
@brief Generation of discretized trajectories between two fixed boundary points.
@details
A trajectory is the straight line joining x_start and x_end, sampled at time_steps + 1
equally spaced time slices, with independent Gaussian noise added at every interior slice:

    x_t = (1 - t/N) x_start + (t/N) x_end + 0.5 * ξ_t ,   ξ_t ~ N(0, 1),   t = 1..N-1

This is a biased direct sampler. Unlike the Metropolis updates used for Euclidean
lattice paths it neither accepts nor rejects anything, so the ensemble it produces is
not distributed according to the path-integral measure. It is a deliberate
simplification: the amplitudes attached afterwards carry all of the physics.
"""

import numpy as np

NOISE_SCALE = 0.5
#: float: standard deviation of the Gaussian displacement added at interior time slices.


def straight_line_path(x_start, x_end, time_steps):
    """
    @brief Noise-free linear interpolation between the two boundary points.
    @param x_start float: position at time step 0.
    @param x_end float: position at time step `time_steps`.
    @param time_steps int: number of time steps N (N >= 1).
    @return ndarray: positions of length N + 1 with the endpoints pinned exactly.
    """
    if time_steps < 1:
        raise ValueError(f"time_steps must be at least 1, got {time_steps}")

    alpha = np.arange(time_steps + 1) / time_steps
    positions = (1 - alpha) * x_start + alpha * x_end
    # Pin the endpoints exactly; interpolation alone could round x_end
    positions[0] = x_start
    positions[time_steps] = x_end
    return positions


def generate_trajectory(x_start, x_end, time_steps, rng, noise_scale=NOISE_SCALE):
    """
    @brief Generate one random trajectory between fixed endpoints.
    @param x_start float: fixed start position.
    @param x_end float: fixed end position.
    @param time_steps int: number of time steps N; the trajectory has N + 1 positions.
    @param rng object: any generator exposing ``standard_normal(size)``
        (e.g. ``numpy.random.Generator``). It is advanced by exactly N - 1 variates.
    @param noise_scale float: scale applied to each standard-normal variate.
    @return ndarray: positions of length N + 1.
    @details
    The interior variates are drawn in time order in a single call, so a fixed
    generator state always reproduces the same trajectory.
    """
    positions = straight_line_path(x_start, x_end, time_steps)
    interior = time_steps - 1
    if interior > 0:
        noise = np.asarray(rng.standard_normal(interior), dtype=float)
        positions[1:time_steps] += noise_scale * noise
    return positions
