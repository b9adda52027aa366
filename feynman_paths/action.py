"""
action.py

Discrete classical (real-time) action of a trajectory.

The action is the time-sliced Lagrangian integral

    S = Σ_{t=1}^{N} [ (m/2) ((x_t - x_{t-1}) / Δt)^2 - V(x_t) ] Δt

using the backward finite difference for the velocity and evaluating the potential
at the later point of every slice.
"""


def discrete_action(positions, mass, time_step_dt, potential):
    """
    Compute the discrete action S for a trajectory.

    Parameters:
        positions : sequence of float
            Positions at time steps 0..N, endpoints included (at least two of them).
        mass : float
            Particle mass.
        time_step_dt : float
            Duration Δt of one time step.
        potential : callable
            Potential energy function V(x) of a single position.

    Returns:
        float: The action S accumulated over all N time slices.
    """
    if len(positions) < 2:
        raise ValueError("a trajectory needs at least two positions to have an action")

    action_S = 0.0
    for t in range(1, len(positions)):
        # Backward difference approximating the velocity over the slice
        displacement = positions[t] - positions[t - 1]
        kinetic = 0.5 * mass * displacement**2 / (time_step_dt * time_step_dt)
        potential_energy = potential(positions[t])
        action_S += (kinetic - potential_energy) * time_step_dt
    return float(action_S)


def free_particle_action(x_start, x_end, time_steps, mass, time_step_dt):
    """
    Closed-form action of the noise-free straight line with zero potential.

    Every slice covers the same displacement (x_end - x_start) / N, so the sum collapses to
    N * (m/2) * ((x_end - x_start) / N)^2 / Δt.
    """
    displacement = (x_end - x_start) / time_steps
    return time_steps * 0.5 * mass * displacement**2 / (time_step_dt * time_step_dt) * time_step_dt
