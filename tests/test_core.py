"""
tests/test_core.py - potential, sampler, action and amplitude functions.
"""

import cmath
import math

import numpy as np
import pytest

from feynman_paths import (
    NOISE_SCALE,
    discrete_action,
    free_particle_action,
    free_particle_potential,
    generate_trajectory,
    harmonic_oscillator_potential,
    normalize_amplitudes,
    phase_amplitude,
    straight_line_path,
)


class TestPotential:
    """Potential energy functions."""

    def test_harmonic_values(self):
        """V(x) = x^2 / 2."""
        assert harmonic_oscillator_potential(0.0) == 0.0
        assert harmonic_oscillator_potential(2.0) == 2.0
        assert harmonic_oscillator_potential(-3.0) == 4.5

    def test_harmonic_vectorized(self):
        """Accepts numpy arrays."""
        x = np.array([-1.0, 0.0, 1.0])
        np.testing.assert_allclose(harmonic_oscillator_potential(x), [0.5, 0.0, 0.5])

    def test_free_particle_is_zero(self):
        """Zero everywhere, scalar or array."""
        assert free_particle_potential(3.7) == 0.0
        np.testing.assert_array_equal(free_particle_potential(np.array([1.0, -2.0])), [0.0, 0.0])


class TestSampler:
    """Trajectory generation."""

    @pytest.mark.parametrize("time_steps", [1, 2, 10, 50])
    def test_length_and_endpoints(self, time_steps):
        """N + 1 positions with endpoints pinned exactly."""
        rng = np.random.default_rng(7)
        positions = generate_trajectory(-2.0, 2.0, time_steps, rng)

        assert len(positions) == time_steps + 1
        assert positions[0] == -2.0
        assert positions[-1] == 2.0

    def test_zero_noise_is_straight_line(self, zero_noise):
        """With zero variates the path is the linear interpolation."""
        positions = generate_trajectory(-2.0, 2.0, 4, zero_noise)
        np.testing.assert_allclose(positions, [-2.0, -1.0, 0.0, 1.0, 2.0])

    def test_noise_scaled_by_half(self, make_stub):
        """Each interior point is displaced by 0.5 times its variate."""
        stub = make_stub([1.0, -2.0, 4.0])
        positions = generate_trajectory(0.0, 0.0, 4, stub)

        np.testing.assert_allclose(positions, [0.0, NOISE_SCALE * 1.0, NOISE_SCALE * -2.0, NOISE_SCALE * 4.0, 0.0])
        assert stub.index == 3

    def test_single_step_draws_nothing(self, make_stub):
        """A two-point path has no interior and consumes no variates."""
        stub = make_stub([5.0])
        positions = generate_trajectory(-2.0, 2.0, 1, stub)

        np.testing.assert_array_equal(positions, [-2.0, 2.0])
        assert stub.index == 0

    def test_reproducible_for_seed(self):
        """Same seed, same trajectory."""
        first = generate_trajectory(-2.0, 2.0, 20, np.random.default_rng(42))
        second = generate_trajectory(-2.0, 2.0, 20, np.random.default_rng(42))
        np.testing.assert_array_equal(first, second)

    def test_rejects_zero_steps(self):
        """At least one time step is required."""
        with pytest.raises(ValueError):
            straight_line_path(-2.0, 2.0, 0)


class TestAction:
    """Discrete action evaluation."""

    def test_two_point_regression(self):
        """x0=-2, xf=2, N=1, m=1, dt=0.1: (0.5*16/0.01 - V(2)) * 0.1 = 79.8."""
        action = discrete_action([-2.0, 2.0], 1.0, 0.1, harmonic_oscillator_potential)
        assert action == pytest.approx(79.8, rel=1e-12)

    def test_straight_line_free_particle_closed_form(self, zero_noise):
        """Noise-free, potential-free path matches the closed form."""
        positions = generate_trajectory(-2.0, 2.0, 50, zero_noise)
        action = discrete_action(positions, 1.5, 0.1, free_particle_potential)

        expected = free_particle_action(-2.0, 2.0, 50, 1.5, 0.1)
        assert action == pytest.approx(expected, rel=1e-12)
        # Σ over 50 slices of 0.5 * 1.5 * (4/50)^2 / 0.1
        assert expected == pytest.approx(50 * 0.5 * 1.5 * (4 / 50) ** 2 / 0.1)

    def test_potential_uses_later_point(self):
        """The potential is evaluated at positions[1:], not positions[0]."""
        seen = []

        def recording_potential(x):
            seen.append(float(x))
            return 0.0

        discrete_action([1.0, 2.0, 3.0], 1.0, 1.0, recording_potential)
        assert seen == [2.0, 3.0]

    def test_constant_path_is_minus_potential(self):
        """No motion leaves only -Σ V Δt."""
        action = discrete_action([1.0, 1.0, 1.0], 2.0, 0.5, harmonic_oscillator_potential)
        assert action == pytest.approx(-2 * 0.5 * 0.5)

    def test_rejects_single_position(self):
        """Fewer than two positions is a precondition violation."""
        with pytest.raises(ValueError):
            discrete_action([1.0], 1.0, 0.1, harmonic_oscillator_potential)


class TestAmplitude:
    """Phase amplitudes and ensemble normalization."""

    @pytest.mark.parametrize("action", [0.0, 1.0, -3.2, 79.8, 1e4])
    def test_unit_magnitude(self, action):
        """exp(-iS/ħ) has magnitude one."""
        assert abs(phase_amplitude(action, 1.0)) == pytest.approx(1.0, abs=1e-12)

    def test_phase_sign(self):
        """S = π/2, ħ = 1 gives -i."""
        amplitude = phase_amplitude(math.pi / 2, 1.0)
        assert amplitude.real == pytest.approx(0.0, abs=1e-12)
        assert amplitude.imag == pytest.approx(-1.0)

    def test_hbar_scales_phase(self):
        """Doubling ħ halves the phase."""
        assert cmath.phase(phase_amplitude(1.0, 2.0)) == pytest.approx(-0.5)

    def test_normalized_sum_is_one(self):
        """After normalization the amplitudes sum to exactly one."""
        raw = [phase_amplitude(s, 1.0) for s in (0.1, 0.7, 2.0, 3.3)]
        normalized, amplitude_sum, applied = normalize_amplitudes(raw)

        assert applied
        assert amplitude_sum == pytest.approx(sum(raw))
        assert abs(np.sum(normalized)) == pytest.approx(1.0)
        assert abs(np.sum(normalized) - 1.0) < 1e-12

    def test_phases_relative_to_sum(self):
        """Each normalized amplitude is the raw one divided by the sum."""
        raw = [1j, 1.0]
        normalized, amplitude_sum, _ = normalize_amplitudes(raw)
        np.testing.assert_allclose(normalized, np.array(raw) / (1 + 1j))

    def test_singleton_becomes_one(self):
        """A single amplitude normalizes to 1 + 0j."""
        normalized, _, applied = normalize_amplitudes([phase_amplitude(5.0, 1.0)])
        assert applied
        assert abs(normalized[0]) == pytest.approx(1.0)
        assert cmath.phase(normalized[0]) == pytest.approx(0.0, abs=1e-12)

    def test_destructive_interference_skips(self):
        """Opposite phases cancel; amplitudes come back unchanged."""
        raw = [1.0 + 0j, -1.0 + 0j]
        normalized, amplitude_sum, applied = normalize_amplitudes(raw)

        assert not applied
        assert abs(amplitude_sum) <= 1e-10
        np.testing.assert_array_equal(normalized, raw)

    def test_guard_threshold(self):
        """A sum just above epsilon is still divided out."""
        raw = [1.0 + 0j, -1.0 + 1e-9j]
        _, amplitude_sum, applied = normalize_amplitudes(raw)
        assert abs(amplitude_sum) == pytest.approx(1e-9)
        assert applied

    def test_input_not_modified(self):
        """Normalization returns a new array."""
        raw = np.array([1.0 + 0j, 1j])
        normalize_amplitudes(raw)
        np.testing.assert_array_equal(raw, [1.0 + 0j, 1j])
