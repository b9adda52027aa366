"""
@file amplitude.py
@brief Complex amplitudes exp(-i S / ħ) and their normalization over an ensemble.
@details
Each sampled path contributes a pure phase. Summing the phases of many paths gives
constructive and destructive interference; dividing every amplitude by that sum makes
the ensemble total exactly one, so magnitudes read as relative weights and phases are kept.

When the paths interfere almost completely destructively the sum is tiny and dividing
by it would blow the amplitudes up. Below NORMALIZATION_EPSILON the ensemble pass is
skipped and the raw unit-magnitude phases are kept for that regeneration. This is a
policy for a degenerate ensemble, not a numerical error.
"""

import numpy as np

NORMALIZATION_EPSILON = 1e-10
#: float: smallest |Σ amplitude| that is still divided out.


def phase_amplitude(action, hbar):
    """
    @brief Unnormalized amplitude of a path.
    @param action float: discrete action S of the path.
    @param hbar float: reduced Planck constant ħ (> 0).
    @return complex: exp(-i S / ħ), magnitude 1.
    """
    return complex(np.exp(1j * (-action / hbar)))


def normalize_amplitudes(amplitudes, epsilon=NORMALIZATION_EPSILON):
    """
    @brief Rescale amplitudes by the inverse of their sum.
    @param amplitudes sequence of complex: unnormalized amplitudes of one ensemble.
    @param epsilon float: guard below which normalization is skipped.
    @return tuple: (normalized, amplitude_sum, applied)
        - normalized (ndarray of complex): new array, the input is left untouched.
        - amplitude_sum (complex): Σ amplitude before normalization.
        - applied (bool): False when |Σ amplitude| <= epsilon and the amplitudes came back unchanged.
    """
    values = np.array(amplitudes, dtype=complex)
    amplitude_sum = complex(np.sum(values))

    if abs(amplitude_sum) > epsilon:
        return values / amplitude_sum, amplitude_sum, True
    return values, amplitude_sum, False
