"""Temporal post-processing of MFCC frame sequences.

Feature matrices are 2-D arrays of shape ``(num_frames, num_coeffs)`` in
temporal order.
"""

from __future__ import annotations

import numpy as np


def _as_matrix(frames) -> np.ndarray:
    m = np.asarray(frames, dtype=np.float64)
    if m.ndim == 2:
        return m
    if m.size == 0:
        return m.reshape(0, 0)
    raise ValueError(f"feature matrix must be 2-D, got shape {m.shape}")


def apply_cepstral_mean_normalization(frames) -> np.ndarray:
    """Subtract each coefficient's mean over all frames.

    Empty input is returned unchanged (as an empty matrix).
    """
    m = _as_matrix(frames)
    if m.shape[0] == 0:
        return m.copy()
    return m - m.mean(axis=0, keepdims=True)


def compute_delta_features(frames, N: int = 2) -> np.ndarray:
    """Delta (first temporal derivative) of a feature matrix.

    ``delta[t] = sum_{n=1..N} n * (f[t+n] - f[t-n]) / sum_{n=1..N} 2 n^2``

    Frame indices are clamped to ``[0, num_frames - 1]``, so edge frames reuse
    the boundary frame instead of being dropped. ``N = 0`` gives all zeros.

    Parameters
    ----------
    frames : array-like
        Feature matrix, shape ``(num_frames, num_coeffs)``.
    N : int
        Regression window on each side (default 2).
    """
    m = _as_matrix(frames)
    T = m.shape[0]
    delta = np.zeros_like(m)
    if T == 0:
        return delta

    denominator = sum(2 * n * n for n in range(1, N + 1))
    if denominator <= 0:
        return delta

    t = np.arange(T)
    numerator = np.zeros_like(m)
    for n in range(1, N + 1):
        forward = np.minimum(t + n, T - 1)
        backward = np.maximum(t - n, 0)
        numerator += n * (m[forward] - m[backward])
    return numerator / denominator


def stack_temporal_features(frames, N: int = 2) -> np.ndarray:
    """CMN, then ``[static | delta | delta-delta]`` per frame.

    Output has three times as many columns as the input, in that fixed order.
    """
    normalized = apply_cepstral_mean_normalization(frames)
    delta = compute_delta_features(normalized, N)
    delta_delta = compute_delta_features(delta, N)
    return np.concatenate((normalized, delta, delta_delta), axis=1)
