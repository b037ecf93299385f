"""Triangular Mel filter bank construction."""

from __future__ import annotations

import logging
from functools import lru_cache

import numpy as np

from .fft import is_power_of_two

logger = logging.getLogger(__name__)


def hz_to_mel(hz):
    """Hz -> Mel, ``1125 * ln(1 + hz / 700)``."""
    return 1125 * np.log(1 + np.asarray(hz, dtype=np.float64) / 700)


def mel_to_hz(mel):
    """Mel -> Hz, ``700 * (exp(mel / 1125) - 1)``."""
    return 700 * (np.exp(np.asarray(mel, dtype=np.float64) / 1125) - 1)


def _validate_params(
    num_filters: int,
    nfft: int,
    sample_rate: float,
    low_freq: float,
    high_freq: float,
) -> None:
    if num_filters < 1:
        raise ValueError(f"num_filters must be >= 1, got {num_filters}")
    if nfft < 2 or not is_power_of_two(nfft):
        raise ValueError(f"nfft must be a power of two >= 2, got {nfft}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    if low_freq < 0:
        raise ValueError(f"low_freq must be >= 0, got {low_freq}")
    if high_freq > sample_rate / 2:
        raise ValueError(
            f"high_freq must not exceed Nyquist ({sample_rate / 2} Hz), got {high_freq}"
        )
    if high_freq <= low_freq:
        raise ValueError(f"high_freq ({high_freq}) must be greater than low_freq ({low_freq})")


def filter_bin_points(
    num_filters: int,
    nfft: int,
    sample_rate: float,
    low_freq: float,
    high_freq: float,
) -> np.ndarray:
    """FFT bin index of each of the ``num_filters + 2`` Mel-spaced edge points.

    Points are equally spaced in Mel between ``low_freq`` and ``high_freq`` and
    mapped to bins with ``floor(hz / sample_rate * nfft)``.
    """
    low_mel = hz_to_mel(low_freq)
    high_mel = hz_to_mel(high_freq)
    i = np.arange(num_filters + 2, dtype=np.float64)
    mel_points = low_mel + (i * (high_mel - low_mel)) / (num_filters + 1)
    hz_points = mel_to_hz(mel_points)
    return np.floor((hz_points / sample_rate) * nfft).astype(np.int64)


def create_mel_filterbank(
    num_filters: int,
    nfft: int,
    sample_rate: float,
    low_freq: float = 0.0,
    high_freq: float | None = None,
) -> np.ndarray:
    """Build a triangular Mel filter bank.

    Filter ``m`` (1-indexed) rises linearly from 0 at ``bin[m-1]`` to 1 at
    ``bin[m]`` and falls back to 0 at ``bin[m+1]``. When two adjacent edge
    bins coincide the corresponding slope is empty, so the filter has no
    weight on that segment.

    Parameters
    ----------
    num_filters : int
        Number of triangular filters (>= 1).
    nfft : int
        FFT size, power of two >= 2.
    sample_rate : float
        Sampling rate in Hz.
    low_freq : float
        Lower edge in Hz (default 0).
    high_freq : float or None
        Upper edge in Hz; None means Nyquist (``sample_rate / 2``).

    Returns
    -------
    np.ndarray
        Array of shape ``(num_filters, nfft // 2 + 1)`` with non-negative weights.
    """
    if high_freq is None:
        high_freq = sample_rate / 2
    _validate_params(num_filters, nfft, sample_rate, low_freq, high_freq)

    bins = filter_bin_points(num_filters, nfft, sample_rate, low_freq, high_freq)
    num_bins = nfft // 2 + 1
    filters = np.zeros((num_filters, num_bins), dtype=np.float64)

    for m in range(1, num_filters + 1):
        left, center, right = int(bins[m - 1]), int(bins[m]), int(bins[m + 1])
        if center > left:
            k = np.arange(left, min(center, num_bins))
            filters[m - 1, k] = (k - left) / (center - left)
        if right > center:
            k = np.arange(center, min(right, num_bins))
            filters[m - 1, k] = (right - k) / (right - center)
    return filters


@lru_cache(maxsize=16)
def get_mel_filterbank(
    num_filters: int,
    nfft: int,
    sample_rate: float,
    low_freq: float = 0.0,
    high_freq: float | None = None,
) -> np.ndarray:
    """Cached, read-only variant of :func:`create_mel_filterbank`.

    One filter bank is built per parameter set and shared across extraction
    calls (and threads); the returned array must not be modified.
    """
    filters = create_mel_filterbank(num_filters, nfft, sample_rate, low_freq, high_freq)
    filters.setflags(write=False)
    logger.debug(
        "Built Mel filter bank: %d filters x %d bins (sr=%s, %s-%s Hz)",
        filters.shape[0],
        filters.shape[1],
        sample_rate,
        low_freq,
        sample_rate / 2 if high_freq is None else high_freq,
    )
    return filters
