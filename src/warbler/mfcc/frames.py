"""Frame pipeline: waveform -> per-frame MFCC matrix."""

from __future__ import annotations

import logging
import math
import numbers

import numpy as np

from .config import MfccConfig
from .dct import dct
from .fft import fft, power_spectrum
from .filterbank import get_mel_filterbank
from .window import hamming_window

logger = logging.getLogger(__name__)

LOG_EPS = 1e-8


def _validate_audio(samples, sample_rate) -> tuple[np.ndarray, int]:
    """Validate and normalize a waveform. Empty waveforms are allowed."""
    if isinstance(sample_rate, bool) or not isinstance(sample_rate, numbers.Real):
        raise TypeError(f"sample_rate must be a number, got {type(sample_rate).__name__}")
    if not math.isfinite(sample_rate) or sample_rate <= 0 or int(sample_rate) != sample_rate:
        raise ValueError(f"sample_rate must be a positive integer, got {sample_rate}")
    y = np.asarray(samples)
    if y.dtype.kind not in "iuf":
        raise TypeError(f"samples must be real numbers, got dtype {y.dtype}")
    if y.ndim != 1:
        raise ValueError(f"samples must be 1-D, got shape {y.shape}")
    y = y.astype(np.float64, copy=False)
    if not np.all(np.isfinite(y)):
        raise ValueError("samples contain non-finite values")
    return y, int(sample_rate)


def frame_starts(num_samples: int, frame_size: int, hop_size: int) -> range:
    """Start index of every analysis frame.

    Frames start at 0, hop, 2*hop, ... while ``start < num_samples - frame_size``.
    """
    if hop_size < 1:
        raise ValueError(f"hop_size must be >= 1, got {hop_size}")
    return range(0, max(num_samples - frame_size, 0), hop_size)


def compute_mfcc_frames(samples, sample_rate, config: MfccConfig) -> np.ndarray:
    """Compute static MFCCs for each analysis frame.

    Per frame: Hamming window, FFT, power spectrum over bins ``0..nfft/2``,
    Mel filter energies, ``ln(energy + 1e-8)``, DCT-II.

    Args:
        samples: Mono waveform, amplitudes roughly in [-1, 1].
        sample_rate: Sampling rate in Hz (positive integer).
        config: Frame and filter parameters.

    Returns:
        Array of shape ``(num_frames, config.mfcc_count)``. ``num_frames`` is 0
        when the waveform is not longer than one frame.
    """
    y, sr = _validate_audio(samples, sample_rate)
    nfft = config.nfft
    filters = get_mel_filterbank(
        config.num_filters, nfft, sr, config.low_freq, config.high_freq
    )

    starts = frame_starts(y.shape[0], config.frame_size, config.hop_size)
    mfcc_frames = np.zeros((len(starts), config.mfcc_count), dtype=np.float64)
    for i, start in enumerate(starts):
        frame = y[start : start + config.frame_size]
        windowed = hamming_window(frame, dtype=np.float32)
        power = power_spectrum(fft(windowed), nfft)
        energies = np.log(filters @ power + LOG_EPS)
        mfcc_frames[i] = dct(energies, config.mfcc_count)

    logger.debug(
        "Computed %d MFCC frame(s) from %d samples at %d Hz",
        mfcc_frames.shape[0],
        y.shape[0],
        sr,
    )
    return mfcc_frames
