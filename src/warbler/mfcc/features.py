"""Feature extraction entry points and frame aggregation."""

from __future__ import annotations

import logging

import numpy as np

from .config import MfccConfig, Preset, get_config
from .errors import InsufficientAudio
from .frames import compute_mfcc_frames
from .temporal import stack_temporal_features

logger = logging.getLogger(__name__)


def aggregate_features(matrix, width: int | None = None) -> np.ndarray:
    """Mean of each column over all frames.

    With zero frames the result is a zero vector of ``width`` (or of the
    matrix's column count when ``width`` is None); this never divides by zero.
    """
    m = np.asarray(matrix, dtype=np.float64)
    if m.ndim == 1 and m.size == 0:
        m = m.reshape(0, width or 0)
    if m.ndim != 2:
        raise ValueError(f"feature matrix must be 2-D, got shape {m.shape}")
    num_frames, num_cols = m.shape
    if width is None:
        width = num_cols
    if num_frames == 0:
        return np.zeros(width, dtype=np.float64)
    if num_cols != width:
        raise ValueError(f"feature matrix has {num_cols} column(s), expected {width}")
    return m.sum(axis=0) / max(1, num_frames)


def compute_feature_matrix(
    samples,
    sample_rate,
    preset: Preset | str | MfccConfig = Preset.SIMPLE,
) -> np.ndarray:
    """Per-frame features for a preset.

    ``simple`` gives static MFCCs. ``enhanced`` gives
    ``[CMN MFCC | delta | delta-delta]`` per frame.

    Returns:
        Array of shape ``(num_frames, config.feature_dim)``.
    """
    config = get_config(preset)
    mfcc_frames = compute_mfcc_frames(samples, sample_rate, config)
    if not config.temporal:
        return mfcc_frames
    return stack_temporal_features(mfcc_frames, config.delta_window)


def extract_features(
    samples,
    sample_rate,
    preset: Preset | str | MfccConfig = Preset.SIMPLE,
    *,
    strict: bool = False,
) -> np.ndarray:
    """Extract one fixed-length feature vector from a waveform.

    Args:
        samples: Mono waveform, amplitudes roughly in [-1, 1].
        sample_rate: Sampling rate in Hz (positive integer).
        preset: ``"simple"`` (13-D), ``"enhanced"`` (60-D), a Preset, or an
            explicit MfccConfig.
        strict: Raise InsufficientAudio for recordings shorter than one
            frame instead of returning a zero vector.

    Returns:
        Float64 vector of length ``config.feature_dim``.

    Raises:
        InsufficientAudio: Only with ``strict=True``.
    """
    config = get_config(preset)
    matrix = compute_feature_matrix(samples, sample_rate, config)
    if matrix.shape[0] == 0:
        num_samples = len(samples)
        if strict:
            raise InsufficientAudio(num_samples, config.frame_size)
        logger.warning(
            "Recording too short for one %d-sample frame (%d samples); returning zeros",
            config.frame_size,
            num_samples,
        )
    return aggregate_features(matrix, config.feature_dim)


def extract_simple_mfcc(samples, sample_rate) -> np.ndarray:
    """13-D mean MFCC vector."""
    return extract_features(samples, sample_rate, Preset.SIMPLE)


def extract_enhanced_mfcc(samples, sample_rate) -> np.ndarray:
    """60-D vector: mean static (0-19), delta (20-39) and delta-delta (40-59) MFCCs."""
    return extract_features(samples, sample_rate, Preset.ENHANCED)
