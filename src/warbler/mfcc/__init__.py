"""MFCC feature extraction package."""

from .config import PRESETS, MfccConfig, Preset, get_config, resolve_preset
from .dct import dct
from .errors import (
    FeatureDimensionMismatch,
    FeatureError,
    InsufficientAudio,
    InvalidFrameLength,
    InvalidInputLength,
    ensure_feature_dim,
)
from .features import (
    aggregate_features,
    compute_feature_matrix,
    extract_enhanced_mfcc,
    extract_features,
    extract_simple_mfcc,
)
from .fft import Spectrum, fft, power_spectrum
from .filterbank import create_mel_filterbank, get_mel_filterbank, hz_to_mel, mel_to_hz
from .frames import compute_mfcc_frames
from .temporal import (
    apply_cepstral_mean_normalization,
    compute_delta_features,
    stack_temporal_features,
)
from .window import hamming_window

__all__ = [
    # Presets
    "PRESETS",
    "MfccConfig",
    "Preset",
    "get_config",
    "resolve_preset",
    # Errors
    "FeatureDimensionMismatch",
    "FeatureError",
    "InsufficientAudio",
    "InvalidFrameLength",
    "InvalidInputLength",
    "ensure_feature_dim",
    # DSP building blocks
    "Spectrum",
    "fft",
    "power_spectrum",
    "hamming_window",
    "hz_to_mel",
    "mel_to_hz",
    "create_mel_filterbank",
    "get_mel_filterbank",
    "dct",
    # Frame pipeline and post-processing
    "compute_mfcc_frames",
    "apply_cepstral_mean_normalization",
    "compute_delta_features",
    "stack_temporal_features",
    # Extraction
    "aggregate_features",
    "compute_feature_matrix",
    "extract_features",
    "extract_simple_mfcc",
    "extract_enhanced_mfcc",
]
