"""MFCC extraction presets.

Two presets are supported side by side:

- ``simple``: 13 MFCCs from 26 Mel filters (13-D feature vector).
- ``enhanced``: 20 MFCCs from 40 Mel filters, cepstral mean normalization,
  delta and delta-delta features (60-D feature vector).

Both use 2048-sample frames (also the FFT size) with a 512-sample hop and a
filter bank spanning 0 Hz to Nyquist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Preset(str, Enum):
    """Named feature-extraction parameter sets."""

    SIMPLE = "simple"
    ENHANCED = "enhanced"


@dataclass(frozen=True)
class MfccConfig:
    """Frame pipeline and post-processing parameters."""

    # Framing (frame_size is also the FFT size and must be a power of two)
    frame_size: int = 2048
    hop_size: int = 512

    # Cepstrum
    mfcc_count: int = 13
    num_filters: int = 26

    # Filter bank edges; None means sample_rate / 2
    low_freq: float = 0.0
    high_freq: float | None = None

    # Temporal post-processing (CMN + delta + delta-delta)
    temporal: bool = False
    delta_window: int = 2

    @property
    def nfft(self) -> int:
        """FFT size."""
        return self.frame_size

    @property
    def feature_dim(self) -> int:
        """Width of one feature frame / the aggregated feature vector."""
        return self.mfcc_count * 3 if self.temporal else self.mfcc_count


PRESETS: dict[Preset, MfccConfig] = {
    Preset.SIMPLE: MfccConfig(mfcc_count=13, num_filters=26, temporal=False),
    Preset.ENHANCED: MfccConfig(mfcc_count=20, num_filters=40, temporal=True),
}

PRESET_NAMES = frozenset(p.value for p in Preset)


def resolve_preset(preset: Preset | str) -> Preset:
    """Return the Preset for an enum member or its (case-insensitive) name."""
    if isinstance(preset, Preset):
        return preset
    try:
        return Preset(str(preset).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown preset: {preset}. Use one of: {sorted(PRESET_NAMES)}"
        ) from None


def get_config(preset: Preset | str | MfccConfig) -> MfccConfig:
    """Resolve a preset (or pass through an explicit MfccConfig)."""
    if isinstance(preset, MfccConfig):
        return preset
    return PRESETS[resolve_preset(preset)]
