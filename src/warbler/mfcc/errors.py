"""Feature-extraction exception types for the project."""

from __future__ import annotations

from collections.abc import Sized


class FeatureError(Exception):
    """Base exception for feature-extraction errors."""


class InvalidInputLength(FeatureError, ValueError):
    """Raised when an FFT input length is not a power of two."""


class InvalidFrameLength(FeatureError, ValueError):
    """Raised when a frame is too short to be windowed."""


class InsufficientAudio(FeatureError):
    """Raised when a waveform is shorter than one analysis frame.

    The extraction functions only raise this when asked to (``strict=True``);
    by default a short recording produces an empty feature matrix and a zero
    feature vector.
    """

    def __init__(self, num_samples: int, frame_size: int) -> None:
        self.num_samples = num_samples
        self.frame_size = frame_size
        super().__init__(
            f"Recording too short: {num_samples} sample(s), "
            f"need more than {frame_size} for one analysis frame"
        )


class FeatureDimensionMismatch(FeatureError):
    """Raised when a feature vector does not have the width a consumer expects."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected}-D feature vector, got {actual}-D")


def ensure_feature_dim(vector: Sized, expected: int) -> None:
    """Raise FeatureDimensionMismatch if ``vector`` does not have ``expected`` entries.

    Args:
        vector: Feature vector (any sized sequence or 1-D array).
        expected: Width the downstream consumer was built for.

    Raises:
        FeatureDimensionMismatch: If the lengths differ.
    """
    actual = len(vector)
    if actual != expected:
        raise FeatureDimensionMismatch(expected, actual)
