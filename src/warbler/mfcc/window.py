"""Analysis windows."""

from __future__ import annotations

import numpy as np

from .errors import InvalidFrameLength


def hamming_window(frame, dtype=np.float64) -> np.ndarray:
    """Multiply a frame by the Hamming window ``0.54 - 0.46*cos(2*pi*n/(N-1))``.

    Returns a new array; the input is not modified. ``dtype`` sets the
    precision of the result (the frame pipeline uses float32).

    Raises:
        InvalidFrameLength: If the frame has fewer than 2 samples.
    """
    x = np.asarray(frame, dtype=np.float64)
    N = x.shape[0]
    if N < 2:
        raise InvalidFrameLength(f"Hamming window needs at least 2 samples, got {N}")
    n = np.arange(N, dtype=np.float64)
    coeffs = 0.54 - 0.46 * np.cos((2 * np.pi * n) / (N - 1))
    return (x * coeffs).astype(dtype, copy=False)
