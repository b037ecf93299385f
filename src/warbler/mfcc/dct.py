"""Type-II discrete cosine transform (unnormalized)."""

from __future__ import annotations

import numpy as np


def dct(vector, num_coeffs: int) -> np.ndarray:
    """Return the first ``num_coeffs`` DCT-II coefficients of ``vector``.

    ``result[k] = sum_n vector[n] * cos(pi * k * (2n + 1) / (2N))``. No
    orthonormal scaling is applied. ``num_coeffs`` may exceed ``N``; the
    extra coefficients follow the same formula.
    """
    v = np.asarray(vector, dtype=np.float64)
    if num_coeffs < 0:
        raise ValueError(f"num_coeffs must be >= 0, got {num_coeffs}")
    N = v.shape[0]
    if N == 0:
        return np.zeros(num_coeffs, dtype=np.float64)
    k = np.arange(num_coeffs, dtype=np.float64)[:, None]
    n = np.arange(N, dtype=np.float64)[None, :]
    basis = np.cos((np.pi * k * (2 * n + 1)) / (2 * N))
    return basis @ v
