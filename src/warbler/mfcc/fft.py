"""Recursive radix-2 FFT for real-valued frames."""

from __future__ import annotations

from functools import lru_cache
from typing import NamedTuple

import numpy as np

from .errors import InvalidInputLength


class Spectrum(NamedTuple):
    """Complex spectrum stored as separate real and imaginary parts."""

    real: np.ndarray
    imag: np.ndarray


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


@lru_cache(maxsize=32)
def _twiddles(N: int) -> tuple[np.ndarray, np.ndarray]:
    """cos/sin of -2*pi*k/N for k in [0, N/2), read-only."""
    k = np.arange(N // 2, dtype=np.float64)
    angle = (-2 * np.pi * k) / N
    cos = np.cos(angle)
    sin = np.sin(angle)
    cos.setflags(write=False)
    sin.setflags(write=False)
    return cos, sin


def _fft_recursive(x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Transform along the last axis; leading axes are independent signals."""
    N = x.shape[-1]
    if N == 1:
        return x.copy(), np.zeros_like(x)

    # even and odd halves recurse together as one batch
    halves = np.stack((x[..., 0::2], x[..., 1::2]))
    sub_real, sub_imag = _fft_recursive(halves)
    even_real, odd_real = sub_real[0], sub_real[1]
    even_imag, odd_imag = sub_imag[0], sub_imag[1]

    # odd[k] * e^(-j*2*pi*k/N)
    cos, sin = _twiddles(N)
    tw_real = odd_real * cos - odd_imag * sin
    tw_imag = odd_real * sin + odd_imag * cos

    real = np.concatenate((even_real + tw_real, even_real - tw_real), axis=-1)
    imag = np.concatenate((even_imag + tw_imag, even_imag - tw_imag), axis=-1)
    return real, imag


def fft(signal) -> Spectrum:
    """Compute the FFT of a real-valued signal.

    Classic decimation-in-time: split into even/odd samples, recurse, then
    combine with twiddle factors. Output bins are in natural order.

    Parameters
    ----------
    signal : array-like
        Real-valued 1-D input. Length must be 0 or a power of two.

    Returns
    -------
    Spectrum
        ``(real, imag)`` float64 arrays with the same length as ``signal``.

    Raises
    ------
    InvalidInputLength
        If the length is not a power of two.
    """
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {x.shape}")
    N = x.shape[0]
    if N == 0:
        return Spectrum(np.zeros(0, dtype=np.float64), np.zeros(0, dtype=np.float64))
    if not is_power_of_two(N):
        raise InvalidInputLength(f"Signal length is not a power of 2: {N}")
    real, imag = _fft_recursive(x)
    return Spectrum(real, imag)


def power_spectrum(spectrum: Spectrum, nfft: int) -> np.ndarray:
    """Periodogram estimate ``(re^2 + im^2) / nfft`` for bins 0..nfft/2 inclusive."""
    half = nfft // 2 + 1
    re = spectrum.real[:half]
    im = spectrum.imag[:half]
    return (re * re + im * im) / nfft
