"""Gauss-Hermite radiation modes on a transverse grid."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass

import numpy as np

from .constants import EEV, VACIMP


@dataclass
class FieldSlice:
    """Parameters of one slice of a Gauss-Hermite radiation field."""

    wavelength: float = 1e-10
    power: float = 0.0
    z0: float = 0.0
    w0: float = 100e-6
    phase: float = 0.0
    xcen: float = 0.0
    ycen: float = 0.0
    xangle: float = 0.0
    yangle: float = 0.0
    nx: int = 0
    ny: int = 0
    harm: int = 1


def hermite(x, n: int):
    """Physicists' Hermite polynomial H_n at x (scalar or array)."""
    if n <= 0:
        return x * 0 + 1.0
    prev = x * 0 + 1.0
    current = 2 * x
    for k in range(2, n + 1):
        prev, current = current, 2 * x * current - 2 * (k - 1) * prev
    return current


def load_gauss(slice: FieldSlice, dgrid: float, ngrid: int) -> np.ndarray:
    """Return the complex field of one slice on an ngrid x ngrid grid.

    The grid spans -dgrid..dgrid in both planes; element [iy, ix] holds the
    field at row iy and column ix. The field is normalised so that the
    integrated intensity matches the slice power.
    """
    k = 2 * math.pi / slice.wavelength * slice.harm
    z0 = -slice.z0
    w0 = slice.w0
    zr = w0 * w0 * k * 0.5
    f0 = math.sqrt(k * zr / (zr * zr + z0 * z0))

    qz = complex(-z0, zr)
    coef = 1j * 0.5 * k / qz

    unit = math.sqrt(slice.power * VACIMP) * k / EEV
    norm = f0 / math.sqrt(
        math.pi * math.factorial(max(slice.nx, 0)) * math.factorial(max(slice.ny, 0))
        * (1 << (slice.nx + slice.ny))
    )
    zscale = unit * norm * cmath.exp(1j * slice.phase)

    dxy = 2.0 * dgrid / (ngrid - 1.0)
    steps = np.arange(ngrid) * dxy
    x = steps - (dgrid + slice.xcen)
    y = steps - (dgrid + slice.ycen)

    hx = hermite(f0 * x, slice.nx)
    hy = hermite(f0 * y, slice.ny)
    kx = k * slice.xangle

    yy = y[:, np.newaxis]
    xx = x[np.newaxis, :]
    r2 = yy * yy + xx * xx
    # The tilt phase uses the horizontal angle in both planes.
    phi = 1j * (kx * yy + kx * xx)
    return zscale * np.exp(-coef * r2 + phi) * hx[np.newaxis, :] * hy[:, np.newaxis]