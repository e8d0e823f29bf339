import cmath
import math

import numpy as np
import pytest

from felsim.constants import EEV, VACIMP
from felsim.gausshermite import FieldSlice, hermite, load_gauss


def _power(field, slice_, dgrid, ngrid):
    dxy = 2 * dgrid / (ngrid - 1)
    k = 2 * math.pi / slice_.wavelength * slice_.harm
    return float(np.sum(np.abs(field) ** 2)) * dxy * dxy * EEV**2 / (VACIMP * k * k)


def test_hermite_low_orders():
    assert hermite(0.3, 0) == 1
    assert hermite(0.3, 1) == pytest.approx(0.6)


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_hermite_recurrence(n):
    x = 0.7
    assert hermite(x, n + 1) == pytest.approx(2 * x * hermite(x, n) - 2 * n * hermite(x, n - 1))


def test_hermite_accepts_arrays():
    xs = np.array([-1.0, 0.2, 1.5])
    result = hermite(xs, 3)
    assert np.allclose(result, [hermite(v, 3) for v in xs])


@pytest.mark.parametrize("nx,ny,z0", [(0, 0, 0.0), (1, 2, 0.0), (0, 0, 5.0)])
def test_power_is_conserved(nx, ny, z0):
    slice_ = FieldSlice(wavelength=1e-6, power=1e6, z0=z0, w0=1e-4, nx=nx, ny=ny)
    dgrid, ngrid = 5e-4, 161
    field = load_gauss(slice_, dgrid, ngrid)
    assert field.shape == (ngrid, ngrid)
    assert _power(field, slice_, dgrid, ngrid) == pytest.approx(1e6, rel=1e-3)


def test_centre_phase_matches_slice_phase():
    slice_ = FieldSlice(wavelength=1e-6, power=1e3, w0=1e-4, phase=0.7)
    field = load_gauss(slice_, 5e-4, 101)
    assert cmath.phase(field[50, 50]) == pytest.approx(0.7)


def test_fundamental_mode_is_symmetric():
    slice_ = FieldSlice(wavelength=1e-6, power=1e3, w0=1e-4)
    field = load_gauss(slice_, 5e-4, 51)
    assert np.allclose(field, field.T)
    assert np.allclose(field, field[::-1, ::-1])


def test_zero_power_gives_zero_field():
    field = load_gauss(FieldSlice(wavelength=1e-6, power=0.0), 1e-3, 21)
    assert field.shape == (21, 21)
    assert float(np.max(np.abs(field))) == 0.0


def test_tilt_keeps_intensity():
    base = FieldSlice(wavelength=1e-6, power=1e3, w0=1e-4)
    tilted = FieldSlice(wavelength=1e-6, power=1e3, w0=1e-4, xangle=1e-4)
    assert np.allclose(np.abs(load_gauss(base, 5e-4, 41)), np.abs(load_gauss(tilted, 5e-4, 41)))