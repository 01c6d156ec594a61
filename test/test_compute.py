"""
Geocentric lunar position tests

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

import numpy as np
import pytest

import pyELP2000
from pyELP2000.astro.arguments import PRECESSION
from pyELP2000.astro.ephemeris import (
    FK5_MATRIX,
    ecliptic_to_J2000_matrix,
    rectangular_to_spherical,
)
from pyELP2000.math import ARCSEC_CIRCLE

# Meeus, Astronomical Algorithms, example 47.a (1992 April 12, 0h TD)
_T_MEEUS = (2448724.5 - 2451545.0) / 36525.0


def _angle_difference(a, b):
    """Signed difference of two angles in arcseconds"""
    return np.mod(a - b + ARCSEC_CIRCLE / 2.0, ARCSEC_CIRCLE) - ARCSEC_CIRCLE / 2.0


def test_reference_position():
    """Meeus example 47.a with the bundled table"""
    lon, lat, r = pyELP2000.geocentric_moon_position(_T_MEEUS)
    # longitude of date referred to the departure point
    exp = 133.162655 * 3600.0 - PRECESSION * _T_MEEUS
    assert abs(_angle_difference(lon, exp)) < 5.0
    assert lat == pytest.approx(-3.229126 * 3600.0, abs=5.0)
    assert r == pytest.approx(368409.7, abs=2.0)


def test_scalar_output():
    """Scalar time gives scalars"""
    position = pyELP2000.geocentric_moon_position(0.0)
    assert isinstance(position, pyELP2000.SphericalPosition)
    for value in position:
        assert np.ndim(value) == 0
    x, y, z = pyELP2000.geocentric_moon_position_FK5(0.0)
    assert np.ndim(x) == 0


@pytest.mark.parametrize("shape", [(1,), (7,), (2, 3)])
def test_array_output(shape):
    """Array time gives arrays of the same shape"""
    t = np.linspace(-0.5, 0.5, int(np.prod(shape))).reshape(shape)
    for func in (pyELP2000.geocentric_moon_position,
                 pyELP2000.geocentric_moon_position_rect,
                 pyELP2000.geocentric_moon_position_of_J2000,
                 pyELP2000.geocentric_moon_position_FK5):
        for value in func(t):
            assert value.shape == shape
    # elementwise agreement with scalar calls
    lon, lat, r = pyELP2000.geocentric_moon_position(t)
    scalar = pyELP2000.geocentric_moon_position(float(t.flat[-1]))
    assert lon.flat[-1] == pytest.approx(scalar.longitude)
    assert r.flat[-1] == pytest.approx(scalar.distance)


def test_J2000_distance():
    """Distance at J2000 between perigee and apogee"""
    lon, lat, r = pyELP2000.geocentric_moon_position(0.0)
    assert 356000.0 < r < 407000.0
    assert 0.0 <= lon < ARCSEC_CIRCLE
    assert abs(lat) < 5.3 * 3600.0


def test_mean_distance():
    """Time average of the distance over several years"""
    t = np.linspace(0.0, 0.2, 20000)
    _, _, r = pyELP2000.geocentric_moon_position(t)
    assert np.mean(r) == pytest.approx(385000.0, abs=1000.0)
    assert r.min() > 356000.0
    assert r.max() < 407000.0


def test_continuity():
    """No jumps across the longitude wraparound"""
    # hourly samples over two months
    t = np.arange(0.0, 60.0, 1.0 / 24.0) / 36525.0
    x, y, z = pyELP2000.geocentric_moon_position_rect(t)
    step = np.sqrt(np.diff(x)**2 + np.diff(y)**2 + np.diff(z)**2)
    # the Moon moves about 3700 km per hour
    assert step.max() < 4500.0
    lon, _, _ = pyELP2000.geocentric_moon_position(t)
    assert np.any(np.diff(lon) < -ARCSEC_CIRCLE / 2.0)


def test_orbital_period_scaling():
    """Mean motion of the longitude around t = -1, 0, 1"""
    # one hundred sidereal months, sampled every two hours
    month = 27.321661 / 36525.0
    for t0 in (-1.0, 0.0, 1.0):
        t = t0 + np.arange(0.0, 100.0 * 27.321661, 1.0 / 12.0) / 36525.0
        lon, _, _ = pyELP2000.geocentric_moon_position(t)
        unwrapped = np.unwrap(lon * np.pi / 648000.0)
        turns = (unwrapped[-1] - unwrapped[0]) / (2.0 * np.pi)
        months = (t[-1] - t[0]) / month
        assert turns == pytest.approx(months, rel=1e-3)


def test_rectangular_consistency():
    """Rectangular coordinates convert back to the spherical ones"""
    t = np.linspace(-1.0, 1.0, 25)
    position = pyELP2000.geocentric_moon_position(t)
    test = rectangular_to_spherical(pyELP2000.geocentric_moon_position_rect(t))
    assert np.allclose(_angle_difference(test.longitude, position.longitude), 0.0, atol=1e-6)
    assert np.allclose(test.latitude, position.latitude, atol=1e-6)
    assert np.allclose(test.distance, position.distance)


def test_frame_chain():
    """Each frame is a rotation of the previous one"""
    t = np.array([-0.7, 0.0, 0.4])
    rect = np.array(pyELP2000.geocentric_moon_position_rect(t))
    j2000 = np.array(pyELP2000.geocentric_moon_position_of_J2000(t))
    fk5 = np.array(pyELP2000.geocentric_moon_position_FK5(t))
    for i in range(len(t)):
        assert np.allclose(j2000[:, i], ecliptic_to_J2000_matrix(t[i]) @ rect[:, i])
        assert np.allclose(fk5[:, i], FK5_MATRIX @ j2000[:, i])
    # frames coincide at J2000
    assert np.allclose(j2000[:, 1], rect[:, 1])
    assert np.allclose(np.linalg.norm(fk5, axis=0), np.linalg.norm(rect, axis=0))


def test_tiers():
    """Lower tiers drop components"""
    full = pyELP2000.geocentric_moon_position(_T_MEEUS, tier='full')
    main = pyELP2000.geocentric_moon_position(_T_MEEUS, tier='main')
    # the Venus and figure terms are a few arcseconds
    assert 0.0 < abs(_angle_difference(full.longitude, main.longitude)) < 20.0
    assert full.distance == pytest.approx(main.distance)
    with pytest.raises(ValueError):
        pyELP2000.geocentric_moon_position(0.0, tier='complete')


def test_explicit_table():
    """An explicit table overrides the settings"""
    table = pyELP2000.load_bundled_table('main')
    with pyELP2000.settings_override(tier='full'):
        test = pyELP2000.geocentric_moon_position(_T_MEEUS, table=table)
    exp = pyELP2000.geocentric_moon_position(_T_MEEUS, tier='main')
    assert test.longitude == pytest.approx(exp.longitude)


def test_tables_loaded_once():
    """The table registry returns the same object"""
    a = pyELP2000.init_tables()
    b = pyELP2000.init_tables('full')
    assert a is b
    pyELP2000.clear_tables()
    assert pyELP2000.init_tables() is not a


def test_nan_time():
    """Non-finite time propagates"""
    lon, lat, r = pyELP2000.geocentric_moon_position(np.array([0.0, np.nan]))
    assert np.isfinite(r[0])
    assert np.isnan(lon[1])
    assert np.isnan(lat[1])
    assert np.isnan(r[1])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
