"""
Coordinate transformations for the lunar position

Conversions between the spherical and rectangular coordinates of the
ELP2000 frame (inertial mean ecliptic of date, longitude measured from
the departure point), and rotations to the mean ecliptic and equinox of
J2000 and to the FK5 equatorial frame.

References:
    M. Chapront-Touze, J. Chapront and G. Francou, "Lunar solution ELP
        version ELP 2000-82B", Observatoire de Paris, pp. 10-11.
    J. Laskar, "New formulas for the precession, valid over 10000
        years", Astronomy and Astrophysics, 157, (1986).

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np

from ..math import ARCSEC_CIRCLE, asec2rad, normalize_angle, polynomial_sum, rad2asec

__all__ = [
    'SphericalPosition',
    'RectangularPosition',
    'spherical_to_rectangular',
    'rectangular_to_spherical',
    'precession_angles',
    'ecliptic_to_J2000_matrix',
    'ecliptic_of_date_to_J2000',
    'FK5_MATRIX',
    'J2000_to_FK5',
]

# Laskar precession quantities P(t)/t and Q(t)/t, powers of t up to t^4
_P = np.array([0.10180391e-4, 0.47020439e-6, -0.5417367e-9,
               -0.2507948e-11, 0.463486e-14])
_Q = np.array([-0.113469002e-3, 0.12372674e-6, 0.1265417e-8,
               -0.1371808e-11, -0.320334e-14])

# Mean ecliptic and equinox J2000 to FK5 mean equator and equinox J2000
FK5_MATRIX = np.array([
    [1.0, 0.000000437913, -0.000000189859],
    [-0.000000477299, 0.917482137607, -0.397776981701],
    [0.0, 0.397776981701, 0.917482137607],
])
FK5_MATRIX.setflags(write=False)


class SphericalPosition(NamedTuple):
    """Longitude and latitude (arcseconds), distance (km)"""
    longitude: np.ndarray
    latitude: np.ndarray
    distance: np.ndarray


class RectangularPosition(NamedTuple):
    """Rectangular coordinates (km)"""
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray


def spherical_to_rectangular(position: SphericalPosition) -> RectangularPosition:
    """
    Convert spherical coordinates to rectangular coordinates

    Parameters
    ----------
    position : SphericalPosition
        Longitude, latitude (arcseconds) and distance (km)

    Returns
    -------
    RectangularPosition
        x, y, z (km) in the same frame
    """
    lon = asec2rad(position.longitude)
    lat = asec2rad(position.latitude)
    r = np.asarray(position.distance, dtype=np.float64)

    cos_lat = np.cos(lat)
    x = r * cos_lat * np.cos(lon)
    y = r * cos_lat * np.sin(lon)
    z = r * np.sin(lat)
    return RectangularPosition(x, y, z)


def rectangular_to_spherical(position: RectangularPosition) -> SphericalPosition:
    """
    Convert rectangular coordinates to spherical coordinates

    Parameters
    ----------
    position : RectangularPosition
        x, y, z (km)

    Returns
    -------
    SphericalPosition
        Longitude in [0, 1296000) and latitude (arcseconds), distance (km)
    """
    x, y, z = (np.asarray(c, dtype=np.float64) for c in position)
    rho = np.hypot(x, y)
    longitude = normalize_angle(rad2asec(np.arctan2(y, x)), circle=ARCSEC_CIRCLE)
    latitude = rad2asec(np.arctan2(z, rho))
    distance = np.hypot(rho, z)
    return SphericalPosition(longitude, latitude, distance)


def precession_angles(t: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Laskar precession quantities P and Q

    Parameters
    ----------
    t : np.ndarray
        Julian centuries from J2000.0

    Returns
    -------
    P, Q : np.ndarray
        Dimensionless precession quantities, both zero at t = 0
    """
    t = np.asarray(t, dtype=np.float64)
    P = polynomial_sum(_P, t) * t
    Q = polynomial_sum(_Q, t) * t
    return P, Q


def ecliptic_to_J2000_matrix(t: np.ndarray) -> np.ndarray:
    """
    Rotation matrix from the ELP2000 frame of date to the mean ecliptic
    and equinox of J2000

    Parameters
    ----------
    t : np.ndarray
        Julian centuries from J2000.0

    Returns
    -------
    np.ndarray
        Rotation matrices, shape (3, 3) + t.shape
    """
    P, Q = precession_angles(t)
    s = np.sqrt(1.0 - P * P - Q * Q)
    return np.array([
        [1.0 - 2.0 * P * P, 2.0 * P * Q, 2.0 * P * s],
        [2.0 * P * Q, 1.0 - 2.0 * Q * Q, -2.0 * Q * s],
        [-2.0 * P * s, 2.0 * Q * s, 1.0 - 2.0 * P * P - 2.0 * Q * Q],
    ])


def _apply(matrix: np.ndarray, position: RectangularPosition) -> RectangularPosition:
    x, y, z = (np.asarray(c, dtype=np.float64) for c in position)
    m = matrix if matrix.ndim > 2 else matrix.reshape(3, 3, *([1] * x.ndim))
    X = m[0, 0] * x + m[0, 1] * y + m[0, 2] * z
    Y = m[1, 0] * x + m[1, 1] * y + m[1, 2] * z
    Z = m[2, 0] * x + m[2, 1] * y + m[2, 2] * z
    return RectangularPosition(X, Y, Z)


def ecliptic_of_date_to_J2000(
    position: RectangularPosition,
    t: np.ndarray,
) -> RectangularPosition:
    """
    Rotate rectangular coordinates from the ELP2000 frame to the mean
    ecliptic and equinox of J2000

    Parameters
    ----------
    position : RectangularPosition
        x, y, z (km) in the ELP2000 frame
    t : np.ndarray
        Julian centuries from J2000.0, broadcastable with the position

    Returns
    -------
    RectangularPosition
        x, y, z (km) in the mean ecliptic and equinox J2000
    """
    return _apply(ecliptic_to_J2000_matrix(t), position)


def J2000_to_FK5(position: RectangularPosition) -> RectangularPosition:
    """
    Rotate rectangular coordinates from the mean ecliptic and equinox of
    J2000 to the FK5 mean equator and equinox of J2000
    """
    return _apply(FK5_MATRIX, position)
