"""
pyELP2000.math - Angle and unit utilities

Shared helpers for the argument evaluator, the series engine and the
frame rotations: polynomial evaluation, angle normalisation and unit
conversion.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    'ARCSEC_CIRCLE',
    'ARCSEC_TO_RAD',
    'DEG_TO_RAD',
    'asec2rad',
    'rad2asec',
    'dms2asec',
    'polynomial_sum',
    'polynomial_add',
    'normalize_angle',
]

# Arcseconds in a full circle
ARCSEC_CIRCLE = 1296000.0
ARCSEC_TO_RAD = np.pi / 648000.0  # Arcseconds to radians
DEG_TO_RAD = np.pi / 180.0  # Degrees to radians


def asec2rad(x: np.ndarray) -> np.ndarray:
    """
    Convert angles from arcseconds to radians

    Parameters
    ----------
    x : np.ndarray
        Angle (arcseconds)

    Returns
    -------
    np.ndarray
        Angle (radians)
    """
    return np.asarray(x, dtype=np.float64) * ARCSEC_TO_RAD


def rad2asec(x: np.ndarray) -> np.ndarray:
    """
    Convert angles from radians to arcseconds

    Parameters
    ----------
    x : np.ndarray
        Angle (radians)

    Returns
    -------
    np.ndarray
        Angle (arcseconds)
    """
    return np.asarray(x, dtype=np.float64) / ARCSEC_TO_RAD


def dms2asec(degrees: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Sexagesimal angle to arcseconds"""
    return 3600.0 * degrees + 60.0 * minutes + seconds


def polynomial_sum(coefficients: np.ndarray, t: np.ndarray) -> np.ndarray:
    """
    Compute polynomial sum using Horner's method

    Parameters
    ----------
    coefficients : np.ndarray
        Coefficient array [c0, c1, c2, ...]
    t : np.ndarray
        Time variable

    Returns
    -------
    np.ndarray
        c0 + c1*t + c2*t^2 + ...

    Notes
    -----
    Uses Horner's method: ((c3*t + c2)*t + c1)*t + c0, starting from the
    highest non-zero coefficient so that infinite t stays infinite
    """
    t = np.asarray(t, dtype=np.float64)
    coefficients = np.trim_zeros(np.asarray(coefficients, dtype=np.float64), 'b')
    if len(coefficients) == 0:
        return np.zeros_like(t)
    result = np.full_like(t, coefficients[-1])
    for c in reversed(coefficients[:-1]):
        result = result * t + c
    return result


def polynomial_add(*polynomials: np.ndarray) -> np.ndarray:
    """
    Add polynomial coefficient arrays of different degree

    Parameters
    ----------
    *polynomials : np.ndarray
        Coefficient arrays [c0, c1, c2, ...]

    Returns
    -------
    np.ndarray
        Coefficients of the sum, padded to the highest degree
    """
    degree = max(len(p) for p in polynomials)
    result = np.zeros(degree)
    for p in polynomials:
        result[:len(p)] += p
    return result


def normalize_angle(theta: np.ndarray, circle: float = 360.0) -> np.ndarray:
    """
    Normalize an angle to a single rotation

    Parameters
    ----------
    theta : float or np.ndarray
        Angle to normalize
    circle : float, default 360.0
        Circle of the angle (360.0 for degrees, 2*pi for radians,
        1296000.0 for arcseconds)

    Returns
    -------
    np.ndarray
        Normalized angle in range [0, circle)
    """
    result = np.mod(theta, circle)
    # tiny negative angles round up to the full circle
    return np.where(result >= circle, 0.0, result)[()]

