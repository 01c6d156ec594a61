"""
Fundamental arguments of the lunar theory ELP2000-82B

Mean longitudes of the Moon, its perigee and node, of the Earth-Moon
barycentre and its perihelion, and of the planets, as polynomials in
Julian centuries from J2000.0.  The Delaunay arguments D, l', l, F and
the mean longitude of date zeta are formed from them by exact polynomial
arithmetic, then evaluated and reduced to a single turn.

References:
    M. Chapront-Touze, J. Chapront and G. Francou, "Lunar solution ELP
        version ELP 2000-82B", Observatoire de Paris, (1985, 2001).
    J. L. Simon et al., "Numerical expressions for precession formulae
        and mean elements for the Moon and the planets", Astronomy and
        Astrophysics, 282, (1994).

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from ..math import (
    ARCSEC_CIRCLE,
    ARCSEC_TO_RAD,
    dms2asec,
    normalize_angle,
    polynomial_add,
    polynomial_sum,
)

__all__ = [
    'ARGUMENTS',
    'ARGUMENT_POLYNOMIALS',
    'MEAN_LONGITUDE',
    'PRECESSION',
    'FundamentalArguments',
    'fundamental_arguments',
    'argument_index',
]

# Lunar mean longitudes (arcseconds, powers of t up to t^4)
_W1 = np.array([dms2asec(218, 18, 59.95571), 1732559343.73604,
                -5.8883, 0.6604e-2, -0.3169e-4])
_W2 = np.array([dms2asec(83, 21, 11.67475), 14643420.2632,
                -38.2776, -0.45047e-1, 0.21301e-3])
_W3 = np.array([dms2asec(125, 2, 40.39816), -6967919.3622,
                6.3622, 0.7625e-2, -0.3586e-4])

# Earth-Moon barycentre and its perihelion
_EARTH = np.array([dms2asec(100, 27, 59.22059), 129597742.2758,
                   -0.0202, 0.9e-5, 0.15e-6])
_PERIHELION = np.array([dms2asec(102, 56, 14.42753), 1161.2283,
                        0.5327, -0.138e-3, 0.0])

# Planetary mean longitudes (linear)
_MERCURY = np.array([dms2asec(252, 15, 3.25986), 538101628.68898])
_VENUS = np.array([dms2asec(181, 58, 47.28305), 210664136.43355])
_MARS = np.array([dms2asec(355, 25, 59.78866), 68905077.59284])
_JUPITER = np.array([dms2asec(34, 21, 5.34212), 10925660.42861])
_SATURN = np.array([dms2asec(50, 4, 38.89694), 4399609.65932])
_URANUS = np.array([dms2asec(314, 3, 18.01841), 1542481.19393])
_NEPTUNE = np.array([dms2asec(304, 20, 55.19575), 786550.32074])

# Precession constant (arcseconds per century)
PRECESSION = 5029.0966

# Order of the argument vector used by every term record
ARGUMENTS: Tuple[str, ...] = (
    'zeta', 'D', "l'", 'l', 'F',
    'Me', 'V', 'T', 'Ma', 'J', 'S', 'U', 'N',
)

ARGUMENT_POLYNOMIALS: Dict[str, np.ndarray] = {
    # mean longitude of date, linear only in the theory
    'zeta': np.array([_W1[0], _W1[1] + PRECESSION]),
    'D': polynomial_add(_W1, -_EARTH, np.array([ARCSEC_CIRCLE / 2.0])),
    "l'": polynomial_add(_EARTH, -_PERIHELION),
    'l': polynomial_add(_W1, -_W2),
    'F': polynomial_add(_W1, -_W3),
    'Me': _MERCURY,
    'V': _VENUS,
    'T': _EARTH[:2],
    'Ma': _MARS,
    'J': _JUPITER,
    'S': _SATURN,
    'U': _URANUS,
    'N': _NEPTUNE,
}
for _coef in ARGUMENT_POLYNOMIALS.values():
    _coef.setflags(write=False)

# Mean longitude of the Moon referred to the departure point
MEAN_LONGITUDE = _W1
MEAN_LONGITUDE.setflags(write=False)

# Constants of the theory and their corrections fitted to DE200/LE200
ATH = 384747.9806743165  # km
A0 = 384747.9806448954  # km
AM = 0.074801329518  # ratio of mean motions n'/n
ALPHA = 0.002571881335
DTASM = 2.0 * ALPHA / (3.0 * AM)
DELNU = 0.55604 / _W1[1]  # relative correction to the mean motion
DELE = 0.01789 * ARCSEC_TO_RAD  # eccentricity
DELG = -0.08066 * ARCSEC_TO_RAD  # inclination
DELNP = -0.06424 / _W1[1]  # relative correction to n'
DELEP = -0.12879 * ARCSEC_TO_RAD  # solar eccentricity


def argument_index(name: str) -> int:
    """
    Position of a named argument in the argument vector

    Parameters
    ----------
    name : str
        Argument name (one of ARGUMENTS)

    Returns
    -------
    int
        Index into the argument vector
    """
    try:
        return ARGUMENTS.index(name)
    except ValueError:
        raise ValueError(
            f"Unknown argument: {name}. Supported: {list(ARGUMENTS)}"
        ) from None


@dataclass(frozen=True)
class FundamentalArguments:
    """
    Fundamental arguments evaluated at one or more instants

    Attributes
    ----------
    t : np.ndarray
        Julian centuries from J2000.0, shape (n,)
    full : np.ndarray
        Arguments from the complete polynomials, reduced to [0, 1296000)
        arcseconds, shape (13, n) in the order of ARGUMENTS
    linear : np.ndarray
        Arguments from the constant and linear terms only, reduced to
        [0, 1296000) arcseconds, shape (13, n)
    mean_longitude : np.ndarray
        Mean longitude W1 of the Moon, reduced to [0, 1296000)
        arcseconds, shape (n,)
    """
    t: np.ndarray
    full: np.ndarray
    linear: np.ndarray
    mean_longitude: np.ndarray

    def __getitem__(self, name: str) -> np.ndarray:
        return self.full[argument_index(name)]

    def radians(self, degree: Optional[int] = None) -> np.ndarray:
        """
        Argument vector in radians

        Parameters
        ----------
        degree : int, optional
            1 for the linear arguments used by the perturbation series,
            None for the complete polynomials of the main problem

        Returns
        -------
        np.ndarray
            Arguments (radians), shape (13, n)
        """
        if degree is None:
            return self.full * ARCSEC_TO_RAD
        if degree == 1:
            return self.linear * ARCSEC_TO_RAD
        raise ValueError(f"Unsupported argument degree: {degree}")

    @property
    def coefficients(self) -> Dict[str, np.ndarray]:
        """Defining polynomials of every argument (arcseconds)"""
        return ARGUMENT_POLYNOMIALS


def fundamental_arguments(t: np.ndarray) -> FundamentalArguments:
    """
    Compute the fundamental arguments of ELP2000-82B

    Parameters
    ----------
    t : float or np.ndarray
        Julian centuries from J2000.0, flattened to one dimension

    Returns
    -------
    FundamentalArguments
        Arguments reduced to a single turn (arcseconds), one column per
        element of t

    Notes
    -----
    Each argument is a fixed polynomial evaluated at t and reduced modulo
    a full turn.  Non-finite t propagates to non-finite arguments.
    """
    t = np.ravel(np.asarray(t, dtype=np.float64))

    full = np.empty((len(ARGUMENTS), len(t)))
    linear = np.empty((len(ARGUMENTS), len(t)))
    for i, name in enumerate(ARGUMENTS):
        coef = ARGUMENT_POLYNOMIALS[name]
        full[i] = normalize_angle(polynomial_sum(coef, t), circle=ARCSEC_CIRCLE)
        linear[i] = normalize_angle(polynomial_sum(coef[:2], t), circle=ARCSEC_CIRCLE)

    W1 = normalize_angle(polynomial_sum(MEAN_LONGITUDE, t), circle=ARCSEC_CIRCLE)

    return FundamentalArguments(t=t, full=full, linear=linear, mean_longitude=W1)
