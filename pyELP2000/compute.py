"""
pyELP2000.compute - Geocentric lunar position API

Geocentric position of the Moon from the semi-analytic lunar theory
ELP2000-82B, in spherical and rectangular coordinates of the ELP2000
frame, in rectangular coordinates of the mean ecliptic and equinox of
J2000, and in the FK5 equatorial frame.

Time is given in Julian centuries from J2000.0 (TDB),
t = (JD - 2451545.0) / 36525, as a scalar or an array.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np

from .astro.arguments import fundamental_arguments
from .astro.ephemeris import (
    RectangularPosition,
    SphericalPosition,
    J2000_to_FK5,
    ecliptic_of_date_to_J2000,
    spherical_to_rectangular,
)
from .astro.series import TermTable, spherical_coordinates
from .config import get_settings
from .io.tables import load_table, tier_groups

__all__ = [
    'init_tables',
    'clear_tables',
    'geocentric_moon_position',
    'geocentric_moon_position_rect',
    'geocentric_moon_position_of_J2000',
    'geocentric_moon_position_FK5',
]

# Global registry (each table is loaded only once)
_tables: Dict[Tuple[Optional[Path], str], TermTable] = {}
_lock = threading.Lock()


def init_tables(
    tier: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
) -> TermTable:
    """
    Initialise a term table (for explicit invocation)

    Parameters
    ----------
    tier : str, optional
        Precision tier ('main', 'perturbed', 'full'); default from settings
    directory : str or Path, optional
        Directory of native ELP2000-82B files; default from settings,
        the bundled truncated table if unset

    Returns
    -------
    TermTable
        Loaded table, shared by later calls with the same arguments
    """
    settings = get_settings()
    if tier is None:
        tier = settings.tier
    tier_groups(tier)
    if directory is None:
        directory = settings.directory
    if directory is not None:
        directory = Path(directory).expanduser().resolve()

    key = (directory, tier)
    with _lock:
        if key not in _tables:
            _tables[key] = load_table(tier, directory=directory)
        return _tables[key]


def clear_tables() -> None:
    """Drop every loaded term table"""
    with _lock:
        _tables.clear()


def _ensure_table(
    table: Optional[TermTable],
    tier: Optional[str],
    directory: Optional[Union[str, Path]],
) -> TermTable:
    """Explicit table if given, else load it if not already loaded"""
    if table is not None:
        return table
    return init_tables(tier, directory)


def _spherical(t, table: TermTable) -> Tuple[np.ndarray, SphericalPosition]:
    t = np.asarray(t, dtype=np.float64)
    arguments = fundamental_arguments(t.ravel())
    return arguments.t, SphericalPosition(*spherical_coordinates(arguments, table))


def _reshape(position, shape):
    # scalar time gives numpy scalars
    return type(position)(*(np.reshape(c, shape)[()] for c in position))


def geocentric_moon_position(
    t: Union[float, np.ndarray],
    tier: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
    table: Optional[TermTable] = None,
) -> SphericalPosition:
    """
    Geocentric spherical coordinates of the Moon in the ELP2000 frame

    Parameters
    ----------
    t : float or np.ndarray
        Julian centuries from J2000.0
    tier : str, optional
        Precision tier
    directory : str or Path, optional
        Directory of native ELP2000-82B files
    table : TermTable, optional
        Explicit term table (overrides tier and directory)

    Returns
    -------
    SphericalPosition
        longitude : [0, 1296000) arcseconds from the departure point
        latitude : arcseconds
        distance : km
    """
    table = _ensure_table(table, tier, directory)
    shape = np.shape(t)
    _, position = _spherical(t, table)
    return _reshape(position, shape)


def geocentric_moon_position_rect(
    t: Union[float, np.ndarray],
    tier: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
    table: Optional[TermTable] = None,
) -> RectangularPosition:
    """
    Geocentric rectangular coordinates of the Moon in the ELP2000 frame

    Parameters
    ----------
    t : float or np.ndarray
        Julian centuries from J2000.0
    tier, directory, table
        As for geocentric_moon_position

    Returns
    -------
    RectangularPosition
        x, y, z (km)
    """
    table = _ensure_table(table, tier, directory)
    shape = np.shape(t)
    _, position = _spherical(t, table)
    return _reshape(spherical_to_rectangular(position), shape)


def geocentric_moon_position_of_J2000(
    t: Union[float, np.ndarray],
    tier: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
    table: Optional[TermTable] = None,
) -> RectangularPosition:
    """
    Geocentric rectangular coordinates of the Moon referred to the mean
    ecliptic and equinox of J2000

    Parameters
    ----------
    t : float or np.ndarray
        Julian centuries from J2000.0
    tier, directory, table
        As for geocentric_moon_position

    Returns
    -------
    RectangularPosition
        x, y, z (km)
    """
    table = _ensure_table(table, tier, directory)
    shape = np.shape(t)
    tt, position = _spherical(t, table)
    rect = ecliptic_of_date_to_J2000(spherical_to_rectangular(position), tt)
    return _reshape(rect, shape)


def geocentric_moon_position_FK5(
    t: Union[float, np.ndarray],
    tier: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
    table: Optional[TermTable] = None,
) -> RectangularPosition:
    """
    Geocentric rectangular coordinates of the Moon referred to the FK5
    mean equator and equinox of J2000

    Parameters
    ----------
    t : float or np.ndarray
        Julian centuries from J2000.0
    tier, directory, table
        As for geocentric_moon_position

    Returns
    -------
    RectangularPosition
        x, y, z (km)
    """
    table = _ensure_table(table, tier, directory)
    shape = np.shape(t)
    tt, position = _spherical(t, table)
    rect = ecliptic_of_date_to_J2000(spherical_to_rectangular(position), tt)
    return _reshape(J2000_to_FK5(rect), shape)
