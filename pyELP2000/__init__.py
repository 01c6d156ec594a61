"""
pyELP2000 - Geocentric position of the Moon from ELP2000-82B

Semi-analytic lunar theory of M. Chapront-Touze and J. Chapront,
evaluated with NumPy for scalar or array time.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.

Usage:
    import numpy as np
    import pyELP2000

    # Julian centuries from J2000.0
    t = (2448724.5 - 2451545.0) / 36525.0

    # Longitude, latitude (arcseconds) and distance (km)
    lon, lat, r = pyELP2000.geocentric_moon_position(t)

    # FK5 rectangular coordinates (km), bundled truncated table
    x, y, z = pyELP2000.geocentric_moon_position_FK5(np.linspace(-1, 1, 100))

    # Complete published tables
    pyELP2000.configure(directory='/path/to/elp82b', tier='full')
"""

from . import astro
from . import io
from . import compute
from . import config
from .compute import (
    geocentric_moon_position,
    geocentric_moon_position_rect,
    geocentric_moon_position_of_J2000,
    geocentric_moon_position_FK5,
    init_tables,
    clear_tables,
)
from .astro import (
    SphericalPosition,
    RectangularPosition,
    Term,
    TermTable,
    fundamental_arguments,
)
from .io import (
    TIERS,
    load_bundled_table,
    read_elp_directory,
)
from .config import (
    configure,
    get_settings,
    reset_settings,
    settings_override,
    show_settings,
)

__version__ = '0.1.0'
__all__ = [
    'astro',
    'io',
    'compute',
    'config',
    # Lunar position
    'geocentric_moon_position',
    'geocentric_moon_position_rect',
    'geocentric_moon_position_of_J2000',
    'geocentric_moon_position_FK5',
    'SphericalPosition',
    'RectangularPosition',
    # Term tables
    'init_tables',
    'clear_tables',
    'Term',
    'TermTable',
    'TIERS',
    'load_bundled_table',
    'read_elp_directory',
    'fundamental_arguments',
    # Settings
    'configure',
    'get_settings',
    'reset_settings',
    'settings_override',
    'show_settings',
]
