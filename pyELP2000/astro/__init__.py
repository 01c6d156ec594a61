"""
pyELP2000.astro - Lunar theory ELP2000-82B

Provides:
- Fundamental arguments of the theory
- Term records, tables and the summation of the periodic series
- Frame conversions and rotations (ELP2000, J2000 ecliptic, FK5)

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from .arguments import (
    ARGUMENTS,
    FundamentalArguments,
    fundamental_arguments,
    argument_index,
)
from .series import (
    Term,
    TermBlock,
    TermTable,
    sum_series,
    spherical_coordinates,
)
from .ephemeris import (
    SphericalPosition,
    RectangularPosition,
    spherical_to_rectangular,
    rectangular_to_spherical,
    ecliptic_of_date_to_J2000,
    J2000_to_FK5,
)

__all__ = [
    'ARGUMENTS',
    'FundamentalArguments',
    'fundamental_arguments',
    'argument_index',
    'Term',
    'TermBlock',
    'TermTable',
    'sum_series',
    'spherical_coordinates',
    'SphericalPosition',
    'RectangularPosition',
    'spherical_to_rectangular',
    'rectangular_to_spherical',
    'ecliptic_of_date_to_J2000',
    'J2000_to_FK5',
]
