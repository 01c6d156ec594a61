"""
pyELP2000.io.tables - Term tables and precision tiers

Loads the truncated ELP2000-82 table shipped with the package, or the
complete published tables from a directory of native ELP files, and
restricts them to a precision tier.

The bundled table is the truncation of J. Meeus, "Astronomical
Algorithms" (2nd ed., 1998), tables 47.A and 47.B, written over the ELP
argument vector.  Amplitudes are stored as the published integers with a
per-block scale to arcseconds or kilometres.  Terms in l' carry the
eccentricity factor E(t)^|k_l'| of the solar orbit.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import json
import pathlib
from typing import Dict, Optional, Tuple, Union

import numpy as np

from ..astro.arguments import ARGUMENTS, argument_index
from ..astro.series import Term, TermBlock, TermTable
from ..math import DEG_TO_RAD
from . import ELP

__all__ = [
    'TIERS',
    'DEFAULT_TIER',
    'tier_groups',
    'select_tier',
    'load_bundled_table',
    'load_table',
]

# Path to data files
_data_path = pathlib.Path(__file__).parent.parent / "data"
_bundled_table = _data_path / "elp2000_truncated.json"

_PERTURBATIONS = (
    'earth_figure',
    'tidal',
    'moon_figure',
    'relativistic',
    'solar_eccentricity',
)

# Theory components summed at each precision tier
TIERS: Dict[str, Tuple[str, ...]] = {
    'main': ('main',),
    'perturbed': ('main',) + _PERTURBATIONS,
    'full': ('main',) + _PERTURBATIONS + ('planetary',),
}
DEFAULT_TIER = 'full'


def tier_groups(tier: str) -> Tuple[str, ...]:
    """
    Theory components of a precision tier

    Parameters
    ----------
    tier : str
        'main', 'perturbed' or 'full'

    Returns
    -------
    tuple of str
        Group names
    """
    try:
        return TIERS[tier]
    except KeyError:
        raise ValueError(
            f"Unknown tier: {tier}. Supported: {list(TIERS.keys())}"
        ) from None


def select_tier(table: TermTable, tier: str) -> TermTable:
    """
    Restrict a term table to the components of a precision tier

    Groups of the tier that the table does not carry are absent from the
    result.
    """
    groups = tier_groups(tier)
    return table.select(groups, name=f"{table.name} [{tier}]").validate()


def _secular(rule: Optional[str], multipliers: np.ndarray,
             eccentricity: np.ndarray) -> Optional[Tuple[float, ...]]:
    if rule is None:
        return None
    if rule != 'eccentricity':
        raise ValueError(f"Unknown secular rule: {rule}")
    power = abs(int(multipliers[argument_index("l'")]))
    if power == 0:
        return None
    return tuple(np.polynomial.polynomial.polypow(eccentricity, power).tolist())


def _parse_block(block: dict, index: int, eccentricity: np.ndarray) -> TermBlock:
    where = f"{_bundled_table.name}: block {index}"
    try:
        group = block['group']
        series = block['series']
        kind = block['kind']
        degree = block['degree']
        scale = float(block['scale'])
        columns = [argument_index(name) for name in block['columns']]
        rows = block['rows']
    except KeyError as e:
        raise ValueError(f"{where}: missing field {e}") from e

    phase = float(block.get('phase', 0.0)) * DEG_TO_RAD
    rule = block.get('secular')

    terms = []
    for i, row in enumerate(rows):
        if len(row) != len(columns) + 1:
            raise ValueError(
                f"{where}, row {i}: expected {len(columns) + 1} values, got {len(row)}"
            )
        multipliers = np.zeros(len(ARGUMENTS), dtype=np.int64)
        multipliers[columns] = row[:-1]
        terms.append(Term(
            multipliers=tuple(multipliers.tolist()),
            amplitude=scale * row[-1],
            kind=kind,
            series=series,
            phase=phase,
            secular=_secular(rule, multipliers, eccentricity),
        ))

    return TermBlock.from_terms(group, series, terms, degree=degree,
                                source=f"{_bundled_table.name}#{index}")


def load_bundled_table(tier: str = DEFAULT_TIER) -> TermTable:
    """
    Load the truncated ELP2000-82 table shipped with the package

    Parameters
    ----------
    tier : str, default 'full'
        Precision tier

    Returns
    -------
    TermTable
        Term table restricted to the tier

    Raises
    ------
    FileNotFoundError
        If the data file is missing from the installation
    ValueError
        If the data file is malformed
    """
    if not _bundled_table.exists():
        raise FileNotFoundError(f"Bundled term table not found: {_bundled_table}")

    with open(_bundled_table, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if tuple(data.get('arguments', ())) != ARGUMENTS:
        raise ValueError(f"{_bundled_table.name}: argument order does not match {ARGUMENTS}")
    eccentricity = np.array(data.get('eccentricity', [1.0]), dtype=np.float64)

    blocks = [_parse_block(block, i, eccentricity)
              for i, block in enumerate(data['blocks'])]
    table = TermTable(blocks, name=data.get('name', _bundled_table.stem))
    return select_tier(table, tier)


def load_table(
    tier: str = DEFAULT_TIER,
    directory: Optional[Union[str, pathlib.Path]] = None,
) -> TermTable:
    """
    Load a term table for a precision tier

    Parameters
    ----------
    tier : str, default 'full'
        Precision tier
    directory : str or pathlib.Path, optional
        Directory of native ELP2000-82B files; the bundled truncated
        table is used if None

    Returns
    -------
    TermTable
    """
    groups = tier_groups(tier)
    if directory is None:
        return load_bundled_table(tier)
    table = ELP.read_elp_directory(directory, groups=groups)
    return TermTable(table.blocks, name=f"{table.name} [{tier}]")
