"""
pyELP2000.io - Term table readers

- ELP: native ELP2000-82B series files (ELP1 ... ELP36)
- tables: bundled truncated table and precision tiers

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from . import ELP
from . import tables
from .ELP import (
    read_elp_file,
    read_elp_directory,
)
from .tables import (
    TIERS,
    DEFAULT_TIER,
    tier_groups,
    select_tier,
    load_bundled_table,
    load_table,
)

__all__ = [
    'ELP',
    'tables',
    'read_elp_file',
    'read_elp_directory',
    'TIERS',
    'DEFAULT_TIER',
    'tier_groups',
    'select_tier',
    'load_bundled_table',
    'load_table',
]
