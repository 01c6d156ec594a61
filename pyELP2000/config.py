"""
pyELP2000.config - Package settings

Zero-config defaults: the bundled truncated table at the full tier.
Environment variables override the defaults at import time:

    PYELP2000_DIRECTORY   directory holding the native files ELP1 ... ELP36
    PYELP2000_TIER        default precision tier (main, perturbed, full)

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

import os
import threading
import warnings
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .io.tables import DEFAULT_TIER, TIERS

__all__ = [
    'Settings',
    'configure',
    'get_settings',
    'reset_settings',
    'settings_override',
    'show_settings',
]

_UNSET = object()


@dataclass(frozen=True)
class Settings:
    """Snapshot of the package settings

    Attributes
    ----------
    directory : Path or None
        Directory of native ELP2000-82B files; None for the bundled table
    tier : str
        Default precision tier
    """
    directory: Optional[Path] = None
    tier: str = DEFAULT_TIER


def _check_tier(tier: str) -> str:
    if tier not in TIERS:
        raise ValueError(f"Unknown tier: {tier}. Supported: {list(TIERS.keys())}")
    return tier


def _check_directory(directory: Optional[Union[str, Path]]) -> Optional[Path]:
    if directory is None:
        return None
    return Path(directory).expanduser().resolve()


# =============================================================================
# Global State
# =============================================================================

class _SettingsState:
    """Thread-safe settings manager."""

    def __init__(self):
        self._lock = threading.Lock()
        self._settings = Settings()

        # Read environment variables
        self._init_from_env()

    def _init_from_env(self):
        """Initialize state from environment variables."""
        directory = None
        tier = DEFAULT_TIER

        # PYELP2000_DIRECTORY
        env_directory = os.environ.get('PYELP2000_DIRECTORY', '').strip()
        if env_directory:
            directory = _check_directory(env_directory)

        # PYELP2000_TIER
        env_tier = os.environ.get('PYELP2000_TIER', '').strip().lower()
        if env_tier:
            if env_tier in TIERS:
                tier = env_tier
            else:
                warnings.warn(
                    f"Ignoring PYELP2000_TIER={env_tier!r}: unknown tier. "
                    f"Supported: {list(TIERS.keys())}. Using '{DEFAULT_TIER}'.",
                    UserWarning,
                    stacklevel=2
                )

        self._settings = Settings(directory=directory, tier=tier)

    @property
    def settings(self) -> Settings:
        with self._lock:
            return self._settings

    @settings.setter
    def settings(self, value: Settings):
        with self._lock:
            self._settings = value

    def update(self, directory=_UNSET, tier=_UNSET) -> Settings:
        with self._lock:
            current = self._settings
            self._settings = Settings(
                directory=current.directory if directory is _UNSET
                else _check_directory(directory),
                tier=current.tier if tier is _UNSET else _check_tier(tier),
            )
            return current

    def reset(self):
        with self._lock:
            self._init_from_env()


# Global state instance
_state = _SettingsState()


# =============================================================================
# Public Functions
# =============================================================================

def get_settings() -> Settings:
    """Current settings.

    Returns
    -------
    Settings
        Immutable snapshot
    """
    return _state.settings


def configure(directory=_UNSET, tier=_UNSET) -> Settings:
    """Change the package settings.

    Parameters
    ----------
    directory : str, Path or None, optional
        Directory of native ELP2000-82B files; None selects the bundled
        truncated table
    tier : str, optional
        Default precision tier: 'main', 'perturbed' or 'full'

    Returns
    -------
    Settings
        The new settings

    Raises
    ------
    ValueError
        If the tier is unknown
    """
    _state.update(directory=directory, tier=tier)
    return _state.settings


def reset_settings() -> Settings:
    """Restore the settings from the environment variables."""
    _state.reset()
    return _state.settings


@contextmanager
def settings_override(directory=_UNSET, tier=_UNSET):
    """Context manager to temporarily change the settings.

    Example
    -------
    >>> with settings_override(tier='main'):
    ...     lon, lat, r = geocentric_moon_position(0.0)
    """
    previous = _state.update(directory=directory, tier=tier)
    try:
        yield _state.settings
    finally:
        _state.settings = previous


def show_settings() -> None:
    """Print the settings to stdout."""
    settings = _state.settings
    source = settings.directory if settings.directory is not None else 'bundled table'
    print(f"Term table: {source}")
    print(f"Tier: {settings.tier} ({', '.join(TIERS[settings.tier])})")
