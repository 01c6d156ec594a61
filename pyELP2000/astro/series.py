"""
Periodic series of the lunar theory ELP2000-82B

Term records, read-only term blocks and tables, and the summation of
longitude, latitude and distance from the fundamental arguments.

Each term contributes

    A * s(t) * sin(k . w + phi)

where k are the integer multipliers over the argument vector w, A the
amplitude, s(t) an optional secular factor (polynomial in t) and phi the
phase offset.  Cosine terms are summed as sines with an extra pi/2 in
the phase.  Contributions are accumulated in table order.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from ..math import ARCSEC_CIRCLE, normalize_angle
from .arguments import A0, ARGUMENTS, ATH, FundamentalArguments

__all__ = [
    'SERIES',
    'KINDS',
    'Term',
    'TermBlock',
    'TermTable',
    'sum_series',
    'spherical_coordinates',
]

SERIES: Tuple[str, ...] = ('longitude', 'latitude', 'distance')
KINDS: Tuple[str, ...] = ('sin', 'cos')


@dataclass(frozen=True)
class Term:
    """
    One periodic term of a series

    Attributes
    ----------
    multipliers : tuple of int
        Integer multipliers over the argument vector (order of ARGUMENTS)
    amplitude : float
        Amplitude (arcseconds for longitude and latitude, km for distance)
    kind : str
        Trigonometric function, 'sin' or 'cos'
    series : str
        Target series: 'longitude', 'latitude' or 'distance'
    phase : float
        Phase offset (radians)
    secular : tuple of float, optional
        Coefficients [c0, c1, ...] of a polynomial in t multiplying the
        amplitude
    """
    multipliers: Tuple[int, ...]
    amplitude: float
    kind: str = 'sin'
    series: str = 'longitude'
    phase: float = 0.0
    secular: Optional[Tuple[float, ...]] = None


def _readonly(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class TermBlock:
    """
    Ordered run of terms sharing a group, a series and an argument degree

    Arrays are write-protected after construction.  Use ``from_terms`` to
    build a validated block from term records.

    Attributes
    ----------
    group : str
        Theory component ('main', 'earth_figure', 'planetary', ...)
    series : str
        Target series
    degree : int or None
        Argument degree: None for the complete polynomials, 1 for the
        linear arguments
    multipliers : np.ndarray
        Integer multipliers, shape (n, 13)
    amplitude : np.ndarray
        Amplitudes, shape (n,)
    phase : np.ndarray
        Phase offsets (radians), shape (n,)
    cosine : np.ndarray
        True for cosine terms, shape (n,)
    secular : np.ndarray
        Secular factor coefficients, shape (n, k); [1, 0, ...] if none
    source : str
        Where the block was read from
    """
    group: str
    series: str
    degree: Optional[int]
    multipliers: np.ndarray
    amplitude: np.ndarray
    phase: np.ndarray
    cosine: np.ndarray
    secular: np.ndarray
    source: str = ''

    @classmethod
    def from_terms(
        cls,
        group: str,
        series: str,
        terms: Sequence[Term],
        degree: Optional[int] = None,
        source: str = '',
    ) -> 'TermBlock':
        """
        Build a validated block from term records

        Parameters
        ----------
        group : str
            Theory component of the block
        series : str
            Target series of every term
        terms : sequence of Term
            Terms in published order
        degree : int, optional
            Argument degree (None or 1)
        source : str, default ''
            Description of the origin used in error messages

        Returns
        -------
        TermBlock

        Raises
        ------
        ValueError
            If the block is empty or a term is malformed
        """
        where = f"{group}/{series}" + (f" ({source})" if source else "")
        if series not in SERIES:
            raise ValueError(f"Unknown series: {series}. Supported: {list(SERIES)}")
        if degree not in (None, 1):
            raise ValueError(f"Unsupported argument degree for {where}: {degree}")
        if len(terms) == 0:
            raise ValueError(f"Empty term block: {where}")

        n = len(terms)
        na = len(ARGUMENTS)
        nsec = max(len(term.secular) if term.secular else 1 for term in terms)

        multipliers = np.zeros((n, na), dtype=np.int64)
        amplitude = np.zeros(n)
        phase = np.zeros(n)
        cosine = np.zeros(n, dtype=bool)
        secular = np.zeros((n, nsec))
        secular[:, 0] = 1.0

        for i, term in enumerate(terms):
            if term.series != series:
                raise ValueError(
                    f"Term {i} of {where} targets {term.series!r}, expected {series!r}"
                )
            if term.kind not in KINDS:
                raise ValueError(f"Term {i} of {where} has unknown kind {term.kind!r}")
            if len(term.multipliers) != na:
                raise ValueError(
                    f"Term {i} of {where} has {len(term.multipliers)} multipliers, "
                    f"expected {na}"
                )
            multipliers[i] = term.multipliers
            amplitude[i] = term.amplitude
            phase[i] = term.phase
            cosine[i] = term.kind == 'cos'
            if term.secular:
                secular[i, :] = 0.0
                secular[i, :len(term.secular)] = term.secular

        if not (np.all(np.isfinite(amplitude)) and np.all(np.isfinite(phase))
                and np.all(np.isfinite(secular))):
            bad = np.flatnonzero(~(np.isfinite(amplitude) & np.isfinite(phase)
                                   & np.all(np.isfinite(secular), axis=1)))
            raise ValueError(f"Non-finite coefficients in {where} at terms {bad.tolist()}")

        return cls(
            group=group,
            series=series,
            degree=degree,
            multipliers=_readonly(multipliers),
            amplitude=_readonly(amplitude),
            phase=_readonly(phase),
            cosine=_readonly(cosine),
            secular=_readonly(secular),
            source=source,
        )

    def __len__(self) -> int:
        return len(self.amplitude)

    def terms(self) -> Iterator[Term]:
        """Iterate over the term records of the block in order"""
        identity = np.zeros(self.secular.shape[1])
        identity[0] = 1.0
        for i in range(len(self)):
            row = self.secular[i]
            yield Term(
                multipliers=tuple(int(k) for k in self.multipliers[i]),
                amplitude=float(self.amplitude[i]),
                kind='cos' if self.cosine[i] else 'sin',
                series=self.series,
                phase=float(self.phase[i]),
                secular=None if np.array_equal(row, identity) else tuple(row.tolist()),
            )

    def evaluate(self, arguments: FundamentalArguments) -> np.ndarray:
        """
        Contribution of every term of the block

        Parameters
        ----------
        arguments : FundamentalArguments
            Fundamental arguments at n instants

        Returns
        -------
        np.ndarray
            Term contributions, shape (len(block), n)
        """
        angles = arguments.radians(self.degree)
        offset = self.phase + np.where(self.cosine, 0.5 * np.pi, 0.0)
        theta = self.multipliers @ angles + offset[:, None]
        amplitude = self.amplitude[:, None] * np.polynomial.polynomial.polyval(
            arguments.t, self.secular.T)
        return amplitude * np.sin(theta)


class TermTable:
    """
    Ordered, read-only collection of term blocks

    Parameters
    ----------
    blocks : iterable of TermBlock
        Blocks in summation order
    name : str, default ''
        Table description (data source and tier)
    """

    def __init__(self, blocks: Iterable[TermBlock], name: str = ''):
        self._blocks: Tuple[TermBlock, ...] = tuple(blocks)
        self.name = name

    @property
    def blocks(self) -> Tuple[TermBlock, ...]:
        return self._blocks

    @property
    def groups(self) -> Tuple[str, ...]:
        """Group names in order of first appearance"""
        return tuple(dict.fromkeys(block.group for block in self._blocks))

    def __len__(self) -> int:
        return sum(len(block) for block in self._blocks)

    def __repr__(self) -> str:
        return f"TermTable({self.name!r}, blocks={len(self._blocks)}, terms={len(self)})"

    def series(self, name: str) -> Tuple[TermBlock, ...]:
        """Blocks of one target series, in order"""
        if name not in SERIES:
            raise ValueError(f"Unknown series: {name}. Supported: {list(SERIES)}")
        return tuple(block for block in self._blocks if block.series == name)

    def records(self, name: str) -> Iterator[Term]:
        """Term records of one target series, in summation order"""
        for block in self.series(name):
            yield from block.terms()

    def select(self, groups: Iterable[str], name: Optional[str] = None) -> 'TermTable':
        """
        Subset of the table restricted to some groups

        Parameters
        ----------
        groups : iterable of str
            Group names to keep
        name : str, optional
            Name of the new table

        Returns
        -------
        TermTable
            Table keeping the original block order
        """
        keep = set(groups)
        blocks = [block for block in self._blocks if block.group in keep]
        return TermTable(blocks, name=self.name if name is None else name)

    def summary(self) -> Dict[str, Dict[str, int]]:
        """Number of terms per group and series"""
        counts: Dict[str, Dict[str, int]] = {}
        for block in self._blocks:
            group = counts.setdefault(block.group, {})
            group[block.series] = group.get(block.series, 0) + len(block)
        return counts

    def validate(self) -> 'TermTable':
        """
        Check that every series has at least one term

        Raises
        ------
        ValueError
            If a series is missing from the table
        """
        missing = [s for s in SERIES if not self.series(s)]
        if missing:
            raise ValueError(f"Term table {self.name!r} has no terms for {missing}")
        return self


def sum_series(
    arguments: FundamentalArguments,
    table: TermTable,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Sum the periodic series of longitude, latitude and distance

    Parameters
    ----------
    arguments : FundamentalArguments
        Fundamental arguments at n instants
    table : TermTable
        Term table

    Returns
    -------
    longitude : np.ndarray
        Periodic part of the longitude (arcseconds), shape (n,)
    latitude : np.ndarray
        Latitude (arcseconds), shape (n,)
    distance : np.ndarray
        Distance before scaling (km), shape (n,)
    """
    totals: Dict[str, np.ndarray] = {s: np.zeros_like(arguments.t) for s in SERIES}
    for block in table.blocks:
        contributions = block.evaluate(arguments)
        # running sum in published order, carried across blocks
        stacked = np.vstack((totals[block.series][None, :], contributions))
        totals[block.series] = np.cumsum(stacked, axis=0)[-1]
    return totals['longitude'], totals['latitude'], totals['distance']


def spherical_coordinates(
    arguments: FundamentalArguments,
    table: TermTable,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Spherical coordinates of the Moon in the ELP2000 frame

    Parameters
    ----------
    arguments : FundamentalArguments
        Fundamental arguments at n instants
    table : TermTable
        Term table

    Returns
    -------
    longitude : np.ndarray
        Longitude from the departure point, [0, 1296000) arcseconds
    latitude : np.ndarray
        Latitude (arcseconds)
    distance : np.ndarray
        Geocentric distance (km)
    """
    lon, lat, dist = sum_series(arguments, table)
    longitude = normalize_angle(arguments.mean_longitude + lon, circle=ARCSEC_CIRCLE)
    distance = dist * (A0 / ATH)
    return longitude, lat, distance
