"""
pyELP2000.io.ELP - ELP2000-82B series file reader

Reads the 36 ASCII files ELP1 ... ELP36 distributed with the lunar
solution ELP2000-82B by the Bureau des Longitudes / IMCCE
    ftp://cyrano-se.obspm.fr/pub/2_lunar_solutions/1_elp82b/

File contents:
    ELP1-3      main problem (longitude, latitude, distance)
    ELP4-9      figure of the Earth (7-9 multiplied by t)
    ELP10-15    planetary perturbations, table 1 (13-15 multiplied by t)
    ELP16-21    planetary perturbations, table 2 (19-21 multiplied by t)
    ELP22-27    tidal effects (25-27 multiplied by t)
    ELP28-30    figure of the Moon
    ELP31-33    relativistic perturbations
    ELP34-36    planetary perturbations, solar eccentricity (times t^2)

Each file starts with a title line followed by one term per line.
Main problem amplitudes are corrected for the DE200/LE200 fit of the
constants as they are read.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import pathlib
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from ..astro.arguments import (
    AM,
    ARGUMENTS,
    DELE,
    DELEP,
    DELG,
    DELNP,
    DELNU,
    DTASM,
    argument_index,
)
from ..astro.series import SERIES, Term, TermBlock, TermTable
from ..math import DEG_TO_RAD

__all__ = [
    'ELP_FILES',
    'file_info',
    'find_file',
    'parse_line',
    'read_elp_file',
    'read_elp_directory',
]

# file index -> (group, format, power of t multiplying the amplitude)
ELP_FILES = {}
for _i in range(1, 37):
    if _i <= 3:
        ELP_FILES[_i] = ('main', 'main', 0)
    elif _i <= 9:
        ELP_FILES[_i] = ('earth_figure', 'figure', 0 if _i <= 6 else 1)
    elif _i <= 15:
        ELP_FILES[_i] = ('planetary', 'planetary1', 0 if _i <= 12 else 1)
    elif _i <= 21:
        ELP_FILES[_i] = ('planetary', 'planetary2', 0 if _i <= 18 else 1)
    elif _i <= 27:
        ELP_FILES[_i] = ('tidal', 'figure', 0 if _i <= 24 else 1)
    elif _i <= 30:
        ELP_FILES[_i] = ('moon_figure', 'figure', 0)
    elif _i <= 33:
        ELP_FILES[_i] = ('relativistic', 'figure', 0)
    else:
        ELP_FILES[_i] = ('solar_eccentricity', 'figure', 2)

# number of integer columns (i3) and real columns per format
_FORMATS = {
    'main': (4, 7),
    'figure': (5, 3),
    'planetary1': (11, 3),
    'planetary2': (11, 3),
}

# argument vector positions of the integer columns
_COLUMNS = {
    'main': ('D', "l'", 'l', 'F'),
    'figure': ('zeta', 'D', "l'", 'l', 'F'),
    'planetary1': ('Me', 'V', 'T', 'Ma', 'J', 'S', 'U', 'N', 'D', 'l', 'F'),
    'planetary2': ('Me', 'V', 'T', 'Ma', 'J', 'S', 'U', 'D', "l'", 'l', 'F'),
}
_COLUMN_INDEX = {
    fmt: np.array([argument_index(name) for name in names])
    for fmt, names in _COLUMNS.items()
}


def file_info(index: int) -> Tuple[str, str, str, int]:
    """
    Description of one ELP file

    Parameters
    ----------
    index : int
        File number (1-36)

    Returns
    -------
    group : str
        Theory component
    series : str
        Target series
    fmt : str
        Record format
    power : int
        Power of t multiplying the amplitudes
    """
    if index not in ELP_FILES:
        raise ValueError(f"ELP file index must be 1-36, got {index}")
    group, fmt, power = ELP_FILES[index]
    return group, SERIES[(index - 1) % 3], fmt, power


def find_file(directory: Union[str, pathlib.Path], index: int) -> pathlib.Path:
    """
    Locate ELP file number index in a directory

    Raises
    ------
    FileNotFoundError
        If neither ELPn nor elpn exists
    """
    directory = pathlib.Path(directory).expanduser().resolve()
    for name in (f"ELP{index:d}", f"elp{index:d}"):
        path = directory / name
        if path.exists():
            return path
    raise FileNotFoundError(f"File not found: {directory / f'ELP{index:d}'}")


def parse_line(line: str, fmt: str) -> Tuple[np.ndarray, List[float]]:
    """
    Split one record into its integer and real fields

    Integer fields are fixed width (Fortran i3); real fields follow,
    separated by blanks.

    Parameters
    ----------
    line : str
        Record
    fmt : str
        Record format ('main', 'figure', 'planetary1', 'planetary2')

    Returns
    -------
    ints : np.ndarray
        Integer multipliers
    reals : list of float
        Real fields
    """
    nint, nreal = _FORMATS[fmt]
    width = 3 * nint
    if len(line.rstrip()) <= width:
        raise ValueError(f"record too short ({len(line.rstrip())} characters)")
    ints = np.array([int(line[3*i:3*i + 3]) for i in range(nint)], dtype=np.int64)
    reals = [float(x.replace('D', 'E').replace('d', 'e')) for x in line[width:].split()]
    if len(reals) != nreal:
        raise ValueError(f"expected {nreal} real fields, found {len(reals)}")
    return ints, reals


def _main_amplitude(reals: List[float], series: str) -> float:
    # reals: A, B1 ... B6
    A, B1, B2, B3, B4, B5, _B6 = reals
    if series == 'distance':
        A = A - 2.0 * A * DELNU / 3.0
    tgv = B1 + DTASM * B5
    return A + tgv * (DELNP - AM * DELNU) + B2 * DELG + B3 * DELE + B4 * DELEP


def read_elp_file(
    input_file: Union[str, pathlib.Path],
    index: int,
) -> TermBlock:
    """
    Read one ELP2000-82B series file

    Parameters
    ----------
    input_file : str or pathlib.Path
        Path to the file
    index : int
        File number (1-36), which fixes format, series and group

    Returns
    -------
    TermBlock
        Terms of the file in published order

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        If a record cannot be parsed or the file has no records
    """
    input_file = pathlib.Path(input_file).expanduser().resolve()
    if not input_file.exists():
        raise FileNotFoundError(f"File not found: {input_file}")

    group, series, fmt, power = file_info(index)
    columns = _COLUMN_INDEX[fmt]
    secular = tuple([0.0] * power + [1.0]) if power else None

    terms = []
    with open(input_file, 'r', encoding='ascii') as fid:
        # title line
        fid.readline()
        for lineno, line in enumerate(fid, start=2):
            if not line.strip():
                continue
            try:
                ints, reals = parse_line(line, fmt)
            except ValueError as e:
                raise ValueError(f"{input_file}:{lineno}: malformed record: {e}") from e

            multipliers = np.zeros(len(ARGUMENTS), dtype=np.int64)
            multipliers[columns] = ints

            if fmt == 'main':
                term = Term(
                    multipliers=tuple(multipliers.tolist()),
                    amplitude=_main_amplitude(reals, series),
                    kind='cos' if series == 'distance' else 'sin',
                    series=series,
                )
            else:
                # phase (degrees), amplitude, period (days)
                phase, amplitude, _period = reals
                term = Term(
                    multipliers=tuple(multipliers.tolist()),
                    amplitude=amplitude,
                    kind='sin',
                    series=series,
                    phase=phase * DEG_TO_RAD,
                    secular=secular,
                )
            terms.append(term)

    if not terms:
        raise ValueError(f"{input_file}: no records found")

    degree = None if fmt == 'main' else 1
    return TermBlock.from_terms(group, series, terms, degree=degree,
                                source=input_file.name)


def read_elp_directory(
    directory: Union[str, pathlib.Path],
    groups: Optional[Iterable[str]] = None,
) -> TermTable:
    """
    Read the ELP2000-82B files needed for a set of theory components

    Parameters
    ----------
    directory : str or pathlib.Path
        Directory holding ELP1 ... ELP36
    groups : iterable of str, optional
        Theory components to read (default: all)

    Returns
    -------
    TermTable
        Blocks in file order

    Raises
    ------
    FileNotFoundError
        If a required file is missing
    ValueError
        If a file is malformed
    """
    directory = pathlib.Path(directory).expanduser().resolve()
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    wanted = None if groups is None else set(groups)
    blocks = []
    for index, (group, _fmt, _power) in ELP_FILES.items():
        if wanted is not None and group not in wanted:
            continue
        blocks.append(read_elp_file(find_file(directory, index), index))

    name = f"ELP2000-82B ({directory})"
    return TermTable(blocks, name=name).validate()
