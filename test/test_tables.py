"""
Bundled term table and precision tier tests

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

import numpy as np
import pytest

from pyELP2000.astro.arguments import argument_index
from pyELP2000.io.tables import (
    DEFAULT_TIER,
    TIERS,
    load_bundled_table,
    load_table,
    select_tier,
    tier_groups,
)


def test_tiers():
    """Tiers are nested"""
    assert DEFAULT_TIER == 'full'
    assert set(TIERS['main']) < set(TIERS['perturbed']) < set(TIERS['full'])
    assert 'planetary' not in TIERS['perturbed']
    assert 'planetary' in TIERS['full']
    assert tier_groups('main') == ('main',)
    with pytest.raises(ValueError):
        tier_groups('complete')


def test_bundled_table():
    """Term counts of the bundled truncation"""
    table = load_bundled_table()
    summary = table.summary()
    assert summary['main'] == {'longitude': 59, 'latitude': 60, 'distance': 47}
    assert summary['earth_figure'] == {'longitude': 1, 'latitude': 3}
    assert summary['planetary'] == {'longitude': 1, 'latitude': 2}
    assert table.groups == ('main', 'earth_figure', 'planetary')


def test_bundled_leading_terms():
    """Leading terms scaled to arcseconds and km"""
    table = load_bundled_table()
    lon = next(table.records('longitude'))
    assert lon.amplitude == pytest.approx(6288774 * 0.0036)
    assert lon.multipliers[argument_index('l')] == 1
    assert lon.kind == 'sin'
    lat = next(table.records('latitude'))
    assert lat.amplitude == pytest.approx(5128122 * 0.0036)
    assert lat.multipliers[argument_index('F')] == 1
    dist = list(table.records('distance'))
    # constant term first, then the cosine series
    assert dist[0].amplitude == pytest.approx(385000.56)
    assert not any(dist[0].multipliers)
    assert all(term.kind == 'cos' for term in dist)


def test_eccentricity_factor():
    """Terms in l' carry E(t) to the power |k_l'|"""
    table = load_bundled_table()
    E = np.array([1.0, -0.002516, -0.0000074])
    for term in table.records('longitude'):
        power = abs(term.multipliers[argument_index("l'")])
        if power == 0:
            assert term.secular is None
        else:
            exp = np.polynomial.polynomial.polypow(E, power)
            assert np.allclose(term.secular[:len(exp)], exp)
            assert not any(term.secular[len(exp):])


def test_venus_term():
    """Venus perturbation written over the planetary longitudes"""
    table = load_bundled_table()
    block = table.select(['planetary']).series('longitude')[0]
    assert block.degree == 1
    k = block.multipliers[0]
    assert k[argument_index('V')] == 18
    assert k[argument_index('T')] == -16
    assert k[argument_index('l')] == -1
    assert np.degrees(block.phase[0]) == pytest.approx(26.5402)


def test_select_tier():
    """Bundled table restricted to each tier"""
    main = load_bundled_table('main')
    assert main.groups == ('main',)
    perturbed = load_bundled_table('perturbed')
    assert perturbed.groups == ('main', 'earth_figure')
    full = load_table('full')
    assert full.groups == ('main', 'earth_figure', 'planetary')
    assert len(select_tier(full, 'main')) == len(main)
    with pytest.raises(ValueError):
        load_bundled_table('complete')


def test_missing_directory(tmp_path):
    """Native tables from a directory that does not exist"""
    with pytest.raises(FileNotFoundError):
        load_table('main', directory=tmp_path / 'missing')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
