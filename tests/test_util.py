import sys
import os
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import electsim.util


@pytest.mark.parametrize('value, expected', [
    (0.5, 1),
    (1.5, 2),
    (2.5, 3),
    (-0.5, 0),
    (Fraction(7, 2), 4),
    (2.49, 2),
    (3, 3),
])
def test_round_half_up(value, expected):
    assert electsim.util.round_half_up(value) == expected


def test_sorted_votes_stable():
    assert electsim.util.sorted_votes({'A': 1, 'B': 3, 'C': 1, 'D': 3}) == [
        ('B', 3), ('D', 3), ('A', 1), ('C', 1)
    ]


def test_exact_shares():
    shares = electsim.util.exact_shares({'A': 1, 'B': 2})
    assert shares == {'A': Fraction(100, 3), 'B': Fraction(200, 3)}
    assert sum(shares.values()) == 100
    assert electsim.util.exact_shares({'A': 0, 'B': 0}) == {'A': 50, 'B': 50}
    assert electsim.util.exact_shares({}) == {}


@pytest.mark.parametrize('shares, expected', [
    ({'A': Fraction(100, 3), 'B': Fraction(200, 3)}, {'A': 33, 'B': 67}),
    ({'A': Fraction(100, 3), 'B': Fraction(100, 3), 'C': Fraction(100, 3)},
     {'A': 34, 'B': 33, 'C': 33}),
    ({'A': 50, 'B': 50}, {'A': 50, 'B': 50}),
])
def test_largest_remainder_round(shares, expected):
    rounded = electsim.util.largest_remainder_round(shares)
    assert rounded == expected
    assert sum(rounded.values()) == 100


def test_unit_hash():
    values = [electsim.util.unit_hash('state', i) for i in range(200)]
    assert all(0 <= value < 1 for value in values)
    assert len(set(values)) == len(values)
    assert electsim.util.unit_hash('a', 1) == electsim.util.unit_hash('a', 1)
    assert electsim.util.unit_hash('a', 1) != electsim.util.unit_hash('a', 2)

