import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from electsim.candidate import Candidate
from electsim.distribute import distribute_votes_to_candidates


def _candidates(**pollings):
    return [Candidate(cid, polling=polling) for cid, polling in pollings.items()]


def _votes(distributed):
    return {cid: cand.votes for cid, cand in distributed.items()}


@pytest.mark.parametrize('pollings, total, expected', [
    ({'A': 50, 'B': 30, 'C': 20}, 1000, {'A': 500, 'B': 300, 'C': 200}),
    ({'A': 2, 'B': 1}, 10, {'A': 7, 'B': 3}),
    ({'A': 1, 'B': 1, 'C': 1}, 100, {'A': 34, 'B': 33, 'C': 33}),
    ({'A': 1, 'B': 3}, 3, {'A': 0, 'B': 3}),
    ({'X': 0, 'Y': 0}, 101, {'X': 51, 'Y': 50}),
    ({'X': 0, 'Y': 0, 'Z': 0}, 5, {'X': 2, 'Y': 2, 'Z': 1}),
    ({'A': 40, 'B': 60}, 0, {'A': 0, 'B': 0}),
])
def test_distribution(pollings, total, expected):
    assert _votes(distribute_votes_to_candidates(
        _candidates(**pollings), total
    )) == expected


def test_empty():
    assert distribute_votes_to_candidates([], 1000) == {}


def test_negative_total():
    distributed = distribute_votes_to_candidates(
        _candidates(A=10, B=20), -50
    )
    assert _votes(distributed) == {'A': 0, 'B': 0}


@pytest.mark.parametrize('bad_polling', [None, float('nan'), float('inf'), -10])
def test_invalid_polling(bad_polling):
    distributed = distribute_votes_to_candidates(
        _candidates(A=bad_polling, B=10), 100
    )
    assert _votes(distributed) == {'A': 0, 'B': 100}


def test_inputs_unchanged():
    candidates = _candidates(A=10, B=20)
    distributed = distribute_votes_to_candidates(candidates, 300)
    assert [cand.votes for cand in candidates] == [0, 0]
    assert distributed['B'].votes == 200
    assert distributed['B'] is not candidates[1]


@pytest.mark.parametrize('seed', range(25))
def test_sum(seed):
    rng = random.Random(seed)
    candidates = [
        Candidate(f'c{i}', polling=rng.choice([0, rng.random() * 100]))
        for i in range(rng.randint(1, 12))
    ]
    total = rng.randint(0, 10 ** 7)
    distributed = distribute_votes_to_candidates(candidates, total)
    assert sum(cand.votes for cand in distributed.values()) == total
    assert list(distributed) == [cand.id for cand in candidates]
    assert all(cand.votes >= 0 for cand in distributed.values())
