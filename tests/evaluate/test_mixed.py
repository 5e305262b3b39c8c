"""Tests for mixed-member proportional evaluation with overhang."""

import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import electsim.evaluate.mixed
from electsim.candidate import Candidate, Party
from electsim.election import Election, MMPSetup


OVERHANG_VOTES = {'A': 500, 'B': 300, 'C': 100}


def test_overhang_enlarges():
    resolution = electsim.evaluate.mixed.OverhangResolver().calculate(
        OVERHANG_VOTES, 9, {'A': 1, 'C': 2}
    )
    assert resolution.final_seats == {'A': 10, 'B': 6, 'C': 2}
    assert resolution.total_seats == 18
    assert resolution.allocation_size == 18
    assert resolution.iterations == 2
    assert resolution.converged


def test_no_overhang():
    resolution = electsim.evaluate.mixed.OverhangResolver().calculate(
        OVERHANG_VOTES, 9, {'A': 3, 'B': 2}
    )
    assert resolution.final_seats == {'A': 5, 'B': 3, 'C': 1}
    assert resolution.total_seats == 9
    assert resolution.iterations == 1
    assert resolution.converged


def test_iteration_cap():
    resolver = electsim.evaluate.mixed.OverhangResolver(max_iterations=1)
    resolution = resolver.calculate(OVERHANG_VOTES, 9, {'A': 1, 'C': 2})
    assert not resolution.converged
    assert resolution.iterations == 1
    assert resolution.allocation_size == 9
    assert resolution.final_seats == {'A': 5, 'B': 3, 'C': 2}
    assert resolution.total_seats == 10


def test_stalled_overhang_not_converged():
    # Sainte-Lague gives A fewer seats than its quota here, so enlarging
    # to the size matching its direct wins does not help
    votes = {'A': 600}
    votes.update({f'S{i}': 40 for i in range(10)})
    resolver = electsim.evaluate.mixed.OverhangResolver(method='sainte_lague')
    resolution = resolver.calculate(votes, 20, {'A': 11})
    assert not resolution.converged
    assert resolution.iterations == 1
    assert resolution.allocation_size == 20
    assert resolution.final_seats['A'] == 11
    assert resolution.total_seats == 21


def test_below_threshold_keeps_direct_wins():
    resolver = electsim.evaluate.mixed.OverhangResolver(threshold_percent=5)
    resolution = resolver.calculate(
        {'A': 600, 'B': 380, 'C': 20}, 10, {'C': 3}
    )
    assert resolution.final_seats == {'A': 6, 'B': 4, 'C': 3}
    assert resolution.total_seats == 13
    assert resolution.allocation_size == 10
    assert resolution.converged


def test_direct_wins_without_party_votes():
    resolution = electsim.evaluate.mixed.OverhangResolver().calculate(
        {'A': 100, 'B': 100}, 4, {'D': 1}
    )
    assert resolution.final_seats == {'A': 2, 'B': 2, 'D': 1}
    assert resolution.allocation_size == 4


@pytest.mark.parametrize('direct_wins', [
    {'A': 8},
    {'B': 7, 'C': 3},
    {'A': 1, 'B': 1, 'C': 1},
    {'C': 9},
])
def test_final_covers_direct(direct_wins):
    resolution = electsim.evaluate.mixed.OverhangResolver(
        method='sainte_lague'
    ).calculate(OVERHANG_VOTES, 9, direct_wins)
    for party, n_direct in direct_wins.items():
        assert resolution.final_seats[party] >= n_direct
    assert resolution.total_seats == sum(resolution.final_seats.values())


def test_count_direct_wins():
    winners = [
        Candidate('a1', party_id='A'),
        Candidate('a2', party_id='A'),
        Candidate('i1'),
        Candidate('i2', party_id='independent-2'),
        Candidate('b1', party_id='B'),
    ]
    assert electsim.evaluate.mixed.count_direct_wins(winners) == {
        'A': 2, 'B': 1
    }


def _mmp_election(constituency, lists, seats, n_constituency):
    return Election(
        id='parliament',
        electoral_system='MMP',
        seats_to_fill=seats,
        party_lists=lists,
        mmp=MMPSetup(num_constituency_seats=n_constituency),
    ), {cand.id: cand for cand in constituency}


def test_process_mmp():
    election, candidates = _mmp_election(
        [
            Candidate('a1', party_id='A', votes=100),
            Candidate('b1', party_id='B', votes=80),
            Candidate('c1', party_id='C', votes=10),
        ],
        {
            'A': [Candidate('la1', polling=30), Candidate('la2', polling=30)],
            'B': [Candidate('lb1', polling=20), Candidate('lb2', polling=20)],
        },
        seats=4,
        n_constituency=2,
    )
    outcome = electsim.evaluate.mixed.process_mmp_results(
        election, [Party('A', 'Alpha')], candidates, 190, 4
    )
    assert [w.id for w in outcome.determined_winners] == [
        'a1', 'b1', 'la1', 'la2'
    ]
    assert outcome.party_seat_summary == {'A': 3, 'B': 1}
    assert outcome.seats_to_fill == 4
    assert outcome.determined_winners[2].party_id == 'A'
    assert outcome.determined_winners[2].party_name == 'Alpha'
    assert [p.votes for p in outcome.party_vote_summary] == [114, 76]
    assert 'lb2' in outcome.all_relevant_individuals


def test_process_mmp_overhang():
    election, candidates = _mmp_election(
        [
            Candidate('a1', party_id='A', votes=100),
            Candidate('a2', party_id='A', votes=90),
            Candidate('a3', party_id='A', votes=80),
            Candidate('b1', party_id='B', votes=50),
        ],
        {
            'A': [Candidate('la1', polling=50)],
            'B': [Candidate('lb1', polling=50), Candidate('lb2', polling=50)],
        },
        seats=4,
        n_constituency=3,
    )
    outcome = electsim.evaluate.mixed.process_mmp_results(
        election, [], candidates, 320, 4
    )
    assert outcome.party_seat_summary == {'A': 3, 'B': 6}
    assert outcome.seats_to_fill == 9
    # the B list is too short to fill all its seats
    assert [w.id for w in outcome.determined_winners] == [
        'a1', 'a2', 'a3', 'lb1', 'lb2'
    ]


def test_process_mmp_independent_winner():
    election, candidates = _mmp_election(
        [
            Candidate('a1', party_id='A', votes=100),
            Candidate('i1', votes=90),
            Candidate('b1', party_id='B', votes=20),
        ],
        {
            'A': [Candidate('la1', polling=50)],
            'B': [Candidate('lb1', polling=50)],
        },
        seats=4,
        n_constituency=2,
    )
    outcome = electsim.evaluate.mixed.process_mmp_results(
        election, [], candidates, 210, 4
    )
    assert outcome.party_seat_summary == {'A': 2, 'B': 2}
    assert outcome.seats_to_fill == 5
    assert outcome.determined_winners[:2] == [
        candidates['a1'], candidates['i1']
    ]


def test_process_mmp_without_constituency_seats():
    election, candidates = _mmp_election(
        [
            Candidate('a1', party_id='A', votes=100),
            Candidate('b1', party_id='B', votes=80),
        ],
        {
            'A': [
                Candidate('la1', polling=40),
                Candidate('la2', polling=40),
                Candidate('la3', polling=40),
            ],
            'B': [Candidate('lb1', polling=40)],
        },
        seats=4,
        n_constituency=0,
    )
    outcome = electsim.evaluate.mixed.process_mmp_results(
        election, [], candidates, 180, 4
    )
    assert outcome.party_seat_summary == {'A': 3, 'B': 1}
    assert outcome.seats_to_fill == 4
    assert sorted(w.id for w in outcome.determined_winners) == [
        'la1', 'la2', 'la3', 'lb1'
    ]


def test_second_vote_without_lists():
    election, candidates = _mmp_election(
        [
            Candidate('a1', party_id='A', votes=100),
            Candidate('a2', party_id='A', votes=50),
            Candidate('i1', votes=90),
        ],
        {},
        seats=4,
        n_constituency=2,
    )
    assert electsim.evaluate.mixed.second_vote(election, candidates) == {
        'A': 150
    }
