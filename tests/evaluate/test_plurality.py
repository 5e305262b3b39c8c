import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import electsim.evaluate.plurality
from electsim.candidate import Candidate, Party
from electsim.election import Election


CANDIDATES = {
    'alice': Candidate('alice', party_id='red', votes=400),
    'bob': Candidate('bob', party_id='blue', votes=350),
    'carol': Candidate('carol', party_id='red', votes=150),
    'dave': Candidate('dave', votes=100),
}


def test_single_seat():
    outcome = electsim.evaluate.plurality.process_fptp_results(
        Election('mayor'), [Party('red', 'Reds', '#f00')],
        CANDIDATES, 1000, 1
    )
    assert outcome.determined_winners == [CANDIDATES['alice']]
    assert outcome.party_seat_summary == {'red': 1}
    assert [(p.id, p.votes) for p in outcome.party_vote_summary] == [
        ('red', 550), ('blue', 350)
    ]
    assert outcome.party_vote_summary[0].name == 'Reds'
    assert outcome.party_vote_summary[1].percentage == 35
    assert outcome.all_relevant_individuals == CANDIDATES


def test_multi_seat():
    outcome = electsim.evaluate.plurality.process_fptp_results(
        Election('board'), [], CANDIDATES, 1000, 4
    )
    assert [w.id for w in outcome.determined_winners] == [
        'alice', 'bob', 'carol', 'dave'
    ]
    assert outcome.party_seat_summary == {'red': 2, 'blue': 1}


def test_tie_by_order():
    candidates = {
        'x': Candidate('x', votes=10),
        'y': Candidate('y', votes=10),
    }
    outcome = electsim.evaluate.plurality.process_fptp_results(
        Election('tied'), [], candidates, 20, 1
    )
    assert outcome.determined_winners == [candidates['x']]
    assert outcome.party_vote_summary == []


def test_no_votes():
    outcome = electsim.evaluate.plurality.process_fptp_results(
        Election('empty'), [], {}, 0, 1
    )
    assert outcome.determined_winners == []
    assert outcome.party_seat_summary == {}
