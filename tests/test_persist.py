import sys
import os
import json
import enum
from fractions import Fraction
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import electsim.persist
import electsim.evaluate.mixed
import electsim.evaluate.proportional
from electsim.candidate import Candidate, Party
from electsim.outcome import (
    ElectionOutcome, WinnerAssignment, WinnerAssignmentType,
    summarize_party_votes
)


SERIALIZABLE_OBJECTS = [
    electsim.evaluate.proportional.HighestAverages('sainte_lague'),
    electsim.evaluate.mixed.OverhangResolver(threshold_percent=Fraction(5)),
    Candidate('alice', party_id='red', attributes={'charisma': 70}),
    Party('red', 'Reds', '#ff0000', popularity=Decimal('35.5')),
]


@pytest.mark.parametrize('obj', SERIALIZABLE_OBJECTS)
def test_json_ready(obj):
    dict_form = electsim.persist.to_dict(obj)
    assert dict_form['class'] == electsim.persist.scoped_class_name(obj)
    assert json.loads(json.dumps(dict_form)) == dict_form


def test_callable():
    evaluator = electsim.evaluate.proportional.HighestAverages('d_hondt')
    assert evaluator.to_dict()['divisor_function'] == {
        'callable': 'electsim.component.divisor.d_hondt'
    }


def test_candidate():
    assert Candidate('bob', votes=10).to_dict() == {
        'class': 'electsim.candidate.Candidate',
        'id': 'bob',
        'name': 'bob',
        'party_id': None,
        'party_name': None,
        'attributes': {},
        'polling': 0,
        'votes': 10,
        'is_player': False,
        'name_recognition': 0,
        'ideology': None,
        'is_party_entity': False,
    }


def test_outcome():
    winner = Candidate('alice', party_id='red', votes=600)
    outcome = ElectionOutcome(
        determined_winners=[winner],
        party_vote_summary=summarize_party_votes(
            {'red': 600, 'blue': 300}, [Party('red', 'Reds')], 900
        ),
        party_seat_summary={'red': 1},
        seats_to_fill=1,
        all_relevant_individuals={'alice': winner},
        winner_assignment=WinnerAssignment.for_seats(1, [winner]),
    )
    dict_form = electsim.persist.to_dict(outcome)
    json.dumps(dict_form)
    assert dict_form['winner_assignment']['type'] == 'SINGLE_HOLDER'
    assert dict_form['determined_winners'][0]['id'] == 'alice'
    assert dict_form['party_vote_summary'][0]['percentage'] == pytest.approx(
        200 / 3
    )
    assert dict_form['party_vote_summary'][1]['color'] == Party.DEFAULT_COLOR
    assert dict_form['electoral_college'] is None


def test_winner_assignment_type():
    assert WinnerAssignment.for_seats(3, []).type == (
        WinnerAssignmentType.MEMBERS_ARRAY
    )


def test_unserializable():
    class Opaque:
        __slots__ = ()
    with pytest.raises(ValueError):
        electsim.persist.to_dict(Opaque())


def test_enum_keys():
    class Color(enum.Enum):
        RED = 'red'
    assert electsim.persist.to_dict({Color.RED: Color.RED}) == {
        'Color.RED': 'red'
    }
