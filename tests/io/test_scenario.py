import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import electsim.io.core
import electsim.io.scenario
import electsim.system


SCENARIO = {
    'election': {
        'id': 'parliament',
        'electoral_system': 'PartyListPR',
        'seats_to_fill': 5,
        'party_lists': {
            'red': [{'id': 'r1', 'name': 'Ruth'}, {'id': 'r2'}, {'id': 'r3'}],
            'blue': [{'id': 'b1'}, {'id': 'b2', 'party_id': 'blue-2'}],
        },
        'political_landscape': [
            {'id': 'red', 'popularity': 60},
            {'id': 'blue', 'popularity': 40},
        ],
        'total_eligible_voters': 1000,
        'regions': [
            {'id': 'USA_OH', 'political_landscape': [
                {'id': 'red', 'popularity': 30},
            ]},
        ],
    },
    'parties': [
        {'id': 'red', 'name': 'Reds', 'color': '#ff0000'},
        {'id': 'blue', 'name': 'Blues'},
    ],
    'polling_overrides': {'USA_OH': {'r1': 55, 'b1': 45}},
}


def test_loads():
    scenario = electsim.io.scenario.loads(json.dumps(SCENARIO))
    election = scenario.election
    assert election.id == 'parliament'
    assert election.seats_to_fill == 5
    assert [c.id for c in election.party_lists['red']] == ['r1', 'r2', 'r3']
    assert election.party_lists['red'][0].name == 'Ruth'
    assert election.party_lists['red'][0].party_id == 'red'
    assert election.party_lists['blue'][1].party_id == 'blue-2'
    assert election.political_landscape[0].popularity == 60
    assert election.regions[0].party_popularity('red') == 30
    assert [p.name for p in scenario.parties] == ['Reds', 'Blues']
    assert scenario.simulated is None
    assert scenario.polling_overrides == {'USA_OH': {'r1': 55, 'b1': 45}}


def test_load_file():
    scenario = electsim.io.scenario.load(io.StringIO(json.dumps(SCENARIO)))
    outcome = electsim.system.calculate_election_outcome(
        scenario.election, scenario.parties, scenario.simulated,
        random_state=1,
    )
    assert outcome.party_seat_summary == {'red': 3, 'blue': 2}


def test_simulated():
    scenario = electsim.io.scenario.loads(json.dumps({
        'election': {'id': 'mayor', 'mmp': {
            'num_constituency_seats': 1,
            'constituency_candidates_by_party': {'red': [{'id': 'r1'}]},
            'independent_constituency_candidates': [{'id': 'i1'}],
        }},
        'simulated': {
            'total_expected_votes': 300,
            'voter_turnout_percentage': 60,
            'candidates': [{'id': 'x', 'votes': 200}, {'id': 'y', 'votes': 100}],
        },
    }))
    assert scenario.simulated.total_expected_votes == 300
    assert [c.votes for c in scenario.simulated.candidates] == [200, 100]
    mmp = scenario.election.mmp
    assert mmp.num_constituency_seats == 1
    assert [c.id for c in mmp.all_constituency_candidates()] == ['r1', 'i1']
    assert mmp.constituency_candidates_by_party['red'][0].party_id == 'red'
    assert mmp.independent_constituency_candidates[0].is_independent


@pytest.mark.parametrize('text', [
    'not json at all',
    '[1, 2, 3]',
    '{}',
    '{"election": []}',
    '{"election": {"seats_to_fill": 3}}',
    '{"election": {"id": "e", "seats_to_fill": "many"}}',
    '{"election": {"id": "e", "candidates": [{"name": "nameless"}]}}',
    '{"election": {"id": "e", "candidates": [{"id": ""}]}}',
    '{"election": {"id": "e", "candidates": [{"id": "x", "shoe_size": 9}]}}',
    '{"election": {"id": "e", "candidates": ["x"]}}',
    '{"election": {"id": "e", "regions": [{"id": "r", "area": 5}]}}',
    '{"election": {"id": "e"}, "parties": [{"id": "p", "leader": "x"}]}',
    '{"election": {"id": "e"}, "simulated": {"candidates": []}}',
])
def test_invalid(text):
    with pytest.raises(electsim.io.scenario.ScenarioParseError):
        electsim.io.scenario.loads(text)


def test_error_hierarchy():
    assert issubclass(
        electsim.io.scenario.ScenarioParseError, electsim.io.core.ParseError
    )
