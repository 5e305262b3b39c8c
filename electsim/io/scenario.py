"""Election scenarios in JSON.

A scenario file is a JSON object with the following keys:

-   ``election`` (required): the election, with keys named as the
    :class:`electsim.election.Election` attributes. Candidates are objects
    with keys named as the :class:`electsim.candidate.Candidate` parameters,
    parties as the :class:`electsim.candidate.Party` parameters and regions
    as the :class:`electsim.candidate.Region` parameters.
-   ``parties``: all known parties.
-   ``simulated``: votes already counted, with keys
    ``total_expected_votes``, ``voter_turnout_percentage`` and
    ``candidates``.
-   ``polling_overrides``: raw electoral college polling by state and
    candidate identifier.

Use :func:`load` for files and :func:`loads` for strings.
"""

import dataclasses
import json
from typing import Any, Dict, List, Optional

import electsim.io.core
from electsim.candidate import Candidate, CandidateError, Party, Region
from electsim.election import Election, MMPSetup, SimulatedElectionData


class ScenarioParseError(electsim.io.core.ParseError):
    pass


@dataclasses.dataclass
class Scenario:
    """A container for data loadable from a scenario file."""
    election: Election
    parties: List[Party] = dataclasses.field(default_factory=list)
    simulated: Optional[SimulatedElectionData] = None
    polling_overrides: Optional[Dict[str, Dict[str, float]]] = None


def load_text(text: str) -> Scenario:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ScenarioParseError(f'invalid scenario JSON: {e}') from e
    if not isinstance(data, dict):
        raise ScenarioParseError('scenario must be a JSON object')
    if 'election' not in data:
        raise ScenarioParseError('scenario has no election')
    simulated = data.get('simulated')
    return Scenario(
        election=_parse_election(data['election']),
        parties=[_parse_party(party) for party in data.get('parties', [])],
        simulated=(
            _parse_simulated(simulated) if simulated is not None else None
        ),
        polling_overrides=data.get('polling_overrides'),
    )


load, loads = electsim.io.core.loaders(load_text)


def _parse_election(data: Dict[str, Any]) -> Election:
    _check_object(data, 'election')
    if 'id' not in data:
        raise ScenarioParseError('election has no id')
    mmp = data.get('mmp')
    try:
        return Election(
            id=data['id'],
            electoral_system=data.get('electoral_system', 'FPTP'),
            seats_to_fill=int(data.get('seats_to_fill', 1)),
            candidates=[
                _parse_candidate(cand) for cand in data.get('candidates', [])
            ],
            party_lists={
                party_id: [
                    _parse_candidate(cand, party_id=party_id)
                    for cand in party_list
                ]
                for party_id, party_list in data.get('party_lists', {}).items()
            },
            political_landscape=[
                _parse_party(party)
                for party in data.get('political_landscape', [])
            ],
            pr_threshold_percent=data.get('pr_threshold_percent', 0),
            pr_allocation_method=data.get('pr_allocation_method', 'd_hondt'),
            mmp=_parse_mmp(mmp) if mmp is not None else None,
            total_eligible_voters=int(data.get('total_eligible_voters', 0)),
            entity_id=data.get('entity_id'),
            regions=[_parse_region(region) for region in data.get('regions', [])],
        )
    except (TypeError, ValueError) as e:
        raise ScenarioParseError(f'invalid election definition: {e}') from e


def _parse_mmp(data: Dict[str, Any]) -> MMPSetup:
    _check_object(data, 'mmp')
    return MMPSetup(
        num_constituency_seats=data.get('num_constituency_seats'),
        constituency_candidates_by_party={
            party_id: [
                _parse_candidate(cand, party_id=party_id) for cand in cands
            ]
            for party_id, cands in data.get(
                'constituency_candidates_by_party', {}
            ).items()
        },
        independent_constituency_candidates=[
            _parse_candidate(cand)
            for cand in data.get('independent_constituency_candidates', [])
        ],
    )


def _parse_simulated(data: Dict[str, Any]) -> SimulatedElectionData:
    _check_object(data, 'simulated')
    try:
        return SimulatedElectionData(
            total_expected_votes=int(data['total_expected_votes']),
            voter_turnout_percentage=data.get('voter_turnout_percentage', 0),
            candidates=[
                _parse_candidate(cand) for cand in data.get('candidates', [])
            ],
        )
    except KeyError as e:
        raise ScenarioParseError(f'simulated data missing {e}') from e


def _parse_candidate(data: Dict[str, Any],
                     party_id: Optional[str] = None,
                     ) -> Candidate:
    _check_object(data, 'candidate')
    params = dict(data)
    if party_id is not None:
        params.setdefault('party_id', party_id)
    try:
        return Candidate(**params)
    except (TypeError, CandidateError) as e:
        raise ScenarioParseError(f'invalid candidate {data!r}: {e}') from e


def _parse_party(data: Dict[str, Any]) -> Party:
    _check_object(data, 'party')
    try:
        return Party(**data)
    except TypeError as e:
        raise ScenarioParseError(f'invalid party {data!r}: {e}') from e


def _parse_region(data: Dict[str, Any]) -> Region:
    _check_object(data, 'region')
    params = dict(data)
    params['political_landscape'] = [
        _parse_party(party) for party in data.get('political_landscape', [])
    ]
    try:
        return Region(**params)
    except TypeError as e:
        raise ScenarioParseError(f'invalid region {data!r}: {e}') from e


def _check_object(data: Any, what: str) -> None:
    if not isinstance(data, dict):
        raise ScenarioParseError(f'{what} must be a JSON object, got {data!r}')
