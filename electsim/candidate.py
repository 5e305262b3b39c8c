'''Candidates, parties and regions taking part in an election.

Contains the definitions of the election participants (:class:`Candidate`
and :class:`Party`) and of the regions (:class:`Region`) that the electoral
college is composed of.

These objects are owned by the caller and treated as immutable by all
evaluators. The only value an evaluator ever assigns is the number of votes,
and it always does so on a copy (see :meth:`Candidate.with_votes`).
'''

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from electsim.persist import simple_serialization


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


@simple_serialization
class Candidate:
    '''A candidate standing for the election.

    A candidate is either an individual (usually with a party affiliation)
    or, in party-list elections, a whole party entity standing in place of
    its list.

    :param id: Identifier of the candidate, unique within the election.
    :param name: Display name.
    :param party_id: Identifier of the party the candidate stands for, if any.
        Candidates with no party or with a party identifier starting with
        ``independent`` are considered independents.
    :param party_name: Display name of the party.
    :param attributes: Numeric personal traits on a 0-100 scale, such as
        ``charisma`` or ``integrity``.
    :param polling: Current polling standing used as the weight when
        distributing votes.
    :param votes: Number of votes received.
    :param is_player: Whether the candidate is controlled by the player.
        Player candidates are polled by a simplified trait formula in the
        electoral college.
    :param name_recognition: Name recognition on a 0-100 scale.
    :param ideology: Free-form ideology label.
    :param is_party_entity: Whether the candidate is a whole party rather
        than an individual.
    '''
    def __init__(self,
                 id: str,
                 name: Optional[str] = None,
                 party_id: Optional[str] = None,
                 party_name: Optional[str] = None,
                 attributes: Optional[Dict[str, float]] = None,
                 polling: Optional[float] = 0,
                 votes: int = 0,
                 is_player: bool = False,
                 name_recognition: float = 0,
                 ideology: Optional[str] = None,
                 is_party_entity: bool = False,
                 ):
        if id is None or id == '':
            raise CandidateError(id, 'a nonempty identifier')
        self.id = id
        self.name = name if name is not None else id
        self.party_id = party_id
        self.party_name = party_name
        self.attributes = attributes if attributes is not None else {}
        self.polling = polling
        self.votes = votes
        self.is_player = is_player
        self.name_recognition = name_recognition
        self.ideology = ideology
        self.is_party_entity = is_party_entity

    @property
    def is_independent(self) -> bool:
        return (
            self.party_id is None
            or str(self.party_id).startswith('independent')
        )

    def with_votes(self, votes: int) -> Candidate:
        '''Return a copy of the candidate with the given number of votes.'''
        copied = copy.copy(self)
        copied.attributes = dict(self.attributes)
        copied.votes = votes
        return copied

    def with_party(self, party_id: str, party_name: Optional[str]
                   ) -> Candidate:
        '''Return a copy of the candidate tagged with the given party.'''
        copied = copy.copy(self)
        copied.attributes = dict(self.attributes)
        copied.party_id = party_id
        copied.party_name = party_name
        return copied

    def __eq__(self, other) -> bool:
        return isinstance(other, Candidate) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f'<Candidate({self.id}'
            + (f',{self.party_id}' if self.party_id is not None else '')
            + f',votes={self.votes})>'
        )


@simple_serialization
class Party:
    '''A political party.

    :param id: Identifier of the party.
    :param name: Display name.
    :param color: Display color as a hex string.
    :param popularity: Popularity of the party; used as its weight in
        political landscapes of elections and regions.
    '''
    DEFAULT_COLOR = '#888888'

    def __init__(self,
                 id: str,
                 name: Optional[str] = None,
                 color: Optional[str] = None,
                 popularity: float = 0,
                 ):
        self.id = id
        self.name = name if name is not None else id
        self.color = color if color is not None else self.DEFAULT_COLOR
        self.popularity = popularity

    def __eq__(self, other) -> bool:
        return isinstance(other, Party) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f'<Party({self.id})>'


@simple_serialization
class Region:
    '''A region (state) voting as a unit in the electoral college.

    :param id: Identifier of the region, such as ``USA_CA``. Used to look up
        its electoral votes.
    :param name: Display name.
    :param population: Population of the region.
    :param political_landscape: Parties with their popularity in this region.
    '''
    def __init__(self,
                 id: str,
                 name: Optional[str] = None,
                 population: int = 0,
                 political_landscape: Optional[List[Party]] = None,
                 ):
        self.id = id
        self.name = name if name is not None else id
        self.population = population
        self.political_landscape = (
            political_landscape if political_landscape is not None else []
        )

    def party_popularity(self, party_id: Optional[str]) -> Optional[float]:
        '''Return the popularity of the given party in this region.

        Returns None if the party is not present in the region.
        '''
        for party in self.political_landscape:
            if party.id == party_id:
                return party.popularity
        return None

    def __repr__(self) -> str:
        return f'<Region({self.id})>'


def party_lookup(parties: List[Party]) -> Dict[str, Party]:
    return {party.id: party for party in parties}
