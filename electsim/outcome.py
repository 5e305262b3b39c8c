"""Containers for election outcomes."""

import dataclasses
import enum
from fractions import Fraction
from numbers import Real
from typing import Any, Dict, List, Optional

from electsim.candidate import Candidate, Party


class WinnerAssignmentType(enum.Enum):
    SINGLE_HOLDER = 'SINGLE_HOLDER'
    MEMBERS_ARRAY = 'MEMBERS_ARRAY'


@dataclasses.dataclass
class WinnerAssignment:
    type: WinnerAssignmentType
    winners: List[Candidate]

    @classmethod
    def for_seats(cls, seats_to_fill: int, winners: List[Candidate]):
        return cls(
            type=(
                WinnerAssignmentType.MEMBERS_ARRAY if seats_to_fill > 1
                else WinnerAssignmentType.SINGLE_HOLDER
            ),
            winners=winners,
        )


@dataclasses.dataclass
class PartyVoteSummary:
    """Votes received by a party, with its share of all votes cast."""
    id: str
    name: str
    color: str
    votes: int
    percentage: Fraction


@dataclasses.dataclass
class ElectionOutcome:
    """Outcome of a single election contest.

    The seats to fill may be greater than requested for mixed-member
    proportional elections where overhang seats were added.
    """
    determined_winners: List[Candidate]
    party_vote_summary: List[PartyVoteSummary]
    party_seat_summary: Dict[str, int]
    seats_to_fill: int
    all_relevant_individuals: Dict[str, Candidate]
    winner_assignment: Optional[WinnerAssignment] = None
    total_votes_cast: int = 0
    voter_turnout_percentage: Real = 0
    entity_id: Optional[str] = None
    electoral_college: Optional[Any] = None


def summarize_party_votes(party_votes: Dict[str, int],
                          all_parties: List[Party],
                          total_votes_cast: int,
                          ) -> List[PartyVoteSummary]:
    '''Produce a party vote summary sorted by votes in descending order.

    Parties not found among all_parties are reported under their identifier
    with the default color.

    :param party_votes: Votes per party identifier.
    :param all_parties: Known parties to take the names and colors from.
    :param total_votes_cast: Total votes to compute the percentages from.
    '''
    parties = {party.id: party for party in all_parties}
    summary = []
    for party_id, votes in party_votes.items():
        party = parties.get(party_id)
        summary.append(PartyVoteSummary(
            id=party_id,
            name=party.name if party else party_id,
            color=party.color if party else Party.DEFAULT_COLOR,
            votes=votes,
            percentage=(
                Fraction(votes * 100, total_votes_cast)
                if total_votes_cast > 0 else Fraction(0)
            ),
        ))
    return sorted(summary, key=lambda item: item.votes, reverse=True)
