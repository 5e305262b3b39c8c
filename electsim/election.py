'''Definitions of elections to be evaluated.

An :class:`Election` describes a single contest: its electoral system,
the number of seats, the candidates and party lists, and the settings
specific to some systems (the threshold and allocation method for party-list
proportional representation, the :class:`MMPSetup` for mixed-member
proportional elections and the regions for the electoral college).
'''

import dataclasses
from numbers import Real
from typing import Any, Dict, List, Optional

from electsim.candidate import Candidate, Party, Region


@dataclasses.dataclass
class MMPSetup:
    """The constituency tier of a mixed-member proportional election."""
    num_constituency_seats: Optional[int] = None
    constituency_candidates_by_party: Dict[str, List[Candidate]] = \
        dataclasses.field(default_factory=dict)
    independent_constituency_candidates: List[Candidate] = \
        dataclasses.field(default_factory=list)

    def all_constituency_candidates(self) -> List[Candidate]:
        candidates = []
        for party_candidates in self.constituency_candidates_by_party.values():
            candidates.extend(party_candidates)
        candidates.extend(self.independent_constituency_candidates)
        return candidates


@dataclasses.dataclass
class Election:
    """A single election contest."""
    id: str
    electoral_system: str = 'FPTP'
    seats_to_fill: int = 1
    candidates: List[Candidate] = dataclasses.field(default_factory=list)
    party_lists: Dict[str, List[Candidate]] = \
        dataclasses.field(default_factory=dict)
    political_landscape: List[Party] = dataclasses.field(default_factory=list)
    pr_threshold_percent: Real = 0
    pr_allocation_method: str = 'd_hondt'
    mmp: Optional[MMPSetup] = None
    total_eligible_voters: int = 0
    entity_id: Optional[str] = None
    regions: List[Region] = dataclasses.field(default_factory=list)
    campaign_context: Optional[Any] = None

    def list_candidates(self) -> List[Candidate]:
        '''Return all party list candidates, tagged with their parties.'''
        candidates = []
        for party_id, party_list in self.party_lists.items():
            for cand in party_list:
                if cand.party_id is None:
                    cand = cand.with_party(party_id, None)
                candidates.append(cand)
        return candidates


@dataclasses.dataclass
class SimulatedElectionData:
    """Votes already counted for the candidates by an external simulation."""
    total_expected_votes: int
    voter_turnout_percentage: Real
    candidates: List[Candidate] = dataclasses.field(default_factory=list)
