'''Electoral college result processing.

The candidates compete state by state; the national result is computed by
:class:`electsim.electoral.engine.ElectoralCollegeEngine` with all states
fully counted.
'''

import logging
from typing import Dict, List, Optional

from electsim.candidate import Candidate, Party
from electsim.election import Election
from electsim.electoral.engine import ElectoralCollegeEngine
from electsim.evaluate.plurality import process_fptp_results
from electsim.outcome import ElectionOutcome

logger = logging.getLogger(__name__)


def process_electoral_college_results(election: Election,
                                      all_parties: List[Party],
                                      candidates: Dict[str, Candidate],
                                      total_votes_cast: int,
                                      seats_to_fill: int,
                                      engine: Optional[
                                          ElectoralCollegeEngine
                                      ] = None,
                                      **context,
                                      ) -> ElectionOutcome:
    '''Evaluate a presidential election through the electoral college.

    The popular vote summary is computed as in a plurality election. The
    winner is the national electoral college winner; if there is none (such
    as in a tie), no winner is determined. Without any regions, the election
    is evaluated by plurality instead.

    :param election: The election being evaluated; provides the regions and
        the campaign context.
    :param all_parties: Known parties, for names and colors in the summary.
    :param candidates: Candidates with their popular votes.
    :param total_votes_cast: Total votes cast in the election.
    :param seats_to_fill: Number of seats; normally 1.
    :param engine: The engine to compute with; a new one is created if not
        given.
    '''
    popular = process_fptp_results(
        election, all_parties, candidates, total_votes_cast, seats_to_fill
    )
    if not election.regions:
        logger.warning(
            '%s: no regions for the electoral college, using plurality',
            election.id
        )
        return popular
    if engine is None:
        engine = ElectoralCollegeEngine()
    college = engine.calculate_electoral_college(
        list(candidates.values()),
        election.campaign_context,
        election.regions,
        use_progressive_reporting=False,
    )
    winners = []
    party_seats = {}
    if college.winner is not None:
        winner = candidates[college.winner.id]
        winners.append(winner)
        if winner.party_id is not None:
            party_seats[winner.party_id] = 1
    elif college.is_tie:
        logger.info('%s: electoral college tie', election.id)
    popular.determined_winners = winners
    popular.party_seat_summary = party_seats
    popular.electoral_college = college
    return popular
