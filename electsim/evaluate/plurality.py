'''First-past-the-post result processing.

Turns candidates with votes into an election outcome where the candidates
with the most votes win the seats. The same processing serves the other
plurality systems that elect the top vote-getters (single non-transferable
vote, block vote, plurality-at-large).
'''

import logging
from typing import Dict, List

import electsim.evaluate.core
from electsim.candidate import Candidate, Party
from electsim.election import Election
from electsim.outcome import ElectionOutcome, summarize_party_votes

logger = logging.getLogger(__name__)


def process_fptp_results(election: Election,
                         all_parties: List[Party],
                         candidates: Dict[str, Candidate],
                         total_votes_cast: int,
                         seats_to_fill: int,
                         **context,
                         ) -> ElectionOutcome:
    '''Elect the seats_to_fill candidates with the most votes.

    Equal vote counts are ranked by the order of the candidates. Party votes
    are summed over all candidates; party seats are counted over the winners.

    :param election: The election being evaluated.
    :param all_parties: Known parties, for names and colors in the summary.
    :param candidates: Candidates with their votes, keyed by identifier.
    :param total_votes_cast: Total votes cast in the election.
    :param seats_to_fill: Number of winners to elect.
    '''
    plurality = electsim.evaluate.core.Plurality()
    winner_ids = plurality.evaluate(
        {cand_id: cand.votes for cand_id, cand in candidates.items()},
        seats_to_fill
    )
    winners = [candidates[cand_id] for cand_id in winner_ids]
    party_votes = {}
    for cand in candidates.values():
        if cand.party_id is not None:
            party_votes[cand.party_id] = (
                party_votes.get(cand.party_id, 0) + cand.votes
            )
    party_seats = {}
    for winner in winners:
        if winner.party_id is not None:
            party_seats[winner.party_id] = (
                party_seats.get(winner.party_id, 0) + 1
            )
    logger.info(
        '%s: elected %s by plurality',
        election.id, ', '.join(str(winner.id) for winner in winners)
    )
    return ElectionOutcome(
        determined_winners=winners,
        party_vote_summary=summarize_party_votes(
            party_votes, all_parties, total_votes_cast
        ),
        party_seat_summary=party_seats,
        seats_to_fill=seats_to_fill,
        all_relevant_individuals=dict(candidates),
    )
