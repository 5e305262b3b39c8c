'''Party-list proportional representation result processing.

The votes are cast for parties. Seats are allocated to the parties by
highest averages above the electoral threshold of the election, and each
party fills its seats from the top of its list.
'''

import logging
from fractions import Fraction
from typing import Dict, List, Optional

import electsim.util
from electsim.candidate import Candidate, Party, party_lookup
from electsim.election import Election
from electsim.evaluate.proportional import allocate_seats_proportionally
from electsim.outcome import ElectionOutcome, summarize_party_votes

logger = logging.getLogger(__name__)


def party_list_votes(election: Election,
                     candidates: Optional[Dict[str, Candidate]],
                     total_votes_cast: int,
                     ) -> Dict[str, int]:
    '''Determine the votes of the parties with lists.

    If the candidates are party entities, their votes are used directly.
    Otherwise the votes cast are split by the popularity of the parties in
    the political landscape of the election, rounding halves up. If no party
    has any popularity, the votes are split equally, rounding down.
    '''
    if candidates and all(
        cand.is_party_entity for cand in candidates.values()
    ):
        party_votes = {}
        for cand in candidates.values():
            party_votes[cand.id] = party_votes.get(cand.id, 0) + cand.votes
        return party_votes
    landscape = {
        party.id: party.popularity or 0
        for party in election.political_landscape
    }
    weights = {
        party_id: max(landscape.get(party_id, 0), 0)
        for party_id in election.party_lists
    }
    if not weights:
        return {}
    weight_total = sum(weights.values())
    if weight_total <= 0:
        logger.warning(
            '%s: no popularity for any list party, splitting votes equally',
            election.id
        )
        equal_share = total_votes_cast // len(weights)
        return {party_id: equal_share for party_id in weights}
    return {
        party_id: electsim.util.round_half_up(
            Fraction(weight) / Fraction(weight_total) * total_votes_cast
        )
        for party_id, weight in weights.items()
    }


def fill_list_seats(election: Election,
                    seats: Dict[str, int],
                    parties: Dict[str, Party],
                    skip_ids: frozenset = frozenset(),
                    ) -> List[Candidate]:
    '''Fill the seats of each party from the top of its list.

    Candidates in skip_ids (such as those already elected in constituencies)
    are passed over. If a list runs out of candidates, the remaining seats
    of the party stay empty.
    '''
    elected = []
    for party_id, n_seats in seats.items():
        if n_seats <= 0:
            continue
        party = parties.get(party_id)
        party_name = party.name if party else party_id
        available = [
            cand for cand in election.party_lists.get(party_id, [])
            if cand.id not in skip_ids
        ]
        if len(available) < n_seats:
            logger.warning(
                '%s: party %s won %d list seats but has only %d list'
                ' candidates available, %d seats stay empty',
                election.id, party_id, n_seats, len(available),
                n_seats - len(available)
            )
        for cand in available[:n_seats]:
            elected.append(cand.with_party(party_id, party_name))
    return elected


def process_party_list_pr_results(election: Election,
                                  all_parties: List[Party],
                                  candidates: Optional[Dict[str, Candidate]],
                                  total_votes_cast: int,
                                  seats_to_fill: int,
                                  **context,
                                  ) -> ElectionOutcome:
    '''Evaluate a party-list proportional election.

    :param election: The election being evaluated; provides the party lists,
        the political landscape, the threshold and the allocation method.
    :param all_parties: Known parties, for names and colors in the summary.
    :param candidates: Party entities with their votes, or None to split
        the votes by the political landscape.
    :param total_votes_cast: Total votes cast in the election.
    :param seats_to_fill: Number of seats to allocate.
    '''
    party_votes = party_list_votes(election, candidates, total_votes_cast)
    seats = allocate_seats_proportionally(
        party_votes,
        seats_to_fill,
        threshold_percent=election.pr_threshold_percent,
        method=election.pr_allocation_method,
    )
    parties = party_lookup(
        list(election.political_landscape) + list(all_parties)
    )
    winners = fill_list_seats(election, seats, parties)
    individuals = {
        cand.id: cand for cand in election.list_candidates()
    }
    logger.info(
        '%s: list seats %s, %d of %d seats filled',
        election.id, seats, len(winners), seats_to_fill
    )
    return ElectionOutcome(
        determined_winners=winners,
        party_vote_summary=summarize_party_votes(
            party_votes, all_parties, total_votes_cast
        ),
        party_seat_summary=seats,
        seats_to_fill=seats_to_fill,
        all_relevant_individuals=individuals,
    )
