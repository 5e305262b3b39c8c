'''Mixed-member proportional result processing.

Part of the seats is filled in single-member constituencies by plurality;
the rest are list seats that make the total representation of each party
proportional to its party vote. Where a party wins more constituency seats
than its proportional entitlement (overhang), the legislature is enlarged
by :class:`OverhangResolver` until the entitlement covers the direct wins,
and no party ever loses a seat it won directly.
'''

import dataclasses
import logging
import math
from fractions import Fraction
from typing import Dict, List

import electsim.evaluate.core
from electsim.candidate import Candidate, Party, party_lookup
from electsim.distribute import distribute_votes_to_candidates
from electsim.election import Election, MMPSetup
from electsim.evaluate.listpr import fill_list_seats
from electsim.evaluate.proportional import allocate_seats_proportionally
from electsim.evaluate.threshold import RelativeThreshold
from electsim.outcome import ElectionOutcome, summarize_party_votes
from electsim.persist import simple_serialization

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class OverhangResolution:
    """Party seats after overhang resolution.

    The total seats are the sum of the final party seats, which may exceed
    the allocation size when overhang seats are kept. The resolution has
    converged only if no overhang was left at the allocation size.
    """
    final_seats: Dict[str, int]
    total_seats: int
    allocation_size: int
    iterations: int
    converged: bool


@simple_serialization
class OverhangResolver:
    '''Increase the total number of seats to proportional, keeping overhang.

    Overhang seats arise in mixed-member proportional systems when a party
    gains more seats in the constituencies than its proportional share
    according to the party votes. This calculator enlarges the legislature
    until no party's proportional entitlement falls short of its direct
    wins. In each step, the size is raised to the smallest one at which the
    direct wins of the worst overhanging party would be proportional to its
    share of the party vote, and the entitlement is recomputed.

    The enlargement stops when no party has overhang, when the size stops
    growing or after max_iterations steps. Only the first of these counts as
    converged; otherwise the last computed entitlement is used. Afterwards,
    every party keeps at least its direct wins.

    Parties that fail the threshold or received no party votes never enlarge
    the legislature; they only keep their direct wins.

    :param method: Name of the divisor method for the proportional
        entitlement.
    :param threshold_percent: Electoral threshold for the party vote, in
        percent.
    :param max_iterations: Maximum number of enlargement steps.
    '''
    MAX_ITERATIONS = 50

    def __init__(self,
                 method: str = 'd_hondt',
                 threshold_percent: Fraction = 0,
                 max_iterations: int = MAX_ITERATIONS,
                 ):
        self.method = method
        self.threshold_percent = threshold_percent
        self.max_iterations = max_iterations

    def entitlement(self,
                    party_votes: Dict[str, int],
                    n_seats: int,
                    ) -> Dict[str, int]:
        return allocate_seats_proportionally(
            party_votes,
            n_seats,
            threshold_percent=self.threshold_percent,
            method=self.method,
        )

    def calculate(self,
                  party_votes: Dict[str, int],
                  n_seats: int,
                  direct_wins: Dict[str, int],
                  ) -> OverhangResolution:
        '''Return the final party seats with overhang resolved.

        :param party_votes: Party votes to determine the proportional
            entitlement.
        :param n_seats: Nominal size of the legislature.
        :param direct_wins: Constituency seats won by each party.
        '''
        total_votes = sum(party_votes.values())
        eligible = set(RelativeThreshold.from_percent(
            self.threshold_percent
        ).evaluate(party_votes))
        current_size = n_seats
        allocation_size = n_seats
        entitlement = {}
        iterations = 0
        converged = False
        while iterations < self.max_iterations:
            iterations += 1
            allocation_size = current_size
            entitlement = self.entitlement(party_votes, allocation_size)
            next_size = current_size
            overhanging = []
            for party, n_votes in party_votes.items():
                n_direct = direct_wins.get(party, 0)
                if n_direct <= entitlement.get(party, 0):
                    continue
                if party not in eligible or n_votes <= 0:
                    continue
                overhanging.append(party)
                # the size at which n_direct seats match the vote share
                required = math.ceil(Fraction(n_direct * total_votes, n_votes))
                next_size = max(next_size, required)
            if not overhanging:
                converged = True
                break
            if next_size == current_size:
                logger.info(
                    'overhang of %s remains at %d seats, but the size does'
                    ' not grow any further',
                    ', '.join(overhanging), current_size
                )
                break
            logger.info(
                'overhang of %s at %d seats, enlarging to %d',
                ', '.join(overhanging), current_size, next_size
            )
            current_size = next_size
        if not converged:
            logger.warning(
                'overhang resolution did not converge after %d iterations,'
                ' keeping allocation for %d seats',
                iterations, allocation_size
            )
        final_seats = dict(entitlement)
        for party, n_direct in direct_wins.items():
            final_seats[party] = max(final_seats.get(party, 0), n_direct)
        return OverhangResolution(
            final_seats=final_seats,
            total_seats=sum(final_seats.values()),
            allocation_size=allocation_size,
            iterations=iterations,
            converged=converged,
        )


def count_direct_wins(winners: List[Candidate]) -> Dict[str, int]:
    direct_wins = {}
    for winner in winners:
        if not winner.is_independent:
            direct_wins[winner.party_id] = (
                direct_wins.get(winner.party_id, 0) + 1
            )
    return direct_wins


def second_vote(election: Election,
                candidates: Dict[str, Candidate],
                ) -> Dict[str, int]:
    '''Simulate the party vote of a mixed-member proportional election.

    The total constituency vote is redistributed across all party list
    candidates by their polling and summed by party. If there are no list
    candidates, the constituency votes are summed by party instead.
    Independents do not take part in the party vote.
    '''
    list_candidates = election.list_candidates()
    if list_candidates:
        total_votes = sum(cand.votes for cand in candidates.values())
        sources = distribute_votes_to_candidates(
            list_candidates,
            total_votes,
            log_id=f'{election.id} party vote',
        ).values()
    else:
        sources = candidates.values()
    party_votes = {}
    for cand in sources:
        if not cand.is_independent:
            party_votes[cand.party_id] = (
                party_votes.get(cand.party_id, 0) + cand.votes
            )
    return party_votes


def process_mmp_results(election: Election,
                        all_parties: List[Party],
                        candidates: Dict[str, Candidate],
                        total_votes_cast: int,
                        seats_to_fill: int,
                        **context,
                        ) -> ElectionOutcome:
    '''Evaluate a mixed-member proportional election.

    The reported number of seats to fill is the final size of the
    legislature, including overhang and independent constituency seats.

    :param election: The election being evaluated; provides the
        constituency setup, the party lists, the threshold and the allocation
        method.
    :param all_parties: Known parties, for names and colors in the summary.
    :param candidates: Constituency candidates with their votes.
    :param total_votes_cast: Total votes cast in the election.
    :param seats_to_fill: Nominal size of the legislature.
    '''
    mmp = election.mmp if election.mmp is not None else MMPSetup()
    if mmp.num_constituency_seats is not None:
        n_constituency = mmp.num_constituency_seats
    else:
        n_constituency = seats_to_fill // 2
    constituency_ids = electsim.evaluate.core.Plurality().evaluate(
        {cand_id: cand.votes for cand_id, cand in candidates.items()},
        n_constituency
    )
    constituency_winners = [candidates[cand_id] for cand_id in constituency_ids]
    direct_wins = count_direct_wins(constituency_winners)
    party_votes = second_vote(election, candidates)
    resolution = OverhangResolver(
        method=election.pr_allocation_method,
        threshold_percent=election.pr_threshold_percent,
    ).calculate(party_votes, seats_to_fill, direct_wins)
    list_seats = {
        party: max(0, n_seats - direct_wins.get(party, 0))
        for party, n_seats in resolution.final_seats.items()
    }
    parties = party_lookup(
        list(election.political_landscape) + list(all_parties)
    )
    list_winners = fill_list_seats(
        election, list_seats, parties,
        skip_ids=frozenset(constituency_ids)
    )
    n_independent = sum(
        1 for winner in constituency_winners if winner.is_independent
    )
    final_size = resolution.total_seats + n_independent
    logger.info(
        '%s: %d constituency and %d list seats, legislature of %d'
        ' (nominal %d)',
        election.id, len(constituency_winners), len(list_winners),
        final_size, seats_to_fill
    )
    individuals = dict(candidates)
    for cand in election.list_candidates():
        individuals.setdefault(cand.id, cand)
    return ElectionOutcome(
        determined_winners=constituency_winners + list_winners,
        party_vote_summary=summarize_party_votes(
            party_votes, all_parties, sum(party_votes.values())
        ),
        party_seat_summary=resolution.final_seats,
        seats_to_fill=final_size,
        all_relevant_individuals=individuals,
    )
