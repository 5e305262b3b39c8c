'''Distribution evaluators that are usually called proportional.

This contains the highest averages evaluator used in party-list elections,
with the D'Hondt and Sainte-Laguë divisors, and the
:func:`allocate_seats_proportionally` function that wraps it together with
an electoral threshold into a single call that never fails.
'''

import collections.abc
import logging
from fractions import Fraction
from typing import Any, Dict, Iterable, Union, Callable
from numbers import Number

import electsim.component.divisor
import electsim.evaluate.core
from electsim.evaluate.threshold import RelativeThreshold
from electsim.persist import simple_serialization

logger = logging.getLogger(__name__)


@simple_serialization
class HighestAverages(electsim.evaluate.core.Distributor):
    '''Distribute seats proportionally by ordering divided vote counts.

    Divides the vote count for each party by an increasing sequence of divisors
    (usually small integers), sorts these quotients and awards a seat for each
    of the first n_seats quotients.

    This includes the popular proportional party-list systems D'Hondt and
    Sainte-Laguë/Webster. The result is usually quite close to
    proportionality and avoids the Alabama paradox of largest remainder
    systems. However, it usually favors either large or smaller parties,
    depending on the choice of the divisor function.

    Equal quotients are ordered by the original vote counts of the parties,
    larger first; if those are equal too, by the order of the parties in the
    input. The result is thus always fully determined.

    :param divisor_function: A callable producing the divisor from the number
        of seats awarded to the party so far. For example, the D'Hondt
        divisor (which uses the natural numbers sequence) would always return
        the number of currently held seats raised by one. The common divisor
        functions can be referenced by string name from the
        :mod:`electsim.component.divisor` module.
    '''
    def __init__(self,
                 divisor_function: Union[
                     str, Callable[[int], Number]
                 ] = 'd_hondt',
                 ):
        self.divisor_function = electsim.component.divisor.construct(
            divisor_function
        )

    def evaluate(self,
                 votes: Dict[Any, Number],
                 n_seats: int,
                 ) -> Dict[Any, int]:
        '''Distribute seats proportionally by highest averages.

        :param votes: Votes per party.
        :param n_seats: Number of seats to be filled.
        :returns: Seats per party, in input order. Parties with no seats are
            omitted.
        '''
        if n_seats <= 0 or not votes:
            return {}
        quotients = []
        for index, (party, n_votes) in enumerate(votes.items()):
            n_votes = Fraction(n_votes)
            for order in range(n_seats):
                quotients.append((
                    n_votes / self.divisor_function(order),
                    n_votes,
                    index,
                    party
                ))
        quotients.sort(key=lambda item: (-item[0], -item[1], item[2]))
        seats = collections.Counter(
            party for _, _, _, party in quotients[:n_seats]
        )
        return {party: seats[party] for party in votes if party in seats}


def allocate_seats_proportionally(party_votes: Union[
                                      Dict[Any, Number],
                                      Iterable[Any],
                                  ],
                                  total_seats: int,
                                  threshold_percent: Number = 0,
                                  method: str = 'd_hondt',
                                  ) -> Dict[Any, int]:
    '''Allocate seats to parties by highest averages above a threshold.

    Parties that get less than threshold_percent of the total votes (among
    the listed parties) are excluded before the allocation. Every listed party
    appears in the result, with zero seats if it gets none.

    The allocation never fails. If there are no votes, no eligible parties or
    no seats, all parties get zero seats; if the method is unknown, a warning
    is logged and all parties get zero seats as well.

    :param party_votes: Either a mapping of party identifiers to votes,
        or an iterable of objects or dictionaries with ``id`` and ``votes``.
    :param total_seats: Number of seats to allocate.
    :param threshold_percent: Electoral threshold in percent of total votes;
        parties reaching it exactly are eligible.
    :param method: Name of the divisor method, such as ``d_hondt`` or
        ``sainte_lague`` (aliases like ``dHondt`` are accepted too).
    :returns: Seats per party, in input order.
    '''
    votes = _party_votes_to_dict(party_votes)
    result = {party: 0 for party in votes}
    try:
        divisor = electsim.component.divisor.construct(method)
    except KeyError:
        logger.warning(
            'unknown seat allocation method %r, allocating no seats', method
        )
        return result
    if total_seats <= 0 or sum(votes.values()) <= 0:
        return result
    passed = set(RelativeThreshold.from_percent(threshold_percent).evaluate(
        votes
    ))
    eligible = {
        party: n_votes for party, n_votes in votes.items() if party in passed
    }
    if not eligible:
        logger.info(
            'no party reached the %s%% threshold, allocating no seats',
            threshold_percent
        )
        return result
    result.update(HighestAverages(divisor).evaluate(eligible, total_seats))
    logger.info(
        'allocated %d seats by %s among %d eligible parties: %s',
        total_seats, method, len(eligible), result
    )
    return result


def _party_votes_to_dict(party_votes) -> Dict[Any, Number]:
    if isinstance(party_votes, collections.abc.Mapping):
        items = party_votes.items()
    else:
        items = []
        for entry in party_votes:
            if isinstance(entry, collections.abc.Mapping):
                items.append((entry['id'], entry['votes']))
            else:
                items.append((entry.id, entry.votes))
    return {
        party: n_votes if n_votes and n_votes > 0 else 0
        for party, n_votes in items
    }
