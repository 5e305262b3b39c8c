'''Distribution of cast votes among candidates according to their polling.

The total number of votes is split so that every candidate gets the integer
part of its proportional share first and the votes left over after flooring
are given out one by one, best polling candidates first. The result always
sums exactly to the total number of votes cast.
'''

import logging
import math
from fractions import Fraction
from typing import Dict, Iterable

from electsim.candidate import Candidate

logger = logging.getLogger(__name__)


def distribute_votes_to_candidates(candidates: Iterable[Candidate],
                                   total_votes: int,
                                   log_id: str = 'election',
                                   ) -> Dict[str, Candidate]:
    '''Split the total votes among candidates proportionally to their polling.

    If no candidate has any polling, the votes are split equally and the
    remainder goes to the first candidates in input order.

    :param candidates: Candidates to distribute the votes to. They are not
        modified; copies with the votes set are returned.
    :param total_votes: Total number of votes cast. Negative numbers are
        treated as zero.
    :param log_id: Identifier of the election for log messages.
    :returns: Candidate copies with assigned votes, keyed by candidate
        identifier in input order.
    '''
    candidates = list(candidates)
    if not candidates:
        return {}
    if total_votes < 0:
        logger.warning(
            '%s: negative number of votes %s, distributing none',
            log_id, total_votes
        )
        total_votes = 0
    pollings = [_polling(cand) for cand in candidates]
    polling_sum = sum(pollings)
    if polling_sum <= 0:
        logger.debug(
            '%s: no polling for any candidate, splitting %d votes equally',
            log_id, total_votes
        )
        base, remainder = divmod(total_votes, len(candidates))
        votes = [
            base + (1 if i < remainder else 0)
            for i in range(len(candidates))
        ]
    else:
        votes = [
            math.floor(total_votes * polling / polling_sum)
            for polling in pollings
        ]
        leftover = total_votes - sum(votes)
        by_polling = sorted(
            range(len(candidates)),
            key=lambda i: pollings[i],
            reverse=True
        )
        for k in range(leftover):
            votes[by_polling[k % len(by_polling)]] += 1
        residual = total_votes - sum(votes)
        if residual:
            votes[by_polling[0]] += residual
    logger.debug(
        '%s: distributed %d votes among %d candidates',
        log_id, total_votes, len(candidates)
    )
    return {
        cand.id: cand.with_votes(n_votes)
        for cand, n_votes in zip(candidates, votes)
    }


def _polling(candidate: Candidate) -> Fraction:
    polling = candidate.polling
    if polling is None or not math.isfinite(polling) or polling < 0:
        return Fraction(0)
    return Fraction(polling)
