'''Various utility functions for other modules of Electsim.

There should normally be no need to use these functions directly.
'''

import math
import operator
import zlib
from fractions import Fraction
from typing import Any, List, Tuple, Dict, Union
from numbers import Number


MASK64 = (1 << 64) - 1


def sorted_votes(votes: Dict[Any, Number],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return votes items sorted by value.

    The sort is stable, so items with equal values keep their input order.
    '''
    return list(sorted(
        votes.items(),
        key=operator.itemgetter(1),
        reverse=descending
    ))


def round_half_up(value: Union[int, float, Fraction]) -> int:
    '''Round to the nearest integer, halves going towards positive infinity.'''
    return math.floor(Fraction(value) + Fraction(1, 2))


def exact_shares(weights: Dict[Any, Number],
                 total: int = 100,
                 ) -> Dict[Any, Fraction]:
    '''Scale the weights so that they sum up to total exactly.

    If all weights are zero, the total is split equally.

    :param weights: Nonnegative weights keyed by their owners.
    :param total: The total to scale to.
    '''
    if not weights:
        return {}
    weight_sum = sum(Fraction(w) for w in weights.values())
    if weight_sum <= 0:
        return {key: Fraction(total, len(weights)) for key in weights}
    return {
        key: Fraction(weight) * total / weight_sum
        for key, weight in weights.items()
    }


def largest_remainder_round(shares: Dict[Any, Number],
                            total: int = 100,
                            ) -> Dict[Any, int]:
    '''Round shares to integers that sum up to total exactly.

    Every share is floored first and the remaining units are given one by one
    to the shares with the largest fractional parts. Equal fractional parts
    are resolved by input order.

    :param shares: Nonnegative shares whose sum is total.
    :param total: The required integer sum.
    '''
    floors = {}
    remainders = {}
    for key, share in shares.items():
        share = Fraction(share)
        floors[key] = math.floor(share)
        remainders[key] = share - floors[key]
    leftover = total - sum(floors.values())
    if leftover > 0:
        ordered = sorted_votes(remainders)
        for i in range(leftover):
            floors[ordered[i % len(ordered)][0]] += 1
    return floors


def unit_hash(*parts: Any) -> float:
    '''Hash the given parts to a float in [0, 1) deterministically.

    Unlike the builtin ``hash()``, the result is stable across interpreter
    runs. The CRC32 of the string representation is mixed by the SplitMix64
    finalizer to spread nearby inputs over the whole interval.
    '''
    key = '|'.join(str(part) for part in parts).encode('utf8')
    return (splitmix64(zlib.crc32(key)) >> 11) / float(1 << 53)


def splitmix64(value: int) -> int:
    z = (value + 0x9E3779B97F4A7C15) & MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return z ^ (z >> 31)
