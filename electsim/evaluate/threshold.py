'''Electoral threshold evaluators.

These evaluators serve as preconditions in proportional systems. They are
seatless selectors: they return the list of parties passing the threshold
without being given a number of seats.
'''

from fractions import Fraction
from typing import Any, List, Dict
from numbers import Number

import electsim.util
from electsim.persist import simple_serialization


@simple_serialization
class RelativeThreshold:
    '''Relative threshold seatless selector.

    Selects all parties with more (or equally many) votes than the specified
    fraction of total votes.

    This is a common component in proportional systems that excludes very small
    parties to increase stability of the resulting elected body.

    :param threshold: The relative threshold as a fraction of total votes.
    :param accept_equal: Whether to elect parties that only just reach the
        threshold.
    '''
    def __init__(self,
                 threshold: Number,
                 accept_equal: bool = True,
                 ):
        self.threshold = threshold
        self.accept_equal = accept_equal

    @classmethod
    def from_percent(cls, percent: Number, accept_equal: bool = True):
        '''Create a threshold given in percent of total votes.'''
        return cls(Fraction(percent) / 100, accept_equal=accept_equal)

    def evaluate(self,
                 votes: Dict[Any, Number],
                 ) -> List[Any]:
        '''Select parties by a given threshold of fraction of total votes.

        Returns no parties if there are no votes at all.

        :param votes: Votes per party.
        '''
        total = sum(votes.values())
        if total <= 0:
            return []
        threshold = Fraction(self.threshold)
        selected = []
        for cand, n_votes in electsim.util.sorted_votes(votes):
            share = Fraction(n_votes) / Fraction(total)
            if share > threshold or self.accept_equal and share == threshold:
                selected.append(cand)
        return selected
