'''General election evaluator machinery.'''

import abc
from typing import Any, List, Dict
from numbers import Number

import electsim.util
from electsim.persist import simple_serialization


class VotingSystemError(Exception):
    '''An election with a valid setup ended up in an unresolvable state.'''
    pass


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate votes for candidates and allocate seats to them.

    A root abstract base class for all evaluators.
    '''
    @abc.abstractmethod
    def evaluate(self, votes, *args, **kwargs):
        '''Evaluate votes for candidates and allocate seats to them.'''
        raise NotImplementedError


class Selector(Evaluator):
    '''Elect a given number of candidates.

    Requires a number of seats to determine the number of candidates to elect.
    '''
    @abc.abstractmethod
    def evaluate(self, votes, n_seats, *args, **kwargs) -> List[Any]:
        '''Elect n_seats candidates as a list.

        :param votes: Votes per candidate.
        :param n_seats: Number of candidates to elect.
        :returns: A list of candidates elected, ordered by magnitude of victory
            (winner first).
        '''
        raise NotImplementedError


class Distributor(Evaluator):
    '''Allocate seats to parties based on collective preference.'''

    @abc.abstractmethod
    def evaluate(self,
                 votes: Dict[Any, Number],
                 n_seats: int,
                 ) -> Dict[Any, int]:
        '''Allocate n_seats to parties as a dictionary.

        :param votes: Votes per party.
        :param n_seats: Number of seats to allocate to parties.
        :returns: Numbers of seats allocated to respective parties.
            Parties with no allocated seats do not appear in the dictionary.
        '''
        raise NotImplementedError


def get_n_best(votes: Dict[Any, Number],
               n_seats: int,
               ) -> List[Any]:
    '''Return n_seats candidates with the highest number of votes.

    Essentially a plurality selection function. Candidates with equal votes
    are ranked by their order in the input, so the first listed candidate
    wins a tie for the last seat.

    :param votes: Mapping of candidates to the number of votes obtained.
    :param n_seats: Number of seats to be filled.
    :returns: A list of top n_seats candidates.
    '''
    if n_seats <= 0:
        return []
    return [
        cand for cand, n_votes in electsim.util.sorted_votes(votes)[:n_seats]
    ]


@simple_serialization
class Plurality(Selector):
    '''Plurality voting evaluator. Elects a list of candidates.

    This encompasses *first-past-the-post* for a single seat and its
    multi-seat variants where the candidates with the most votes win
    (*single non-transferable vote*, *block vote*, *plurality-at-large*).
    '''
    def evaluate(self,
                 votes: Dict[Any, Number],
                 n_seats: int = 1,
                 ) -> List[Any]:
        '''Select candidates by plurality voting.

        :param votes: Simple votes (mapping the candidates to a quantity, the
            more the better).
        :param n_seats: Number of candidates to select.
        :returns: A list of elected candidates, sorted in descending order by
            the input votes.
        '''
        return get_n_best(votes, n_seats)
