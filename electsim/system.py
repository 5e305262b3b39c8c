'''Named electoral systems and the election outcome calculation.

The ``SYSTEMS`` dictionary maps electoral system names, as used in
:attr:`electsim.election.Election.electoral_system`, to
:class:`ElectoralSystem` objects wrapping the result processors.
:func:`calculate_election_outcome` casts the votes, dispatches to the right
processor and completes the outcome.
'''

import logging
import random
from fractions import Fraction
from typing import Callable, Dict, List, Optional

import electsim.util
from electsim.candidate import Candidate, Party
from electsim.distribute import distribute_votes_to_candidates
from electsim.election import Election, SimulatedElectionData
from electsim.electoral.engine import ElectoralCollegeEngine
from electsim.evaluate.college import process_electoral_college_results
from electsim.evaluate.listpr import process_party_list_pr_results
from electsim.evaluate.mixed import process_mmp_results
from electsim.evaluate.plurality import process_fptp_results
from electsim.outcome import ElectionOutcome, WinnerAssignment
from electsim.persist import simple_serialization

logger = logging.getLogger(__name__)

TURNOUT_RANGE = (40, 75)
DEFAULT_SYSTEM = 'FPTP'


@simple_serialization
class ElectoralSystem:
    """A named electoral system. Wraps a result processor.

    :param name: Human readable name of the system.
    :param processor: A function turning an election with candidates and
        votes into an :class:`electsim.outcome.ElectionOutcome`.
    """
    def __init__(self,
                 name: str,
                 processor: Callable[..., ElectionOutcome],
                 ):
        self.name = name
        self.processor = processor

    def process(self, *args, **kwargs) -> ElectionOutcome:
        """Return the processor's outcome for the election given."""
        return self.processor(*args, **kwargs)

    def __repr__(self) -> str:
        return f'<ElectoralSystem({self.name})>'


SYSTEMS: Dict[str, ElectoralSystem] = {
    'FPTP': ElectoralSystem('First Past the Post', process_fptp_results),
    'TwoRoundSystem': ElectoralSystem(
        'Two-Round System', process_fptp_results
    ),
    'SNTV_MMD': ElectoralSystem(
        'Single Non-Transferable Vote', process_fptp_results
    ),
    'BlockVote': ElectoralSystem('Block Vote', process_fptp_results),
    'PluralityMMD': ElectoralSystem(
        'Plurality at Large', process_fptp_results
    ),
    'PartyListPR': ElectoralSystem(
        'Party-List Proportional Representation',
        process_party_list_pr_results
    ),
    'MMP': ElectoralSystem('Mixed-Member Proportional', process_mmp_results),
    'ElectoralCollege': ElectoralSystem(
        'Electoral College', process_electoral_college_results
    ),
}


def get_system(name: str) -> ElectoralSystem:
    '''Return the electoral system by name, falling back to plurality.'''
    if name in SYSTEMS:
        return SYSTEMS[name]
    logger.warning(
        'unknown electoral system %r, evaluating as %s', name, DEFAULT_SYSTEM
    )
    return SYSTEMS[DEFAULT_SYSTEM]


def base_candidates(election: Election) -> List[Candidate]:
    '''Return the candidates the votes are cast for in the election.

    Party-list elections have no individual candidates; mixed-member
    proportional ones vote for their constituency candidates.
    '''
    if election.electoral_system == 'PartyListPR':
        return []
    elif election.electoral_system == 'MMP' and election.mmp is not None:
        return election.mmp.all_constituency_candidates()
    else:
        return list(election.candidates)


def calculate_election_outcome(election: Election,
                               all_parties: List[Party],
                               simulated_data: Optional[
                                   SimulatedElectionData
                               ] = None,
                               *,
                               engine: Optional[ElectoralCollegeEngine] = None,
                               random_state: Optional[int] = None,
                               ) -> ElectionOutcome:
    '''Compute the outcome of an election.

    If the votes were already counted by a simulation, the simulated data
    gives the candidate votes, the total votes and the turnout. Otherwise,
    a turnout between 40 and 75 percent of the eligible voters is drawn and
    the votes cast are distributed to the candidates by their polling.

    :param election: The election to evaluate.
    :param all_parties: Known parties, for names and colors in the summary.
    :param simulated_data: Votes already counted for the candidates, if any.
    :param engine: Electoral college engine for electoral college elections.
    :param random_state: Seed for the turnout draw.
    '''
    seats_to_fill = election.seats_to_fill if election.seats_to_fill else 1
    if simulated_data is not None:
        total_votes_cast = simulated_data.total_expected_votes
        turnout = simulated_data.voter_turnout_percentage
        candidates = {cand.id: cand for cand in simulated_data.candidates}
    else:
        turnout = random.Random(random_state).randint(*TURNOUT_RANGE)
        total_votes_cast = electsim.util.round_half_up(
            Fraction(election.total_eligible_voters * turnout, 100)
        )
        candidates = distribute_votes_to_candidates(
            base_candidates(election), total_votes_cast, log_id=election.id
        )
    logger.info(
        '%s: %d votes cast at %s%% turnout, %d seats by %s',
        election.id, total_votes_cast, turnout, seats_to_fill,
        election.electoral_system
    )
    system = get_system(election.electoral_system)
    outcome = system.process(
        election,
        all_parties,
        candidates,
        total_votes_cast,
        seats_to_fill,
        engine=engine,
    )
    outcome.winner_assignment = WinnerAssignment.for_seats(
        outcome.seats_to_fill, outcome.determined_winners
    )
    outcome.total_votes_cast = total_votes_cast
    outcome.voter_turnout_percentage = turnout
    outcome.entity_id = election.entity_id
    return outcome
