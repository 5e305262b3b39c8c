"""A commandline tool for quick evaluation of election scenarios.

Loads an election scenario from a JSON file and prints its outcome as JSON.
Electoral college scenarios can also be played out as an election night,
with the states calling their results as they report.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Optional

import electsim.io.scenario
import electsim.persist
import electsim.system
from electsim.electoral.engine import ElectoralCollegeEngine
from electsim.io.core import ParseError
from electsim.io.scenario import Scenario

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the scenario from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the scenario from standard input',
)
argparser.add_argument(
    '-n', '--night',
    action='store_true',
    help='play out an electoral college scenario as an election night',
)
argparser.add_argument(
    '-s', '--speed',
    type=int,
    default=5000,
    help='election night speed setting',
)
argparser.add_argument(
    '-t', '--tick',
    type=int,
    default=60000,
    help='election night clock step in milliseconds',
)
argparser.add_argument(
    '-r', '--seed',
    type=int,
    help='seed for the turnout draw and the election night',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages or other info',
)


class VirtualClock:
    """A clock for the election night that only moves when told to."""
    def __init__(self, start: float = 0):
        self.now = start

    def advance(self, step: float) -> None:
        self.now += step

    def __call__(self) -> float:
        return self.now


def main(input_file: io.TextIOBase,
         use_stdin: bool = False,
         night: bool = False,
         speed: int = 5000,
         tick: int = 60000,
         seed: Optional[int] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    try:
        scenario = electsim.io.scenario.load(input_file)
    except ParseError as e:
        warnings.warn(f'{e}, terminating')
        return
    election = scenario.election
    if not (
        election.candidates or election.party_lists or election.mmp
        or scenario.simulated
    ):
        warnings.warn('no candidates: cannot evaluate election, terminating')
        return
    if night:
        run_night(scenario, speed=speed, tick=tick, seed=seed)
    else:
        outcome = electsim.system.calculate_election_outcome(
            election,
            scenario.parties,
            scenario.simulated,
            engine=ElectoralCollegeEngine(seed=seed),
            random_state=seed,
        )
        print(json.dumps(electsim.persist.to_dict(outcome), indent=2))


def run_night(scenario: Scenario,
              speed: int,
              tick: int,
              seed: Optional[int] = None,
              ) -> None:
    """Play out the election night, printing the state calls."""
    election = scenario.election
    if not election.regions:
        warnings.warn('no regions: cannot run election night, terminating')
        return
    clock = VirtualClock()
    engine = ElectoralCollegeEngine(seed=seed, clock=clock)
    called = set()
    while True:
        result = engine.calculate_electoral_college(
            election.candidates,
            election.campaign_context,
            election.regions,
            use_progressive_reporting=True,
            speed=speed,
            polling_overrides=scenario.polling_overrides,
        )
        if not result.state_results:
            warnings.warn('no states with electoral votes, terminating')
            return
        for state_id, state in result.state_results.items():
            if state.show_results and state_id not in called:
                called.add(state_id)
                winner = state.winner.name if state.winner else 'nobody'
                print(
                    f'{clock() / 1000:8.0f}s  {state.state_name:<20}'
                    f' {state.electoral_votes:>3}  {winner}'
                    f' ({state.reporting_percent}% reporting)'
                )
        if engine.is_reporting_complete():
            break
        clock.advance(tick)
    print()
    summary = engine.get_electoral_summary(result)
    for cand in summary.candidates:
        print(f'{cand.candidate_id:<20} {cand.electoral_votes:>3}'
              f' ({cand.states_won} states)')
    if result.winner is not None:
        print(f'Elected: {result.winner.id}')
    elif result.is_tie:
        print('Electoral college tie')
    else:
        print(f'Nobody reached {summary.needed_to_win} electoral votes')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
