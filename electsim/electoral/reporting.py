'''Progressive vote reporting on the election night.

Every state gets a reporting timeline at the start of the night: a start
time, staggered so that the eastern states begin first and the small states
before the big ones, and a duration growing with the electoral votes of the
state. On each tick, the reported share of precincts is read off the timeline
by :meth:`StateReportingRecord.observe`, which never lets it decrease.

A state calls its result once the reported share reaches a threshold that
depends on how close the race is and how big the state is; see
:func:`call_threshold`.
'''

import dataclasses
import enum
import logging
import math
import random
from numbers import Real
from typing import Dict, Iterable, Optional

import electsim.util
from electsim.electoral import tables

logger = logging.getLogger(__name__)

BASE_REPORTING_WINDOW = 240000
START_WINDOW = BASE_REPORTING_WINDOW / 2
BASE_STATE_DURATION = 60000
DURATION_JITTER = (0.7, 1.3)
SPEED_VARIATION_RANGE = (0.85, 1.15)


class ReportingPhase(enum.Enum):
    NOT_STARTED = 'not_started'
    REPORTING = 'reporting'
    COMPLETE = 'complete'


@dataclasses.dataclass
class ReportingStatus:
    has_started: bool
    reporting_percent: int
    is_complete: bool

    @property
    def phase(self) -> ReportingPhase:
        if self.is_complete:
            return ReportingPhase.COMPLETE
        elif self.has_started:
            return ReportingPhase.REPORTING
        else:
            return ReportingPhase.NOT_STARTED


class StateReportingRecord:
    '''Reporting timeline of a single state.

    The timeline itself is fixed at creation. The only state that changes
    afterwards is the highest percentage reported so far, which is kept
    so that the reported percentage never goes down.

    :param state_id: Identifier of the state.
    :param reporting_start_time: Clock time when the first precincts report,
        in milliseconds.
    :param reporting_duration: Time to report all precincts, in milliseconds.
    :param speed_variation: Factor by which the state counts faster (above 1)
        or slower (below 1) than its timeline while it is still counting.
    '''
    def __init__(self,
                 state_id: str,
                 reporting_start_time: float,
                 reporting_duration: float,
                 speed_variation: float = 1.0,
                 ):
        self.state_id = state_id
        self.reporting_start_time = reporting_start_time
        self.reporting_duration = reporting_duration
        self.speed_variation = speed_variation
        self.last_reported_percent = 0

    @property
    def has_reported(self) -> bool:
        return self.last_reported_percent > 0

    def has_started(self, now: float) -> bool:
        return now >= self.reporting_start_time

    def computed_percent(self, now: float) -> float:
        '''Return the reporting percentage read off the timeline.'''
        if now < self.reporting_start_time:
            return 0.
        elapsed = now - self.reporting_start_time
        if self.reporting_duration <= 0:
            raw = 100.
        else:
            raw = min(100., elapsed / self.reporting_duration * 100)
        if raw < 100:
            return min(100., raw * self.speed_variation)
        return raw

    def observe(self, now: float) -> int:
        '''Return the reported percentage at the given time and remember it.

        The result is the floor of the larger of the timeline value and the
        previous report, so that it never decreases, even if the clock
        goes backwards.
        '''
        reported = math.floor(max(
            self.last_reported_percent, self.computed_percent(now)
        ))
        self.last_reported_percent = reported
        return reported

    def status(self, now: float) -> ReportingStatus:
        reported = self.observe(now)
        return ReportingStatus(
            has_started=self.has_started(now),
            reporting_percent=reported,
            is_complete=reported >= 100,
        )

    def __repr__(self) -> str:
        return (
            f'<StateReportingRecord({self.state_id},'
            f'start={self.reporting_start_time:.0f},'
            f'duration={self.reporting_duration:.0f})>'
        )


def speed_multiplier(speed: Real) -> float:
    '''Return the multiplier of reporting times for a simulation speed.

    Known speed settings have fixed multipliers; other speeds are scaled
    linearly, within 0.5 and 45.
    '''
    if speed in tables.SPEED_MULTIPLIERS:
        return tables.SPEED_MULTIPLIERS[speed]
    return min(45., max(0.5, speed / 1250))


def speed_variation(seed: int, state_id: str) -> float:
    low, high = SPEED_VARIATION_RANGE
    return low + (high - low) * electsim.util.unit_hash('speed', seed, state_id)


def generate_timelines(state_ids: Iterable[str],
                       speed: Real,
                       seed: int,
                       start_time: float,
                       electoral_votes: Optional[Dict[str, int]] = None,
                       early_reporting_states: Iterable[str] = (
                           tables.EARLY_REPORTING_STATES
                       ),
                       ) -> Dict[str, StateReportingRecord]:
    '''Generate the reporting timelines of all states for one night.

    The states report in order: early reporting states first, then by
    ascending electoral votes. Their start times are spread evenly over the
    first half of the reporting window; the durations grow with the electoral
    votes, with a random jitter drawn from the seed.

    :param state_ids: Identifiers of the reporting states.
    :param speed: Simulation speed setting; see :func:`speed_multiplier`.
    :param seed: Seed of the run; the same seed gives the same timelines.
    :param start_time: Clock time of the start of the night, in milliseconds.
    :param electoral_votes: Electoral votes by state.
    :param early_reporting_states: States to report first.
    '''
    if electoral_votes is None:
        electoral_votes = tables.ELECTORAL_VOTES_BY_STATE
    early = frozenset(early_reporting_states)
    ordered = sorted(
        state_ids,
        key=lambda state_id: (
            state_id not in early, electoral_votes.get(state_id, 0)
        )
    )
    multiplier = speed_multiplier(speed)
    rng = random.Random(seed)
    timelines = {}
    for index, state_id in enumerate(ordered):
        n_votes = electoral_votes.get(state_id, 0)
        start = start_time + index / len(ordered) * START_WINDOW * multiplier
        duration = (
            BASE_STATE_DURATION
            * max(1, n_votes / 15)
            * rng.uniform(*DURATION_JITTER)
            * multiplier
        )
        timelines[state_id] = StateReportingRecord(
            state_id,
            reporting_start_time=start,
            reporting_duration=duration,
            speed_variation=speed_variation(seed, state_id),
        )
        logger.debug(
            '%s reports from %.0f for %.0f ms', state_id, start, duration
        )
    logger.info(
        'generated reporting timelines for %d states at speed %s (x%s)',
        len(timelines), speed, multiplier
    )
    return timelines


def call_threshold(margin: Real, electoral_votes: int) -> int:
    '''Return the reporting percentage at which a state calls its result.

    Close races wait for more of the count, landslides are called early.
    Big states wait longer and the smallest ones call sooner.

    :param margin: Lead of the winner over the runner-up in percentage
        points.
    :param electoral_votes: Electoral votes of the state.
    '''
    threshold = 50
    if margin < 2:
        threshold = 85
    elif margin < 5:
        threshold = 75
    elif margin < 10:
        threshold = 65
    elif margin >= 20:
        threshold = 30
    if electoral_votes >= 20:
        threshold += 10
    elif electoral_votes <= 4:
        threshold -= 5
    return min(90, max(25, threshold))


def should_show_results(reporting_percent: Real,
                        margin: Real,
                        electoral_votes: int,
                        reporting_complete: bool,
                        ) -> bool:
    return (
        reporting_complete
        or reporting_percent >= call_threshold(margin, electoral_votes)
    )
