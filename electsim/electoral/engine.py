'''The electoral college engine.

The engine computes the result of every state from candidate polling and
aggregates the electoral votes of the states won into the national result.
A candidate needs an absolute majority of the electoral votes (270 of 538)
to win.

With progressive reporting, the engine also simulates the election night.
Each state reports along its timeline (see :mod:`electsim.electoral.reporting`)
and only contributes its electoral votes once it has been called. While
a state is counting, its shown polling is the partial count; the call itself
is always made on the final projection, so a called state never flips.

All mutable state is owned by an engine instance: the reporting timelines,
the state result cache, the called states and the last results of all states.
Use one engine per simulated election, or :meth:`ElectoralCollegeEngine.reset`
it between runs. The clock and the run seed can be injected, which makes the
whole simulation reproducible.
'''

import dataclasses
import logging
import random
import time
from numbers import Real
from typing import Any, Callable, Dict, Iterable, List, Optional

from electsim.candidate import Candidate, Region
from electsim.electoral import tables
from electsim.electoral.cache import (
    CACHE_DURATION, TTLCache, reporting_bucket, state_result_key
)
from electsim.electoral.polling import (
    CampaignContext, blend_precinct_shares, candidate_leans, display_polling,
    normalize_polling, raw_state_polling, winner_and_margin
)
from electsim.electoral.reporting import (
    ReportingStatus, StateReportingRecord, generate_timelines,
    should_show_results
)

logger = logging.getLogger(__name__)

BATTLEGROUND_MARGIN = 10


def monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclasses.dataclass
class StateResult:
    """Result of a single state at the time of computation.

    The winner is the projected winner of the state; it only counts towards
    the national result when the results are shown. The candidate polling
    and the leader reflect the current partial count.
    """
    state_id: str
    state_name: str
    electoral_votes: int
    candidate_polling: Dict[str, int]
    winner: Optional[Candidate]
    margin: float
    reporting_percent: int
    reporting_complete: bool
    has_started_reporting: bool
    show_results: bool
    leader: Optional[Candidate] = None
    is_split_state: bool = False
    split_results: Optional[Dict[str, Any]] = None


@dataclasses.dataclass
class ElectoralWinner:
    id: str
    electoral_votes: int


@dataclasses.dataclass
class ElectoralCollegeResult:
    candidate_electoral_votes: Dict[str, int]
    state_results: Dict[str, StateResult]
    total_electoral_votes: int = 0
    winner: Optional[ElectoralWinner] = None
    is_tie: bool = False
    states_won: Dict[str, List[str]] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class CandidateElectoralSummary:
    candidate_id: str
    electoral_votes: int
    states_won: int
    percentage: float


@dataclasses.dataclass
class BattlegroundState:
    state_id: str
    state_name: str
    electoral_votes: int
    margin: float
    leader: Optional[str]


@dataclasses.dataclass
class ElectoralSummary:
    total_electoral_votes: int
    needed_to_win: int
    candidates: List[CandidateElectoralSummary]
    battleground_states: List[BattlegroundState]


@dataclasses.dataclass(frozen=True)
class _StateSnapshot:
    polling: Dict[str, int]
    winner_id: Optional[str]
    margin: float
    leader_id: Optional[str]


class ElectoralCollegeEngine:
    '''Compute electoral college results and simulate the election night.

    :param electoral_votes: Electoral votes by state identifier. States not
        in the table have no electoral votes and are skipped.
    :param split_states: States that may split their electoral votes.
    :param early_reporting_states: States that start reporting first.
    :param votes_to_win: Electoral votes needed to win.
    :param cache_duration: Lifetime of cached state results, in
        milliseconds.
    :param seed: Seed of the run, driving all random variations. If not
        given, one is drawn and logged.
    :param clock: A callable returning the current time in milliseconds.
        Defaults to a monotonic clock.
    '''
    def __init__(self,
                 electoral_votes: Optional[Dict[str, int]] = None,
                 split_states: Iterable[str] = tables.SPLIT_ELECTORAL_STATES,
                 early_reporting_states: Iterable[str] = (
                     tables.EARLY_REPORTING_STATES
                 ),
                 votes_to_win: int = tables.ELECTORAL_VOTES_TO_WIN,
                 cache_duration: Real = CACHE_DURATION,
                 seed: Optional[int] = None,
                 clock: Optional[Callable[[], Real]] = None,
                 ):
        self.electoral_votes = (
            dict(electoral_votes) if electoral_votes is not None
            else dict(tables.ELECTORAL_VOTES_BY_STATE)
        )
        self.split_states = frozenset(split_states)
        self.early_reporting_states = frozenset(early_reporting_states)
        self.votes_to_win = votes_to_win
        if seed is None:
            seed = random.randrange(1 << 32)
            logger.info('electoral college run seed: %d', seed)
        self.seed = seed
        self.clock = clock if clock is not None else monotonic_ms
        self._timelines: Dict[str, StateReportingRecord] = {}
        self._state_cache = TTLCache(self.clock, cache_duration)
        self._called_states: Dict[str, Optional[str]] = {}
        self._last_results: Dict[str, StateResult] = {}

    def reset(self) -> None:
        '''Forget all timelines, cached results and called states.'''
        self._timelines.clear()
        self._state_cache.clear()
        self._called_states.clear()
        self._last_results.clear()

    def get_electoral_votes(self, state_id: str) -> int:
        return self.electoral_votes.get(state_id, 0)

    def can_split_electoral_votes(self, state_id: str) -> bool:
        return state_id in self.split_states

    def initialize_progressive_reporting(self,
                                         regions: Iterable[Region],
                                         speed: Real = 5000,
                                         ) -> None:
        '''Generate the reporting timelines of the states, starting now.

        Any previous night is forgotten first (see :meth:`reset`). States with
        no electoral votes get no timeline.

        :param regions: States to report.
        :param speed: Simulation speed setting.
        '''
        self.reset()
        state_ids = [
            region.id for region in regions
            if self.get_electoral_votes(region.id) > 0
        ]
        self._timelines = generate_timelines(
            state_ids,
            speed,
            self.seed,
            self.clock(),
            electoral_votes=self.electoral_votes,
            early_reporting_states=self.early_reporting_states,
        )

    def get_reporting_status(self) -> Dict[str, ReportingStatus]:
        '''Return the current reporting status of all states with a timeline.'''
        now = self.clock()
        return {
            state_id: record.status(now)
            for state_id, record in self._timelines.items()
        }

    def is_reporting_complete(self) -> bool:
        '''Return whether all states have reported completely.

        Returns False if no timelines have been generated.
        '''
        if not self._timelines:
            return False
        return all(
            status.is_complete
            for status in self.get_reporting_status().values()
        )

    def get_state_result(self, state_id: str) -> Optional[StateResult]:
        '''Return the last computed result of the state, if any.'''
        return self._last_results.get(state_id)

    def calculate_electoral_college(self,
                                    candidates: List[Candidate],
                                    campaign_context: Optional[
                                        CampaignContext
                                    ] = None,
                                    region_data: Optional[
                                        Iterable[Region]
                                    ] = None,
                                    use_progressive_reporting: bool = False,
                                    speed: Real = 5000,
                                    polling_overrides: Optional[
                                        Dict[str, Dict[str, Real]]
                                    ] = None,
                                    ) -> ElectoralCollegeResult:
        '''Compute the electoral college result.

        Without progressive reporting, every state is fully counted and
        shown. With it, the timelines are generated on the first call and
        every state is computed at its current stage of reporting; only called
        states contribute their electoral votes.

        :param candidates: Candidates running in all states.
        :param campaign_context: Campaign data with the coalition polling
            service and models. Without it, the states are polled by the
            fallback formula.
        :param region_data: States of the country.
        :param use_progressive_reporting: Whether to simulate the election
            night.
        :param speed: Simulation speed setting for the timelines.
        :param polling_overrides: Raw polling scores by state and candidate
            identifier, used instead of the computed polling for the states
            listed. Overridden states bypass the result cache.
        '''
        regions = list(region_data) if region_data is not None else []
        result = ElectoralCollegeResult(
            candidate_electoral_votes={cand.id: 0 for cand in candidates},
            state_results={},
            states_won={cand.id: [] for cand in candidates},
        )
        if not regions:
            logger.warning('no regions given for the electoral college')
            return result
        if campaign_context is None:
            logger.warning(
                'no campaign data for the electoral college, polling states'
                ' by party popularity'
            )
        if use_progressive_reporting and not self._timelines:
            self.initialize_progressive_reporting(regions, speed)
        now = self.clock()
        for region in regions:
            n_votes = self.get_electoral_votes(region.id)
            if n_votes <= 0:
                logger.warning(
                    'state %s has no electoral votes, skipping', region.id
                )
                continue
            overrides = (
                polling_overrides.get(region.id)
                if polling_overrides else None
            )
            state_result = self.calculate_state(
                region, candidates, campaign_context, now,
                use_progressive_reporting, overrides
            )
            result.state_results[region.id] = state_result
            credited = (
                state_result.winner is not None
                and state_result.show_results
            )
            # fully counted nights include tied states in the total
            if credited or not use_progressive_reporting:
                result.total_electoral_votes += n_votes
            if credited:
                winner_id = state_result.winner.id
                result.candidate_electoral_votes[winner_id] = (
                    result.candidate_electoral_votes.get(winner_id, 0)
                    + n_votes
                )
                result.states_won.setdefault(winner_id, []).append(region.id)
        self.determine_electoral_winner(result)
        return result

    def calculate_state(self,
                        region: Region,
                        candidates: List[Candidate],
                        campaign_context: Optional[CampaignContext],
                        now: Real,
                        use_progressive_reporting: bool = False,
                        polling_overrides: Optional[Dict[str, Real]] = None,
                        ) -> StateResult:
        '''Compute the result of a single state at the given time.'''
        state_id = region.id
        n_votes = self.get_electoral_votes(state_id)
        status = self._reporting_status(state_id, now, use_progressive_reporting)
        percent = status.reporting_percent
        # 0% shares its bucket with the first counted percents
        if polling_overrides is not None or percent == 0:
            snapshot = self._snapshot(
                region, candidates, campaign_context, percent,
                polling_overrides
            )
        else:
            key = state_result_key(
                state_id, (cand.id for cand in candidates), percent
            )
            snapshot = self._state_cache.get(key)
            if snapshot is None:
                snapshot = self._snapshot(
                    region, candidates, campaign_context, percent
                )
                self._state_cache.put(key, snapshot)
        winner_id = snapshot.winner_id
        if state_id in self._called_states:
            show_results = True
            winner_id = self._called_states[state_id]
        else:
            show_results = status.has_started and should_show_results(
                percent, snapshot.margin, n_votes, status.is_complete
            )
            if show_results and use_progressive_reporting:
                self._called_states[state_id] = winner_id
                logger.info(
                    'called %s (%d) for %s at %d%% reporting, margin %.1f',
                    state_id, n_votes, winner_id, percent, snapshot.margin
                )
        by_id = {cand.id: cand for cand in candidates}
        is_split = self.can_split_electoral_votes(state_id)
        state_result = StateResult(
            state_id=state_id,
            state_name=region.name,
            electoral_votes=n_votes,
            candidate_polling=dict(snapshot.polling),
            winner=by_id.get(winner_id),
            margin=snapshot.margin,
            reporting_percent=percent,
            reporting_complete=status.is_complete,
            has_started_reporting=status.has_started,
            show_results=show_results,
            leader=by_id.get(snapshot.leader_id),
            is_split_state=is_split,
            split_results=(
                {'statewide': dict(snapshot.polling), 'districts': []}
                if is_split else None
            ),
        )
        self._last_results[state_id] = state_result
        return state_result

    def _reporting_status(self,
                          state_id: str,
                          now: Real,
                          use_progressive_reporting: bool,
                          ) -> ReportingStatus:
        if not use_progressive_reporting:
            return ReportingStatus(
                has_started=True, reporting_percent=100, is_complete=True
            )
        record = self._timelines.get(state_id)
        if record is None:
            return ReportingStatus(
                has_started=False, reporting_percent=0, is_complete=False
            )
        return record.status(now)

    def _snapshot(self,
                  region: Region,
                  candidates: List[Candidate],
                  campaign_context: Optional[CampaignContext],
                  reporting_percent: int,
                  polling_overrides: Optional[Dict[str, Real]] = None,
                  ) -> _StateSnapshot:
        if polling_overrides is not None:
            scores = {
                cand.id: polling_overrides.get(cand.id, 0)
                for cand in candidates
            }
        else:
            scores = raw_state_polling(
                candidates, region, campaign_context, self.seed
            )
        final_shares = normalize_polling(scores)
        winner_id, margin = winner_and_margin(final_shares)
        if reporting_percent > 0:
            current_shares = blend_precinct_shares(
                final_shares,
                candidate_leans(candidates),
                region.id,
                reporting_percent,
                reporting_bucket(reporting_percent),
                self.seed,
            )
            leader_id, _ = winner_and_margin(current_shares)
        else:
            current_shares = final_shares
            leader_id = None
        return _StateSnapshot(
            polling=display_polling(current_shares),
            winner_id=winner_id,
            margin=margin,
            leader_id=leader_id,
        )

    def determine_electoral_winner(self,
                                   result: ElectoralCollegeResult,
                                   ) -> None:
        '''Set the national winner or tie of the result.

        A candidate wins with at least the votes needed to win and no other
        candidate at the same count. Any shared top count above zero is
        a tie, including a standoff in the middle of the night.
        '''
        result.winner = None
        result.is_tie = False
        votes = result.candidate_electoral_votes
        if not votes:
            return
        top = max(votes.values())
        leaders = [cand_id for cand_id, n in votes.items() if n == top]
        if len(leaders) == 1 and top >= self.votes_to_win:
            result.winner = ElectoralWinner(leaders[0], top)
            logger.info(
                'electoral college winner: %s with %d electoral votes',
                leaders[0], top
            )
        elif len(leaders) > 1 and top > 0:
            result.is_tie = True
            logger.info(
                'electoral college tie between %s at %d electoral votes',
                ', '.join(leaders), top
            )

    def get_electoral_summary(self,
                              result: ElectoralCollegeResult,
                              ) -> ElectoralSummary:
        '''Summarize the result for display.

        Lists the candidates by electoral votes with their share of the
        electoral votes counted so far, and the battleground states decided
        by a margin under 10 points.
        '''
        total = result.total_electoral_votes
        candidates = [
            CandidateElectoralSummary(
                candidate_id=cand_id,
                electoral_votes=n_votes,
                states_won=len(result.states_won.get(cand_id, [])),
                percentage=(n_votes / total * 100) if total else 0.,
            )
            for cand_id, n_votes in result.candidate_electoral_votes.items()
        ]
        candidates.sort(key=lambda item: item.electoral_votes, reverse=True)
        battlegrounds = [
            BattlegroundState(
                state_id=state_id,
                state_name=state.state_name,
                electoral_votes=state.electoral_votes,
                margin=state.margin,
                leader=state.winner.name if state.winner else None,
            )
            for state_id, state in result.state_results.items()
            if state.margin < BATTLEGROUND_MARGIN
        ]
        return ElectoralSummary(
            total_electoral_votes=total,
            needed_to_win=self.votes_to_win,
            candidates=candidates,
            battleground_states=battlegrounds,
        )


def calculate_electoral_college_results(engine: ElectoralCollegeEngine,
                                        candidates: List[Candidate],
                                        campaign_context: Optional[
                                            CampaignContext
                                        ] = None,
                                        region_data: Optional[
                                            Iterable[Region]
                                        ] = None,
                                        use_progressive_reporting: bool = False,
                                        speed: Real = 5000,
                                        polling_overrides: Optional[
                                            Dict[str, Dict[str, Real]]
                                        ] = None,
                                        ) -> ElectoralCollegeResult:
    '''Compute the electoral college result on the given engine.'''
    return engine.calculate_electoral_college(
        candidates,
        campaign_context,
        region_data,
        use_progressive_reporting=use_progressive_reporting,
        speed=speed,
        polling_overrides=polling_overrides,
    )


def is_progressive_reporting_complete(engine: ElectoralCollegeEngine) -> bool:
    return engine.is_reporting_complete()


get_electoral_votes = tables.get_electoral_votes
can_split_electoral_votes = tables.can_split_electoral_votes
