'''Per-state candidate polling for the electoral college.

The raw polling score of a candidate in a state comes from one of these
sources, in order of preference:

-   polling overrides given by the caller, used as they are;
-   a simplified trait-based formula for the candidate controlled by the
    player;
-   the external coalition polling service, if the campaign has a coalition
    model for the state;
-   a fallback formula based on the popularity of the candidate's party in
    the state.

The computed scores (not the overrides) are then adjusted for the state by
a deterministic urban/rural bias and normalized to shares summing to 100.

While a state is still counting, the shares shown are not the final ones:
:func:`blend_precinct_shares` simulates rural precincts reporting first and
urban ones last.
'''

import abc
import dataclasses
import logging
import math
from fractions import Fraction
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional, Tuple

import electsim.util
from electsim.candidate import Candidate, Region

logger = logging.getLogger(__name__)

LEFT_KEYWORDS = (
    'democrat', 'labour', 'labor', 'progressive', 'green', 'liberal',
    'socialist',
)
RIGHT_KEYWORDS = ('republican', 'conservative', 'national')

URBAN_THRESHOLD = 0.6
RURAL_THRESHOLD = 0.4
REGION_TYPE_BIAS = {'urban': 4, 'suburban': 0, 'rural': -4}
PRECINCT_SKEW = {'rural': -6, 'suburban': 0, 'urban': 6}

MIN_POLLING = 5
MAX_POLLING = 95
COALITION_DEFAULT_SCORE = 25
BLENDING_END_PERCENT = 98


class CoalitionPollingService(metaclass=abc.ABCMeta):
    '''The external collaborator scoring candidates by voter coalitions.

    Coalition models are opaque to this library; they are only passed back
    to the service.
    '''
    @abc.abstractmethod
    def score_candidate(self,
                        candidate_id: str,
                        candidate_traits: Dict[str, Any],
                        coalition_model: Any,
                        ) -> Real:
        '''Score the candidate against the coalitions of the model.'''
        raise NotImplementedError

    @abc.abstractmethod
    def aggregate(self, coalition_model: Any, candidate_id: str) -> Real:
        '''Return the overall polling score of the candidate in the model.'''
        raise NotImplementedError


@dataclasses.dataclass
class CampaignContext:
    """Campaign data for the electoral college polling.

    The coalition models are keyed by state identifier.
    """
    polling_service: Optional[CoalitionPollingService] = None
    coalition_models: Dict[str, Any] = dataclasses.field(default_factory=dict)
    candidate_traits: Dict[str, Dict[str, Any]] = \
        dataclasses.field(default_factory=dict)

    def coalition_model(self, state_id: str) -> Optional[Any]:
        if self.polling_service is None:
            return None
        return self.coalition_models.get(state_id)

    def traits(self, candidate: Candidate) -> Dict[str, Any]:
        traits = {
            'party_id': candidate.party_id,
            'ideology': candidate.ideology,
            'attributes': dict(candidate.attributes),
        }
        traits.update(self.candidate_traits.get(candidate.id, {}))
        return traits


def party_lean(party_name: Optional[str]) -> int:
    '''Guess the lean of a party from its name.

    Returns 1 for left-leaning names (which do better in cities), -1 for
    right-leaning names and 0 if the name says nothing.
    '''
    if not party_name:
        return 0
    name = party_name.lower()
    if any(keyword in name for keyword in LEFT_KEYWORDS):
        return 1
    elif any(keyword in name for keyword in RIGHT_KEYWORDS):
        return -1
    else:
        return 0


def candidate_lean(candidate: Candidate) -> int:
    return party_lean(candidate.party_name or candidate.party_id)


def urbanization(state_id: str) -> float:
    '''Return a stable urbanization factor of the state, in [0.2, 0.8).'''
    return 0.2 + 0.6 * electsim.util.unit_hash('urbanization', state_id)


def region_type(urbanization_factor: float) -> str:
    if urbanization_factor >= URBAN_THRESHOLD:
        return 'urban'
    elif urbanization_factor <= RURAL_THRESHOLD:
        return 'rural'
    else:
        return 'suburban'


def clamp_polling(score: Real) -> Real:
    return max(MIN_POLLING, min(MAX_POLLING, score))


def player_state_polling(candidate: Candidate,
                         region: Region,
                         seed: int,
                         ) -> float:
    '''Poll the player candidate by party popularity and personal traits.'''
    score = 35.
    popularity = region.party_popularity(candidate.party_id)
    if popularity is not None:
        score += (popularity / 100 - 0.5) * 20
    score += (candidate.attributes.get('charisma', 50) / 100 - 0.5) * 15
    score += (candidate.attributes.get('integrity', 50) / 100 - 0.5) * 10
    if candidate.name_recognition:
        score += candidate.name_recognition / 100 * 10
    score += (
        electsim.util.unit_hash('player', seed, region.id, candidate.id) - 0.5
    ) * 10
    return clamp_polling(score)


def fallback_state_polling(candidate: Candidate,
                           region: Region,
                           seed: int,
                           ) -> float:
    '''Poll a candidate by the popularity of its party in the state.'''
    score = 25.
    popularity = region.party_popularity(candidate.party_id)
    if popularity is not None:
        score += popularity
    score += (
        electsim.util.unit_hash('fallback', seed, region.id, candidate.id)
        - 0.5
    ) * 20
    return max(MIN_POLLING, score)


def coalition_state_polling(candidate: Candidate,
                            coalition_model: Any,
                            campaign_context: CampaignContext,
                            ) -> float:
    service = campaign_context.polling_service
    service.score_candidate(
        candidate.id, campaign_context.traits(candidate), coalition_model
    )
    score = service.aggregate(coalition_model, candidate.id)
    if score is None or not math.isfinite(score):
        return COALITION_DEFAULT_SCORE
    return score


def adjust_state_polling(score: Real,
                         candidate: Candidate,
                         state_id: str,
                         seed: int,
                         ) -> float:
    '''Adjust a raw polling score for the urban/rural makeup of the state.'''
    urban_factor = urbanization(state_id)
    lean = candidate_lean(candidate)
    adjusted = (
        score
        + lean * REGION_TYPE_BIAS[region_type(urban_factor)]
        + lean * (urban_factor - 0.5) * 10
        + (electsim.util.unit_hash('poll', seed, state_id, candidate.id)
           - 0.5) * 6
    )
    return clamp_polling(adjusted)


def raw_state_polling(candidates: List[Candidate],
                      region: Region,
                      campaign_context: Optional[CampaignContext],
                      seed: int,
                      ) -> Dict[str, float]:
    '''Compute the adjusted polling scores of candidates in the state.

    :param candidates: Candidates running in the state.
    :param region: The state.
    :param campaign_context: Campaign data with the coalition models, if
        any.
    :param seed: Seed of the run for the random variations.
    '''
    coalition_model = (
        campaign_context.coalition_model(region.id)
        if campaign_context is not None else None
    )
    if coalition_model is None:
        logger.debug('no coalition data for %s, using fallback', region.id)
    scores = {}
    for cand in candidates:
        if cand.is_player:
            score = player_state_polling(cand, region, seed)
        elif coalition_model is not None:
            score = coalition_state_polling(
                cand, coalition_model, campaign_context
            )
        else:
            score = fallback_state_polling(cand, region, seed)
        scores[cand.id] = adjust_state_polling(score, cand, region.id, seed)
    return scores


def normalize_polling(scores: Dict[str, Real]) -> Dict[str, Fraction]:
    '''Scale the scores to exact shares summing to 100.

    Negative and non-finite scores count as zero; if all scores are zero,
    the shares are equal.
    '''
    return electsim.util.exact_shares({
        cand_id: (
            score if score is not None and math.isfinite(score) and score > 0
            else 0
        )
        for cand_id, score in scores.items()
    })


def display_polling(shares: Dict[str, Fraction]) -> Dict[str, int]:
    '''Round the shares to whole percentages summing to exactly 100.'''
    if not shares:
        return {}
    return electsim.util.largest_remainder_round(shares, 100)


def winner_and_margin(shares: Dict[str, Real]) -> Tuple[Optional[str], float]:
    '''Return the leading candidate and its lead over the runner-up.

    If the top share is tied, there is no winner and the margin is zero.
    A single candidate wins by a margin of 100.
    '''
    ordered = electsim.util.sorted_votes(shares)
    if not ordered:
        return None, 0.
    if len(ordered) < 2:
        return ordered[0][0], 100.
    (top_id, top_share), (_, second_share) = ordered[0], ordered[1]
    if top_share == second_share:
        return None, 0.
    return top_id, float(top_share - second_share)


def blend_precinct_shares(final_shares: Dict[str, Fraction],
                          leans: Dict[str, int],
                          state_id: str,
                          reporting_percent: Real,
                          bucketed_percent: Real,
                          seed: int,
                          ) -> Dict[str, Fraction]:
    '''Simulate the partial count of a state that is still reporting.

    The partial count mixes three precinct types: rural precincts dominate
    early in the count, suburban ones in the middle and urban ones at the end.
    Every precinct type skews the shares of candidates by their lean.
    A volatility term is added, shrinking to zero as the count nears
    completion. The shares are renormalized to 100.

    Once the count reaches 98 percent (or before it starts), the final shares
    are returned unchanged.

    :param final_shares: Final shares of the candidates, summing to 100.
    :param leans: Leans of the candidates; see :func:`party_lean`.
    :param state_id: Identifier of the state.
    :param reporting_percent: Current reporting percentage.
    :param bucketed_percent: Reporting percentage rounded to the cache
        bucket; drives the precinct mix so that a cached result stays valid
        within its bucket.
    :param seed: Seed of the run.
    '''
    if not 0 < reporting_percent < BLENDING_END_PERCENT:
        return dict(final_shares)
    progress = min(1., max(0., bucketed_percent / 100))
    mix = {
        'rural': (1 - progress) ** 2,
        'suburban': 2 * progress * (1 - progress),
        'urban': progress ** 2,
    }
    decile = math.floor(reporting_percent / 10)
    blended = {}
    for cand_id, share in final_shares.items():
        lean = leans.get(cand_id, 0)
        value = sum(
            weight * max(0.5, float(share) + lean * PRECINCT_SKEW[ptype])
            for ptype, weight in mix.items()
        )
        value += (
            electsim.util.unit_hash(
                'volatility', seed, state_id, cand_id, decile
            ) - 0.5
        ) * (1 - progress) * 8
        blended[cand_id] = max(0.5, value)
    return electsim.util.exact_shares(blended)


def candidate_leans(candidates: Iterable[Candidate]) -> Dict[str, int]:
    return {cand.id: candidate_lean(cand) for cand in candidates}
