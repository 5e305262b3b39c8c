'''Constant tables of the United States electoral college.

States are identified by their ``USA_`` prefixed postal codes, as used in
the region identifiers.
'''

from typing import Dict, FrozenSet


ELECTORAL_VOTES_BY_STATE: Dict[str, int] = {
    'USA_AL': 9, 'USA_AK': 3, 'USA_AZ': 11, 'USA_AR': 6, 'USA_CA': 54,
    'USA_CO': 10, 'USA_CT': 7, 'USA_DE': 3, 'USA_FL': 30, 'USA_GA': 16,
    'USA_HI': 4, 'USA_ID': 4, 'USA_IL': 19, 'USA_IN': 11, 'USA_IA': 6,
    'USA_KS': 6, 'USA_KY': 8, 'USA_LA': 8, 'USA_ME': 4, 'USA_MD': 10,
    'USA_MA': 11, 'USA_MI': 15, 'USA_MN': 10, 'USA_MS': 6, 'USA_MO': 10,
    'USA_MT': 4, 'USA_NE': 5, 'USA_NV': 6, 'USA_NH': 4, 'USA_NJ': 14,
    'USA_NM': 5, 'USA_NY': 28, 'USA_NC': 16, 'USA_ND': 3, 'USA_OH': 17,
    'USA_OK': 7, 'USA_OR': 8, 'USA_PA': 19, 'USA_RI': 4, 'USA_SC': 9,
    'USA_SD': 3, 'USA_TN': 11, 'USA_TX': 40, 'USA_UT': 6, 'USA_VT': 3,
    'USA_VA': 13, 'USA_WA': 12, 'USA_WV': 4, 'USA_WI': 10, 'USA_WY': 3,
    'USA_DC': 3,
}

ELECTORAL_VOTES_TO_WIN = 270

# congressional district method
SPLIT_ELECTORAL_STATES: FrozenSet[str] = frozenset({'USA_ME', 'USA_NE'})

# eastern time zone, polls close first
EARLY_REPORTING_STATES: FrozenSet[str] = frozenset({
    'USA_ME', 'USA_NH', 'USA_VT', 'USA_MA', 'USA_CT', 'USA_RI', 'USA_NY',
    'USA_NJ', 'USA_PA', 'USA_DE', 'USA_MD', 'USA_VA', 'USA_NC', 'USA_SC',
    'USA_GA', 'USA_FL',
})

# simulation speed setting -> reporting time multiplier
SPEED_MULTIPLIERS: Dict[int, float] = {
    1500: 1.0,
    5000: 4.0,
    10000: 8.0,
    20000: 15.0,
    300000: 45.0,
}


def get_electoral_votes(state_id: str) -> int:
    '''Return the electoral votes of the state, zero if it is unknown.'''
    return ELECTORAL_VOTES_BY_STATE.get(state_id, 0)


def can_split_electoral_votes(state_id: str) -> bool:
    '''Return whether the state may split its electoral votes by district.'''
    return state_id in SPLIT_ELECTORAL_STATES
