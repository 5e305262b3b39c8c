'''A time-limited cache for per-state results.'''

import collections
import logging
from fractions import Fraction
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Tuple

import electsim.util

logger = logging.getLogger(__name__)

CACHE_DURATION = 2000
REPORTING_BUCKET_SIZE = 5


StateResultKey = collections.namedtuple(
    'StateResultKey', ['state_id', 'candidate_ids', 'reporting_bucket']
)


def state_result_key(state_id: str,
                     candidate_ids: Iterable[str],
                     reporting_percent: float,
                     ) -> StateResultKey:
    '''Build a cache key, bucketing the reporting percentage to the nearest 5.

    The candidate identifiers are sorted so that the key does not depend on
    the order of the candidates.
    '''
    return StateResultKey(
        state_id,
        tuple(sorted(candidate_ids)),
        reporting_bucket(reporting_percent),
    )


def reporting_bucket(reporting_percent: float) -> int:
    return REPORTING_BUCKET_SIZE * electsim.util.round_half_up(
        Fraction(reporting_percent) / REPORTING_BUCKET_SIZE
    )


class TTLCache:
    '''A mapping whose entries expire a fixed time after insertion.

    An entry is only returned while it is younger than the duration. Expired
    entries are dropped when read and whenever a new entry is stored.

    :param clock: A callable returning the current time in milliseconds.
    :param duration: Lifetime of the entries in milliseconds.
    '''
    def __init__(self,
                 clock: Callable[[], float],
                 duration: float = CACHE_DURATION,
                 ):
        self.clock = clock
        self.duration = duration
        self._entries: Dict[Hashable, Tuple[Any, float]] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self.clock() - stored_at >= self.duration:
            del self._entries[key]
            return None
        logger.debug('cache hit for %s', key)
        return value

    def put(self, key: Hashable, value: Any) -> None:
        now = self.clock()
        expired = [
            old_key for old_key, (_, stored_at) in self._entries.items()
            if now - stored_at >= self.duration
        ]
        for old_key in expired:
            del self._entries[old_key]
        self._entries[key] = (value, now)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None
