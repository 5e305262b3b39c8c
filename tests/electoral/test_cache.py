import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import electsim.electoral.cache as c


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.mark.parametrize('percent, bucket', [
    (0, 0),
    (2, 0),
    (2.5, 5),
    (7, 5),
    (7.5, 10),
    (63, 65),
    (99, 100),
    (100, 100),
])
def test_reporting_bucket(percent, bucket):
    assert c.reporting_bucket(percent) == bucket


def test_key_order_independent():
    key = c.state_result_key('USA_OH', ['b', 'a'], 41)
    assert key == c.state_result_key('USA_OH', ('a', 'b'), 39)
    assert key == c.StateResultKey('USA_OH', ('a', 'b'), 40)
    assert key != c.state_result_key('USA_OH', ['a', 'b'], 43)
    assert key != c.state_result_key('USA_PA', ['a', 'b'], 41)


def test_expiry():
    clock = FakeClock(1000)
    cache = c.TTLCache(clock)
    cache.put('k', 'value')
    clock.now = 1000 + c.CACHE_DURATION - 1
    assert cache.get('k') == 'value'
    assert 'k' in cache
    clock.now = 1000 + c.CACHE_DURATION
    assert cache.get('k') is None
    assert len(cache) == 0


def test_refresh():
    clock = FakeClock()
    cache = c.TTLCache(clock, duration=100)
    cache.put('k', 1)
    clock.now = 90
    cache.put('k', 2)
    clock.now = 150
    assert cache.get('k') == 2


def test_clear():
    cache = c.TTLCache(FakeClock())
    cache.put('a', 1)
    cache.put('b', 2)
    assert len(cache) == 2
    cache.clear()
    assert cache.get('a') is None
    assert 'missing' not in cache


def test_put_drops_expired():
    clock = FakeClock()
    cache = c.TTLCache(clock, duration=100)
    cache.put('old', 1)
    cache.put('older', 2)
    clock.now = 60
    cache.put('young', 3)
    clock.now = 120
    cache.put('new', 4)
    assert len(cache) == 2
    assert cache.get('young') == 3
    assert cache.get('new') == 4
