import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import electsim.electoral.reporting as r
import electsim.electoral.tables


def test_timeline():
    record = r.StateReportingRecord('S', 1000, 10000)
    assert record.computed_percent(500) == 0
    assert not record.has_started(500)
    assert record.has_started(1000)
    assert record.computed_percent(6000) == 50
    assert record.computed_percent(11000) == 100
    assert record.computed_percent(50000) == 100


def test_speed_variation():
    record = r.StateReportingRecord('S', 0, 10000, speed_variation=1.1)
    assert record.computed_percent(5000) == pytest.approx(55)
    assert record.computed_percent(9500) == 100
    slow = r.StateReportingRecord('S', 0, 10000, speed_variation=0.9)
    assert slow.computed_percent(9999) < 90
    assert slow.computed_percent(10000) == 100


def test_zero_duration():
    record = r.StateReportingRecord('S', 100, 0)
    assert record.computed_percent(99) == 0
    assert record.computed_percent(100) == 100


def test_observe_monotonic():
    record = r.StateReportingRecord('S', 0, 10000)
    assert not record.has_reported
    assert record.observe(4567) == 45
    assert record.has_reported
    # the clock going back does not take back reported precincts
    assert record.observe(1000) == 45
    assert record.observe(7000) == 70
    assert record.last_reported_percent == 70


@pytest.mark.parametrize('now, phase, percent', [
    (-1, r.ReportingPhase.NOT_STARTED, 0),
    (0, r.ReportingPhase.REPORTING, 0),
    (2000, r.ReportingPhase.REPORTING, 20),
    (10000, r.ReportingPhase.COMPLETE, 100),
])
def test_status(now, phase, percent):
    status = r.StateReportingRecord('S', 0, 10000).status(now)
    assert status.phase == phase
    assert status.reporting_percent == percent


@pytest.mark.parametrize('speed, multiplier', [
    (1500, 1.),
    (5000, 4.),
    (300000, 45.),
    (2500, 2.),
    (100, .5),
    (10 ** 7, 45.),
])
def test_speed_multiplier(speed, multiplier):
    assert r.speed_multiplier(speed) == multiplier


def test_speed_variation_range():
    for state_id in electsim.electoral.tables.ELECTORAL_VOTES_BY_STATE:
        variation = r.speed_variation(42, state_id)
        assert 0.85 <= variation < 1.15
        assert variation == r.speed_variation(42, state_id)


def test_generate_timelines():
    votes = {'E1': 20, 'E2': 5, 'W1': 3, 'W2': 30}
    timelines = r.generate_timelines(
        ['W2', 'W1', 'E1', 'E2'], 1500, 7, 10000,
        electoral_votes=votes, early_reporting_states=['E1', 'E2'],
    )
    starts = sorted(
        timelines, key=lambda sid: timelines[sid].reporting_start_time
    )
    assert starts == ['E2', 'E1', 'W1', 'W2']
    assert timelines['E2'].reporting_start_time == 10000
    assert timelines['W2'].reporting_start_time == (
        10000 + 3 / 4 * r.START_WINDOW
    )
    for record in timelines.values():
        assert record.reporting_duration > 0
    # durations grow with the electoral votes beyond 15
    assert timelines['W2'].reporting_duration > (
        timelines['W1'].reporting_duration
    )
    again = r.generate_timelines(
        ['W2', 'W1', 'E1', 'E2'], 1500, 7, 10000,
        electoral_votes=votes, early_reporting_states=['E1', 'E2'],
    )
    assert [rec.reporting_duration for rec in again.values()] == [
        rec.reporting_duration for rec in timelines.values()
    ]


@pytest.mark.parametrize('margin, n_votes, threshold', [
    (1, 10, 85),
    (1, 30, 90),
    (3, 4, 70),
    (7, 20, 75),
    (15, 10, 50),
    (25, 3, 25),
    (25, 10, 30),
])
def test_call_threshold(margin, n_votes, threshold):
    assert r.call_threshold(margin, n_votes) == threshold


def test_should_show_results():
    assert r.should_show_results(30, 25, 10, False)
    assert not r.should_show_results(29, 25, 10, False)
    assert r.should_show_results(0, 0, 55, True)
