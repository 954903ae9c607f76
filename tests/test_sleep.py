"""Tests for sleep sessions and quality scoring."""
from datetime import timedelta

from daywheel.config import (
    SLEEP_STAGE_AWAKE,
    SLEEP_STAGE_DEEP,
    SLEEP_STAGE_LIGHT,
    SLEEP_STAGE_REM,
    SLEEP_STAGE_SLEEPING,
)
from daywheel.services.sleep import SleepStage, sleep_quality_from_stages, sleep_session


def _stages(at, *pairs):
    """Consecutive stages starting 23:00 the previous night; pairs are (code, minutes)."""
    start = at(23, days=-1)
    result = []
    for code, minutes in pairs:
        end = start + timedelta(minutes=minutes)
        result.append(SleepStage(code, start, end))
        start = end
    return result


class TestSleepQuality:
    def test_weighted_score(self, at):
        stages = _stages(at, (SLEEP_STAGE_DEEP, 60), (SLEEP_STAGE_REM, 60), (SLEEP_STAGE_LIGHT, 120))
        assert sleep_quality_from_stages(stages) == 30

    def test_awake_time_dilutes(self, at):
        stages = _stages(
            at,
            (SLEEP_STAGE_DEEP, 60), (SLEEP_STAGE_REM, 60), (SLEEP_STAGE_LIGHT, 120), (SLEEP_STAGE_AWAKE, 60),
        )
        assert sleep_quality_from_stages(stages) == 24

    def test_generic_sleeping_counts_as_light(self, at):
        light = _stages(at, (SLEEP_STAGE_LIGHT, 90))
        sleeping = _stages(at, (SLEEP_STAGE_SLEEPING, 90))
        assert sleep_quality_from_stages(light) == sleep_quality_from_stages(sleeping) == 22

    def test_all_deep(self, at):
        assert sleep_quality_from_stages(_stages(at, (SLEEP_STAGE_DEEP, 480))) == 42

    def test_no_stages(self):
        assert sleep_quality_from_stages([]) is None

    def test_zero_duration(self, at):
        assert sleep_quality_from_stages([SleepStage(SLEEP_STAGE_DEEP, at(3), at(3))]) is None


class TestSleepSession:
    def test_duration_and_day(self, at, day):
        session = sleep_session(at(23, 15, days=-1), at(7, 5))
        assert session.duration_minutes == 470
        assert session.date == day
        assert session.quality_score is None

    def test_explicit_day_and_stages(self, at, day):
        stages = _stages(at, (SLEEP_STAGE_DEEP, 60), (SLEEP_STAGE_REM, 60), (SLEEP_STAGE_LIGHT, 120))
        session = sleep_session(at(23, days=-1), at(3), stages=stages, day=day)
        assert session.quality_score == 30
        assert session.date == day
