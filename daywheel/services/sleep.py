from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from daywheel.config import (
    DEEP_WEIGHT,
    LIGHT_WEIGHT,
    QUALITY_DIVISOR,
    REM_WEIGHT,
    SLEEP_STAGE_DEEP,
    SLEEP_STAGE_LIGHT,
    SLEEP_STAGE_REM,
    SLEEP_STAGE_SLEEPING,
)
from daywheel.models.entities import SleepData


@dataclass(frozen=True)
class SleepStage:
    stage: int
    start_time: datetime
    end_time: datetime

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time


def sleep_quality_from_stages(stages: Iterable[SleepStage]) -> Optional[int]:
    """Weighted 0-100 score from deep/REM/light share; awake time only dilutes it.

    Returns None when there are no stages or they add up to nothing.
    """
    total = deep = rem = light = 0.0
    for stage in stages:
        seconds = stage.duration.total_seconds()
        total += seconds
        if stage.stage == SLEEP_STAGE_DEEP:
            deep += seconds
        elif stage.stage == SLEEP_STAGE_REM:
            rem += seconds
        elif stage.stage in (SLEEP_STAGE_SLEEPING, SLEEP_STAGE_LIGHT):
            light += seconds
    if total <= 0:
        return None
    weighted = (deep / total * DEEP_WEIGHT + rem / total * REM_WEIGHT + light / total * LIGHT_WEIGHT)
    score = int(weighted / QUALITY_DIVISOR * 100)
    return max(0, min(100, score))


def sleep_session(
    start_time: datetime,
    end_time: datetime,
    stages: Iterable[SleepStage] = (),
    day: Optional[date] = None,
) -> SleepData:
    """Build a ``SleepData`` attributed to the local day the session ended."""
    return SleepData(
        date=day or end_time.date(),
        start_time=start_time,
        end_time=end_time,
        duration_minutes=int((end_time - start_time).total_seconds() // 60),
        quality_score=sleep_quality_from_stages(stages),
    )
