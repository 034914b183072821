"""Study streak arithmetic on UTC epoch day boundaries."""

from typing import NamedTuple

from studydesk.clock import NS_PER_DAY


class StreakUpdate(NamedTuple):
    current_streak: int
    last_study_date: int


def epoch_day(timestamp_ns: int) -> int:
    return timestamp_ns // NS_PER_DAY


def next_streak(previous: StreakUpdate | None, now_ns: int) -> StreakUpdate:
    """
    Streak after recording study activity at `now_ns`.

    Activity on the day right after the last one extends the streak. Anything
    else (a gap, or a second activity on the same day) starts over at 1.
    """
    if previous is None:
        return StreakUpdate(current_streak=1, last_study_date=now_ns)

    if epoch_day(previous.last_study_date) == epoch_day(now_ns) - 1:
        streak = previous.current_streak + 1
    else:
        streak = 1
    return StreakUpdate(current_streak=streak, last_study_date=now_ns)
