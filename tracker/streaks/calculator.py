"""
Streak and heatmap calculation.

Pure functions over commit timestamps: no I/O, deterministic, and safe to call
from any layer.
"""

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Union

from tracker.models import CommitRecord, HeatmapEntry, StreakStats

Instant = Union[datetime, str]

ONE_DAY = timedelta(days=1)


def to_day(instant: Instant) -> date:
    """
    Map an instant to its UTC calendar day.

    Naive datetimes are taken to be UTC already. ISO 8601 strings, including a
    trailing ``Z``, are accepted as well.
    """
    if isinstance(instant, str):
        text = instant.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        instant = datetime.fromisoformat(text)
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(timezone.utc).date()


def compute_streak(dates: Iterable[Instant]) -> StreakStats:
    """
    Derive streak statistics from commit timestamps.

    Distinct days are walked most recent first. ``current_streak`` is the length
    of the run containing the most recent active day, whether or not that day
    is anywhere near today.
    """
    dates = list(dates)
    if not dates:
        return StreakStats()

    days = sorted({to_day(d) for d in dates}, reverse=True)

    run = 0
    longest = 0
    current = None
    previous = None
    for day in days:
        if previous is not None and previous - day == ONE_DAY:
            run += 1
        else:
            # First break closes the most recent run
            if previous is not None and current is None:
                current = run
            run = 1
        longest = max(longest, run)
        previous = day

    if current is None:
        current = run

    return StreakStats(
        current_streak=current,
        longest_streak=longest,
        total_commits=len(dates),
        days_active=len(days),
    )


def compute_heatmap(commits: Iterable[CommitRecord]) -> List[HeatmapEntry]:
    """Count commits per UTC day, sorted ascending by date."""
    counts = Counter(to_day(commit.authored_at) for commit in commits)
    return [HeatmapEntry(date=day, count=counts[day]) for day in sorted(counts)]
