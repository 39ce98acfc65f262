"""
Tests for streak and heatmap calculation.
"""

from datetime import date, datetime, timedelta, timezone

from tracker.models import CommitRecord, StreakStats
from tracker.streaks import compute_heatmap, compute_streak, to_day


def _days(*values):
    return [f"2024-{value}T12:00:00Z" for value in values]


class TestComputeStreak:
    """Tests for compute_streak."""

    def test_consecutive_days(self):
        stats = compute_streak(_days("01-01", "01-02", "01-03"))
        assert stats == StreakStats(
            current_streak=3, longest_streak=3, total_commits=3, days_active=3
        )

    def test_isolated_days(self):
        stats = compute_streak(_days("01-01", "01-05"))
        assert stats.current_streak == 1
        assert stats.longest_streak == 1
        assert stats.days_active == 2
        assert stats.total_commits == 2

    def test_current_is_run_containing_most_recent_day(self):
        """The run ending 01-10 is current even though 01-05 is older and separate."""
        stats = compute_streak(_days("01-10", "01-09", "01-08", "01-05"))
        assert stats.current_streak == 3
        assert stats.longest_streak == 3
        assert stats.days_active == 4
        assert stats.total_commits == 4

    def test_empty(self):
        assert compute_streak([]) == StreakStats()

    def test_current_shorter_than_longest(self):
        stats = compute_streak(_days("01-01", "01-02", "01-03", "01-04", "01-10", "01-11"))
        assert stats.current_streak == 2
        assert stats.longest_streak == 4

    def test_current_ignores_distance_from_today(self):
        """A streak that ended years ago still counts as current."""
        stats = compute_streak(_days("01-01", "01-02"))
        assert stats.current_streak == 2

    def test_same_day_commits_count_once_for_days(self):
        stats = compute_streak(
            ["2024-01-01T08:00:00Z", "2024-01-01T20:00:00Z", "2024-01-02T09:00:00Z"]
        )
        assert stats.total_commits == 3
        assert stats.days_active == 2
        assert stats.current_streak == 2

    def test_input_order_does_not_matter(self):
        dates = _days("01-03", "01-01", "01-02", "01-07")
        assert compute_streak(dates) == compute_streak(list(reversed(dates)))

    def test_idempotent(self):
        dates = _days("02-01", "02-02", "02-04")
        assert compute_streak(dates) == compute_streak(dates)

    def test_accepts_datetimes(self):
        start = datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
        stats = compute_streak(start + timedelta(days=i) for i in range(5))
        assert stats.current_streak == 5
        assert stats.longest_streak == 5

    def test_longest_never_below_current(self):
        cases = [
            _days("01-01"),
            _days("01-01", "01-03", "01-04"),
            _days("01-01", "01-02", "01-05", "01-06", "01-07"),
        ]
        for dates in cases:
            stats = compute_streak(dates)
            assert stats.longest_streak >= stats.current_streak
            assert stats.days_active <= stats.total_commits


class TestToDay:
    """Tests for UTC day bucketing."""

    def test_offset_is_converted_to_utc(self):
        assert to_day("2024-01-01T23:30:00-05:00") == date(2024, 1, 2)

    def test_zulu_suffix(self):
        assert to_day("2024-01-01T00:00:00Z") == date(2024, 1, 1)

    def test_naive_datetime_treated_as_utc(self):
        assert to_day(datetime(2024, 6, 30, 23, 59)) == date(2024, 6, 30)


class TestComputeHeatmap:
    """Tests for compute_heatmap."""

    def _commit(self, sha, when):
        return CommitRecord(sha=sha, authored_at=when)

    def test_counts_per_day_sorted(self):
        commits = [
            self._commit("c", "2024-01-03T10:00:00Z"),
            self._commit("a", "2024-01-01T10:00:00Z"),
            self._commit("b", "2024-01-01T18:00:00Z"),
        ]
        heatmap = compute_heatmap(commits)

        assert [(entry.date, entry.count) for entry in heatmap] == [
            (date(2024, 1, 1), 2),
            (date(2024, 1, 3), 1),
        ]

    def test_empty(self):
        assert compute_heatmap([]) == []

    def test_counts_sum_to_commits(self):
        commits = [self._commit(str(i), f"2024-02-0{i % 3 + 1}T00:00:00Z") for i in range(7)]
        assert sum(entry.count for entry in compute_heatmap(commits)) == 7
