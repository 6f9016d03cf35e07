"""Period analytics over logged entries."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from macro_tracker.domain.errors import InvalidInputError
from macro_tracker.domain.logs import LogEntry
from macro_tracker.domain.macros import macro_percentages
from macro_tracker.domain.stats import (
    DailySummary,
    DailyTotals,
    PeriodAverages,
    PeriodTotals,
    RangeSummary,
    WeeklySummary,
)

WEEK_LENGTH_DAYS = 7


class StatsRepository(Protocol):
    """Persistence interface for summed log entries."""

    def sum_log_entries(self, start: date, end: date) -> list[DailyTotals]:
        """Return one summed row per log date in the inclusive range."""


@dataclass
class AnalyticsService:
    """Service that fetches summed rows and builds period summaries."""

    repository: StatsRepository

    def get_daily(self, day: date) -> DailySummary:
        """Return the summary for a single day."""
        return daily_summary(day, self.repository.sum_log_entries(day, day))

    def get_weekly(self, week_start: date) -> WeeklySummary:
        """Return the summary for the seven days starting at week_start."""
        week_end = week_start + timedelta(days=WEEK_LENGTH_DAYS - 1)
        rows = self.repository.sum_log_entries(week_start, week_end)
        return weekly_summary(week_start, rows)

    def get_range(self, start: date, end: date) -> RangeSummary:
        """Return the summary for an inclusive date range."""
        if start > end:
            raise InvalidInputError("start_date must not be after end_date")
        return range_summary(start, end, self.repository.sum_log_entries(start, end))


def group_entries_by_day(entries: Iterable[LogEntry]) -> list[DailyTotals]:
    """Fold log entry snapshots into one totals row per date, ascending.

    This is the entry-level input to the summaries below, for callers that hold
    raw log entries instead of the rows summed by the data store.
    """
    grouped: dict[date, DailyTotals] = {}
    for entry in entries:
        current = grouped.get(entry.log_date) or DailyTotals(
            day=entry.log_date,
            entries=0,
            calories=0.0,
            protein_g=0.0,
            net_carbs_g=0.0,
            fat_g=0.0,
        )
        grouped[entry.log_date] = DailyTotals(
            day=current.day,
            entries=current.entries + 1,
            calories=current.calories + entry.snapshot.calories,
            protein_g=current.protein_g + entry.snapshot.protein_g,
            net_carbs_g=current.net_carbs_g + entry.snapshot.net_carbs_g,
            fat_g=current.fat_g + entry.snapshot.fat_g,
        )
    return [grouped[day] for day in sorted(grouped)]


def daily_summary(day: date, rows: Iterable[DailyTotals]) -> DailySummary:
    """Sum the rows for one day; an empty day yields an all-zero summary."""
    totals = _sum_rows(row for row in rows if row.day == day)
    return _to_daily(day, totals)


def weekly_summary(week_start: date, rows: Iterable[DailyTotals]) -> WeeklySummary:
    """Summarize [week_start, week_start + 6] with a per-day breakdown."""
    week_end = week_start + timedelta(days=WEEK_LENGTH_DAYS - 1)
    days = _group_rows(rows, week_start, week_end)
    totals = _sum_rows(days)
    return WeeklySummary(
        week_start=week_start,
        week_end=week_end,
        total_entries=totals.entries,
        total_calories=totals.calories,
        total_protein_g=totals.protein_g,
        total_net_carbs_g=totals.net_carbs_g,
        total_fat_g=totals.fat_g,
        percentages=macro_percentages(
            totals.protein_g, totals.net_carbs_g, totals.fat_g, totals.calories
        ),
        daily_breakdown=[_to_daily(day.day, day) for day in days],
    )


def range_summary(
    start: date, end: date, rows: Iterable[DailyTotals]
) -> RangeSummary:
    """Summarize an inclusive range, averaging over days that have entries."""
    days = _group_rows(rows, start, end)
    totals = _sum_rows(days)
    days_count = len(days)
    if days_count:
        averages = PeriodAverages(
            calories=totals.calories / days_count,
            protein_g=totals.protein_g / days_count,
            net_carbs_g=totals.net_carbs_g / days_count,
            fat_g=totals.fat_g / days_count,
        )
    else:
        averages = PeriodAverages(0.0, 0.0, 0.0, 0.0)
    return RangeSummary(
        start_date=start,
        end_date=end,
        days_count=days_count,
        totals=totals,
        averages=averages,
        daily_data=[_to_daily(day.day, day) for day in days],
    )


def _group_rows(
    rows: Iterable[DailyTotals], start: date, end: date
) -> list[DailyTotals]:
    grouped: dict[date, list[DailyTotals]] = {}
    for row in rows:
        if start <= row.day <= end:
            grouped.setdefault(row.day, []).append(row)
    result = []
    for day in sorted(grouped):
        totals = _sum_rows(grouped[day])
        result.append(
            DailyTotals(
                day=day,
                entries=totals.entries,
                calories=totals.calories,
                protein_g=totals.protein_g,
                net_carbs_g=totals.net_carbs_g,
                fat_g=totals.fat_g,
            )
        )
    return result


def _sum_rows(rows: Iterable[DailyTotals]) -> PeriodTotals:
    totals = PeriodTotals(entries=0, calories=0, protein_g=0, net_carbs_g=0, fat_g=0)
    for row in rows:
        totals = PeriodTotals(
            entries=totals.entries + row.entries,
            calories=totals.calories + row.calories,
            protein_g=totals.protein_g + row.protein_g,
            net_carbs_g=totals.net_carbs_g + row.net_carbs_g,
            fat_g=totals.fat_g + row.fat_g,
        )
    return totals


def _to_daily(day: date, totals: PeriodTotals | DailyTotals) -> DailySummary:
    return DailySummary(
        day=day,
        total_entries=totals.entries,
        total_calories=totals.calories,
        total_protein_g=totals.protein_g,
        total_net_carbs_g=totals.net_carbs_g,
        total_fat_g=totals.fat_g,
        percentages=macro_percentages(
            totals.protein_g, totals.net_carbs_g, totals.fat_g, totals.calories
        ),
    )
