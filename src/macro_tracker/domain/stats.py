"""Domain models for period analytics."""

from dataclasses import dataclass
from datetime import date

from macro_tracker.domain.macros import MacroPercentages


@dataclass(frozen=True)
class DailyTotals:
    """Summed log entries for one calendar day."""

    day: date
    entries: int
    calories: float
    protein_g: float
    net_carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DailySummary:
    """Daily totals with calorie percentages."""

    day: date
    total_entries: int
    total_calories: float
    total_protein_g: float
    total_net_carbs_g: float
    total_fat_g: float
    percentages: MacroPercentages


@dataclass(frozen=True)
class WeeklySummary:
    """Seven-day totals with a per-day breakdown."""

    week_start: date
    week_end: date
    total_entries: int
    total_calories: float
    total_protein_g: float
    total_net_carbs_g: float
    total_fat_g: float
    percentages: MacroPercentages
    daily_breakdown: list[DailySummary]


@dataclass(frozen=True)
class PeriodTotals:
    """Totals across a period."""

    entries: int
    calories: float
    protein_g: float
    net_carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class PeriodAverages:
    """Per-day averages across days that have data."""

    calories: float
    protein_g: float
    net_carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class RangeSummary:
    """Arbitrary date range summary."""

    start_date: date
    end_date: date
    days_count: int
    totals: PeriodTotals
    averages: PeriodAverages
    daily_data: list[DailySummary]
