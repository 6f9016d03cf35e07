"""Supabase repository for log entry statistics."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from macro_tracker.adapters.supabase_errors import translate_api_errors
from macro_tracker.domain.stats import DailyTotals
from macro_tracker.services.analytics import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for summed log queries."""

    client: Client

    def sum_log_entries(self, start: date, end: date) -> list[DailyTotals]:
        """Return summed rows grouped by log date."""
        with translate_api_errors("fetch log totals"):
            response = self.client.rpc(
                "sum_food_log",
                {"p_start": start.isoformat(), "p_end": end.isoformat()},
            ).execute()
        rows = [_parse_row(row) for row in response.data or []]
        return sorted(rows, key=lambda row: row.day)


def _parse_row(row: dict[str, object]) -> DailyTotals:
    return DailyTotals(
        day=date.fromisoformat(str(row["log_date"])),
        entries=int(row.get("total_entries") or 0),
        calories=float(row.get("total_calories") or 0.0),
        protein_g=float(row.get("total_protein") or 0.0),
        net_carbs_g=float(row.get("total_net_carbs") or 0.0),
        fat_g=float(row.get("total_fat") or 0.0),
    )
