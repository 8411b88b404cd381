from datetime import datetime, timedelta, timezone
from decimal import Decimal

import numpy as np

from src.wallet_core.analytics.journal import (
    EXPENSE_COLOR,
    INCOME_COLOR,
    amount_points,
    balance_points,
    flow_summary,
    format_local_time,
    format_n0,
    format_n2,
)
from src.wallet_core.models import WalletJournalEntry


class TestFormatting:
    def test_n2_uses_thousands_separator(self):
        assert format_n2(Decimal("1234567.5")) == "1,234,567.50"
        assert format_n2(Decimal("-250.256")) == "-250.26"

    def test_n2_midpoint_rounds_away_from_zero(self):
        assert format_n2(Decimal("2.345")) == "2.35"
        assert format_n2(Decimal("-2.345")) == "-2.35"
        assert format_n0(2.5) == "3"

    def test_n0_rounds_to_integer(self):
        assert format_n0(1250000.4) == "1,250,000"
        assert format_n0(0) == "0"

    def test_local_time_uses_general_date_pattern(self):
        morning = datetime(2026, 3, 1, 9, 30, 5, tzinfo=timezone.utc)
        evening = datetime(2026, 12, 24, 21, 5, 0, tzinfo=timezone.utc)
        midnight = datetime(2026, 1, 2, 0, 0, 7, tzinfo=timezone.utc)

        assert format_local_time(morning, timezone.utc) == "3/1/2026 9:30:05 AM"
        assert format_local_time(evening, timezone.utc) == "12/24/2026 9:05:00 PM"
        assert format_local_time(midnight, timezone.utc) == "1/2/2026 12:00:07 AM"

    def test_local_time_converts_zone(self):
        date = datetime(2026, 3, 1, 9, 30, 5, tzinfo=timezone.utc)
        assert format_local_time(date, timezone(timedelta(hours=-10))) == "2/28/2026 11:30:05 PM"


class TestBalancePoints:
    def test_points_are_in_ascending_time_order(self, journal):
        """Every entry becomes one point, sorted by date for area filling."""
        series = balance_points(journal, tz=timezone.utc)

        assert len(series) == 3
        assert np.all(np.diff(series.x) > 0)
        assert list(series.y) == [1000.0, 2000.0, 1749.75]

    def test_tooltip_shows_date_and_balance(self, journal):
        series = balance_points(journal, tz=timezone.utc)
        first_date, first_value = series.tooltips[0].split("\n")

        assert first_date == format_local_time(journal[1].date, timezone.utc)
        assert first_value == "1,000.00 ISK"
        assert series.tooltips[-1].endswith("\n1,749.75 ISK")

    def test_empty_journal(self):
        series = balance_points([])
        assert len(series) == 0
        assert series.x.size == 0
        assert series.y.size == 0


class TestAmountPoints:
    def test_colour_follows_sign(self, journal):
        series = amount_points(journal, tz=timezone.utc)

        assert list(series.y) == [1000.0, 1000.0, -250.25]
        assert series.brushes == [INCOME_COLOR, INCOME_COLOR, EXPENSE_COLOR]
        assert series.tooltips[-1].endswith("\n-250.25 ISK")

    def test_zero_amount_counts_as_income_colour(self):
        entry = WalletJournalEntry(
            ref_id=9, date=datetime(2026, 1, 1, tzinfo=timezone.utc),
            amount=Decimal(0), balance=Decimal(10),
        )
        assert amount_points([entry]).brushes == [INCOME_COLOR]

    def test_entries_with_same_date_keep_ref_order(self):
        date = datetime(2026, 1, 1, tzinfo=timezone.utc)
        entries = [
            WalletJournalEntry(ref_id=2, date=date, amount=Decimal(-5), balance=Decimal(5)),
            WalletJournalEntry(ref_id=1, date=date, amount=Decimal(10), balance=Decimal(10)),
        ]
        assert list(amount_points(entries).y) == [10.0, -5.0]


class TestFlowSummary:
    def test_sums_positive_and_negative_separately(self, journal):
        summary = flow_summary(journal)

        assert summary.inflow == Decimal("2000")
        assert summary.outflow == Decimal("-250.25")
        assert summary.inflow_tooltip == "Inflow\n2,000.00 ISK"
        assert summary.outflow_tooltip == "Outflow\n-250.25 ISK"

    def test_empty_journal_is_zero(self):
        summary = flow_summary([])
        assert summary.inflow == 0
        assert summary.outflow == 0


def test_naive_dates_are_taken_as_utc():
    entry = WalletJournalEntry(
        ref_id=1, date=datetime(2026, 1, 1, 12, 0), amount=Decimal(1), balance=Decimal(1)
    )
    assert entry.date.tzinfo == timezone.utc
