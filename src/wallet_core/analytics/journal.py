"""Turns a wallet journal into plot-ready series for the chart window."""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from src.wallet_core.formatting import format_general_date, format_number
from src.wallet_core.models import WalletJournalEntry

Color = Tuple[int, int, int]

INCOME_COLOR: Color = (0, 100, 0)  # dark green
EXPENSE_COLOR: Color = (139, 0, 0)  # dark red


@dataclass(frozen=True)
class ChartSeries:
    """Parallel arrays of x (POSIX seconds), y and per-point decorations."""
    x: np.ndarray
    y: np.ndarray
    tooltips: List[str]
    brushes: List[Color] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tooltips)


@dataclass(frozen=True)
class FlowSummary:
    inflow: Decimal
    outflow: Decimal

    @property
    def inflow_tooltip(self) -> str:
        return f"Inflow\n{format_n2(self.inflow)} ISK"

    @property
    def outflow_tooltip(self) -> str:
        return f"Outflow\n{format_n2(self.outflow)} ISK"


def format_n0(value: float | Decimal) -> str:
    return format_number(value, 0)


def format_n2(value: float | Decimal) -> str:
    return format_number(value, 2)


def format_local_time(date: datetime, tz: Optional[tzinfo] = None) -> str:
    """Renders a UTC journal date in local time (or in `tz` when given)."""
    return format_general_date(date, tz)


def _point_tooltip(date: datetime, value: Decimal, tz: Optional[tzinfo]) -> str:
    return f"{format_local_time(date, tz)}\n{format_n2(value)} ISK"


def _sorted(journal: Iterable[WalletJournalEntry]) -> List[WalletJournalEntry]:
    # pyqtgraph needs ascending x to fill an area under a curve
    return sorted(journal, key=lambda entry: (entry.date, entry.ref_id))


def _timestamps(entries: Sequence[WalletJournalEntry]) -> np.ndarray:
    return np.array([e.date.timestamp() for e in entries], dtype=float)


def balance_points(
    journal: Iterable[WalletJournalEntry], tz: Optional[tzinfo] = None
) -> ChartSeries:
    """One point per journal entry: the wallet balance after that entry."""
    entries = _sorted(journal)
    return ChartSeries(
        x=_timestamps(entries),
        y=np.array([float(e.balance) for e in entries], dtype=float),
        tooltips=[_point_tooltip(e.date, e.balance, tz) for e in entries],
    )


def amount_points(
    journal: Iterable[WalletJournalEntry], tz: Optional[tzinfo] = None
) -> ChartSeries:
    """One column per journal entry, coloured by sign of the amount."""
    entries = _sorted(journal)
    return ChartSeries(
        x=_timestamps(entries),
        y=np.array([float(e.amount) for e in entries], dtype=float),
        tooltips=[_point_tooltip(e.date, e.amount, tz) for e in entries],
        brushes=[EXPENSE_COLOR if e.amount < 0 else INCOME_COLOR for e in entries],
    )


def flow_summary(journal: Iterable[WalletJournalEntry]) -> FlowSummary:
    """Sums positive amounts into inflow and negative amounts into outflow."""
    inflow = Decimal(0)
    outflow = Decimal(0)
    for entry in journal:
        if entry.amount > 0:
            inflow += entry.amount
        elif entry.amount < 0:
            outflow += entry.amount
    return FlowSummary(inflow=inflow, outflow=outflow)
