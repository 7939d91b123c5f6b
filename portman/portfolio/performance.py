"""Portman – Book performance roll-up.

Aggregates account balances and reported performance into a single
balance-weighted book figure, with a breakdown by account type.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Tuple

from portman.portfolio.types import AccountSnapshot, BookSummary


def _as_number(value: Any) -> float:
    # Missing or unparseable figures count as zero.
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def snapshot_from_record(record: Mapping[str, Any]) -> AccountSnapshot:
    """Build an :class:`AccountSnapshot` from a stored account row.

    ``calculatedBalance`` is preferred over ``balance`` when present.
    """

    balance = record.get("calculatedBalance", record.get("balance"))
    return AccountSnapshot(
        account_type=str(record.get("type", record.get("account_type", ""))),
        balance=_as_number(balance),
        performance=_as_number(record.get("performance")),
    )


def summarise_book(accounts: Iterable[AccountSnapshot]) -> BookSummary:
    """Roll accounts up into a :class:`BookSummary`."""

    total_aum = 0.0
    weighted_sum = 0.0
    count = 0
    by_type: Dict[str, Tuple[int, float]] = {}

    for account in accounts:
        balance = _as_number(account.balance)
        performance = _as_number(account.performance)

        total_aum += balance
        weighted_sum += balance * (performance / 100)
        count += 1

        key = account.account_type.upper()
        prev_count, prev_balance = by_type.get(key, (0, 0.0))
        by_type[key] = (prev_count + 1, prev_balance + balance)

    average = (weighted_sum / total_aum) * 100 if total_aum > 0 else 0.0

    return BookSummary(
        total_aum=total_aum,
        account_count=count,
        average_performance=average,
        by_type=by_type,
    )
