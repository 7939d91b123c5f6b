"""Portman – Portfolio comparison core types.

In-memory representations for target-vs-actual comparisons and book
level performance summaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class AllocationStatus(str, Enum):
    """Where an actual holding sits relative to its target."""

    OVER = "over"
    UNDER = "under"
    ON_TARGET = "on-target"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Position:
    """An account position valued at its current price."""

    symbol: str
    quantity: float
    current_price: float

    @property
    def value(self) -> float:
        return float(self.quantity) * float(self.current_price)


@dataclass(frozen=True)
class TargetAllocation:
    """A stored target weight for a single ticker.

    Attributes:
        ticker: Symbol as recorded in the holdings library.
        target_percentage: Target weight in percent of account value.
        name: Optional display name of the holding.
        allocation_id: Identifier of the stored allocation row, if any.
    """

    ticker: str
    target_percentage: float
    name: Optional[str] = None
    allocation_id: Optional[str] = None


@dataclass(frozen=True)
class ComparisonEntry:
    """One row of a target-vs-actual comparison.

    Percentages, variance and values are rounded to two decimals.
    ``variance`` is actual minus target, in percentage points.
    """

    allocation_id: Optional[str]
    ticker: str
    name: str
    target_percentage: float
    actual_percentage: float
    variance: float
    actual_value: float
    target_value: float
    quantity: float
    status: AllocationStatus


@dataclass(frozen=True)
class PortfolioComparison:
    has_target_allocations: bool
    comparison: List[ComparisonEntry] = field(default_factory=list)
    total_actual_value: float = 0.0
    total_target_percentage: float = 0.0


@dataclass(frozen=True)
class AccountSnapshot:
    """Balance and performance of one account as seen by the book roll-up."""

    account_type: str
    balance: float
    performance: float


@dataclass(frozen=True)
class BookSummary:
    """Book-level roll-up across accounts.

    Attributes:
        total_aum: Sum of account balances.
        account_count: Number of accounts included.
        average_performance: Balance-weighted average performance in
            percent; 0.0 when ``total_aum`` is 0.
        by_type: Mapping from upper-cased account type to
            ``(count, balance)``.
    """

    total_aum: float
    account_count: int
    average_performance: float
    by_type: Dict[str, Tuple[int, float]]
