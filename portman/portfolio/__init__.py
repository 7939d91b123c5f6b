"""Portman – Portfolio comparison package.

Target-vs-actual comparisons for single accounts and balance-weighted
performance roll-ups across a book of accounts.
"""

from .types import (
    AccountSnapshot,
    AllocationStatus,
    BookSummary,
    ComparisonEntry,
    PortfolioComparison,
    Position,
    TargetAllocation,
)
from .comparison import compare_portfolio_to_targets, normalize_ticker
from .performance import snapshot_from_record, summarise_book
