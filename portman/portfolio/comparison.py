"""Portman – Target-vs-actual portfolio comparison.

Compares an account's stored target allocations against its actual
positions. Tickers are matched after stripping exchange suffixes so
that ``XIC.TO`` on one side and ``XIC`` on the other line up.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from portman.core.config import get_config
from portman.core.logging import get_logger
from portman.portfolio.types import (
    AllocationStatus,
    ComparisonEntry,
    PortfolioComparison,
    Position,
    TargetAllocation,
)
from portman.risk.allocation import round_half_up


logger = get_logger(__name__)

_EXCHANGE_SUFFIX = re.compile(r"\.(TO|V|CN|NE|TSX|NYSE|NASDAQ)$", re.IGNORECASE)


def normalize_ticker(ticker: str) -> str:
    """Upper-case ``ticker`` and strip a trailing exchange suffix."""

    return _EXCHANGE_SUFFIX.sub("", ticker.upper())


@dataclass
class _ActualHolding:
    value: float
    quantity: float
    original_ticker: str


def _round2(value: float) -> float:
    return round_half_up(value, 2)


def _status(variance: float, band_pct: float) -> AllocationStatus:
    if variance > band_pct:
        return AllocationStatus.OVER
    if variance < -band_pct:
        return AllocationStatus.UNDER
    return AllocationStatus.ON_TARGET


def compare_portfolio_to_targets(
    targets: Iterable[TargetAllocation],
    positions: Iterable[Position],
    band_pct: Optional[float] = None,
) -> PortfolioComparison:
    """Build the target-vs-actual comparison for one account.

    Args:
        targets: Stored target allocations.
        positions: Current positions.
        band_pct: Half-width, in percentage points, of the on-target
            band. Defaults to ``COMPARISON_BAND_PCT`` from configuration.

    Returns:
        A :class:`PortfolioComparison` whose entries are ordered by
        absolute variance, largest first. Positions without a target are
        reported with status ``unexpected``.
    """

    targets = list(targets)
    if not targets:
        return PortfolioComparison(has_target_allocations=False)

    if band_pct is None:
        band_pct = get_config().comparison_band_pct

    positions = list(positions)
    total_actual_value = sum(p.value for p in positions)
    total_target_percentage = sum(t.target_percentage for t in targets)

    actual_by_ticker: Dict[str, _ActualHolding] = {}
    for pos in positions:
        original = pos.symbol.upper()
        key = normalize_ticker(original)
        holding = actual_by_ticker.setdefault(key, _ActualHolding(0.0, 0.0, original))
        holding.value += pos.value
        holding.quantity += float(pos.quantity)

    def _pct_of_total(value: float) -> float:
        return value * 100 / total_actual_value if total_actual_value > 0 else 0.0

    entries: List[ComparisonEntry] = []
    seen: set[str] = set()

    for target in targets:
        display_ticker = target.ticker.upper()
        key = normalize_ticker(display_ticker)
        seen.add(key)

        actual = actual_by_ticker.get(key)
        actual_value = actual.value if actual is not None else 0.0
        actual_pct = _pct_of_total(actual_value)
        variance = actual_pct - target.target_percentage
        target_value = (
            _round2(target.target_percentage / 100 * total_actual_value)
            if total_actual_value > 0
            else 0.0
        )

        entries.append(
            ComparisonEntry(
                allocation_id=target.allocation_id,
                ticker=display_ticker,
                name=target.name or display_ticker,
                target_percentage=target.target_percentage,
                actual_percentage=_round2(actual_pct),
                variance=_round2(variance),
                actual_value=_round2(actual_value),
                target_value=target_value,
                quantity=actual.quantity if actual is not None else 0.0,
                status=_status(variance, band_pct),
            )
        )

    for key, actual in actual_by_ticker.items():
        if key in seen:
            continue
        actual_pct = _round2(_pct_of_total(actual.value))
        entries.append(
            ComparisonEntry(
                allocation_id=None,
                ticker=actual.original_ticker,
                name=actual.original_ticker,
                target_percentage=0.0,
                actual_percentage=actual_pct,
                variance=actual_pct,
                actual_value=_round2(actual.value),
                target_value=0.0,
                quantity=actual.quantity,
                status=AllocationStatus.UNEXPECTED,
            )
        )

    entries.sort(key=lambda e: abs(e.variance), reverse=True)

    logger.debug(
        "compare_portfolio_to_targets: %d target(s), %d position(s), %d entr(ies)",
        len(targets),
        len(positions),
        len(entries),
    )

    return PortfolioComparison(
        has_target_allocations=True,
        comparison=entries,
        total_actual_value=_round2(total_actual_value),
        total_target_percentage=_round2(total_target_percentage),
    )
