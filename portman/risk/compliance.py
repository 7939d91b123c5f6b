"""Portman – Risk category compliance checks.

Checks whether a position may be added to an account, and whether an
account's existing positions respect its tier split. Each holding's
risk level (explicit, or defaulted from its category) decides which
tier of the account's allocation it draws on.

The caller supplies the holdings library and the account's positions;
nothing here touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from portman.core.logging import get_logger
from portman.portfolio.types import Position
from portman.risk.allocation import format_number, round_half_up
from portman.risk.constants import (
    CATEGORY_TO_RISK_LEVEL,
    RISK_LEVEL_LABELS,
    RISK_LEVEL_TO_TIER,
)
from portman.risk.types import HoldingCategory, RiskAllocation, RiskLevel, RiskTier


logger = get_logger(__name__)

APPROACHING_LIMIT_RATIO = 0.9


@dataclass(frozen=True)
class Holding:
    """Entry of the holdings library used to classify a ticker."""

    ticker: str
    category: HoldingCategory
    risk_level: Optional[RiskLevel] = None

    @property
    def effective_risk_level(self) -> RiskLevel:
        if self.risk_level is not None:
            return self.risk_level
        return CATEGORY_TO_RISK_LEVEL[self.category]


@dataclass(frozen=True)
class ComplianceDetails:
    ticker_in_library: bool
    ticker_risk_level: Optional[RiskLevel] = None
    risk_level_allowed: Optional[bool] = None
    account_allocation: Optional[RiskAllocation] = None
    current_category_weight: Optional[float] = None
    projected_category_weight: Optional[float] = None
    category_allocation_limit: Optional[float] = None


@dataclass(frozen=True)
class ComplianceCheckResult:
    compliant: bool
    ticker: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    details: ComplianceDetails = field(
        default_factory=lambda: ComplianceDetails(ticker_in_library=False)
    )


@dataclass(frozen=True)
class AccountComplianceIssue:
    ticker: str
    issue: str
    risk_level: Optional[RiskLevel] = None


@dataclass(frozen=True)
class TierWeight:
    current: float
    limit: float


@dataclass(frozen=True)
class AccountComplianceResult:
    compliant: bool
    issues: List[AccountComplianceIssue] = field(default_factory=list)
    tier_weights: Dict[RiskTier, TierWeight] = field(default_factory=dict)


def _tier_values(
    positions: Iterable[Position],
    holdings: Mapping[str, Holding],
) -> Tuple[float, Dict[RiskTier, float], List[Position]]:
    """Return total value, value per tier, and unclassified positions."""

    total = 0.0
    per_tier: Dict[RiskTier, float] = {tier: 0.0 for tier in RiskTier}
    unclassified: List[Position] = []

    for pos in positions:
        value = pos.value
        total += value
        holding = holdings.get(pos.symbol.upper())
        if holding is None:
            unclassified.append(pos)
            continue
        per_tier[RISK_LEVEL_TO_TIER[holding.effective_risk_level]] += value

    return total, per_tier, unclassified


def check_position_compliance(
    ticker: str,
    position_value: float,
    allocation: RiskAllocation,
    positions: Iterable[Position],
    holdings: Mapping[str, Holding],
) -> ComplianceCheckResult:
    """Check whether adding ``position_value`` of ``ticker`` is allowed.

    Args:
        ticker: Symbol being added; matched case-insensitively against
            ``holdings`` (keyed by upper-case ticker).
        position_value: Dollar value of the position being added.
        allocation: The account's tier split.
        positions: The account's existing positions.
        holdings: Holdings library keyed by upper-case ticker.

    Returns:
        A :class:`ComplianceCheckResult`. Breaching the tier allocation
        is an error; landing within 90% of it is a warning only.
    """

    holding = holdings.get(ticker.upper())
    if holding is None:
        return ComplianceCheckResult(
            compliant=False,
            ticker=ticker,
            errors=[
                f'Ticker "{ticker}" is not in the Holdings Library. Please add it '
                "with a risk classification before creating this position."
            ],
        )

    risk_level = holding.effective_risk_level
    level_label = RISK_LEVEL_LABELS[risk_level]
    tier = RISK_LEVEL_TO_TIER[risk_level]
    limit = allocation.for_tier(tier)

    if limit == 0:
        return ComplianceCheckResult(
            compliant=False,
            ticker=ticker,
            errors=[
                f"This account has 0% allocation for {level_label} risk. "
                f'"{ticker}" is classified as {level_label} risk and cannot be added.'
            ],
            details=ComplianceDetails(
                ticker_in_library=True,
                ticker_risk_level=risk_level,
                risk_level_allowed=False,
                account_allocation=allocation,
                category_allocation_limit=limit,
            ),
        )

    total, per_tier, _ = _tier_values(positions, holdings)
    current_value = per_tier[tier]
    current_weight = current_value * 100 / total if total > 0 else 0.0

    new_total = total + position_value
    projected_weight = (
        (current_value + position_value) * 100 / new_total if new_total > 0 else 100.0
    )

    projected_weight_1dp = round_half_up(projected_weight)
    details = ComplianceDetails(
        ticker_in_library=True,
        ticker_risk_level=risk_level,
        risk_level_allowed=True,
        account_allocation=allocation,
        current_category_weight=round_half_up(current_weight),
        projected_category_weight=projected_weight_1dp,
        category_allocation_limit=limit,
    )

    if projected_weight > limit:
        exceeded_by = round_half_up(projected_weight - limit)
        logger.info(
            "check_position_compliance: %s rejected, %s tier projected %.1f%% > %s%%",
            ticker,
            tier.value,
            projected_weight,
            limit,
        )
        return ComplianceCheckResult(
            compliant=False,
            ticker=ticker,
            errors=[
                f"Adding this position would put {level_label} risk at "
                f"{format_number(projected_weight_1dp)}%, exceeding your "
                f"{format_number(limit)}% allocation by {format_number(exceeded_by)}%."
            ],
            details=details,
        )

    warnings: List[str] = []
    if projected_weight > limit * APPROACHING_LIMIT_RATIO:
        warnings.append(
            f"This position brings {level_label} risk to "
            f"{format_number(projected_weight_1dp)}%, approaching your {format_number(limit)}% limit."
        )

    return ComplianceCheckResult(
        compliant=True,
        ticker=ticker,
        warnings=warnings,
        details=details,
    )


def check_account_compliance(
    allocation: RiskAllocation,
    positions: Iterable[Position],
    holdings: Mapping[str, Holding],
) -> AccountComplianceResult:
    """Check every position of an account against its tier split."""

    positions = list(positions)
    issues: List[AccountComplianceIssue] = []

    for pos in positions:
        holding = holdings.get(pos.symbol.upper())
        if holding is None:
            issues.append(
                AccountComplianceIssue(
                    ticker=pos.symbol,
                    issue="Not in Holdings Library - unclassified risk",
                )
            )
            continue

        risk_level = holding.effective_risk_level
        if allocation.for_tier(RISK_LEVEL_TO_TIER[risk_level]) == 0:
            issues.append(
                AccountComplianceIssue(
                    ticker=pos.symbol,
                    issue=f"{RISK_LEVEL_LABELS[risk_level]} risk not allowed (0% allocation)",
                    risk_level=risk_level,
                )
            )

    total, per_tier, _ = _tier_values(positions, holdings)

    tier_weights: Dict[RiskTier, TierWeight] = {}
    for tier in RiskTier:
        current = per_tier[tier] * 100 / total if total > 0 else 0.0
        limit = allocation.for_tier(tier)
        tier_weights[tier] = TierWeight(current=round_half_up(current), limit=limit)

        if current > limit and limit > 0:
            level = RiskLevel(tier.value)
            issues.append(
                AccountComplianceIssue(
                    ticker="",
                    issue=(
                        f"{RISK_LEVEL_LABELS[level]} category at {format_number(round_half_up(current, 0))}%, "
                        f"exceeds {format_number(limit)}% limit"
                    ),
                    risk_level=level,
                )
            )

    return AccountComplianceResult(
        compliant=not issues,
        issues=issues,
        tier_weights=tier_weights,
    )