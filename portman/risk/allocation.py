"""Portman – Risk allocation engine.

Blends an account's risk-tier mixture into category exposure limits,
validates proposed target allocations against those limits and scores
a proposal by its category mix.

Every function here is pure. Degenerate inputs (empty proposals, zero
totals, NaN percentages read from storage) produce a value rather than
an exception; NaN in particular is propagated, not rejected, so callers
reading stored percentages should check for it if they care.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from portman.core.logging import get_logger
from portman.core.types import RawPercentage
from portman.risk.constants import (
    CAPPED_CATEGORIES,
    CATEGORY_RISK_SCORES,
    DEFAULT_HIGH_PCT,
    DEFAULT_MEDIUM_HIGH_PCT,
    DEFAULT_MEDIUM_PCT,
    EMPTY_ALLOCATION_LABEL,
    RISK_ALLOCATION_PRESETS,
    RISK_LIMITS_BY_LEVEL,
    RISK_SCORE_BANDS,
    RISK_SCORE_FALLBACK_BAND,
    RISK_TIER_LABELS,
    WARNING_THRESHOLD,
)
from portman.risk.types import (
    AccountRiskFields,
    CategoryAllocation,
    HoldingCategory,
    RiskAllocation,
    RiskLimits,
    RiskTier,
    RiskValidationResult,
    RiskViolation,
)


logger = get_logger(__name__)

_LEADING_FLOAT = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


# ============================================================================
# Limits
# ============================================================================


def calculate_blended_limits(allocation: RiskAllocation) -> RiskLimits:
    """Interpolate category caps across tiers by the account's mixture.

    Each tier's policy is weighted by its percentage / 100. The weights
    are not required to sum to 1, and negative or >100 inputs are
    passed straight through.
    """

    weights = {
        RiskTier.MEDIUM: allocation.medium / 100,
        RiskTier.MEDIUM_HIGH: allocation.medium_high / 100,
        RiskTier.HIGH: allocation.high / 100,
    }

    blended: Dict[str, float] = {}
    for category in CAPPED_CATEGORIES:
        blended[category.value] = sum(
            RISK_LIMITS_BY_LEVEL[tier].for_category(category) * weight
            for tier, weight in weights.items()
        )

    return RiskLimits(**blended)


def round_half_up(value: float, places: int = 1) -> float:
    """Round half-up (towards +inf) to ``places`` decimals.

    NaN and infinities pass through unchanged.
    """

    if math.isnan(value) or math.isinf(value):
        return value
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


def _category_key(category: Union[HoldingCategory, str]) -> str:
    if isinstance(category, HoldingCategory):
        return category.value
    return str(category)


def validate_risk_limits(
    allocations: Iterable[CategoryAllocation],
    risk_allocation: RiskAllocation,
) -> RiskValidationResult:
    """Validate a proposed allocation against the blended category caps.

    Percentages are summed per category. Only ``double_long_etf``,
    ``security`` and ``single_etf`` are capped; other categories are
    accepted without a check even though they carry risk scores.

    The blended cap is rounded to one decimal *before* comparison. A
    total strictly above the rounded cap is a violation; a total above
    80% of a non-zero cap is a warning. A zero cap never produces a
    warning, only violations.
    """

    limits = calculate_blended_limits(risk_allocation)

    category_totals: Dict[str, float] = {}
    for alloc in allocations:
        key = _category_key(alloc.category)
        category_totals[key] = category_totals.get(key, 0.0) + alloc.target_percentage

    violations: List[RiskViolation] = []
    warnings: List[RiskViolation] = []

    for category in CAPPED_CATEGORIES:
        total = category_totals.get(category.value, 0.0)
        max_allowed = round_half_up(limits.for_category(category))

        if total > max_allowed:
            violations.append(
                RiskViolation(
                    category=category,
                    current_percentage=total,
                    max_allowed=max_allowed,
                    exceeded_by=total - max_allowed,
                )
            )
        elif max_allowed > 0 and total > max_allowed * WARNING_THRESHOLD:
            warnings.append(
                RiskViolation(
                    category=category,
                    current_percentage=total,
                    max_allowed=max_allowed,
                    exceeded_by=0.0,
                )
            )

    logger.debug(
        "validate_risk_limits: blend=%s violations=%d warnings=%d",
        risk_allocation,
        len(violations),
        len(warnings),
    )

    return RiskValidationResult(
        is_valid=not violations,
        violations=violations,
        warnings=warnings,
    )


# ============================================================================
# Scoring
# ============================================================================


def calculate_portfolio_risk_score(allocations: Iterable[CategoryAllocation]) -> float:
    """Return the percentage-weighted average category risk score.

    Returns 0.0 when the percentages sum to zero. The result is not
    clamped, so negative percentages can push it outside [1, 4].

    Raises:
        ValueError: If an allocation's category is not a
            :class:`HoldingCategory` value.
    """

    weighted_score = 0.0
    total_percentage = 0.0

    for alloc in allocations:
        score = CATEGORY_RISK_SCORES[HoldingCategory(alloc.category)]
        weighted_score += score * alloc.target_percentage
        total_percentage += alloc.target_percentage

    if total_percentage == 0:
        return 0.0
    return weighted_score / total_percentage


def _score_band(score: float) -> tuple[str, str]:
    for upper, label, color in RISK_SCORE_BANDS:
        if score <= upper:
            return label, color
    return RISK_SCORE_FALLBACK_BAND


def get_risk_score_label(score: float) -> str:
    return _score_band(score)[0]


def get_risk_score_color(score: float) -> str:
    return _score_band(score)[1]


# ============================================================================
# Display helpers
# ============================================================================


def format_number(value: float) -> str:
    """Render integral values without a trailing ``.0``."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_risk_allocation(allocation: RiskAllocation) -> str:
    """Render the positive tiers, e.g. ``"70% Medium, 30% High"``.

    Falls back to the literal ``"100% Medium"`` when no tier is positive.
    """

    parts = [
        f"{format_number(allocation.for_tier(tier))}% {RISK_TIER_LABELS[tier]}"
        for tier in RiskTier
        if allocation.for_tier(tier) > 0
    ]
    if not parts:
        return EMPTY_ALLOCATION_LABEL
    return ", ".join(parts)


def find_risk_allocation_preset(allocation: RiskAllocation) -> Optional[str]:
    """Return the label of the preset matching ``allocation`` exactly."""

    for preset in RISK_ALLOCATION_PRESETS:
        if preset.allocation == allocation:
            return preset.label
    return None


# ============================================================================
# Boundary parsing
# ============================================================================


def parse_percentage(value: RawPercentage) -> float:
    """Parse a stored percentage with lenient leading-number semantics.

    Numbers are returned as floats. Strings are read up to the end of
    their leading numeric prefix (``"12.5%"`` gives 12.5); a string with
    no numeric prefix, or ``None``, gives NaN.
    """

    if value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)

    match = _LEADING_FLOAT.match(str(value))
    if match is None:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))


def _coerce_account_fields(account: Union[AccountRiskFields, Mapping[str, Any], Any]) -> AccountRiskFields:
    if isinstance(account, AccountRiskFields):
        return account
    if account is None:
        return AccountRiskFields()
    return AccountRiskFields.model_validate(account)


def get_risk_allocation_from_account(
    account: Union[AccountRiskFields, Mapping[str, Any], Any],
) -> RiskAllocation:
    """Read an account's tier split from a loosely-typed record.

    Missing fields default independently: medium to 100, medium-high and
    high to 0. Malformed values become NaN and are logged, not rejected.
    """

    fields = _coerce_account_fields(account)

    def _read(raw: RawPercentage, default: str) -> float:
        return parse_percentage(default if raw is None else raw)

    allocation = RiskAllocation(
        medium=_read(fields.risk_medium_pct, DEFAULT_MEDIUM_PCT),
        medium_high=_read(fields.risk_medium_high_pct, DEFAULT_MEDIUM_HIGH_PCT),
        high=_read(fields.risk_high_pct, DEFAULT_HIGH_PCT),
    )

    if any(math.isnan(allocation.for_tier(tier)) for tier in RiskTier):
        logger.warning(
            "get_risk_allocation_from_account: non-numeric risk percentage in %r",
            fields,
        )

    return allocation


def validate_risk_allocation_sum(
    allocation: RiskAllocation,
    tolerance: float = 0.01,
) -> bool:
    """Return True if the three tiers add up to 100 within ``tolerance``."""

    total = allocation.medium + allocation.medium_high + allocation.high
    return abs(total - 100) < tolerance


def validate_partial_risk_allocation_sum(
    account: Union[AccountRiskFields, Mapping[str, Any], Any],
    tolerance: float = 0.01,
) -> bool:
    """Sum check for partial updates.

    An update that touches none of the tier fields passes. Otherwise the
    missing fields take their usual defaults before the sum is checked.
    """

    fields = _coerce_account_fields(account)
    if not fields.has_any():
        return True
    return validate_risk_allocation_sum(
        get_risk_allocation_from_account(fields),
        tolerance=tolerance,
    )
