"""Portman – Risk allocation public API.

This module exposes a small, dictionary-based API for route handlers:
hand over an account record and its stored target-allocation rows and
get back a JSON-ready risk summary. It does not depend on any
particular storage implementation.
"""

from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any, Iterable, List

from portman.core.logging import get_logger
from portman.core.types import AccountRecord, PayloadDict
from portman.risk.allocation import (
    calculate_blended_limits,
    calculate_portfolio_risk_score,
    format_risk_allocation,
    get_risk_allocation_from_account,
    get_risk_score_color,
    get_risk_score_label,
    parse_percentage,
    validate_risk_limits,
)
from portman.risk.types import CategoryAllocation, HoldingCategory, RiskViolation


logger = get_logger(__name__)

_KNOWN_CATEGORIES = {c.value for c in HoldingCategory}


def allocations_from_rows(rows: Iterable[AccountRecord]) -> List[CategoryAllocation]:
    """Convert stored target-allocation rows into :class:`CategoryAllocation`.

    Expected row fields (soft contract)::

        {
            "category": "security",
            "target_percentage": "12.5",   # or "targetPercentage"
            "ticker": "SHOP.TO",           # optional
        }

    Known category strings are converted to :class:`HoldingCategory`;
    unknown ones are kept as plain strings. Rows whose percentage is
    missing or does not parse to a finite number are skipped with a
    warning, so the resulting allocations never carry NaN.
    """

    out: List[CategoryAllocation] = []
    for row in rows:
        raw_category = row.get("category")
        category: HoldingCategory | str
        if isinstance(raw_category, HoldingCategory):
            category = raw_category
        elif raw_category in _KNOWN_CATEGORIES:
            category = HoldingCategory(raw_category)
        else:
            category = str(raw_category)
        raw_pct = row.get("target_percentage")
        if raw_pct is None:
            raw_pct = row.get("targetPercentage")
        pct = parse_percentage(raw_pct)
        if not math.isfinite(pct):
            logger.warning(
                "allocations_from_rows: skipping %s row with unusable percentage %r",
                raw_category,
                raw_pct,
            )
            continue
        out.append(
            CategoryAllocation(
                category=category,
                target_percentage=pct,
                ticker=row.get("ticker"),
            )
        )
    return out


def _violation_payload(violation: RiskViolation) -> PayloadDict:
    payload = asdict(violation)
    payload["category"] = violation.category.value
    return payload


def evaluate_account_risk(
    account: AccountRecord | Any,
    target_rows: Iterable[AccountRecord],
) -> PayloadDict:
    """Summarise an account's proposed target allocation against its risk blend.

    Args:
        account: Account record carrying ``riskMediumPct`` /
            ``riskMediumHighPct`` / ``riskHighPct`` (or their snake_case
            equivalents).
        target_rows: Stored target-allocation rows; see
            :func:`allocations_from_rows`.

    Returns:
        A JSON-ready dictionary with the blend, blended limits,
        validation outcome and portfolio risk score.
    """

    risk_allocation = get_risk_allocation_from_account(account)
    allocations = allocations_from_rows(target_rows)

    limits = calculate_blended_limits(risk_allocation)
    validation = validate_risk_limits(allocations, risk_allocation)

    scored = [a for a in allocations if isinstance(a.category, HoldingCategory)]
    skipped = len(allocations) - len(scored)
    if skipped:
        logger.debug("evaluate_account_risk: %d row(s) with unknown category not scored", skipped)

    score = calculate_portfolio_risk_score(scored)

    return {
        "risk_allocation": asdict(risk_allocation),
        "risk_allocation_label": format_risk_allocation(risk_allocation),
        "blended_limits": asdict(limits),
        "validation": {
            "is_valid": validation.is_valid,
            "violations": [_violation_payload(v) for v in validation.violations],
            "warnings": [_violation_payload(v) for v in validation.warnings],
        },
        "risk_score": score,
        "risk_score_label": get_risk_score_label(score),
        "risk_score_color": get_risk_score_color(score),
    }
