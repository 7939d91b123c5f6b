"""Portman – Risk allocation package.

Blends account risk-tier mixtures into category exposure limits,
validates proposed target allocations against them, scores proposals
and checks positions for tier compliance.
"""

from __future__ import annotations

from portman.risk.types import (
    AccountRiskFields,
    CategoryAllocation,
    HoldingCategory,
    RiskAllocation,
    RiskLevel,
    RiskLimits,
    RiskTier,
    RiskValidationResult,
    RiskViolation,
)
from portman.risk.constants import (
    CATEGORY_RISK_SCORES,
    CATEGORY_TO_RISK_LEVEL,
    RISK_LIMITS_BY_LEVEL,
)
from portman.risk.allocation import (
    calculate_blended_limits,
    calculate_portfolio_risk_score,
    format_risk_allocation,
    get_risk_allocation_from_account,
    get_risk_score_color,
    get_risk_score_label,
    validate_risk_limits,
)
from portman.risk.api import evaluate_account_risk

__all__ = [
    "AccountRiskFields",
    "CategoryAllocation",
    "HoldingCategory",
    "RiskAllocation",
    "RiskLevel",
    "RiskLimits",
    "RiskTier",
    "RiskValidationResult",
    "RiskViolation",
    "CATEGORY_RISK_SCORES",
    "CATEGORY_TO_RISK_LEVEL",
    "RISK_LIMITS_BY_LEVEL",
    "calculate_blended_limits",
    "calculate_portfolio_risk_score",
    "format_risk_allocation",
    "get_risk_allocation_from_account",
    "get_risk_score_color",
    "get_risk_score_label",
    "validate_risk_limits",
    "evaluate_account_risk",
]
