"""Portman – Risk policy lookup tables.

Static policy constants used by the risk-allocation engine and the
compliance checks. All tables are read-only mappings built once at
import time.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from portman.risk.types import (
    HoldingCategory,
    RiskAllocation,
    RiskAllocationPreset,
    RiskLevel,
    RiskLimits,
    RiskTier,
)


CATEGORY_RISK_SCORES: Mapping[HoldingCategory, int] = MappingProxyType(
    {
        HoldingCategory.BASKET_ETF: 1,
        HoldingCategory.SINGLE_ETF: 2,
        HoldingCategory.MISC: 2,
        HoldingCategory.AUTO_ADDED: 2,
        HoldingCategory.SECURITY: 3,
        HoldingCategory.DOUBLE_LONG_ETF: 4,
    }
)

CATEGORY_LABELS: Mapping[HoldingCategory, str] = MappingProxyType(
    {
        HoldingCategory.BASKET_ETF: "Basket ETF",
        HoldingCategory.SINGLE_ETF: "Single ETF",
        HoldingCategory.DOUBLE_LONG_ETF: "Leveraged ETF",
        HoldingCategory.SECURITY: "Individual Security",
        HoldingCategory.AUTO_ADDED: "Auto Added",
        HoldingCategory.MISC: "Miscellaneous",
    }
)

# Categories with an exposure cap, in the order they are checked.
CAPPED_CATEGORIES: Tuple[HoldingCategory, ...] = (
    HoldingCategory.DOUBLE_LONG_ETF,
    HoldingCategory.SECURITY,
    HoldingCategory.SINGLE_ETF,
)

RISK_LIMITS_BY_LEVEL: Mapping[RiskTier, RiskLimits] = MappingProxyType(
    {
        RiskTier.MEDIUM: RiskLimits(double_long_etf=10, security=30, single_etf=50),
        RiskTier.MEDIUM_HIGH: RiskLimits(double_long_etf=25, security=50, single_etf=100),
        RiskTier.HIGH: RiskLimits(double_long_etf=100, security=100, single_etf=100),
    }
)

RISK_TIER_LABELS: Mapping[RiskTier, str] = MappingProxyType(
    {
        RiskTier.MEDIUM: "Medium",
        RiskTier.MEDIUM_HIGH: "Medium-High",
        RiskTier.HIGH: "High",
    }
)

RISK_LEVEL_LABELS: Mapping[RiskLevel, str] = MappingProxyType(
    {
        RiskLevel.LOW: "Low",
        RiskLevel.LOW_MEDIUM: "Low-Medium",
        RiskLevel.MEDIUM: "Medium",
        RiskLevel.MEDIUM_HIGH: "Medium-High",
        RiskLevel.HIGH: "High",
    }
)

# Default library classification for a holding that has none yet.
CATEGORY_TO_RISK_LEVEL: Mapping[HoldingCategory, RiskLevel] = MappingProxyType(
    {
        HoldingCategory.BASKET_ETF: RiskLevel.LOW_MEDIUM,
        HoldingCategory.SINGLE_ETF: RiskLevel.MEDIUM,
        HoldingCategory.MISC: RiskLevel.MEDIUM,
        HoldingCategory.AUTO_ADDED: RiskLevel.MEDIUM,
        HoldingCategory.SECURITY: RiskLevel.MEDIUM_HIGH,
        HoldingCategory.DOUBLE_LONG_ETF: RiskLevel.HIGH,
    }
)

# Accounts only carry three tiers; lower holding levels draw on medium.
RISK_LEVEL_TO_TIER: Mapping[RiskLevel, RiskTier] = MappingProxyType(
    {
        RiskLevel.LOW: RiskTier.MEDIUM,
        RiskLevel.LOW_MEDIUM: RiskTier.MEDIUM,
        RiskLevel.MEDIUM: RiskTier.MEDIUM,
        RiskLevel.MEDIUM_HIGH: RiskTier.MEDIUM_HIGH,
        RiskLevel.HIGH: RiskTier.HIGH,
    }
)

# (upper bound inclusive, label, color), checked in ascending order; the
# final entry catches everything above the last bound.
RISK_SCORE_BANDS: Tuple[Tuple[float, str, str], ...] = (
    (1.5, "Very Low Risk", "text-green-600 dark:text-green-400"),
    (2.0, "Low Risk", "text-emerald-600 dark:text-emerald-400"),
    (2.5, "Moderate Risk", "text-yellow-600 dark:text-yellow-400"),
    (3.0, "Elevated Risk", "text-orange-600 dark:text-orange-400"),
)
RISK_SCORE_FALLBACK_BAND: Tuple[str, str] = ("High Risk", "text-red-600 dark:text-red-400")

RISK_ALLOCATION_PRESETS: Tuple[RiskAllocationPreset, ...] = (
    RiskAllocationPreset("100% Med", RiskAllocation(100, 0, 0)),
    RiskAllocationPreset("100% M-H", RiskAllocation(0, 100, 0)),
    RiskAllocationPreset("100% High", RiskAllocation(0, 0, 100)),
    RiskAllocationPreset("50/50", RiskAllocation(0, 50, 50)),
    RiskAllocationPreset("60/40", RiskAllocation(0, 60, 40)),
    RiskAllocationPreset("40/60", RiskAllocation(0, 40, 60)),
)

WARNING_THRESHOLD = 0.8

# Defaults substituted for missing account fields.
DEFAULT_MEDIUM_PCT = "100"
DEFAULT_MEDIUM_HIGH_PCT = "0"
DEFAULT_HIGH_PCT = "0"

# Display fallback when every tier is zero.
EMPTY_ALLOCATION_LABEL = "100% Medium"
