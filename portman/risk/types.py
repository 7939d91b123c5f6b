"""Portman – Risk allocation core types.

Value objects shared by the risk-allocation engine and the compliance
checks. Everything here is immutable and created per request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class HoldingCategory(str, Enum):
    """Structural classification of a tradable instrument."""

    BASKET_ETF = "basket_etf"
    SINGLE_ETF = "single_etf"
    DOUBLE_LONG_ETF = "double_long_etf"
    SECURITY = "security"
    AUTO_ADDED = "auto_added"
    MISC = "misc"


class RiskTier(str, Enum):
    """Risk tolerance tiers an account mandate is split across."""

    MEDIUM = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH = "high"


class RiskLevel(str, Enum):
    """Risk level assigned to a holding in the holdings library."""

    LOW = "low"
    LOW_MEDIUM = "low_medium"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH = "high"


@dataclass(frozen=True)
class RiskAllocation:
    """Split of an account mandate across the three risk tiers.

    Attributes:
        medium: Percentage of the mandate in the medium tier.
        medium_high: Percentage in the medium-high tier.
        high: Percentage in the high tier.

    The three values should add up to 100 but this is not enforced;
    each is read as an independent weight divided by 100.
    """

    medium: float = 100.0
    medium_high: float = 0.0
    high: float = 0.0

    def for_tier(self, tier: RiskTier) -> float:
        return float(getattr(self, tier.value))


@dataclass(frozen=True)
class RiskLimits:
    """Exposure caps, in percent of total allocation, for capped categories."""

    double_long_etf: float
    security: float
    single_etf: float

    def for_category(self, category: HoldingCategory) -> float:
        return float(getattr(self, category.value))


@dataclass(frozen=True)
class CategoryAllocation:
    """One line of a proposed target allocation.

    ``category`` is normally a :class:`HoldingCategory` but plain strings
    are tolerated; unknown categories are ignored by limit validation.
    Scoring needs a known category: :func:`calculate_portfolio_risk_score`
    raises ``ValueError`` for a string outside :class:`HoldingCategory`.
    """

    category: Union[HoldingCategory, str]
    target_percentage: float
    ticker: str | None = None


@dataclass(frozen=True)
class RiskViolation:
    """A capped category that breaches, or approaches, its blended limit.

    For warnings ``exceeded_by`` is always 0.
    """

    category: HoldingCategory
    current_percentage: float
    max_allowed: float
    exceeded_by: float


@dataclass(frozen=True)
class RiskValidationResult:
    """Outcome of validating a proposal against blended limits."""

    is_valid: bool
    violations: List[RiskViolation] = field(default_factory=list)
    warnings: List[RiskViolation] = field(default_factory=list)


@dataclass(frozen=True)
class RiskAllocationPreset:
    """Named shortcut for a common tier split."""

    label: str
    allocation: RiskAllocation


RawPercentageField = Union[float, str, None]


class AccountRiskFields(BaseModel):
    """Risk-tier fields read off an account record at the boundary.

    Each field is optional and independently defaulted downstream. The
    storage layer's camelCase names are accepted as aliases, and
    arbitrary objects can be validated through ``from_attributes``.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
        frozen=True,
    )

    risk_medium_pct: RawPercentageField = Field(default=None, alias="riskMediumPct")
    risk_medium_high_pct: RawPercentageField = Field(
        default=None, alias="riskMediumHighPct"
    )
    risk_high_pct: RawPercentageField = Field(default=None, alias="riskHighPct")

    def has_any(self) -> bool:
        """Return True if at least one tier field is present."""

        return any(
            value is not None
            for value in (self.risk_medium_pct, self.risk_medium_high_pct, self.risk_high_pct)
        )
