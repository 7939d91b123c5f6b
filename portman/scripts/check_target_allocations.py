"""Portman – Target allocation risk check CLI.

This script reads a CSV of proposed target allocations (``ticker``,
``category``, ``target_percentage``), validates it against the blended
category limits for the given risk-tier split and prints the resulting
violations, warnings and portfolio risk score.

Example
-------

    python -m portman.scripts.check_target_allocations \
        --csv proposal.csv \
        --medium 70 --high 30

Exit status is 0 for a valid proposal, 1 when a limit is breached and 2
for argument or input errors.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from portman.core.config import get_config
from portman.core.logging import get_logger
from portman.risk.allocation import (
    calculate_blended_limits,
    format_risk_allocation,
    validate_risk_allocation_sum,
)
from portman.risk.api import evaluate_account_risk
from portman.risk.constants import CATEGORY_LABELS
from portman.risk.types import HoldingCategory, RiskAllocation


logger = get_logger(__name__)

REQUIRED_COLUMNS = ("category", "target_percentage")


def _load_rows(csv_path: Path) -> List[dict]:
    df = pd.read_csv(csv_path, dtype={"category": str, "ticker": str})
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV {csv_path} is missing column(s): {', '.join(missing)}")

    df["category"] = df["category"].str.strip().str.lower()
    df["target_percentage"] = pd.to_numeric(df["target_percentage"], errors="raise").astype(float)
    blank = df.index[df["target_percentage"].isna()]
    if len(blank):
        # +2: one for the header, one for 1-based line numbers
        lines = ", ".join(str(i + 2) for i in blank)
        raise ValueError(f"CSV {csv_path} has blank target_percentage on line(s): {lines}")
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def _label(category: str) -> str:
    try:
        return CATEGORY_LABELS[HoldingCategory(category)]
    except ValueError:
        return category


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Validate a CSV of proposed target allocations against the "
            "blended category limits of a risk-tier split."
        ),
    )

    parser.add_argument(
        "--csv",
        type=str,
        required=True,
        help="Path to a CSV with ticker, category and target_percentage columns",
    )
    parser.add_argument(
        "--medium",
        type=float,
        default=100.0,
        help="Percentage of the mandate in the medium tier (default: 100)",
    )
    parser.add_argument(
        "--medium-high",
        type=float,
        default=0.0,
        help="Percentage of the mandate in the medium-high tier (default: 0)",
    )
    parser.add_argument(
        "--high",
        type=float,
        default=0.0,
        help="Percentage of the mandate in the high tier (default: 0)",
    )

    args = parser.parse_args(argv)

    csv_path = Path(args.csv)
    if not csv_path.exists():
        parser.error(f"Input CSV not found: {csv_path}")

    allocation = RiskAllocation(
        medium=args.medium,
        medium_high=args.medium_high,
        high=args.high,
    )
    if not validate_risk_allocation_sum(allocation, tolerance=get_config().risk_sum_tolerance):
        logger.warning("Risk tiers do not sum to 100%%: %s", allocation)

    try:
        rows = _load_rows(csv_path)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        logger.exception("Failed to read target allocations from %s", csv_path)
        print(f"Error reading {csv_path}: {exc}")
        return 2

    account = {
        "risk_medium_pct": allocation.medium,
        "risk_medium_high_pct": allocation.medium_high,
        "risk_high_pct": allocation.high,
    }
    summary = evaluate_account_risk(account, rows)
    limits = calculate_blended_limits(allocation)
    validation = summary["validation"]

    print(f"Risk split: {format_risk_allocation(allocation)}")
    print(
        "Blended limits: "
        f"double_long_etf={limits.double_long_etf:.1f}% "
        f"security={limits.security:.1f}% "
        f"single_etf={limits.single_etf:.1f}%"
    )
    print(f"Allocations: {len(rows)}")

    for v in validation["violations"]:
        print(
            f"VIOLATION {_label(v['category'])}: {v['current_percentage']:.1f}% "
            f"> {v['max_allowed']:.1f}% (exceeded by {v['exceeded_by']:.1f}%)"
        )
    for w in validation["warnings"]:
        print(
            f"WARNING {_label(w['category'])}: {w['current_percentage']:.1f}% "
            f"approaching {w['max_allowed']:.1f}%"
        )

    print(f"Risk score: {summary['risk_score']:.2f} ({summary['risk_score_label']})")

    return 0 if validation["is_valid"] else 1


if __name__ == "__main__":  # pragma: no cover - manual CLI entry
    raise SystemExit(main())
