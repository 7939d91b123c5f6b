"""
Portman: Core Type Definitions

Common type aliases shared across the risk and portfolio packages.

Author: Portman Team
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from typing import Any, Dict, Mapping, TypeAlias

# ============================================================================
# Type Aliases
# ============================================================================

# Loosely-typed row as handed over by the storage layer (account, target
# allocation or position record).
AccountRecord: TypeAlias = Mapping[str, Any]

# JSON-ready payload returned to route handlers
PayloadDict: TypeAlias = Dict[str, Any]

# A percentage as stored upstream: numeric, numeric string or missing
RawPercentage: TypeAlias = float | int | str | None
