"""Portman – top-level package.

Risk-allocation and portfolio comparison core for a wealth-management
back office.
"""

__version__ = "0.1.0"
