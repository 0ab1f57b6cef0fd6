"""
Shared utilities for texdiag.

Common functionality used across contexts:
- Logger configuration
- Text report formatting
- Timestamps
"""

from texdiag.utils.timestamp import now

__all__ = ["now"]
