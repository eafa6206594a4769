"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StacheUserError.

Programming errors and bugs should NOT inherit from StacheUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations


class StacheUserError(Exception):
    """
    Base class for all user-facing errors in stache.

    These errors indicate problems that the template author can fix:
    unbalanced sections, malformed directives, invalid configuration.
    """
    pass


__all__ = ["StacheUserError"]
