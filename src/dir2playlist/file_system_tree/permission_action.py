"""Permission action enum for handling permission errors during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory cannot be listed because access is denied.

    In both cases the problem is recorded as a traversal warning first.

    Values:
        IGNORE: Treat the directory as empty and keep scanning (default behavior)
        RAISE: Raise a PermissionError immediately, aborting the scan
    """

    IGNORE = "ignore"
    RAISE = "raise"
