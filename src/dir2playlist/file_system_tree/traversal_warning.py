"""Structured warnings recorded while scanning library roots."""

from enum import Enum
from typing import Any


class WarningReason(str, Enum):
    """Why part of a library root was left out of the media tree.

    Values:
        PERMISSION_DENIED: A directory could not be listed because access was denied
        UNREADABLE: An entry could not be listed or resolved for another OS-level reason
        SYMLINK_CYCLE: A directory resolves to one of its own ancestors
    """

    PERMISSION_DENIED = "permission_denied"
    UNREADABLE = "unreadable"
    SYMLINK_CYCLE = "symlink_cycle"


class TraversalWarning:
    """A non-fatal problem met during traversal.

    The subtree at ``path`` is treated as empty and the scan continues. Warnings are
    accumulated by the tree builder and handed to the caller, which decides whether to
    report them.

    Attributes:
        path (str): The path that could not be scanned.
        reason (WarningReason): Category of the problem.
        message (str): Human-readable description.

    Example:
        >>> warning = TraversalWarning("/lib/locked", WarningReason.PERMISSION_DENIED, "Access denied")
        >>> str(warning)
        'Access denied: /lib/locked'
    """

    def __init__(self, path: str, reason: WarningReason, message: str):
        self.path = path
        self.reason = reason
        self.message = message

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TraversalWarning):
            return False
        return (self.path, self.reason, self.message) == (other.path, other.reason, other.message)

    def __hash__(self) -> int:
        return hash((self.path, self.reason, self.message))

    def __str__(self) -> str:
        printable_path = self.path.encode("utf-8", "backslashreplace").decode("utf-8")
        return f"{self.message}: {printable_path}"

    def __repr__(self) -> str:
        return f"TraversalWarning(path={self.path!r}, reason={self.reason.value!r}, message={self.message!r})"
