"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .skip_rules import SkipPathRules

__all__ = [
    "BaseExclusionRules",
    "GitIgnoreExclusionRules",
    "SkipPathRules",
]
