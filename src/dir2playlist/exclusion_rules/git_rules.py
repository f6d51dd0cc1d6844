"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from pathspec import PathSpec

from dir2playlist.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules written as .gitignore patterns.

    Patterns are matched with the pathspec library the same way Git matches them, so
    globs, directory patterns ending in ``/``, negations with ``!`` and ``**`` all work.
    Paths handed to :meth:`exclude` are relative to the root being scanned and use
    forward slashes; directories are checked with a trailing slash so that patterns
    such as ``extras/`` prune whole subtrees.

    Patterns from files and patterns added one at a time are combined in the order they
    arrive, later patterns overriding earlier ones.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.sample.mkv")
        >>> rules.add_rule("Extras/")
        >>> rules.exclude("Show/trailer.sample.mkv")
        True
        >>> rules.exclude("Show/Extras/")
        True
        >>> rules.exclude("Show/S01E01.mkv")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading patterns from files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def has_rules(self) -> bool:
        return any(line.strip() and not line.startswith("#") for line in self._lines)

    def _extend(self, lines: Iterable[str]) -> None:
        # A PathSpec is compiled once, so a new one is built from the full pattern list
        self._lines.extend(lines)
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                self._extend(f.read().splitlines())

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern.

        Args:
            rule: A pattern such as ``"*.sample.mkv"``, ``"Extras/"`` or ``"!keep.mkv"``.
        """
        self._extend([rule])
