"""Exclusion of explicit filesystem paths and everything beneath them."""

from pathlib import Path, PurePath
from typing import Iterable, List, Optional, Set

from dir2playlist.types import PathType

from .base_rules import BaseExclusionRules


class SkipPathRules(BaseExclusionRules):
    """Exclusion rules built from explicit skip paths.

    Every skip path is resolved to an absolute, symlink-free path when it is added. A
    candidate path is excluded when it equals a skip path or lies beneath one. Candidates
    are expected to be resolved already, so matching is a pure path comparison.

    A skip path that does not exist is kept as given (after making it absolute) and
    simply never matches anything, which lets a configured skip list outlive the
    directories it names.

    Attributes:
        paths (List[PurePath]): The resolved skip paths in the order they were added.

    Example:
        >>> rules = SkipPathRules()
        >>> rules.add_rule("/lib/private")  # doctest: +SKIP
        >>> rules.exclude("/lib/private")  # doctest: +SKIP
        True
        >>> rules.exclude("/lib/private/season 1/secret.mp4")  # doctest: +SKIP
        True
        >>> rules.exclude("/lib/private-ish/show.mkv")  # doctest: +SKIP
        False
    """

    def __init__(self, skip_paths: Optional[Iterable[PathType]] = None) -> None:
        self.paths: List[PurePath] = []
        self._path_set: Set[PurePath] = set()
        if skip_paths is not None:
            for skip_path in skip_paths:
                self.add_rule(str(skip_path))

    def exclude(self, path: str) -> bool:
        """Check whether a resolved path is a skip path or lies beneath one.

        Args:
            path: Absolute, resolved path of a file or directory.

        Returns:
            True if the path or any of its ancestors is a skip path.
        """
        if not self._path_set:
            return False
        candidate = PurePath(path)
        if candidate in self._path_set:
            return True
        return any(parent in self._path_set for parent in candidate.parents)

    def has_rules(self) -> bool:
        return bool(self.paths)

    def add_rule(self, rule: str) -> None:
        """Add a skip path, resolving it against the filesystem.

        Args:
            rule: A file or directory path. Relative paths are taken relative to the
                current working directory.
        """
        resolved = PurePath(Path(rule).expanduser().resolve())
        if resolved not in self._path_set:
            self._path_set.add(resolved)
            self.paths.append(resolved)
