from abc import ABC, abstractmethod
from typing import Sequence, Union

from dir2playlist.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Concrete rules decide whether a path is left out of the media tree. What kind of
    path a rule expects depends on the rule: skip rules compare fully resolved absolute
    paths, while pattern rules match paths relative to the root being scanned. File
    loading and individual rule addition are optional capabilities.

    Example:
        >>> from dir2playlist.exclusion_rules.skip_rules import SkipPathRules
        >>> rules = SkipPathRules(["/lib/private"])  # doctest: +SKIP
        >>> rules.exclude("/lib/private/secret.mp4")  # doctest: +SKIP
        True
        >>> from dir2playlist.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> patterns = GitIgnoreExclusionRules()
        >>> patterns.add_rule("*.sample.mkv")
        >>> patterns.exclude("A/trailer.sample.mkv")
        True
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The file or directory path to check.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """
        Report whether any rule is configured.

        Returns:
            bool: True unless the subclass knows it holds no rules.
        """
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (a path for skip rules, a gitignore pattern for pattern rules).

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
