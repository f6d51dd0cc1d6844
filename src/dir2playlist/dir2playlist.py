"""Directory to playlist conversion.

This module ties the media tree builder and the playlist output strategy together.
It validates the configuration up front, builds the tree once, and renders the
complete playlist document in memory so callers only ever see a whole document or an
exception.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Union

from dir2playlist.exclusion_rules.base_rules import BaseExclusionRules
from dir2playlist.exclusion_rules.skip_rules import SkipPathRules
from dir2playlist.file_system_tree.media_tree import MediaTree
from dir2playlist.file_system_tree.permission_action import PermissionAction
from dir2playlist.file_system_tree.traversal_warning import TraversalWarning
from dir2playlist.output_strategies.base_strategy import PlaylistStrategy
from dir2playlist.output_strategies.xspf_strategy import XSPFPlaylistStrategy
from dir2playlist.types import PathType

DEFAULT_TITLE = "Media Library"


class Dir2Playlist:
    """Build a nested video playlist from one or more library roots.

    Roots are validated when the object is created, so configuration problems surface
    before any directory is scanned. The media tree is built on first use and reused
    by every later call.

    Attributes:
        roots (List[Path]): Resolved roots in input order.
        title (str): Playlist title.

    Example:
        >>> playlist = Dir2Playlist(["/lib/movies"], skip_paths=["/lib/movies/private"])  # doctest: +SKIP
        >>> playlist.track_count  # doctest: +SKIP
        2
        >>> document = playlist.render()  # doctest: +SKIP
        >>> document.splitlines()[0]  # doctest: +SKIP
        '<?xml version="1.0" encoding="UTF-8"?>'

    Raises:
        ConfigurationError: If no root is given, or a root is missing or not a directory.
        ValueError: If permission_action is not a valid action.
    """

    def __init__(
        self,
        roots: Sequence[PathType],
        *,
        skip_paths: Iterable[PathType] = (),
        exclusion_rules: Optional[BaseExclusionRules] = None,
        title: str = DEFAULT_TITLE,
        permission_action: Union[str, PermissionAction] = PermissionAction.IGNORE,
        strategy: Optional[PlaylistStrategy] = None,
    ):
        """Initialize playlist generation.

        Args:
            roots: Root directories to scan, in the order their content should appear.
            skip_paths: Files or directories to leave out, with everything beneath them.
                Paths that do not exist are ignored.
            exclusion_rules: Optional pattern rules matched against root-relative paths.
            title: Playlist title.
            permission_action: How to handle permission errors during traversal.
                Either "ignore" or "raise", or a PermissionAction enum value.
            strategy: Output format. Defaults to XSPF.
        """
        if isinstance(permission_action, str):
            try:
                permission_action = PermissionAction(permission_action.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid permission_action: {permission_action}. " "Must be one of: 'ignore', 'raise'"
                )

        self.title = title
        self._strategy = strategy if strategy is not None else XSPFPlaylistStrategy()
        self._tree = MediaTree(
            roots,
            skip_rules=SkipPathRules(skip_paths),
            exclusion_rules=exclusion_rules,
            permission_action=permission_action,
        )
        self.roots = self._tree.roots

    @property
    def tree(self) -> MediaTree:
        """The underlying media tree."""
        return self._tree

    @property
    def track_count(self) -> int:
        """Number of tracks in the playlist."""
        return self._tree.get_track_count()

    @property
    def group_count(self) -> int:
        """Number of groups in the playlist, one per surviving directory including roots."""
        return self._tree.get_directory_count()

    @property
    def warnings(self) -> List[TraversalWarning]:
        """Traversal warnings recorded while scanning."""
        return self._tree.warnings

    @property
    def file_extension(self) -> str:
        return self._strategy.get_file_extension()

    def render(self) -> str:
        """Render the complete playlist document.

        Returns:
            The playlist document as a string.

        Raises:
            PlaylistSerializationError: If a name or path cannot be written to the
                document. Nothing is returned in that case.
            PermissionError: If access is denied and permission_action is "raise".
        """
        return self._strategy.render(self._tree.get_forest(), self.title)

    def stream_tree(self) -> Iterator[str]:
        """Stream a text rendering of the media tree, one line at a time.

        Each yielded line includes a trailing newline.
        """
        for line in self._tree.stream_tree_representation():
            yield line + "\n"
