"""Media tree built from library roots with configurable exclusion rules.

This module provides the MediaTree class, which scans one or more root directories
for video files and builds an ordered forest of directory and track nodes. Directories
without any qualifying track beneath them are pruned, and a file reachable from more
than one root appears only once.
"""

import os
from pathlib import Path, PurePath
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from anytree import PreOrderIter

from dir2playlist.exceptions import ConfigurationError
from dir2playlist.exclusion_rules.base_rules import BaseExclusionRules
from dir2playlist.exclusion_rules.skip_rules import SkipPathRules
from dir2playlist.file_system_tree.media_node import MediaNode
from dir2playlist.file_system_tree.permission_action import PermissionAction
from dir2playlist.file_system_tree.track_registry import TrackRegistry
from dir2playlist.file_system_tree.traversal_warning import TraversalWarning, WarningReason
from dir2playlist.types import VIDEO_EXTENSIONS, NodeKind, PathType


def is_video_file(path: PathType) -> bool:
    """Check whether a path has one of the recognized video extensions.

    Only the last suffix counts and the comparison ignores case.

    Example:
        >>> is_video_file("movie.backup.mkv")
        True
        >>> is_video_file("CLIP.MP4")
        True
        >>> is_video_file("notes.txt")
        False
        >>> is_video_file("mkv")
        False
    """
    return PurePath(path).suffix[1:].lower() in VIDEO_EXTENSIONS


class MediaTree:
    """An ordered forest of media directories built from one or more library roots.

    Each root is scanned depth-first. At every level the entries are ordered by name,
    directories and files interleaved, so the result does not depend on the order in
    which the filesystem lists them. A file becomes a track when its resolved path ends
    in one of the video extensions, is not excluded, and has not been claimed already.
    Every directory node is built detached and only attached to its parent once it is
    known to hold at least one track, so empty directories never enter the tree.

    Roots are validated and resolved when the tree is created. The forest itself is
    built lazily on first access and can be rebuilt with :meth:`refresh`.

    Symbolic Link Behavior:
        Symlinks are resolved. Symlinked directories are entered unless their resolved
        path is already on the current chain of ancestors, in which case a
        SYMLINK_CYCLE warning is recorded and the link is treated as empty. Tracks are
        identified by their resolved path, so a file reached through a link and
        directly is listed once.

    Permission Handling:
        A directory that cannot be listed is recorded as a traversal warning and
        treated as empty. With PermissionAction.RAISE, a permission error aborts the
        scan instead.

    Attributes:
        roots (List[Path]): The resolved root directories in input order.
        skip_rules (SkipPathRules): Resolved paths excluded with everything beneath them.
        exclusion_rules (Optional[BaseExclusionRules]): Pattern rules matched against
            paths relative to the root being scanned.
        permission_action (PermissionAction): How to handle permission errors.

    Example:
        >>> tree = MediaTree(["/lib/movies"])  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        movies/
        ├── A/
        │   └── 1.mp4
        └── B/
            └── 2.mkv
    """

    def __init__(
        self,
        roots: Sequence[PathType],
        skip_rules: Optional[SkipPathRules] = None,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: PermissionAction = PermissionAction.IGNORE,
    ) -> None:
        """Initialize a MediaTree.

        Args:
            roots: Root directories to scan, in the order their content should appear.
            skip_rules: Paths to exclude together with everything beneath them.
            exclusion_rules: Additional rules matched against root-relative paths,
                with a trailing slash for directories.
            permission_action: How to handle permission errors during traversal.

        Raises:
            ConfigurationError: If no root is given, or a root does not exist or is not
                a directory.
        """
        self.roots = self._resolve_roots(roots)
        self.skip_rules = skip_rules if skip_rules is not None else SkipPathRules()
        self.exclusion_rules = exclusion_rules
        self.permission_action = permission_action
        self._forest: Optional[List[MediaNode]] = None
        self._registry = TrackRegistry()
        self._warnings: List[TraversalWarning] = []
        self._track_count: int = 0
        self._directory_count: int = 0

    @staticmethod
    def _resolve_roots(roots: Sequence[PathType]) -> List[Path]:
        if not roots:
            raise ConfigurationError("At least one root directory is required")

        resolved_roots = []
        for root in roots:
            path = Path(root).expanduser()
            if not path.exists():
                raise ConfigurationError(f"Root path does not exist: {root}", path=str(root))
            if not path.is_dir():
                raise ConfigurationError(f"Root path is not a directory: {root}", path=str(root))
            resolved_roots.append(path.resolve())
        return resolved_roots

    def get_forest(self) -> List[MediaNode]:
        """Get the root directory nodes that survived pruning, in root order.

        Builds the forest on first access.

        Returns:
            One node per root that holds at least one track. Roots without tracks, and
            roots whose content was already claimed by an earlier root, are absent.

        Raises:
            PermissionError: If access is denied and permission_action is RAISE.
        """
        forest = self._forest if self._forest is not None else self._build_forest()
        return list(forest)

    @property
    def warnings(self) -> List[TraversalWarning]:
        """Traversal warnings recorded while building the forest, in encounter order."""
        if self._forest is None:
            self._build_forest()
        return list(self._warnings)

    @property
    def registry(self) -> TrackRegistry:
        """The registry of resolved track paths claimed by the last build."""
        if self._forest is None:
            self._build_forest()
        return self._registry

    def _build_forest(self) -> List[MediaNode]:
        self._registry = TrackRegistry()
        self._warnings = []
        forest: List[MediaNode] = []

        for root in self.roots:
            # The last segment of "/" is empty, so fall back to the full path
            name = root.name or str(root)
            node = self._create_directory_node(root, name, "", set())
            if node is not None:
                forest.append(node)

        self._forest = forest
        self._count_tracks_and_directories()
        return forest

    def _warn(self, path: PathType, reason: WarningReason, message: str) -> None:
        self._warnings.append(TraversalWarning(str(path), reason, message))

    def _create_directory_node(
        self,
        path: Path,
        name: str,
        relative_path: str,
        ancestors: Set[Path],
    ) -> Optional[MediaNode]:
        """Build the node for a resolved directory, or return None if it holds no tracks."""
        if self.skip_rules.exclude(str(path)):
            return None

        if path in ancestors:
            self._warn(path, WarningReason.SYMLINK_CYCLE, "Symlink cycle detected, not following")
            return None

        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except PermissionError as e:
            self._warn(path, WarningReason.PERMISSION_DENIED, "Permission denied, skipping directory")
            if self.permission_action == PermissionAction.RAISE:
                raise PermissionError(f"Access denied to {path}: {e}")
            return None
        except OSError as e:
            self._warn(path, WarningReason.UNREADABLE, f"Cannot read directory ({e.strerror})")
            return None

        ancestors.add(path)
        children: List[MediaNode] = []
        try:
            for entry in entries:
                child = self._create_child_node(entry, relative_path, ancestors)
                if child is not None:
                    children.append(child)
        finally:
            # Only the current chain counts, so sibling branches may reach the same directory
            ancestors.discard(path)

        if not children:
            return None

        node = MediaNode(name, kind=NodeKind.DIRECTORY, location=str(path))
        node.children = children
        return node

    def _create_child_node(
        self,
        entry: "os.DirEntry[str]",
        parent_relative_path: str,
        ancestors: Set[Path],
    ) -> Optional[MediaNode]:
        relative_path = f"{parent_relative_path}/{entry.name}" if parent_relative_path else entry.name

        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
            resolved = Path(entry.path).resolve()
        except (OSError, RuntimeError) as e:
            # RuntimeError is how older interpreters report a symlink loop from resolve()
            reason = WarningReason.SYMLINK_CYCLE if isinstance(e, RuntimeError) else WarningReason.UNREADABLE
            self._warn(entry.path, reason, f"Cannot resolve entry ({e})")
            return None

        if self.exclusion_rules is not None:
            if self.exclusion_rules.exclude(relative_path + "/" if is_dir else relative_path):
                return None

        if is_dir:
            return self._create_directory_node(resolved, entry.name, relative_path, ancestors)

        # Anything else (broken symlinks, sockets, devices) is not a track
        if not is_file or not is_video_file(resolved):
            return None
        if self.skip_rules.exclude(str(resolved)):
            return None
        if not self._registry.claim(str(resolved)):
            return None

        return MediaNode(entry.name, kind=NodeKind.TRACK, location=str(resolved))

    def _count_tracks_and_directories(self) -> None:
        """Count tracks and directory nodes (roots included) in the current forest."""
        self._track_count = 0
        self._directory_count = 0
        for root in self._forest or []:
            for node in PreOrderIter(root):
                if node.is_track:
                    self._track_count += 1
                else:
                    self._directory_count += 1

    def get_track_count(self) -> int:
        """Get the number of tracks in the forest."""
        if self._forest is None:
            self._build_forest()
        return self._track_count

    def get_directory_count(self) -> int:
        """Get the number of directory nodes in the forest, surviving roots included."""
        if self._forest is None:
            self._build_forest()
        return self._directory_count

    def iterate_tracks(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all tracks in depth-first order.

        The order is the order in which the playlist assigns track identifiers.

        Yields:
            Pairs of (resolved_path, display_path), where display_path joins the node
            names from the root node down to the track with forward slashes.

        Example:
            >>> tree = MediaTree(["/lib/movies"])  # doctest: +SKIP
            >>> for location, display_path in tree.iterate_tracks():  # doctest: +SKIP
            ...     print(display_path)
            movies/A/1.mp4
            movies/B/2.mkv
        """
        for root in self.get_forest():
            for node in PreOrderIter(root):
                if node.is_track:
                    yield (node.location, "/".join(n.name for n in node.path))

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a text rendering of the forest one line at a time.

        Output resembles the Unix 'tree' command, one block per surviving root, with
        children in the same order the playlist uses.

        Yields:
            Lines of the tree representation, including the connecting lines.

        Raises:
            PermissionError: If access is denied and permission_action is RAISE.
        """

        def write_node(node: MediaNode, prefix: str = "", is_last: bool = True, is_root: bool = False) -> Iterator[str]:
            suffix = "/" if node.is_dir else ""
            if is_root:
                yield f"{node.name}{suffix}"
            else:
                connector = "└── " if is_last else "├── "
                yield f"{prefix}{connector}{node.name}{suffix}"

            if is_root:
                new_prefix = ""
            else:
                new_prefix = prefix + ("    " if is_last else "│   ")

            children = node.children
            for i, child in enumerate(children):
                yield from write_node(child, new_prefix, i == len(children) - 1)

        for root in self.get_forest():
            yield from write_node(root, is_root=True)

    def get_tree_representation(self) -> str:
        """Get the complete text rendering of the forest as a single string."""
        return "\n".join(self.stream_tree_representation())

    def refresh(self) -> None:
        """Rebuild the forest to reflect the current filesystem state.

        Clears the cached forest, registry, warnings and counts. Roots are not
        re-validated.
        """
        self._forest = None
        self._build_forest()
