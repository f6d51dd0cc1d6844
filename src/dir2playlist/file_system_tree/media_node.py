"""Node representation for directories and tracks in the media tree."""

from pathlib import PurePath
from typing import Any, Optional

from anytree import Node

from dir2playlist.types import NodeKind


class MediaNode(Node):  # type: ignore
    """Node class representing a directory or a video track in the media tree.

    Extends anytree.Node with the node kind and the resolved location on disk. The
    ``name`` is the entry's last path segment as it was listed (for a root, the last
    segment of its resolved path) and is what the playlist displays. ``location`` is the
    absolute, symlink-resolved path used as identity for deduplication and skip matching.

    Attributes:
        name (str): Display name of the directory or file.
        kind (NodeKind): DIRECTORY or TRACK.
        location (str): Resolved absolute path.
        extension (Optional[str]): Lowercase suffix without the dot, for tracks only.
        parent (Optional[MediaNode]): The parent node in the tree.
        children (tuple[MediaNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = MediaNode("movies", kind=NodeKind.DIRECTORY, location="/lib/movies")
        >>> track = MediaNode("1.mp4", parent=root, kind=NodeKind.TRACK, location="/lib/movies/1.mp4")
        >>> track.extension
        'mp4'
        >>> root.is_dir, track.is_track
        (True, True)
    """

    def __init__(
        self,
        name: str,
        parent: Optional["MediaNode"] = None,
        kind: NodeKind = NodeKind.TRACK,
        location: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.kind = kind
        self.location = location
        self.extension: Optional[str] = None
        if kind is NodeKind.TRACK:
            self.extension = PurePath(location).suffix[1:].lower()

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_track(self) -> bool:
        return self.kind is NodeKind.TRACK
