from enum import Enum
from os import PathLike
from typing import FrozenSet, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Lowercase suffixes (without the dot) of files that become playlist tracks
VIDEO_EXTENSIONS: FrozenSet[str] = frozenset({"mp4", "mkv"})


class NodeKind(Enum):
    """Enumeration of node kinds in the media tree.

    Attributes:
        DIRECTORY: A directory, rendered as a playlist group
        TRACK: A qualifying video file, rendered as a playlist track
    """

    DIRECTORY = "directory"
    TRACK = "track"
