"""Output strategy base class defining how a media tree becomes a playlist document.

The base class owns the traversal: it walks the forest twice, first assigning every
track a sequential identifier, then emitting the nested groups that reference those
identifiers. Concrete strategies only decide how each piece is written.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Sequence

from anytree import PreOrderIter

from dir2playlist.file_system_tree.media_node import MediaNode


class PlaylistStrategy(ABC):
    """Abstract base class for playlist output formats.

    Rendering happens in four phases:
    1. Header - document preamble and the opening of the track list
    2. Tracks - one entry per track, in depth-first order, numbered from 0
    3. Groups - the directory hierarchy, each group holding its children in tree
       order, tracks referenced by identifier
    4. Footer - closing of the document

    Rendering is all-or-nothing: :meth:`render` builds the whole document in memory and
    any error raised by a formatting hook propagates before a single byte is returned.

    Example:
        >>> class PlainStrategy(PlaylistStrategy):
        ...     def format_header(self, title: str) -> str:
        ...         return f"# {title}\\n"
        ...     def format_track(self, identifier: int, node: MediaNode) -> str:
        ...         return f"{identifier} {node.location}\\n"
        ...     def format_groups_start(self) -> str:
        ...         return ""
        ...     def format_group_start(self, node: MediaNode, depth: int) -> str:
        ...         return "  " * depth + node.name + "/\\n"
        ...     def format_group_item(self, identifier: int, depth: int) -> str:
        ...         return "  " * depth + f"-> {identifier}\\n"
        ...     def format_group_end(self, node: MediaNode, depth: int) -> str:
        ...         return ""
        ...     def format_footer(self) -> str:
        ...         return ""
        ...     def get_file_extension(self) -> str:
        ...         return ".txt"
    """

    def render(self, forest: Sequence[MediaNode], title: str) -> str:
        """Render a forest of directory nodes as one complete document.

        Args:
            forest: Root directory nodes in root order.
            title: Playlist title.

        Returns:
            The complete document.

        Raises:
            PlaylistSerializationError: If some text cannot be represented in the output.
        """
        return "".join(self.stream(forest, title))

    def stream(self, forest: Sequence[MediaNode], title: str) -> Iterator[str]:
        """Yield the document piece by piece.

        Prefer :meth:`render` when writing output, since a failure part way through
        leaves the already yielded pieces incomplete.
        """
        tracks = self.collect_tracks(forest)
        identifiers: Dict[MediaNode, int] = {node: identifier for identifier, node in enumerate(tracks)}

        yield self.format_header(title)
        for identifier, node in enumerate(tracks):
            yield self.format_track(identifier, node)

        yield self.format_groups_start()
        for root in forest:
            yield from self._stream_group(root, identifiers, 0)
        yield self.format_footer()

    @staticmethod
    def collect_tracks(forest: Sequence[MediaNode]) -> List[MediaNode]:
        """Flatten the forest into its tracks in depth-first order.

        The position of a track in the returned list is its identifier.
        """
        return [node for root in forest for node in PreOrderIter(root) if node.is_track]

    def _stream_group(self, node: MediaNode, identifiers: Dict[MediaNode, int], depth: int) -> Iterator[str]:
        yield self.format_group_start(node, depth)
        for child in node.children:
            if child.is_track:
                yield self.format_group_item(identifiers[child], depth + 1)
            else:
                yield from self._stream_group(child, identifiers, depth + 1)
        yield self.format_group_end(node, depth)

    @abstractmethod
    def format_header(self, title: str) -> str:
        """Format the document preamble, including the opening of the track list."""
        pass

    @abstractmethod
    def format_track(self, identifier: int, node: MediaNode) -> str:
        """Format one track entry.

        Args:
            identifier: Sequential identifier of the track, starting at 0.
            node: The track node.
        """
        pass

    @abstractmethod
    def format_groups_start(self) -> str:
        """Close the track list and open the grouping section."""
        pass

    @abstractmethod
    def format_group_start(self, node: MediaNode, depth: int) -> str:
        """Open a group for a directory node.

        Args:
            node: The directory node.
            depth: Nesting depth, 0 for a root.
        """
        pass

    @abstractmethod
    def format_group_item(self, identifier: int, depth: int) -> str:
        """Format a reference to a track inside a group."""
        pass

    @abstractmethod
    def format_group_end(self, node: MediaNode, depth: int) -> str:
        """Close the group opened for a directory node."""
        pass

    @abstractmethod
    def format_footer(self) -> str:
        """Close the grouping section and the document."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the file extension for this format, including the leading dot."""
        pass
