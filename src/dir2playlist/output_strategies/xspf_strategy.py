"""XSPF output strategy with the VLC playlist extension.

This module renders a media tree as an XSPF playlist. Tracks are listed in the
standard ``trackList``; the directory hierarchy is carried in VLC's extension as
nested ``vlc:node`` groups whose ``vlc:item`` members point at track identifiers.
"""

import re
from pathlib import Path
from xml.sax.saxutils import escape as xml_escape

from dir2playlist.exceptions import PlaylistSerializationError
from dir2playlist.file_system_tree.media_node import MediaNode

from .base_strategy import PlaylistStrategy

XSPF_NAMESPACE = "http://xspf.org/ns/0/"
VLC_NAMESPACE = "http://www.videolan.org/vlc/playlist/ns/0/"
VLC_APPLICATION = "http://www.videolan.org/vlc/playlist/0"

# Characters XML 1.0 does not allow anywhere in a document, plus lone surrogates
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XSPFPlaylistStrategy(PlaylistStrategy):
    """Output strategy that renders a media tree as an XSPF playlist for VLC.

    The document has this structure (tab indented)::

        <?xml version="1.0" encoding="UTF-8"?>
        <playlist xmlns="http://xspf.org/ns/0/" xmlns:vlc="..." version="1">
            <title>Media Library</title>
            <trackList>
                <track>
                    <location>file:///lib/movies/A/1.mp4</location>
                    <title>1.mp4</title>
                    <extension application="http://www.videolan.org/vlc/playlist/0">
                        <vlc:id>0</vlc:id>
                    </extension>
                </track>
            </trackList>
            <extension application="http://www.videolan.org/vlc/playlist/0">
                <vlc:node title="movies">
                    <vlc:node title="A">
                        <vlc:item tid="0"/>
                    </vlc:node>
                </vlc:node>
            </extension>
        </playlist>

    Locations are ``file://`` URIs of the resolved paths, percent-encoded. Titles are
    the entry names, XML-escaped including both quote characters. Text that cannot be
    written as UTF-8 XML raises PlaylistSerializationError.

    Example:
        >>> from dir2playlist.types import NodeKind
        >>> strategy = XSPFPlaylistStrategy()
        >>> group = MediaNode("Tom & Jerry", kind=NodeKind.DIRECTORY, location="/lib/Tom & Jerry")
        >>> strategy.format_group_start(group, 0)
        '\\t\\t<vlc:node title="Tom &amp; Jerry">\\n'
        >>> strategy.format_group_item(3, 1)
        '\\t\\t\\t<vlc:item tid="3"/>\\n'
    """

    def __init__(self) -> None:
        """Initialize the XSPF output strategy."""
        # Attribute values are double quoted, titles may contain either quote
        self._xml_entities = {
            '"': "&quot;",
            "'": "&apos;",
        }

    def _escape(self, text: str, path: str) -> str:
        """Escape text for XML, rejecting text that cannot appear in the document.

        Args:
            text: The text to escape.
            path: Path the text came from, for error reporting.

        Raises:
            PlaylistSerializationError: If the text holds characters XML 1.0 forbids or
                that cannot be encoded as UTF-8.
        """
        match = _INVALID_XML_CHARS.search(text)
        if match is not None:
            if "\ud800" <= match.group() <= "\udfff":
                reason = "name is not valid UTF-8"
            else:
                reason = f"name contains character U+{ord(match.group()):04X} which XML does not allow"
            raise PlaylistSerializationError(path, reason)
        return xml_escape(text, self._xml_entities)

    def _location_uri(self, node: MediaNode) -> str:
        self._escape(node.location, node.location)
        try:
            uri = Path(node.location).as_uri()
        except ValueError as e:
            raise PlaylistSerializationError(node.location, f"cannot build a file URI ({e})")
        return self._escape(uri, node.location)

    def format_header(self, title: str) -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<playlist xmlns="{XSPF_NAMESPACE}" xmlns:vlc="{VLC_NAMESPACE}" version="1">\n'
            f"\t<title>{self._escape(title, 'playlist title')}</title>\n"
            "\t<trackList>\n"
        )

    def format_track(self, identifier: int, node: MediaNode) -> str:
        """Format a ``<track>`` element.

        Example:
            >>> from dir2playlist.types import NodeKind
            >>> node = MediaNode("a<b>.mkv", kind=NodeKind.TRACK, location="/lib/a<b>.mkv")
            >>> lines = XSPFPlaylistStrategy().format_track(7, node).splitlines()
            >>> [line.strip() for line in lines[1:3]]
            ['<location>file:///lib/a%3Cb%3E.mkv</location>', '<title>a&lt;b&gt;.mkv</title>']
            >>> lines[4].strip()
            '<vlc:id>7</vlc:id>'
        """
        return (
            "\t\t<track>\n"
            f"\t\t\t<location>{self._location_uri(node)}</location>\n"
            f"\t\t\t<title>{self._escape(node.name, node.location)}</title>\n"
            f'\t\t\t<extension application="{VLC_APPLICATION}">\n'
            f"\t\t\t\t<vlc:id>{identifier}</vlc:id>\n"
            "\t\t\t</extension>\n"
            "\t\t</track>\n"
        )

    def format_groups_start(self) -> str:
        return f'\t</trackList>\n\t<extension application="{VLC_APPLICATION}">\n'

    def format_group_start(self, node: MediaNode, depth: int) -> str:
        indent = "\t" * (depth + 2)
        return f'{indent}<vlc:node title="{self._escape(node.name, node.location)}">\n'

    def format_group_item(self, identifier: int, depth: int) -> str:
        indent = "\t" * (depth + 2)
        return f'{indent}<vlc:item tid="{identifier}"/>\n'

    def format_group_end(self, node: MediaNode, depth: int) -> str:
        indent = "\t" * (depth + 2)
        return f"{indent}</vlc:node>\n"

    def format_footer(self) -> str:
        return "\t</extension>\n</playlist>\n"

    def get_file_extension(self) -> str:
        """Get the file extension for XSPF output.

        Example:
            >>> XSPFPlaylistStrategy().get_file_extension()
            '.xspf'
        """
        return ".xspf"
