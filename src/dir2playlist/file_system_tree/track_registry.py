"""Registry of claimed track paths used for deduplication across roots."""

from threading import Lock
from typing import Dict, Iterator, Optional


class TrackRegistry:
    """Map from resolved file path to the identifier of the track that claimed it.

    Each path can be claimed once. The first claim wins and receives the next
    sequential identifier, starting at 0; later claims for the same path are refused.
    Claims are guarded by a lock so concurrent builders sharing one registry still see
    exactly one winner per path.

    One registry belongs to one build of a media tree. It is not shared between runs.

    Example:
        >>> registry = TrackRegistry()
        >>> registry.claim("/lib/a.mkv")
        True
        >>> registry.claim("/lib/b.mp4")
        True
        >>> registry.claim("/lib/a.mkv")
        False
        >>> registry.identifier_of("/lib/b.mp4")
        1
        >>> len(registry)
        2
    """

    def __init__(self) -> None:
        self._claims: Dict[str, int] = {}
        self._lock = Lock()

    def claim(self, path: str) -> bool:
        """Claim a resolved path for inclusion.

        Args:
            path: Resolved absolute path of a track.

        Returns:
            True if this call claimed the path, False if it was claimed before.
        """
        with self._lock:
            if path in self._claims:
                return False
            self._claims[path] = len(self._claims)
            return True

    def identifier_of(self, path: str) -> Optional[int]:
        """Return the identifier assigned to a claimed path, or None."""
        with self._lock:
            return self._claims.get(path)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._claims

    def __len__(self) -> int:
        with self._lock:
            return len(self._claims)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            # Dicts keep insertion order, which is claim order
            return iter(list(self._claims))
