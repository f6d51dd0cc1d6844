"""Directory to playlist conversion utilities.

This package scans media library directories for video files and renders the
directory hierarchy as a nested XSPF playlist that media players such as VLC
can browse like the filesystem itself.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2playlist")
except PackageNotFoundError:
    __version__ = "unknown"
