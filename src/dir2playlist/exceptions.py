from typing import Optional


class ConfigurationError(ValueError):
    """
    Exception raised when the supplied roots cannot be scanned.

    This is raised before any traversal begins, for an empty root list, a root that
    does not exist, or a root that is not a directory. No playlist is produced.

    Attributes:
        path (Optional[str]): The offending root, if the error concerns a single root.

    Example:
        >>> error = ConfigurationError("Root path does not exist: /nowhere", path="/nowhere")
        >>> str(error)
        'Root path does not exist: /nowhere'
        >>> error.path
        '/nowhere'
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)


class PlaylistSerializationError(ValueError):
    """
    Exception raised when the media tree cannot be rendered as a playlist document.

    This happens when a file or directory name cannot be represented in the output,
    for example a name holding bytes that are not valid UTF-8 or characters that XML 1.0
    does not allow. Serialization is all-or-nothing, so no partial playlist is written.

    Attributes:
        path (str): Path of the entry whose text could not be serialized.

    Example:
        >>> error = PlaylistSerializationError("/lib/bad\\udcff.mkv", "not valid UTF-8")
        >>> str(error).startswith('Cannot serialize /lib/bad')
        True
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        # Keep the message printable even when the path itself is not
        printable_path = path.encode("utf-8", "backslashreplace").decode("utf-8")
        super().__init__(f"Cannot serialize {printable_path}: {reason}")
