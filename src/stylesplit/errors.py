"""Error types raised at the package boundaries."""


class StyleSplitError(Exception):
    """Base class for stylesplit errors."""


class SnapshotFormatError(StyleSplitError):
    """Raised when a serialized snapshot node cannot be read."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class FragmentFormatError(StyleSplitError):
    """Raised when authored fragments are not a list of strings."""
