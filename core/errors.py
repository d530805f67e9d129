"""
Unity Package Extractor - Exceptions
Every failure raised by the extractor derives from UnityPackageError.
"""


class UnityPackageError(Exception):
    """Base class for extractor errors."""
    pass


class InvalidInputError(UnityPackageError, ValueError):
    """Raised when the input path is not a .unitypackage archive."""
    pass


class PackageFormatError(UnityPackageError, ValueError):
    """Raised when the archive breaks the unitypackage layout."""

    def __init__(self, message: str = None):
        super().__init__(
            message or "The format of the file is invalid; is this a valid Unity package file?"
        )


class PathEscapeError(PackageFormatError):
    """Raised when a pathname would resolve outside the output root."""
    pass


class ExtractionConflictError(UnityPackageError, FileExistsError):
    """Raised when an asset would overwrite a file that already exists."""
    pass


__all__ = [
    "UnityPackageError",
    "InvalidInputError",
    "PackageFormatError",
    "PathEscapeError",
    "ExtractionConflictError",
]
