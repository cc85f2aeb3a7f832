"""
Error types for Filepane.

Every failure carries an ErrorKind tag plus a human-readable message, so
callers can branch on the kind and still show the text to the user.
"""

from enum import Enum
from typing import Optional, Union


class ErrorKind(Enum):
    """Classification of filesystem operation failures."""
    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    IO_ERROR = "io_error"
    INVALID_PATH = "invalid_path"


class FileServiceError(Exception):
    """Base class for all file service failures."""

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class PathNotFoundError(FileServiceError):
    """The requested path does not exist."""
    kind = ErrorKind.NOT_FOUND


class NotADirectoryPathError(FileServiceError):
    """A directory was expected but the path is something else."""
    kind = ErrorKind.NOT_A_DIRECTORY


class FileIOError(FileServiceError):
    """Permission, device or any other OS-level failure."""
    kind = ErrorKind.IO_ERROR
    errno: Optional[int] = None

    @classmethod
    def from_os_error(
        cls,
        exc: Union[OSError, ValueError],
        action: str,
        path: Optional[str] = None
    ) -> "FileIOError":
        """
        Wrap an OSError, keeping the OS message verbatim.

        A ValueError (e.g. an embedded NUL byte, which the OS layer rejects
        before any system call) is wrapped the same way.

        Args:
            exc: The original error
            action: Short description of what was attempted
            path: Path the action was applied to
        """
        if not isinstance(exc, OSError):
            return cls(f"{action} failed: {exc}", path=path)

        reason = exc.strerror or str(exc)
        if exc.filename is not None:
            reason = f"{reason}: {exc.filename}"
        if getattr(exc, "filename2", None) is not None:
            reason = f"{reason} -> {exc.filename2}"
        error = cls(f"{action} failed: {reason}", path=path)
        error.errno = exc.errno
        return error


class InvalidPathError(FileServiceError):
    """The path is structurally unusable, e.g. it has no parent."""
    kind = ErrorKind.INVALID_PATH
