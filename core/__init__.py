# Filepane - Core Module
"""
Core infrastructure for the Filepane file-manager backend.
This module provides configuration, error types and the audit log that the
file service depends on.
"""

from .config import ServiceConfig, load_config
from .errors import (
    ErrorKind,
    FileServiceError,
    PathNotFoundError,
    NotADirectoryPathError,
    FileIOError,
    InvalidPathError,
)
from .logger import AuditLogger, AuditEntry

__all__ = [
    "ServiceConfig",
    "load_config",
    "ErrorKind",
    "FileServiceError",
    "PathNotFoundError",
    "NotADirectoryPathError",
    "FileIOError",
    "InvalidPathError",
    "AuditLogger",
    "AuditEntry",
]

__version__ = "0.1.0"
