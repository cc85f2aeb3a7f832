"""
File service module for Filepane.

Provides directory listings and whole-file/whole-directory operations for
the file-manager front-end.
"""

from .models import FileEntry, DirectoryListing
from .file_ops import FileService
from .bridge import CommandBridge, BridgeResponse

__all__ = ['FileService', 'FileEntry', 'DirectoryListing', 'CommandBridge', 'BridgeResponse']
