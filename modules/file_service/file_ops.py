"""
File operations module for Filepane.

Each operation maps one request onto one filesystem primitive (or a single
directory scan for listings) and reports failures as tagged FileServiceError
exceptions. The service keeps no state between calls.
"""

import os
import shutil
import stat
import sys
import warnings
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from core.config import ServiceConfig
from core.errors import (
    FileIOError,
    FileServiceError,
    InvalidPathError,
    NotADirectoryPathError,
    PathNotFoundError,
)
from core.logger import AuditLogger, ActionType, ActionStatus
from .models import DirectoryListing, FileEntry


def _modified_timestamp(mtime: float) -> str:
    return datetime.fromtimestamp(mtime).isoformat()


def _sort_key(entry: FileEntry):
    # Directories first, then case-insensitive name. list.sort is stable,
    # so equal keys keep enumeration order.
    return (not entry.is_dir, entry.name.lower())


class FileService:
    """Filesystem operations exposed to the file-manager front-end."""

    def __init__(
        self,
        logger: Optional[AuditLogger] = None,
        config: Optional[ServiceConfig] = None
    ):
        """
        Initialize FileService.

        Args:
            logger: Audit logger; when None nothing is recorded
            config: Service settings (defaults when None)
        """
        self.logger = logger
        self.config = config or ServiceConfig()

    def _audit(
        self,
        action_type: ActionType,
        description: str,
        target: str,
        error: Optional[FileServiceError] = None,
        metadata: Optional[dict] = None
    ) -> None:
        if self.logger is None:
            return

        if error is None:
            status, result = ActionStatus.EXECUTED, "ok"
        else:
            status, result = ActionStatus.FAILED, f"{error.kind.name}: {error}"

        try:
            self.logger.log_action(
                action_type=action_type,
                description=description,
                target=target,
                status=status,
                result=result,
                metadata=metadata
            )
        except OSError as e:
            # audit failures never change the operation's outcome
            warnings.warn(f"Could not write audit entry: {e}", RuntimeWarning)

    def list_directory(self, path: str) -> DirectoryListing:
        """
        List the immediate children of a directory.

        Args:
            path: Path to the directory

        Returns:
            DirectoryListing with directories first, then files, each group
            ordered by case-insensitive name

        Raises:
            PathNotFoundError: If the path does not exist
            NotADirectoryPathError: If the path is not a directory
            FileIOError: If the directory or any child cannot be read
        """
        try:
            listing = self._list_directory(path)
        except FileServiceError as e:
            self._audit(ActionType.LIST, f"List directory: {path}", path, error=e)
            raise

        self._audit(
            ActionType.LIST,
            f"List directory: {path}",
            path,
            metadata={"entries": len(listing)}
        )
        return listing

    def _list_directory(self, path: str) -> DirectoryListing:
        if not path:
            raise PathNotFoundError(f"Path does not exist: {path}", path=path)

        try:
            mode = os.stat(path).st_mode
        except (FileNotFoundError, NotADirectoryError):
            raise PathNotFoundError(f"Path does not exist: {path}", path=path)
        except (OSError, ValueError) as e:
            raise FileIOError.from_os_error(e, "Read directory", path) from e

        if not stat.S_ISDIR(mode):
            raise NotADirectoryPathError(f"Path is not a directory: {path}", path=path)

        try:
            root = Path(path).resolve()
        except OSError as e:
            raise FileIOError.from_os_error(e, "Resolve path", path) from e

        entries: List[FileEntry] = []
        try:
            with os.scandir(root) as iterator:
                for item in iterator:
                    info = item.stat(follow_symlinks=False)
                    is_dir = item.is_dir(follow_symlinks=False)
                    entries.append(FileEntry(
                        name=item.name,
                        path=str(root / item.name),
                        is_dir=is_dir,
                        size=0 if is_dir else info.st_size,
                        modified=_modified_timestamp(info.st_mtime),
                    ))
        except (OSError, ValueError) as e:
            raise FileIOError.from_os_error(e, "Read directory", path) from e

        entries.sort(key=_sort_key)
        return DirectoryListing(files=tuple(entries), path=str(root))

    def create_directory(self, path: str) -> None:
        """
        Create a directory and any missing parents.

        Succeeds silently if the directory already exists.

        Raises:
            FileIOError: On permission errors or if a non-directory is in the way
        """
        description = f"Create directory: {path}"
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            error = FileIOError.from_os_error(e, "Create directory", path)
            self._audit(ActionType.CREATE, description, path, error=error)
            raise error from e

        self._audit(ActionType.CREATE, description, path)

    def delete(self, path: str, collect_errors: Optional[bool] = None) -> None:
        """
        Delete a file, or a directory with all of its contents.

        There is no trash; the removal is permanent. By default the first
        failure aborts a recursive delete and whatever was already removed
        stays removed.

        Args:
            path: File or directory to delete
            collect_errors: Keep going after failures and report them all at
                the end (defaults to the ``delete.collect_errors`` setting)

        Raises:
            FileIOError: If the path is missing or cannot be removed
        """
        if collect_errors is None:
            collect_errors = self.config.delete_collect_errors

        description = f"Delete: {path}"
        is_tree = False

        try:
            if not path:
                # Path("") would mean the working directory
                raise FileIOError("Delete failed: empty path", path=path)
            try:
                # lstat: a symlink to a directory is removed as a link
                is_tree = stat.S_ISDIR(os.lstat(path).st_mode)
            except (OSError, ValueError) as e:
                raise FileIOError.from_os_error(e, "Delete", path) from e

            description = f"Delete {'directory' if is_tree else 'file'}: {path}"
            if is_tree:
                self._remove_tree(path, collect_errors)
            else:
                try:
                    os.unlink(path)
                except (OSError, ValueError) as e:
                    raise FileIOError.from_os_error(e, "Delete file", path) from e
        except FileIOError as error:
            self._audit(ActionType.DELETE, description, path, error=error)
            raise

        self._audit(ActionType.DELETE, description, path, metadata={"recursive": is_tree})

    def _remove_tree(self, path: str, collect_errors: bool) -> None:
        if not collect_errors:
            try:
                shutil.rmtree(path)
            except OSError as e:
                raise FileIOError.from_os_error(e, "Delete directory", path) from e
            return

        failures: List[str] = []

        def record(function, failed_path, exc):
            if isinstance(exc, tuple):
                exc = exc[1]
            failures.append(f"{failed_path}: {exc}")

        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=record)
        else:
            shutil.rmtree(path, onerror=record)

        if failures:
            raise FileIOError(
                f"Delete directory failed for {len(failures)} path(s): " + "; ".join(failures),
                path=path
            )

    def copy(self, source_path: str, dest_path: str) -> None:
        """
        Copy a single file, overwriting the destination if it exists.

        Raises:
            FileIOError: If the source is missing or a directory, or the
                destination cannot be written
        """
        description = f"Copy {source_path} to {dest_path}"
        try:
            if os.path.isdir(source_path):
                raise FileIOError(
                    f"Copy file failed: source is a directory: {source_path}",
                    path=source_path
                )
            try:
                shutil.copyfile(source_path, dest_path)
                shutil.copymode(source_path, dest_path)
            except (OSError, ValueError) as e:
                raise FileIOError.from_os_error(e, "Copy file", source_path) from e
        except FileIOError as error:
            self._audit(ActionType.COPY, description, dest_path, error=error,
                        metadata={"source": source_path})
            raise

        self._audit(ActionType.COPY, description, dest_path, metadata={"source": source_path})

    def move(self, source_path: str, dest_path: str) -> None:
        """
        Move a file or directory with a single OS rename.

        Atomic within one volume. Cross-volume moves are not emulated; the
        OS error is reported as-is.

        Raises:
            FileIOError: On cross-device, permission or missing-source errors
        """
        self._rename(ActionType.MOVE, source_path, dest_path)

    def rename(self, path: str, new_name: str) -> None:
        """
        Rename a file or directory in place.

        Args:
            path: Current path
            new_name: New base name (not a path)

        Raises:
            InvalidPathError: If path has no parent or new_name is not a plain name
            FileIOError: If the OS rename fails
        """
        path_obj = Path(path)

        if not path or path_obj.parent == path_obj:
            error = InvalidPathError(f"Cannot get parent directory: {path}", path=path)
            self._audit(ActionType.RENAME, f"Rename {path} to {new_name}", path, error=error)
            raise error

        separators = [sep for sep in ("/", os.sep, os.altsep) if sep]
        if not new_name or new_name in (".", "..") or any(sep in new_name for sep in separators):
            error = InvalidPathError(
                f"New name must be a plain file name, not a path: {new_name!r}",
                path=path
            )
            self._audit(ActionType.RENAME, f"Rename {path} to {new_name}", path, error=error)
            raise error

        self._rename(ActionType.RENAME, path, str(path_obj.parent / new_name))

    def _rename(self, action_type: ActionType, source_path: str, dest_path: str) -> None:
        verb = "Move" if action_type is ActionType.MOVE else "Rename"
        description = f"{verb} {source_path} to {dest_path}"
        try:
            os.replace(source_path, dest_path)
        except (OSError, ValueError) as e:
            error = FileIOError.from_os_error(e, verb, source_path)
            self._audit(action_type, description, dest_path, error=error,
                        metadata={"source": source_path})
            raise error from e

        self._audit(action_type, description, dest_path, metadata={"source": source_path})
