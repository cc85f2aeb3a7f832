"""
Command bridge between the GUI front-end and the file service.

The front-end invokes commands by name with a mapping of arguments and
gets back a response that is either data or error text. Operation failures
never escape as exceptions here.
"""

import json
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Optional

from core.errors import FileServiceError
from .file_ops import FileService


INVALID_REQUEST = "INVALID_REQUEST"


@dataclass
class BridgeResponse:
    """Result of one command invocation."""
    ok: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    kind: Optional[str] = None

    @classmethod
    def success(cls, data: Any = None) -> "BridgeResponse":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str, kind: str) -> "BridgeResponse":
        return cls(ok=False, error=error, kind=kind)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BridgeRequestError(Exception):
    """The request itself is malformed (unknown command, missing argument)."""


def _arg(args: Dict[str, Any], camel: str, snake: str) -> str:
    """Fetch a string argument sent in either camelCase or snake_case."""
    value = args.get(camel, args.get(snake))
    if value is None:
        raise BridgeRequestError(f"Missing argument: {camel}")
    if not isinstance(value, str):
        raise BridgeRequestError(f"Argument {camel} must be a string")
    return value


class CommandBridge:
    """
    Dispatches named commands to a FileService.

    Command names match what the front-end invokes
    (``list_directory``, ``copy_file``, ...).
    """

    def __init__(self, service: Optional[FileService] = None):
        self.service = service or FileService()
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            "greet": self._greet,
            "list_directory": self._list_directory,
            "create_directory": self._create_directory,
            "delete_file": self._delete_file,
            "copy_file": self._copy_file,
            "move_file": self._move_file,
            "rename_file": self._rename_file,
        }

    @property
    def commands(self) -> list:
        return sorted(self._handlers)

    def invoke(self, command: str, args: Optional[Dict[str, Any]] = None) -> BridgeResponse:
        """
        Run one command.

        Args:
            command: Command name
            args: Command arguments

        Returns:
            BridgeResponse carrying the data or the error text and kind
        """
        handler = self._handlers.get(command)
        if handler is None:
            return BridgeResponse.failure(f"Unknown command: {command}", INVALID_REQUEST)

        if args is None:
            args = {}
        if not isinstance(args, dict):
            return BridgeResponse.failure("Arguments must be an object", INVALID_REQUEST)

        try:
            return BridgeResponse.success(handler(args))
        except BridgeRequestError as e:
            return BridgeResponse.failure(str(e), INVALID_REQUEST)
        except FileServiceError as e:
            return BridgeResponse.failure(str(e), e.kind.name)

    def handle_line(self, line: str) -> str:
        """
        Decode one JSON request and encode its response.

        Requests look like ``{"id": 1, "cmd": "list_directory", "args": {"path": "/tmp"}}``;
        the response echoes ``id``.
        """
        request_id = None
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            response = BridgeResponse.failure(f"Malformed request: {e}", INVALID_REQUEST)
        else:
            if not isinstance(request, dict):
                response = BridgeResponse.failure("Request must be an object", INVALID_REQUEST)
            else:
                request_id = request.get("id")
                response = self.invoke(str(request.get("cmd", "")), request.get("args"))

        payload = {"id": request_id}
        payload.update(response.to_dict())
        return json.dumps(payload, ensure_ascii=False)

    def _greet(self, args: Dict[str, Any]) -> str:
        return f"Hello, {_arg(args, 'name', 'name')}! You've been greeted from Python!"

    def _list_directory(self, args: Dict[str, Any]) -> Dict[str, Any]:
        return self.service.list_directory(_arg(args, "path", "path")).to_dict()

    def _create_directory(self, args: Dict[str, Any]) -> None:
        self.service.create_directory(_arg(args, "path", "path"))

    def _delete_file(self, args: Dict[str, Any]) -> None:
        self.service.delete(_arg(args, "path", "path"))

    def _copy_file(self, args: Dict[str, Any]) -> None:
        self.service.copy(
            _arg(args, "sourcePath", "source_path"),
            _arg(args, "destPath", "dest_path"),
        )

    def _move_file(self, args: Dict[str, Any]) -> None:
        self.service.move(
            _arg(args, "sourcePath", "source_path"),
            _arg(args, "destPath", "dest_path"),
        )

    def _rename_file(self, args: Dict[str, Any]) -> None:
        self.service.rename(
            _arg(args, "path", "path"),
            _arg(args, "newName", "new_name"),
        )
