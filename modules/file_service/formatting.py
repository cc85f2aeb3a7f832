"""
Display helpers for file listings.
"""

import math
from datetime import datetime


_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]

_ICONS = {
    # Documents
    "txt": "📄",
    "md": "📝",
    "pdf": "📕",
    "doc": "📘",
    "docx": "📘",
    # Images
    "jpg": "🖼️",
    "jpeg": "🖼️",
    "png": "🖼️",
    "gif": "🖼️",
    "svg": "🖼️",
    # Code
    "py": "📜",
    "js": "📜",
    "ts": "📜",
    "html": "🌐",
    "css": "🎨",
    "json": "📋",
    "xml": "📋",
    "yaml": "📋",
    # Archives
    "zip": "📦",
    "tar": "📦",
    "gz": "📦",
    "rar": "📦",
    "7z": "📦",
    # Media
    "mp3": "🎵",
    "wav": "🎵",
    "mp4": "🎬",
    "mov": "🎬",
}

FOLDER_ICON = "📁"
DEFAULT_ICON = "📄"


def format_file_size(size: int) -> str:
    """
    Format a byte count for humans, e.g. ``1536`` -> ``"1.5 KB"``.

    Uses 1024 steps and at most two decimals.
    """
    if size <= 0:
        return "0 B"

    index = min(int(math.log(size, 1024)), len(_SIZE_UNITS) - 1)
    value = round(size / (1024 ** index), 2)
    if value >= 1024 and index < len(_SIZE_UNITS) - 1:
        # rounding pushed it into the next unit
        index += 1
        value = round(size / (1024 ** index), 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"


def format_date(value: str) -> str:
    """Render an ISO timestamp as a local date; unparseable text is returned as-is."""
    try:
        return datetime.fromisoformat(value).strftime("%Y-%m-%d %H:%M")
    except (TypeError, ValueError):
        return value


def get_file_extension(filename: str) -> str:
    """Lowercase extension without the dot, or an empty string."""
    parts = filename.split(".")
    if len(parts) > 1:
        return parts[-1].lower()
    return ""


def get_file_icon(filename: str, is_dir: bool) -> str:
    """Emoji for a listing row: a folder for directories, otherwise by extension."""
    if is_dir:
        return FOLDER_ICON
    return _ICONS.get(get_file_extension(filename), DEFAULT_ICON)
