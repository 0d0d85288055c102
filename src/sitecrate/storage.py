"""App-data folder access and export artifact persistence."""

from __future__ import annotations

import logging
import re
import threading
import time
from pathlib import Path

from sitecrate.errors import StorageError
from sitecrate.interfaces import AppDataFolder

logger = logging.getLogger(__name__)

EXPORTS_DIRECTORY = "Exports"

_UNSAFE_NAME = re.compile(r"[^A-Za-z0-9._@-]+")

_ticks_lock = threading.Lock()
_last_ticks = 0


class LocalAppDataFolder(AppDataFolder):
    """App-data folder backed by a local directory."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _full(self, path: str) -> Path:
        return self._root / path

    def directory_exists(self, path: str) -> bool:
        return self._full(path).is_dir()

    def create_directory(self, path: str) -> None:
        try:
            self._full(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create directory {path!r}: {exc}") from exc

    def create_file(self, path: str, content: str) -> None:
        target = self._full(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write file {path!r}: {exc}") from exc

    def combine(self, *paths: str) -> str:
        return Path(*paths).as_posix()

    def map_path(self, path: str) -> str:
        return str(self._full(path).resolve())


def next_ticks() -> int:
    """Return a nanosecond timestamp strictly greater than the previous one."""
    global _last_ticks
    with _ticks_lock:
        ticks = max(time.time_ns(), _last_ticks + 1)
        _last_ticks = ticks
        return ticks


def export_file_name(user_name: str, ticks: int) -> str:
    safe_user = _UNSAFE_NAME.sub("_", user_name).strip("_") or "anonymous"
    return f"Export-{safe_user}-{ticks}.xml"


def write_export_file(
    app_data: AppDataFolder,
    user_name: str,
    export_document: str,
    exports_directory: str = EXPORTS_DIRECTORY,
) -> Path:
    """Write an export under a unique name and return its absolute path.

    Raises:
        StorageError: If the directory or the file cannot be written.
    """
    export_file = export_file_name(user_name, next_ticks())
    if not app_data.directory_exists(exports_directory):
        app_data.create_directory(exports_directory)

    path = app_data.combine(exports_directory, export_file)
    app_data.create_file(path, export_document)

    resolved = Path(app_data.map_path(path))
    logger.info("Wrote export to %s", resolved)
    return resolved
