# displaycontent/core/storage.py
"""
Storage abstraction used by discovery, size queries and downloads.

Every component takes a provider explicitly; `get_storage_provider()` only
supplies the shared local-filesystem default.
"""
import os
from pathlib import Path
from typing import BinaryIO, List, Optional, Protocol
import structlog

log = structlog.get_logger(__name__)

class StorageProvider(Protocol):
    def is_directory(self, path: Path) -> bool: ...

    def list_files(self, path: Path) -> List[Path]: ...

    def file_size(self, path: Path) -> int: ...

    def open_read(self, path: Path) -> BinaryIO: ...

class LocalStorageProvider:
    # StorageProvider backed by the local filesystem.

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_files(self, path: Path) -> List[Path]:
        # immediate regular files only, in directory listing order.
        files: List[Path] = []
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_file():
                    files.append(Path(entry.path))
        log.debug("storage_listed_files", path=str(path), count=len(files))
        return files

    def file_size(self, path: Path) -> int:
        return Path(path).stat().st_size

    def open_read(self, path: Path) -> BinaryIO:
        return Path(path).open("rb")

_default_provider: Optional[LocalStorageProvider] = None

def get_storage_provider() -> LocalStorageProvider:
    global _default_provider
    if _default_provider is None:
        _default_provider = LocalStorageProvider()
    return _default_provider
