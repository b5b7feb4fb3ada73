# displaycontent/core/filesize.py
from pathlib import Path
from typing import Optional
import structlog

from displaycontent.core.storage import StorageProvider, get_storage_provider
from displaycontent.exceptions import SizeQueryError

log = structlog.get_logger(__name__)

SIZE_PLACEHOLDER = "-"
_UNITS = ["KB", "MB", "GB", "TB"]

def format_file_size(size_bytes: int) -> str:
    # binary scaling with two decimals; anything below 1 KB stays in bytes.
    if size_bytes < 1024:
        return f"{size_bytes} B"
    value = float(size_bytes)
    unit = _UNITS[0]
    for unit in _UNITS:
        value /= 1024.0
        if value < 1024.0:
            break
    return f"{value:.2f} {unit}"

def _read_size(storage: StorageProvider, path: Path) -> int:
    try:
        return storage.file_size(path)
    except OSError as e:
        raise SizeQueryError(f"cannot read size of '{path}': {e}") from e

def file_size_display(file_path: str | Path, storage: Optional[StorageProvider] = None) -> str:
    # human-readable size of a file, or the placeholder when it cannot be read.
    storage = storage or get_storage_provider()
    try:
        size_bytes = _read_size(storage, Path(file_path))
    except SizeQueryError as e:
        log.error("file_size_query_failed", path=str(file_path), error=str(e))
        return SIZE_PLACEHOLDER
    return format_file_size(size_bytes)
