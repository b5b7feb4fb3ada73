import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest
import structlog
from structlog.testing import capture_logs

from displaycontent.core import download, filesize
from displaycontent.core.discovery import folder_resolver


class InMemoryStorage:
    """
    StorageProvider fake: files are bytes keyed by path, directories are
    derived from file parents plus any explicitly added empty directories.
    Listing keeps insertion order.
    """

    def __init__(self):
        self.files: Dict[Path, bytes] = {}
        self.extra_dirs: Set[Path] = set()
        self.failing_listings: Set[Path] = set()
        self.failing_reads: Set[Path] = set()
        self.opened: List["TrackingBytesIO"] = []

    def add_file(self, path: str, content: bytes = b"") -> Path:
        p = Path(path)
        self.files[p] = content
        return p

    def add_dir(self, path: str) -> Path:
        p = Path(path)
        self.extra_dirs.add(p)
        return p

    def is_directory(self, path: Path) -> bool:
        path = Path(path)
        return path in self.extra_dirs or any(f.parent == path for f in self.files)

    def list_files(self, path: Path) -> List[Path]:
        path = Path(path)
        if path in self.failing_listings:
            raise PermissionError(f"permission denied: {path}")
        return [f for f in self.files if f.parent == path]

    def file_size(self, path: Path) -> int:
        path = Path(path)
        if path not in self.files:
            raise FileNotFoundError(str(path))
        return len(self.files[path])

    def open_read(self, path: Path):
        path = Path(path)
        if path not in self.files:
            raise FileNotFoundError(str(path))
        stream = TrackingBytesIO(self.files[path], fail_reads=path in self.failing_reads)
        self.opened.append(stream)
        return stream


class TrackingBytesIO(io.BytesIO):
    def __init__(self, data: bytes, fail_reads: bool = False):
        super().__init__(data)
        self.fail_reads = fail_reads

    def read(self, size: Optional[int] = -1) -> bytes:
        if self.fail_reads and self.tell() > 0:
            raise OSError("read error")
        return super().read(size)


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture(autouse=True)
def _reset_app_logger():
    # CLI runs attach handlers bound to CliRunner's temporary streams.
    yield
    logging.getLogger("displaycontent").handlers.clear()


@pytest.fixture
def captured_logs(monkeypatch: pytest.MonkeyPatch):
    # module loggers may already be cached against an earlier CLI logging setup.
    for module in (folder_resolver, filesize, download):
        monkeypatch.setattr(module, "log", structlog.get_logger(module.__name__))
    with capture_logs() as logs:
        yield logs
