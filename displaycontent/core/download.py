# displaycontent/core/download.py
"""
Streams a discovered file to a response-like sink.

The sink receives its metadata (content type, length, attachment header)
before the first byte. Failures are logged and end the transfer; the sink is
left in whatever state it reached.
"""
import io
import mimetypes
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Protocol
import structlog

from displaycontent.core.storage import StorageProvider, get_storage_provider
from displaycontent.exceptions import DownloadError

log = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

class DownloadSink(Protocol):
    def reset(self) -> None: ...

    def set_content_type(self, content_type: str) -> None: ...

    def set_content_length(self, length: int) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def write(self, data: bytes) -> None: ...

    def complete(self) -> None: ...

class FileDownloadSink:
    # writes the download to a binary stream (an open file or stdout's buffer) and records the headers.

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.headers: Dict[str, str] = {}
        self.content_type: Optional[str] = None
        self.content_length: Optional[int] = None
        self.bytes_written = 0
        self.completed = False

    def reset(self) -> None:
        self.headers.clear()
        self.content_type = None
        self.content_length = None
        self.bytes_written = 0
        self.completed = False

    def set_content_type(self, content_type: str) -> None:
        self.content_type = content_type

    def set_content_length(self, length: int) -> None:
        self.content_length = length

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write(self, data: bytes) -> None:
        self.stream.write(data)
        self.bytes_written += len(data)

    def complete(self) -> None:
        self.stream.flush()
        self.completed = True

class BufferDownloadSink(FileDownloadSink):
    # keeps the downloaded bytes in memory.

    def __init__(self):
        super().__init__(io.BytesIO())

    def reset(self) -> None:
        super().reset()
        self.stream = io.BytesIO()

    def getvalue(self) -> bytes:
        return self.stream.getvalue()

def guess_content_type(file_path: Path) -> str:
    content_type, _ = mimetypes.guess_type(file_path.name)
    return content_type or DEFAULT_CONTENT_TYPE

def stream_download(
    file_path: str | Path,
    sink: DownloadSink,
    storage: Optional[StorageProvider] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    # copies the file into the sink; returns the number of bytes written (possibly partial on failure).
    storage = storage or get_storage_provider()
    path = Path(file_path)
    progress = {"written": 0}
    try:
        _copy_to_sink(storage, path, sink, chunk_size, progress)
    except DownloadError as e:
        log.error("file_download_failed", path=str(path), bytes_written=progress["written"], error=str(e))
        return progress["written"]

    log.info("file_download_complete", path=str(path), bytes_written=progress["written"])
    return progress["written"]

def _copy_to_sink(storage: StorageProvider, path: Path, sink: DownloadSink, chunk_size: int, progress: Dict[str, int]) -> None:
    try:
        with storage.open_read(path) as in_stream:
            sink.reset()
            sink.set_content_type(guess_content_type(path))
            sink.set_header("Content-Disposition", f"attachment; filename={path.name}")
            sink.set_content_length(storage.file_size(path))

            while True:
                chunk = in_stream.read(chunk_size)
                if not chunk:
                    break
                sink.write(chunk)
                progress["written"] += len(chunk)

            sink.complete()
    except OSError as e:
        raise DownloadError(f"download of '{path}' aborted: {e}") from e
