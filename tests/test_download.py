import io
from pathlib import Path

from displaycontent.core.download import (
    DEFAULT_CONTENT_TYPE,
    BufferDownloadSink,
    FileDownloadSink,
    stream_download,
)
from displaycontent.core.storage import LocalStorageProvider


def test_stream_download_copies_exact_bytes(tmp_path: Path):
    content = bytes(range(256)) * 1000
    source = tmp_path / "page_0001.tif"
    source.write_bytes(content)
    sink = BufferDownloadSink()

    written = stream_download(source, sink, LocalStorageProvider(), chunk_size=4096)

    assert written == len(content)
    assert sink.getvalue() == content
    assert sink.completed is True
    assert sink.content_length == len(content)
    assert sink.content_type == "image/tiff"
    assert sink.headers["Content-Disposition"] == "attachment; filename=page_0001.tif"


def test_stream_download_is_repeatable(tmp_path: Path):
    source = tmp_path / "meta.xml"
    source.write_text("<mets/>")

    first, second = BufferDownloadSink(), BufferDownloadSink()
    stream_download(source, first, LocalStorageProvider())
    stream_download(source, second, LocalStorageProvider())

    assert first.getvalue() == second.getvalue() == b"<mets/>"
    assert first.content_type == second.content_type


def test_unknown_extension_falls_back_to_octet_stream(tmp_path: Path):
    source = tmp_path / "blob.unknownext"
    source.write_bytes(b"\x01\x02")
    sink = BufferDownloadSink()

    stream_download(source, sink, LocalStorageProvider())

    assert sink.content_type == DEFAULT_CONTENT_TYPE


def test_missing_file_writes_nothing_and_does_not_raise(tmp_path: Path, captured_logs):
    out = io.BytesIO()
    sink = FileDownloadSink(out)

    written = stream_download(tmp_path / "missing.xml", sink, LocalStorageProvider())

    assert written == 0
    assert out.getvalue() == b""
    assert sink.completed is False
    assert sink.headers == {}
    failures = [e for e in captured_logs if e["event"] == "file_download_failed"]
    assert len(failures) == 1
    assert failures[0]["log_level"] == "error"
    assert failures[0]["bytes_written"] == 0


def test_read_error_aborts_and_releases_handle(memory_storage):
    memory_storage.add_file("/data/big.bin", b"a" * 100)
    memory_storage.failing_reads.add(Path("/data/big.bin"))
    sink = BufferDownloadSink()

    written = stream_download("/data/big.bin", sink, memory_storage, chunk_size=10)

    assert written == 10
    assert sink.getvalue() == b"a" * 10
    assert sink.completed is False
    assert memory_storage.opened[0].closed


def test_handle_released_after_success(memory_storage):
    memory_storage.add_file("/data/ok.txt", b"hello")
    sink = BufferDownloadSink()

    stream_download("/data/ok.txt", sink, memory_storage)

    assert sink.getvalue() == b"hello"
    assert memory_storage.opened[0].closed


def test_metadata_set_before_first_byte(memory_storage):
    memory_storage.add_file("/data/ok.txt", b"hello")
    events = []

    class RecordingSink(BufferDownloadSink):
        def set_header(self, name, value):
            events.append("header")
            super().set_header(name, value)

        def set_content_type(self, content_type):
            events.append("type")
            super().set_content_type(content_type)

        def set_content_length(self, length):
            events.append("length")
            super().set_content_length(length)

        def write(self, data):
            events.append("write")
            super().write(data)

    stream_download("/data/ok.txt", RecordingSink(), memory_storage)

    assert events.index("write") > max(events.index("header"), events.index("type"), events.index("length"))
