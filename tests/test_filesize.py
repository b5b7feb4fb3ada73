import pytest
from pathlib import Path

from displaycontent.core.filesize import SIZE_PLACEHOLDER, file_size_display, format_file_size
from displaycontent.core.storage import LocalStorageProvider


@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (1_048_576, "1.00 MB"),
        (5 * 1024**3, "5.00 GB"),
        (2 * 1024**4, "2.00 TB"),
        (2048 * 1024**4, "2048.00 TB"),
    ],
)
def test_format_file_size(size_bytes: int, expected: str):
    assert format_file_size(size_bytes) == expected


def test_file_size_display_one_megabyte(tmp_path: Path):
    big = tmp_path / "scan.tif"
    big.write_bytes(b"\x00" * 1_048_576)

    assert file_size_display(big, LocalStorageProvider()) == "1.00 MB"
    # same answer when asked again
    assert file_size_display(str(big), LocalStorageProvider()) == "1.00 MB"


def test_file_size_display_missing_file_returns_placeholder(tmp_path: Path, captured_logs):
    missing = tmp_path / "missing.tif"

    assert file_size_display(missing, LocalStorageProvider()) == SIZE_PLACEHOLDER == "-"
    assert [(e["event"], e["log_level"], e["path"]) for e in captured_logs] == [
        ("file_size_query_failed", "error", str(missing))
    ]


def test_file_size_display_uses_given_storage(memory_storage):
    memory_storage.add_file("/data/meta.xml", b"x" * 2048)

    assert file_size_display("/data/meta.xml", memory_storage) == "2.00 KB"
    assert file_size_display("/data/other.xml", memory_storage) == "-"
