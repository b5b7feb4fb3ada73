# displaycontent/core/discovery/folder_resolver.py
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple
import structlog

from displaycontent.config.settings import FolderSpec
from displaycontent.core.discovery.pattern_matching import compile_filename_filter, filename_matches
from displaycontent.core.storage import StorageProvider, get_storage_provider
from displaycontent.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

class FolderConfiguration:
    # one configured folder and the files discovered in it.

    def __init__(self, label: str, path: Path, filter: str = ""):
        self._label = label
        self._path = Path(path)
        self._filter = filter or ""
        self._files: List[Path] = []

    @property
    def label(self) -> str:
        return self._label

    @property
    def path(self) -> Path:
        return self._path

    @property
    def filter(self) -> str:
        return self._filter

    @property
    def files(self) -> Tuple[Path, ...]:
        return tuple(self._files)

    def add_file(self, file_path: Path) -> None:
        self._files.append(file_path)

    def __repr__(self) -> str:
        return f"FolderConfiguration(label={self._label!r}, path={str(self._path)!r}, filter={self._filter!r}, files={len(self._files)})"

def _list_folder(storage: StorageProvider, folder_path: Path) -> List[Path]:
    try:
        return storage.list_files(folder_path)
    except OSError as e:
        raise DiscoveryError(f"failed to list folder '{folder_path}': {e}") from e

def resolve_folders(
    specs: Sequence[FolderSpec],
    substitute: Callable[[str], str],
    storage: Optional[StorageProvider] = None,
) -> List[FolderConfiguration]:
    """
    Builds one `FolderConfiguration` per spec, in input order.

    Configuration errors (unresolvable path template, malformed filter)
    propagate. A folder that is missing, is not a directory, or cannot be
    listed keeps an empty file list and does not stop the remaining specs.
    """
    storage = storage or get_storage_provider()
    configured: List[FolderConfiguration] = []

    for spec in specs:
        folder_path = Path(substitute(spec.raw_path))
        compiled_filter = compile_filename_filter(spec.filter)

        folder = FolderConfiguration(spec.label, folder_path, spec.filter)
        configured.append(folder)

        try:
            if not storage.is_directory(folder_path):
                log.info("configured_folder_not_a_directory", label=spec.label, path=str(folder_path))
                continue
            for file_path in _list_folder(storage, folder_path):
                if filename_matches(file_path, compiled_filter):
                    folder.add_file(file_path)
        except (DiscoveryError, OSError) as e:
            log.error("folder_listing_failed", label=spec.label, path=str(folder_path), error=str(e))
            continue

        log.debug("folder_resolved", label=spec.label, path=str(folder_path), files=len(folder.files))

    log.info("folder_resolution_complete", folders=len(configured))
    return configured
