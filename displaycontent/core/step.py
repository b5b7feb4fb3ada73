# displaycontent/core/step.py
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import structlog

from displaycontent.config.loader import load_step_config
from displaycontent.config.settings import DEFAULT_STEP_TITLE, StepConfig, StepContext
from displaycontent.core.discovery import FolderConfiguration, resolve_folders
from displaycontent.core.download import DownloadSink, stream_download
from displaycontent.core.filesize import file_size_display
from displaycontent.core.storage import StorageProvider, get_storage_provider
from displaycontent.core.variables import VariableReplacer
from displaycontent.exceptions import StepStateError

log = structlog.get_logger(__name__)

PAGE_PATH = "/uii/plugin_step_displayContent.xhtml"
RETURN_PATH_PREFIX = "/uii"

class PluginGuiType(Enum):
    NONE = "none"
    PART = "part"
    FULL = "full"
    PART_AND_FULL = "part_and_full"

class PluginType(Enum):
    STEP = "step"

class PluginReturnValue(Enum):
    FINISH = "finish"
    WAIT = "wait"
    ERROR = "error"

class DisplayContentStep:
    """
    Workflow step that shows the files of the configured folders.

    The host calls `initialize` once per step; afterwards the step only
    answers read-only queries (`configured_folders`, `get_file_size`,
    `download_file`) and navigation (`cancel`, `finish`).
    """

    title: str = DEFAULT_STEP_TITLE
    page_path: str = PAGE_PATH
    gui_type: PluginGuiType = PluginGuiType.PART
    plugin_type: PluginType = PluginType.STEP
    interface_version: int = 0

    def __init__(
        self,
        step_config: Optional[StepConfig] = None,
        config_path: Optional[Path] = None,
        storage: Optional[StorageProvider] = None,
    ):
        self._step_config = step_config
        self._config_path = config_path
        self._storage = storage or get_storage_provider()
        self._context: Optional[StepContext] = None
        self._return_path: Optional[str] = None
        self._configured_folders: List[FolderConfiguration] = []

    @property
    def context(self) -> Optional[StepContext]:
        return self._context

    @property
    def is_initialized(self) -> bool:
        return self._context is not None

    @property
    def configured_folders(self) -> Tuple[FolderConfiguration, ...]:
        return tuple(self._configured_folders)

    def initialize(self, context: StepContext, return_path: str) -> None:
        if self.is_initialized:
            raise StepStateError(f"step '{self.title}' is already initialized")

        if self._step_config is None:
            self._step_config = load_step_config(
                self._config_path, project=context.project, step=context.step, title=self.title
            )
        replacer = VariableReplacer(context.variables())
        self._configured_folders = resolve_folders(self._step_config.folders, replacer.replace, self._storage)
        self._context = context
        self._return_path = return_path
        log.info(
            "display_content_step_initialized",
            project=context.project,
            step=context.step,
            folders=len(self._configured_folders),
        )

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise StepStateError(f"step '{self.title}' has not been initialized")

    def get_file_size(self, file_path: str | Path) -> str:
        return file_size_display(file_path, self._storage)

    def download_file(self, file_path: str | Path, sink: DownloadSink) -> int:
        return stream_download(file_path, sink, self._storage)

    def cancel(self) -> str:
        self._require_initialized()
        return f"{RETURN_PATH_PREFIX}{self._return_path}"

    def finish(self) -> str:
        self._require_initialized()
        return f"{RETURN_PATH_PREFIX}{self._return_path}"

    def validate(self) -> Optional[Dict[str, str]]:
        # nothing to validate before the step is closed.
        return None

    def run(self) -> PluginReturnValue:
        log.info("display_content_step_executed", title=self.title)
        return PluginReturnValue.FINISH

    def execute(self) -> bool:
        return self.run() != PluginReturnValue.ERROR
