# displaycontent/config/loader.py
"""
Handles locating and loading the step configuration from TOML files, and
selecting the folder block that applies to a given project and step.
"""
import toml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import structlog

from displaycontent.exceptions import ConfigError

from .settings import DEFAULT_STEP_TITLE, WILDCARD, FolderSpec, StepConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".displaycontent.toml", "displaycontent.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "displaycontent"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"could not parse config file {file_path}: {e}")
    except OSError as e:
        raise ConfigError(f"could not read config file {file_path}: {e}")
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("displaycontent", {})
    return data

def _pyproject_has_section(path: Path) -> bool:
    try:
        return "displaycontent" in toml.load(path).get("tool", {})
    except (toml.TomlDecodeError, OSError):
        return False

def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    # project-local files in start_dir first, then the user-level file.
    base = (start_dir or Path.cwd()).resolve()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base / filename
        if not candidate.is_file():
            continue
        if filename == "pyproject.toml" and not _pyproject_has_section(candidate):
            continue
        log.info("project_local_config_found", path=str(candidate))
        return candidate
    if USER_CONFIG_FILE.is_file():
        log.info("user_global_config_found", path=str(USER_CONFIG_FILE))
        return USER_CONFIG_FILE
    log.debug("no_configuration_file_found", searched_dir=str(base))
    return None

def _as_name_list(value: Any) -> List[str]:
    if value is None:
        return [WILDCARD]
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]

def _select_block(blocks: List[Dict[str, Any]], project: str, step: str) -> Optional[Dict[str, Any]]:
    # exact project+step wins, then project with any step, then any project with step, then the catch-all.
    precedence: List[Tuple[str, str]] = [
        (project, step),
        (project, WILDCARD),
        (WILDCARD, step),
        (WILDCARD, WILDCARD),
    ]
    for wanted_project, wanted_step in precedence:
        for block in blocks:
            if wanted_project in _as_name_list(block.get("project")) and wanted_step in _as_name_list(block.get("step")):
                return block
    return None

def select_folder_specs(data: Dict[str, Any], project: str = WILDCARD, step: str = WILDCARD) -> List[FolderSpec]:
    """
    Returns the folder specs that apply to `project` and `step`.

    Top-level `[[folder]]` entries apply everywhere. With `[[config]]` blocks,
    the first block matching in precedence order is used.
    """
    blocks = data.get("config")
    if blocks is None:
        entries = data.get("folder", [])
    else:
        if not isinstance(blocks, list):
            raise ConfigError("'config' must be an array of tables ([[config]])")
        block = _select_block(blocks, project, step)
        if block is None:
            log.warning("no_matching_config_block", project=project, step=step, block_count=len(blocks))
            return []
        entries = block.get("folder", [])

    if not isinstance(entries, list):
        raise ConfigError("'folder' must be an array of tables ([[folder]])")
    specs = [FolderSpec.from_mapping(entry) for entry in entries]
    log.debug("folder_specs_selected", project=project, step=step, count=len(specs))
    return specs

def load_step_config(
    config_path: Optional[Path] = None,
    project: str = WILDCARD,
    step: str = WILDCARD,
    title: str = DEFAULT_STEP_TITLE,
) -> StepConfig:
    # loads the folder block for one project/step; no config file means no folders.
    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        log.warning("no_configuration_loaded", project=project, step=step)
        return StepConfig(title=title)
    if not config_path.is_file():
        raise ConfigError(f"config file not found: {config_path}")

    data = _load_toml_file_data(config_path)
    folders = select_folder_specs(data, project=project, step=step)
    log.info("step_config_loaded", path=str(config_path), folders=len(folders))
    return StepConfig(title=title, folders=folders)
