# displaycontent/config/settings.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from displaycontent.exceptions import ConfigError

DEFAULT_STEP_TITLE = "intranda_step_displayContent"
WILDCARD = "*"

@dataclass(frozen=True)
class FolderSpec:
    # one raw <folder> entry: label, path template, optional filename regex.
    label: str
    raw_path: str
    filter: str = ""

    @classmethod
    def from_mapping(cls, entry: Dict[str, object]) -> "FolderSpec":
        # builds a spec from a parsed toml table; label and filter are optional.
        if not isinstance(entry, dict):
            raise ConfigError(f"folder entry {entry!r} must be a table ([[folder]])")
        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ConfigError(f"folder entry {dict(entry)!r} has no 'path'")
        label = entry.get("label") or ""
        filter_value = entry.get("filter") or ""
        return cls(label=str(label), raw_path=raw_path, filter=str(filter_value))

@dataclass
class StepContext:
    # the process/step the display content step runs for.
    project: str = WILDCARD
    step: str = WILDCARD
    process_id: Optional[str] = None
    process_title: Optional[str] = None
    user_vars: Dict[str, str] = field(default_factory=dict)

    def variables(self) -> Dict[str, str]:
        # built-in tokens first, user vars override them.
        built_in: Dict[str, str] = {
            "projectname": self.project,
            "stepname": self.step,
        }
        if self.process_id is not None:
            built_in["processid"] = str(self.process_id)
        if self.process_title is not None:
            built_in["processtitle"] = self.process_title
        built_in.update({k.lower(): v for k, v in self.user_vars.items()})
        return built_in

@dataclass
class StepConfig:
    # the folder block selected for one project and step.
    title: str = DEFAULT_STEP_TITLE
    folders: List[FolderSpec] = field(default_factory=list)
