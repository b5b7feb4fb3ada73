# displaycontent/config/__init__.py
"""Configuration dataclasses and TOML loading for the display content step."""
from .settings import FolderSpec, StepConfig, StepContext, DEFAULT_STEP_TITLE
from .loader import load_step_config, find_config_file

__all__ = ["FolderSpec", "StepConfig", "StepContext", "DEFAULT_STEP_TITLE", "load_step_config", "find_config_file"]
