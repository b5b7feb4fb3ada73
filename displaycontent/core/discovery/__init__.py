# displaycontent/core/discovery/__init__.py
"""
Folder discovery for the display content step.

Resolves configured folder specs into `FolderConfiguration` objects holding
the files found directly inside each folder that pass its filename filter.
"""
from .folder_resolver import FolderConfiguration, resolve_folders

__all__ = ["FolderConfiguration", "resolve_folders"]
