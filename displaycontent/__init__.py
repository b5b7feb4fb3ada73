# displaycontent/__init__.py
"""Display content step: configured folder discovery, file sizes and downloads."""

__version__ = "1.0.0"
