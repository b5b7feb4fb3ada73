# displaycontent/core/discovery/pattern_matching.py
import re
from pathlib import Path
from typing import Optional, Pattern

from displaycontent.exceptions import ConfigError

def compile_filename_filter(filter_str: Optional[str]) -> Optional[Pattern[str]]:
    # blank filter means "match all" and compiles to None.
    if filter_str is None or not filter_str.strip():
        return None
    try:
        return re.compile(filter_str)
    except re.error as e:
        raise ConfigError(f"invalid filename filter '{filter_str}': {e}")

def filename_matches(path: Path, compiled_filter: Optional[Pattern[str]]) -> bool:
    # the whole file name has to match, not a substring.
    if compiled_filter is None:
        return True
    return compiled_filter.fullmatch(path.name) is not None
