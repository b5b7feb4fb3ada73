# displaycontent/core/variables.py
import re
from typing import Dict, Mapping
import structlog

from displaycontent.exceptions import ConfigError

log = structlog.get_logger(__name__)

TOKEN_PATTERN = re.compile(r"\{([A-Za-z0-9_.]+)\}")

class VariableReplacer:
    """
    Replaces `{name}` tokens in a path template with process/step values.

    Token names are matched case-insensitively. A template that still holds
    a token without a value is a configuration error.
    """

    def __init__(self, variables: Mapping[str, str]):
        self._variables: Dict[str, str] = {k.lower(): str(v) for k, v in variables.items()}

    def replace(self, template: str) -> str:
        missing = sorted({m.group(1) for m in TOKEN_PATTERN.finditer(template) if m.group(1).lower() not in self._variables})
        if missing:
            raise ConfigError(f"unresolvable variables {missing} in path template '{template}'")
        resolved = TOKEN_PATTERN.sub(lambda m: self._variables[m.group(1).lower()], template)
        log.debug("path_template_resolved", template=template, resolved=resolved)
        return resolved

    __call__ = replace
