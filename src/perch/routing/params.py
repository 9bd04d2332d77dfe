"""Path parameter converters.

Segments like ``{id:int}`` only match when the converter's regex accepts
the whole segment. Captured values are handed to handlers as strings.
"""

import re
from functools import cache

from perch.errors import ConfigurationError

CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


@cache
def converter_regex(param_type: str) -> re.Pattern[str]:
    """Return the anchored regex for *param_type*.

    Raises ``ConfigurationError`` for an unknown converter name.
    """
    try:
        pattern = CONVERTERS[param_type]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown path converter {param_type!r}. Known converters: {known}"
        raise ConfigurationError(msg) from None
    return re.compile(f"^{pattern}$")
