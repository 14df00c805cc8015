"""
Helpers for reading JSON out of chat-model text
"""
import json
import re
from typing import Any

# ``` optionally followed by a language tag such as json
_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_+-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?[ \t]*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a leading and a trailing markdown fence, each only if present."""
    stripped = _LEADING_FENCE.sub("", text, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def loads_model_json(text: str) -> Any:
    """Parse model output that may be wrapped in a fenced code block.

    Raises ValueError (json.JSONDecodeError) when the remainder is not JSON.
    """
    return json.loads(strip_code_fences(text or ""))
