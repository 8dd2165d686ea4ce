"""
Recover a JSON payload from free-form model output.

Models are asked for bare JSON but regularly wrap it in markdown fences or
surround it with commentary. Each strategy below is a pure function that
returns a candidate string or None; extract_json() tries them from most
precise to most permissive and never raises.
"""

import json
import logging
import re
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
OBJECT_PATTERN = re.compile(r"(\{[\s\S]*\})")


def parse_as_is(text: str) -> Optional[str]:
    try:
        json.loads(text)
    except (ValueError, TypeError):
        return None
    return text


def from_code_block(text: str) -> Optional[str]:
    match = CODE_BLOCK_PATTERN.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return None


def from_object_pattern(text: str) -> Optional[str]:
    match = OBJECT_PATTERN.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return None


def from_brace_bounds(text: str) -> Optional[str]:
    # Last resort: drop every backtick, then slice first '{' .. last '}'
    cleaned = text.replace("`", "")
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end != -1 and end > start:
        return cleaned[start:end + 1]
    return None


STRATEGIES: List[Tuple[str, Callable[[str], Optional[str]]]] = [
    ("raw", parse_as_is),
    ("code_block", from_code_block),
    ("object_pattern", from_object_pattern),
    ("brace_bounds", from_brace_bounds),
]


def extract_json(text: str) -> str:
    """Return the best JSON candidate found in `text`, or `text` itself."""
    if not isinstance(text, str):
        text = "" if text is None else str(text)
    for name, strategy in STRATEGIES:
        candidate = strategy(text)
        if candidate is not None:
            if name != "raw":
                logger.info("Extracted JSON candidate using %s strategy", name)
            return candidate
    logger.warning("Could not extract JSON from model response")
    return text
