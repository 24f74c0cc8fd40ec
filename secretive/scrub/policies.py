"""
Decision callbacks deciding which string leaves get scrubbed.

A callback takes (field_path, value) and returns the token to put in
place of the value, or None to keep it. Tokens returned during one walk
must be unique and must not equal any untouched leaf, since restore
matches leaves by value.
"""

import re
from typing import Iterable, Optional, Pattern, Union

from ..traverse.engine import OnValueFunc

DEFAULT_TOKEN_PREFIX = "$ref-"


def default_on_value(field_path: str, value: str) -> Optional[str]:
    """Replace any non-empty string with "$ref-" and its field path."""
    if value != "":
        return DEFAULT_TOKEN_PREFIX + field_path
    return None


def make_prefix_policy(prefix: str = DEFAULT_TOKEN_PREFIX, skip_empty: bool = True) -> OnValueFunc:
    """
    Build a policy replacing every string with prefix + field path.

    Args:
        prefix: Token prefix
        skip_empty: Leave empty strings untouched

    Returns:
        Callback usable with scrub()
    """
    def on_value(field_path: str, value: str) -> Optional[str]:
        if skip_empty and value == "":
            return None
        return prefix + field_path

    return on_value


def scrub_paths(paths: Iterable[str], prefix: str = "scrubbed") -> OnValueFunc:
    """Build a policy that only replaces leaves at the given exact paths."""
    allowed = frozenset(paths)

    def on_value(field_path: str, value: str) -> Optional[str]:
        if field_path in allowed:
            return prefix + field_path
        return None

    return on_value


def scrub_matching(
    pattern: Union[str, Pattern],
    prefix: str = DEFAULT_TOKEN_PREFIX,
) -> OnValueFunc:
    """Build a policy replacing non-empty leaves whose path matches a regex."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def on_value(field_path: str, value: str) -> Optional[str]:
        if value and compiled.search(field_path):
            return prefix + field_path
        return None

    return on_value
