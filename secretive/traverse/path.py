"""
Path construction for leaves visited by the traversal engine.

Grammar: ("/" field_name | "[" index "]" | "/" map_key)*

Scrub walks start from an empty root path; restore walks start from a
single separator. Callbacks that look at paths see that difference.
"""

from typing import Any

SEPARATOR = "/"

SCRUB_ROOT = ""
RESTORE_ROOT = SEPARATOR


def field_path(path: str, name: str) -> str:
    """Path of a record field."""
    return f"{path}{SEPARATOR}{name}"


def index_path(path: str, index: int) -> str:
    """Path of a sequence element."""
    return f"{path}[{index}]"


def key_path(path: str, key: Any) -> str:
    """Path of a mapping entry; non-string keys are rendered with str()."""
    return f"{path}{SEPARATOR}{key}"
