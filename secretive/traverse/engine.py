"""
Depth-first traversal engine.

walk() produces a fresh copy of any value, building a path for every node
it descends into and asking a callback what to do with each string leaf.
When the callback returns a replacement that differs from the leaf, the
replacement goes into the copy and the pair is written to the secrets
mapping (replacement -> original). The source value is never mutated.

The engine does not check for token collisions (a repeated token
overwrites the earlier secret) and does not detect cycles.
"""

import logging
from typing import Any, Callable, MutableMapping, Optional

from ..introspect.adapter import (
    Shape,
    build_record,
    build_sequence,
    classify,
    copy_opaque,
    empty_mapping_like,
    mapping_items,
    record_fields,
    replace_string,
)
from .path import field_path, index_path, key_path

logger = logging.getLogger(__name__)

# (field_path, current_value) -> replacement token, or None to keep the value
OnValueFunc = Callable[[str, str], Optional[str]]


def walk(
    path: str,
    source: Any,
    secrets: MutableMapping[str, str],
    on_value: OnValueFunc,
) -> Any:
    """
    Walk source depth-first and return its (possibly rewritten) copy.

    Args:
        path: Path of source within the root value
        source: Value to copy
        secrets: Mapping that receives replacement -> original entries
        on_value: Callback invoked once per string leaf

    Returns:
        A new value with the same structure as source
    """
    shape = classify(source)

    if shape is Shape.NULL:
        # Absent reference or uninitialized container stays absent
        return None

    if shape is Shape.STRING:
        return _walk_string(path, source, secrets, on_value)

    if shape is Shape.RECORD:
        values = {}
        for name, child in record_fields(source):
            values[name] = walk(field_path(path, name), child, secrets, on_value)
        return build_record(source, values)

    if shape is Shape.SEQUENCE:
        items = [
            walk(index_path(path, i), item, secrets, on_value)
            for i, item in enumerate(source)
        ]
        return build_sequence(source, items)

    if shape is Shape.MAPPING:
        result = empty_mapping_like(source)
        for key, child in mapping_items(source):
            result[key] = walk(key_path(path, key), child, secrets, on_value)
        return result

    if shape is Shape.SCALAR:
        return source

    logger.debug(f"Copying opaque {type(source).__name__} at '{path}' verbatim")
    return copy_opaque(source)


def _walk_string(
    path: str,
    source: str,
    secrets: MutableMapping[str, str],
    on_value: OnValueFunc,
) -> str:
    """Ask the callback about a string leaf and record any replacement."""
    replacement = on_value(path, source)

    if replacement is None or replacement == source:
        return source

    if not isinstance(replacement, str):
        raise TypeError(
            f"Callback must return str or None, got {type(replacement).__name__} at '{path}'"
        )

    secrets[replacement] = str(source)
    logger.debug(f"Replaced string at '{path}'")
    return replace_string(source, replacement)
