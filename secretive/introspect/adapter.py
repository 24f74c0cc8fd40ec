"""
Value introspection for the traversal engine.

Classifies any runtime value into one of a small set of shapes and gives
uniform read/rebuild access to each shape, so the engine can walk values
whose concrete types it knows nothing about:

- NULL: None (absent reference, uninitialized sequence or mapping)
- STRING: str leaves, the only values a callback ever sees
- SCALAR: immutable non-string leaves (numbers, numpy scalars, bytes, dates, enums, ...)
- RECORD: dataclasses and named tuples, fields in declaration order
- SEQUENCE: lists, tuples, deques and other sequences
- MAPPING: dicts and other mappings
- OPAQUE: everything else, deep-copied without descending into it

Fields a dataclass inherits from a base dataclass are promoted into the
same field list as if declared directly, so they get flat paths.
"""

import array
import copy
import dataclasses
import datetime
import uuid
from collections import deque
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, List, Tuple

import numpy as np


class Shape(Enum):
    """Structural classification of a value."""
    NULL = "null"
    STRING = "string"
    SCALAR = "scalar"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPAQUE = "opaque"


# Immutable leaf types copied as-is
SCALAR_TYPES = (
    bool, int, float, complex, bytes, Decimal, Fraction,
    datetime.date, datetime.time, datetime.timedelta, datetime.timezone,
    uuid.UUID, range,
)

# Sequences kept opaque: buffers with no element-wise constructor
NON_WALKED_SEQUENCE_TYPES = (bytearray, memoryview, array.array)


def is_named_tuple(value: Any) -> bool:
    """Check whether a value is a NamedTuple / namedtuple instance."""
    return isinstance(value, tuple) and hasattr(type(value), '_fields')


def is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def classify(value: Any) -> Shape:
    """
    Classify a value into exactly one shape.

    Enum members are checked before str so that str-valued enums stay
    scalars, and named tuples before tuples so they are walked as records.
    """
    if value is None:
        return Shape.NULL
    if isinstance(value, Enum):
        return Shape.SCALAR
    if isinstance(value, str):
        return Shape.STRING
    if isinstance(value, SCALAR_TYPES) or isinstance(value, np.generic):
        return Shape.SCALAR
    if is_dataclass_instance(value) or is_named_tuple(value):
        return Shape.RECORD
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, NON_WALKED_SEQUENCE_TYPES):
        return Shape.SEQUENCE
    return Shape.OPAQUE


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def record_fields(record: Any) -> List[Tuple[str, Any]]:
    """
    Return (field_name, value) pairs in declaration order.

    For dataclasses this includes fields inherited from base dataclasses.
    """
    if is_named_tuple(record):
        return list(zip(type(record)._fields, record))
    return [(f.name, getattr(record, f.name)) for f in dataclasses.fields(record)]


def build_record(source: Any, values: Dict[str, Any]) -> Any:
    """
    Build a new record of the same class as source with the given field values.

    Dataclasses are copied without re-running __init__ or __post_init__;
    object.__setattr__ is used so frozen dataclasses work too.
    """
    if is_named_tuple(source):
        return type(source)._make(values[name] for name in type(source)._fields)

    result = copy.copy(source)
    for name, value in values.items():
        object.__setattr__(result, name, value)
    # Attributes outside the declared fields are not walked but must not be shared
    for name in _extra_attributes(source, values):
        object.__setattr__(result, name, copy.deepcopy(getattr(source, name)))
    return result


def _extra_attributes(record: Any, fields: Dict[str, Any]) -> List[str]:
    """List instance attributes of record that are not declared fields."""
    names = [name for name in getattr(record, "__dict__", {}) if name not in fields]
    for klass in type(record).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in fields or name in ("__dict__", "__weakref__") or name in names:
                continue
            if hasattr(record, name):
                names.append(name)
    return names


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------

def build_sequence(source: Any, items: List[Any]) -> Any:
    """Build a sequence of the same concrete type as source."""
    if type(source) is list:
        return items
    if type(source) is tuple:
        return tuple(items)
    if isinstance(source, deque):
        return type(source)(items, source.maxlen)
    return type(source)(items)


# ---------------------------------------------------------------------------
# Mappings
# ---------------------------------------------------------------------------

def mapping_items(mapping: Any) -> List[Tuple[Any, Any]]:
    """Snapshot the items of a mapping."""
    return list(mapping.items())


def empty_mapping_like(source: Any) -> Any:
    """
    Allocate an empty mapping for the copy of source.

    dict subclasses keep their class (and a defaultdict its factory);
    other Mapping implementations are copied into a plain dict.
    """
    if type(source) is dict:
        return {}
    if isinstance(source, dict):
        result = copy.copy(source)
        result.clear()
        return result
    return {}


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

def replace_string(source: str, replacement: str) -> str:
    """Return the replacement as the same str type as source."""
    if type(source) is str:
        return replacement
    return type(source)(replacement)


def copy_opaque(value: Any) -> Any:
    """Copy a value the engine does not descend into."""
    if isinstance(value, np.ndarray) and value.dtype != object:
        return value.copy()
    return copy.deepcopy(value)
