"""
Tests for value classification and record/container rebuilding.
"""

import datetime
import uuid
from collections import OrderedDict, defaultdict, deque, namedtuple
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import List, NamedTuple

import numpy as np
import pytest

from secretive.introspect.adapter import (
    Shape,
    build_record,
    build_sequence,
    classify,
    copy_opaque,
    empty_mapping_like,
    record_fields,
    replace_string,
)


class Color(Enum):
    RED = "red"


class Point(NamedTuple):
    x: int
    label: str


Pair = namedtuple('Pair', ['left', 'right'])


@dataclass
class Base:
    first: str = ""
    second: int = 0


@dataclass
class Derived(Base):
    third: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Frozen:
    value: str = ""


@dataclass
class WithPostInit:
    value: str = ""
    calls: int = 0

    def __post_init__(self):
        self.calls += 1


@dataclass
class WithCache:
    value: str = ""

    def __post_init__(self):
        self.cache = []


class Holder:
    def __init__(self, items):
        self.items = items


class Tag(str):
    pass


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("value, shape", [
        (None, Shape.NULL),
        ("", Shape.STRING),
        ("text", Shape.STRING),
        (Tag("x"), Shape.STRING),
        (True, Shape.SCALAR),
        (42, Shape.SCALAR),
        (1.5, Shape.SCALAR),
        (b"bytes", Shape.SCALAR),
        (Decimal("1.10"), Shape.SCALAR),
        (datetime.datetime(2024, 1, 1), Shape.SCALAR),
        (uuid.UUID(int=1), Shape.SCALAR),
        (Color.RED, Shape.SCALAR),
        (Base(), Shape.RECORD),
        (Point(1, "a"), Shape.RECORD),
        (Pair(1, 2), Shape.RECORD),
        ([], Shape.SEQUENCE),
        ((1, 2), Shape.SEQUENCE),
        (deque(["a"]), Shape.SEQUENCE),
        ({}, Shape.MAPPING),
        (OrderedDict(), Shape.MAPPING),
        (MappingProxyType({}), Shape.MAPPING),
        (np.int64(3), Shape.SCALAR),
        (np.float32(1.5), Shape.SCALAR),
        (np.bool_(True), Shape.SCALAR),
        (np.str_("text"), Shape.STRING),
        (range(3), Shape.SCALAR),
        (bytearray(b"x"), Shape.OPAQUE),
        ({1, 2}, Shape.OPAQUE),
        (object(), Shape.OPAQUE),
        (np.array([1, 2]), Shape.OPAQUE),
    ])
    def test_shapes(self, value, shape):
        """Each value maps to exactly one shape."""
        assert classify(value) is shape

    def test_dataclass_type_is_not_a_record(self):
        """The dataclass class object itself is opaque."""
        assert classify(Base) is Shape.OPAQUE


class TestRecords:
    """Tests for record field access and rebuilding."""

    def test_fields_in_declaration_order(self):
        """Fields come back in declaration order."""
        assert record_fields(Base("a", 1)) == [("first", "a"), ("second", 1)]

    def test_inherited_fields_are_promoted(self):
        """Base dataclass fields appear at the same level."""
        names = [name for name, _ in record_fields(Derived())]
        assert names == ["first", "second", "third"]

    def test_named_tuple_fields(self):
        """Named tuples expose their _fields."""
        assert record_fields(Point(1, "a")) == [("x", 1), ("label", "a")]

    def test_build_named_tuple(self):
        """Named tuples are rebuilt with _make."""
        result = build_record(Point(1, "a"), {"x": 2, "label": "b"})
        assert result == Point(2, "b")
        assert type(result) is Point

    def test_build_frozen_dataclass(self):
        """Frozen dataclasses can be rebuilt."""
        source = Frozen("a")
        result = build_record(source, {"value": "b"})
        assert result == Frozen("b")
        assert source == Frozen("a")

    def test_build_does_not_rerun_post_init(self):
        """__post_init__ is not called on the copy."""
        source = WithPostInit("a")
        result = build_record(source, {"value": "b", "calls": source.calls})
        assert result.calls == 1
        assert result is not source

    def test_build_copies_non_field_attributes(self):
        """Attributes set outside the fields are copied, not shared."""
        source = WithCache("a")
        result = build_record(source, {"value": "b"})
        result.cache.append("x")
        assert source.cache == []
        assert result.cache == ["x"]


class TestContainers:
    """Tests for sequence and mapping rebuilding."""

    def test_sequence_keeps_type(self):
        """Lists stay lists and tuples stay tuples."""
        assert build_sequence([1], ["a"]) == ["a"]
        assert build_sequence((1,), ["a"]) == ("a",)

    def test_deque_keeps_maxlen(self):
        result = build_sequence(deque([1], maxlen=3), ["a"])
        assert isinstance(result, deque)
        assert list(result) == ["a"]
        assert result.maxlen == 3

    def test_ordered_dict_keeps_type(self):
        """dict subclasses keep their class."""
        result = empty_mapping_like(OrderedDict(a=1))
        assert isinstance(result, OrderedDict)
        assert len(result) == 0

    def test_defaultdict_keeps_factory(self):
        """defaultdict copies keep their default_factory."""
        source = defaultdict(list, a=[1])
        result = empty_mapping_like(source)
        assert result.default_factory is list
        assert len(result) == 0
        assert source == {"a": [1]}

    def test_other_mappings_become_dicts(self):
        """Read-only mappings are copied into a dict."""
        assert type(empty_mapping_like(MappingProxyType({"a": 1}))) is dict


class TestLeaves:
    """Tests for leaf replacement and opaque copies."""

    def test_replace_plain_string(self):
        assert replace_string("a", "b") == "b"

    def test_replace_keeps_str_subclass(self):
        """Replacements of a str subclass keep the subclass."""
        result = replace_string(Tag("a"), "b")
        assert result == "b"
        assert type(result) is Tag

    def test_set_is_copied(self):
        """Sets are copied, not shared."""
        source = {"a"}
        result = copy_opaque(source)
        assert result == source
        assert result is not source

    def test_ndarray_is_copied(self):
        """numpy arrays are copied, not shared."""
        source = np.array(["a", "b"])
        result = copy_opaque(source)
        assert np.array_equal(result, source)
        assert not np.shares_memory(result, source)

    def test_object_ndarray_is_deep_copied(self):
        """Object arrays are copied together with the objects they hold."""
        source = np.empty(1, dtype=object)
        source[0] = ["a"]
        result = copy_opaque(source)
        result[0].append("x")
        assert source[0] == ["a"]

    def test_other_objects_are_deep_copied(self):
        """Unknown objects are copied together with their contents."""
        source = Holder(["keep"])
        result = copy_opaque(source)
        result.items.append("added")
        assert result is not source
        assert source.items == ["keep"]
