#!/usr/bin/env python3
"""
Field, schema and record model of extracted data.

A Field describes one column (name, ordinal, type, nullability and an optional
converter). A RecordSchema is the set of fields of one record shape and a
Record holds the values of one extracted row, addressed by field.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field as dataclass_field
from typing import Any

from extraction.conversion import Converter


# Module-level logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Field:
    """
    Definition of a field of a record.

    Equality and hash are based on name, ordinal, type and nullable. The
    converter is not part of the identity of a field.

    Args:
        name: Unique symbolic name within a record schema
        ordinal: Unique zero-based column index within a record schema
        type: Type of the value of this field
        nullable: Whether the field accepts missing values
        converter: Converts raw values to the type, None means cast only
    """
    name: str
    ordinal: int
    type: type
    nullable: bool = True
    converter: Converter | None = dataclass_field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name must not be empty")
        if self.ordinal < 0:
            raise ValueError(f"Field ordinal must not be negative: {self.name} ({self.ordinal})")

    def cast(self, value: Any) -> Any:
        """Return the value unchanged if it is None or of the type of this field"""
        if value is not None and not isinstance(value, self.type):
            raise TypeError(f"Field {self.name} expects {self.type.__name__}, "
                            f"got {type(value).__name__}")
        return value

    def convert(self, value: Any) -> Any:
        """
        Convert the value to the type of this field.

        Raises:
            ConversionError: If the converter rejects the value
            TypeError: If the value does not match the source type of the
                converter, or the field type when there is no converter
        """
        if self.converter is None:
            return self.cast(value)
        return self.converter.cast_and_convert(value)

    def __str__(self) -> str:
        return self.name


class RecordSchema:
    """
    Immutable set of the fields of a record.

    Exact duplicates are collapsed. Two different fields must not share an
    ordinal or a name.
    """

    def __init__(self, fields: Iterable[Field]):
        field_set = frozenset(fields)
        if not field_set:
            raise ValueError("At least one field must be specified")

        ordered = sorted(field_set, key=lambda f: (f.ordinal, f.name))
        self._check_unique(ordered)

        self._field_set = field_set
        self._fields = tuple(ordered)
        self._max_ordinal = ordered[-1].ordinal

    @staticmethod
    def _check_unique(fields: Sequence[Field]) -> None:
        names: set[str] = set()
        ordinals: set[int] = set()
        for f in fields:
            if f.ordinal in ordinals:
                raise ValueError(f"Duplicate field ordinal {f.ordinal}: {f.name}")
            if f.name in names:
                raise ValueError(f"Duplicate field name: {f.name}")
            ordinals.add(f.ordinal)
            names.add(f.name)

    @property
    def fields(self) -> tuple[Field, ...]:
        """Fields ordered by ordinal"""
        return self._fields

    @property
    def max_ordinal(self) -> int:
        return self._max_ordinal

    @property
    def field_count(self) -> int:
        return len(self._fields)

    def get_field(self, index: int) -> Field:
        """Return the field at the zero-based position in ordinal order"""
        if index < 0 or index >= len(self._fields):
            raise IndexError(f"Field index {index} out of range 0..{len(self._fields) - 1}")
        return self._fields[index]

    def contains(self, field: Field) -> bool:
        return field in self._field_set

    def __contains__(self, field: object) -> bool:
        return field in self._field_set

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"RecordSchema({', '.join(f.name for f in self._fields)})"


class Record:
    """
    Immutable values of one record. The ordinal of a field is the index of its
    value. Values must be immutable themselves, later changes to the passed
    sequence do not affect the record.
    """

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: RecordSchema, values: Sequence[Any]):
        if len(values) <= schema.max_ordinal:
            raise ValueError(f"Record must contain at least {schema.max_ordinal + 1} values")
        self._schema = schema
        self._values = tuple(values)

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    def get_value(self, field: Field) -> Any:
        if field not in self._schema:
            raise ValueError(f"Field is not included in record: {field.name}")
        return field.cast(self._values[field.ordinal])

    def as_dict(self) -> dict[str, Any]:
        """Field name to value, in ordinal order"""
        return {f.name: self._values[f.ordinal] for f in self._schema}

    def __repr__(self) -> str:
        return f"Record({self.as_dict()!r})"
