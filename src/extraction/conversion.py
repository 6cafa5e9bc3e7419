#!/usr/bin/env python3
"""
Value converters used by fields to turn raw CSV text into typed values.

All text converters trim the value first and convert blank text to None
without calling the type specific conversion. Malformed text raises
ConversionError.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from extraction.exceptions import ConversionError


# Module-level logger
logger = logging.getLogger(__name__)


class Converter(ABC):
    """Converts a value of the source type to the target type"""

    @property
    @abstractmethod
    def source_type(self) -> type:
        raise NotImplementedError("Subclass needs to implement this method")

    @property
    @abstractmethod
    def target_type(self) -> type:
        raise NotImplementedError("Subclass needs to implement this method")

    @abstractmethod
    def convert(self, source: Any) -> Any:
        raise NotImplementedError("Subclass needs to implement this method")

    def cast_and_convert(self, source: Any) -> Any:
        """
        Check that the value is of the source type and convert it.

        Raises:
            TypeError: If a non-None value is not an instance of the source type
            ConversionError: If the conversion fails
        """
        if source is not None and not isinstance(source, self.source_type):
            raise TypeError(f"Cannot convert {type(source).__name__} with a converter "
                            f"for {self.source_type.__name__}")
        return self.convert(source)


class BaseStringConverter(Converter):
    """Handles trimming and blank values for converters from str"""

    @property
    def source_type(self) -> type:
        return str

    def convert(self, source: str | None) -> Any:
        if source is None:
            return None
        source = source.strip()
        if not source:
            return None
        return self.do_convert(source)

    @abstractmethod
    def do_convert(self, source: str) -> Any:
        """Convert non-blank, trimmed text to the target type"""
        raise NotImplementedError("Subclass needs to implement this method")


class StringConverter(BaseStringConverter):

    @property
    def target_type(self) -> type:
        return str

    def do_convert(self, source: str) -> str:
        return source


class DecimalConverter(BaseStringConverter):
    """
    Converts text to Decimal, removing thousand separators.

    Thousand separators (the configured one or a space) must separate groups
    of exactly three digits. The first group may have one to three digits.
    Grouping is not checked after the decimal separator.

    Examples:
        DECIMAL_POINT.convert("123,456,789.23456") -> Decimal("123456789.23456")
        DECIMAL_COMMA.convert("1.456.789,23456") -> Decimal("1456789.23456")
    """

    def __init__(self, decimal_separator: str, thousand_separator: str):
        if decimal_separator == thousand_separator:
            raise ValueError("Decimal and thousand separator must differ")
        self.decimal_separator = decimal_separator
        self.thousand_separator = thousand_separator

    @property
    def target_type(self) -> type:
        return Decimal

    def do_convert(self, source: str) -> Decimal:
        value = self._remove_thousand_separators(source)
        value = self._replace_decimal_separator(source, value)
        try:
            return Decimal(value)
        except InvalidOperation:
            raise ConversionError(f"Value is not a decimal: {source}")

    def _remove_thousand_separators(self, source: str) -> str:
        chars: list[str] = []
        last_index = -1
        signed = False
        last = len(source) - 1
        for i, c in enumerate(source):
            index = len(chars)
            if c == self.decimal_separator:
                self._validate_group(source, signed, last_index, index, True)
                chars.extend(source[i:])
                return "".join(chars)

            if _is_sign(index, c):
                signed = True
            elif c == self.thousand_separator or c == " ":
                self._validate_group(source, signed, last_index, index, False)
                if i == last:
                    raise ConversionError(f"Value contains invalid thousand separator: {source}")
                last_index = index
                signed = False
                continue
            chars.append(c)

        self._validate_group(source, signed, last_index, len(chars), True)
        return "".join(chars)

    @staticmethod
    def _validate_group(source: str, signed: bool, last_index: int, index: int,
                        ignore_missing: bool) -> None:
        # index is the position of the separator in the value without separators
        lead = 1 if signed else 0
        first_group_invalid = (last_index < 0 and not ignore_missing
                               and (index == lead or index > lead + 3))
        group_invalid = last_index >= 0 and index - last_index != 3
        if first_group_invalid or group_invalid:
            raise ConversionError(f"Value contains invalid thousand separator: {source}")

    def _replace_decimal_separator(self, source: str, value: str) -> str:
        chars = []
        replaced = False
        for i, c in enumerate(value):
            if c == self.decimal_separator:
                if replaced:
                    raise ConversionError(f"Value contains invalid decimal separator: {source}")
                chars.append(".")
                replaced = True
            elif not ("0" <= c <= "9") and not _is_sign(i, c):
                raise ConversionError(f"Value contains invalid characters: {source}")
            else:
                chars.append(c)
        return "".join(chars)


def _is_sign(index: int, c: str) -> bool:
    return index == 0 and c in "+-"


class CurrencyConverter(BaseStringConverter):
    """Accepts exactly three upper-case US-ASCII letters (ISO 4217 code)"""

    CURRENCY_PATTERN = re.compile(r"[A-Z]{3}")

    @property
    def target_type(self) -> type:
        return str

    def do_convert(self, source: str) -> str:
        if not self.CURRENCY_PATTERN.fullmatch(source):
            raise ConversionError(f"Invalid currency: {source}")
        return source


class BaseTemporalConverter(BaseStringConverter):
    """Parses text with a strptime format"""

    def __init__(self, fmt: str):
        self.fmt = fmt

    def do_convert(self, source: str) -> Any:
        try:
            return self.parse(source)
        except ValueError:
            raise ConversionError(
                f'Value cannot be converted to {self.target_type.__name__} with format "{self.fmt}": {source}')

    @abstractmethod
    def parse(self, source: str) -> Any:
        raise NotImplementedError("Subclass needs to implement this method")


class DateConverter(BaseTemporalConverter):

    @property
    def target_type(self) -> type:
        return date

    def parse(self, source: str) -> date:
        return datetime.strptime(source, self.fmt).date()


class TimeConverter(BaseTemporalConverter):

    @property
    def target_type(self) -> type:
        return time

    def parse(self, source: str) -> time:
        return datetime.strptime(source, self.fmt).time()


class DateTimeConverter(BaseTemporalConverter):

    @property
    def target_type(self) -> type:
        return datetime

    def parse(self, source: str) -> datetime:
        return datetime.strptime(source, self.fmt)


STRING = StringConverter()
DECIMAL_POINT = DecimalConverter(".", ",")
DECIMAL_COMMA = DecimalConverter(",", ".")
CURRENCY = CurrencyConverter()
