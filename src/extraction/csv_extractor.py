#!/usr/bin/env python3
"""
CSV extraction engine.

Extracts CSV character streams to record iterators. The format of the records
is fixed: all fields and their columns (the ordinal of the field) must be known
before extraction. Values may be enclosed in double quotes, enclosed values may
contain separators, escaped quotes ("") and line breaks.

Records are read lazily, one character at a time, only when the next record is
requested. A blank line ends the data of a stream, no further data lines may
follow it.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import codecs
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any, BinaryIO, NamedTuple, TextIO

import constants as const
from extraction.exceptions import ConversionError, CsvExtractionError, ExtractionDataAccessError
from extraction.fields import Field, Record, RecordSchema


# Module-level logger
logger = logging.getLogger(__name__)

CR_CHAR = "\r"
NL_CHAR = "\n"
ENCLOSE_CHAR = '"'


class Extractor(ABC):
    """Extracts records from binary or text streams"""

    def reader_supported(self) -> bool:
        """Whether extract() accepts text streams. Otherwise only extract_bytes() is supported."""
        return False

    @abstractmethod
    def extract_bytes(self, stream: BinaryIO) -> Iterator[Record]:
        raise NotImplementedError("Subclass needs to implement this method")

    def extract(self, reader: TextIO) -> Iterator[Record]:
        raise NotImplementedError("Extraction from text streams is not supported")


class CsvExtractor(Extractor):
    """
    Extracts records of a fixed schema from CSV.

    The extractor holds configuration only and can be shared. Each call of
    extract() returns an independent iterator that must be consumed by a
    single consumer.

    Args:
        field_separator: Field separator character (e.g. , or ;)
        fields: Fields of the records
        skip_count: Number of rows skipped at the beginning (e.g. header)
        max_record_chars: Maximum number of characters of a single record
        encoding: Encoding used to decode binary streams. Decoding is strict,
            malformed input raises ExtractionDataAccessError.
    """

    def __init__(self, field_separator: str = const.DEFAULT_FIELD_SEPARATOR,
                 fields: Iterable[Field] = (), skip_count: int = 0,
                 max_record_chars: int = const.DEFAULT_MAX_RECORD_CHARS,
                 encoding: str = const.DEFAULT_ENCODING):
        if len(field_separator) != 1 or field_separator in (NL_CHAR, CR_CHAR, ENCLOSE_CHAR):
            raise ValueError(f"Field separator is invalid: {field_separator!r}")
        if skip_count < 0:
            raise ValueError(f"Skip count must not be negative: {skip_count}")
        if max_record_chars <= 0:
            raise ValueError(f"Maximum record characters must be positive: {max_record_chars}")
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {encoding}")

        self.field_separator = field_separator
        self.skip_count = skip_count
        self.max_record_chars = max_record_chars
        self.encoding = encoding
        self.schema = RecordSchema(fields)

        # One slot per ordinal; gaps stay None
        self.field_count = self.schema.max_ordinal + 1
        self.slots: list[Field | None] = [None] * self.field_count
        for f in self.schema:
            if f.converter is None and not issubclass(str, f.type):
                raise ValueError(f"Field {f.name} of type {f.type.__name__} requires a converter")
            self.slots[f.ordinal] = f

    def reader_supported(self) -> bool:
        return True

    def extract_bytes(self, stream: BinaryIO) -> Iterator[Record]:
        """Decode the binary stream with the configured encoding and extract its records"""
        return self.extract(_DecodingReader(stream, self.encoding))

    def extract(self, reader: TextIO) -> Iterator[Record]:
        """
        Extract the CSV records of the text stream.

        Iterating raises ExtractionDataAccessError if reading the stream fails
        and CsvExtractionError if the CSV contains invalid data.
        """
        csv_reader = _CsvReader(self, reader)
        while (record := csv_reader.read_record()) is not None:
            yield record
        logger.info(f"Extracted {csv_reader.record_no} records from {csv_reader.line_no} lines")


class _DecodingReader:
    """
    Strict decoding of a binary stream. Bytes are pulled one at a time so no
    more input is consumed than needed for the next character.
    """

    def __init__(self, stream: BinaryIO, encoding: str):
        self.stream = stream
        self.decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        self.pending = ""
        self.eof = False

    def read(self, size: int = 1) -> str:
        while len(self.pending) < size and not self.eof:
            data = self.stream.read(1)
            if not data:
                self.eof = True
                self.pending += self.decoder.decode(b"", final=True)
            else:
                self.pending += self.decoder.decode(data)
        result = self.pending[:size]
        self.pending = self.pending[size:]
        return result


class _RawValue(NamedTuple):
    text: str
    line_no: int
    line_pos: int


class _CsvReader:
    """Cursor state of a single extraction"""

    def __init__(self, extractor: CsvExtractor, reader: TextIO):
        self.extractor = extractor
        self.reader = reader
        self.eof = False
        # Blank line seen, only blank lines may follow
        self.finished = False
        self.skipped_count = 0
        self.record_no = 0
        self.line_no = 0
        self.line_pos = 0
        self.line_break = True
        self.last_cr = False
        self.data = False

    def read_record(self) -> Record | None:
        while self.skipped_count < self.extractor.skip_count:
            if self._read_row(False) is None:
                return None
            self.skipped_count += 1
            logger.debug(f"Skipped header row {self.skipped_count} ending at line {self.line_no}")

        raw_values = self._read_row(True)
        if raw_values is None:
            return None
        values = self._convert(raw_values)
        self.record_no += 1
        return Record(self.extractor.schema, values)

    def _read_row(self, data: bool) -> list[_RawValue] | None:
        """Tokenize the next row. Returns None at the end of the data."""
        self.data = data
        separator = self.extractor.field_separator
        value: list[str] = []
        raw_values: list[_RawValue] = []
        enclosed = False
        last_enclose_char = False
        field_index = 0
        field_pos = 0
        record_pos = 0

        while True:
            c = self._read()
            if not c:
                return self._handle_eof(value, raw_values, enclosed, last_enclose_char, field_index)

            coalesced = self._advance(c)
            if coalesced and record_pos == 0:
                # LF of the CRLF that terminated the previous row
                continue
            record_pos += 1
            field_pos += 1
            if record_pos > self.extractor.max_record_chars:
                raise self._error(field_index, None,
                                  f"Record exceeds {self.extractor.max_record_chars} characters")

            if c == CR_CHAR or c == NL_CHAR:
                if enclosed and not last_enclose_char:
                    if not coalesced:
                        value.append(NL_CHAR)
                    continue
                if self._is_empty_line(value, field_index):
                    logger.debug(f"Blank line {self.line_no} ends the data")
                    self.finished = True
                    value.clear()
                    enclosed = last_enclose_char = False
                    field_pos = record_pos = 0
                    continue
                self._verify_field_count(field_index)
                self._end_field(value, raw_values, field_index)
                return raw_values

            if c == ENCLOSE_CHAR and (enclosed or field_pos == 1):
                if field_pos == 1:
                    enclosed = True
                elif last_enclose_char:
                    value.append(ENCLOSE_CHAR)
                    last_enclose_char = False
                else:
                    last_enclose_char = True
            elif c == separator and (not enclosed or last_enclose_char):
                self._end_field(value, raw_values, field_index)
                enclosed = last_enclose_char = False
                field_index += 1
                field_pos = 0
            else:
                if enclosed and last_enclose_char:
                    raise self._error(field_index, None, "Field has not been enclosed properly")
                value.append(c)

    def _handle_eof(self, value: list[str], raw_values: list[_RawValue], enclosed: bool,
                    last_enclose_char: bool, field_index: int) -> list[_RawValue] | None:
        if self._is_empty_line(value, field_index):
            return None
        if enclosed and not last_enclose_char:
            raise self._error(field_index, None, "Field has not been enclosed properly")
        self._verify_field_count(field_index)
        self._end_field(value, raw_values, field_index)
        return raw_values

    def _advance(self, c: str) -> bool:
        """
        Update the line position for the character. Returns True if the
        character is the LF of a CRLF pair, which belongs to the line break
        started by the CR.
        """
        if self.last_cr and c == NL_CHAR:
            self.last_cr = False
            self.line_pos += 1
            return True
        if self.line_break:
            self.line_no += 1
            self.line_pos = 0
            self.line_break = False
        self.line_pos += 1
        self.last_cr = c == CR_CHAR
        self.line_break = c == CR_CHAR or c == NL_CHAR
        return False

    @staticmethod
    def _is_empty_line(value: list[str], field_index: int) -> bool:
        return field_index == 0 and not "".join(value).strip()

    def _verify_field_count(self, field_index: int) -> None:
        if self.finished:
            raise self._error(field_index, None, f"No more data expected in line {self.line_no}")
        if field_index + 1 < self.extractor.field_count:
            raise self._error(field_index, None,
                              f"Record contains {field_index + 1} instead of "
                              f"{self.extractor.field_count} fields")

    def _end_field(self, value: list[str], raw_values: list[_RawValue], field_index: int) -> None:
        if self.data and field_index < self.extractor.field_count:
            raw_values.append(_RawValue("".join(value), self.line_no, self.line_pos))
        value.clear()

    def _convert(self, raw_values: list[_RawValue]) -> list[Any]:
        values: list[Any] = [None] * self.extractor.field_count
        for index, raw in enumerate(raw_values):
            field = self.extractor.slots[index]
            if field is None:
                continue
            field_no = index + 1
            record_no = self.record_no + 1
            try:
                result = field.convert(raw.text)
            except ConversionError as e:
                raise CsvExtractionError(
                    record_no, raw.line_no, field_no, raw.line_pos, raw.text,
                    f"Field {field_no} in record {record_no} contains invalid value: {raw.text}") from e
            if result is None and not field.nullable:
                raise CsvExtractionError(
                    record_no, raw.line_no, field_no, raw.line_pos, raw.text,
                    f"Non-nullable field {field_no} in record {record_no} contains null value")
            values[index] = result
        return values

    def _error(self, field_index: int, invalid_value: str | None, message: str) -> CsvExtractionError:
        # Header rows are not records and are reported as record 0
        record_no = self.record_no + 1 if self.data else 0
        return CsvExtractionError(record_no, self.line_no, field_index + 1, self.line_pos,
                                  invalid_value, message)

    def _read(self) -> str:
        if self.eof:
            return ""
        try:
            c = self.reader.read(1)
        except (OSError, UnicodeError) as e:
            raise ExtractionDataAccessError("Error when reading input stream") from e
        if not c:
            self.eof = True
        return c
