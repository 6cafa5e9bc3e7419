#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""


class ExtractionError(Exception):
    """Base class of all errors raised while extracting records"""


class ExtractionDataAccessError(ExtractionError):
    """The underlying stream or decoder could not deliver characters"""


class ConversionError(ValueError):
    """A text value cannot be converted to the type of a field"""


class CsvExtractionError(ExtractionError):
    """
    The CSV content is invalid. Either the framing is broken or a value does
    not match the type of its field.

    Args:
        record_no: One-based record number that caused the issue
        line_no: One-based physical line number
        field_no: One-based field number within the record
        line_pos: One-based character position within the line
        invalid_value: The raw field text, if the issue is tied to a value
        message: Description of the issue
    """

    def __init__(self, record_no: int, line_no: int, field_no: int, line_pos: int,
                 invalid_value: str | None, message: str):
        super().__init__(message)
        self.record_no = record_no
        self.line_no = line_no
        self.field_no = field_no
        self.line_pos = line_pos
        self.invalid_value = invalid_value
        self.message = message

    def __str__(self) -> str:
        location = (f"at record number {self.record_no} at line number {self.line_no} "
                    f"at field number {self.field_no} at line position {self.line_pos}")
        if self.invalid_value is not None:
            location += f' with invalid value "{self.invalid_value}"'
        return f"{location} : {self.message}"
