#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import sys
import os
# Add src to path for imports (needed when running test file directly)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import unittest
from datetime import date, datetime, time
from decimal import Decimal

from extraction import conversion
from extraction.conversion import DateConverter, DateTimeConverter, TimeConverter
from extraction.exceptions import ConversionError


class TestStringConverter(unittest.TestCase):
    def test_types(self):
        self.assertIs(conversion.STRING.source_type, str)
        self.assertIs(conversion.STRING.target_type, str)

    def test_none(self):
        self.assertIsNone(conversion.STRING.convert(None))

    def test_blank(self):
        self.assertIsNone(conversion.STRING.convert("   "))

    def test_trim(self):
        self.assertEqual(conversion.STRING.convert("  Value 1 "), "Value 1")

    def test_cast_and_convert(self):
        self.assertEqual(conversion.STRING.cast_and_convert(" abc"), "abc")

    def test_cast_and_convert_none(self):
        self.assertIsNone(conversion.STRING.cast_and_convert(None))

    def test_cast_and_convert_wrong_type(self):
        with self.assertRaises(TypeError):
            conversion.STRING.cast_and_convert(12)


class TestDecimalConverter(unittest.TestCase):
    """Thousand and decimal separator handling"""

    def test_types(self):
        self.assertIs(conversion.DECIMAL_POINT.source_type, str)
        self.assertIs(conversion.DECIMAL_COMMA.target_type, Decimal)

    def test_none(self):
        self.assertIsNone(conversion.DECIMAL_POINT.convert(None))

    def test_blank(self):
        self.assertIsNone(conversion.DECIMAL_COMMA.convert(" "))

    def test_comma_thousand(self):
        self.assertEqual(conversion.DECIMAL_POINT.convert("123,456,789.23456"), Decimal("123456789.23456"))

    def test_point_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("123.456.789,23456"), Decimal("123456789.23456"))

    def test_space_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("123 456 789,23456"), Decimal("123456789.23456"))

    def test_trim(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("    123456789,23456 "), Decimal("123456789.23456"))

    def test_thousand_without_decimal_separator(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("123.456.789"), Decimal("123456789"))

    def test_no_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("123456789"), Decimal("123456789"))

    def test_negative_no_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("-123456789"), Decimal("-123456789"))

    def test_no_thousand_with_decimal_separator(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("123456789,23456"), Decimal("123456789.23456"))

    def test_one_digit_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("1.456.789,23456"), Decimal("1456789.23456"))

    def test_negative_one_digit_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("-1.456.789,23456"), Decimal("-1456789.23456"))

    def test_positive_one_digit_thousand(self):
        self.assertEqual(conversion.DECIMAL_COMMA.convert("+1.456.789,23456"), Decimal("1456789.23456"))

    def test_fraction_only(self):
        self.assertEqual(conversion.DECIMAL_POINT.convert(".5"), Decimal("0.5"))

    def test_invalid_values(self):
        invalid = [
            (conversion.DECIMAL_COMMA, ".456.789,23456"),       # missing first group
            (conversion.DECIMAL_COMMA, "1234.456.789,23456"),   # first group too long
            (conversion.DECIMAL_COMMA, "123.4567.789,23456"),   # second group too long
            (conversion.DECIMAL_COMMA, "123.45.789,23456"),     # second group too short
            (conversion.DECIMAL_COMMA, "123.456.78,23456"),     # last group too short
            (conversion.DECIMAL_COMMA, "123.456.789."),         # trailing separator
            (conversion.DECIMAL_COMMA, "123.456.78"),           # last group too short, no fraction
            (conversion.DECIMAL_COMMA, "123.456.789,234,56"),   # two decimal separators
            (conversion.DECIMAL_POINT, "1.234.5"),              # two decimal separators
            (conversion.DECIMAL_POINT, "123,456.,789,,"),
            (conversion.DECIMAL_POINT, "1.23345353454567E16"),
            (conversion.DECIMAL_POINT, "-,123"),
            (conversion.DECIMAL_POINT, "12a"),
            (conversion.DECIMAL_POINT, "-"),
            (conversion.DECIMAL_POINT, "NaN"),
        ]
        for converter, value in invalid:
            with self.subTest(value=value):
                with self.assertRaises(ConversionError):
                    converter.convert(value)

    def test_reformat_is_stable(self):
        """Parsing the canonical form of a parsed value yields the same value"""
        for value in ["123,456,789.23456", "-1,000", "+42.10", "7", "0.000001"]:
            with self.subTest(value=value):
                parsed = conversion.DECIMAL_POINT.convert(value)
                self.assertEqual(conversion.DECIMAL_POINT.convert(str(parsed)), parsed)

    def test_same_separators_fail(self):
        with self.assertRaises(ValueError):
            conversion.DecimalConverter(".", ".")


class TestCurrencyConverter(unittest.TestCase):
    def test_trim(self):
        self.assertEqual(conversion.CURRENCY.convert(" EUR "), "EUR")

    def test_blank(self):
        self.assertIsNone(conversion.CURRENCY.convert("  "))

    def test_lower_case_fail(self):
        with self.assertRaises(ConversionError):
            conversion.CURRENCY.convert("eur")

    def test_too_short_fail(self):
        with self.assertRaises(ConversionError):
            conversion.CURRENCY.convert("EU")

    def test_too_long_fail(self):
        with self.assertRaises(ConversionError):
            conversion.CURRENCY.convert("EURO")

    def test_non_ascii_fail(self):
        with self.assertRaises(ConversionError):
            conversion.CURRENCY.convert("ÄUR")


class TestTemporalConverters(unittest.TestCase):
    def test_date(self):
        converter = DateConverter("%d-%m-%Y")
        self.assertIs(converter.target_type, date)
        self.assertEqual(converter.convert(" 14-03-2022 "), date(2022, 3, 14))

    def test_date_blank(self):
        self.assertIsNone(DateConverter("%d-%m-%Y").convert(""))

    def test_date_invalid_fail(self):
        with self.assertRaises(ConversionError):
            DateConverter("%d-%m-%Y").convert("14-17-2022")

    def test_time(self):
        converter = TimeConverter("%H:%M")
        self.assertIs(converter.target_type, time)
        self.assertEqual(converter.convert("14:43"), time(14, 43))

    def test_time_invalid_fail(self):
        with self.assertRaises(ConversionError):
            TimeConverter("%H:%M").convert("25:00")

    def test_datetime(self):
        converter = DateTimeConverter("%d-%m-%Y %H:%M:%S")
        self.assertIs(converter.target_type, datetime)
        self.assertEqual(converter.convert("14-03-2022 14:43:34"), datetime(2022, 3, 14, 14, 43, 34))

    def test_datetime_pattern_mismatch_fail(self):
        converter = DateTimeConverter("%d-%m-%Y %H:%M:%S")
        with self.assertRaises(ConversionError):
            converter.convert("2022-03-14T14:43:34")


if __name__ == '__main__':
    unittest.main()
