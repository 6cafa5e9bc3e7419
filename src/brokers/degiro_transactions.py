#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
from datetime import date, time
from decimal import Decimal

import pandas as pd

import constants as const
from brokers.basecsvprocessor import BaseCSVProcessor
from extraction import conversion
from extraction.conversion import DateConverter, TimeConverter
from extraction.fields import Field, Record, RecordSchema
from transaction import Price, Transaction


# Module-level logger
logger = logging.getLogger(__name__)


class DegiroTransactionFields:
    """Columns of the DEGIRO Transactions.csv export"""

    DATE = Field("DATE", 0, date, False, DateConverter("%d-%m-%Y"))
    TIME = Field("TIME", 1, time, False, TimeConverter("%H:%M"))
    NAME = Field("NAME", 2, str, False, conversion.STRING)
    ISIN = Field("ISIN", 3, str, False, conversion.STRING)
    EXCHANGE = Field("EXCHANGE", 4, str, False, conversion.STRING)
    EXECUTION_CENTER = Field("EXECUTION_CENTER", 5, str, True, conversion.STRING)
    QUANTITY = Field("QUANTITY", 6, Decimal, False, conversion.DECIMAL_POINT)
    PRICE_PER_UNIT = Field("PRICE_PER_UNIT", 7, Decimal, False, conversion.DECIMAL_POINT)
    PRICE_PER_UNIT_CURRENCY = Field("PRICE_PER_UNIT_CURRENCY", 8, str, False, conversion.CURRENCY)
    LOCAL_VALUE = Field("LOCAL_VALUE", 9, Decimal, False, conversion.DECIMAL_POINT)
    LOCAL_VALUE_CURRENCY = Field("LOCAL_VALUE_CURRENCY", 10, str, False, conversion.CURRENCY)
    VALUE = Field("VALUE", 11, Decimal, False, conversion.DECIMAL_POINT)
    VALUE_CURRENCY = Field("VALUE_CURRENCY", 12, str, False, conversion.CURRENCY)
    EXCHANGE_RATE = Field("EXCHANGE_RATE", 13, Decimal, False, conversion.DECIMAL_POINT)
    COSTS = Field("COSTS", 14, Decimal, True, conversion.DECIMAL_POINT)
    COSTS_CURRENCY = Field("COSTS_CURRENCY", 15, str, True, conversion.CURRENCY)
    TOTAL = Field("TOTAL", 16, Decimal, False, conversion.DECIMAL_POINT)
    TOTAL_CURRENCY = Field("TOTAL_CURRENCY", 17, str, False, conversion.CURRENCY)
    ORDER_ID = Field("ORDER_ID", 18, str, True, conversion.STRING)

    FIELDS = frozenset([
        DATE, TIME, NAME, ISIN, EXCHANGE, EXECUTION_CENTER, QUANTITY, PRICE_PER_UNIT,
        PRICE_PER_UNIT_CURRENCY, LOCAL_VALUE, LOCAL_VALUE_CURRENCY, VALUE, VALUE_CURRENCY,
        EXCHANGE_RATE, COSTS, COSTS_CURRENCY, TOTAL, TOTAL_CURRENCY, ORDER_ID,
    ])

    @classmethod
    def fields(cls) -> frozenset[Field]:
        return cls.FIELDS


class DegiroTransactions(BaseCSVProcessor):
    def __init__(self, fname: str, skip_count: int = 1, encoding: str = const.DEFAULT_ENCODING,
                 max_record_chars: int = const.DEFAULT_MAX_RECORD_CHARS):
        super().__init__(DegiroTransactionFields.fields(), fname, skip_count,
                         encoding=encoding, max_record_chars=max_record_chars)
        self.date_field = DegiroTransactionFields.DATE

    @classmethod
    def field_schema(cls) -> RecordSchema:
        return RecordSchema(DegiroTransactionFields.fields())

    def clean(self, df) -> pd.DataFrame:
        df = df.copy()
        df["ISIN"] = df["ISIN"].str.upper()
        return df

    def transactions(self) -> list[Transaction]:
        result = [self.to_transaction(record) for record in self.read_records()]
        logger.info(f"Built {len(result)} transactions from {self.file_path}")
        return result

    @staticmethod
    def to_transaction(record: Record) -> Transaction:
        f = DegiroTransactionFields

        def price(value_field: Field, currency_field: Field) -> Price | None:
            value = record.get_value(value_field)
            currency = record.get_value(currency_field)
            if value is None or currency is None:
                return None
            return Price(value=value, currency=currency)

        return Transaction(
            trade_date=record.get_value(f.DATE),
            trade_time=record.get_value(f.TIME),
            name=record.get_value(f.NAME),
            isin=record.get_value(f.ISIN),
            exchange=record.get_value(f.EXCHANGE),
            execution_center=record.get_value(f.EXECUTION_CENTER),
            quantity=record.get_value(f.QUANTITY),
            local_price=price(f.PRICE_PER_UNIT, f.PRICE_PER_UNIT_CURRENCY),
            local_value=price(f.LOCAL_VALUE, f.LOCAL_VALUE_CURRENCY),
            value=price(f.VALUE, f.VALUE_CURRENCY),
            exchange_rate=record.get_value(f.EXCHANGE_RATE),
            commission=price(f.COSTS, f.COSTS_CURRENCY),
            total=price(f.TOTAL, f.TOTAL_CURRENCY),
            order_id=record.get_value(f.ORDER_ID),
        )
