#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import os
from collections.abc import Iterable

import pandas as pd

import constants as const
import util
from extraction.csv_extractor import CsvExtractor
from extraction.exceptions import ExtractionError
from extraction.fields import Field, Record


# Module-level logger
logger = logging.getLogger(__name__)


class BaseCSVProcessor:
    """
    Reads a broker statement file with a fixed field schema.

    Subclasses declare the fields of their broker and may override clean()
    to adjust the resulting DataFrame.
    """

    def __init__(self, fields: Iterable[Field], fname: str, skip_count: int = 0,
                 field_separator: str = const.DEFAULT_FIELD_SEPARATOR,
                 encoding: str = const.DEFAULT_ENCODING,
                 max_record_chars: int = const.DEFAULT_MAX_RECORD_CHARS):
        self.extractor = CsvExtractor(field_separator, fields, skip_count, max_record_chars, encoding)
        self.file_path = fname
        self.date_field: Field | None = None
        self.debug = False

    def set_debug(self, debug: bool):
        self.debug = debug

    @property
    def fields(self) -> tuple[Field, ...]:
        return self.extractor.schema.fields

    def read_records(self) -> list[Record]:
        logger.debug(f"Reading records from {self.file_path} with encoding {self.extractor.encoding}")
        with open(self.file_path, "rb") as f:
            try:
                return list(self.extractor.extract_bytes(f))
            except ExtractionError as e:
                logger.error(f"Extraction of {self.file_path} failed: {e}")
                raise

    def to_dataframe(self, records: list[Record]) -> pd.DataFrame:
        columns = [f.name for f in self.fields]
        return pd.DataFrame([record.as_dict() for record in records], columns=columns)

    def clean(self, df) -> pd.DataFrame:
        return df

    def date_range(self, df: pd.DataFrame) -> tuple[str | None, str | None]:
        if self.date_field is None or df.empty:
            return None, None
        dates = df[self.date_field.name].dropna()
        if dates.empty:
            return None, None
        return util.to_db_date(dates.min()), util.to_db_date(dates.max())

    def process(self) -> tuple[pd.DataFrame, str | None, str | None]:
        basename = os.path.basename(self.file_path)
        basename, _ = os.path.splitext(basename)

        logger.info(f"Processing CSV file: {self.file_path}")

        records = self.read_records()
        df = self.to_dataframe(records)
        logger.debug(f"Loaded {len(df)} rows with {len(df.columns)} columns")
        if self.debug:
            df.to_csv(f"{basename}_load.csv", index=False)

        df = self.clean(df)
        if self.debug:
            df.to_csv(f"{basename}_clean.csv", index=False)

        if df.empty:
            logger.info("No transactions to process after cleaning")
            return df, None, None

        start_date, end_date = self.date_range(df)
        logger.info(f"Processed {len(df)} rows from {start_date} to {end_date}")
        return df, start_date, end_date
