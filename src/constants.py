#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import os
import pathlib

from dotenv import load_dotenv


load_dotenv()

PROJECT_ROOT = pathlib.Path(__file__).parent.parent.absolute()

# Logging
LOG_FILE = os.getenv("LOG_FILE", "extract.log")
CLI_LOG_FILE = os.getenv("CLI_LOG_FILE", "cmds.log")
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

# App Version
VERSION = 0.9

# EXTRACTION
# Latin-1 maps every byte to a character, decoding never fails
DEFAULT_ENCODING = os.getenv("EXTRACT_ENCODING", "latin-1")
DEFAULT_MAX_RECORD_CHARS = int(os.getenv("EXTRACT_MAX_RECORD_CHARS", "65536"))
DEFAULT_FIELD_SEPARATOR = ","

# BROKERS
SUPPORTED_BROKERS = ("degiro",)
DB_DATE_FORMAT = "%Y-%m-%d"
