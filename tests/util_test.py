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
import tempfile
import logging
from datetime import date
from util import to_db_date, get_logger, set_log_level, setup_logger


class TestToDbDate(unittest.TestCase):
    def test_date(self):
        self.assertEqual(to_db_date(date(2022, 7, 20)), "2022-07-20")

    def test_none(self):
        self.assertIsNone(to_db_date(None))


class TestLoggerFunctions(unittest.TestCase):
    """Test logging utility functions"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.log_file = os.path.join(self.tmpdir.name, "test.log")

    def tearDown(self):
        for name in ('test_setup', 'test_dup', 'test_console'):
            test_logger = logging.getLogger(name)
            for handler in test_logger.handlers:
                handler.close()
            test_logger.handlers.clear()
        self.tmpdir.cleanup()

    def test_get_logger(self):
        """Test get_logger() returns a logger"""
        logger = get_logger('test_module')
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(logger.name, 'test_module')

    def test_setup_logger_with_name(self):
        """Test setup_logger() with explicit name"""
        logging.getLogger('test_setup').handlers.clear()

        logger = setup_logger('test_setup', level='DEBUG', console=False, log_file=self.log_file)
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(logger.name, 'test_setup')
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)

        logger.info("Extracted 2 records")
        logger.handlers[0].flush()
        with open(self.log_file, encoding="utf-8") as f:
            self.assertIn("Extracted 2 records", f.read())

    def test_setup_logger_with_console(self):
        logging.getLogger('test_console').handlers.clear()

        logger = setup_logger('test_console', level='WARNING', console=True, log_file=self.log_file)
        self.assertEqual(len(logger.handlers), 2)

    def test_setup_logger_prevents_duplicate_handlers(self):
        """Test that setup_logger doesn't add duplicate handlers"""
        logging.getLogger('test_dup').handlers.clear()

        # First call
        logger1 = setup_logger('test_dup', level='INFO', console=False, log_file=self.log_file)
        handler_count_1 = len(logger1.handlers)

        # Second call should return same logger without adding handlers
        logger2 = setup_logger('test_dup', level='INFO', console=False, log_file=self.log_file)
        handler_count_2 = len(logger2.handlers)

        self.assertEqual(handler_count_1, handler_count_2)

    def test_set_log_level(self):
        """Test set_log_level() changes log level"""
        root_logger = logging.getLogger()
        original_level = root_logger.level

        # Change to DEBUG
        set_log_level('DEBUG')
        self.assertEqual(root_logger.level, logging.DEBUG)

        # Change to WARNING
        set_log_level('WARNING')
        self.assertEqual(root_logger.level, logging.WARNING)

        # Restore original level
        root_logger.setLevel(original_level)


if __name__ == '__main__':
    unittest.main()
