"""
Test suite for statement extraction

This package contains all unit tests for the extraction engine and the broker
processors. Tests are organized to mirror the source code structure in src/.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import sys
import os

# Add src directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))
