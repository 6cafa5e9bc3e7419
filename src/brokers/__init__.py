"""
Broker statement processors.

This package contains the broker-specific field declarations and processors
that read transaction statements through the extraction engine (DEGIRO).

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""
