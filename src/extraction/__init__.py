"""
Record extraction from delimited broker statements.

This package contains the typed field/record model, the value converters and
the CSV extraction engine that turns a character stream into schema-validated
records.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""
