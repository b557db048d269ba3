#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Run only pure unit tests (no database)
    python -m pytest tests/ -v -m "not db"

    # Run only database-backed tests
    python -m pytest tests/ -v -m "db"

Database Setup:
    Database tests run against an in-memory SQLite database created per test
    (see the db_engine fixture in tests/conftest.py). No external service is
    needed.
"""

from datetime import datetime, timezone

# Fixed reference time so time-windowed signals are deterministic
REFERENCE_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
