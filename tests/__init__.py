#!/usr/bin/env python3
"""
Test suite.

All tests run without external services: the database is in-memory SQLite
and every network client (OpenAI, Resend, résumé downloads) is mocked.

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v
"""
