"""
Tests Package - Unit Tests

Test structure:
- tests/conftest.py - fakes for the HTTP session, fixed clock, sample payloads
- tests/test_*.py - one module per pipeline stage, plus end-to-end probe runs
"""
