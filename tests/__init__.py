"""
Test suite for the Jewelry Price Manager.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_change_set_service.py -v
"""
