"""
Test Suite for the Books REST API

Test Organization:
- conftest.py: Shared fixtures (app, client, sample data)
- test_books.py: Tests for the /books endpoints
- test_app.py: Root endpoint, unknown routes, error handlers, request logging
- test_catalog.py: The catalog store and payload validation
- test_config.py: Settings loading and validation

Running Tests:
    pytest
    pytest tests/test_books.py
    pytest -v
"""
