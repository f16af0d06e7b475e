"""
Test Suite for TSDB Reporter.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Registry-to-transport tests
    - fixtures/: Shared test doubles and sample settings

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest --cov=src/tsdb_reporter          # With coverage
"""
