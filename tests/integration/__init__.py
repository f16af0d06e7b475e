"""
Integration Tests - End-to-End Reporting Tests.

These tests wire settings, the in-memory registry, the reporter and the
HTTP sender together. The HTTP client runs on httpx.MockTransport so no
server is needed.

Test Files:
    - test_reporting_end_to_end.py: Full reporting workflow
"""
