"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - sample_config.yaml: Sample reporter settings
    - metrics.py: Mock-based metric builders and a fake clock

Usage:
    Import fixtures in test files via pytest fixtures or direct import.
"""
