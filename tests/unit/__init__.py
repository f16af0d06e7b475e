"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested with stubbed metrics, a fake clock and a
recording sender. Unit tests should be fast and deterministic.

Test Files:
    - test_name_resolver.py: Prefix, trimming and suffix joining
    - test_snapshot_formatter.py: Per-kind tuple projection and unit scaling
    - test_reporter.py: Cycle driver, filtering and batching
    - test_config_loader.py: Configuration loading/validation
"""
