"""
Formatting Package - Name Resolution and Snapshot Projection.

Components:
    - NameResolver / resolve_name: prefix, path trimming and suffixes
    - SnapshotFormatter: per-kind projection of a metric into output tuples
"""

from tsdb_reporter.formatting.name_resolver import NameResolver, resolve_name, trim_path
from tsdb_reporter.formatting.snapshot_formatter import (
    RATE_SUFFIXES,
    SNAPSHOT_SUFFIXES,
    SnapshotFormatter,
)

__all__ = [
    "NameResolver",
    "resolve_name",
    "trim_path",
    "RATE_SUFFIXES",
    "SNAPSHOT_SUFFIXES",
    "SnapshotFormatter",
]
