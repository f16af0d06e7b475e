"""
Name Resolver - Dotted Metric Name Construction.

Turns a raw registry name into the final metric name:

    1. Optionally keep only the last N dot-separated segments
    2. Prepend the configured prefix
    3. Append the kind-specific suffix (e.g. "count", "p99")

Example:
    >>> resolve_name("package.class.counter", "prefix", 2, "count")
    'prefix.class.counter.count'
"""

from __future__ import annotations

from typing import Optional

from tsdb_reporter.domain.errors import ConfigurationError


def trim_path(name: str, keep_path_segments: int) -> str:
    """
    Keep only the trailing ``keep_path_segments`` segments of a dotted name.

    A count of 0 leaves the name untouched, as does a name with no more
    segments than the count.

    Raises:
        ConfigurationError: If keep_path_segments is negative
    """
    if keep_path_segments < 0:
        raise ConfigurationError(
            f"keep_path_segments must be >= 0, got {keep_path_segments}"
        )
    if keep_path_segments == 0:
        return name

    segments = name.split(".")
    if len(segments) <= keep_path_segments:
        return name
    return ".".join(segments[-keep_path_segments:])


def join_name(*parts: Optional[str]) -> str:
    """Join non-empty parts with dots."""
    return ".".join(part for part in parts if part)


def resolve_name(
    name: str,
    prefix: str = "",
    keep_path_segments: int = 0,
    *suffixes: str,
) -> str:
    """
    Compute the final dotted metric name.

    Args:
        name: Raw registry name
        prefix: Prefix prepended with a dot (nothing added when empty)
        keep_path_segments: Trailing segments of ``name`` to keep (0 = all)
        suffixes: Kind-specific suffixes appended with dots

    Returns:
        Resolved metric name
    """
    return join_name(prefix, trim_path(name, keep_path_segments), *suffixes)


class NameResolver:
    """Resolves names with a fixed prefix and trim count."""

    def __init__(self, prefix: str = "", keep_path_segments: int = 0) -> None:
        if keep_path_segments < 0:
            raise ConfigurationError(
                f"keep_path_segments must be >= 0, got {keep_path_segments}"
            )
        self.prefix = prefix
        self.keep_path_segments = keep_path_segments

    def base_name(self, name: str) -> str:
        """Prefixed and trimmed name, without any suffix."""
        return join_name(self.prefix, trim_path(name, self.keep_path_segments))

    def resolve(self, name: str, *suffixes: str) -> str:
        """Prefixed, trimmed and suffixed name."""
        return join_name(self.base_name(name), *suffixes)
