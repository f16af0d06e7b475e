"""
Metric Filters.

A metric filter is a predicate ``(name, metric) -> bool`` deciding whether a
registry entry takes part in a reporting cycle. Entries rejected by the
filter contribute no tuples.
"""

from __future__ import annotations

import re
from typing import Any, Callable

MetricFilter = Callable[[str, Any], bool]


def accept_all(name: str, metric: Any) -> bool:
    """Default filter: every metric is reported."""
    return True


def starts_with(prefix: str) -> MetricFilter:
    """Accept metrics whose name starts with ``prefix``."""

    def _filter(name: str, metric: Any) -> bool:
        return name.startswith(prefix)

    return _filter


def contains(fragment: str) -> MetricFilter:
    """Accept metrics whose name contains ``fragment``."""

    def _filter(name: str, metric: Any) -> bool:
        return fragment in name

    return _filter


def matching(pattern: str) -> MetricFilter:
    """Accept metrics whose name matches the regular expression ``pattern``."""
    compiled = re.compile(pattern)

    def _filter(name: str, metric: Any) -> bool:
        return compiled.search(name) is not None

    return _filter


def all_of(*filters: MetricFilter) -> MetricFilter:
    """Accept metrics accepted by every filter (accept all if none given)."""
    if not filters:
        return accept_all
    if len(filters) == 1:
        return filters[0]

    def _filter(name: str, metric: Any) -> bool:
        return all(f(name, metric) for f in filters)

    return _filter
