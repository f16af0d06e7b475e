"""
Core Domain Entities.

This module defines the units the reporter produces: the flat output tuple
sent to the time-series database and the summary of one reporting cycle.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Tuple

from pydantic import BaseModel, Field


class MetricKind(str, Enum):
    """The five kinds of metric held by a registry."""

    GAUGE = "gauge"
    COUNTER = "counter"
    HISTOGRAM = "histogram"
    METER = "meter"
    TIMER = "timer"


def _hashable(value: Any) -> Any:
    """Value itself if hashable, otherwise a canonical JSON rendering of it."""
    try:
        hash(value)
    except TypeError:
        return ("__json__", json.dumps(value, sort_keys=True, default=repr))
    return value


class OutputTuple(BaseModel):
    """One data point destined for the time-series database."""

    metric: str = Field(..., description="Fully resolved dotted metric name")
    timestamp: int = Field(..., description="Epoch seconds")
    value: Any = Field(..., description="Metric value, integral or floating")
    tags: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def _identity(self) -> Tuple[str, int, Any, FrozenSet[Tuple[str, str]]]:
        return (
            self.metric,
            self.timestamp,
            _hashable(self.value),
            frozenset(self.tags.items()),
        )

    def __hash__(self) -> int:
        return hash(self._identity())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutputTuple):
            return NotImplemented
        return self._identity() == other._identity()

    def to_payload(self) -> Dict[str, Any]:
        """Render as an OpenTSDB /api/put data point."""
        return {
            "metric": self.metric,
            "timestamp": self.timestamp,
            "value": self.value,
            "tags": dict(self.tags),
        }

    def __str__(self) -> str:
        tags = " ".join(f"{k}={v}" for k, v in sorted(self.tags.items()))
        return f"{self.metric} {self.timestamp} {self.value} {tags}".rstrip()


class CycleResult(BaseModel):
    """Summary of one reporting cycle."""

    timestamp: int
    tuples: FrozenSet[OutputTuple] = Field(default_factory=frozenset)
    batches: List[List[OutputTuple]] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def tuple_count(self) -> int:
        return len(self.tuples)

    @property
    def batch_count(self) -> int:
        return len(self.batches)
