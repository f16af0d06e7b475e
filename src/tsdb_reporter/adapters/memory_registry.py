"""
In-Memory Metric Registry.

A thread-safe registry and the five metric kinds it holds:

    - Counter: inc/dec integer accumulator
    - FunctionGauge: value read from a callable at report time
    - Histogram: uniform reservoir sample of observed values
    - Meter: mean rate plus 1/5/15-minute exponentially weighted rates
    - Timer: histogram of nanosecond durations plus a meter of events

Design Notes:
    - Names are unique across kinds
    - get_* accessors return name-sorted copies, safe to iterate while
      other threads keep recording
    - Meters and timers read elapsed time from the injected clock
"""

from __future__ import annotations

import logging
import math
import random
from contextlib import contextmanager
from threading import Lock, RLock
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from tsdb_reporter.adapters.clock import DEFAULT_CLOCK
from tsdb_reporter.domain.entities import MetricKind
from tsdb_reporter.interfaces.clock import ClockProtocol

logger = logging.getLogger(__name__)

DEFAULT_RESERVOIR_SIZE = 1028
TICK_INTERVAL_NANOS = 5 * 1_000_000_000
_NANOS_PER_SECOND = 1_000_000_000


class UniformSnapshot:
    """Statistical view of a fixed sample of values."""

    def __init__(self, values: Sequence[float]) -> None:
        self._values: List[float] = sorted(values)

    def get_value(self, quantile: float) -> float:
        """
        Value at the given quantile, interpolated between neighbours.

        Raises:
            ValueError: If quantile is outside [0, 1]
        """
        if not 0.0 <= quantile <= 1.0 or math.isnan(quantile):
            raise ValueError(f"{quantile} is not in [0..1]")
        if not self._values:
            return 0.0

        pos = quantile * (len(self._values) + 1)
        index = int(pos)
        if index < 1:
            return float(self._values[0])
        if index >= len(self._values):
            return float(self._values[-1])

        lower = self._values[index - 1]
        upper = self._values[index]
        return lower + (pos - math.floor(pos)) * (upper - lower)

    def size(self) -> int:
        return len(self._values)

    def get_values(self) -> List[float]:
        return list(self._values)

    def get_max(self) -> Any:
        return self._values[-1] if self._values else 0

    def get_min(self) -> Any:
        return self._values[0] if self._values else 0

    def get_mean(self) -> float:
        if not self._values:
            return 0.0
        return sum(self._values) / len(self._values)

    def get_std_dev(self) -> float:
        """Sample standard deviation."""
        n = len(self._values)
        if n <= 1:
            return 0.0
        mean = self.get_mean()
        variance = sum((v - mean) ** 2 for v in self._values) / (n - 1)
        return math.sqrt(variance)

    def get_median(self) -> float:
        return self.get_value(0.5)

    def get_75th_percentile(self) -> float:
        return self.get_value(0.75)

    def get_95th_percentile(self) -> float:
        return self.get_value(0.95)

    def get_98th_percentile(self) -> float:
        return self.get_value(0.98)

    def get_99th_percentile(self) -> float:
        return self.get_value(0.99)

    def get_999th_percentile(self) -> float:
        return self.get_value(0.999)


class UniformReservoir:
    """Fixed-size uniform sample of a stream (Vitter's algorithm R)."""

    def __init__(
        self,
        size: int = DEFAULT_RESERVOIR_SIZE,
        rng: Optional[random.Random] = None,
    ) -> None:
        if size < 1:
            raise ValueError(f"Reservoir size must be >= 1, got {size}")
        self._size = size
        self._values: List[float] = []
        self._count = 0
        self._rng = rng or random.Random()
        self._lock = Lock()

    def update(self, value: float) -> None:
        with self._lock:
            self._count += 1
            if len(self._values) < self._size:
                self._values.append(value)
            else:
                r = self._rng.randrange(self._count)
                if r < self._size:
                    self._values[r] = value

    def get_snapshot(self) -> UniformSnapshot:
        with self._lock:
            return UniformSnapshot(self._values)


class Counter:
    """Integer accumulator."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = Lock()

    def inc(self, n: int = 1) -> None:
        with self._lock:
            self._count += n

    def dec(self, n: int = 1) -> None:
        with self._lock:
            self._count -= n

    def get_count(self) -> int:
        return self._count


class FunctionGauge:
    """Gauge whose value is produced by a callable."""

    def __init__(self, func: Callable[[], Any]) -> None:
        self._func = func

    def get_value(self) -> Any:
        return self._func()


class Histogram:
    """Distribution of observed values."""

    def __init__(self, reservoir: Optional[UniformReservoir] = None) -> None:
        self._reservoir = reservoir or UniformReservoir()
        self._count = 0
        self._lock = Lock()

    def update(self, value: float) -> None:
        with self._lock:
            self._count += 1
        self._reservoir.update(value)

    def get_count(self) -> int:
        return self._count

    def get_snapshot(self) -> UniformSnapshot:
        return self._reservoir.get_snapshot()


class EWMA:
    """Exponentially weighted moving average of a per-second rate."""

    def __init__(self, window_minutes: int, interval_seconds: float = 5.0) -> None:
        self._interval_seconds = interval_seconds
        self._alpha = 1.0 - math.exp(-interval_seconds / 60.0 / window_minutes)
        self._uncounted = 0
        self._rate = 0.0
        self._initialized = False

    def update(self, n: int) -> None:
        self._uncounted += n

    def tick(self) -> None:
        count, self._uncounted = self._uncounted, 0
        instant_rate = count / self._interval_seconds
        if self._initialized:
            self._rate += self._alpha * (instant_rate - self._rate)
        else:
            self._rate = instant_rate
            self._initialized = True

    def get_rate(self) -> float:
        """Rate in events per second."""
        return self._rate


class Meter:
    """Rate of events: mean and 1/5/15-minute moving averages."""

    def __init__(self, clock: Optional[ClockProtocol] = None) -> None:
        self._clock = clock or DEFAULT_CLOCK
        self._start_tick = self._clock.get_tick()
        self._last_tick = self._start_tick
        self._count = 0
        self._m1 = EWMA(1)
        self._m5 = EWMA(5)
        self._m15 = EWMA(15)
        self._lock = Lock()

    def mark(self, n: int = 1) -> None:
        with self._lock:
            self._tick_if_necessary()
            self._count += n
            self._m1.update(n)
            self._m5.update(n)
            self._m15.update(n)

    def get_count(self) -> int:
        return self._count

    def get_mean_rate(self) -> float:
        with self._lock:
            if self._count == 0:
                return 0.0
            elapsed = self._clock.get_tick() - self._start_tick
            if elapsed <= 0:
                return 0.0
            return self._count / (elapsed / _NANOS_PER_SECOND)

    def get_one_minute_rate(self) -> float:
        with self._lock:
            self._tick_if_necessary()
            return self._m1.get_rate()

    def get_five_minute_rate(self) -> float:
        with self._lock:
            self._tick_if_necessary()
            return self._m5.get_rate()

    def get_fifteen_minute_rate(self) -> float:
        with self._lock:
            self._tick_if_necessary()
            return self._m15.get_rate()

    def _tick_if_necessary(self) -> None:
        now = self._clock.get_tick()
        age = now - self._last_tick
        if age <= TICK_INTERVAL_NANOS:
            return
        self._last_tick = now - age % TICK_INTERVAL_NANOS
        for _ in range(age // TICK_INTERVAL_NANOS):
            self._m1.tick()
            self._m5.tick()
            self._m15.tick()


class Timer:
    """Histogram of durations (nanoseconds) plus a meter of events."""

    def __init__(
        self,
        clock: Optional[ClockProtocol] = None,
        reservoir: Optional[UniformReservoir] = None,
    ) -> None:
        self._clock = clock or DEFAULT_CLOCK
        self._meter = Meter(self._clock)
        self._histogram = Histogram(reservoir)

    def update(self, duration_nanos: int) -> None:
        """Record one duration; negative durations are ignored."""
        if duration_nanos < 0:
            return
        self._histogram.update(duration_nanos)
        self._meter.mark()

    @contextmanager
    def time(self) -> Iterator[None]:
        """Time the enclosed block."""
        start = self._clock.get_tick()
        try:
            yield
        finally:
            self.update(self._clock.get_tick() - start)

    def get_count(self) -> int:
        return self._histogram.get_count()

    def get_snapshot(self) -> UniformSnapshot:
        return self._histogram.get_snapshot()

    def get_mean_rate(self) -> float:
        return self._meter.get_mean_rate()

    def get_one_minute_rate(self) -> float:
        return self._meter.get_one_minute_rate()

    def get_five_minute_rate(self) -> float:
        return self._meter.get_five_minute_rate()

    def get_fifteen_minute_rate(self) -> float:
        return self._meter.get_fifteen_minute_rate()


class MetricRegistry:
    """Thread-safe registry of named metrics."""

    def __init__(self, clock: Optional[ClockProtocol] = None) -> None:
        """
        Initialize registry.

        Args:
            clock: Clock given to meters and timers created by the registry
        """
        self._clock = clock or DEFAULT_CLOCK
        self._metrics: Dict[str, Tuple[MetricKind, Any]] = {}
        self._lock = RLock()

    def register(self, name: str, kind: MetricKind, metric: Any) -> Any:
        """
        Register an existing metric instance.

        Raises:
            ValueError: If the name is already registered
        """
        with self._lock:
            if name in self._metrics:
                raise ValueError(f"A metric named {name} already exists")
            self._metrics[name] = (MetricKind(kind), metric)
        logger.debug(f"Registered {MetricKind(kind).value} {name}")
        return metric

    def register_gauge(self, name: str, func: Callable[[], Any]) -> FunctionGauge:
        """Register a gauge reading its value from ``func``."""
        return self.register(name, MetricKind.GAUGE, FunctionGauge(func))

    def counter(self, name: str) -> Counter:
        return self._get_or_create(name, MetricKind.COUNTER, Counter)

    def histogram(self, name: str) -> Histogram:
        return self._get_or_create(name, MetricKind.HISTOGRAM, Histogram)

    def meter(self, name: str) -> Meter:
        return self._get_or_create(name, MetricKind.METER, lambda: Meter(self._clock))

    def timer(self, name: str) -> Timer:
        return self._get_or_create(name, MetricKind.TIMER, lambda: Timer(self._clock))

    def remove(self, name: str) -> bool:
        """Remove a metric; returns False if it was not registered."""
        with self._lock:
            return self._metrics.pop(name, None) is not None

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._metrics)

    def get_gauges(self) -> Dict[str, FunctionGauge]:
        return self._of_kind(MetricKind.GAUGE)

    def get_counters(self) -> Dict[str, Counter]:
        return self._of_kind(MetricKind.COUNTER)

    def get_histograms(self) -> Dict[str, Histogram]:
        return self._of_kind(MetricKind.HISTOGRAM)

    def get_meters(self) -> Dict[str, Meter]:
        return self._of_kind(MetricKind.METER)

    def get_timers(self) -> Dict[str, Timer]:
        return self._of_kind(MetricKind.TIMER)

    def _get_or_create(
        self, name: str, kind: MetricKind, factory: Callable[[], Any]
    ) -> Any:
        with self._lock:
            existing = self._metrics.get(name)
            if existing is not None:
                if existing[0] != kind:
                    raise ValueError(
                        f"{name} is already registered as a {existing[0].value}"
                    )
                return existing[1]
            return self.register(name, kind, factory())

    def _of_kind(self, kind: MetricKind) -> Dict[str, Any]:
        with self._lock:
            return {
                name: metric
                for name, (metric_kind, metric) in sorted(self._metrics.items())
                if metric_kind == kind
            }
