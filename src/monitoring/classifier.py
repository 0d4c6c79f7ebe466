"""Threshold classification of resource usage."""

from dataclasses import dataclass
from typing import Optional

from shared_types import MetricStatus

_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


@dataclass(frozen=True)
class Thresholds:
    warning: float
    critical: float


@dataclass(frozen=True)
class MetricSnapshot:
    capacity_bytes: int
    used_bytes: int
    usage_ratio: float
    status: MetricStatus
    thresholds: Thresholds

    @property
    def usage_percent(self) -> float:
        return round(self.usage_ratio * 100, 2)

    @property
    def available_bytes(self) -> int:
        return self.capacity_bytes - self.used_bytes


def classify(used: int, capacity: int, warning_pct: float, critical_pct: float) -> MetricSnapshot:
    """Classify one reading.

    Zero or negative capacity means no data: ratio 0, status normal.
    The critical test runs before the warning test, so when thresholds
    overlap (warning >= critical) critical wins.
    """
    ratio = used / capacity if capacity > 0 else 0.0

    # Cross-multiplied so integer byte counts compare exactly at a threshold
    if capacity > 0 and used * 100 >= critical_pct * capacity:
        status = MetricStatus.CRITICAL
    elif capacity > 0 and used * 100 >= warning_pct * capacity:
        status = MetricStatus.WARNING
    else:
        status = MetricStatus.NORMAL

    return MetricSnapshot(
        capacity_bytes=capacity,
        used_bytes=used,
        usage_ratio=ratio,
        status=status,
        thresholds=Thresholds(warning=warning_pct, critical=critical_pct),
    )


class MetricClassifier:
    """Classifier with configured default thresholds (percentages)."""

    def __init__(self, warning_pct: float = 80.0, critical_pct: float = 90.0):
        self.warning_pct = warning_pct
        self.critical_pct = critical_pct

    def classify(
        self,
        used: int,
        capacity: int,
        warning_pct: Optional[float] = None,
        critical_pct: Optional[float] = None,
    ) -> MetricSnapshot:
        return classify(
            used,
            capacity,
            self.warning_pct if warning_pct is None else warning_pct,
            self.critical_pct if critical_pct is None else critical_pct,
        )


def format_bytes(num: float) -> str:
    """Human-readable size in base 1024, e.g. ``1536 -> "1.5 KB"``."""
    if num == 0:
        return "0 Bytes"
    sign = "-" if num < 0 else ""
    value = float(abs(num))
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{round(value, 2):.2f}".rstrip("0").rstrip(".")
    return f"{sign}{text} {_UNITS[unit]}"
