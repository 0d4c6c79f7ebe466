"""Infrastructure usage checks."""

from .classifier import MetricClassifier, MetricSnapshot, classify, format_bytes

__all__ = ["MetricClassifier", "MetricSnapshot", "classify", "format_bytes"]
