"""Tests for usage classification and byte formatting."""

import pytest

from monitoring.classifier import MetricClassifier, classify, format_bytes
from shared_types import MetricStatus

GIB = 1024**3


class TestClassify:
    @pytest.mark.parametrize(
        "used,expected",
        [
            (95, MetricStatus.CRITICAL),
            (90, MetricStatus.CRITICAL),
            (85, MetricStatus.WARNING),
            (80, MetricStatus.WARNING),
            (79, MetricStatus.NORMAL),
            (50, MetricStatus.NORMAL),
            (0, MetricStatus.NORMAL),
        ],
    )
    def test_thresholds(self, used, expected):
        assert classify(used, 100, 80, 90).status == expected

    def test_ratio_and_percent(self):
        snapshot = classify(17 * GIB, 20 * GIB, 80, 90)
        assert snapshot.usage_ratio == pytest.approx(0.85)
        assert snapshot.usage_percent == 85.0
        assert snapshot.available_bytes == 3 * GIB
        assert snapshot.thresholds.warning == 80

    def test_zero_capacity_is_normal(self):
        snapshot = classify(500, 0, 80, 90)
        assert snapshot.usage_ratio == 0
        assert snapshot.status == MetricStatus.NORMAL

    def test_negative_capacity_is_normal(self):
        assert classify(10, -5, 80, 90).status == MetricStatus.NORMAL

    def test_over_capacity_is_critical(self):
        assert classify(120, 100, 80, 90).status == MetricStatus.CRITICAL

    def test_misconfigured_thresholds_critical_wins(self):
        snapshot = classify(92, 100, 95, 90)
        assert snapshot.status == MetricStatus.CRITICAL
        assert classify(85, 100, 95, 90).status == MetricStatus.NORMAL

    @pytest.mark.parametrize("pct", [29, 57, 58])
    @pytest.mark.parametrize("scale", [1, GIB])
    def test_exactly_on_critical_threshold(self, pct, scale):
        assert classify(pct * scale, 100 * scale, 10, pct).status == MetricStatus.CRITICAL

    @pytest.mark.parametrize("pct", [29, 57, 58])
    def test_exactly_on_warning_threshold(self, pct):
        assert classify(pct, 100, pct, 99).status == MetricStatus.WARNING

    def test_one_byte_below_threshold(self):
        assert classify(29 * GIB - 1, 100 * GIB, 10, 29).status == MetricStatus.WARNING

    def test_percent_rounded(self):
        assert classify(1, 3, 80, 90).usage_percent == 33.33


class TestMetricClassifier:
    def test_defaults(self):
        classifier = MetricClassifier()
        assert classifier.classify(85, 100).status == MetricStatus.WARNING

    def test_configured_thresholds(self):
        classifier = MetricClassifier(warning_pct=60, critical_pct=70)
        assert classifier.classify(65, 100).status == MetricStatus.WARNING
        assert classifier.classify(75, 100).status == MetricStatus.CRITICAL

    def test_per_call_override(self):
        classifier = MetricClassifier()
        assert classifier.classify(50, 100, warning_pct=40).status == MetricStatus.WARNING


class TestFormatBytes:
    @pytest.mark.parametrize(
        "num,expected",
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024**2, "1 MB"),
            (int(2.25 * GIB), "2.25 GB"),
            (20 * GIB, "20 GB"),
            (3 * 1024**4, "3 TB"),
            (-1536, "-1.5 KB"),
        ],
    )
    def test_format(self, num, expected):
        assert format_bytes(num) == expected

    def test_beyond_largest_unit(self):
        assert format_bytes(2048 * 1024**4) == "2048 TB"
