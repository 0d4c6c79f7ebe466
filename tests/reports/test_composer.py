"""Tests for Markdown report composition."""

from datetime import datetime

import pytest

from monitoring.classifier import classify
from reports.composer import (
    FOOTER,
    category_name,
    category_subject,
    compose_category_report,
    compose_failure_report,
    compose_metric_report,
    compose_summary_report,
    metric_subject,
)
from shared_types import MetricStatus
from tasks.aggregator import DailyAggregator

NOW = datetime(2024, 3, 15, 9, 30)
GIB = 1024**3


class TestMetricReport:
    def test_warning_report(self, service_info):
        snapshot = classify(17 * GIB, 20 * GIB, 80, 90)
        report = compose_metric_report(snapshot, service_info, now=NOW)

        assert report.startswith("# ⚠️ BWG server disk check")
        assert "2024-03-15 09:30" in report
        assert "- **Capacity**: 20 GB" in report
        assert "- **Used**: 17 GB" in report
        assert "- **Available**: 3 GB" in report
        assert "- **Usage**: 85.0%" in report
        assert "## ⚠️ Warning" in report
        assert "warning threshold of 80%" in report
        assert "jarvis-vps" in report
        assert "203.0.113.10" in report
        assert "## 📈 Traffic" in report
        assert report.endswith(FOOTER)

    def test_critical_has_remediation(self):
        report = compose_metric_report(classify(95, 100, 80, 90), now=NOW)
        assert "## 🔴 Critical" in report
        assert "journalctl --vacuum-time=7d" in report
        assert "## 🖥️ Server" not in report

    def test_normal(self):
        report = compose_metric_report(classify(10, 100, 80, 90), now=NOW)
        assert report.startswith("# ✅")
        assert "within the normal range" in report

    def test_deterministic(self, service_info):
        snapshot = classify(17 * GIB, 20 * GIB, 80, 90)
        assert compose_metric_report(snapshot, service_info, now=NOW) == compose_metric_report(
            snapshot, service_info, now=NOW
        )

    @pytest.mark.parametrize("status", list(MetricStatus))
    def test_subjects(self, status):
        assert "BWG server" in metric_subject(status)


class TestFailureReport:
    def test_lists_hints(self):
        report = compose_failure_report("BWG disk check", "boom", ["first", "second"], now=NOW)
        assert report.startswith("# ❌ BWG disk check failed")
        assert "## Error\nboom" in report
        assert "1. first\n2. second" in report

    def test_without_hints(self):
        report = compose_failure_report("Summary", "boom", now=NOW)
        assert "Things to check" not in report


class TestCategoryReport:
    def test_success(self, work_artifact):
        report = compose_category_report(work_artifact, now=NOW)
        assert report.startswith("# 💼 Work reminders - 2024-03-15")
        assert "- Tasks: 3" in report
        assert "**2. Fix build**" in report
        assert "- Priority: high" in report
        assert "## Raw AI response" in report
        assert "- Review PR\n- Fix build" in report

    def test_error(self, market_error_artifact):
        report = compose_category_report(market_error_artifact, now=NOW)
        assert "## ❌ Generation failed" in report
        assert "**Error**: timeout" in report

    def test_subjects(self, work_artifact, market_error_artifact):
        assert category_subject(work_artifact) == "💼 Work reminders"
        assert category_subject(market_error_artifact) == "🚨 market task generation failed"

    def test_unknown_category_name(self):
        assert category_name("garden") == "📌 garden"


class TestSummaryReport:
    def test_full_summary(self, work_artifact, market_error_artifact):
        summary = DailyAggregator().aggregate([work_artifact, market_error_artifact], date="2024-03-15")
        report = compose_summary_report(summary, now=NOW)

        assert report.startswith("# 📋 AI Jarvis daily summary - 2024-03-15")
        assert "- **Total tasks**: 3" in report
        assert "- **Estimated time**: 1h 15m" in report
        assert "- **Weekday**: Friday" in report
        assert "- 🔴 High: 1" in report
        assert "- 🟡 Medium: 2" in report
        assert "- 🟢 Low: 0" in report
        assert "1. **Fix build** (work - high priority)" in report
        assert "### 💼 Work reminders (3 tasks)" in report
        assert "### 📊 Market analysis ❌" in report
        assert "## ⚠️ Generation errors" in report
        assert "- market: timeout" in report
        assert report.index("Market analysis") < report.index("Work reminders (3 tasks)")

    def test_empty_summary(self):
        report = compose_summary_report(DailyAggregator().aggregate([], date="2024-03-15"), now=NOW)
        assert "No flagged tasks today" in report
        assert "No category has produced tasks yet today." in report
        assert "Generation errors" not in report
