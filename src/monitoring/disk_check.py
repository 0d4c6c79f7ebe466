"""Disk check job: fetch -> classify -> report -> notify."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import structlog

from monitoring.bwg import BWGClient, MetricsFetchError, disk_usage
from monitoring.classifier import MetricClassifier, MetricSnapshot
from notify import Notifier
from reports.composer import compose_failure_report, compose_metric_report, metric_subject
from shared_types import MetricStatus

logger = structlog.get_logger()

FAILURE_SUBJECT = "❌ BWG disk check failed"
FAILURE_HINTS = [
    "Check that disk.api_key (BWG_API_KEY) is correct",
    "Check that disk.veid (BWG_VEID) is correct",
    "Verify network connectivity",
    "Check the service status in the BWG control panel",
]


@dataclass
class DiskCheckResult:
    snapshot: Optional[MetricSnapshot]
    report: str
    notified: bool
    exit_code: int
    error: Optional[str] = None


class DiskCheckJob:
    """One disk check. Critical usage and fetch failures map to exit code 1."""

    def __init__(
        self,
        client: BWGClient,
        classifier: MetricClassifier,
        notifier: Optional[Notifier] = None,
        send_daily_report: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.classifier = classifier
        self.notifier = notifier
        self.send_daily_report = send_daily_report
        self.clock = clock

    def should_notify(self, status: MetricStatus) -> bool:
        return status != MetricStatus.NORMAL or self.send_daily_report

    def run(self) -> DiskCheckResult:
        now = self.clock()
        try:
            info = self.client.get_service_info()
        except MetricsFetchError as e:
            logger.error("disk_check_failed", error=str(e))
            report = compose_failure_report("BWG disk check", str(e), FAILURE_HINTS, now=now)
            notified = bool(self.notifier and self.notifier.deliver(FAILURE_SUBJECT, report))
            return DiskCheckResult(snapshot=None, report=report, notified=notified, exit_code=1, error=str(e))

        used, capacity = disk_usage(info)
        snapshot = self.classifier.classify(used, capacity)
        logger.info(
            "disk_usage_classified",
            usage_percent=snapshot.usage_percent,
            status=snapshot.status.value,
            warning=snapshot.thresholds.warning,
            critical=snapshot.thresholds.critical,
        )
        report = compose_metric_report(snapshot, info, now=now)

        notified = False
        if self.notifier and self.should_notify(snapshot.status):
            notified = self.notifier.deliver(metric_subject(snapshot.status), report)
            if not notified:
                logger.warning("disk_report_not_delivered", status=snapshot.status.value)
        else:
            logger.info("disk_report_skipped", status=snapshot.status.value)

        exit_code = 1 if snapshot.status == MetricStatus.CRITICAL else 0
        return DiskCheckResult(snapshot=snapshot, report=report, notified=notified, exit_code=exit_code)
