"""Markdown report rendering for disk checks, category runs and daily summaries.

Everything here is a pure function of its inputs; ``now`` is passed in so the
output is reproducible.
"""

from datetime import datetime
from typing import Optional

from monitoring.classifier import MetricSnapshot, format_bytes
from shared_types import MetricStatus
from tasks.aggregator import DailySummary
from tasks.models import UNTITLED_TASK, CategoryArtifact

FOOTER = "---\n\n*Generated automatically by AI Jarvis*\n"

STATUS_MARKERS = {
    MetricStatus.NORMAL: "✅",
    MetricStatus.WARNING: "⚠️",
    MetricStatus.CRITICAL: "🔴",
}

_SUBJECTS = {
    MetricStatus.NORMAL: "✅ BWG server daily check",
    MetricStatus.WARNING: "⚠️ BWG server disk space warning",
    MetricStatus.CRITICAL: "🔴 BWG server disk space critically low",
}

CATEGORY_NAMES = {
    "work": "💼 Work reminders",
    "learning": "📚 Learning plan",
    "health": "💪 Health tips",
    "market": "📊 Market analysis",
}

_PRIORITY_MARKERS = {"high": "🔴", "medium": "🟡", "low": "🟢"}


def _stamp(now: Optional[datetime]) -> str:
    return (now or datetime.now()).strftime("%Y-%m-%d %H:%M")


def category_name(category: str) -> str:
    return CATEGORY_NAMES.get(category, f"📌 {category}")


def metric_subject(status: MetricStatus) -> str:
    return _SUBJECTS[MetricStatus(status)]


def category_subject(artifact: CategoryArtifact) -> str:
    if artifact.is_error:
        return f"🚨 {artifact.category} task generation failed"
    return category_name(artifact.category)


# --- disk check ---


def _status_section(snapshot: MetricSnapshot) -> str:
    pct = snapshot.usage_percent
    if snapshot.status == MetricStatus.CRITICAL:
        return (
            "## 🔴 Critical\n\n"
            f"**Disk usage is {pct}%, above the critical threshold of {snapshot.thresholds.critical}%!**\n\n"
            "### 🚨 Act now\n"
            "1. **Vacuum old journal logs**: `sudo journalctl --vacuum-time=7d`\n"
            "2. **Find large files**: `sudo du -h / | sort -rh | head -20`\n"
            "3. **Prune Docker resources**: `docker system prune -af`\n"
            "4. **Clear package caches**: `sudo apt-get clean` or `sudo yum clean all`\n"
            "5. **Consider a larger plan** if usage keeps growing\n\n"
            "### ⚠️ Risks\n"
            "- Services may stop working when the disk fills up\n"
            "- Databases may refuse writes\n"
            "- Logging may stop\n"
            "- Applications may crash\n"
        )
    if snapshot.status == MetricStatus.WARNING:
        return (
            "## ⚠️ Warning\n\n"
            f"**Disk usage is {pct}%, above the warning threshold of {snapshot.thresholds.warning}%**\n\n"
            "### 💡 Suggested actions\n"
            "1. Clean up files and logs that are no longer needed\n"
            "2. Look for unexpectedly large files\n"
            "3. Set up log rotation\n"
            "4. Watch the usage trend and upgrade the plan if needed\n"
        )
    return (
        "## ✅ Normal\n\n"
        f"Disk usage is {pct}%, within the normal range.\n\n"
        "### 📝 Suggestions\n"
        "- Keep monitoring regularly\n"
        f"- Try to stay below {snapshot.thresholds.warning}%\n"
        "- Remove files you no longer need\n"
    )


def _server_section(info: dict) -> str:
    ips = info.get("ip_addresses") or []
    if not isinstance(ips, list):
        ips = [str(ips)]
    return (
        "## 🖥️ Server\n"
        f"- **Hostname**: {info.get('hostname', 'unknown')}\n"
        f"- **Location**: {info.get('node_location', 'unknown')}\n"
        f"- **Datacenter**: {info.get('node_datacenter', 'unknown')}\n"
        f"- **IP addresses**: {', '.join(str(ip) for ip in ips) or 'unknown'}\n"
        f"- **OS**: {info.get('os', 'unknown')}\n"
        f"- **Plan**: {info.get('plan', 'unknown')}\n"
    )


def _traffic_section(info: dict) -> str:
    used = info.get("data_counter") or 0
    total = info.get("plan_monthly_data") or 0
    percent = f"{used / total * 100:.2f}%" if total else "n/a"
    lines = [
        "## 📈 Traffic",
        f"- **Used**: {format_bytes(used)} / {format_bytes(total)}",
        f"- **Usage**: {percent}",
    ]
    reset = info.get("data_next_reset")
    if isinstance(reset, (int, float)) and reset > 0:
        lines.append(f"- **Next reset**: {datetime.fromtimestamp(reset).strftime('%Y-%m-%d %H:%M')}")
    lines += [
        "",
        "## 💿 Plan",
        f"- **RAM**: {format_bytes(info.get('plan_ram') or 0)}",
        f"- **Swap**: {format_bytes(info.get('plan_swap') or 0)}",
        f"- **Monthly traffic**: {format_bytes(total)}",
    ]
    return "\n".join(lines) + "\n"


def compose_metric_report(
    snapshot: MetricSnapshot,
    service_info: Optional[dict] = None,
    now: Optional[datetime] = None,
) -> str:
    """Disk check report: overview, usage breakdown, status-keyed remediation."""
    marker = STATUS_MARKERS[snapshot.status]
    parts = [
        f"# {marker} BWG server disk check\n",
        f"## 📊 Checked at\n{_stamp(now)}\n",
    ]
    if service_info:
        parts.append(_server_section(service_info))
    parts.append(
        "## 💾 Disk usage\n"
        f"- **Capacity**: {format_bytes(snapshot.capacity_bytes)}\n"
        f"- **Used**: {format_bytes(snapshot.used_bytes)}\n"
        f"- **Available**: {format_bytes(snapshot.available_bytes)}\n"
        f"- **Usage**: {snapshot.usage_percent}%\n"
        f"- **Status**: {snapshot.status.value}\n"
    )
    parts.append(_status_section(snapshot))
    if service_info:
        parts.append(_traffic_section(service_info))
    parts.append(FOOTER)
    return "\n".join(parts)


def compose_failure_report(
    job: str,
    error: str,
    hints: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> str:
    """Notice for a job that could not complete."""
    lines = [
        f"# ❌ {job} failed\n",
        f"## Error\n{error}\n",
        f"## Time\n{_stamp(now)}\n",
    ]
    if hints:
        lines.append("## Things to check")
        lines.extend(f"{i}. {hint}" for i, hint in enumerate(hints, 1))
        lines.append("")
    lines.append(FOOTER)
    return "\n".join(lines)


# --- task reports ---


def _task_block(index: int, task) -> str:
    lines = [
        f"**{index}. {task.title or UNTITLED_TASK}**",
        f"- Priority: {task.priority}",
        f"- Estimated time: {task.estimated_time or 'unknown'}",
        f"- Description: {task.description or 'no description'}",
    ]
    if task.actionable_steps:
        lines.append("- Steps: " + " → ".join(task.actionable_steps))
    return "\n".join(lines)


def compose_category_report(artifact: CategoryArtifact, now: Optional[datetime] = None) -> str:
    """Report for a single generation run, including the raw AI answer."""
    title = f"# {category_name(artifact.category)} - {artifact.date or _stamp(now)[:10]}\n"
    if artifact.is_error:
        return "\n".join(
            [
                title,
                "## ❌ Generation failed\n",
                f"**Error**: {artifact.error}\n",
                "Check the API key and network access, or plan this category by hand today.\n",
                FOOTER,
            ]
        )
    parts = [
        title,
        "## Overview",
        f"- Tasks: {len(artifact.tasks)}",
        f"- Generated at: {artifact.generated_at}\n",
        "## Tasks\n",
        "\n\n".join(_task_block(i, t) for i, t in enumerate(artifact.tasks, 1)),
        "",
        "## Raw AI response\n",
        artifact.raw_text,
        "",
        FOOTER,
    ]
    return "\n".join(parts)


def _category_detail(name: str, data) -> str:
    label = category_name(name)
    if data.has_error:
        return (
            f"### {label} ❌\n"
            "**Status**: generation failed\n"
            f"**Error**: {data.error}\n"
            "**Suggestion**: check the configuration or plan this category by hand"
        )
    blocks = [f"### {label} ({data.task_count} tasks)\n"]
    blocks.extend(_task_block(i, t) for i, t in enumerate(data.tasks, 1))
    return "\n\n".join(blocks)


def compose_summary_report(summary: DailySummary, now: Optional[datetime] = None) -> str:
    """Daily digest: overview, priority breakdown, highlights, per-category detail."""
    current = now or datetime.now()
    breakdown = summary.priority_breakdown
    parts = [
        f"# 📋 AI Jarvis daily summary - {summary.date}\n",
        "Your assistant has prepared today's task list.\n",
        "## 📊 Overview\n",
        f"- **Total tasks**: {summary.total_tasks}",
        f"- **Estimated time**: {summary.estimated_duration}",
        f"- **Compiled at**: {_stamp(current)}",
        f"- **Weekday**: {current.strftime('%A')}\n",
        "### Priority breakdown",
    ]
    parts.extend(
        f"- {_PRIORITY_MARKERS[p]} {p.capitalize()}: {breakdown.get(p, 0)}" for p in ("high", "medium", "low")
    )

    parts.append("\n## 🎯 Highlights\n")
    if summary.highlights:
        parts.extend(
            f"{i}. **{h.title}** ({h.category} - {h.priority} priority)"
            for i, h in enumerate(summary.highlights, 1)
        )
    else:
        parts.append("No flagged tasks today, work through the plan at a steady pace.")

    parts.append("\n## 📋 Categories\n")
    if summary.categories:
        parts.append("\n\n".join(_category_detail(n, d) for n, d in summary.categories.items()))
    else:
        parts.append("No category has produced tasks yet today.")

    if summary.generation_errors:
        parts.append("\n## ⚠️ Generation errors\n")
        parts.append("These categories ran into problems:")
        parts.extend(f"- {err}" for err in summary.generation_errors)
        parts.append("\nCheck the related configuration.")

    parts.append(
        "\n## 💡 Tips\n\n"
        "1. **Morning planning**: start with the high-priority tasks\n"
        "2. **Time boxing**: spread tasks across the day\n"
        "3. **Stay flexible**: reorder as the day unfolds\n"
        "4. **Reflect**: note what worked once a task is done\n"
    )
    parts.append(FOOTER)
    return "\n".join(parts)
