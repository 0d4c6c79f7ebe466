"""Shared test fixtures for AI Jarvis."""

import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from observability import metrics  # noqa: E402
from shared_types import Priority  # noqa: E402
from tasks.models import CategoryArtifact, TaskRecord  # noqa: E402

FIXED_NOW = datetime(2024, 3, 15, 9, 30)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def tasks_dir(tmp_path):
    path = tmp_path / "tasks"
    path.mkdir()
    return path


@pytest.fixture
def store(tasks_dir):
    from tasks.store import JsonArtifactStore

    return JsonArtifactStore(tasks_dir)


def make_task(title: str, priority: str = "medium", task_id: str | None = None) -> TaskRecord:
    return TaskRecord(id=task_id or f"id-{title}", title=title, priority=Priority(priority))


@pytest.fixture
def work_artifact():
    return CategoryArtifact(
        category="work",
        generated_at="2024-03-15T08:00:00",
        raw_text="- Review PR\n- Fix build\n- Ship release",
        tasks=[
            make_task("Review PR", "medium"),
            make_task("Fix build", "high"),
            make_task("Ship release", "medium"),
        ],
    )


@pytest.fixture
def market_error_artifact():
    return CategoryArtifact(category="market", generated_at="2024-03-15T08:10:00", error="timeout")


@pytest.fixture
def service_info():
    """Trimmed getServiceInfo payload."""
    return {
        "error": 0,
        "hostname": "jarvis-vps",
        "node_location": "US, California",
        "node_datacenter": "DC6 CN2GIA",
        "ip_addresses": ["203.0.113.10"],
        "os": "ubuntu-22.04-x86_64",
        "plan": "kvmv5-20g",
        "plan_disk": 20 * 1024**3,
        "ve_used_disk_space_b": 17 * 1024**3,
        "plan_ram": 1024**3,
        "plan_swap": 512 * 1024**2,
        "plan_monthly_data": 1024**4,
        "data_counter": 100 * 1024**3,
        "data_next_reset": 1710979200,
    }


@pytest.fixture
def mock_anthropic():
    """Mock Anthropic SDK client returning a canned completion."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text="- Task one\n- Task two")]
    mock_client.messages.create.return_value = mock_response
    return mock_client


@pytest.fixture
def mock_httpx_client():
    """Mock httpx client for API client tests."""
    mock = MagicMock()
    response = MagicMock(status_code=200, text="")
    response.json.return_value = {}
    response.raise_for_status = MagicMock()
    mock.get.return_value = response
    mock.post.return_value = response
    return mock
