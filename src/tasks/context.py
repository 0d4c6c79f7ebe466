"""Prompt context: local time of day and recently updated GitHub repositories."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import httpx
import structlog

from cli.config_models import GitHubConfig, RetryConfig
from cli.retry import http_retry

logger = structlog.get_logger().bind(source="github")

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class TimeContext:
    date: str
    day_of_week: str
    time_of_day: str  # "morning" | "afternoon" | "evening"
    hour: int
    is_weekend: bool

    @classmethod
    def from_datetime(cls, now: datetime) -> "TimeContext":
        if now.hour < 12:
            time_of_day = "morning"
        elif now.hour < 18:
            time_of_day = "afternoon"
        else:
            time_of_day = "evening"
        return cls(
            date=now.strftime("%Y-%m-%d"),
            day_of_week=_WEEKDAYS[now.weekday()],
            time_of_day=time_of_day,
            hour=now.hour,
            is_weekend=now.weekday() >= 5,
        )


@dataclass
class RepoInfo:
    name: str
    language: Optional[str] = None
    updated_at: Optional[str] = None
    description: Optional[str] = None


@dataclass
class GitHubContext:
    repos: list[RepoInfo] = field(default_factory=list)

    @property
    def languages(self) -> list[str]:
        """Distinct repo languages in first-seen order."""
        seen = []
        for repo in self.repos:
            if repo.language and repo.language not in seen:
                seen.append(repo.language)
        return seen


class GitHubContextClient:
    """Fetch the user's recently updated repos. Failures degrade to an empty context."""

    def __init__(
        self,
        config: GitHubConfig,
        retry_config: Optional[RetryConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.config = config
        self._client = client
        retrying = http_retry(retry_config, exceptions=(httpx.TransportError, httpx.HTTPStatusError))
        self._fetch_repos = retrying(self._fetch_repos_once)

    def fetch(self) -> GitHubContext:
        if not self.config.token:
            logger.debug("github_token_missing")
            return GitHubContext()
        try:
            payload = self._fetch_repos()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("github_context_failed", error=str(e))
            return GitHubContext()

        if not isinstance(payload, list):
            logger.warning("github_context_unexpected_payload", kind=type(payload).__name__)
            return GitHubContext()
        repos = [
            RepoInfo(
                name=str(r.get("name", "")),
                language=r.get("language"),
                updated_at=r.get("updated_at"),
                description=r.get("description"),
            )
            for r in payload
            if isinstance(r, dict)
        ]
        logger.info("github_context_loaded", repos=len(repos))
        return GitHubContext(repos=repos)

    def _fetch_repos_once(self):
        headers = {
            "Authorization": f"token {self.config.token}",
            "Accept": "application/vnd.github.v3+json",
        }
        params = {"sort": "updated", "per_page": self.config.max_repos}
        url = f"{self.config.api_url.rstrip('/')}/user/repos"
        if self._client is not None:
            response = self._client.get(url, headers=headers, params=params)
        else:
            with httpx.Client(timeout=self.config.timeout_seconds) as client:
                response = client.get(url, headers=headers, params=params)
        response.raise_for_status()
        return response.json()
