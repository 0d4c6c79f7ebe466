"""Tests for prompt context and templates."""

from datetime import datetime

import httpx
import pytest

from cli.config_models import GitHubConfig, RetryConfig
from tasks.context import GitHubContext, GitHubContextClient, RepoInfo, TimeContext
from tasks.prompts import build_prompt

NO_RETRY = RetryConfig(max_attempts=1, min_wait=0, max_wait=0)


class TestTimeContext:
    @pytest.mark.parametrize(
        "hour,expected", [(0, "morning"), (11, "morning"), (12, "afternoon"), (17, "afternoon"), (18, "evening")]
    )
    def test_time_of_day(self, hour, expected):
        assert TimeContext.from_datetime(datetime(2024, 3, 15, hour)).time_of_day == expected

    def test_weekday_and_weekend(self):
        friday = TimeContext.from_datetime(datetime(2024, 3, 15, 9))
        saturday = TimeContext.from_datetime(datetime(2024, 3, 16, 9))
        assert friday.day_of_week == "Friday"
        assert not friday.is_weekend
        assert saturday.day_of_week == "Saturday"
        assert saturday.is_weekend


class TestGitHubContextClient:
    def _client(self, http, token="ghp_test"):
        config = GitHubConfig(token=token, max_repos=5)
        return GitHubContextClient(config, retry_config=NO_RETRY, client=http)

    def test_no_token_skips_request(self, mock_httpx_client):
        ctx = self._client(mock_httpx_client, token=None).fetch()
        assert ctx.repos == []
        mock_httpx_client.get.assert_not_called()

    def test_parses_repos(self, mock_httpx_client):
        mock_httpx_client.get.return_value.json.return_value = [
            {"name": "jarvis", "language": "Python", "updated_at": "2024-03-14T10:00:00Z", "description": "bot"},
            {"name": "site", "language": "TypeScript"},
            {"name": "notes", "language": "Python"},
            "junk",
        ]
        ctx = self._client(mock_httpx_client).fetch()

        assert [r.name for r in ctx.repos] == ["jarvis", "site", "notes"]
        assert ctx.languages == ["Python", "TypeScript"]
        _, kwargs = mock_httpx_client.get.call_args
        assert kwargs["headers"]["Authorization"] == "token ghp_test"
        assert kwargs["params"] == {"sort": "updated", "per_page": 5}

    def test_http_error_degrades_to_empty(self, mock_httpx_client):
        mock_httpx_client.get.side_effect = httpx.ConnectError("down")
        assert self._client(mock_httpx_client).fetch().repos == []

    def test_status_error_degrades_to_empty(self, mock_httpx_client):
        request = httpx.Request("GET", "https://api.github.com/user/repos")
        response = httpx.Response(401, request=request)
        mock_httpx_client.get.return_value = response
        assert self._client(mock_httpx_client).fetch().repos == []

    def test_unexpected_payload(self, mock_httpx_client):
        mock_httpx_client.get.return_value.json.return_value = {"message": "Bad credentials"}
        assert self._client(mock_httpx_client).fetch().repos == []


class TestBuildPrompt:
    def setup_method(self):
        self.time_ctx = TimeContext.from_datetime(datetime(2024, 3, 16, 20))

    def test_work_prompt(self):
        github = GitHubContext(repos=[RepoInfo(name="jarvis", language="Python")])
        prompt = build_prompt("work", self.time_ctx, github)
        assert "```json" in prompt
        assert "- jarvis (Python): no description" in prompt
        assert "Saturday" in prompt
        assert "evening" in prompt
        assert '"tasks"' in prompt

    def test_learning_uses_languages(self):
        github = GitHubContext(repos=[RepoInfo(name="a", language="Go"), RepoInfo(name="b", language="Rust")])
        prompt = build_prompt("learning", self.time_ctx, github)
        assert "TECH STACK: Go, Rust" in prompt
        assert "weekend" in prompt

    def test_market_defaults_without_context(self):
        prompt = build_prompt("market", self.time_ctx, GitHubContext())
        assert "AI, Cloud Computing, Web Development" in prompt
        assert '"analysis_tasks"' in prompt

    def test_empty_repos_placeholder(self):
        prompt = build_prompt("work", self.time_ctx, GitHubContext())
        assert "(no repository context available)" in prompt

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            build_prompt("health", self.time_ctx, GitHubContext())
