"""One category generation job: prompt -> completion -> parsed artifact -> store."""

from datetime import datetime
from typing import Callable, Optional

import structlog

from cli.config_models import RetryConfig
from cli.retry import llm_retry
from llm import LLMError, LLMProvider
from observability import metrics
from tasks.context import GitHubContext, GitHubContextClient, TimeContext
from tasks.models import CategoryArtifact
from tasks.parser import ResponseParser
from tasks.prompts import build_prompt
from tasks.store import ArtifactStore

logger = structlog.get_logger()


class TaskGenerator:
    """Generate and persist one category's tasks for today.

    An upstream failure is persisted as an error artifact rather than raised,
    so the daily summary can report it.
    """

    def __init__(
        self,
        llm: LLMProvider,
        store: ArtifactStore,
        github: Optional[GitHubContextClient] = None,
        parser: Optional[ResponseParser] = None,
        retry_config: Optional[RetryConfig] = None,
        max_tokens: int = 1500,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.llm = llm
        self.store = store
        self.github = github
        self.parser = parser or ResponseParser()
        self.max_tokens = max_tokens
        self.clock = clock
        retrying = llm_retry(retry_config, exceptions=(LLMError,))
        self._complete = retrying(self._complete_once)

    def _complete_once(self, prompt: str) -> str:
        try:
            return self.llm.complete(prompt, max_tokens=self.max_tokens)
        except LLMError:
            metrics.counter("llm_errors")
            raise

    def generate(self, category: str) -> CategoryArtifact:
        now = self.clock()
        time_ctx = TimeContext.from_datetime(now)
        github_ctx = self.github.fetch() if self.github else GitHubContext()
        prompt = build_prompt(category, time_ctx, github_ctx)

        log = logger.bind(category=category)
        try:
            with metrics.timer("llm_completion"):
                raw_text = self._complete(prompt)
        except LLMError as e:
            log.error("task_generation_failed", error=str(e))
            artifact = CategoryArtifact(category=category, generated_at=now.isoformat(), error=str(e))
        else:
            tasks = self.parser.parse(raw_text)
            artifact = CategoryArtifact(
                category=category,
                generated_at=now.isoformat(),
                raw_text=raw_text,
                tasks=tasks,
            )
            log.info("tasks_generated", tasks=len(tasks))

        self.store.save(artifact)
        return artifact
