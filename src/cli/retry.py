"""Retry utilities with exponential backoff."""

import logging

import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cli.config_models import RetryConfig

logger = structlog.stdlib.get_logger(__name__)


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 2.0,
    max_wait: float = 10.0,
    exceptions: tuple = (Exception,),
):
    """Generic retry decorator.

    Args:
        max_attempts: Max retry attempts
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def http_retry(config: RetryConfig | None = None, exceptions: tuple = (Exception,)):
    """Retry decorator for HTTP calls (BWG, GitHub, webhooks)."""
    cfg = config or RetryConfig()
    return with_retry(cfg.max_attempts, cfg.min_wait, cfg.max_wait, exceptions)


def llm_retry(config: RetryConfig | None = None, exceptions: tuple = (Exception,)):
    """Retry decorator for LLM API calls.

    Uses longer max_wait for rate limiting scenarios.
    """
    cfg = config or RetryConfig()
    return with_retry(cfg.max_attempts, cfg.min_wait, cfg.llm_max_wait, exceptions)


def retry_from_config(config: RetryConfig, retry_type: str = "http"):
    """Create retry decorator from config ("http" or "llm")."""
    if retry_type == "llm":
        return llm_retry(config)
    return http_retry(config)
