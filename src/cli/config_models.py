"""Pydantic configuration models for AI Jarvis."""

import os
import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"auto", "claude"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_ENV_REF = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def expand_env(value: Optional[str]) -> Optional[str]:
    """Resolve a whole-string ``${VAR}`` reference; other values pass through."""
    if not isinstance(value, str):
        return value
    match = _ENV_REF.match(value)
    if not match:
        return value
    return os.getenv(match.group(1), "")


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "auto"
    model: Optional[str] = None  # None = use provider default
    api_key: Optional[str] = "${ANTHROPIC_API_KEY}"
    max_tokens: int = 1500

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v


class PathsConfig(BaseModel):
    """File paths configuration."""

    tasks_dir: Path = Path("./tasks")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        self.tasks_dir = self.tasks_dir.expanduser()
        if self.log_file:
            self.log_file = self.log_file.expanduser()
        return self


class GitHubConfig(BaseModel):
    """Source-control context for prompts."""

    token: Optional[str] = "${GITHUB_TOKEN}"
    api_url: str = "https://api.github.com"
    max_repos: int = 10
    timeout_seconds: float = 15.0


class DiskConfig(BaseModel):
    """BandwagonHost disk check configuration."""

    veid: Optional[str] = "${BWG_VEID}"
    api_key: Optional[str] = "${BWG_API_KEY}"
    api_url: str = "https://api.64clouds.com/v1/getServiceInfo"
    warning_threshold: float = 80.0
    critical_threshold: float = 90.0
    send_daily_report: bool = False
    timeout_seconds: float = 30.0

    @field_validator("warning_threshold", "critical_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"Threshold must be a percentage in [0, 100], got {v}")
        return v


class SummaryConfig(BaseModel):
    """Daily summary aggregation."""

    minutes_per_task: int = 25
    highlight_markers: list[str] = Field(
        default_factory=lambda: ["重要", "紧急", "urgent", "important", "Urgent", "Important"]
    )


class EmailConfig(BaseModel):
    """SMTP delivery."""

    enabled: bool = True
    smtp_host: Optional[str] = "smtp.gmail.com"
    smtp_port: int = 587
    username: Optional[str] = "${EMAIL_USER}"
    password: Optional[str] = "${EMAIL_PASS}"
    to: Optional[str] = "${NOTIFICATION_EMAIL}"
    from_addr: Optional[str] = None
    sender_name: str = "AI Jarvis"


class WeChatConfig(BaseModel):
    """WeChat Work group robot webhook."""

    enabled: bool = True
    webhook_url: Optional[str] = "${WECHAT_WEBHOOK_URL}"
    timeout_seconds: float = 10.0


class RetryConfig(BaseModel):
    """Retry/backoff configuration."""

    max_attempts: int = 3
    min_wait: float = 2.0
    max_wait: float = 10.0
    llm_max_wait: float = 30.0


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class JarvisConfig(BaseModel):
    """Main configuration model. Built once per process and passed down."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    disk: DiskConfig = Field(default_factory=DiskConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    wechat: WeChatConfig = Field(default_factory=WeChatConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} references in secrets and addresses."""
        self.llm.api_key = expand_env(self.llm.api_key)
        self.github.token = expand_env(self.github.token)
        self.disk.veid = expand_env(self.disk.veid)
        self.disk.api_key = expand_env(self.disk.api_key)
        self.email.username = expand_env(self.email.username)
        self.email.password = expand_env(self.email.password)
        self.email.to = expand_env(self.email.to)
        self.email.from_addr = expand_env(self.email.from_addr)
        self.wechat.webhook_url = expand_env(self.wechat.webhook_url)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "JarvisConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
