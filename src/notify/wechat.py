"""WeChat Work group robot webhook delivery."""

from typing import Optional

import httpx
import structlog

from cli.config_models import RetryConfig, WeChatConfig
from cli.retry import http_retry

logger = structlog.get_logger().bind(source="wechat")

# Robot markdown messages are capped at 4096 bytes
MAX_CONTENT_BYTES = 4096
_TRUNCATION_NOTE = "\n\n...(truncated)"


def truncate_utf8(text: str, limit: int = MAX_CONTENT_BYTES) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text
    room = limit - len(_TRUNCATION_NOTE.encode("utf-8"))
    return encoded[:room].decode("utf-8", errors="ignore") + _TRUNCATION_NOTE


class WeChatChannel:
    """Post Markdown to a WeChat Work robot webhook."""

    name = "wechat"

    def __init__(
        self,
        config: WeChatConfig,
        retry_config: Optional[RetryConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.config = config
        self._client = client
        retrying = http_retry(retry_config, exceptions=(httpx.TransportError,))
        self._post = retrying(self._post_once)

    @property
    def configured(self) -> bool:
        return bool(self.config.enabled and self.config.webhook_url)

    def send(self, subject: str, body_markdown: str) -> bool:
        if not self.configured:
            logger.debug("wechat_not_configured")
            return False

        payload = {
            "msgtype": "markdown",
            "markdown": {"content": truncate_utf8(f"## {subject}\n\n{body_markdown}")},
        }
        try:
            response = self._post(payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("wechat_send_failed", error=str(e))
            return False

        if not isinstance(data, dict) or data.get("errcode") != 0:
            errcode = data.get("errcode") if isinstance(data, dict) else None
            logger.error("wechat_rejected", errcode=errcode, errmsg=str(data)[:200])
            return False
        logger.info("wechat_sent", subject=subject)
        return True

    def _post_once(self, payload: dict) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.config.webhook_url, json=payload)
        with httpx.Client(timeout=self.config.timeout_seconds) as client:
            return client.post(self.config.webhook_url, json=payload)
