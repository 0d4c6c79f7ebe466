"""Fan a report out to every configured delivery channel."""

from datetime import datetime
from typing import Optional, Protocol

import structlog

from cli.config_models import JarvisConfig
from observability import metrics

logger = structlog.get_logger()


class Channel(Protocol):
    name: str

    @property
    def configured(self) -> bool: ...

    def send(self, subject: str, body_markdown: str) -> bool: ...


TEST_MESSAGE = """# 🧪 AI Jarvis test message

This message checks that notification delivery works.

## System status
- ✅ Task generator: ok
- ✅ Scheduler: ok
- ✅ Notifications: testing

## Formatting
- **Bold** and *italic* text
- Inline code: `print('hello')`

If this arrived, delivery is configured correctly.

---
*Sent at {sent_at}*
"""


class Notifier:
    """Deliver a Markdown document; succeeds when at least one channel accepts it."""

    def __init__(self, channels: list[Channel]):
        self.channels = channels

    @classmethod
    def from_config(cls, config: JarvisConfig) -> "Notifier":
        from notify.email_channel import EmailChannel
        from notify.wechat import WeChatChannel

        return cls([
            WeChatChannel(config.wechat, retry_config=config.retry),
            EmailChannel(config.email),
        ])

    def configured_channels(self, only: Optional[str] = None) -> list[Channel]:
        return [c for c in self.channels if c.configured and (only is None or c.name == only)]

    def deliver(self, subject: str, body_markdown: str, only: Optional[str] = None) -> bool:
        channels = self.configured_channels(only)
        if not channels:
            logger.warning("no_notification_channel", subject=subject, preview=body_markdown[:200])
            return False

        delivered = False
        for channel in channels:
            if channel.send(subject, body_markdown):
                metrics.counter(f"notifications_sent.{channel.name}")
                delivered = True
            else:
                metrics.counter(f"notifications_failed.{channel.name}")
        return delivered

    def send_test(self, only: Optional[str] = None) -> bool:
        body = TEST_MESSAGE.format(sent_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
        return self.deliver("🧪 AI Jarvis system test", body, only=only)
