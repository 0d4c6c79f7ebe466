"""Email delivery using stdlib smtplib."""

import smtplib
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Callable

import structlog

from cli.config_models import EmailConfig
from reports.html import render_email_page

logger = structlog.get_logger()


class EmailChannel:
    """Send Markdown reports as multipart (plain + HTML) mail."""

    name = "email"

    def __init__(self, config: EmailConfig, smtp_factory: Callable = smtplib.SMTP, clock=datetime.now):
        self.config = config
        self._smtp_factory = smtp_factory
        self._clock = clock

    @property
    def configured(self) -> bool:
        c = self.config
        return bool(c.enabled and c.smtp_host and c.username and c.password and c.to)

    def build_message(self, subject: str, body_markdown: str) -> MIMEMultipart:
        now = self._clock()
        from_addr = self.config.from_addr or self.config.username

        msg = MIMEMultipart("alternative")
        msg["Subject"] = f"{subject} - {now.strftime('%Y-%m-%d')}"
        msg["From"] = formataddr((self.config.sender_name, from_addr))
        msg["To"] = self.config.to
        msg.attach(MIMEText(body_markdown, "plain", "utf-8"))
        msg.attach(MIMEText(render_email_page(subject, body_markdown, now=now), "html", "utf-8"))
        return msg

    def send(self, subject: str, body_markdown: str) -> bool:
        """Returns True when the SMTP server accepted the message."""
        if not self.configured:
            logger.debug("email_not_configured", subject=subject)
            return False

        c = self.config
        msg = self.build_message(subject, body_markdown)
        from_addr = c.from_addr or c.username
        try:
            with self._smtp_factory(c.smtp_host, c.smtp_port) as server:
                server.ehlo()
                if c.smtp_port != 25:
                    server.starttls()
                server.login(c.username, c.password)
                server.sendmail(from_addr, [c.to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("email_send_failed", error=str(e), subject=subject)
            return False
        logger.info("email_sent", to=c.to, subject=subject)
        return True
