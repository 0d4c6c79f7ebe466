"""Notification channel test command."""

import sys

import click

from cli.utils import console, get_components, get_config


@click.command("notify-test")
@click.option("--channel", type=click.Choice(["email", "wechat"]), help="Only test one channel")
def notify_test(channel: str | None):
    """Send a test message through the configured channels."""
    notifier = get_components(get_config(), skip_llm=True)["notifier"]
    configured = notifier.configured_channels(channel)
    if not configured:
        console.print("[red]No notification channel configured[/]")
        console.print("Set email.* or wechat.webhook_url (WECHAT_WEBHOOK_URL) in config.yaml")
        sys.exit(1)

    console.print(f"📤 Sending test message via {', '.join(c.name for c in configured)}...")
    if notifier.send_test(only=channel):
        console.print("[green]✅ Test message sent[/]")
    else:
        console.print("[red]❌ Test message failed, see the log above[/]")
        sys.exit(1)
