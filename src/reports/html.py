"""Minimal Markdown -> HTML for notification emails.

Rules run in list order and each one sees the output of the previous ones.
Order matters: bold runs before italics, bullet lines become ``<li>`` before
the list wrapper runs, and newlines are converted last.
"""

import html
import re
from datetime import datetime
from typing import Optional

_RULES = [
    (re.compile(r"```[\s\S]*?```"), lambda m: f'<pre style="background-color:#f8f9fa;padding:15px;border-radius:5px;border-left:4px solid #007acc;"><code>{m.group(0)[3:-3].strip()}</code></pre>'),
    (re.compile(r"^### (.*)$", re.M), r'<h3 style="color:#7f8c8d;margin-top:20px;">\1</h3>'),
    (re.compile(r"^## (.*)$", re.M), r'<h2 style="color:#34495e;margin-top:25px;">\1</h2>'),
    (re.compile(r"^# (.*)$", re.M), r'<h1 style="color:#2c3e50;border-bottom:2px solid #3498db;padding-bottom:10px;">\1</h1>'),
    (re.compile(r"\*\*(.+?)\*\*"), r'<strong style="color:#2980b9;">\1</strong>'),
    (re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])"), r"<em>\1</em>"),
    (re.compile(r"`([^`\n]+)`"), r'<code style="background-color:#f1f2f6;padding:2px 4px;border-radius:3px;font-family:monospace;">\1</code>'),
    (re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)"), r'<a href="\2" style="color:#3498db;text-decoration:none;">\1</a>'),
    (re.compile(r"^[ \t]*[-*] (.*)$", re.M), r'<li style="margin:5px 0;">\1</li>'),
    (re.compile(r"((?:^<li[^>]*>.*</li>(?:\n|$))+)", re.M), lambda m: '<ul style="padding-left:20px;">' + m.group(1).replace("\n", "") + "</ul>\n"),
    (re.compile(r"^---$", re.M), '<hr style="border:none;border-top:2px solid #ecf0f1;margin:20px 0;">'),
    (re.compile(r"\n\n+"), '</p><p style="margin:10px 0;">'),
    (re.compile(r"\n"), "<br>"),
]


def markdown_to_html(markdown: str) -> str:
    """Convert the Markdown subset used by reports. Total: never raises on str input."""
    text = html.escape(markdown, quote=False)
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    return f'<p style="margin:10px 0;">{text}</p>'


def render_email_page(subject: str, markdown: str, now: Optional[datetime] = None) -> str:
    """Wrap converted Markdown in the notification page template."""
    sent_at = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{html.escape(subject)}</title>
</head>
<body style="font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Arial,sans-serif;line-height:1.6;color:#333;max-width:800px;margin:0 auto;padding:20px;">
<div style="background:linear-gradient(135deg,#667eea 0%,#764ba2 100%);color:white;padding:20px;border-radius:10px 10px 0 0;text-align:center;">
<h1 style="margin:0;font-size:24px;">🤖 AI Jarvis</h1>
<p style="margin:10px 0 0 0;opacity:0.9;">{html.escape(subject)}</p>
</div>
<div style="padding:30px;border:1px solid #e1e8ed;border-radius:0 0 10px 10px;">
{markdown_to_html(markdown)}
<div style="color:#6c757d;font-size:0.9em;text-align:right;margin-top:20px;">Sent at {sent_at}</div>
</div>
<div style="margin-top:30px;padding:20px;background-color:#f8f9fa;border-radius:5px;text-align:center;font-size:12px;color:#6c757d;">
<p>Generated automatically by <strong>AI Jarvis</strong></p>
</div>
</body>
</html>"""
