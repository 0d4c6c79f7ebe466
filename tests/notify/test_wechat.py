"""Tests for WeChatChannel."""

import httpx
import pytest

from cli.config_models import RetryConfig, WeChatConfig
from notify.wechat import MAX_CONTENT_BYTES, WeChatChannel, truncate_utf8

WEBHOOK = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=test"
NO_RETRY = RetryConfig(max_attempts=1, min_wait=0, max_wait=0)


def _channel(http, url=WEBHOOK):
    return WeChatChannel(WeChatConfig(webhook_url=url), retry_config=NO_RETRY, client=http)


class TestTruncate:
    def test_short_text_untouched(self):
        assert truncate_utf8("hello") == "hello"

    def test_multibyte_cut_is_valid(self):
        text = "磁盘" * 3000
        out = truncate_utf8(text)
        assert len(out.encode("utf-8")) <= MAX_CONTENT_BYTES
        assert out.endswith("(truncated)")


class TestSend:
    def test_success(self, mock_httpx_client):
        mock_httpx_client.post.return_value.json.return_value = {"errcode": 0, "errmsg": "ok"}
        assert _channel(mock_httpx_client).send("Disk warning", "**85%**") is True

        args, kwargs = mock_httpx_client.post.call_args
        assert args[0] == WEBHOOK
        assert kwargs["json"] == {
            "msgtype": "markdown",
            "markdown": {"content": "## Disk warning\n\n**85%**"},
        }

    def test_rejected(self, mock_httpx_client):
        mock_httpx_client.post.return_value.json.return_value = {"errcode": 93000, "errmsg": "invalid webhook url"}
        assert _channel(mock_httpx_client).send("s", "b") is False

    def test_non_dict_response(self, mock_httpx_client):
        mock_httpx_client.post.return_value.json.return_value = "ok"
        assert _channel(mock_httpx_client).send("s", "b") is False

    def test_transport_error(self, mock_httpx_client):
        mock_httpx_client.post.side_effect = httpx.ConnectError("down")
        assert _channel(mock_httpx_client).send("s", "b") is False

    @pytest.mark.parametrize("url", [None, ""])
    def test_not_configured(self, mock_httpx_client, url):
        channel = _channel(mock_httpx_client, url=url)
        assert not channel.configured
        assert channel.send("s", "b") is False
        mock_httpx_client.post.assert_not_called()

    def test_long_body_truncated(self, mock_httpx_client):
        mock_httpx_client.post.return_value.json.return_value = {"errcode": 0}
        _channel(mock_httpx_client).send("s", "x" * 10000)
        content = mock_httpx_client.post.call_args[1]["json"]["markdown"]["content"]
        assert len(content.encode("utf-8")) <= MAX_CONTENT_BYTES
