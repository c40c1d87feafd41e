"""Tests for the WhatsApp gateway client and webhook endpoint."""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from visitbot.channels.whatsapp import WhatsAppGateway, whatsapp_router
from visitbot.schemas.messages import InboundMessage, WebhookMessage


# ── Helpers ──────────────────────────────────────────────────────────


def _make_event(
    body: str | None = ".tagihan 123456789012",
    event: str = "message",
    chat_id: str = "6281234567890@s.whatsapp.net",
    image: dict | None = None,
) -> dict:
    """Build a gateway webhook body."""
    payload = {
        "id": "3EB0ABCDEF",
        "chat_id": chat_id,
        "from": "6281234567890@s.whatsapp.net",
        "from_name": "Andi",
        "timestamp": "2026-10-19T08:00:00Z",
        "body": body,
    }
    if image is not None:
        payload["image"] = image
    return {"device_id": "dev-1", "event": event, "payload": payload}


def _response(status: int) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=MagicMock(), response=resp
        )
    return resp


@pytest.fixture()
def mock_http():
    """Patch httpx.AsyncClient so posts return queued responses."""
    with patch("visitbot.channels.whatsapp.httpx.AsyncClient") as client_cls:
        client = MagicMock()
        client.post = AsyncMock()
        client_cls.return_value.__aenter__ = AsyncMock(return_value=client)
        client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
        yield client


@pytest.fixture()
def gateway():
    return WhatsAppGateway(
        base_url="http://gateway:3000/",
        token="user:secret",
        device_id="dev-1",
        max_attempts=3,
        backoff_seconds=0,
    )


# ── Gateway client ───────────────────────────────────────────────────


class TestSendText:
    @pytest.mark.asyncio
    async def test_success(self, gateway, mock_http):
        mock_http.post.return_value = _response(200)

        assert await gateway.send_text("628111@s.whatsapp.net", "halo", reply_to="MSG1") is True

        mock_http.post.assert_awaited_once()
        url = mock_http.post.call_args.args[0]
        kwargs = mock_http.post.call_args.kwargs
        assert url == "http://gateway:3000/send/message"
        assert kwargs["json"] == {"phone": "628111@s.whatsapp.net", "message": "halo", "reply_message_id": "MSG1"}
        expected_auth = "Basic " + base64.b64encode(b"user:secret").decode()
        assert kwargs["headers"]["Authorization"] == expected_auth
        assert kwargs["headers"]["X-Device-Id"] == "dev-1"

    @pytest.mark.asyncio
    async def test_retries_on_server_error(self, gateway, mock_http):
        mock_http.post.side_effect = [_response(503), _response(200)]
        assert await gateway.send_text("628111", "halo") is True
        assert mock_http.post.await_count == 2

    @pytest.mark.asyncio
    async def test_retries_on_transport_error_then_gives_up(self, gateway, mock_http):
        mock_http.post.side_effect = httpx.ConnectError("refused")
        assert await gateway.send_text("628111", "halo") is False
        assert mock_http.post.await_count == 3

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, gateway, mock_http):
        mock_http.post.return_value = _response(400)
        assert await gateway.send_text("628111", "halo") is False
        assert mock_http.post.await_count == 1

    @pytest.mark.asyncio
    async def test_rate_limited_retried(self, gateway, mock_http):
        mock_http.post.side_effect = [_response(429), _response(429), _response(429)]
        assert await gateway.send_text("628111", "halo") is False
        assert mock_http.post.await_count == 3

    @pytest.mark.asyncio
    async def test_not_configured(self, mock_http):
        gw = WhatsAppGateway(base_url="")
        assert await gw.send_text("628111", "halo") is False
        mock_http.post.assert_not_awaited()


class TestSendMedia:
    @pytest.mark.asyncio
    async def test_image(self, gateway, mock_http):
        mock_http.post.return_value = _response(200)
        assert await gateway.send_image("628111", "https://cdn/x.jpg", caption="foto") is True
        assert mock_http.post.call_args.args[0].endswith("/send/image")
        assert mock_http.post.call_args.kwargs["data"]["image_url"] == "https://cdn/x.jpg"

    @pytest.mark.asyncio
    async def test_document(self, gateway, mock_http):
        mock_http.post.return_value = _response(200)
        assert await gateway.send_document("628111", b"%PDF", "rkh.pdf") is True
        files = mock_http.post.call_args.kwargs["files"]
        assert files["file"][0] == "rkh.pdf"


# ── Inbound normalization ────────────────────────────────────────────


class TestInboundMessage:
    def test_text(self):
        msg = InboundMessage.from_webhook(WebhookMessage.model_validate(_make_event(body="  halo ")["payload"]))
        assert msg.text == "halo"
        assert msg.sender == "6281234567890@s.whatsapp.net"
        assert msg.message_id == "3EB0ABCDEF"
        assert msg.is_group is False

    def test_image_caption_is_text(self):
        raw = _make_event(body=None, image={"media_path": "statics/media/1.jpg", "caption": ".moni 123"})
        msg = InboundMessage.from_webhook(WebhookMessage.model_validate(raw["payload"]))
        assert msg.text == ".moni 123"
        assert msg.image_url == "statics/media/1.jpg"

    def test_group(self):
        raw = _make_event(chat_id="120363@g.us")
        msg = InboundMessage.from_webhook(WebhookMessage.model_validate(raw["payload"]))
        assert msg.is_group is True
        assert msg.sender == "6281234567890@s.whatsapp.net"


# ── Webhook endpoint ─────────────────────────────────────────────────


@pytest.fixture()
def dispatcher():
    d = MagicMock()
    d.dispatch = AsyncMock()
    return d


@pytest.fixture()
def client(dispatcher):
    """FastAPI test client with just the WhatsApp router."""
    app = FastAPI()
    app.include_router(whatsapp_router)
    app.state.dispatcher = dispatcher
    return TestClient(app)


class TestWebhook:
    def test_message_dispatched(self, client, dispatcher):
        resp = client.post("/webhook", json=_make_event())

        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        dispatcher.dispatch.assert_called_once()
        message = dispatcher.dispatch.call_args.args[0]
        assert message.text == ".tagihan 123456789012"

    def test_ack_ignored(self, client, dispatcher):
        resp = client.post("/webhook", json=_make_event(event="message.ack"))
        assert resp.json()["status"] == "ignored"
        dispatcher.dispatch.assert_not_called()

    def test_malformed_body(self, client, dispatcher):
        resp = client.post("/webhook", content=b"not json", headers={"Content-Type": "application/json"})
        assert resp.json()["status"] == "invalid"
        dispatcher.dispatch.assert_not_called()

    def test_not_configured(self):
        app = FastAPI()
        app.include_router(whatsapp_router)
        resp = TestClient(app).post("/webhook", json=_make_event())
        assert resp.json()["status"] == "not_configured"
