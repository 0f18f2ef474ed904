"""
Unit tests for Telegram assignment notifications.
"""

import json

import httpx

from incident_hub.clients.notification_client import TelegramNotifier
from incident_hub.domain.incident import Incident

INCIDENT = Incident(id="inc-1", title="Database down", description="d", priority="High")


def _notifier(handler, token: str = "TOKEN") -> TelegramNotifier:
    return TelegramNotifier(
        bot_token=token,
        api_base="https://telegram.test",
        transport=httpx.MockTransport(handler),
    )


async def test_sends_assignment_message() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True, "result": {}})

    async with _notifier(handler) as notifier:
        assert await notifier.notify_assignment("555", INCIDENT) is True

    assert seen["url"] == "https://telegram.test/botTOKEN/sendMessage"
    assert seen["body"]["chat_id"] == "555"
    assert "Database down" in seen["body"]["text"]
    assert "Priority: High" in seen["body"]["text"]
    assert "Status: Open" in seen["body"]["text"]


async def test_missing_token_skips_sending() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    notifier = _notifier(handler, token=None)
    assert await notifier.notify_assignment("555", INCIDENT) is False


async def test_api_rejection_returns_false() -> None:
    notifier = _notifier(lambda r: httpx.Response(200, json={"ok": False, "description": "chat not found"}))
    assert await notifier.notify_assignment("555", INCIDENT) is False
    await notifier.close()


async def test_http_failure_returns_false() -> None:
    notifier = _notifier(lambda r: httpx.Response(502, text="bad gateway"))
    assert await notifier.notify_assignment("555", INCIDENT) is False
    await notifier.close()


async def test_transport_failure_returns_false() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    notifier = _notifier(handler)
    assert await notifier.notify_assignment("555", INCIDENT) is False
    await notifier.close()
