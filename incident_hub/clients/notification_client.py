"""
Telegram notifications for incident assignments.
"""

from __future__ import annotations

from typing import Optional

import httpx

from incident_hub.clients.base_client import BaseHTTPClient
from incident_hub.core.config import TelegramSettings
from incident_hub.core.constants import ASSIGNMENT_MESSAGE
from incident_hub.core.exceptions import UpstreamError
from incident_hub.core.logging import get_logger
from incident_hub.domain.incident import Incident

logger = get_logger(__name__)


class TelegramNotifier(BaseHTTPClient):
    """
    Fire-and-forget assignment notifications through the Telegram Bot API.

    Delivery failures are logged and reported as ``False``; they never
    propagate to the caller.
    """

    def __init__(
        self,
        bot_token: Optional[str],
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        # Bot API methods live under /bot<token>/.
        super().__init__(
            base_url=f"{api_base.rstrip('/')}/bot{bot_token or ''}",
            timeout=timeout,
            transport=transport,
        )
        self.bot_token = bot_token

    @classmethod
    def from_settings(cls, settings: TelegramSettings) -> "TelegramNotifier":
        return cls(
            bot_token=settings.bot_token,
            api_base=settings.api_base,
            timeout=settings.timeout,
        )

    @property
    def service_name(self) -> str:
        return "Telegram"

    async def notify_assignment(self, chat_id: str, incident: Incident) -> bool:
        """
        Tell a team member they were assigned an incident.

        Returns:
            True if Telegram accepted the message
        """
        if not self.bot_token:
            logger.warning("Telegram bot token is not configured", chat_id=chat_id)
            return False

        text = ASSIGNMENT_MESSAGE.format(
            title=incident.title,
            priority=incident.priority,
            status=incident.status,
        )

        try:
            response = await self._request(
                "POST",
                "/sendMessage",
                json={"chat_id": chat_id, "text": text},
            )
            data = response.json()
        except (UpstreamError, ValueError) as e:
            logger.warning(
                "Telegram notification failed",
                chat_id=chat_id,
                incident_id=incident.id,
                error=str(e),
            )
            return False

        if not data.get("ok"):
            logger.warning("Telegram API returned error", chat_id=chat_id, response=data)
            return False

        logger.info("Telegram notification sent", chat_id=chat_id, incident_id=incident.id)
        return True
