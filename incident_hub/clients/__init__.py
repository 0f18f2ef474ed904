"""
Outbound HTTP clients.
"""

from incident_hub.clients.base_client import BaseHTTPClient
from incident_hub.clients.completion_client import BaseCompletionClient, ChatCompletionClient
from incident_hub.clients.notification_client import TelegramNotifier

__all__ = [
    "BaseHTTPClient",
    "BaseCompletionClient",
    "ChatCompletionClient",
    "TelegramNotifier",
]
