"""
Slack client setup with lazy initialization.
"""

from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.web.async_client import AsyncWebClient

from core.config import SLACK_APP_TOKEN, SLACK_BOT_TOKEN

_slack_client: AsyncWebClient | None = None


def get_slack_client() -> AsyncWebClient:
    """Get or create the Slack web client (lazy initialization)."""
    global _slack_client
    if _slack_client is None:
        _slack_client = AsyncWebClient(token=SLACK_BOT_TOKEN)
    return _slack_client


def create_socket_mode_client(web_client: AsyncWebClient, app_token: str | None = None) -> SocketModeClient | None:
    """Socket Mode client for the app token, or None when no app token is configured."""
    app_token = app_token if app_token is not None else SLACK_APP_TOKEN
    if not app_token:
        return None
    return SocketModeClient(app_token=app_token, web_client=web_client)
