"""
Slack message building and delivery.
"""

import traceback

from aiohttp import ClientError
from slack_sdk.errors import SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from core.config import COMPANY_NAME, NEXT_WEEK_SLACK_BUCKETS, SLACK_CHANNEL_ID, SLACK_ERROR_CHANNEL_ID
from core.slack_client import create_socket_mode_client, get_slack_client
from models.events import Bucket, DigestSection, WeeklyDigest
from services.digest import intro_text, this_week_header

SECTION_EMOJI = {
    Bucket.FIRST_DAY: ":new:",
    Bucket.BIRTHDAY: ":partying_face:",
    Bucket.ANNIVERSARY: ":tada:",
    Bucket.LEAVE: ":palm_tree:",
    Bucket.HOLIDAY: ":confetti_ball:",
}
NEXT_WEEK_EMOJI = ":beach_with_umbrella:"


class DeliveryError(RuntimeError):
    """The digest could not be posted to Slack."""


# =============================================================================
# BLOCKS
# =============================================================================


def text_block(text: str) -> dict:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def header_block(text: str) -> dict:
    return {"type": "section", "fields": [{"type": "mrkdwn", "text": text}]}


def divider_block() -> dict:
    return {"type": "divider"}


def section_blocks(section: DigestSection, emoji: str | None = None) -> list[dict]:
    """Header with the section title followed by its bulleted lines."""
    emoji = emoji or SECTION_EMOJI[section["bucket"]]
    return [
        header_block(f"{emoji} *{section['title']}:*"),
        text_block("\n".join(f"  - {line}" for line in section["lines"])),
    ]


def build_slack_message(
    digest: WeeklyDigest,
    channel: str | None = None,
    company_name: str | None = None,
    next_week_buckets: list[str] | None = None,
) -> dict:
    """
    Build the chat.postMessage payload for a digest.

    Every section of this week is included. Next week only contributes the
    buckets listed in `next_week_buckets` (holidays by default), after a divider.
    """
    company_name = company_name or COMPANY_NAME
    if next_week_buckets is None:
        next_week_buckets = NEXT_WEEK_SLACK_BUCKETS
    intro = intro_text(company_name, digest.language)

    blocks = [
        text_block(f":calendar: {intro}"),
        divider_block(),
        header_block(f"*{this_week_header(digest.language)}:*"),
    ]
    for section in digest.this_week_sections:
        blocks.extend(section_blocks(section))

    for section in digest.next_week_sections:
        if section["bucket"].value not in next_week_buckets:
            continue
        blocks.append(divider_block())
        blocks.extend(section_blocks(section, NEXT_WEEK_EMOJI))

    return {
        "channel": channel if channel is not None else SLACK_CHANNEL_ID,
        "text": intro,
        "blocks": blocks,
    }


# =============================================================================
# DELIVERY
# =============================================================================


async def send_digest_message(
    message: dict, client: AsyncWebClient | None = None, app_token: str | None = None
) -> dict:
    """
    Post the digest message.

    When an app token is configured a Socket Mode connection is opened first
    and always released afterwards.

    Raises:
        DeliveryError: if no channel is set or Slack rejects the message
    """
    if not message.get("channel"):
        raise DeliveryError("No Slack channel configured (SLACK_CHANNEL_ID)")

    client = client or get_slack_client()
    socket_client = create_socket_mode_client(client, app_token)

    try:
        if socket_client is not None:
            await socket_client.connect()
        response = await client.chat_postMessage(**message)
        print(f"Message has been sent to {message['channel']}")
        return response.data if hasattr(response, "data") else response
    except (SlackClientError, ClientError) as e:
        raise DeliveryError(f"Error sending message: {e}") from e
    finally:
        if socket_client is not None:
            await socket_client.disconnect()
            await socket_client.close()


async def send_error_message(error: Exception, client: AsyncWebClient | None = None, channel: str | None = None):
    """Send error notification to the error channel. Best effort: failures are only printed."""
    channel = channel if channel is not None else SLACK_ERROR_CHANNEL_ID
    if not channel:
        return

    details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    text = f"An error occurred while sending the weekly digest:\n```{details}```"

    try:
        await (client or get_slack_client()).chat_postMessage(channel=channel, text=text)
        print(f"Sent error notification to {channel}")
    except Exception as e:
        print(f"Failed to send error notification: {e}")
