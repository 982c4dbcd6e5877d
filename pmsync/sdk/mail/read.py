"""Gmail message read operations."""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, Any, List, Optional

from googleapiclient.errors import HttpError

from ..exceptions import ItemFetchError
from ..models import RemoteItem
from ..timing import time_api_call
from .service import GmailStore

logger = logging.getLogger(__name__)


def get_header(headers: List[Dict[str, str]], name: str) -> str:
    """Get a header value by exact name, '' when absent."""
    for header in headers:
        if header.get('name') == name:
            return header.get('value', '')
    return ''


def parse_date(value: str, now: Optional[datetime] = None) -> datetime:
    """
    Parse a Date header such as "01 Jan 21 00:00 +0000".

    Full RFC 2822 dates ("Fri, 01 Jan 2021 00:00:00 +0000") are accepted
    too. Unparseable values yield ``now`` (the current UTC time by default),
    so such notes sort as the most recent.
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        parsed = None
    if parsed is None:
        return now or datetime.now(timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_remote_item(msg: Dict[str, Any], now: Optional[datetime] = None) -> RemoteItem:
    """Project a Gmail message resource (format=full) into a RemoteItem."""
    payload = msg.get('payload') or {}
    headers = payload.get('headers') or []
    date_text = get_header(headers, 'Date')
    return RemoteItem(
        id=msg['id'],
        subject=get_header(headers, 'Subject'),
        date_text=date_text,
        date=parse_date(date_text, now),
        snippet=msg.get('snippet', ''),
        headers=headers,
        encoded_body=(payload.get('body') or {}).get('data', ''),
    )


@time_api_call
def get_message(store: GmailStore, message_id: str) -> RemoteItem:
    """
    Retrieve the full content of a note.

    Raises:
        ItemFetchError: If the message cannot be retrieved.
    """
    logger.debug(f"Retrieving message with ID: {message_id}")
    now = datetime.now(timezone.utc)
    try:
        msg = store.messages().get(
            userId=store.user_id, id=message_id, format='full'
        ).execute()
    except HttpError as e:
        raise ItemFetchError(message_id, f"failed to get message: {e}") from e
    return to_remote_item(msg, now)
