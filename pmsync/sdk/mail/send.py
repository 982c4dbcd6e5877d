"""Gmail message insert and trash operations."""

import logging
import base64
from datetime import datetime
from typing import Dict, Any, List, Optional

from googleapiclient.errors import HttpError

from ..exceptions import RemoteOperationError
from ..timing import time_api_call
from .service import GmailStore

logger = logging.getLogger(__name__)

# RFC 822 with numeric zone, e.g. "01 Jan 21 00:00 +0000".
DATE_FORMAT = "%d %b %y %H:%M %z"


def format_date(when: datetime) -> str:
    return when.strftime(DATE_FORMAT)


def build_note_message(subject: str, content: bytes, from_addr: str, when: Optional[datetime] = None) -> str:
    """
    Build the raw RFC 822 note message, URL-safe base64 encoded for the API.

    The subject is sent as an encoded word and the body as base64, so any
    UTF-8 text survives the round trip unchanged.

    Args:
        subject: Note title (the file name without extension)
        content: File content
        from_addr: Value for the From header
        when: Date header value (defaults to now, local time)
    """
    when = when or datetime.now().astimezone()
    encoded_subject = base64.b64encode(subject.encode('utf-8')).decode('ascii')
    message = (
        "Content-Type: text/plain; charset=\"utf-8-sig\"\r\n"
        "MIME-Version: 1.0\r\n"
        "Content-Transfer-Encoding: base64\r\n"
        "X-Uniform-Type-Identifier: com.apple.mail-note\r\n"
        f"From: {from_addr}\r\n"
        f"Subject: =?UTF-8?B?{encoded_subject}?=\r\n"
        f"Date: {format_date(when)}\r\n"
        "\r\n"
        + base64.b64encode(content).decode('ascii')
    )
    return base64.urlsafe_b64encode(message.encode('ascii')).decode('ascii')


@time_api_call
def insert_message(store: GmailStore, raw: str, label_ids: List[str]) -> Dict[str, Any]:
    """
    Insert a message directly into the mailbox (no sending).

    Returns:
        Dict containing the new message's id and labelIds
    """
    try:
        result = store.messages().insert(
            userId=store.user_id, body={"raw": raw, "labelIds": label_ids}
        ).execute()
    except HttpError as e:
        raise RemoteOperationError("insert message", e) from e

    logger.info(f"Note inserted. Message ID: {result.get('id')}")
    return {
        "id": result.get("id"),
        "labelIds": result.get("labelIds", []),
    }


@time_api_call
def trash_message(store: GmailStore, message_id: str) -> Dict[str, Any]:
    """Move a message to the trash."""
    try:
        result = store.messages().trash(userId=store.user_id, id=message_id).execute()
    except HttpError as e:
        raise RemoteOperationError(f"trash message {message_id}", e) from e
    logger.info(f"Trashed message {message_id}")
    return result
