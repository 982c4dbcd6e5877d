"""Gmail operations for the pmsync SDK.

Provides label resolution, search, read, insert and trash operations over
the notes stored in the sync label.

Example usage:
    from pmsync.sdk import mail

    store = mail.GmailStore(creds)
    label = mail.resolve_label(store, "Notes/pomera_sync")
    for message_id in mail.list_message_ids(store, label.id, "subject:(todo)"):
        print(mail.get_message(store, message_id).subject)
"""

from .service import get_gmail_service, GmailStore
from .label import list_labels, resolve_label
from .search import list_message_ids
from .read import get_message, get_header, parse_date, to_remote_item
from .send import build_note_message, insert_message, trash_message

__all__ = [
    "get_gmail_service",
    "GmailStore",
    "list_labels",
    "resolve_label",
    "list_message_ids",
    "get_message",
    "get_header",
    "parse_date",
    "to_remote_item",
    "build_note_message",
    "insert_message",
    "trash_message",
]
