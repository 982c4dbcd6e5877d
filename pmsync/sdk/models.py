"""Data types shared by the pmsync SDK.

RemoteItem is a read-only projection of a Gmail message stored under the
sync label; ListItem is what the retrieval pipeline produces for display,
sorting and the confirmation loop.
"""

import base64
import binascii
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict

from .exceptions import ItemFetchError


@dataclass(frozen=True)
class SyncLabel:
    """The single Gmail label that scopes every sync operation."""
    id: str
    name: str


@dataclass(frozen=True)
class RemoteItem:
    """A note as stored remotely (a Gmail message in the sync label)."""
    id: str
    subject: str = ""
    date_text: str = ""
    date: datetime = None
    snippet: str = ""
    headers: List[Dict[str, str]] = field(default_factory=list)
    encoded_body: str = ""

    def body(self) -> str:
        """Decode the transport-encoded (URL-safe base64) body as UTF-8."""
        return decode_body(self.id, self.encoded_body)

    def value(self, name: str) -> str:
        """Return the text for a template field. Unknown names yield ''."""
        if name == "id":
            return self.id
        if name == "subject":
            return self.subject
        if name == "date":
            return self.date_text
        if name == "snippet":
            return self.snippet
        if name == "headers":
            return "\n".join(f"{h.get('name', '')}: {h.get('value', '')}" for h in self.headers)
        if name == "body":
            return self.body()
        return ""


@dataclass(frozen=True)
class ListItem:
    """Pipeline-local projection of a fetched note."""
    id: str
    content: str
    subject: str
    snippet: str
    date: datetime
    date_text: str = ""

    def value(self, name: str) -> str:
        if name == "id":
            return self.id
        if name == "subject":
            return self.subject
        if name == "date":
            return self.date_text
        if name == "snippet":
            return self.snippet
        return ""


def decode_body(item_id: str, data: str) -> str:
    """Decode a Gmail body payload.

    Gmail omits padding on some payloads, so it is restored before decoding.
    Raises ItemFetchError on malformed base64 or non UTF-8 content.
    """
    if not data:
        return ""
    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise ItemFetchError(item_id, f"failed to decode body: {e}") from e
