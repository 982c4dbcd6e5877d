"""In-memory stand-ins for the Gmail API used by the unit tests."""

import base64
from unittest.mock import MagicMock

from googleapiclient.errors import HttpError


def encode_body(text: str) -> str:
    """Encode text the way Gmail returns body data (URL-safe, unpadded)."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def make_message(message_id, subject="", date="", body="", snippet=""):
    """Build a Gmail message resource as returned by messages.get(format='full')."""
    return {
        "id": message_id,
        "snippet": snippet,
        "payload": {
            "headers": [
                {"name": "Subject", "value": subject},
                {"name": "Date", "value": date},
            ],
            "body": {"data": encode_body(body)},
        },
    }


def not_found():
    return HttpError(MagicMock(status=404, reason="Not Found"), b"Not Found")


class _Request:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class _Messages:
    def __init__(self, gmail):
        self._gmail = gmail

    def list(self, userId, labelIds=None, q=None, pageToken=None, maxResults=None):
        gmail = self._gmail
        gmail.list_calls.append({"labelIds": labelIds, "q": q, "pageToken": pageToken, "maxResults": maxResults})

        def run():
            if q is None:
                ids = gmail.searches.get(None, list(gmail.notes))
            else:
                ids = gmail.searches.get(q, [])
            start = int(pageToken or 0)
            size = min(gmail.page_size, maxResults or gmail.page_size)
            page = ids[start:start + size]
            response = {"messages": [{"id": i, "threadId": i} for i in page]}
            if start + size < len(ids):
                response["nextPageToken"] = str(start + size)
            return response
        return _Request(run)

    def get(self, userId, id, format=None):
        gmail = self._gmail

        def run():
            gmail.fetched.append(id)
            if id in gmail.failing or id not in gmail.notes:
                raise not_found()
            return gmail.notes[id]
        return _Request(run)

    def trash(self, userId, id):
        gmail = self._gmail

        def run():
            if id in gmail.failing:
                raise not_found()
            gmail.trashed.append(id)
            return {"id": id, "labelIds": ["TRASH"]}
        return _Request(run)

    def insert(self, userId, body):
        gmail = self._gmail

        def run():
            gmail.inserted.append(body)
            return {"id": f"new-{len(gmail.inserted)}", "labelIds": body.get("labelIds", [])}
        return _Request(run)


class _Labels:
    def __init__(self, gmail):
        self._gmail = gmail

    def list(self, userId):
        return _Request(lambda: {"labels": list(self._gmail.labels_data)})


class FakeGmailService:
    """
    Minimal in-memory Gmail API: users().messages() and users().labels().

    ``searches`` maps a query string to the ids it returns; a missing q
    lists every message. Ids in ``failing`` raise HttpError on get/trash.
    """

    def __init__(self, messages=(), labels=None, page_size=100):
        self.notes = {m["id"]: m for m in messages}
        self.labels_data = labels if labels is not None else [
            {"id": "INBOX", "name": "INBOX", "type": "system"},
            {"id": "Label_1", "name": "Notes/pomera_sync", "type": "user"},
        ]
        self.page_size = page_size
        self.searches = {}
        self.failing = set()
        self.list_calls = []
        self.fetched = []
        self.trashed = []
        self.inserted = []

    def users(self):
        return self

    def messages(self):
        return _Messages(self)

    def labels(self):
        return _Labels(self)
