"""
Unit test fixtures.

Provides an in-memory Gmail service so SDK and CLI code can run end to end
without network access.
"""

import pytest

from pmsync.sdk.mail import GmailStore
from pmsync.sdk.models import SyncLabel

from gmail_fakes import FakeGmailService, make_message


@pytest.fixture
def sync_label():
    return SyncLabel(id="Label_1", name="Notes/pomera_sync")


@pytest.fixture
def gmail():
    """An in-memory Gmail service holding three notes."""
    return FakeGmailService([
        make_message("m1", "alpha", "01 Jan 21 00:00 +0000", "first note", "first"),
        make_message("m2", "beta", "03 Jan 21 00:00 +0000", "second note", "second"),
        make_message("m3", "gamma", "02 Jan 21 00:00 +0000", "third note", "third"),
    ])


@pytest.fixture
def store(gmail):
    return GmailStore(creds=None, service_factory=lambda creds: gmail)
