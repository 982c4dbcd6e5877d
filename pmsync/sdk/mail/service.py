"""Gmail service factory for the pmsync SDK."""

import logging
import threading
from typing import Any, Callable

from googleapiclient.discovery import build

logger = logging.getLogger(__name__)


def get_gmail_service(creds: Any) -> Any:
    """
    Build an authenticated Gmail API service object.

    Args:
        creds: google.oauth2.credentials.Credentials from the handshake

    Returns:
        Gmail API service object
    """
    logger.debug("Building Gmail service")
    return build("gmail", "v1", credentials=creds, cache_discovery=False)


class GmailStore:
    """
    Access to one user's mailbox.

    The underlying HTTP transport is not thread-safe, so each thread that
    touches the store gets its own service object, built lazily from the
    shared credential.
    """

    def __init__(
        self,
        creds: Any,
        user_id: str = "me",
        service_factory: Callable[[Any], Any] = get_gmail_service,
    ):
        self.creds = creds
        self.user_id = user_id
        self._service_factory = service_factory
        self._local = threading.local()

    @property
    def service(self) -> Any:
        service = getattr(self._local, "service", None)
        if service is None:
            service = self._service_factory(self.creds)
            self._local.service = service
        return service

    def messages(self) -> Any:
        return self.service.users().messages()

    def labels(self) -> Any:
        return self.service.users().labels()
