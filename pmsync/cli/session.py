"""Per-invocation settings and mailbox connection for CLI commands."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from pmsync.sdk import mail
from pmsync.sdk.auth import load_client_config
from pmsync.sdk.config import load_config
from pmsync.sdk.exceptions import ConfigurationError
from pmsync.sdk.handshake import obtain_credential
from pmsync.sdk.models import SyncLabel

logger = logging.getLogger(__name__)

# Settings sections that must be mappings.
SECTIONS = ("list", "get", "put", "fetch")


@dataclass
class Settings:
    """Global options after applying flags, environment and config file."""
    userid: str
    label: str
    credentials: str
    token: str
    client_id: Optional[str]
    client_secret: Optional[str]
    auth_port: int
    workers: int
    config: dict

    @classmethod
    def resolve(cls, **options) -> "Settings":
        """Fill options left unset on the command line from the config file."""
        config = load_config()
        for name in SECTIONS:
            if not isinstance(config.get(name), dict):
                raise ConfigurationError(f"setting '{name}' must be a mapping, got {config.get(name)!r}")

        def pick(name, default=None):
            value = options.get(name)
            return value if value is not None else config.get(name, default)

        try:
            auth_port = int(pick("auth_port"))
            workers = int(config["fetch"].get("workers", 8))
        except (TypeError, ValueError, OverflowError) as e:
            raise ConfigurationError(f"invalid numeric setting: {e}") from e
        if not 0 <= auth_port <= 65535:
            raise ConfigurationError(f"auth port out of range: {auth_port}")
        if workers < 1:
            raise ConfigurationError(f"fetch.workers must be at least 1, got {workers}")

        return cls(
            userid=pick("userid"),
            label=pick("label"),
            credentials=pick("credentials"),
            token=pick("token"),
            client_id=pick("client_id"),
            client_secret=pick("client_secret"),
            auth_port=auth_port,
            workers=workers,
            config=config,
        )

    def section(self, name: str) -> dict:
        value = self.config.get(name)
        return value if isinstance(value, dict) else {}


def load_client(settings: Settings) -> dict:
    return load_client_config(settings.credentials, settings.client_id, settings.client_secret)


def connect(settings: Settings) -> Tuple[mail.GmailStore, SyncLabel]:
    """
    Authorize (running the handshake if needed) and resolve the sync label.

    Raises:
        ConfigurationError: Missing client configuration or label.
        AuthorizationError: The handshake failed.
    """
    client_config = load_client(settings)
    creds = obtain_credential(settings.token, client_config, settings.auth_port)
    store = mail.GmailStore(creds, user_id=settings.userid)
    label = mail.resolve_label(store, settings.label)
    logger.debug(f"Using label '{label.name}' ({label.id})")
    return store, label
