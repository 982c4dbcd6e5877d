"""Client configuration and credential storage for pmsync.

The client configuration identifies this application to Google (client id,
secret and endpoints). The credential is the user's delegated access token,
persisted between runs in Google's "authorized_user" JSON format.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Scopes required for note sync: label lookup plus message insert/trash.
SCOPES = [
    "https://www.googleapis.com/auth/gmail.labels",
    "https://www.googleapis.com/auth/gmail.modify",
]

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

CLIENT_TYPES = ("web", "installed")


def load_client_config(
    credentials_path: str,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
) -> dict:
    """
    Load the OAuth client configuration.

    If ``credentials_path`` exists it must be a client_secrets.json as
    downloaded from Google Cloud Console; whichever of the "web" or
    "installed" sections appears first is used. Otherwise an "installed"
    configuration is built from ``client_id`` and ``client_secret``.

    Returns:
        A dict with a single "web" or "installed" key, suitable for
        google_auth_oauthlib.flow.Flow.from_client_config().

    Raises:
        ConfigurationError: If no usable client configuration is available.
    """
    if not os.path.exists(credentials_path):
        if not client_id or not client_secret:
            raise ConfigurationError(
                f"ClientID or ClientSecret is empty (and {credentials_path} not found)"
            )
        logger.debug("Building client configuration from client id/secret")
        return {
            "installed": {
                "client_id": client_id,
                "client_secret": client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": ["http://localhost"],
            }
        }

    try:
        with open(credentials_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid JSON in {credentials_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"reading credentials file {credentials_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"no credentials found in {credentials_path}")

    # First of "web"/"installed" in document order wins.
    for key, section in data.items():
        if key in CLIENT_TYPES and isinstance(section, dict):
            missing = [k for k in ("client_id", "client_secret", "auth_uri", "token_uri") if not section.get(k)]
            if missing:
                raise ConfigurationError(
                    f"'{key}' client configuration in {credentials_path} is missing: {', '.join(missing)}"
                )
            logger.debug(f"Using '{key}' client configuration from {credentials_path}")
            return {key: section}

    raise ConfigurationError(f"no credentials found in {credentials_path}")


def get_client_type(client_config: dict) -> str:
    """Return "web" or "installed" for a loaded client configuration."""
    return next(key for key in client_config if key in CLIENT_TYPES)


def load_credential(token_path: str) -> Optional[Any]:
    """
    Load a stored credential.

    Returns:
        google.oauth2.credentials.Credentials, or None if the file is
        missing or cannot be parsed.
    """
    from google.oauth2.credentials import Credentials

    if not os.path.exists(token_path):
        logger.debug(f"{token_path} not found.")
        return None

    try:
        with open(token_path, 'r') as f:
            info = json.load(f)
        if not isinstance(info, dict):
            logger.warning(f"Ignoring credential in {token_path}: expected a JSON object")
            return None
        creds = Credentials.from_authorized_user_info(info)
        logger.debug(f"Credential loaded from {token_path}")
        return creds
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load credential from {token_path}: {e}")
        return None


def save_credential(token_path: str, creds: Any) -> None:
    """
    Persist a credential atomically.

    The JSON is written to a temporary file in the same directory and moved
    over ``token_path`` with os.replace(), so readers see either the old
    file or the complete new one.

    Raises:
        OSError: If the credential could not be written. The previous file,
            if any, is left untouched.
    """
    token_data = json.loads(creds.to_json())
    # Credentials.to_json() drops unset fields, but loading requires these keys.
    for key in ("refresh_token", "client_id", "client_secret"):
        token_data.setdefault(key, None)
    token_data["type"] = "authorized_user"

    target = Path(token_path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(token_data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, target)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    logger.debug(f"Credential saved to {token_path}")


def refresh_credential(creds: Any) -> bool:
    """
    Refresh an expired credential in place.

    Returns:
        True if the credential is usable afterwards, False if it cannot be
        refreshed (no refresh token, or the token endpoint rejected it).
    """
    from google.auth.exceptions import RefreshError, TransportError
    from google.auth.transport.requests import Request

    if creds.valid:
        return True
    if not creds.refresh_token:
        logger.info("Credential expired and no refresh token available.")
        return False
    try:
        creds.refresh(Request())
        logger.info("Credential refreshed successfully.")
        return True
    except (RefreshError, TransportError) as e:
        logger.warning(f"Failed to refresh credential: {e}")
        return False
