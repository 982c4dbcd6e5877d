"""OAuth 2.0 authorization handshake for pmsync.

When no usable credential is stored, a short-lived HTTP listener is bound
on localhost, the user's browser is pointed at Google's consent page and
the one-time code delivered to the listener's redirect URI is exchanged
for a credential. Port 0 selects a copy & paste mode with no listener.

Each handshake owns its listener; it serves a single callback and is shut
down before the code is exchanged.
"""

import logging
import queue
import sys
import threading
import webbrowser
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, urlparse
from wsgiref.simple_server import WSGIRequestHandler, make_server

from .auth import (
    SCOPES, get_client_type, load_credential, save_credential, refresh_credential,
)
from .exceptions import AuthorizationError

logger = logging.getLogger(__name__)

# Fixed anti-replay state sent with the authorization request.
STATE_TOKEN = "state-token"

CALLBACK_PATH = "/"

_PAGE = """
<html>
\t<head><title>{icon} pmsync</title></head>
\t<body onload="open(location, '_self').close();">
\t\t<div><span style="font-size:xx-large; color:{color}; border:solid thin {color};">{icon}</span> {result}</div>
\t\t<hr />
\t\t<p>This is a temporary page.<br />Please close it.</p>
\t</body>
</html>
"""


def render_result_page(success: bool) -> str:
    """Build the static page shown in the browser after the callback."""
    if success:
        return _PAGE.format(color="green", icon="&#10003;", result="Successfully authenticated!!")
    return _PAGE.format(color="red", icon="&#10008;", result="FAILED!")


class _QuietHandler(WSGIRequestHandler):
    """Request handler that logs to the module logger instead of stderr."""

    def log_message(self, format, *args):
        logger.debug("callback: " + format, *args)


class CallbackListener:
    """
    Single-use loopback listener that receives the authorization code.

    The server runs on its own daemon thread. The first request to the
    callback path hands its ``code`` parameter (possibly empty) to
    wait_for_code() through a one-slot queue; other paths get a 404.

    Raises:
        AuthorizationError: If the port cannot be bound.
    """

    def __init__(self, host: str = "localhost", port: int = 0):
        self._codes = queue.Queue(maxsize=1)
        try:
            self._server = make_server(host, port, self._app, handler_class=_QuietHandler)
        except OSError as e:
            raise AuthorizationError(f"failed to listen on {host}:{port}: {e}") from e
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="pmsync-auth-callback", daemon=True
        )

    @property
    def port(self) -> int:
        return self._server.server_port

    @property
    def redirect_uri(self) -> str:
        return f"http://localhost:{self.port}{CALLBACK_PATH}"

    def start(self) -> "CallbackListener":
        self._thread.start()
        logger.debug(f"Listening for the authorization callback on port {self.port}")
        return self

    def _app(self, environ, start_response):
        if environ.get("PATH_INFO", "/") != CALLBACK_PATH:
            start_response("404 Not Found", [("Content-Type", "text/plain")])
            return [b"Not Found"]

        params = parse_qs(environ.get("QUERY_STRING", ""))
        code = params.get("code", [""])[0]
        try:
            self._codes.put_nowait(code)
        except queue.Full:
            logger.debug("Ignoring extra authorization callback")

        start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
        return [render_result_page(bool(code)).encode("utf-8")]

    def wait_for_code(self, timeout: Optional[float] = None) -> str:
        """Block until the callback arrives, then tear the listener down."""
        try:
            return self._codes.get(timeout=timeout)
        except queue.Empty:
            raise AuthorizationError("timed out waiting for the authorization callback")
        finally:
            self.close()

    def close(self):
        if self._thread.is_alive():
            self._server.shutdown()
            self._thread.join()
        self._server.server_close()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()


def create_flow(client_config: dict, redirect_uri: str) -> Any:
    """Create a google_auth_oauthlib Flow for the configured client."""
    from google_auth_oauthlib.flow import Flow

    return Flow.from_client_config(client_config, scopes=SCOPES, redirect_uri=redirect_uri)


def _announce(message: str):
    print(message, file=sys.stderr)


def _open_browser(open_browser: Callable[[str], Any], url: str):
    try:
        if not open_browser(url):
            logger.warning("Could not open a browser; open the URL above manually.")
    except webbrowser.Error as e:
        logger.warning(f"Could not open a browser ({e}); open the URL above manually.")


def _extract_code(answer: str) -> str:
    """Accept either a bare code or the full redirected URL."""
    answer = answer.strip()
    if "code=" in answer:
        return parse_qs(urlparse(answer).query).get("code", [""])[0]
    return answer


def _manual_redirect_uri(client_config: dict) -> str:
    uris = client_config[get_client_type(client_config)].get("redirect_uris") or []
    return uris[0] if uris else "http://localhost"


def authorization_url(flow: Any) -> str:
    url, _ = flow.authorization_url(
        access_type="offline",
        prompt="consent",
        state=STATE_TOKEN,
    )
    return url


def authorize(
    client_config: dict,
    port: int,
    flow_factory: Callable[[dict, str], Any] = create_flow,
    open_browser: Callable[[str], Any] = webbrowser.open,
    prompt: Callable[[str], str] = input,
) -> Any:
    """
    Run the interactive handshake and return a fresh credential.

    Args:
        client_config: Loaded client configuration (see load_client_config).
        port: Loopback port for the callback; 0 prompts for the code instead.
        flow_factory: Builds the OAuth flow for a redirect URI.
        open_browser: Opens the authorization URL; failure is not fatal.
        prompt: Reads the pasted code in copy & paste mode.

    Raises:
        AuthorizationError: On bind failure, an empty code, or a failed exchange.
    """
    if port == 0:
        flow = flow_factory(client_config, _manual_redirect_uri(client_config))
        url = authorization_url(flow)
        _announce(f"Go to the following link in your browser:\n\n{url}\n")
        try:
            code = _extract_code(prompt("Enter the authorization code (or the redirected URL): "))
        except EOFError:
            code = ""
    else:
        with CallbackListener("localhost", port) as listener:
            flow = flow_factory(client_config, listener.redirect_uri)
            url = authorization_url(flow)
            _announce(f"Opening your browser for authorization. If it does not open, visit:\n\n{url}\n")
            _open_browser(open_browser, url)
            code = listener.wait_for_code()

    if not code:
        raise AuthorizationError("authorization failed: no authorization code received")

    logger.debug("Authorization code received, exchanging for a token.")
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        raise AuthorizationError(f"failed to retrieve token from web: {e}") from e
    return flow.credentials


def obtain_credential(
    token_path: str,
    client_config: dict,
    port: int,
    force: bool = False,
    **authorize_kwargs,
) -> Any:
    """
    Return a usable credential, running the handshake only when needed.

    A stored, valid credential is returned without network activity; an
    expired one with a refresh token is refreshed and re-saved. Otherwise
    the interactive handshake runs and its result is saved.

    Args:
        token_path: Where the credential is stored.
        client_config: Loaded client configuration.
        port: Callback port for the handshake (0 = copy & paste).
        force: Skip the stored credential and always run the handshake.
        **authorize_kwargs: Passed through to authorize().

    Raises:
        AuthorizationError: If the handshake fails.
    """
    if not force:
        creds = load_credential(token_path)
        if creds is not None:
            if creds.valid:
                logger.debug("Stored credential is valid.")
                return creds
            if refresh_credential(creds):
                _persist(token_path, creds)
                return creds
            logger.info("Stored credential is unusable, starting a new authorization.")

    creds = authorize(client_config, port, **authorize_kwargs)
    _persist(token_path, creds)
    return creds


def _persist(token_path: str, creds: Any):
    try:
        save_credential(token_path, creds)
    except OSError as e:
        # The credential stays usable for this run.
        logger.error(f"failed to cache oauth token to {token_path}: {e}")
