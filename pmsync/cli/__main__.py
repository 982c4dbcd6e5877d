"""pmsync CLI - Gmail <--> file sync for small text notes."""

import logging
import os
from dotenv import load_dotenv
import click
from click_option_group import optgroup

from pmsync import __version__
from pmsync.sdk.auth import save_credential
from pmsync.sdk.exceptions import ConfigurationError
from pmsync.sdk.handshake import authorize

from . import session
from .config_commands import config_group as config_module
from .decorators import handle_errors
from .notes_commands import list_command, get_command, put_command, trash_command


# Configure logging at the application level
if not logging.root.handlers:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO),
                        format='%(asctime)s - %(levelname)s - %(message)s')
# Suppress noisy INFO logs from googleapiclient and google_auth_oauthlib
logging.getLogger('googleapiclient.discovery').setLevel(logging.WARNING)
logging.getLogger('googleapiclient.discovery_cache').setLevel(logging.WARNING)
logging.getLogger('google_auth_oauthlib.flow').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

USAGE_EPILOG = """\b
* create credentials at https://console.developers.google.com/apis/credentials
* download credentials.json
* pmsync auth
* pmsync get
* pmsync get -o file
"""


@click.group(epilog=USAGE_EPILOG)
@optgroup.group('Mailbox options')
@optgroup.option('--userid', default=None, help="Gmail user id (default: me).")
@optgroup.option('--label', default=None, help="Sync label (default: Notes/pomera_sync).")
@optgroup.group('Authorization options')
@optgroup.option('--credentials', '-c', metavar='FILE_NAME', default=None,
                 help="Your client configuration file from Google Developer Console (default: ./credentials.json).")
@optgroup.option('--token', '-t', metavar='FILE_NAME', default=None,
                 help="File path to read/write retrieved token (default: ./token.json).")
@optgroup.option('--client-id', envvar='PMSYNC_CLIENT_ID', default=None, help="If no credentials.json.")
@optgroup.option('--client-secret', envvar='PMSYNC_CLIENT_SECRET', default=None, help="If no credentials.json.")
@optgroup.option('--auth-port', metavar='NUMBER', type=click.IntRange(0, 65535), default=None,
                 help="Callback port used when a command needs a new token (default: 7878).")
@click.version_option(__version__, prog_name='pmsync')
@click.pass_context
def pmsync(ctx, userid, label, credentials, token, client_id, client_secret, auth_port):
    """Gmail<-->file sync for Pomera DM200.

    Notes are kept as mail messages under a single Gmail label.
    """
    if ctx.invoked_subcommand == 'config':
        return
    try:
        ctx.obj = session.Settings.resolve(
            userid=userid, label=label, credentials=credentials, token=token,
            client_id=client_id, client_secret=client_secret, auth_port=auth_port,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e))


@click.command()
@click.option('--port', type=click.IntRange(0, 65535), default=7676, show_default=True,
              help="A temporary port for OAuth authentication. 0 is for copy&paste to CLI.")
@click.pass_obj
@handle_errors
def auth(settings, port):
    """Update the token by authorizing again in the browser."""
    client_config = session.load_client(settings)
    creds = authorize(client_config, port)
    try:
        save_credential(settings.token, creds)
    except OSError as e:
        raise click.ClickException(f"failed to save token to {settings.token}: {e}")
    click.secho("Authorization complete.", fg="green", err=True)
    click.echo(f"Token saved to {settings.token}", err=True)


# Add commands to the group using add_command()
pmsync.add_command(auth, name='auth')
pmsync.add_command(list_command, name='list')
pmsync.add_command(list_command, name='ls')
pmsync.add_command(get_command, name='get')
pmsync.add_command(put_command, name='put')
pmsync.add_command(trash_command, name='trash')
pmsync.add_command(config_module, name='config')


def main():
    """Entry point for the CLI."""
    load_dotenv()
    pmsync()


if __name__ == "__main__":
    main()
