"""CLI decorators for error reporting and mailbox access."""

import logging
import sys
from functools import wraps

import click

from pmsync.sdk.exceptions import PmsyncError
from . import session

logger = logging.getLogger(__name__)


def handle_errors(f):
    """
    Report failures of a command and exit non-zero.

    pmsync errors carry enough context to print as a one-line message;
    anything else is logged with its traceback.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (click.ClickException, click.Abort, click.exceptions.Exit):
            raise
        except PmsyncError as e:
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
            sys.exit(1)
    return decorated_function


def require_store(f):
    """
    Decorator that connects to the mailbox before running a command.

    The wrapped command receives the GmailStore and resolved SyncLabel as
    its first two arguments, followed by the current Settings.
    """
    @click.pass_context
    @wraps(f)
    def decorated_function(ctx, *args, **kwargs):
        settings = ctx.obj
        store, label = session.connect(settings)
        return f(store, label, settings, *args, **kwargs)
    return decorated_function
