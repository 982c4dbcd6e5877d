"""CLI commands for listing, downloading, uploading and trashing notes."""

import logging
import os

import click

from pmsync.sdk import notes as sdk_notes
from pmsync.sdk.sorting import parse_criteria
from pmsync.sdk.template import FormatTemplate
from .decorators import handle_errors, require_store

logger = logging.getLogger(__name__)

FORMAT_HELP = "Line format; placeholders: {id}, {subject}, {date}, {snippet}, {body}, {headers}."
SORT_HELP = ("Sort criteria, a comma-separated list of [id, subject, date, snippet] "
             "(- means descending order). Default: -date,subject,id.")


def _template(settings, fmt):
    return FormatTemplate(fmt if fmt is not None else settings.section('list').get('format', ''))


def _criteria(settings, sort):
    return parse_criteria(sort or [settings.section('list').get('sort', '')])


def _split_ids(values):
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


@click.command('list')
@click.option('--format', '-f', 'fmt', default=None, help=FORMAT_HELP)
@click.option('--sort', multiple=True, help=SORT_HELP)
@click.argument('query', nargs=-1)
@handle_errors
@require_store
def list_command(store, label, settings, fmt, sort, query):
    """List notes (mail messages in the sync label).

    QUERY accepts Gmail advanced search syntax
    (https://support.google.com/mail/answer/7190).
    """
    result = sdk_notes.fetch_notes(
        store, label, _template(settings, fmt), _criteria(settings, sort),
        query=" ".join(query), max_workers=settings.workers,
    )
    for item in result.items:
        click.echo(item.content)


@click.command('get')
@click.option('--output', '-o', type=click.Choice(['stdout', 'file']), default='stdout',
              help="Output destination (default: stdout).")
@click.option('--format', '--fo', 'filename', default=None,
              help="File name format where --output=file ({subject}, {id}, {date}). Default: {subject}.txt")
@click.option('--dest', '-d', default=None,
              help="Output directory where --output=file. Default: ./pomera_sync")
@click.argument('query', nargs=-1)
@handle_errors
@require_store
def get_command(store, label, settings, output, filename, dest, query):
    """Display notes or download them as files."""
    get_settings = settings.section('get')
    filename_template = FormatTemplate(filename or get_settings.get('filename', '{subject}.txt'))
    dest = dest if dest is not None else get_settings.get('dest', '')

    if output == 'file' and dest and not os.path.isdir(dest):
        try:
            os.makedirs(dest, exist_ok=True)
        except OSError as e:
            raise click.ClickException(f"mkdir {dest}: {e}")

    result = sdk_notes.fetch_notes(
        store, label, sdk_notes.BODY_TEMPLATE, parse_criteria(["-date,subject,id"]),
        query=" ".join(query), max_workers=settings.workers,
    )

    for item in result.items:
        if output == 'file':
            click.echo(f"getting: {item.subject}", err=True)
            try:
                sdk_notes.save_note(dest, filename_template, item)
            except OSError as e:
                raise click.ClickException(f"create {sdk_notes.note_path(dest, filename_template, item)}: {e}")
        else:
            click.echo(item.content)


@click.command('put')
@click.option('--src', '-s', default=None, help="Input directory. Default: ./pomera_sync")
@click.argument('patterns', nargs=-1, required=True)
@handle_errors
@require_store
def put_command(store, label, settings, src, patterns):
    """Upload files as notes (Gmail messages).

    PATTERNS are file globs, relative to --src unless absolute; ** matches
    nested directories. A note with the same title is replaced.
    """
    src = src if src is not None else settings.section('put').get('src', '')
    for path in sdk_notes.expand_sources(src, patterns):
        click.echo(f"putting: {path}", err=True)
        try:
            sdk_notes.put_file(store, label, path)
        except OSError as e:
            raise click.ClickException(f"read {path}: {e}")


@click.command('trash')
@click.option('--id', 'ids', multiple=True,
              help="IDs shown by the 'list' subcommand to be deleted (repeatable or comma-separated).")
@click.option('--confirm/--no-confirm', '-i', default=True, help="Confirm each deletion (default: on).")
@click.option('--format', '-f', 'fmt', default=None, help=FORMAT_HELP)
@click.option('--sort', multiple=True, help=SORT_HELP)
@click.argument('query', nargs=-1)
@handle_errors
def trash_command(ids, confirm, fmt, sort, query):
    """Move notes to the trash.

    Notes are selected by --id and/or a Gmail search QUERY within the label.
    """
    ids = _split_ids(ids)
    if not ids and not query:
        raise click.UsageError("--id or args are required")
    _trash(ids=ids, confirm=confirm, fmt=fmt, sort=sort, query=query)


@require_store
def _trash(store, label, settings, ids, confirm, fmt, sort, query):
    result = sdk_notes.fetch_notes(
        store, label, _template(settings, fmt), _criteria(settings, sort),
        query=" ".join(query) if query else None, ids=ids, max_workers=settings.workers,
    )
    trashed = sdk_notes.trash_notes(store, result.items, confirm, prompt=input, echo=click.echo)
    logger.info(f"Trashed {len(trashed)} of {len(result.items)} notes")
