"""Note sync operations: list, get, put and trash.

These tie the Gmail store, the retrieval pipeline, the sort engine and the
confirmation loop together for the CLI commands.
"""

import glob
import logging
import os
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from . import mail
from .confirm import confirm_and_apply
from .models import ListItem, SyncLabel
from .pipeline import DEFAULT_MAX_WORKERS, RetrievalResult, retrieve
from .sorting import SortCriterion, sort_items
from .template import FormatTemplate

logger = logging.getLogger(__name__)

BODY_TEMPLATE = FormatTemplate("{body}")


def fetch_notes(
    store: mail.GmailStore,
    label: SyncLabel,
    template: FormatTemplate,
    criteria: Sequence[SortCriterion] = (),
    query: Optional[str] = "",
    ids: Iterable[str] = (),
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> RetrievalResult:
    """
    Retrieve, render and sort notes.

    Args:
        store: Mailbox access
        label: The resolved sync label
        template: Content template for each note
        criteria: Sort criteria applied after every fetch has completed
        query: Gmail search within the label; None skips the search so only
            ``ids`` are fetched
        ids: Explicit note ids, merged with the search results
        max_workers: Concurrency cap for the fetches

    Returns:
        RetrievalResult whose items are sorted by ``criteria``
    """
    item_ids = list(dict.fromkeys(ids))
    if query is not None:
        item_ids.extend(mail.list_message_ids(store, label.id, query))

    result = retrieve(item_ids, template, partial(mail.get_message, store), max_workers=max_workers)
    result.items = sort_items(result.items, criteria)
    return result


def note_path(dest: str, filename_template: FormatTemplate, item: ListItem) -> Path:
    name = filename_template.render(item.value)
    return Path(dest) / name if dest else Path(name)


def save_note(dest: str, filename_template: FormatTemplate, item: ListItem) -> Path:
    """Write a note's rendered content to ``dest``/<rendered file name>."""
    path = note_path(dest, filename_template, item)
    path.write_text(item.content, encoding='utf-8')
    logger.debug(f"Wrote {path}")
    return path


def expand_sources(src: str, patterns: Iterable[str]) -> List[str]:
    """
    Expand file patterns; relative patterns are resolved under ``src``.

    ``**`` matches any number of directories. Directories are skipped.
    """
    files = []
    for pattern in patterns:
        if not os.path.isabs(pattern) and src:
            pattern = os.path.join(src, pattern)
        matches = sorted(glob.glob(pattern, recursive=True))
        if not matches:
            logger.warning(f"No files match {pattern}")
        files.extend(f for f in matches if os.path.isfile(f))
    return files


def put_file(store: mail.GmailStore, label: SyncLabel, path: str) -> dict:
    """
    Upload a file as a note, replacing an existing note with the same title.

    The title is the file name without its extension. The first note in the
    label whose subject matches is trashed before the new one is inserted.
    """
    content = Path(path).read_bytes()
    title = os.path.splitext(os.path.basename(path))[0]

    existing = mail.list_message_ids(store, label.id, f"subject:({title})", max_results=1)
    if existing:
        logger.debug(f"Replacing note {existing[0]} ({title})")
        mail.trash_message(store, existing[0])

    raw = mail.build_note_message(title, content, store.user_id)
    return mail.insert_message(store, raw, [label.id])


def trash_notes(
    store: mail.GmailStore,
    items: Sequence[ListItem],
    confirm: bool,
    prompt: Callable[[str], str] = input,
    echo: Callable[[str], None] = print,
) -> List[str]:
    """Trash notes in order, asking first when ``confirm`` is set."""
    return confirm_and_apply(
        items, confirm, partial(mail.trash_message, store), prompt=prompt, echo=echo
    )
