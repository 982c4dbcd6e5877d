"""Concurrent retrieval of notes.

Each note id is fetched and rendered on a worker thread. Results flow back
to the calling thread through ``as_completed``, which is the only place the
working set is appended to, so no lock is needed around it. The call
returns only after every submitted fetch has reported.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, List

from .exceptions import ItemFetchError
from .models import ListItem, RemoteItem
from .template import FormatTemplate

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass
class ItemFailure:
    item_id: str
    error: Exception


@dataclass
class RetrievalResult:
    items: List[ListItem] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items) + len(self.failures)


def render_item(item: RemoteItem, template: FormatTemplate) -> ListItem:
    """Project a fetched note into a ListItem with rendered content."""
    content = template.render(item.value)
    return ListItem(
        id=item.id,
        content=content,
        subject=item.subject,
        snippet=item.snippet,
        date=item.date or datetime.now(timezone.utc),
        date_text=item.date_text,
    )


def retrieve(
    item_ids: Iterable[str],
    template: FormatTemplate,
    fetch: Callable[[str], RemoteItem],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> RetrievalResult:
    """
    Fetch and render every id concurrently.

    Args:
        item_ids: Note ids; duplicates are fetched once.
        template: Template used to render each note's content.
        fetch: Returns the full RemoteItem for an id. Called from worker threads.
        max_workers: Upper bound on concurrent fetches; 1 fetches sequentially
            in input order.

    Returns:
        RetrievalResult with one ListItem per successful fetch and one
        ItemFailure per failed fetch or decode. Item order is unspecified.
    """
    ids = list(dict.fromkeys(item_ids))
    result = RetrievalResult()
    if not ids:
        return result

    def task(item_id: str) -> ListItem:
        return render_item(fetch(item_id), template)

    workers = max(1, min(max_workers, len(ids)))
    logger.debug(f"Retrieving {len(ids)} notes with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(task, item_id): item_id for item_id in ids}
        for future in as_completed(futures):
            item_id = futures[future]
            try:
                result.items.append(future.result())
            except Exception as e:
                if not isinstance(e, ItemFetchError):
                    e = ItemFetchError(item_id, str(e))
                logger.warning(f"ERROR: {e}")
                result.failures.append(ItemFailure(item_id, e))

    logger.debug(f"Retrieved {len(result.items)} notes, {len(result.failures)} failed")
    return result
