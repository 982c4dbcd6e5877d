"""Gmail message search operations."""

import logging
from typing import List, Optional

from googleapiclient.errors import HttpError

from ..exceptions import RemoteOperationError
from ..timing import time_api_call
from .service import GmailStore

logger = logging.getLogger(__name__)


@time_api_call
def list_message_ids(
    store: GmailStore,
    label_id: str,
    query: str = "",
    max_results: Optional[int] = None,
) -> List[str]:
    """
    List ids of messages under a label matching a Gmail search query.

    Follows nextPageToken until every page is read (or max_results ids
    were collected).

    Args:
        store: Mailbox access
        label_id: Id of the sync label
        query: Gmail search syntax, passed through verbatim ("" matches all)
        max_results: Optional cap on the number of ids returned

    Returns:
        Message ids in the order Gmail returned them
    """
    logger.debug(f"Searching label {label_id} with query: '{query}'")

    list_kwargs = {"userId": store.user_id, "labelIds": [label_id]}
    if query:
        list_kwargs["q"] = query
    if max_results is not None:
        list_kwargs["maxResults"] = max_results

    ids = []
    page_token = None
    while True:
        if page_token:
            list_kwargs["pageToken"] = page_token
        try:
            results = store.messages().list(**list_kwargs).execute()
        except HttpError as e:
            raise RemoteOperationError("list messages", e) from e

        ids.extend(m['id'] for m in results.get('messages', []))
        if max_results is not None and len(ids) >= max_results:
            return ids[:max_results]

        page_token = results.get('nextPageToken')
        if not page_token:
            break

    logger.debug(f"Found {len(ids)} messages")
    return ids
