"""Gmail label operations."""

import logging
from typing import Dict, Any, List

from googleapiclient.errors import HttpError

from ..exceptions import LabelNotFoundError, RemoteOperationError
from ..models import SyncLabel
from ..timing import time_api_call
from .service import GmailStore

logger = logging.getLogger(__name__)


@time_api_call
def list_labels(store: GmailStore) -> List[Dict[str, Any]]:
    """
    List all Gmail labels.

    Returns:
        List of label dicts with 'id', 'name', 'type' fields
    """
    try:
        results = store.labels().list(userId=store.user_id).execute()
    except HttpError as e:
        raise RemoteOperationError("list labels", e) from e
    return results.get('labels', [])


def resolve_label(store: GmailStore, label_name: str) -> SyncLabel:
    """
    Find the sync label by exact name.

    Raises:
        LabelNotFoundError: If no label, or more than one, has that name.
    """
    matches = [label for label in list_labels(store) if label.get('name') == label_name]
    if not matches:
        raise LabelNotFoundError(f"Label {label_name!r} not found")
    if len(matches) > 1:
        raise LabelNotFoundError(f"Label {label_name!r} is ambiguous ({len(matches)} labels match)")

    label = matches[0]
    logger.debug(f"Label '{label_name}' has ID: {label['id']}")
    return SyncLabel(id=label['id'], name=label['name'])
