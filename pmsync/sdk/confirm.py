"""Interactive per-item confirmation before a destructive action."""

import logging
from typing import Callable, Iterable, List

from .models import ListItem

logger = logging.getLogger(__name__)

PROMPT = "delete? [y/N]"


def _read_answer(prompt: Callable[[str], str]) -> str:
    try:
        return prompt(PROMPT) or ""
    except (EOFError, OSError) as e:
        logger.debug(f"No answer read ({e!r}), treating as 'no'")
        return ""


def is_yes(answer: str) -> bool:
    """Only an answer starting with 'y' or 'Y' counts as consent."""
    return answer[:1].lower() == "y"


def confirm_and_apply(
    items: Iterable[ListItem],
    confirm: bool,
    action: Callable[[str], object],
    prompt: Callable[[str], str] = input,
    echo: Callable[[str], None] = print,
) -> List[str]:
    """
    Show each item and apply ``action`` to its id, optionally after confirmation.

    Args:
        items: Items in display order (already sorted).
        confirm: Ask before each item when True; apply to all when False.
        action: Destructive operation, called with the item id. Its exceptions
            propagate immediately and stop the loop.
        prompt: Reads one line of user input; EOFError/OSError mean "no".
        echo: Writes an item's rendered content.

    Returns:
        Ids the action was applied to, in order.
    """
    applied = []
    for item in items:
        echo(item.content)
        if confirm and not is_yes(_read_answer(prompt)):
            logger.debug(f"Skipping {item.id}")
            continue
        action(item.id)
        applied.append(item.id)
    return applied
