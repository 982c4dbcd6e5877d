"""Format templates for rendering notes.

A template such as ``"{id} {subject} ({date})"`` is tokenized once into a
sequence of literal and placeholder tokens. Rendering resolves each known
placeholder against a field lookup; unknown placeholders are emitted
verbatim.
"""

import re
from typing import Callable, List, NamedTuple, FrozenSet

FIELDS = frozenset({"id", "subject", "date", "snippet", "body", "headers"})

_PLACEHOLDER = re.compile(r"\{([A-Za-z_]+)\}")


class Token(NamedTuple):
    text: str
    is_field: bool


class FormatTemplate:
    """An immutable, pre-tokenized format string."""

    def __init__(self, source: str, fields: FrozenSet[str] = FIELDS):
        self.source = source
        self.tokens = _tokenize(source, fields)

    @property
    def fields(self) -> FrozenSet[str]:
        """The recognized placeholders used by this template."""
        return frozenset(t.text for t in self.tokens if t.is_field)

    def render(self, lookup: Callable[[str], str]) -> str:
        """Render the template.

        Args:
            lookup: Called once per distinct field in the template; must
                return the field's text ('' when absent). Exceptions raised
                by the lookup propagate to the caller.
        """
        values = {name: lookup(name) or "" for name in self.fields}
        return "".join(values[t.text] if t.is_field else t.text for t in self.tokens)

    def __repr__(self):
        return f"FormatTemplate({self.source!r})"


def _tokenize(source: str, fields: FrozenSet[str]) -> List[Token]:
    tokens = []
    pos = 0
    for match in _PLACEHOLDER.finditer(source):
        name = match.group(1)
        if name not in fields:
            continue
        if match.start() > pos:
            tokens.append(Token(source[pos:match.start()], False))
        tokens.append(Token(name, True))
        pos = match.end()
    if pos < len(source):
        tokens.append(Token(source[pos:], False))
    return tokens
