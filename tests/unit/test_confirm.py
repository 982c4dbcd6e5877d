"""
Unit tests for the per-item confirmation loop.
"""

from datetime import datetime, timezone

import pytest

from pmsync.sdk.confirm import PROMPT, confirm_and_apply, is_yes
from pmsync.sdk.exceptions import RemoteOperationError
from pmsync.sdk.models import ListItem


def _items(*ids):
    when = datetime(2021, 1, 1, tzinfo=timezone.utc)
    return [ListItem(id=i, content=f"line {i}", subject=i, snippet="", date=when) for i in ids]


def _answers(*answers):
    it = iter(answers)

    def prompt(text):
        assert text == PROMPT
        return next(it)
    return prompt


class TestConfirmAndApply:

    def test_only_yes_applies(self):
        applied = []
        result = confirm_and_apply(
            _items("a", "b", "c"), True, applied.append,
            prompt=_answers("n", "", "y"), echo=lambda text: None,
        )
        assert applied == ["c"]
        assert result == ["c"]

    def test_items_echoed_in_order(self):
        echoed = []
        confirm_and_apply(
            _items("a", "b"), True, lambda item_id: None,
            prompt=_answers("n", "n"), echo=echoed.append,
        )
        assert echoed == ["line a", "line b"]

    def test_end_of_input_means_no(self):
        def closed(text):
            raise EOFError

        applied = []
        result = confirm_and_apply(_items("a", "b"), True, applied.append, prompt=closed, echo=lambda t: None)
        assert applied == []
        assert result == []

    def test_no_confirm_applies_all(self):
        applied = []

        def never(text):
            pytest.fail("should not prompt")

        confirm_and_apply(_items("a", "b", "c"), False, applied.append, prompt=never, echo=lambda t: None)
        assert applied == ["a", "b", "c"]

    def test_action_failure_stops_the_loop(self):
        applied = []

        def action(item_id):
            if item_id == "b":
                raise RemoteOperationError("trash message b", "403")
            applied.append(item_id)

        with pytest.raises(RemoteOperationError):
            confirm_and_apply(_items("a", "b", "c"), False, action, echo=lambda t: None)
        assert applied == ["a"]


@pytest.mark.parametrize("answer,expected", [
    ("y", True),
    ("Y", True),
    ("yes", True),
    ("Yeah", True),
    ("n", False),
    ("", False),
    ("ny", False),
    (" y", False),
])
def test_is_yes(answer, expected):
    assert is_yes(answer) is expected
