"""
Unit tests for format templates and note field rendering.
"""

import base64

import pytest

from pmsync.sdk.exceptions import ItemFetchError
from pmsync.sdk.models import RemoteItem
from pmsync.sdk.template import FormatTemplate


def _item(**kwargs):
    defaults = {"id": "m1", "subject": "Hello", "date_text": "01 Jan 21 00:00 +0000"}
    defaults.update(kwargs)
    return RemoteItem(**defaults)


class TestRender:
    """Tests for FormatTemplate.render()."""

    def test_default_list_format(self):
        template = FormatTemplate("{id} {subject} ({date})")
        assert template.render(_item().value) == "m1 Hello (01 Jan 21 00:00 +0000)"

    def test_template_without_fields_is_unchanged(self):
        template = FormatTemplate("nothing to see here")
        assert template.render(_item().value) == "nothing to see here"

    def test_unknown_placeholders_are_kept_verbatim(self):
        template = FormatTemplate("{subject} {nope} {{}} {ID}")
        assert template.render(_item().value) == "Hello {nope} {{}} {ID}"

    def test_absent_fields_render_empty(self):
        template = FormatTemplate("[{subject}|{snippet}]")
        assert template.render(RemoteItem(id="x").value) == "[|]"

    def test_repeated_field_looked_up_once(self):
        calls = []

        def lookup(name):
            calls.append(name)
            return "v"

        assert FormatTemplate("{id}-{id}-{id}").render(lookup) == "v-v-v"
        assert calls == ["id"]

    def test_headers_render_as_lines(self):
        item = _item(headers=[
            {"name": "Subject", "value": "Hello"},
            {"name": "Date", "value": "01 Jan 21 00:00 +0000"},
        ])
        rendered = FormatTemplate("{headers}").render(item.value)
        assert rendered == "Subject: Hello\nDate: 01 Jan 21 00:00 +0000"


class TestBody:
    """Tests for decoding the {body} field."""

    def test_body_is_decoded(self):
        data = base64.urlsafe_b64encode("héllo wörld".encode("utf-8")).decode()
        assert FormatTemplate("{body}").render(_item(encoded_body=data).value) == "héllo wörld"

    def test_unpadded_body_is_decoded(self):
        data = base64.urlsafe_b64encode(b"ab").decode().rstrip("=")
        assert FormatTemplate("{body}").render(_item(encoded_body=data).value) == "ab"

    def test_malformed_body_raises(self):
        item = _item(encoded_body="!!!not base64!!!")
        with pytest.raises(ItemFetchError) as exc_info:
            FormatTemplate("{body}").render(item.value)
        assert exc_info.value.item_id == "m1"

    def test_non_utf8_body_raises(self):
        data = base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode()
        with pytest.raises(ItemFetchError):
            FormatTemplate("{body}").render(_item(encoded_body=data).value)

    def test_body_not_decoded_unless_used(self):
        item = _item(encoded_body="!!!not base64!!!")
        assert FormatTemplate("{id}").render(item.value) == "m1"


def test_fields_lists_recognized_placeholders():
    template = FormatTemplate("{id} {subject} {unknown}")
    assert template.fields == frozenset({"id", "subject"})
