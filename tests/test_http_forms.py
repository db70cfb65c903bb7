"""Tests for formtree.http — form body parsing and flattening to raw input."""

import logging

import pytest

from formtree.binder import bind
from formtree.errors import ConfigurationError
from formtree.fields import integer, text
from formtree.http import FormData, parse_form_data, raw_input
from formtree.paths import FieldPath
from formtree.result import Success
from formtree.tree import label, record

# ---------------------------------------------------------------------------
# FormData unit tests
# ---------------------------------------------------------------------------


class TestFormData:
    def test_getitem_returns_first(self) -> None:
        form = FormData({"color": ["red", "blue"]})
        assert form["color"] == "red"

    def test_getitem_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            FormData({})["missing"]

    def test_get_with_default(self) -> None:
        form = FormData({})
        assert form.get("missing") is None
        assert form.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        form = FormData({"tags": ["python", "web"]})
        assert form.get_list("tags") == ["python", "web"]
        assert form.get_list("missing") == []

    def test_len_and_iter(self) -> None:
        form = FormData({"a": ["1"], "b": ["2"]})
        assert len(form) == 2
        assert set(form) == {"a", "b"}

    def test_repr(self) -> None:
        assert "alice" in repr(FormData({"name": ["alice"]}))


# ---------------------------------------------------------------------------
# raw_input
# ---------------------------------------------------------------------------


class TestRawInput:
    def test_paths_parsed(self) -> None:
        raw = raw_input(FormData({"package.version": ["1.0"]}))
        assert raw[FieldPath.parse("package.version")] == "1.0"

    def test_first_value_kept(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="formtree.http"):
            raw = raw_input(FormData({"tag": ["a", "b"]}))
        assert raw[FieldPath.parse("tag")] == "a"
        assert "tag" in caplog.text

    def test_empty_value_list_is_absent(self) -> None:
        raw = raw_input(FormData({"tag": []}))
        assert FieldPath.parse("tag") not in raw


# ---------------------------------------------------------------------------
# parse_form_data
# ---------------------------------------------------------------------------


class TestParseFormData:
    @pytest.mark.asyncio
    async def test_urlencoded(self) -> None:
        form = await parse_form_data(
            b"author.name=Ann&package.version=0.1&empty=",
            "application/x-www-form-urlencoded; charset=utf-8",
        )
        assert form["author.name"] == "Ann"
        assert form["package.version"] == "0.1"
        assert form["empty"] == ""

    @pytest.mark.asyncio
    async def test_unsupported_content_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            await parse_form_data(b"{}", "application/json")

    @pytest.mark.asyncio
    async def test_multipart(self) -> None:
        pytest.importorskip("python_multipart")
        boundary = "----formtreeboundary"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="count"\r\n\r\n'
            "3\r\n"
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="upload"; filename="a.txt"\r\n'
            "Content-Type: text/plain\r\n\r\n"
            "hello\r\n"
            f"--{boundary}--\r\n"
        ).encode()
        form = await parse_form_data(body, f"multipart/form-data; boundary={boundary}")
        assert form["count"] == "3"
        assert "upload" not in form
        assert form.files == frozenset({"upload"})

    @pytest.mark.asyncio
    async def test_multipart_missing_boundary(self) -> None:
        pytest.importorskip("python_multipart")
        with pytest.raises(ValueError, match="boundary"):
            await parse_form_data(b"", "multipart/form-data")

    @pytest.mark.asyncio
    async def test_bind_end_to_end(self) -> None:
        tree = label("item", record(dict, title=text(), count=integer()))
        form = await parse_form_data(b"item.title=Pen&item.count=2", "application/x-www-form-urlencoded")
        assert bind(tree, raw_input(form)) == Success({"title": "Pen", "count": 2})

    @pytest.mark.asyncio
    async def test_multipart_without_dependency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import sys

        monkeypatch.setitem(sys.modules, "python_multipart.multipart", None)
        with pytest.raises(ConfigurationError, match=r"formtree\[forms\]"):
            await parse_form_data(b"", "multipart/form-data; boundary=x")
