"""Tests for formtree.errors — exception hierarchy and error messages."""

import pytest

from formtree.errors import (
    ConfigurationError,
    DefinitionError,
    FormtreeError,
    PathLookupError,
    PathSyntaxError,
    UnwrapError,
)
from formtree.paths import FieldPath


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [ConfigurationError, DefinitionError, PathLookupError, PathSyntaxError, UnwrapError],
    )
    def test_all_are_formtree_errors(self, exc: type[Exception]) -> None:
        assert issubclass(exc, FormtreeError)

    def test_path_syntax_is_definition_error(self) -> None:
        assert issubclass(PathSyntaxError, DefinitionError)

    def test_lookup_error_is_builtin_lookup_error(self) -> None:
        assert issubclass(PathLookupError, LookupError)


class TestPathLookupError:
    def test_message(self) -> None:
        err = PathLookupError(FieldPath.parse("a.b"))
        assert str(err) == "No form node at path 'a.b'"
        assert err.path == FieldPath.parse("a.b")

    def test_message_with_detail(self) -> None:
        err = PathLookupError(FieldPath.parse("a"), "no label 'a' at depth 0")
        assert str(err) == "No form node at path 'a': no label 'a' at depth 0"


class TestUnwrapError:
    def test_carries_error(self) -> None:
        err = UnwrapError(("x",))
        assert err.error == ("x",)
        assert "unwrap()" in str(err)
