"""Tests for formtree.view — accessors, projection, and error aggregation."""

import pytest

from formtree.binder import bind
from formtree.config import FormConfig
from formtree.errors import DefinitionError, PathLookupError
from formtree.fields import boolean, text
from formtree.inputs import RawInput
from formtree.paths import FieldPath
from formtree.result import FieldError
from formtree.tree import GroupShape, LeafShape, label, product
from formtree.view import (
    View,
    descendant_errors,
    field_errors,
    field_value,
    get_view,
    sub_view,
    to_view,
)


def _bound_view(tree, data: dict[str, str]) -> View:
    raw = RawInput.from_mapping(data)
    result = bind(tree, raw)
    return to_view(tree, raw, () if result else result.error)


@pytest.fixture
def bad_release(release_form) -> View:
    return _bound_view(
        release_form,
        {
            "author.name": "Ann",
            "author.mail": "ann@example",
            "package.name": "formtree",
            "package.version": "0.oops",
        },
    )


class TestFreshView:
    def test_no_input_no_errors(self, release_form) -> None:
        view = get_view(release_form)
        assert view.input is None
        assert view.errors == ()
        assert not view.has_errors

    def test_field_value_falls_back_to_default(self, release_form) -> None:
        view = get_view(release_form)
        assert view.field_value("package.version") == "0.1"
        assert view.field_value("author.name") is None

    def test_checkbox_default(self) -> None:
        view = get_view(label("subscribe", boolean(default=True)))
        assert view.field_value("subscribe") == "on"

    def test_field_value_of_group_is_none(self, release_form) -> None:
        assert get_view(release_form).field_value("package") is None


class TestBoundView:
    def test_field_value_is_submitted_text(self, bad_release: View) -> None:
        assert bad_release.field_value("package.version") == "0.oops"

    def test_absent_field_value_is_none(self, release_form) -> None:
        view = _bound_view(release_form, {"author.name": "Ann"})
        assert view.field_value("package.version") is None

    def test_undeclared_field_value_raises(self, release_form) -> None:
        bound = _bound_view(release_form, {"author.name": "Ann"})
        with pytest.raises(PathLookupError):
            bound.field_value("author.nickname")
        with pytest.raises(PathLookupError):
            get_view(release_form).field_value("author.nickname")

    def test_field_errors_exact(self, bad_release: View) -> None:
        assert bad_release.field_errors("package.version") == ["Not a valid version number"]
        assert bad_release.field_errors("author.mail") == ["Not a valid email address"]
        assert bad_release.field_errors("author.name") == []
        assert bad_release.field_errors("package") == []

    def test_descendant_errors(self, bad_release: View) -> None:
        package_errors = bad_release.descendant_errors("package")
        assert package_errors == [FieldError(FieldPath.parse("package.version"), "Not a valid version number")]
        author_paths = [str(error.path) for error in bad_release.descendant_errors("author")]
        assert author_paths == ["author.mail"]

    def test_descendant_errors_of_root_is_everything(self, bad_release: View) -> None:
        assert bad_release.descendant_errors() == list(bad_release.errors)

    def test_function_forms(self, bad_release: View) -> None:
        assert field_errors("package.version", bad_release) == bad_release.field_errors("package.version")
        assert descendant_errors("author", bad_release) == bad_release.descendant_errors("author")
        assert field_value("author.name", bad_release) == "Ann"
        assert sub_view("package", bad_release) == bad_release.sub_view("package")


class TestSubView:
    def test_scoped_tree_and_errors(self, bad_release: View) -> None:
        package = bad_release.sub_view("package")
        assert package.prefix == FieldPath.parse("package")
        assert package.input is bad_release.input
        assert [str(error.path) for error in package.errors] == ["package.version"]

    def test_relative_accessors(self, bad_release: View) -> None:
        package = bad_release.sub_view("package")
        assert package.field_value("version") == "0.oops"
        assert package.field_errors("version") == ["Not a valid version number"]
        assert package.name == "package"

    def test_composes(self, bad_release: View) -> None:
        nested = bad_release.sub_view("package").sub_view("version")
        direct = bad_release.sub_view(FieldPath.parse("package").append("version"))
        assert nested == direct

    def test_leaf_sub_view(self, bad_release: View) -> None:
        version = bad_release.sub_view("package.version")
        assert version.is_leaf
        assert version.field_value() == "0.oops"
        assert version.field_errors() == ["Not a valid version number"]
        assert version.name == "package.version"

    def test_missing_path_raises(self, bad_release: View) -> None:
        with pytest.raises(PathLookupError, match="package.license"):
            bad_release.sub_view("package.license")

    def test_clean_sub_form_has_no_errors(self, bad_release: View) -> None:
        author = bad_release.sub_view("author")
        assert author.sub_view("name").errors == ()


class TestShape:
    def test_group_shape(self, bad_release: View) -> None:
        assert bad_release.shape == GroupShape(("author", "package"))
        assert bad_release.labels == ("author", "package")
        assert not bad_release.is_leaf

    def test_leaf_shape(self, bad_release: View) -> None:
        version = bad_release.sub_view("package.version")
        assert isinstance(version.shape, LeafShape)
        assert version.labels == ()

    def test_children(self, bad_release: View) -> None:
        names = [child.name for child in bad_release.sub_view("author").children()]
        assert names == ["author.name", "author.mail"]

    def test_recursive_walk(self, bad_release: View) -> None:
        def walk(view: View) -> list[str]:
            if view.is_leaf:
                return [view.name]
            return [name for child in view.children() for name in walk(child)]

        assert walk(bad_release) == ["author.name", "author.mail", "package.name", "package.version"]


class TestSeparator:
    def test_custom_separator_paths(self) -> None:
        tree = product(label("a", label("b", text())), label("c", text()), lambda x, y: (x, y))
        config = FormConfig(separator="-")
        view = to_view(tree, RawInput.from_mapping({"a-b": "one"}, "-"), (), config=config)
        assert view.field_value("a-b") == "one"
        assert view.sub_view("a").sub_view("b").name == "a-b"

    def test_label_containing_separator_rejected(self) -> None:
        with pytest.raises(DefinitionError):
            get_view(label("a-b", text()), config=FormConfig(separator="-"))
