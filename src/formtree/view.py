"""Views — an immutable snapshot of a form for renderers.

A ``View`` pairs a form tree with the input it was bound against (or
None for a fresh form) and the path-addressed errors binding produced.
Renderers read it through a small accessor surface and never match on
tree internals::

    view = to_view(release_form, raw, result.error)
    author = view.sub_view("author")
    author.field_value("name")            # submitted text for re-display
    author.field_errors("mail")           # ["Not a valid email address"]
    view.descendant_errors("package")     # every error inside the sub-form

Sub-views are projections: they share the parent's input and errors and
only change the prefix that relative paths are resolved against.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from formtree.config import DEFAULT_CONFIG, FormConfig, resolve_config
from formtree.inputs import RawInput
from formtree.paths import ROOT, FieldPath
from formtree.result import Errors, FieldError
from formtree.tree import FormTree, GroupShape, LeafShape, Shape, as_leaf, check_labels, labels, shape, subtree_at

type PathLike = FieldPath | str


@dataclass(frozen=True, slots=True)
class View:
    """Form tree + optional input + errors, scoped to ``prefix``.

    ``prefix`` is the absolute path of ``tree`` inside the form the view
    was created for. Paths in ``errors`` and keys in ``input`` are always
    absolute.
    """

    tree: FormTree
    input: RawInput | None = None
    errors: Errors = ()
    prefix: FieldPath = ROOT
    config: FormConfig = field(default=DEFAULT_CONFIG, compare=False)

    # -- Paths --

    def _path(self, path: PathLike) -> FieldPath:
        return FieldPath.coerce(path, self.config.separator)

    def absolute(self, path: PathLike = ROOT) -> FieldPath:
        """Absolute path of *path* (relative to this view)."""
        return self.prefix.join(self._path(path))

    @property
    def path(self) -> FieldPath:
        return self.prefix

    @property
    def name(self) -> str:
        """Rendered absolute path, suitable for an input ``name`` attribute."""
        return self.prefix.render(self.config.separator)

    # -- Structure --

    @property
    def shape(self) -> Shape:
        return shape(self.tree)

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.shape, LeafShape)

    @property
    def labels(self) -> tuple[str, ...]:
        match self.shape:
            case GroupShape(labels=names):
                return names
            case _:
                return ()

    def sub_view(self, path: PathLike) -> "View":
        """Project this view onto the subtree at *path*.

        Raises:
            PathLookupError: If no subtree exists at *path*.
        """
        relative = self._path(path)
        subtree = subtree_at(self.tree, relative)
        prefix = self.prefix.join(relative)
        errors = tuple(error for error in self.errors if prefix.is_prefix_of(error.path))
        return View(subtree, self.input, errors, prefix, self.config)

    def children(self) -> Iterator["View"]:
        """Sub-views of the labeled children, in declaration order."""
        for name in labels(self.tree):
            yield self.sub_view(FieldPath((name,)))

    # -- Values --

    def field_value(self, path: PathLike = ROOT) -> str | None:
        """Text to re-display in the field at *path*.

        The submitted text when input was bound; the field's default on
        a fresh form. None when nothing applies.

        Raises:
            PathLookupError: If the form declares nothing at *path*.
        """
        relative = self._path(path)
        found = subtree_at(self.tree, relative)
        if self.input is not None:
            return self.input.get(self.prefix.join(relative))
        node = as_leaf(found)
        return node.default if node is not None else None

    # -- Errors --

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def field_errors(self, path: PathLike = ROOT) -> list[str]:
        """Messages recorded against exactly *path*."""
        target = self.absolute(path)
        return [error.message for error in self.errors if error.path == target]

    def descendant_errors(self, path: PathLike = ROOT) -> list[FieldError]:
        """Errors at or under *path*, in traversal order."""
        target = self.absolute(path)
        return [error for error in self.errors if target.is_prefix_of(error.path)]


def to_view(
    tree: FormTree,
    raw_input: RawInput | None,
    errors: Errors = (),
    *,
    config: FormConfig | None = None,
) -> View:
    """Build a root view over *tree*.

    Raises:
        DefinitionError: If a label contains the configured separator.
    """
    cfg = resolve_config(config)
    check_labels(tree, cfg.separator)
    return View(tree, raw_input, tuple(errors), ROOT, cfg)


def get_view(tree: FormTree, *, config: FormConfig | None = None) -> View:
    """A fresh, unfilled view: no input, no errors, defaults for values."""
    return to_view(tree, None, (), config=config)


# Function forms matching the accessor names


def sub_view(path: PathLike, view: View) -> View:
    return view.sub_view(path)


def field_errors(path: PathLike, view: View) -> list[str]:
    return view.field_errors(path)


def descendant_errors(path: PathLike, view: View) -> list[FieldError]:
    return view.descendant_errors(path)


def field_value(path: PathLike, view: View) -> str | None:
    return view.field_value(path)
