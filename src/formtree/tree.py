"""Form trees — the declarative structure of a form.

A form tree is a closed set of four immutable node types:

- ``Leaf``: one input field and its raw-text parser
- ``Labeled``: nests a subtree under a label (``author.name``)
- ``Product``: two sibling subtrees whose values are combined
- ``Validated``: a secondary check run after a subtree succeeds

Trees are only built through ``leaf``, ``label``, ``product`` and
``validate`` (and helpers composed from them)::

    user_form = record(
        User,
        name=validate(rule(required), text()),
        mail=validate(rule(email), text()),
    )
    release_form = product(
        label("author", user_form),
        label("package", package_form),
        Release,
    )

Every node knows the set of leaf paths beneath it, computed once at
construction. Nothing is mutated afterwards, so one tree can be bound
concurrently by any number of requests and reused under several
parents with different labels.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from formtree.errors import DefinitionError, PathLookupError
from formtree.paths import DEFAULT_SEPARATOR, ROOT, FieldPath
from formtree.result import Failure, Result, Success


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Leaf:
    """A single input field.

    ``parse`` turns raw submitted text into ``Success(value)`` or
    ``Failure(message)``. ``default`` is the pre-filled text shown on a
    fresh form and used when nothing was submitted. ``widget`` and
    ``choices`` are hints for renderers only; binding ignores them.
    """

    parse: Callable[[str], Result[str, Any]]
    default: str | None = None
    widget: str = "text"
    choices: tuple[tuple[str, str], ...] = ()
    paths: frozenset[FieldPath] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", frozenset({ROOT}))


@dataclass(frozen=True, slots=True)
class Labeled:
    """Internal node placing ``child`` under the path segment ``name``."""

    name: str
    child: "FormTree"
    paths: frozenset[FieldPath] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", frozenset(p.prepend(self.name) for p in self.child.paths))


@dataclass(frozen=True, slots=True)
class Product:
    """Internal node binding two siblings and combining their values."""

    left: "FormTree"
    right: "FormTree"
    combine: Callable[[Any, Any], Any]
    paths: frozenset[FieldPath] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", self.left.paths | self.right.paths)


@dataclass(frozen=True, slots=True)
class Validated:
    """Runs ``check`` on the child's value once the child has succeeded."""

    check: Callable[[Any], Result[str, Any]]
    child: "FormTree"
    paths: frozenset[FieldPath] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", self.child.paths)


type FormTree = Leaf | Labeled | Product | Validated


@dataclass(frozen=True, slots=True)
class LeafShape:
    """Shape of a node that renders as a single input."""

    leaf: Leaf


@dataclass(frozen=True, slots=True)
class GroupShape:
    """Shape of a node with labeled children, in declaration order."""

    labels: tuple[str, ...]


type Shape = LeafShape | GroupShape


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def leaf(
    default: str | None,
    parse: Callable[[str], Result[str, Any]],
    *,
    widget: str = "text",
    choices: tuple[tuple[str, str], ...] = (),
) -> Leaf:
    """Build a one-field tree."""
    return Leaf(parse, default, widget, tuple(choices))


def label(name: str, subtree: FormTree, *, separator: str = DEFAULT_SEPARATOR) -> Labeled:
    """Nest *subtree* under *name*; every path it defines gains the prefix.

    Raises:
        DefinitionError: If *name* is empty or contains *separator*.
    """
    if not isinstance(name, str) or not name:
        msg = f"Form labels must be non-empty strings, got {name!r}"
        raise DefinitionError(msg)
    if separator in name:
        msg = f"Form label {name!r} must not contain the path separator {separator!r}"
        raise DefinitionError(msg)
    return Labeled(name, subtree)


def product[A, B, C](left: FormTree, right: FormTree, combine: Callable[[A, B], C]) -> Product:
    """Combine two independent subtrees into one.

    Both sides are always bound, so errors from both are reported
    together. Their paths must not collide, and the rule is stricter
    than disjoint leaf paths: two sides sharing a top-level label are
    rejected even when the fields under it differ. Every label at a
    level then names exactly one subtree, which keeps ``subtree_at``
    and ``sub_view`` unambiguous.

    Raises:
        DefinitionError: If either side has an unlabeled field at its
            root, or both sides declare the same top-level label.
    """
    left_heads = _heads(left)
    right_heads = _heads(right)
    if None in left_heads or None in right_heads:
        msg = "product() needs labeled subtrees; an unlabeled field would collide with its sibling"
        raise DefinitionError(msg)
    shared = left_heads & right_heads
    if shared:
        names = ", ".join(sorted(str(name) for name in shared))
        msg = f"product() subtrees both define: {names}"
        raise DefinitionError(msg)
    return Product(left, right, combine)


def validate(check: Callable[[Any], Result[str, Any]], subtree: FormTree) -> Validated:
    """Apply *check* to *subtree*'s value after it binds successfully.

    *check* returns ``Success(new_value)`` or ``Failure(message)``. It is
    never called when *subtree* itself failed.
    """
    return Validated(check, subtree)


def check_labels(tree: FormTree, separator: str) -> None:
    """Reject a tree whose labels contain *separator*.

    ``label()`` only knows the separator it was given, so binding and
    views re-check against the configured one before using it.

    Raises:
        DefinitionError: If any label contains *separator*.
    """
    clashing = sorted({segment for path in tree.paths for segment in path.segments if separator in segment})
    if clashing:
        names = ", ".join(repr(name) for name in clashing)
        msg = f"Form labels {names} contain the configured path separator {separator!r}"
        raise DefinitionError(msg)


def _heads(tree: FormTree) -> set[str | None]:
    """First segment of every leaf path; None marks a root leaf."""
    return {p.segments[0] if p.segments else None for p in tree.paths}


# ---------------------------------------------------------------------------
# Helpers built from the primitives
# ---------------------------------------------------------------------------


def map_tree(fn: Callable[[Any], Any], subtree: FormTree) -> Validated:
    """Transform *subtree*'s value with a check that never fails."""
    return validate(lambda value: Success(fn(value)), subtree)


def record[T](build: Callable[..., T], /, **subtrees: FormTree) -> FormTree:
    """Label each keyword subtree and combine them into ``build(**values)``.

    Usage::

        @dataclass(frozen=True, slots=True)
        class Package:
            name: str
            version: tuple[int, ...]

        package_form = record(Package, name=text(), version=version_field)
    """
    if not subtrees:
        msg = "record() needs at least one subtree"
        raise DefinitionError(msg)
    items = iter(subtrees.items())
    first_name, first_tree = next(items)
    acc: FormTree = map_tree(lambda value, n=first_name: {n: value}, label(first_name, first_tree))
    for name, subtree in items:
        acc = product(acc, label(name, subtree), lambda values, value, n=name: {**values, n: value})
    return map_tree(lambda values: build(**values), acc)


def check[V](predicate: Callable[[V], bool], message: str) -> Callable[[V], Result[str, V]]:
    """Lift a predicate into a check function for ``validate``."""

    def run(value: V) -> Result[str, V]:
        if predicate(value):
            return Success(value)
        return Failure(message)

    return run


def rule[V](*validators: Callable[[V], str | None]) -> Callable[[V], Result[str, V]]:
    """Lift ``(value) -> str | None`` validators into one check function.

    Validators run in order; the first message returned becomes the
    failure. The value passes through unchanged on success.
    """

    def run(value: V) -> Result[str, V]:
        for validator in validators:
            error = validator(value)
            if error is not None:
                return Failure(error)
        return Success(value)

    return run


# ---------------------------------------------------------------------------
# Structural queries
# ---------------------------------------------------------------------------


def _child_labeled(tree: FormTree, name: str) -> FormTree | None:
    match tree:
        case Labeled():
            return tree.child if tree.name == name else None
        case Product():
            found = _child_labeled(tree.left, name)
            return found if found is not None else _child_labeled(tree.right, name)
        case Validated():
            return _child_labeled(tree.child, name)
        case Leaf():
            return None


def subtree_at(tree: FormTree, path: FieldPath) -> FormTree:
    """Return the node addressed by *path*, relative to *tree*.

    Raises:
        PathLookupError: If no labeled node sits at *path*.
    """
    node = tree
    for depth, segment in enumerate(path.segments):
        found = _child_labeled(node, segment)
        if found is None:
            raise PathLookupError(path, f"no label {segment!r} at depth {depth}")
        node = found
    return node


def labels(tree: FormTree) -> tuple[str, ...]:
    """Labels of the direct children of *tree*, in declaration order."""
    match tree:
        case Labeled():
            return (tree.name,)
        case Product():
            return labels(tree.left) + labels(tree.right)
        case Validated():
            return labels(tree.child)
        case Leaf():
            return ()


def as_leaf(tree: FormTree) -> Leaf | None:
    """The leaf *tree* wraps (looking through validators), or None."""
    match tree:
        case Leaf():
            return tree
        case Validated():
            return as_leaf(tree.child)
        case Labeled() | Product():
            return None


def shape(tree: FormTree) -> Shape:
    """Describe *tree* for renderers: one input, or labeled children."""
    found = as_leaf(tree)
    if found is not None:
        return LeafShape(found)
    return GroupShape(labels(tree))


def leaves(tree: FormTree, prefix: FieldPath = ROOT) -> Iterator[tuple[FieldPath, Leaf]]:
    """Yield ``(path, leaf)`` for every field, left to right, depth first."""
    match tree:
        case Leaf():
            yield prefix, tree
        case Labeled():
            yield from leaves(tree.child, prefix.append(tree.name))
        case Product():
            yield from leaves(tree.left, prefix)
            yield from leaves(tree.right, prefix)
        case Validated():
            yield from leaves(tree.child, prefix)
