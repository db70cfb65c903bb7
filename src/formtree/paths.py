"""Field paths — addressing nodes inside a nested form tree.

A ``FieldPath`` is an ordered tuple of non-empty label segments.
Paths are only turned into delimited text at the boundaries (input
names in rendered markup, keys in submitted data)::

    path = FieldPath.parse("package.version")
    path.segments          # ("package", "version")
    path.render()          # "package.version"
    FieldPath.parse("package").is_prefix_of(path)   # True

The root path (no segments) addresses the whole form.
"""

from dataclasses import dataclass

from formtree.errors import DefinitionError, PathLookupError, PathSyntaxError

DEFAULT_SEPARATOR = "."


@dataclass(frozen=True, slots=True, order=True)
class FieldPath:
    """Immutable, structurally compared sequence of path segments."""

    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for segment in self.segments:
            if not isinstance(segment, str) or not segment:
                msg = f"Path segments must be non-empty strings, got {self.segments!r}"
                raise PathSyntaxError(msg)

    @classmethod
    def root(cls) -> "FieldPath":
        return ROOT

    @classmethod
    def parse(cls, text: str, separator: str = DEFAULT_SEPARATOR) -> "FieldPath":
        """Split *text* on *separator*. The empty string is the root path.

        Raises:
            PathSyntaxError: If any segment is empty (``"a..b"``, ``".a"``).
        """
        if not text:
            return ROOT
        segments = tuple(text.split(separator))
        if "" in segments:
            msg = f"Empty segment in path {text!r}"
            raise PathSyntaxError(msg)
        return cls(segments)

    @classmethod
    def coerce(cls, path: "FieldPath | str", separator: str = DEFAULT_SEPARATOR) -> "FieldPath":
        """Accept either a ``FieldPath`` or its text form."""
        if isinstance(path, FieldPath):
            return path
        return cls.parse(path, separator)

    # -- Structure --

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def name(self) -> str | None:
        """The last segment, or None for the root path."""
        return self.segments[-1] if self.segments else None

    @property
    def parent(self) -> "FieldPath | None":
        if not self.segments:
            return None
        return FieldPath(self.segments[:-1])

    def append(self, label: str) -> "FieldPath":
        """Return the child path ``self + label``."""
        if not label:
            msg = "Path labels must be non-empty"
            raise DefinitionError(msg)
        return FieldPath((*self.segments, label))

    def prepend(self, label: str) -> "FieldPath":
        """Return ``label + self``; used when nesting a subtree under a label."""
        if not label:
            msg = "Path labels must be non-empty"
            raise DefinitionError(msg)
        return FieldPath((label, *self.segments))

    def join(self, other: "FieldPath") -> "FieldPath":
        """Concatenate two paths."""
        return FieldPath(self.segments + other.segments)

    def is_prefix_of(self, other: "FieldPath") -> bool:
        """True if *other* equals this path or lies underneath it."""
        n = len(self.segments)
        return other.segments[:n] == self.segments

    def is_strict_prefix_of(self, other: "FieldPath") -> bool:
        return len(other.segments) > len(self.segments) and self.is_prefix_of(other)

    def is_child_of(self, other: "FieldPath") -> bool:
        """True if this path is a direct child of *other*."""
        return len(self.segments) == len(other.segments) + 1 and other.is_prefix_of(self)

    def relative_to(self, prefix: "FieldPath") -> "FieldPath":
        """Strip *prefix* from the front of this path."""
        if not prefix.is_prefix_of(self):
            raise PathLookupError(self, f"not under {prefix.render()!r}")
        return FieldPath(self.segments[len(prefix.segments) :])

    # -- Text form --

    def render(self, separator: str = DEFAULT_SEPARATOR) -> str:
        """Join segments with *separator*; the inverse of ``parse``."""
        return separator.join(self.segments)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"FieldPath({self.render()!r})"


ROOT = FieldPath()


# Function forms, for callers that prefer them over methods


def parse(text: str, separator: str = DEFAULT_SEPARATOR) -> FieldPath:
    return FieldPath.parse(text, separator)


def append(parent: FieldPath, label: str) -> FieldPath:
    return parent.append(label)


def is_prefix_of(a: FieldPath, b: FieldPath) -> bool:
    return a.is_prefix_of(b)


def render(path: FieldPath, separator: str = DEFAULT_SEPARATOR) -> str:
    return path.render(separator)
