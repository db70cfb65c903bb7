"""Raw submitted input — the decoded path → text mapping a form binds against.

Transport adapters hand the core one text value per path. A path
missing from the mapping means "nothing was submitted"; the leaf at
that path decides whether that is an error.
"""

from collections.abc import Iterator, Mapping
from typing import Protocol

from formtree.paths import DEFAULT_SEPARATOR, FieldPath


class MultiValueSource(Protocol):
    """Anything with text keys and a ``get_list`` (``FormData``, query params)."""

    def __iter__(self) -> Iterator[str]: ...
    def get_list(self, key: str) -> list[str]: ...


class RawInput(Mapping[FieldPath, str]):
    """Immutable mapping from ``FieldPath`` to submitted text.

    Usage::

        raw = RawInput.from_mapping({"name": "Ann", "package.version": "0.1"})
        raw[FieldPath.parse("package.version")]   # "0.1"
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[FieldPath, str] | None = None) -> None:
        object.__setattr__(self, "_data", dict(data or {}))

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RawInput is immutable"
        raise AttributeError(msg)

    @classmethod
    def empty(cls) -> "RawInput":
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, str], separator: str = DEFAULT_SEPARATOR) -> "RawInput":
        """Build from text keys such as ``"package.version"``."""
        return cls({FieldPath.parse(key, separator): value for key, value in data.items()})

    @classmethod
    def from_multimap(cls, form: MultiValueSource, separator: str = DEFAULT_SEPARATOR) -> "RawInput":
        """Flatten a multi-valued mapping, keeping the first value per key.

        Keys submitted with no values are treated as absent.
        """
        data: dict[FieldPath, str] = {}
        for key in form:
            values = form.get_list(key)
            if values:
                data[FieldPath.parse(key, separator)] = values[0]
        return cls(data)

    def __getitem__(self, key: FieldPath) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[FieldPath]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawInput):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        items = ", ".join(f"{str(k)!r}: {v!r}" for k, v in self._data.items())
        return f"RawInput({{{items}}})"

    def to_dict(self, separator: str = DEFAULT_SEPARATOR) -> dict[str, str]:
        """Text-keyed copy, e.g. to re-populate a form in a template."""
        return {path.render(separator): value for path, value in self._data.items()}
