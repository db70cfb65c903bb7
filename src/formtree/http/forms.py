"""Transport adapter — decoded form bodies to ``RawInput``.

``FormData`` is an immutable multi-valued mapping (checkboxes and
multi-selects repeat keys). ``raw_input()`` flattens it to the single
text value per path that binding works with::

    form = await parse_form_data(body, content_type)
    result = bind(release_form, raw_input(form))

``python-multipart`` is an optional dependency
(``pip install formtree[forms]``). URL-encoded forms use stdlib
``urllib.parse``, no extra dependency.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from formtree.config import FormConfig, resolve_config
from formtree.inputs import RawInput

logger = logging.getLogger("formtree.http")


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    ``files`` holds the names of file fields that were submitted; their
    content never reaches a form tree.
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: frozenset[str] = frozenset(),
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", files)

    @property
    def files(self) -> frozenset[str]:
        """Names of file fields present in the submission."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def raw_input(form: FormData, *, config: FormConfig | None = None) -> RawInput:
    """Flatten *form* to one value per path, keeping the first value."""
    cfg = resolve_config(config)
    if form.files:
        logger.debug("ignoring file fields: %s", ", ".join(sorted(form.files)))
    repeated = [key for key in form if len(form.get_list(key)) > 1]
    if repeated:
        logger.debug("keeping first value of repeated fields: %s", ", ".join(repeated))
    return RawInput.from_multimap(form, cfg.separator)


async def parse_form_data(
    body: bytes,
    content_type: str,
) -> FormData:
    """Parse form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Returns:
        Parsed FormData instance.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If content type is not a supported form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return await _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    """Parse URL-encoded form data using stdlib."""
    from urllib.parse import parse_qs

    parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    return FormData(parsed)


async def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data using python-multipart.

    Raises ``ConfigurationError`` if ``python-multipart`` is not installed.
    """
    from formtree.errors import ConfigurationError

    try:
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install formtree[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    files: set[str] = set()

    # Track current part state
    current_headers: dict[str, str] = {}
    current_data = bytearray()
    current_field_name: str | None = None
    current_is_file = False

    def on_part_begin() -> None:
        nonlocal current_headers, current_data, current_field_name, current_is_file
        current_headers = {}
        current_data = bytearray()
        current_field_name = None
        current_is_file = False

    def on_part_data(data_chunk: bytes, start: int, end: int) -> None:
        current_data.extend(data_chunk[start:end])

    def on_part_end() -> None:
        if current_field_name is None:
            return
        if current_is_file:
            files.add(current_field_name)
        else:
            value = current_data.decode("utf-8", errors="replace")
            data.setdefault(current_field_name, []).append(value)

    def on_header_field(hdata: bytes, start: int, end: int) -> None:
        # Header field name, kept until its value arrives
        current_headers["_pending_field"] = hdata[start:end].decode("latin-1").lower()

    def on_header_value(hdata: bytes, start: int, end: int) -> None:
        nonlocal current_field_name, current_is_file
        field = current_headers.pop("_pending_field", "")
        value = hdata[start:end].decode("latin-1")
        current_headers[field] = value

        # Extract field name and filename from Content-Disposition
        if field == "content-disposition":
            _, params = parse_options_header(value.encode("latin-1"))
            name = params.get(b"name")
            if name is not None:
                current_field_name = name.decode("utf-8")
            if params.get(b"filename") is not None:
                current_is_file = True

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data, frozenset(files))
