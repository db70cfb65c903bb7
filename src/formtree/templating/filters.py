"""Template filters over form views.

Registered on a kida ``Environment`` by ``create_environment`` or
``register``. Each takes the view first so templates read naturally::

    <input name="{{ form | input_name("mail") }}"
           value="{{ form | field_value("mail") }}"
           class="{{ form | error_class("mail") }}">
    {% for msg in form | field_errors("mail") %}
      <span class="error">{{ msg }}</span>
    {% end %}

Paths are relative to the view passed in, so a macro that receives
``form | sub_view("author")`` can render the author fields without
knowing where they sit in the larger form.
"""

import html
from typing import Any

from kida.template import Markup

from formtree.result import FieldError
from formtree.view import PathLike, View

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


def field_value(view: View | None, path: PathLike = "") -> str:
    """Text to re-display in a field; empty string when there is none.

    Example:
        <input value="{{ form | field_value("package.name") }}">

    """
    if view is None:
        return ""
    value = view.field_value(path)
    return "" if value is None else value


def field_errors(view: View | None, path: PathLike = "") -> list[str]:
    """Error messages recorded against exactly *path*.

    Safe on a missing view so fresh-form templates need no guard.
    """
    if view is None:
        return []
    return view.field_errors(path)


def descendant_errors(view: View | None, path: PathLike = "") -> list[FieldError]:
    """Every error at or under *path*, for a summary block above a sub-form.

    Example:
        {% for error in form | descendant_errors("package") %}
          <li>{{ error.path }}: {{ error.message }}</li>
        {% end %}

    """
    if view is None:
        return []
    return view.descendant_errors(path)


def sub_view(view: View, path: PathLike) -> View:
    """Scope *view* to the sub-form at *path*."""
    return view.sub_view(path)


def input_name(view: View, path: PathLike = "") -> str:
    """Absolute, rendered path; use as an input's ``name`` attribute."""
    return view.absolute(path).render(view.config.separator)


def input_id(view: View, path: PathLike = "") -> str:
    """Like ``input_name`` but safe for ``id``/``for`` attributes."""
    return "-".join(view.absolute(path).segments)


def checked(view: View | None, path: PathLike = "") -> str | Markup:
    """Output `` checked`` when a checkbox's value is truthy.

    Example:
        <input type="checkbox" name="{{ form | input_name("subscribe") }}"{{ form | checked("subscribe") }}>

    """
    value = field_value(view, path)
    if value.lower() in _TRUE_VALUES:
        return Markup(" checked")
    return ""


def selected(view: View | None, path: PathLike, key: Any) -> str | Markup:
    """Output `` selected`` on the ``<option>`` whose key was submitted."""
    if field_value(view, path) == str(key):
        return Markup(" selected")
    return ""


def error_class(view: View | None, path: PathLike = "", cls: str = "error") -> str:
    """*cls* when the field at *path* has errors, else empty string."""
    return html.escape(cls) if field_errors(view, path) else ""


# All built-in formtree filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "checked": checked,
    "descendant_errors": descendant_errors,
    "error_class": error_class,
    "field_errors": field_errors,
    "field_value": field_value,
    "input_id": input_id,
    "input_name": input_name,
    "selected": selected,
    "sub_view": sub_view,
}
