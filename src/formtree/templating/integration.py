"""Kida environment setup.

Creates a kida Environment with formtree's view filters registered,
or installs them on an environment the application already owns.
"""

from collections.abc import Callable
from typing import Any

from kida import Environment

from formtree.templating.filters import BUILTIN_FILTERS
from formtree.view import View, get_view


def register(env: Environment, filters: dict[str, Callable[..., Any]] | None = None) -> Environment:
    """Install formtree filters (and *filters*, which may override them) on *env*."""
    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(filters)
    env.add_global("get_view", get_view)
    return env


def create_environment(
    loader: Any = None,
    *,
    autoescape: bool = True,
    filters: dict[str, Callable[..., Any]] | None = None,
) -> Environment:
    """Create a kida Environment ready to render form views.

    *loader* is any kida loader (``FileSystemLoader``, ``PackageLoader``,
    ...); without one, templates can still be built with ``from_string``.
    """
    options: dict[str, Any] = {"autoescape": autoescape}
    if loader is not None:
        options["loader"] = loader
    return register(Environment(**options), filters)


def render_view(env: Environment, source: str, view: View, /, **context: Any) -> str:
    """Render a template string with *view* bound as ``form``."""
    template = env.from_string(source)
    return template.render({"form": view, **context})
