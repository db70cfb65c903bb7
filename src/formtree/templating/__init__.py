"""Renderer adapter: kida filters over form views.

Requires the ``templates`` extra (``pip install formtree[templates]``).
"""

from formtree.templating.filters import BUILTIN_FILTERS
from formtree.templating.integration import create_environment, register, render_view

__all__ = ["BUILTIN_FILTERS", "create_environment", "register", "render_view"]
