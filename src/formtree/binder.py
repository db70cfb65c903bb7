"""Binding — run a form tree against raw input.

Walks the tree depth first, left to right. Every leaf is parsed and
every sibling is visited even after an earlier one failed, so a single
bind reports every problem in the submission::

    result = bind(release_form, RawInput.from_mapping(form_data))
    if not result:
        for path, message in result.error:
            ...

A ``Validated`` node is the exception: its check only runs once the
wrapped subtree succeeded, and its own failure is reported against the
validated node's path.
"""

import logging
from collections.abc import Mapping
from typing import Any

from formtree.config import FormConfig, resolve_config
from formtree.inputs import RawInput
from formtree.paths import ROOT, FieldPath
from formtree.result import Errors, FieldError, Failure, Result, Success, combine
from formtree.tree import FormTree, Labeled, Leaf, Product, Validated, check_labels
from formtree.view import View, to_view

logger = logging.getLogger("formtree.binder")


def bind(tree: FormTree, raw_input: RawInput, *, config: FormConfig | None = None) -> Result[Errors, Any]:
    """Bind *raw_input* to *tree*.

    Returns:
        ``Success(value)`` when every field parsed and every check
        passed, otherwise ``Failure(errors)`` where *errors* is a tuple
        of ``FieldError`` in traversal order.

    Raises:
        DefinitionError: If a label contains the configured separator.
    """
    cfg = resolve_config(config)
    check_labels(tree, cfg.separator)
    result = _bind(tree, raw_input, ROOT, cfg)
    if isinstance(result, Failure):
        logger.debug("bind failed with %d error(s): %s", len(result.error), _summary(result.error, cfg))
    return result


def _bind(tree: FormTree, raw_input: RawInput, path: FieldPath, cfg: FormConfig) -> Result[Errors, Any]:
    match tree:
        case Leaf():
            return _bind_leaf(tree, raw_input, path, cfg)
        case Labeled():
            return _bind(tree.child, raw_input, path.append(tree.name), cfg)
        case Product():
            left = _bind(tree.left, raw_input, path, cfg)
            right = _bind(tree.right, raw_input, path, cfg)
            return combine(left, right, tree.combine)
        case Validated():
            inner = _bind(tree.child, raw_input, path, cfg)
            if isinstance(inner, Failure):
                return inner
            checked = tree.check(inner.value)
            if isinstance(checked, Failure):
                return Failure((FieldError(path, checked.error),))
            return checked
        case _:
            msg = f"Not a form tree node: {tree!r}"
            raise TypeError(msg)


def _bind_leaf(node: Leaf, raw_input: RawInput, path: FieldPath, cfg: FormConfig) -> Result[Errors, Any]:
    text = raw_input.get(path)
    if text is None:
        text = node.default if node.default is not None else ""
    elif cfg.strip_whitespace:
        text = text.strip()
    parsed = node.parse(text)
    if isinstance(parsed, Failure):
        return Failure((FieldError(path, parsed.error),))
    return parsed


def _summary(errors: Errors, cfg: FormConfig) -> str:
    return ", ".join(error.path.render(cfg.separator) or "<root>" for error in errors)


# ---------------------------------------------------------------------------
# Conveniences
# ---------------------------------------------------------------------------


def bind_view(
    tree: FormTree,
    raw_input: RawInput,
    *,
    config: FormConfig | None = None,
) -> tuple[View, Any | None]:
    """Bind and return ``(view, value)``.

    The view always carries the submitted input for re-display; *value*
    is None when binding failed.

    Usage::

        view, release = bind_view(release_form, raw)
        if release is None:
            return Template("release.html", form=view)
    """
    result = bind(tree, raw_input, config=config)
    match result:
        case Success(value=value):
            return to_view(tree, raw_input, (), config=config), value
        case Failure(error=errors):
            return to_view(tree, raw_input, errors, config=config), None


def post(tree: FormTree, data: Mapping[str, str], *, config: FormConfig | None = None) -> Result[Errors, Any]:
    """Bind a plain text-keyed mapping, e.g. ``{"package.version": "0.1"}``."""
    cfg = resolve_config(config)
    return bind(tree, RawInput.from_mapping(data, cfg.separator), config=cfg)
