"""formtree — composable form definitions, binding, and views.

Declare a form once, bind submitted data against it on every request,
and hand either the typed value to application code or a ``View`` to a
renderer.

Basic usage::

    from formtree import bind_view, email, record, rule, text, validate

    user_form = record(
        User,
        name=text(),
        mail=validate(rule(email), text()),
    )

    view, user = bind_view(user_form, raw_input)
    if user is None:
        return Template("signup.html", form=view)

Templates (``pip install formtree[templates]``)::

    from formtree.templating import create_environment

Form bodies (``pip install formtree[forms]`` for multipart)::

    from formtree.http import parse_form_data, raw_input
"""

__version__ = "0.1.0"

_LAZY_IMPORTS: dict[str, str] = {
    # Paths
    "FieldPath": "formtree.paths",
    # Results
    "Failure": "formtree.result",
    "FieldError": "formtree.result",
    "Success": "formtree.result",
    # Trees
    "Labeled": "formtree.tree",
    "Leaf": "formtree.tree",
    "Product": "formtree.tree",
    "Validated": "formtree.tree",
    "check": "formtree.tree",
    "label": "formtree.tree",
    "leaf": "formtree.tree",
    "map_tree": "formtree.tree",
    "product": "formtree.tree",
    "record": "formtree.tree",
    "rule": "formtree.tree",
    "validate": "formtree.tree",
    # Input
    "RawInput": "formtree.inputs",
    # Binding
    "bind": "formtree.binder",
    "bind_view": "formtree.binder",
    "post": "formtree.binder",
    # Views
    "View": "formtree.view",
    "get_view": "formtree.view",
    "to_view": "formtree.view",
    # Fields and rules
    "boolean": "formtree.fields",
    "choice": "formtree.fields",
    "email": "formtree.fields",
    "in_range": "formtree.fields",
    "integer": "formtree.fields",
    "matches": "formtree.fields",
    "max_length": "formtree.fields",
    "min_length": "formtree.fields",
    "number": "formtree.fields",
    "one_of": "formtree.fields",
    "optional_integer": "formtree.fields",
    "optional_text": "formtree.fields",
    "required": "formtree.fields",
    "text": "formtree.fields",
    "textarea": "formtree.fields",
    "url": "formtree.fields",
    # Configuration and errors
    "FormConfig": "formtree.config",
    "ConfigurationError": "formtree.errors",
    "DefinitionError": "formtree.errors",
    "FormtreeError": "formtree.errors",
    "PathLookupError": "formtree.errors",
    "PathSyntaxError": "formtree.errors",
    "UnwrapError": "formtree.errors",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formtree`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
