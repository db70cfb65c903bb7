"""Form configuration.

FormConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from formtree.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Binding and rendering configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(separator="-", strip_whitespace=False)
    """

    # Paths
    separator: str = "."  # Joins path segments in input names and raw keys

    # Binding
    strip_whitespace: bool = True  # Strip submitted text before parsing

    def __post_init__(self) -> None:
        if len(self.separator) != 1 or self.separator.isspace():
            msg = f"separator must be a single non-space character, got {self.separator!r}"
            raise ConfigurationError(msg)


DEFAULT_CONFIG = FormConfig()


def resolve_config(config: FormConfig | None) -> FormConfig:
    """Return *config*, or the module default when it is None."""
    return DEFAULT_CONFIG if config is None else config
