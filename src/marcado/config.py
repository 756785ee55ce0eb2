"""ContextVar-based compile configuration for Marcado.

An HtmlCompiler created without an explicit config picks up the config that
is active in the current context. Compilers never mutate their config, so a
single compiler can serve concurrent compilations.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    from marcado import HtmlCompiler, CompileConfig
    compiler = HtmlCompiler(CompileConfig(sanitize=True))

    # Or scoped default for every compiler created in the block
    with compile_config_context(CompileConfig(sanitize=True)):
        html = to_html(tree)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from marcado.utils.escape import ENTITY_MODES, EntityMode


@dataclass(frozen=True, slots=True)
class CompileConfig:
    """Immutable compile configuration.

    Attributes:
        sanitize: Escape literal HTML nodes instead of emitting them verbatim
        entities: Encoder mode for non-ASCII characters ("true", "numbers",
            or "escape")
        xhtml: Close void elements as ``<br />`` instead of ``<br>``
        footnote_backref_label: Label of the anchor that links a footnote
            back to its reference
        max_depth: Deepest node nesting the compiler accepts, counted in
            nodes below the root; deeper trees raise ``NestingDepthError``

    """

    sanitize: bool = False
    entities: EntityMode = "true"
    xhtml: bool = False
    footnote_backref_label: str = "↩"
    max_depth: int = 100

    def __post_init__(self) -> None:
        if self.entities not in ENTITY_MODES:
            msg = f"entities must be one of {sorted(ENTITY_MODES)}, got {self.entities!r}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be positive, got {self.max_depth}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "CompileConfig":
        """Create CompileConfig from dictionary.

        Only includes keys that are valid CompileConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = CompileConfig.from_dict({
            ...     "sanitize": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.sanitize
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CompileConfig = CompileConfig()

_compile_config: ContextVar[CompileConfig] = ContextVar(
    "compile_config",
    default=_DEFAULT_CONFIG,
)


def get_compile_config() -> CompileConfig:
    """Get the compile configuration active in this context."""
    return _compile_config.get()


def set_compile_config(config: CompileConfig) -> None:
    """Set compile configuration for the current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _compile_config.set(config)


def reset_compile_config() -> None:
    """Reset to default configuration."""
    _compile_config.set(_DEFAULT_CONFIG)


@contextmanager
def compile_config_context(config: CompileConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Example:
        >>> with compile_config_context(CompileConfig(sanitize=True)):
        ...     html = to_html(tree)  # sanitize is True here
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _compile_config.get()
    _compile_config.set(config)
    try:
        yield
    finally:
        _compile_config.set(previous)


__all__ = [
    "CompileConfig",
    "compile_config_context",
    "get_compile_config",
    "reset_compile_config",
    "set_compile_config",
]
