"""
InvokerConfig: Invocation defaults for preserve_context.

This module provides:

- find_config_file: Walk up directories to locate .preserve_context.toml
- InvokerConfig: Frozen settings shared by every invocation that uses it

Settings are read from the ``[invoker]`` table of `.preserve_context.toml`:

    [invoker]
    resize_policy = "fit"
    default_context = "list"

Example:
    >>> config = InvokerConfig.load()
    >>> config.resize_policy
    <ResizePolicy.STRICT: 'strict'>
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from preserve_context.errors import ConfigError, InvalidContextError
from preserve_context.types import CallContext, ResizePolicy

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".preserve_context.toml"
CONFIG_TABLE = "invoker"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.preserve_context.toml`.

    A project-level file applies to every directory below it, so a single
    file at the repository root covers all call sites in that tree.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


@dataclass(frozen=True)
class InvokerConfig:
    """
    Settings applied to each invocation.

    Attributes:
        resize_policy: What to do when an after continuation changes the
            number of values it was given.
        default_context: Calling context used by ``preserve_context`` when
            the call site does not name one.
    """

    resize_policy: ResizePolicy = ResizePolicy.STRICT
    default_context: CallContext = CallContext.SCALAR

    def __post_init__(self) -> None:
        # Accept string values; frozen, so assign through object.__setattr__
        object.__setattr__(self, "resize_policy", ResizePolicy.coerce(self.resize_policy))
        try:
            context = CallContext.coerce(self.default_context)
        except InvalidContextError as e:
            raise ConfigError(str(e)) from e
        object.__setattr__(self, "default_context", context)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> InvokerConfig:
        """
        Parse from a config dict.

        Args:
            d: Mapping with optional 'resize_policy' and 'default_context' keys.

        Returns:
            An InvokerConfig instance.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ConfigError(
                f"Unknown invoker setting(s): {sorted(unknown)}. "
                f"Valid settings are: {sorted(known)}"
            )

        return cls(**d)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> InvokerConfig:
        """
        Load settings from the nearest `.preserve_context.toml`.

        Returns defaults when no config file is found or it has no
        ``[invoker]`` table.

        Raises:
            ConfigError: If the file is not valid TOML or holds invalid settings.
        """
        path = find_config_file(start_dir)
        if path is None:
            return cls()

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        table = data.get(CONFIG_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[{CONFIG_TABLE}] in {path} must be a table")

        logger.debug("Loaded invoker config from %s", path)
        return cls.from_dict(table)

    def with_overrides(self, **kwargs: Any) -> InvokerConfig:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **kwargs)
