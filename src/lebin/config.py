"""Codec configuration.

This module provides the configuration dataclass that selects between the
lenient (degrade to zero / report 0 written) and strict (raise) behaviours, and
a process-wide default that ``serialize``/``deserialize`` fall back to.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator

from .exceptions import LebinError


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for encode and decode passes.

    Attributes:
        precheck: Compute the size of the whole sequence before writing a single
            byte (default True). When False the encoder writes whole values until
            one would overflow the destination, then reports 0 bytes written.

        strict: Raise instead of degrading (default False).
            - Encode: InsufficientCapacityError instead of returning 0
            - Decode: InsufficientSourceError instead of zero-filled values

        require_little_endian_host: Refuse to build cursors on a big-endian
            host (default False). The wire format is little-endian on every
            host; this only reproduces the host check of C implementations
            that copy memory verbatim.

    Examples:
        ```python
        from lebin import CodecConfig, deserialize, int32

        # Embedded-style profile: no pre-check, never raise
        config = CodecConfig(precheck=False)

        # Fail loudly on truncated input
        value = deserialize(data, config=CodecConfig(strict=True)).to(int32)
        ```
    """

    precheck: bool = True
    strict: bool = False
    require_little_endian_host: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        for name in ("precheck", "strict", "require_little_endian_host"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be a bool, got {type(value).__name__}")

    def check_host(self) -> None:
        """Raise if the host byte order is not acceptable for this config."""
        if self.require_little_endian_host and sys.byteorder != "little":
            raise LebinError(f"Little-endian host required, running on {sys.byteorder}-endian")


_default = CodecConfig()


def get_config() -> CodecConfig:
    """Return the process-wide default configuration."""
    return _default


def set_config(config: CodecConfig | None = None, **changes: Any) -> CodecConfig:
    """Replace the process-wide default configuration.

    Args:
        config: New configuration; if None the current one is used as a base
        **changes: Individual fields to override

    Returns:
        The previous default configuration
    """
    global _default
    previous = _default
    base = config if config is not None else _default
    _default = replace(base, **changes) if changes else base
    return previous


@contextmanager
def configured(**changes: Any) -> Iterator[CodecConfig]:
    """Temporarily override fields of the default configuration.

    Example:
        >>> with configured(strict=True):
        ...     deserialize(b"\\x01").to(int32)  # raises InsufficientSourceError
    """
    previous = set_config(**changes)
    try:
        yield get_config()
    finally:
        set_config(previous)


def resolve(config: CodecConfig | None) -> CodecConfig:
    """Return ``config`` or the process-wide default."""
    return config if config is not None else _default
