"""Codec configuration.

This module provides the configuration dataclass shared by the encoder, the
decoder and the sizing utilities.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ConfigError


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for encoding and decoding.

    Attributes:
        max_depth: Maximum number of nested containers (arrays and maps) that
            the codec will follow before giving up (default 256). A top-level
            array has depth 1. Exceeding it raises EncodeError on encode and
            DecodeError on decode, so self-referencing or hostile input fails
            cleanly instead of exhausting the interpreter stack. A limit
            set beyond what the interpreter stack allows still fails with the
            codec error, raised from the underlying RecursionError.
        strict_map_keys: If True, the encoder only accepts str, int and bytes
            map keys (default False: any encodable value may be a key).
        accept_dict: If True, plain dicts are encoded as maps (default True).
            If False, only Map instances are accepted.

    Examples:
        ```python
        from mpwire import CodecConfig, decode

        # Refuse anything nested more than 8 levels deep
        config = CodecConfig(max_depth=8)
        value, rest = decode(data, config=config)
        ```
    """

    max_depth: int = 256
    strict_map_keys: bool = False
    accept_dict: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError(f"max_depth must be an integer, got {self.max_depth!r}")

        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be >= 1, got {self.max_depth}")


DEFAULT_CONFIG = CodecConfig()
