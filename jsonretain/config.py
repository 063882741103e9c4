# -*- coding: utf-8 -*-
"""Location: ./jsonretain/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

jsonretain Configuration.
This module defines configuration settings for jsonretain using Pydantic.
It loads configuration from environment variables with sensible defaults.

Environment variables:
- JSONRETAIN_SORT_KEYS: Serialize object keys in sorted order (default: True)
- JSONRETAIN_INDENT: Pretty-print output with two-space indentation (default: False)
- JSONRETAIN_STRICT_TYPES: Reject type coercion when decoding declared fields (default: True)

Examples:
    >>> from jsonretain.config import Settings
    >>> s = Settings()
    >>> s.sort_keys, s.indent, s.strict_types
    (True, False, True)
    >>> Settings(indent=True).dump_options() & orjson.OPT_INDENT_2 != 0
    True
"""

# Standard
from functools import lru_cache
import logging
from typing import Any

# Third-Party
import orjson
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    jsonretain configuration settings.

    Examples:
        >>> s = Settings(sort_keys=False)
        >>> s.dump_options() & orjson.OPT_SORT_KEYS
        0
        >>> Settings().dump_options() & orjson.OPT_SORT_KEYS != 0
        True
    """

    sort_keys: bool = Field(True, description="Serialize object keys in sorted order")
    indent: bool = Field(False, description="Pretty-print output with two-space indentation")
    strict_types: bool = Field(True, description="Reject type coercion when decoding declared fields")

    model_config = SettingsConfigDict(env_prefix="JSONRETAIN_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    def dump_options(self) -> int:
        """Translate the output settings into an ``orjson`` option bitmask.

        Dataclasses are always passed through to the encoder's ``default``
        hook so record field tags are honoured for nested values.

        Returns:
            int: Bitmask suitable for ``orjson.dumps(option=...)``.
        """
        option = orjson.OPT_PASSTHROUGH_DATACLASS
        if self.sort_keys:
            option |= orjson.OPT_SORT_KEYS
        if self.indent:
            option |= orjson.OPT_INDENT_2
        return option


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """Get cached settings instance.

    Args:
        **kwargs: Keyword arguments to pass to the Settings setup.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> settings = get_settings()
        >>> isinstance(settings, Settings)
        True
        >>> # Second call returns the same cached instance
        >>> settings2 = get_settings()
        >>> settings is settings2
        True
    """
    cfg = Settings(**kwargs)
    logger.debug(f"jsonretain settings loaded: {cfg.model_dump()}")
    return cfg


class LazySettingsWrapper:
    """Attribute proxy over :func:`get_settings`.

    The codec reads its options through this object on every call, so
    clearing the ``get_settings`` cache (after changing ``JSONRETAIN_*``
    variables) takes effect without re-importing anything.

    Examples:
        >>> settings.strict_types
        True
        >>> settings.dump_options() == get_settings().dump_options()
        True
    """

    def __getattr__(self, key: str) -> Any:
        """Resolve ``key`` on the current cached settings.

        Args:
            key: Settings field or method name.

        Returns:
            Any: The attribute of the current ``Settings`` instance.
        """
        return getattr(get_settings(), key)

    def __repr__(self) -> str:
        return f"LazySettingsWrapper({get_settings()!r})"


settings = LazySettingsWrapper()
