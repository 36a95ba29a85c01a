"""Configuration loading and constants for quotecord.

This package exposes the split configuration modules as a single interface.
"""

from quotecord.core.config.constants import (
    AUTHOR_DEFAULT_COLOR,
    CUSTOM_EMOJI_CDN_URL,
    DEFAULT_AVATAR_URL,
    EMOJI_CDN_URL,
    RENDER_REQUEST_TIMEOUT,
    RENDER_SERVICE_URL,
    REPLY_DEFAULT_COLOR,
    REPLY_ELLIPSIS,
    REPLY_EMPTY_PLACEHOLDER,
    REPLY_PREVIEW_LIMIT,
    STICKER_CDN_URL,
    UNKNOWN_CHANNEL_MENTION,
    UNKNOWN_ROLE_MENTION,
    UNKNOWN_USER_MENTION,
    UNKNOWN_USER_NAME,
)
from quotecord.core.config.http import (
    DEFAULT_HEADERS,
    DEFAULT_USER_AGENT,
    HttpxClientOptions,
    get_or_create_httpx_client,
)
from quotecord.core.config.manager import (
    CONFIG_CACHE_TTL,
    CONFIG_DIR_ENV_VAR,
    ConfigFileEmptyError,
    ConfigFileNotFoundError,
    clear_config_cache,
    get_config,
)
from quotecord.core.config.settings import CONFIG_SECTION, RenderSettings

__all__ = [
    "AUTHOR_DEFAULT_COLOR",
    "CONFIG_CACHE_TTL",
    "CONFIG_DIR_ENV_VAR",
    "CONFIG_SECTION",
    "CUSTOM_EMOJI_CDN_URL",
    "DEFAULT_AVATAR_URL",
    "DEFAULT_HEADERS",
    "DEFAULT_USER_AGENT",
    "EMOJI_CDN_URL",
    "RENDER_REQUEST_TIMEOUT",
    "RENDER_SERVICE_URL",
    "REPLY_DEFAULT_COLOR",
    "REPLY_ELLIPSIS",
    "REPLY_EMPTY_PLACEHOLDER",
    "REPLY_PREVIEW_LIMIT",
    "STICKER_CDN_URL",
    "UNKNOWN_CHANNEL_MENTION",
    "UNKNOWN_ROLE_MENTION",
    "UNKNOWN_USER_MENTION",
    "UNKNOWN_USER_NAME",
    "ConfigFileEmptyError",
    "ConfigFileNotFoundError",
    "HttpxClientOptions",
    "RenderSettings",
    "clear_config_cache",
    "get_config",
    "get_or_create_httpx_client",
]
