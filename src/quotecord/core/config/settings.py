"""Render settings built from constants, config.yaml and caller options."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from quotecord.core.config.constants import (
    AUTHOR_DEFAULT_COLOR,
    CUSTOM_EMOJI_CDN_URL,
    DEFAULT_AVATAR_URL,
    EMOJI_CDN_URL,
    RENDER_REQUEST_TIMEOUT,
    RENDER_SERVICE_URL,
    REPLY_DEFAULT_COLOR,
    STICKER_CDN_URL,
)

logger = logging.getLogger(__name__)

CONFIG_SECTION = "renderer"


def _empty_options() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """Defaults used while building and rasterizing a document.

    ``options`` holds rendering options (width, height, image type...) that
    are forwarded verbatim to the rendering service.
    """

    default_avatar_url: str = DEFAULT_AVATAR_URL
    author_default_color: str = AUTHOR_DEFAULT_COLOR
    reply_default_color: str = REPLY_DEFAULT_COLOR
    emoji_cdn_url: str = EMOJI_CDN_URL
    custom_emoji_cdn_url: str = CUSTOM_EMOJI_CDN_URL
    sticker_cdn_url: str = STICKER_CDN_URL
    render_service_url: str = RENDER_SERVICE_URL
    request_timeout: float = RENDER_REQUEST_TIMEOUT
    options: Mapping[str, Any] = field(default_factory=_empty_options)

    def merged(self, overrides: Mapping[str, Any] | None) -> RenderSettings:
        """Return a copy with known fields overridden by ``overrides``.

        Keys that are not settings fields are treated as passthrough render
        options and merged over the existing ``options``.
        """
        if not overrides:
            return self

        known = {item.name for item in fields(self)} - {"options"}
        changes: dict[str, Any] = {}
        passthrough = dict(self.options)
        for key, value in overrides.items():
            if key in known:
                changes[key] = value
            elif key == "options" and isinstance(value, Mapping):
                passthrough.update(value)
            else:
                passthrough[key] = value

        return replace(self, **changes, options=MappingProxyType(passthrough))

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> RenderSettings:
        """Build settings from the ``renderer`` section of a loaded config."""
        section = (config or {}).get(CONFIG_SECTION) or {}
        if not isinstance(section, Mapping):
            logger.warning(
                "Ignoring '%s' config section: expected a mapping, got %s",
                CONFIG_SECTION,
                type(section).__name__,
            )
            return cls()
        return cls().merged(section)
