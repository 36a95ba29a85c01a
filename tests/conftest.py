from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from quotecord.core.config import RenderSettings, clear_config_cache


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 10, 15, 30, tzinfo=UTC)


@pytest.fixture
def settings() -> RenderSettings:
    return RenderSettings(render_service_url="http://renderer.test/render")


@pytest.fixture
def fresh_config_cache() -> Iterator[None]:
    clear_config_cache()
    yield
    clear_config_cache()
