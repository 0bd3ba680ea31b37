from __future__ import annotations

import pytest

from doctasks.definitions import BuildContext
from doctasks.settings import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def context(settings: Settings) -> BuildContext:
    return BuildContext(settings=settings)
