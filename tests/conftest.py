from datetime import datetime, timezone

import pytest

from rate_limits import variants


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed clock for assertions that depend on the current instant."""
    return datetime(2015, 10, 21, 7, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fresh_registry(monkeypatch):
    """Drop the cached registry so the next access rebuilds it."""
    monkeypatch.setattr(variants, "_variants", None)
    yield
