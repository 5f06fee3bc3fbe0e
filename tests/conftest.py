"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the DCS monitor test suite.
"""
import os
import pytest
import numpy as np
from datetime import datetime, timedelta, timezone

# Use in-memory SQLite for tests
os.environ.setdefault("DATABASE_URL", ":memory:")
os.environ.setdefault("SIMULATION_SEED", "42")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_tag(now):
    """Factory for a TI-101-like tag at a given value with optional history values."""
    from src.data.models import DataPoint, TagData, TagLimits, TagPosition

    def _make(value: float, tag_id: str = "TI-101", history: list[float] | None = None) -> TagData:
        values = history or []
        return TagData(
            id=tag_id,
            name=tag_id,
            description="Reactor temperature",
            unit="°C",
            current_value=value,
            setpoint=525.0,
            predicted_value=value,
            limits=TagLimits(high_alarm=550.0, high_warning=540.0, low_warning=500.0, low_alarm=490.0),
            position=TagPosition(x=25, y=30),
            history=[
                DataPoint(timestamp=now - timedelta(minutes=len(values) - i), value=v)
                for i, v in enumerate(values)
            ],
        )

    return _make


@pytest.fixture
def make_alarm(now):
    """Factory for alarms created at `now` unless told otherwise."""
    from src.data.models import Alarm

    counter = iter(range(10_000))

    def _make(**overrides) -> Alarm:
        n = next(counter)
        fields = {
            "id": f"alarm-{n}",
            "tag_id": "TI-101",
            "tag_name": "TI-101",
            "message": "Reactor temperature High Warning: 545.0°C",
            "kind": "warning",
            "timestamp": now,
            "priority": 3,
            "category": "safety",
        }
        fields.update(overrides)
        return Alarm(**fields)

    return _make


@pytest.fixture
def db():
    """Fresh tables in the shared in-memory database."""
    from src.data import store
    store.initialize_db(force_reset=True)
    return store
