"""Shared pytest fixtures for keynav tests."""

import pytest

from keynav.config.settings import NavigationSettings
from keynav.models.geometry import Bounds
from keynav.models.navigation import RegionConfig, ZoneConfig
from keynav.models.types import ZoneType
from keynav.services.navigation_store import NavigationStore
from keynav.services.scheduler import ManualScheduler
from keynav.services.sound import SoundPlayer
from test_fixtures import RecordingBackend


@pytest.fixture
def scheduler():
    """Hand-driven clock for error expiry and restore retries."""
    return ManualScheduler()


@pytest.fixture
def sounds():
    return RecordingBackend()


@pytest.fixture
def settings():
    return NavigationSettings()


@pytest.fixture
def store(settings, scheduler, sounds):
    """Empty store on a manual clock with recorded sounds."""
    return NavigationStore(
        settings=settings,
        scheduler=scheduler,
        sound=SoundPlayer(backend=sounds),
        clock=scheduler.time,
    )


@pytest.fixture
def main_store(store):
    """Store with one region holding a horizontal zone above a vertical zone.

    main:
        row  (horizontal, 3 items)  {top: 0,  right: 100, bottom: 50,  left: 0}
        list (vertical, 4 items)    {top: 60, right: 100, bottom: 110, left: 0}
    """
    store.register_region(RegionConfig(id="main", priority=0))
    store.register_zone(
        ZoneConfig(
            id="row",
            type=ZoneType.HORIZONTAL,
            region_id="main",
            items=["a", "b", "c"],
            bounds=Bounds(top=0, right=100, bottom=50, left=0),
        )
    )
    store.register_zone(
        ZoneConfig(
            id="list",
            type=ZoneType.VERTICAL,
            region_id="main",
            items=["w", "x", "y", "z"],
            bounds=Bounds(top=60, right=100, bottom=110, left=0),
            memory=True,
        )
    )
    return store

