"""Tests for RegionHandle and ZoneHandle lifecycles."""

import re

from keynav.models.geometry import Bounds
from keynav.models.types import ActivationSource, Direction, ZoneType
from keynav.ui.region import RegionHandle, generate_id
from keynav.ui.zone import ZoneHandle


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_generated_ids():
    assert re.match(r"^region-[a-z0-9]{9}$", generate_id("region"))
    assert generate_id("zone") != generate_id("zone")


class TestRegionHandle:
    def test_first_region_activates_on_mount(self, store):
        handle = RegionHandle(store)
        handle.mount()

        assert re.match(r"^region-[a-z0-9]{9}$", handle.region_id)
        assert handle.is_active

    def test_second_region_stays_inactive(self, store):
        RegionHandle(store, region_id="main").mount()
        second = RegionHandle(store, priority=1, region_id="side")
        second.mount()

        assert not second.is_active
        assert second.active_zone is None

    def test_persistent_region_activates_on_mount(self, store):
        RegionHandle(store, region_id="main").mount()
        overlay = RegionHandle(store, persistent=True, region_id="overlay")
        overlay.mount()
        assert overlay.is_active

    def test_mount_twice_is_harmless(self, store):
        handle = RegionHandle(store, region_id="main")
        handle.mount()
        handle.mount()
        assert len(store.regions) == 1

    def test_activate_focuses_default_zone(self, store):
        main = RegionHandle(store, region_id="main", default_zone="b")
        main.mount()
        ZoneHandle(store, ZoneType.VERTICAL, zone_id="a").mount(items=[1, 2])
        ZoneHandle(store, ZoneType.VERTICAL, zone_id="b").mount(items=[1, 2])
        store.set_active_zone("a", 1)

        main.activate()
        assert store.state.active_zone == "b"
        assert store.active_index == 0

    def test_activate_mounts_if_needed(self, store):
        handle = RegionHandle(store, region_id="main")
        handle.activate()
        assert handle.initialized
        assert handle.is_active

    def test_deactivate(self, store):
        handle = RegionHandle(store, region_id="main")
        handle.mount()
        handle.deactivate()
        assert store.state.active_region is None

    def test_next_region_wraps_and_skips_persistent(self, store):
        a = RegionHandle(store, priority=0, region_id="a")
        b = RegionHandle(store, priority=1, region_id="b")
        overlay = RegionHandle(store, priority=2, persistent=True, region_id="overlay")
        c = RegionHandle(store, priority=3, region_id="c")
        for handle in (a, b, overlay, c):
            handle.mount()

        assert a.next_region() == "b"
        assert b.next_region() == "c"
        assert c.next_region("next") == "a"
        assert a.next_region("prev") == "c"
        assert overlay.next_region() == "c"

    def test_zones_changed_focuses_late_default_zone(self, store):
        main = RegionHandle(store, region_id="main", default_zone="late")
        main.mount()
        ZoneHandle(store, ZoneType.VERTICAL, zone_id="early").mount(items=[1])
        store.set_active_zone(None)

        ZoneHandle(store, ZoneType.VERTICAL, zone_id="late").mount(items=[1])
        main.zones_changed()
        assert store.state.active_zone == "late"

    def test_zones_lists_region_zones(self, store):
        main = RegionHandle(store, region_id="main")
        main.mount()
        ZoneHandle(store, ZoneType.VERTICAL, zone_id="a").mount()
        assert [zone.id for zone in main.zones] == ["a"]

    def test_unmount(self, store):
        main = RegionHandle(store, region_id="main")
        main.mount()
        main.unmount()
        assert "main" not in store.regions

    def test_persistent_region_survives_unmount(self, store):
        overlay = RegionHandle(store, persistent=True, region_id="overlay")
        overlay.mount()
        overlay.unmount()
        assert "overlay" in store.regions


class TestZoneHandle:
    def test_mount_without_active_region(self, store):
        handle = ZoneHandle(store, ZoneType.VERTICAL)
        assert handle.mount() is False
        assert not handle.initialized

    def test_mount_joins_active_region(self, store):
        RegionHandle(store, region_id="main").mount()
        bounds = Bounds(top=0, right=10, bottom=10, left=0)
        handle = ZoneHandle(store, "grid", columns=2)

        assert handle.mount(bounds=bounds, items=["a", "b", "c"]) is True
        assert re.match(r"^zone-[a-z0-9]{9}$", handle.zone_id)
        assert handle.zone.region_id == "main"
        assert handle.zone.bounds == bounds
        assert handle.zone.item_count == 3
        assert handle.is_active
        assert handle.active_index == 0

    def test_unmount(self, store):
        RegionHandle(store, region_id="main").mount()
        handle = ZoneHandle(store, ZoneType.VERTICAL, zone_id="a")
        handle.mount(items=[1])
        handle.unmount()

        assert "a" not in store.zones
        assert handle.active_index == -1

    def test_set_active_element_requires_mount(self, store):
        handle = ZoneHandle(store, ZoneType.VERTICAL, zone_id="a")
        assert handle.set_active_element(0) is False

    def _mounted(self, store, **kwargs):
        RegionHandle(store, region_id="main").mount()
        scrolls = []
        clock = FakeClock()
        handle = ZoneHandle(
            store,
            kwargs.pop("zone_type", ZoneType.VERTICAL),
            zone_id="list",
            scroller=lambda axis, index: scrolls.append((axis, index)),
            clock=clock,
            **kwargs,
        )
        handle.mount(items=["a", "b", "c", "d"])
        return handle, scrolls, clock

    def test_keyboard_moves_scroll_vertically(self, store):
        handle, scrolls, _ = self._mounted(store)
        store.navigate(Direction.DOWN)
        assert scrolls[-1] == ("y", 1)

    def test_horizontal_zone_scrolls_on_x(self, store):
        handle, scrolls, _ = self._mounted(store, zone_type=ZoneType.HORIZONTAL)
        store.navigate(Direction.RIGHT)
        assert scrolls[-1] == ("x", 1)

    def test_hover_requires_hoverable(self, store):
        handle, _, clock = self._mounted(store)
        clock.now += 5
        assert handle.hover(2) is False

    def test_hover_ignored_during_keyboard_cooldown(self, store):
        handle, scrolls, clock = self._mounted(store, hoverable=True)
        store.navigate(Direction.DOWN)

        clock.now += 0.5
        assert handle.hover(3) is False
        assert store.active_index == 1

        clock.now += 0.6
        assert handle.hover(3) is True
        assert store.active_index == 3
        assert handle.last_activation_source is ActivationSource.POINTER

    def test_hover_does_not_scroll(self, store):
        handle, scrolls, clock = self._mounted(store, hoverable=True)
        clock.now += 5
        count = len(scrolls)

        handle.hover(2)
        assert len(scrolls) == count
        assert store.active_index == 2

    def test_hover_out_of_range(self, store):
        handle, _, clock = self._mounted(store, hoverable=True)
        clock.now += 5
        assert handle.hover(9) is False

    def test_update_zone_state_restores_memory(self, store):
        RegionHandle(store, region_id="main").mount()
        path = {"current": "/home"}
        handle = ZoneHandle(
            store, ZoneType.VERTICAL, zone_id="list", memory=True, path_source=lambda: path["current"]
        )
        handle.mount(items=["a", "b", "c"])
        store.set_active_zone("list", 2)
        store.save_state("/home")
        store.set_active_zone("list", 0)

        handle.update_zone_state(items=["a", "b", "c"])
        assert store.active_index == 2

    def test_update_zone_state_without_memory(self, store):
        RegionHandle(store, region_id="main").mount()
        handle = ZoneHandle(store, ZoneType.VERTICAL, zone_id="list", path_source=lambda: "/home")
        handle.mount(items=["a", "b"])
        bounds = Bounds(top=1, right=2, bottom=3, left=0)

        handle.update_zone_state(bounds=bounds)
        assert handle.zone.bounds == bounds
