"""Tests for region/zone registration and its effect on focus."""

import random

import pytest

from keynav.config.settings import NavigationSettings
from keynav.exceptions import DuplicateRegistrationError, UnknownRegionError
from keynav.models.navigation import RegionConfig
from keynav.models.types import ZoneType
from keynav.services.navigation_store import NavigationStore
from keynav.services.scheduler import ManualScheduler
from test_fixtures import make_zone


class TestRegionRegistration:
    """Registering and removing regions."""

    def test_first_region_becomes_active(self, store):
        store.register_region(RegionConfig(id="main"))
        assert store.active_region.id == "main"

    def test_second_region_does_not_steal_focus(self, store):
        store.register_region(RegionConfig(id="main"))
        store.register_region(RegionConfig(id="side", priority=-5))
        assert store.state.active_region == "main"

    def test_first_region_on_enter_runs(self, store):
        entered = []
        store.register_region(RegionConfig(id="main", on_enter=lambda: entered.append("main")))
        assert entered == ["main"]

    def test_unregister_unknown_region_is_noop(self, store):
        store.register_region(RegionConfig(id="main"))
        store.unregister_region("missing")
        assert list(store.regions) == ["main"]

    def test_unregister_region_cascades_to_zones(self, main_store):
        main_store.unregister_region("main")
        assert dict(main_store.zones) == {}
        assert dict(main_store.regions) == {}

    def test_unregister_active_region_activates_lowest_priority(self, main_store):
        seen_during_enter = []
        main_store.register_region(RegionConfig(id="side", priority=5))
        main_store.register_region(
            RegionConfig(
                id="other",
                priority=2,
                on_enter=lambda: seen_during_enter.append(main_store.state.active_region),
            )
        )

        main_store.unregister_region("main")

        assert main_store.state.active_region == "other"
        # Focus was cleared before the replacement region was entered
        assert seen_during_enter == [None]
        assert main_store.state.active_zone is None
        assert main_store.active_index == 0

    def test_unregister_last_region_clears_focus(self, main_store):
        main_store.unregister_region("main")
        assert main_store.state.active_region is None
        assert main_store.state.active_zone is None
        assert main_store.active_index == 0

    def test_priority_ties_keep_registration_order(self, store):
        store.register_region(RegionConfig(id="main"))
        store.register_region(RegionConfig(id="b", priority=1))
        store.register_region(RegionConfig(id="a", priority=1))
        store.unregister_region("main")
        assert store.state.active_region == "b"

    def test_duplicate_region_raises_by_default(self, store):
        store.register_region(RegionConfig(id="main"))
        with pytest.raises(DuplicateRegistrationError):
            store.register_region(RegionConfig(id="main", priority=3))
        assert store.regions["main"].priority == 0

    def test_duplicate_region_replaced_with_replace_policy(self, scheduler):
        store = NavigationStore(
            settings=NavigationSettings(on_duplicate="replace"), scheduler=scheduler
        )
        store.register_region(RegionConfig(id="main"))
        store.register_zone(make_zone("list"))

        store.register_region(RegionConfig(id="main", priority=3))

        assert store.regions["main"].priority == 3
        assert "list" not in store.zones


class TestZoneRegistration:
    """Registering and removing zones."""

    def test_unknown_region_fails_loudly(self, store):
        store.register_region(RegionConfig(id="main"))
        with pytest.raises(UnknownRegionError) as exc_info:
            store.register_zone(make_zone("list", region_id="nowhere"))
        assert exc_info.value.context["region_id"] == "nowhere"
        assert "list" not in store.zones

    def test_first_zone_of_active_region_becomes_active(self, main_store):
        assert main_store.state.active_zone == "row"
        assert main_store.active_index == 0

    def test_later_zones_do_not_take_focus(self, main_store):
        main_store.register_zone(make_zone("extra"))
        assert main_store.state.active_zone == "row"

    def test_first_zone_of_inactive_region_stays_inactive(self, main_store):
        main_store.register_region(RegionConfig(id="side", priority=1))
        main_store.register_zone(make_zone("menu", region_id="side"))
        assert main_store.state.active_zone == "row"

    def test_zone_listed_by_its_region(self, main_store):
        assert main_store.regions["main"].zone_ids == ["row", "list"]
        assert main_store.zones["list"].region_id == "main"

    def test_default_zone_takes_focus_when_it_arrives(self, store):
        store.register_region(RegionConfig(id="main", default_zone="b"))
        store.register_zone(make_zone("a"))
        store.unregister_zone("a")
        assert store.state.active_zone is None

        store.register_zone(make_zone("b"))
        assert store.state.active_zone == "b"

    def test_unregister_active_zone_clears_focus(self, main_store):
        main_store.set_active_zone("row", 2)
        main_store.unregister_zone("row")
        assert main_store.state.active_zone is None
        assert main_store.active_index == 0
        assert main_store.state.active_region == "main"

    def test_unregister_inactive_zone_keeps_focus(self, main_store):
        main_store.set_active_zone("row", 1)
        main_store.unregister_zone("list")
        assert main_store.state.active_zone == "row"
        assert main_store.active_index == 1

    def test_unregister_unknown_zone_is_noop(self, main_store):
        main_store.unregister_zone("missing")
        assert set(main_store.zones) == {"row", "list"}

    def test_duplicate_zone_raises_by_default(self, main_store):
        with pytest.raises(DuplicateRegistrationError):
            main_store.register_zone(make_zone("row", items=9))
        assert main_store.zones["row"].item_count == 3

    def test_zone_type_accepts_strings(self, main_store):
        zone = main_store.register_zone(make_zone("tiles", zone_type="grid", columns=2))
        assert zone.type is ZoneType.GRID


class TestRegistryConsistency:
    """Region and zone maps stay in agreement."""

    def test_random_sequences_stay_consistent(self):
        rng = random.Random(1234)
        store = NavigationStore(scheduler=ManualScheduler())
        for region_id in ("a", "b", "c"):
            store.register_region(RegionConfig(id=region_id, priority=rng.randint(0, 3)))

        for step in range(300):
            zone_id = f"z{rng.randint(0, 15)}"
            if zone_id in store.zones:
                store.unregister_zone(zone_id)
            elif store.regions:
                region_id = rng.choice(list(store.regions))
                store.register_zone(make_zone(zone_id, region_id=region_id))
            if step % 97 == 0:
                victim = rng.choice(list(store.regions))
                store.unregister_region(victim)
                store.register_region(RegionConfig(id=victim))

            assert store.registry.check_consistency() == []
            active_zone = store.active_zone
            if active_zone is not None:
                assert active_zone.region_id == store.state.active_region

    def test_check_consistency_reports_orphans(self):
        store = NavigationStore(scheduler=ManualScheduler())
        store.register_region(RegionConfig(id="main"))
        store.register_zone(make_zone("list"))
        registry = store.registry
        registry._regions["main"].zones.pop("list")
        assert registry.check_consistency() == ["Region main does not list zone list"]

    def test_zone_listener_sees_new_zones(self, main_store):
        seen = []
        remove = main_store.registry.on_zone_added(lambda zone: seen.append(zone.id))
        main_store.register_zone(make_zone("extra"))
        remove()
        main_store.register_zone(make_zone("later"))
        assert seen == ["extra"]
