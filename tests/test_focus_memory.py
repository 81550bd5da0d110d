"""Tests for per-path focus memory and pending restores."""

from keynav.models.geometry import Bounds
from keynav.models.navigation import RegionConfig
from test_fixtures import make_zone

LIST_BOUNDS = Bounds(top=60, right=100, bottom=110, left=0)


def remount_list(store, items=4):
    return store.register_zone(make_zone("list", items=items, memory=True, bounds=LIST_BOUNDS))


class TestSave:
    def test_save_requires_memory_zone(self, main_store):
        assert main_store.state.active_zone == "row"
        assert main_store.save_state("/home") is False
        assert main_store.memory.status == "idle"

    def test_save_requires_path(self, main_store):
        main_store.set_active_zone("list", 1)
        assert main_store.save_state("") is False

    def test_save_requires_focus(self, store):
        store.register_region(RegionConfig(id="main"))
        assert store.save_state("/home") is False

    def test_save_snapshots_focus(self, main_store):
        main_store.set_active_zone("list", 2)
        assert main_store.save_state("/home") is True

        memory = main_store.memory.memory
        assert (memory.region_id, memory.zone_id, memory.index, memory.path) == ("main", "list", 2, "/home")
        assert main_store.memory.status == "saved"

    def test_save_overwrites_previous_snapshot(self, main_store):
        main_store.set_active_zone("list", 1)
        main_store.save_state("/a")
        main_store.set_active_zone("list", 2)
        main_store.save_state("/b")

        assert main_store.restore_state("/a") is False
        assert main_store.restore_state("/b") is True
        assert main_store.active_index == 2


class TestRestore:
    def test_restore_same_path(self, main_store):
        main_store.set_active_zone("list", 3)
        main_store.save_state("/home")
        main_store.set_active_zone("row", 1)

        assert main_store.restore_state("/home") is True
        assert main_store.state.active_zone == "list"
        assert main_store.active_index == 3

    def test_restore_other_path(self, main_store):
        main_store.set_active_zone("list", 3)
        main_store.save_state("/home")
        main_store.set_active_zone("row", 1)

        assert main_store.restore_state("/settings") is False
        assert main_store.state.active_zone == "row"

    def test_restore_without_snapshot(self, main_store):
        assert main_store.restore_state("/home") is False

    def test_restore_records_history(self, main_store):
        main_store.set_active_zone("list", 3)
        main_store.save_state("/home")
        main_store.set_active_zone("row", 1)
        before = len(main_store.history)

        main_store.restore_state("/home")
        assert len(main_store.history) == before + 1
        assert main_store.history[-1].zone == "list"

    def test_restore_switches_region(self, main_store):
        main_store.register_region(RegionConfig(id="side", priority=1))
        main_store.register_zone(make_zone("menu", region_id="side", memory=True))
        main_store.set_active_zone("menu", 2)
        main_store.save_state("/side")
        main_store.set_active_zone("row", 1)

        assert main_store.restore_state("/side") is True
        assert main_store.state.active_region == "side"
        assert main_store.state.active_zone == "menu"
        assert main_store.active_index == 2

    def test_restore_clamps_to_current_items(self, main_store):
        main_store.set_active_zone("list", 3)
        main_store.save_state("/home")
        main_store.unregister_zone("list")
        remount_list(main_store, items=2)

        assert main_store.restore_state("/home") is True
        assert main_store.active_index == 1


class TestPendingRestore:
    def _save_and_unmount(self, store):
        store.set_active_zone("list", 3)
        store.save_state("/home")
        store.unregister_zone("list")
        assert store.state.active_zone is None

    def test_missing_zone_queues_restore(self, main_store, scheduler):
        self._save_and_unmount(main_store)

        assert main_store.restore_state("/home") is False
        assert main_store.memory.status == "pending"
        assert scheduler.pending() == 1

    def test_zone_registration_completes_restore(self, main_store, scheduler):
        self._save_and_unmount(main_store)
        main_store.restore_state("/home")

        remount_list(main_store)

        assert main_store.state.active_zone == "list"
        assert main_store.active_index == 3
        assert main_store.memory.status == "saved"
        assert scheduler.pending() == 0

    def test_unrelated_zone_does_not_complete_restore(self, main_store):
        self._save_and_unmount(main_store)
        main_store.restore_state("/home")

        main_store.register_zone(make_zone("other", bounds=Bounds(top=200, right=100, bottom=250, left=0)))
        assert main_store.memory.status == "pending"

    def test_retries_are_bounded(self, main_store, scheduler):
        self._save_and_unmount(main_store)
        main_store.restore_state("/home")

        scheduler.advance(0.55)
        assert main_store.memory.pending.attempts == 6

        scheduler.advance(2.0)
        assert main_store.memory.status == "saved"
        assert scheduler.pending() == 0

        remount_list(main_store)
        assert main_store.state.active_zone is None

    def test_new_restore_replaces_pending_one(self, main_store, scheduler):
        self._save_and_unmount(main_store)
        main_store.restore_state("/home")
        main_store.restore_state("/home")

        assert scheduler.pending() == 1
        assert main_store.memory.pending.attempts == 1

    def test_cleanup_cancels_pending_restore(self, main_store, scheduler):
        self._save_and_unmount(main_store)
        main_store.restore_state("/home")

        main_store.cleanup()
        assert main_store.memory.status == "saved"
        assert scheduler.pending() == 0

        remount_list(main_store)
        assert main_store.state.active_zone is None

    def test_restored_zone_is_not_overridden_as_first_zone(self, store):
        store.register_region(RegionConfig(id="main"))
        store.register_zone(make_zone("list", items=4, memory=True))
        store.set_active_zone("list", 3)
        store.save_state("/home")
        store.unregister_zone("list")
        store.restore_state("/home")

        store.register_zone(make_zone("list", items=4, memory=True))
        assert store.state.active_zone == "list"
        assert store.active_index == 3
