"""
Textual front end for the navigation engine.

NavigationApp renders a layout description as Textual widgets: regions
side by side, zones stacked inside their region, and one label per item.
Geometry is measured from the real widgets, so cross-zone movement follows
what is on screen. Keys go through KeyboardController; timers run on the
app's own loop through TextualScheduler.
"""

from typing import Any, Dict, List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Grid, Horizontal, Vertical
from textual.events import Enter, Key, Resize
from textual.widgets import Footer, Static

from keynav.config.settings import NavigationSettings
from keynav.models.geometry import Bounds
from keynav.models.navigation import ZoneConfig
from keynav.models.types import SoundType, ZoneType
from keynav.services.layout_loader import parse_layout
from keynav.services.navigation_store import NavigationStore
from keynav.services.router import PathRouter
from keynav.services.scheduler import TextualScheduler
from keynav.services.sound import SoundPlayer
from keynav.utils.logging import get_logger

from .keyboard import KeyboardController
from .region import RegionHandle
from .zone import ZoneHandle

# Log to file only while the TUI owns the terminal.
logger = get_logger(__name__)

DEFAULT_PATHS = ["/", "/details"]


class ItemLabel(Static):
    """One focusable item of a zone."""

    DEFAULT_CSS = """
    ItemLabel {
        padding: 0 1;
        width: auto;
        height: 1;
    }
    ItemLabel.-active {
        background: $accent;
        color: $text;
        text-style: bold;
    }
    """

    def __init__(self, text: str, index: int, **kwargs: Any):
        super().__init__(text, **kwargs)
        self.index = index

    def on_enter(self, event: Enter) -> None:
        zone_widget = self.parent
        while zone_widget is not None and not isinstance(zone_widget, ZoneWidget):
            zone_widget = zone_widget.parent
        if zone_widget is not None:
            zone_widget.handle.hover(self.index)


class ZoneWidget(Container):
    """Container for a zone's items that keeps the store's geometry current."""

    DEFAULT_CSS = """
    ZoneWidget {
        border: round $panel;
        height: auto;
        padding: 0 1;
    }
    ZoneWidget.-active {
        border: round $accent;
    }
    ZoneWidget.-error {
        border: round $error;
    }
    """

    def __init__(self, handle: ZoneHandle, items: List[Any], **kwargs: Any):
        super().__init__(**kwargs)
        self.handle = handle
        self.item_labels = [ItemLabel(str(item), index) for index, item in enumerate(items)]
        self.border_title = handle.zone_id

    def compose(self) -> ComposeResult:
        if self.handle.zone_type is ZoneType.HORIZONTAL:
            yield Horizontal(*self.item_labels)
        elif self.handle.zone_type is ZoneType.GRID:
            grid = Grid(*self.item_labels)
            grid.styles.grid_size_columns = self.handle.columns or 1
            grid.styles.height = "auto"
            yield grid
        else:
            yield Vertical(*self.item_labels)

    def measure(self) -> None:
        region = self.region
        if region.width == 0 and region.height == 0:
            return
        self.handle.update_bounds(Bounds.from_region(region.x, region.y, region.width, region.height))

    def on_resize(self, event: Resize) -> None:
        self.measure()

    def scroll_to_item(self, axis: str, index: int) -> None:
        if 0 <= index < len(self.item_labels):
            self.item_labels[index].scroll_visible(animate=False)

    def refresh_focus(self, store: NavigationStore) -> None:
        active = self.handle.is_active
        self.set_class(active, "-active")
        error = store.last_error
        self.set_class(error is not None and error.zone == self.handle.zone_id, "-error")
        for label in self.item_labels:
            label.set_class(active and label.index == store.active_index, "-active")


class RegionWidget(Vertical):
    """Column holding one region's zones."""

    DEFAULT_CSS = """
    RegionWidget {
        width: 1fr;
        border: heavy $panel;
        padding: 0 1;
    }
    RegionWidget.-active {
        border: heavy $success;
    }
    """

    def __init__(self, handle: RegionHandle, zones: List[ZoneWidget], **kwargs: Any):
        super().__init__(*zones, **kwargs)
        self.handle = handle
        self.border_title = handle.region_id


class NavigationApp(App):
    """Interactive demo of keyboard focus navigation over a layout."""

    TITLE = "keynav"

    BINDINGS = [
        Binding("up", "key('up')", "Up", show=False, priority=True),
        Binding("down", "key('down')", "Down", show=False, priority=True),
        Binding("left", "key('left')", "Left", show=False, priority=True),
        Binding("right", "key('right')", "Right", show=False, priority=True),
        Binding("enter", "key('enter')", "Select", priority=True),
        Binding("space", "key('space')", "Select", show=False, priority=True),
        Binding("escape", "key('escape')", "Default zone", priority=True),
        Binding("tab", "key('tab')", "", show=False, priority=True),
        Binding("right_square_bracket", "cycle_region('next')", "Next region"),
        Binding("left_square_bracket", "cycle_region('prev')", "Prev region"),
        Binding("p", "next_path", "Next path"),
        Binding("d", "toggle_debug", "Debug"),
        Binding("m", "toggle_mute", "Mute"),
        Binding("q", "quit", "Quit"),
    ]

    CSS = """
    #regions {
        height: 1fr;
    }
    #status {
        height: 1;
        dock: bottom;
        background: $boost;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        layout: Dict[str, Any],
        settings: Optional[NavigationSettings] = None,
        vim_keys: bool = False,
    ):
        super().__init__()
        self.layout_data = layout
        self.settings = settings or NavigationSettings()
        self.store = NavigationStore(
            settings=self.settings,
            scheduler=TextualScheduler(self),
            sound=SoundPlayer(
                backend=self._play_sound, sounds=self.settings.sounds, muted=self.settings.muted
            ),
        )
        self.router = PathRouter(self.store, initial_path=DEFAULT_PATHS[0])
        self.paths = list(layout.get("paths") or DEFAULT_PATHS)
        self.keyboard = KeyboardController(self.store, vim_keys=vim_keys)
        self.selections: List[tuple] = []
        self.region_handles: Dict[str, RegionHandle] = {}
        self.zone_widgets: List[ZoneWidget] = []
        self.region_widgets: List[RegionWidget] = []
        self._parsed = parse_layout(layout)

    def _play_sound(self, sound_type: SoundType, path: Any) -> None:
        if sound_type is SoundType.ERROR:
            self.bell()

    def compose(self) -> ComposeResult:
        for region_config, zone_configs in self._parsed:
            handle = RegionHandle(
                self.store,
                priority=region_config.priority,
                persistent=region_config.persistent,
                default_zone=region_config.default_zone,
                region_id=region_config.id,
            )
            self.region_handles[region_config.id] = handle
            zones = [self._build_zone(zone_config) for zone_config in zone_configs]
            self.zone_widgets.extend(zones)
            region_widget = RegionWidget(handle, zones, id=f"region-{region_config.id}")
            self.region_widgets.append(region_widget)

        yield Horizontal(*self.region_widgets, id="regions")
        yield Static("", id="status")
        yield Footer()

    def _build_zone(self, config: ZoneConfig) -> ZoneWidget:
        def on_select(index: int, zone_id: str = config.id) -> None:
            self.selections.append((zone_id, index))
            zone = self.store.zones.get(zone_id)
            item = zone.items[index] if zone and index < zone.item_count else index
            self.notify(f"Selected {item}")

        handle = ZoneHandle(
            self.store,
            config.type,
            zone_id=config.id,
            columns=config.columns,
            memory=config.memory,
            group=config.group,
            hoverable=True,
            on_select=on_select,
            path_source=lambda: self.router.current_path,
        )
        widget = ZoneWidget(handle, list(config.items), id=f"zone-{config.id}")
        handle.scroller = widget.scroll_to_item
        handle.items = list(config.items)
        return widget

    def on_mount(self) -> None:
        # Regions and zones register in layout order; each zone joins the
        # region that is active while it mounts.
        zone_iter = iter(self.zone_widgets)
        for region_config, zone_configs in self._parsed:
            handle = self.region_handles[region_config.id]
            handle.mount()
            handle.activate()
            for _ in zone_configs:
                widget = next(zone_iter)
                widget.handle.mount(bounds=None, items=widget.handle.items)
            handle.zones_changed()

        first = self.store.registry.regions_by_priority()
        if first:
            self.activate_region(first[0].id)

        self.store.subscribe(self._on_store_change)
        self._on_store_change(self.store)
        self.call_after_refresh(self.measure_zones)
        logger.info(
            f"Navigation demo mounted {len(self.store.regions)} regions, {len(self.store.zones)} zones"
        )

    def on_unmount(self) -> None:
        self.store.cleanup()

    def activate_region(self, region_id: str) -> None:
        """Activate a region, focusing its first zone when it has no default."""
        handle = self.region_handles.get(region_id)
        if handle is None:
            return
        handle.activate()
        zones = handle.zones
        if self.store.active_zone is None and zones:
            self.store.set_active_zone(zones[0].id)

    def measure_zones(self) -> None:
        for widget in self.zone_widgets:
            widget.measure()

    def _on_store_change(self, store: NavigationStore) -> None:
        for widget in self.zone_widgets:
            widget.refresh_focus(store)
        for region_widget in self.region_widgets:
            region_widget.set_class(region_widget.handle.is_active, "-active")

        status = self.query_one("#status", Static)
        error = store.last_error
        text = (
            f"path={self.router.current_path}  region={store.state.active_region}  "
            f"zone={store.state.active_zone}  index={store.active_index}"
        )
        if error is not None:
            text += f"  [red]dead end at {error.zone}[{error.index}][/red]"
        if store.debug:
            text += "  [yellow]debug[/yellow]"
        status.update(text)

    # Actions

    def on_key(self, event: Key) -> None:
        # Arrow keys arrive through priority bindings; this catches h/j/k/l.
        if event.key in self.keyboard.directions and self.keyboard.handle_key(event.key):
            event.stop()

    def action_key(self, key: str) -> None:
        self.keyboard.handle_key(key)

    def action_cycle_region(self, direction: str) -> None:
        region = self.store.active_region
        if region is None:
            return
        handle = self.region_handles.get(region.id)
        target = handle.next_region(direction) if handle else None
        if target:
            self.activate_region(target)

    def action_next_path(self) -> None:
        current = self.router.current_path
        index = self.paths.index(current) if current in self.paths else -1
        target = self.paths[(index + 1) % len(self.paths)]
        logger.info(f"Route change {current} -> {target}")
        self.router.navigate(target)
        for widget in self.zone_widgets:
            widget.handle.update_zone_state()
        self._on_store_change(self.store)

    def action_toggle_debug(self) -> None:
        self.store.toggle_debug()
        self._on_store_change(self.store)

    def action_toggle_mute(self) -> None:
        muted = self.store.sound.toggle_mute()
        self.notify("Sound muted" if muted else "Sound on")
