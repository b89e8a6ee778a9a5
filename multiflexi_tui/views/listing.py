"""Generic paginated listing view for any registered entity type."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..listing.controller import ListingController, ListingState, next_page, prev_page
from ..listing.registry import EntitySpec
from ..render.table import render_table
from ..runtime.messages import (
    ActionFinished,
    DataError,
    DataLoaded,
    Edit,
    OpenDetail,
    RunAction,
    SetStatus,
    ShowMenu,
)
from ..ui_theme import DEFAULT_THEME, UITheme
from .base import DOWN_KEYS, LEFT_KEYS, NO_COMMANDS, NO_INTENTS, RIGHT_KEYS, UP_KEYS, ViewModel, error_lines


@dataclass(frozen=True)
class ListingView(ViewModel):
    spec: EntitySpec
    controller: ListingController = field(compare=False, repr=False)
    listing: ListingState
    generation: int = 0
    width: int = 80
    height: int = 20

    footer = "↑/↓: select • ←/→: page • Enter: detail • e: edit • r: refresh • c: clear cache • Esc: menu"

    @classmethod
    def open(cls, spec: EntitySpec, controller: ListingController, generation: int, width: int, height: int):
        """Fresh view plus the command that loads its first page."""
        listing = controller.initial_state(spec.tag)
        view = cls(spec=spec, controller=controller, listing=listing, generation=generation, width=width, height=height)
        return view, view.controller.load(spec.tag, listing.limit, listing.offset)

    def _with_listing(self, listing: ListingState) -> ListingView:
        return replace(self, listing=listing)

    def _load_current(self):
        return self.controller.load(self.spec.tag, self.listing.limit, self.listing.offset)

    def handle_key(self, key: str):
        listing = self.listing
        if key in UP_KEYS:
            return self._with_listing(listing.move_cursor(-1)), NO_INTENTS, NO_COMMANDS
        if key in DOWN_KEYS:
            return self._with_listing(listing.move_cursor(1)), NO_INTENTS, NO_COMMANDS
        if key in RIGHT_KEYS:
            moved = next_page(listing)
            if moved is None:
                return self, NO_INTENTS, NO_COMMANDS
            view = self._with_listing(moved)
            return view, NO_INTENTS, (view._load_current(),)
        if key in LEFT_KEYS:
            moved = prev_page(listing)
            if moved is None:
                return self, NO_INTENTS, NO_COMMANDS
            view = self._with_listing(moved)
            return view, NO_INTENTS, (view._load_current(),)
        if key == "ENTER":
            if self.spec.listing_action is not None:
                return self, (RunAction(self.spec.listing_action),), NO_COMMANDS
            item = listing.selected
            if item is None:
                return self, NO_INTENTS, NO_COMMANDS
            return self, (OpenDetail(item),), NO_COMMANDS
        if key == "e":
            item = listing.selected
            if item is None:
                return self, NO_INTENTS, NO_COMMANDS
            if self.spec.editor is None:
                return self, (SetStatus(f"{self.spec.title} cannot be edited"),), NO_COMMANDS
            return self, (Edit(item),), NO_COMMANDS
        if key == "r":
            view = self._with_listing(replace(listing, loading=True, error=None))
            command = self.controller.refresh(self.spec.tag, listing.limit, listing.offset, force=True)
            return view, NO_INTENTS, (command,)
        if key == "c":
            view = self._with_listing(replace(listing, loading=True, error=None))
            command = self.controller.clear_and_load(self.spec.tag, listing.limit, listing.offset)
            return view, (SetStatus("Cache cleared"),), (command,)
        if key == "ESC":
            return self, (ShowMenu(),), NO_COMMANDS
        return self, NO_INTENTS, NO_COMMANDS

    def soft_refresh(self):
        """Command for a background refresh that keeps cache semantics."""
        return self.controller.refresh(self.spec.tag, self.listing.limit, self.listing.offset)

    def handle_message(self, message: object):
        if isinstance(message, DataLoaded) and message.entity == self.spec.tag:
            if message.state.offset != self.listing.offset or message.state.limit != self.listing.limit:
                return self, NO_COMMANDS
            loaded = message.state
            cursor = min(self.listing.cursor, max(0, len(loaded.items) - 1))
            return self._with_listing(replace(loaded, cursor=cursor)), NO_COMMANDS
        if isinstance(message, DataError) and message.entity == self.spec.tag:
            return self._with_listing(self.listing.failed(message.error)), NO_COMMANDS
        if isinstance(message, ActionFinished) and message.kind == self.spec.listing_action and message.error is None:
            view = self._with_listing(replace(self.listing, offset=0, cursor=0, loading=True, error=None))
            return view, (view._load_current(),)
        return self, NO_COMMANDS

    def summary_line(self) -> str:
        listing = self.listing
        parts = [f"Page {listing.current_page}", f"{len(listing.items)} items"]
        if listing.has_prev:
            parts.append("← prev")
        if listing.has_more:
            parts.append("next →")
        if listing.last_update is not None:
            source = "cached" if listing.cached else "fresh"
            parts.append(f"{source} {listing.fetch_seconds * 1000:.0f}ms")
        if self.spec.refresh_interval > 0:
            parts.append(f"auto-refresh {self.spec.refresh_interval:g}s")
        return " • ".join(parts)

    def render(self, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
        if height <= 0:
            return []
        listing = self.listing
        lines = [f"{theme.heading}{self.spec.title}{theme.reset}  {theme.dim}{self.summary_line()}{theme.reset}"]
        if listing.error is not None:
            lines.extend(error_lines(listing.error, theme))
        if listing.loading and not listing.items:
            lines.append(f"{theme.dim}Loading {self.spec.title.lower()}...{theme.reset}")
            return lines[:height]
        if not listing.items:
            if listing.error is None:
                lines.append(f"{theme.dim}No {self.spec.title.lower()} found.{theme.reset}")
            return lines[:height]
        table_rows = max(0, height - len(lines))
        lines.extend(render_table(self.spec.columns, listing.items, listing.cursor, width, table_rows, theme))
        return lines[:height]
