"""Application controller: the navigation and focus state machine.

``AppController.update(state, event)`` is a reducer. It never mutates
``state``; it returns the next state plus effects (background commands to
start, or quit) for the event loop to carry out. Events are key tokens,
mouse tokens, ``Resize``, and result messages from background commands.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..data.actions import Actions
from ..data.adapter import CliDataSource
from ..data.cache import FetchCache
from ..data.errors import UnsupportedItemKindError
from ..data.records import record_label
from ..layout import MENU_ROW, content_height
from ..listing.controller import ListingController
from ..listing.registry import entity_for_record, get_entity
from ..log import get_logger
from ..render.highlight import DEFAULT_STYLE
from ..state import EDITOR_VIEWS, AppState, Focus, PendingDelete, ViewId, is_listing, is_modal
from ..views import (
    GLANCE_REQUESTS,
    CommandsView,
    ConfirmView,
    DetailView,
    EditorView,
    EncryptionView,
    HelpView,
    HomeView,
    ListingView,
    PruneView,
)
from . import tasks
from .menu import COMMANDS_INDEX, MENU_ITEMS, clamp_cursor, compute_offset, hit_test
from .messages import (
    ActionFinished,
    Back,
    BatchDataLoaded,
    CommandFailed,
    CommandsFailed,
    CommandsLoaded,
    ConfirmNo,
    ConfirmYes,
    DataError,
    DataLoaded,
    Delete,
    DeleteFailed,
    DeleteSucceeded,
    Edit,
    HelpFailed,
    HelpLoaded,
    OpenDetail,
    Quit,
    RefreshTick,
    Resize,
    RunAction,
    RunCommand,
    Save,
    SaveFailed,
    SaveSucceeded,
    Schedule,
    SetStatus,
    ShowHelp,
    ShowMenu,
    StatusLoaded,
)

logger = get_logger(__name__)

GENERIC_HELP_COMMAND = "help"
MENU_LEFT_KEYS = frozenset({"LEFT", "h"})
MENU_RIGHT_KEYS = frozenset({"RIGHT", "l"})
MENU_ACTIVATE_KEYS = frozenset({"ENTER", " "})
MENU_EXIT_KEYS = frozenset({"DOWN", "j"})


@dataclass(frozen=True)
class Services:
    """Collaborators the controller builds commands against."""

    source: CliDataSource
    cache: FetchCache
    listings: ListingController
    actions: Actions
    syntax_style: str = DEFAULT_STYLE


class AppController:
    def __init__(self, services: Services) -> None:
        self.services = services

    # State helpers

    def _area(self, state: AppState) -> tuple[int, int]:
        return state.width, content_height(state.height)

    def _switch(
        self,
        state: AppState,
        view: ViewId,
        model: object | None = None,
        *,
        focus: Focus = Focus.CONTENT,
        previous: ViewId | None = None,
    ) -> AppState:
        if is_modal(view):
            focus = Focus.CONTENT
        if model is not None:
            state = state.with_view_model(view, model)
        return replace(
            state,
            view=view,
            focus=focus,
            previous=state.previous if previous is None else previous,
        )

    def _forward(self, state: AppState, view_id: ViewId, message: object):
        model = state.views.get(view_id)
        if model is None:
            return state, ()
        new_model, commands = model.handle_message(message)
        if new_model is not model:
            state = state.with_view_model(view_id, new_model)
        return state, tuple(RunCommand(command) for command in commands)

    def _status(self, state: AppState, text: str) -> AppState:
        return replace(state, status_message=text)

    def _home_commands(self):
        services = self.services
        return (
            tasks.load_status(services.source),
            services.listings.load_batch(GLANCE_REQUESTS),
        )

    # Entry points

    def init(self, width: int = 80, height: int = 24):
        """Initial state on the dashboard with menu focus, plus startup loads."""
        commands = self._home_commands()
        state = AppState(width=width, height=height)
        home = HomeView(refresh_commands=commands, width=width, height=content_height(height))
        state = state.with_view_model(ViewId.HOME, home)
        return state, tuple(RunCommand(command) for command in commands)

    def after_render(self, state: AppState) -> AppState:
        """Drop the status line once it has been shown for one frame."""
        if not state.status_message:
            return state
        return replace(state, status_message="")

    def update(self, state: AppState, event: object):
        if isinstance(event, str):
            return self._handle_key(state, event)
        if isinstance(event, Resize):
            return self._resize(state, event)
        return self._handle_message(state, event)

    # Input

    def _handle_key(self, state: AppState, key: str):
        if key.startswith("MOUSE_"):
            return self._handle_mouse(state, key)
        if key == "CTRL_C":
            return state, (Quit(),)
        if key == "F10":
            return self._open_commands(state, focus=Focus.MENU)

        modal = is_modal(state.view)
        if key == "TAB" and not modal:
            focus = Focus.CONTENT if state.focus is Focus.MENU else Focus.MENU
            return replace(state, focus=focus), ()

        if state.focus is Focus.MENU and not modal:
            if key in MENU_LEFT_KEYS:
                return self._move_menu(state, state.menu_cursor - 1), ()
            if key in MENU_RIGHT_KEYS:
                return self._move_menu(state, state.menu_cursor + 1), ()
            if key in MENU_ACTIVATE_KEYS:
                return self._activate(state, state.menu_cursor)
            if key == "q":
                return state, (Quit(),)
            if key in MENU_EXIT_KEYS:
                return replace(state, focus=Focus.CONTENT), ()

        return self._route_to_view(state, key)

    def _handle_mouse(self, state: AppState, key: str):
        kind, _, coords = key.partition(":")
        if kind == "MOUSE_WHEEL_UP":
            return self._handle_key(state, "UP")
        if kind == "MOUSE_WHEEL_DOWN":
            return self._handle_key(state, "DOWN")
        if kind != "MOUSE_LEFT_DOWN":
            return state, ()
        try:
            col_text, row_text = coords.split(":")
            col, row = int(col_text), int(row_text)
        except ValueError:
            return state, ()
        if is_modal(state.view):
            return state, ()
        if row == MENU_ROW:
            index = hit_test(col, state.menu_offset)
            if index is None:
                return replace(state, focus=Focus.MENU), ()
            return self._activate(replace(state, focus=Focus.MENU), index)
        return replace(state, focus=Focus.CONTENT), ()

    def _route_to_view(self, state: AppState, key: str):
        model = state.current_view
        if model is None:
            return state, ()
        new_model, intents, commands = model.handle_key(key)
        if new_model is not model:
            state = state.with_view_model(state.view, new_model)
        effects = [RunCommand(command) for command in commands]
        for intent in intents:
            state, more = self._apply_intent(state, intent)
            effects.extend(more)
        return state, tuple(effects)

    def _resize(self, state: AppState, event: Resize):
        state = replace(
            state,
            width=event.width,
            height=event.height,
            menu_offset=compute_offset(state.menu_cursor, state.menu_offset, event.width),
        )
        model = state.current_view
        if model is not None:
            resized = model.resize(*self._area(state))
            if resized is not model:
                state = state.with_view_model(state.view, resized)
        return state, ()

    # Menu

    def _move_menu(self, state: AppState, cursor: int) -> AppState:
        cursor = clamp_cursor(cursor)
        offset = compute_offset(cursor, state.menu_offset, state.width)
        return replace(state, menu_cursor=cursor, menu_offset=offset)

    def _activate(self, state: AppState, index: int):
        state = self._move_menu(state, index)
        item = MENU_ITEMS[state.menu_cursor]
        width, height = self._area(state)
        if item.quits:
            return state, (Quit(),)
        if item.entity is not None:
            return self._enter_listing(state, item.entity)
        if item.view is ViewId.HOME:
            commands = self._home_commands()
            home = HomeView(status=state.system_status, refresh_commands=commands, width=width, height=height)
            return self._switch(state, ViewId.HOME, home), (RunCommand(commands[1]),)
        if item.view is ViewId.MENU:
            return self._open_commands(state, focus=Focus.CONTENT)
        if item.view is ViewId.HELP:
            return self._open_help(state, GENERIC_HELP_COMMAND, return_to=ViewId.HOME)
        if item.view is ViewId.PRUNE:
            return self._switch(state, ViewId.PRUNE, PruneView(width=width, height=height)), ()
        if item.view is ViewId.ENCRYPTION:
            return self._switch(state, ViewId.ENCRYPTION, EncryptionView(width=width, height=height)), ()
        return state, ()

    def _enter_listing(self, state: AppState, entity: str):
        spec = get_entity(entity)
        listings = self.services.listings
        generation = state.refresh_generation + 1
        width, height = self._area(state)
        view, load = ListingView.open(spec, listings, generation, width, height)
        state = replace(self._switch(state, spec.view, view), refresh_generation=generation)
        effects = [RunCommand(load)]
        tick = listings.auto_refresh(entity, generation)
        if tick is not None:
            effects.append(RunCommand(tick))
        return state, tuple(effects)

    def _open_commands(self, state: AppState, *, focus: Focus):
        state = self._move_menu(state, COMMANDS_INDEX)
        if state.view is ViewId.MENU and isinstance(state.current_view, CommandsView):
            return replace(state, focus=focus), ()
        width, height = self._area(state)
        state = self._switch(state, ViewId.MENU, CommandsView(width=width, height=height), focus=focus)
        return state, (RunCommand(tasks.load_commands(self.services.source)),)

    def _open_help(self, state: AppState, command: str, *, return_to: ViewId):
        width, height = self._area(state)
        view = HelpView(command=command, return_to=return_to, width=width, height=height)
        state = self._switch(state, ViewId.HELP, view)
        return state, (RunCommand(tasks.load_help(self.services.source, command)),)

    # Intents

    def _previous_for_modal(self, state: AppState) -> ViewId | None:
        """``previous`` only moves when leaving a listing for a modal view."""
        return state.view if is_listing(state.view) else None

    def _apply_intent(self, state: AppState, intent: object):
        width, height = self._area(state)

        if isinstance(intent, OpenDetail):
            view = DetailView(
                item=intent.item,
                spec=entity_for_record(intent.item),
                syntax_style=self.services.syntax_style,
                width=width,
                height=height,
            )
            return self._switch(state, ViewId.DETAIL, view, previous=self._previous_for_modal(state)), ()

        if isinstance(intent, (Edit, Schedule)):
            spec = entity_for_record(intent.item)
            kind = type(intent.item).__name__
            if isinstance(intent, Schedule):
                target = ViewId.SCHEDULER if spec is not None and spec.schedulable else None
                action = "schedule"
            else:
                target = spec.editor if spec is not None else None
                action = "edit"
            if target is None:
                return self._status(state, str(UnsupportedItemKindError(kind, action))), ()
            view = EditorView.open(target, intent.item, width, height)
            return self._switch(state, target, view, previous=self._previous_for_modal(state)), ()

        if isinstance(intent, Delete):
            spec = entity_for_record(intent.item)
            if spec is None or not spec.deletable:
                error = UnsupportedItemKindError(type(intent.item).__name__, "delete")
                logger.info("%s", error)
                return self._status(state, str(error)), ()
            pending = PendingDelete(label=record_label(intent.item), identity=intent.item.id, item=intent.item)
            view = ConfirmView(pending=pending, width=width, height=height)
            state = replace(state, pending_delete=pending)
            return self._switch(state, ViewId.CONFIRM_DELETE, view, previous=self._previous_for_modal(state)), ()

        if isinstance(intent, Save):
            command = tasks.save_record(self.services.actions, intent.item)
            return self._status(state, f"Saving {record_label(intent.item)}..."), (RunCommand(command),)

        if isinstance(intent, Back):
            return self._back(state), ()

        if isinstance(intent, ShowMenu):
            return self._open_commands(state, focus=Focus.MENU)

        if isinstance(intent, ShowHelp):
            return self._open_help(state, intent.command, return_to=ViewId.MENU)

        if isinstance(intent, ConfirmYes):
            pending = state.pending_delete
            if pending is None:
                return state, ()
            command = tasks.delete_record(self.services.actions, pending.item)
            state = replace(state, pending_delete=None, status_message=f"Deleting {pending.label}...")
            return self._switch(state, state.previous), (RunCommand(command),)

        if isinstance(intent, ConfirmNo):
            return self._cancel_delete(state), ()

        if isinstance(intent, SetStatus):
            return self._status(state, intent.text), ()

        if isinstance(intent, RunAction):
            command = tasks.run_action(self.services.actions, intent.kind, dict(intent.params))
            label = intent.kind.replace("_", " ")
            return self._status(state, f"Running {label}..."), (RunCommand(command),)

        logger.warning("ignoring unknown intent %r", intent)
        return state, ()

    def _back(self, state: AppState) -> AppState:
        if state.view is ViewId.CONFIRM_DELETE:
            return self._cancel_delete(state)
        if is_modal(state.view):
            return self._switch(state, state.previous)
        model = state.current_view
        if isinstance(model, HelpView):
            return self._switch(state, model.return_to)
        return state

    def _cancel_delete(self, state: AppState) -> AppState:
        pending = state.pending_delete
        state = replace(state, pending_delete=None)
        detail = state.views.get(ViewId.DETAIL)
        if pending is not None and isinstance(detail, DetailView) and detail.item is pending.item:
            return self._switch(state, ViewId.DETAIL)
        return self._switch(state, state.previous)

    # Result messages

    def _reload_listing_for(self, state: AppState, item: object):
        spec = entity_for_record(item)
        if spec is None:
            return ()
        model = state.views.get(spec.view)
        if not isinstance(model, ListingView):
            return ()
        return (RunCommand(model.soft_refresh()),)

    def _leave_editor(self, state: AppState) -> AppState:
        if state.view in EDITOR_VIEWS:
            return self._switch(state, state.previous)
        return state

    def _handle_message(self, state: AppState, message: object):
        if isinstance(message, StatusLoaded):
            state = replace(state, system_status=message.status)
            return self._forward(state, ViewId.HOME, message)

        if isinstance(message, BatchDataLoaded):
            return self._forward(state, ViewId.HOME, message)

        if isinstance(message, (DataLoaded, DataError)):
            return self._forward(state, get_entity(message.entity).view, message)

        if isinstance(message, RefreshTick):
            return self._refresh_tick(state, message)

        if isinstance(message, (CommandsLoaded, CommandsFailed)):
            return self._forward(state, ViewId.MENU, message)

        if isinstance(message, (HelpLoaded, HelpFailed)):
            return self._forward(state, ViewId.HELP, message)

        if isinstance(message, SaveSucceeded):
            state = self._status(self._leave_editor(state), f"Saved {record_label(message.item)}")
            return state, self._reload_listing_for(state, message.item)

        if isinstance(message, SaveFailed):
            state = self._status(self._leave_editor(state), f"Save failed: {message.error}")
            return state, ()

        if isinstance(message, DeleteSucceeded):
            state = self._status(state, f"Deleted {record_label(message.item)}")
            return state, self._reload_listing_for(state, message.item)

        if isinstance(message, DeleteFailed):
            return self._status(state, f"Delete failed: {message.error}"), ()

        if isinstance(message, ActionFinished):
            label = message.kind.replace("_", " ")
            if message.error is not None:
                state = self._status(state, f"{label} failed: {message.error}")
            else:
                state = self._status(state, f"{label} finished")
            return self._forward(state, state.view, message)

        if isinstance(message, CommandFailed):
            return self._status(state, f"Error: {message.error}"), ()

        logger.warning("ignoring unknown message %r", message)
        return state, ()

    def _refresh_tick(self, state: AppState, tick: RefreshTick):
        view_id = get_entity(tick.entity).view
        model = state.views.get(view_id)
        if not isinstance(model, ListingView) or model.generation != tick.generation:
            return state, ()
        if tick.generation != state.refresh_generation:
            return state, ()
        effects = []
        if state.view is view_id and not model.listing.loading:
            effects.append(RunCommand(model.soft_refresh()))
        follow_up = self.services.listings.auto_refresh(tick.entity, tick.generation)
        if follow_up is not None:
            effects.append(RunCommand(follow_up))
        return state, tuple(effects)
