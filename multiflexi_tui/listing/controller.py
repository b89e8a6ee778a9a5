"""Per-entity pagination state and the commands that drive it.

Commands returned here are plain callables. They block while the CLI runs,
so the runtime executes them off the UI thread and feeds the message they
return back into the controller.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace

from ..data.adapter import FetchRequest
from ..data.cache import BatchRequest, FetchCache, FetchResult
from ..data.errors import DashboardError
from ..log import get_logger
from ..runtime.messages import BatchDataLoaded, Command, DataError, DataLoaded, RefreshTick
from .registry import DEFAULT_PAGE_SIZE, ENTITIES, EntitySpec

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListingState:
    """Paging window over one entity listing."""

    entity: str
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0
    cursor: int = 0
    items: tuple = ()
    has_more: bool = False
    has_prev: bool = False
    loading: bool = False
    error: Exception | None = None
    cached: bool = False
    fetch_seconds: float = 0.0
    last_update: float | None = None

    @property
    def current_page(self) -> int:
        if self.limit <= 0:
            return 1
        return self.offset // self.limit + 1

    @property
    def selected(self) -> object | None:
        if 0 <= self.cursor < len(self.items):
            return self.items[self.cursor]
        return None

    def move_cursor(self, delta: int) -> ListingState:
        if not self.items:
            return self
        cursor = max(0, min(len(self.items) - 1, self.cursor + delta))
        if cursor == self.cursor:
            return self
        return replace(self, cursor=cursor)

    def failed(self, error: Exception) -> ListingState:
        """State after a load of this window failed.

        The rows shown belonged to the previous window, so they are dropped
        and the paging flags are derived from the window that failed.
        """
        return replace(
            self,
            items=(),
            cursor=0,
            has_more=False,
            has_prev=self.offset > 0,
            loading=False,
            error=error,
        )


@dataclass(frozen=True)
class PageRequest:
    """One page of one entity, tagged with a caller-chosen key."""

    key: str
    entity: str
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


def next_page(state: ListingState) -> ListingState | None:
    """Advance one page if the last load returned a full page."""
    if not state.has_more or state.loading:
        return None
    return replace(state, offset=state.offset + state.limit, cursor=0, loading=True, error=None)


def prev_page(state: ListingState) -> ListingState | None:
    if not state.has_prev or state.loading:
        return None
    return replace(state, offset=max(0, state.offset - state.limit), cursor=0, loading=True, error=None)


class ListingController:
    """Build load/refresh commands for registered entity types."""

    def __init__(
        self,
        cache: FetchCache,
        *,
        entities: Mapping[str, EntitySpec] = ENTITIES,
        page_sizes: Mapping[str, int] | None = None,
        timeout: float | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.cache = cache
        self.entities = entities
        self.page_sizes = dict(page_sizes or {})
        self.timeout = timeout
        self._clock = clock
        self._sleep = sleep

    def spec(self, entity: str) -> EntitySpec:
        try:
            return self.entities[entity]
        except KeyError:
            raise KeyError(f"unknown entity type: {entity!r}") from None

    def page_size(self, entity: str) -> int:
        size = self.page_sizes.get(entity)
        if isinstance(size, int) and not isinstance(size, bool) and size > 0:
            return size
        return self.spec(entity).page_size

    def timeout_for(self, spec: EntitySpec) -> float | None:
        """Configured timeout if one was given, else the entity's own.

        ``None`` leaves the choice to the data source default.
        """
        return self.timeout if self.timeout is not None else spec.timeout

    def initial_state(self, entity: str) -> ListingState:
        """Fresh listing state for a view that was just entered."""
        self.spec(entity)
        return ListingState(entity=entity, limit=self.page_size(entity), loading=True)

    def _request(self, spec: EntitySpec, limit: int, offset: int) -> FetchRequest:
        return FetchRequest(command=spec.noun, limit=limit, offset=offset)

    def _loaded(self, entity: str, limit: int, offset: int, result: FetchResult) -> DataLoaded:
        items = list(result.data)
        state = ListingState(
            entity=entity,
            limit=limit,
            offset=offset,
            items=tuple(items),
            has_more=len(items) == limit,
            has_prev=offset > 0,
            cached=result.cached,
            fetch_seconds=result.fetch_seconds,
            last_update=self._clock(),
        )
        return DataLoaded(entity=entity, data=items, state=state)

    def fetch_page(self, entity: str, limit: int, offset: int) -> DataLoaded | DataError:
        """Fetch one page synchronously and wrap the outcome in a message."""
        spec = self.spec(entity)
        request = self._request(spec, limit, offset)
        try:
            result = self.cache.fetch(
                request,
                (spec.record_type,),
                ttl=spec.cache_ttl,
                timeout=self.timeout_for(spec),
            )
        except DashboardError as exc:
            logger.warning("loading %s failed: %s", entity, exc)
            return DataError(entity=entity, error=exc)
        return self._loaded(entity, limit, offset, result)

    def load(self, entity: str, limit: int, offset: int) -> Command:
        self.spec(entity)
        return lambda: self.fetch_page(entity, limit, offset)

    def refresh(self, entity: str, limit: int, offset: int, *, force: bool = False) -> Command:
        """Reload a page; ``force`` sweeps expired cache entries first."""
        load = self.load(entity, limit, offset)
        if not force:
            return load

        def command():
            removed = self.cache.sweep_expired()
            logger.debug("forced refresh of %s swept %d expired entries", entity, removed)
            return load()

        return command

    def clear_and_load(self, entity: str, limit: int, offset: int) -> Command:
        load = self.load(entity, limit, offset)

        def command():
            self.cache.clear()
            return load()

        return command

    def auto_refresh(self, entity: str, generation: int) -> Command | None:
        """Sleep for the entity's refresh interval, then emit a tick.

        Returns ``None`` for entities without auto-refresh.
        """
        interval = self.spec(entity).refresh_interval
        if interval <= 0:
            return None

        def command():
            self._sleep(interval)
            return RefreshTick(entity=entity, generation=generation)

        return command

    def load_batch(self, requests: Sequence[PageRequest]) -> Command:
        """Fetch several pages concurrently; one message carries every outcome."""
        batch: list[BatchRequest] = []
        by_key: dict[str, PageRequest] = {}
        for page in requests:
            spec = self.spec(page.entity)
            by_key[page.key] = page
            batch.append(
                BatchRequest(
                    key=page.key,
                    request=self._request(spec, page.limit, page.offset),
                    target=(spec.record_type,),
                    ttl=spec.cache_ttl,
                    timeout=self.timeout_for(spec),
                )
            )

        def command():
            results: dict[str, DataLoaded | DataError] = {}
            for key, outcome in self.cache.fetch_batch(batch).items():
                page = by_key[key]
                if outcome.error is not None:
                    results[key] = DataError(entity=page.entity, error=outcome.error)
                else:
                    results[key] = self._loaded(page.entity, page.limit, page.offset, outcome.result)
            return BatchDataLoaded(results=results)

        return command
