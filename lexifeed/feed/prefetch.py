"""Background content loading for the visible feed.

The controller keeps a per-item load status and schedules content loads in
small batches as feed pages arrive. A focus request (for example a deep link
or "next video" tap) loads its target immediately and pins it to the front
of the visible list until the target shows up in a regular feed page.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

from lexifeed import config_manager as cfg
from lexifeed import logging_manager as log_mgr
from lexifeed.config_manager.constants import DEFAULT_PREFETCH_BATCH

from .models import ContentStatus, FeedEntry, FeedItem, FocusRequest, LoadStatus, ProgressResult
from .session import ContentClient

logger = log_mgr.get_logger().getChild("feed.prefetch")

PREFETCH_BATCH = DEFAULT_PREFETCH_BATCH


class FeedPrefetchController:
    """Track feed items and load their content ahead of display."""

    def __init__(self, client: ContentClient, *, batch_size: int = PREFETCH_BATCH) -> None:
        self._client = client
        self.batch_size = batch_size
        self._items: Dict[str, FeedItem] = {}
        self._order: List[str] = []
        self._tasks: Set[asyncio.Task] = set()
        self._focus: Optional[FocusRequest] = None
        self._last_focus_token: Optional[str] = None
        self._tab_focused = True
        self._screen_focused = True

    @classmethod
    def from_settings(
        cls, client: ContentClient, settings: Optional[cfg.LexifeedSettings] = None
    ) -> "FeedPrefetchController":
        active = settings or cfg.get_settings()
        return cls(client, batch_size=active.prefetch_batch_size)

    # ------------------------------------------------------------------
    # Feed ordering and loading
    # ------------------------------------------------------------------
    def on_feed_available(self, entries: Sequence[FeedEntry]) -> List[str]:
        """Adopt a new feed ordering and start loading the next batch.

        Returns the ids whose loads were started. Must be called from a
        running event loop.
        """

        order: List[str] = []
        for entry in entries:
            item = self._items.get(entry.id)
            if item is None:
                item = FeedItem(id=entry.id)
                self._items[entry.id] = item
            item.content_status = entry.content_status
            if entry.id not in order:
                order.append(entry.id)
        self._order = order

        if self._focus is not None and self._focus.target_id in order:
            logger.debug("Focus pin released", extra={"event": "feed.focus.released"})
            self._focus = None

        batch = [
            item_id
            for item_id in order
            if self._items[item_id].load_status is LoadStatus.UNREQUESTED
        ][: self.batch_size]
        for item_id in batch:
            self._start_load(item_id)
        return batch

    def request_focus(self, content_id: str, token: str) -> bool:
        """Load ``content_id`` now and pin it; repeated tokens are ignored."""

        if token == self._last_focus_token:
            return False
        self._last_focus_token = token
        item = self._items.get(content_id)
        if item is None:
            item = FeedItem(id=content_id)
            self._items[content_id] = item
        self._focus = FocusRequest(target_id=content_id, token=token)
        if item.load_status in (LoadStatus.UNREQUESTED, LoadStatus.ERROR):
            self._start_load(content_id)
        return True

    def _start_load(self, content_id: str) -> None:
        item = self._items[content_id]
        item.load_status = LoadStatus.LOADING
        item.error = None
        task = asyncio.get_running_loop().create_task(self._load(item))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _load(self, item: FeedItem) -> None:
        try:
            content = await self._client.get_content(item.id)
        except asyncio.CancelledError:
            item.load_status = LoadStatus.UNREQUESTED
            raise
        except Exception as exc:
            item.load_status = LoadStatus.ERROR
            item.error = str(exc)
            logger.warning(
                "Failed to load content %s: %s",
                item.id,
                exc,
                extra={"event": "feed.content.failed"},
            )
            return
        item.content = content
        item.load_status = LoadStatus.LOADED

    async def wait_idle(self) -> None:
        """Wait until every scheduled load has finished."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------
    @property
    def focus(self) -> Optional[FocusRequest]:
        return self._focus

    def item(self, content_id: str) -> Optional[FeedItem]:
        return self._items.get(content_id)

    def load_status(self, content_id: str) -> LoadStatus:
        item = self._items.get(content_id)
        return item.load_status if item else LoadStatus.UNREQUESTED

    def visible_items(self) -> List[FeedItem]:
        """Loaded items in feed order, preceded by the pinned item if any."""

        visible: List[FeedItem] = []
        pinned_id = self._focus.target_id if self._focus else None
        if pinned_id is not None:
            pinned = self._items.get(pinned_id)
            if pinned is not None and pinned.load_status is LoadStatus.LOADED:
                visible.append(pinned)
        for item_id in self._order:
            if item_id == pinned_id:
                continue
            item = self._items[item_id]
            if item.load_status is LoadStatus.LOADED:
                visible.append(item)
        return visible

    def completed_ids(self) -> Set[str]:
        return {
            item_id
            for item_id in self._order
            if self._items[item_id].content_status
            in (ContentStatus.WATCHED, ContentStatus.COMPLETED)
        }

    # ------------------------------------------------------------------
    # Screen focus
    # ------------------------------------------------------------------
    def set_tab_focused(self, focused: bool) -> None:
        self._tab_focused = focused

    def set_screen_focused(self, focused: bool) -> None:
        self._screen_focused = focused

    @property
    def is_active(self) -> bool:
        return self._tab_focused and self._screen_focused

    # ------------------------------------------------------------------
    # Content actions
    # ------------------------------------------------------------------
    async def submit_progress(
        self, content_id: str, answers: Sequence[Mapping[str, Any]]
    ) -> ProgressResult:
        payload = await self._client.submit_progress(content_id, answers)
        result = ProgressResult.from_wire(payload or {})
        item = self._items.get(content_id)
        if item is not None:
            item.content_status = (
                ContentStatus.COMPLETED if result.completed else ContentStatus.WATCHED
            )
        logger.info(
            "Progress submitted: %d/%d correct",
            result.correct,
            result.total,
            extra={"event": "feed.progress.submitted"},
        )
        return result

    async def toggle_like(self, content_id: str) -> bool:
        return await self._client.toggle_like(content_id)


__all__ = ["FeedPrefetchController", "PREFETCH_BATCH"]
