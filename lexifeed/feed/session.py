"""Feed queries with automatic filter relaxation and cursor pagination."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from lexifeed import logging_manager as log_mgr

from .models import FeedEntry, FeedResponse, FilterSettings
from .relaxation import relax_filters

logger = log_mgr.get_logger().getChild("feed.session")

NO_CONTENT_MESSAGE = "Нет доступных видео. Попробуйте позже."


class ContentClient(Protocol):
    """External content API used by the feed session and prefetcher."""

    async def get_feed(
        self, filters: FilterSettings, cursor: Optional[str] = None
    ) -> FeedResponse: ...

    async def get_content(self, content_id: str) -> Any: ...

    async def submit_progress(
        self, content_id: str, answers: Sequence[Mapping[str, Any]]
    ) -> Mapping[str, Any]: ...

    async def toggle_like(self, content_id: str) -> bool: ...


@dataclass(slots=True)
class FeedPage:
    """Items returned for a feed query plus how the filters were adjusted."""

    items: List[FeedEntry] = field(default_factory=list)
    filters: FilterSettings = field(default_factory=FilterSettings)
    message: Optional[str] = None
    exhausted: bool = False
    has_more: bool = False

    @property
    def was_relaxed(self) -> bool:
        return self.message is not None and not self.exhausted


class FeedSession:
    """Fetch feed pages, loosening filters until something is available."""

    def __init__(self, client: ContentClient) -> None:
        self._client = client
        self._filters = FilterSettings()
        self._cursor: Optional[str] = None
        self._has_more = False

    @property
    def filters(self) -> FilterSettings:
        return self._filters

    @property
    def has_more(self) -> bool:
        return self._has_more

    async def fetch(self, filters: FilterSettings) -> FeedPage:
        """Query the feed with ``filters``, relaxing them on empty results.

        The message of the last relaxation step that produced items is
        returned with the page. When relaxation runs out before any item
        appears, the page is marked ``exhausted``.
        """

        active = filters
        message: Optional[str] = None
        attempt = 0
        while True:
            response = await self._client.get_feed(active)
            if response.items:
                self._remember(active, response)
                if message is not None:
                    logger.info(
                        "Feed filters relaxed after %d attempt(s)",
                        attempt,
                        extra={"event": "feed.filters.relaxed"},
                    )
                return FeedPage(
                    items=list(response.items),
                    filters=active,
                    message=message,
                    has_more=response.has_more,
                )

            relaxed = relax_filters(active, attempt)
            if relaxed is None:
                self._remember(active, response)
                logger.info("Feed exhausted for all filters", extra={"event": "feed.exhausted"})
                return FeedPage(filters=active, message=NO_CONTENT_MESSAGE, exhausted=True)
            active = relaxed.settings
            message = relaxed.message
            attempt += 1

    async def load_more(self) -> FeedPage:
        """Fetch the next page for the current filters; empty when none remain."""

        if not self._cursor or not self._has_more:
            return FeedPage(filters=self._filters)
        response = await self._client.get_feed(self._filters, cursor=self._cursor)
        self._remember(self._filters, response)
        return FeedPage(items=list(response.items), filters=self._filters, has_more=response.has_more)

    def _remember(self, filters: FilterSettings, response: FeedResponse) -> None:
        self._filters = filters
        self._cursor = response.next_cursor
        self._has_more = response.has_more


__all__ = ["ContentClient", "FeedPage", "FeedSession", "NO_CONTENT_MESSAGE"]
