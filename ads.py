"""Ad slot lifecycle: create once per slot, ping the ad on every soft navigation."""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from navigation import ROUTE_CHANGE_COMPLETE, Router

logger = logging.getLogger(__name__)

TOP_SLOT_ID = "lol-name-checker-top"
BOTTOM_SLOT_ID = "lol-name-checker-bottom"


class AdProvider(Protocol):
    def create_ad(self, slot_id: str, config: dict) -> Any:
        """Return an ad handle, or an awaitable resolving to one."""


@dataclass(frozen=True)
class AdConfig:
    demo: bool = True
    format: str = "display"
    sizes: tuple = ((320, 50),)
    media_query: str = "(max-width: 777px)"
    refresh_visible_only: bool = True
    render_visible_only: bool = True
    refresh_limit: int = 10
    refresh_time: int = 60
    report_enabled: bool = True

    @classmethod
    def for_environment(cls, production: bool) -> "AdConfig":
        return cls(demo=not production)

    def to_provider(self) -> dict:
        """Config in the provider's own key names."""
        return {
            "demo": self.demo,
            "format": self.format,
            "sizes": [list(size) for size in self.sizes],
            "mediaQuery": self.media_query,
            "refreshVisibleOnly": self.refresh_visible_only,
            "renderVisibleOnly": self.render_visible_only,
            "refreshLimit": self.refresh_limit,
            "refreshTime": self.refresh_time,
            "report": {"enabled": self.report_enabled},
        }


class AdSlot:
    """
    One ad placement.

    mount() subscribes to route-complete events and schedules creation on
    the running loop; unmount() unsubscribes. Creation is never cancelled,
    but a handle that arrives after unmount is dropped and the next
    mount() requests a fresh one.
    """

    def __init__(self, slot_id: str, provider: AdProvider, router: Router,
                 config: AdConfig | None = None):
        self.slot_id = slot_id
        self.provider = provider
        self.router = router
        self.config = config or AdConfig()
        self.ad = None
        self.task: asyncio.Task | None = None
        self._mounted = False

    async def __aenter__(self):
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.unmount()
        return False

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        self.router.events.on(ROUTE_CHANGE_COMPLETE, self._handle_route_complete)
        if self.task is None:
            self.task = asyncio.get_running_loop().create_task(self._create())

    def unmount(self) -> None:
        if not self._mounted:
            return
        self.router.events.off(ROUTE_CHANGE_COMPLETE, self._handle_route_complete)
        self._mounted = False

    async def _create(self) -> None:
        try:
            ad = self.provider.create_ad(self.slot_id, self.config.to_provider())
            if inspect.isawaitable(ad):
                ad = await ad
        except Exception as e:
            logger.warning("Ad creation failed for slot %s: %s", self.slot_id, e)
            return

        if not self._mounted:
            logger.debug("Slot %s unmounted before its ad resolved; dropping it", self.slot_id)
            # Let a later mount() ask for a new ad
            self.task = None
            return
        self.ad = ad

    def _handle_route_complete(self, url: str) -> None:
        on_navigate = getattr(self.ad, "on_navigate", None)
        if callable(on_navigate):
            on_navigate()
