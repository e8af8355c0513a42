"""
Client-side state for the name checker page.

The page keeps three things in step with soft navigations: the form
inputs, the loading indicator and the one-shot error notification.
Route events come from a Router, which is passed in, so the same logic
runs against a real browser bridge or against tests.
"""

import enum
import logging
from collections import defaultdict
from dataclasses import dataclass

from lookup import (
    DEFAULT_REGION,
    PAGE_PATH,
    LookupOutcome,
    SummonerQuery,
    SummonerRecord,
    build_url,
)

logger = logging.getLogger(__name__)

ROUTE_CHANGE_START = "route_change_start"
ROUTE_CHANGE_COMPLETE = "route_change_complete"

MIN_NAME_LENGTH = 3
ERROR_MESSAGE = "Oh no! An error occurred. Please check your inputs and try again."


class RouterEvents:
    def __init__(self):
        self._handlers = defaultdict(list)

    def on(self, event: str, handler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: str, handler) -> None:
        try:
            self._handlers[event].remove(handler)
        except ValueError:
            pass

    def emit(self, event: str, *args) -> None:
        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers[event]):
            handler(*args)

    def count(self, event: str) -> int:
        return len(self._handlers[event])


class Router:
    """Minimal soft-navigation router: start on push, complete when props land."""

    def __init__(self, as_path: str = PAGE_PATH):
        self.as_path = as_path
        self.pending = None
        self.events = RouterEvents()

    def push(self, url: str) -> None:
        self.pending = url
        self.events.emit(ROUTE_CHANGE_START, url)

    def complete(self, url: str | None = None) -> None:
        url = url or self.pending or self.as_path
        self.as_path = url
        self.pending = None
        self.events.emit(ROUTE_CHANGE_COMPLETE, url)


@dataclass(frozen=True)
class PageProps:
    """Props handed from the server render to the page; never mutated."""

    query: SummonerQuery | None = None
    outcome: LookupOutcome | None = None

    @property
    def found(self) -> bool:
        return self.outcome is not None and self.outcome.found

    @property
    def not_found(self) -> bool:
        return self.outcome is not None and self.outcome.not_found

    @property
    def error(self) -> bool:
        return self.outcome is not None and self.outcome.error

    def to_json(self) -> dict:
        if self.query is None or self.outcome is None:
            return {}
        record = self.outcome.record
        return {
            "initialRegion": self.query.region,
            "initialName": self.query.name,
            "summoner": record.to_json() if record else None,
            "found": self.found,
            "notFound": self.not_found,
            "error": self.error,
        }

    @classmethod
    def from_json(cls, data: dict) -> "PageProps":
        if not data:
            return cls()
        query = SummonerQuery(region=data["initialRegion"], name=data["initialName"])
        if data.get("found"):
            outcome = LookupOutcome.found_record(SummonerRecord.from_json(data["summoner"]))
        elif data.get("notFound"):
            outcome = LookupOutcome.missing()
        else:
            outcome = LookupOutcome.failed()
        return cls(query=query, outcome=outcome)


class Notifier:
    """Fires once each time the watched condition turns true."""

    def __init__(self, emit=None, message: str = ERROR_MESSAGE):
        self._emit = emit or (lambda msg: logger.info("notify: %s", msg))
        self.message = message
        self._last = False

    def update(self, condition: bool) -> bool:
        changed = condition != self._last
        self._last = condition
        if changed and condition:
            self._emit(self.message)
            return True
        return False


class PageState(enum.Enum):
    IDLE = "idle"
    SETTLED = "settled"
    NAVIGATING = "navigating"


class NameCheckerPage:
    def __init__(self, router: Router, props: PageProps, notify=None):
        self.router = router
        self.props = props
        self.notifier = Notifier(notify)
        self.loading = False
        self.name = ""
        self.region = DEFAULT_REGION.name
        self._mounted = False
        self._sync_inputs(props.query)
        self.notifier.update(props.error)

    def __enter__(self):
        self.mount()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.unmount()
        return False

    def mount(self) -> None:
        if self._mounted:
            return
        self.router.events.on(ROUTE_CHANGE_START, self._handle_start)
        self._mounted = True

    def unmount(self) -> None:
        if not self._mounted:
            return
        self.router.events.off(ROUTE_CHANGE_START, self._handle_start)
        self._mounted = False

    @property
    def state(self) -> PageState:
        if self.loading:
            return PageState.NAVIGATING
        if self.props.query is None:
            return PageState.IDLE
        return PageState.SETTLED

    def _handle_start(self, url: str) -> None:
        # Full path+query comparison: resubmitting the same search is a no-op
        if url.startswith(PAGE_PATH + "?") and url != self.router.as_path:
            logger.debug("Navigating to %s", url)
            self.loading = True

    def render(self, props: PageProps) -> None:
        """Commit fresh props. Loading is cleared before anything else."""
        self.loading = False
        previous = self.props.query
        self.props = props
        if props.query is not None and props.query != previous:
            self._sync_inputs(props.query)
        self.notifier.update(props.error)

    def _sync_inputs(self, query: SummonerQuery | None) -> None:
        if query is None:
            return
        self.name = query.name
        self.region = query.region_label

    # --- form ---

    def set_name(self, value: str) -> None:
        self.name = value

    def set_region(self, value: str) -> None:
        self.region = value

    @property
    def url(self) -> str:
        return build_url(self.region, self.name)

    @property
    def can_submit(self) -> bool:
        return len(self.name) >= MIN_NAME_LENGTH

    def submit(self) -> bool:
        if not self.can_submit:
            return False
        self.router.push(self.url)
        return True

    def key_press(self, key: str) -> bool:
        if key == "Enter":
            return self.submit()
        return False
