"""Summoner lookups against the NamesLoL API."""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from urllib.parse import quote, urlencode

import requests

from config import DEFAULT_API_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

PAGE_PATH = "/lol-name-checker"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

HEADERS = {
    "User-Agent": "NamesLoL-NameChecker/1.0",
    "Accept": "application/json",
}


class SummonerLookupError(Exception):
    pass


class Region(enum.Enum):
    NA = "North America (NA)"
    EUW = "Europe West (EUW)"
    EUNE = "Europe Nordic & East (EUNE)"
    OCE = "Oceanic (OCE)"
    LAS = "Latin America South (LAS)"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, code: str) -> "Region | None":
        """Case-insensitive lookup by code; None for anything unknown."""
        return cls.__members__.get((code or "").upper())


DEFAULT_REGION = Region.NA


@dataclass(frozen=True)
class SummonerQuery:
    """A region/name pair, kept in its canonical lowercase URL form."""

    region: str
    name: str

    @classmethod
    def from_args(cls, args) -> "SummonerQuery | None":
        """Build a query from request args, or None when either part is missing."""
        region = args.get("region")
        name = args.get("name")
        if not region or not name:
            return None
        return cls(region=region.lower(), name=name.lower())

    @property
    def region_code(self) -> Region | None:
        return Region.parse(self.region)

    @property
    def region_label(self) -> str:
        return self.region.upper()

    def to_url(self) -> str:
        return build_url(self.region, self.name)


def build_url(region: str, name: str) -> str:
    """In-app path+query for a search, lowercased."""
    qs = urlencode({"region": region.lower(), "name": name.lower()}, quote_via=quote)
    return f"{PAGE_PATH}?{qs}"


@dataclass(frozen=True)
class SummonerRecord:
    name: str
    level: int
    revision_date: datetime
    availability_date: datetime

    @classmethod
    def from_json(cls, data: dict) -> "SummonerRecord":
        """Validate a raw API body. Raises SummonerLookupError on bad shape."""
        if not isinstance(data, dict):
            raise SummonerLookupError("Summoner body is not an object")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise SummonerLookupError("Summoner record has no name")

        # bool is an int subclass; reject it explicitly
        level = data.get("level")
        if not isinstance(level, int) or isinstance(level, bool):
            raise SummonerLookupError(f"Summoner record has invalid level: {level!r}")

        return cls(
            name=name,
            level=level,
            revision_date=_parse_instant(data.get("revisionDate"), "revisionDate"),
            availability_date=_parse_instant(data.get("availabilityDate"), "availabilityDate"),
        )

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "level": self.level,
            "revisionDate": _to_millis(self.revision_date),
            "availabilityDate": _to_millis(self.availability_date),
        }


def _parse_instant(value, field: str) -> datetime:
    """Epoch milliseconds -> aware UTC datetime."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise SummonerLookupError(f"Summoner record has invalid {field}: {value!r}")
    try:
        return EPOCH + timedelta(milliseconds=value)
    except (OverflowError, ValueError) as e:
        raise SummonerLookupError(f"Summoner record has out-of-range {field}: {e}")


def _to_millis(dt: datetime) -> int:
    return (dt - EPOCH) // timedelta(milliseconds=1)


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class LookupOutcome:
    status: LookupStatus
    record: SummonerRecord | None = None

    @classmethod
    def found_record(cls, record: SummonerRecord) -> "LookupOutcome":
        return cls(LookupStatus.FOUND, record)

    @classmethod
    def missing(cls) -> "LookupOutcome":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls) -> "LookupOutcome":
        return cls(LookupStatus.ERROR)

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def not_found(self) -> bool:
        return self.status is LookupStatus.NOT_FOUND

    @property
    def error(self) -> bool:
        return self.status is LookupStatus.ERROR


def summoner_url(region: Region, name: str, base_url: str = DEFAULT_API_URL) -> str:
    return f"{base_url}/{region.name.lower()}/summoner/{quote(name, safe='')}"


def _fetch(url: str, timeout: float) -> requests.Response:
    """Single GET, no retries. Transport failures become SummonerLookupError."""
    try:
        return requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise SummonerLookupError(f"Request to {url} failed: {e}")


def fetch_summoner(
    region: Region, name: str,
    base_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT,
) -> SummonerRecord | None:
    """
    Fetch one summoner record.
    Returns None when the service reports 404 (nobody holds the name);
    raises SummonerLookupError for every other non-200 answer.
    """
    url = summoner_url(region, name, base_url)
    resp = _fetch(url, timeout)

    if resp.status_code == 404:
        return None
    if resp.status_code != 200:
        raise SummonerLookupError(f"Unexpected status {resp.status_code} from {url}")

    try:
        data = resp.json()
    except ValueError as e:
        raise SummonerLookupError(f"Invalid JSON from {url}: {e}")
    return SummonerRecord.from_json(data)


def lookup(
    query: SummonerQuery,
    base_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT,
) -> LookupOutcome:
    """Resolve a query into Found / NotFound / Error. Never raises."""
    region = query.region_code
    if region is None:
        logger.warning("Unknown region %r for %r", query.region, query.name)
        return LookupOutcome.failed()

    try:
        record = fetch_summoner(region, query.name, base_url, timeout)
    except SummonerLookupError as e:
        logger.warning("Lookup failed for %s/%s: %s", query.region, query.name, e)
        return LookupOutcome.failed()

    if record is None:
        logger.info("No summoner holds %s/%s", query.region, query.name)
        return LookupOutcome.missing()

    logger.info("Found summoner %s/%s (level %d)", query.region, record.name, record.level)
    return LookupOutcome.found_record(record)
