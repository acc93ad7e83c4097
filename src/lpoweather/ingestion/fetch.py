"""
Feed retrieval for one day of station readings.

Each quantity is published as a plain-text page under
{base_url}/{YYYY}/{YYYY_MM_DD}/{page}. Every request gets its own
buffer; nothing is shared between fetches.
"""

import re
from datetime import date, datetime
from types import TracebackType

import httpx

from lpoweather.config.settings import FetchConfig, Quantity
from lpoweather.exceptions import DateFormatError, FetchError
from lpoweather.merging.merger import RawSource
from lpoweather.utils.logging import get_logger

log = get_logger(__name__)

_TARGET_DATE = re.compile(r"\d{8}")
TODAY = "today"


def parse_target_date(arg: str | None, today: date | None = None) -> date:
    """
    Parse the target date argument.

    Args:
        arg: YYYYMMDD, "today", or None/empty for today.
        today: Reference date for "today" (defaults to the local date).

    Returns:
        Target date.

    Raises:
        DateFormatError: If the argument is not a valid YYYYMMDD date.
    """
    if arg is None or arg.strip() in ("", TODAY):
        return today or date.today()

    value = arg.strip()
    if not _TARGET_DATE.fullmatch(value):
        msg = f"Improper date format: Use YYYYMMDD (got {arg!r})"
        raise DateFormatError(msg)
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError as e:
        msg = f"Improper date format: Use YYYYMMDD (no such date {arg!r})"
        raise DateFormatError(msg) from e


def build_source_url(base_url: str, path: str, day: date) -> str:
    """
    Build the page address for one quantity and day.

    Example:
        >>> build_source_url("http://lpo.dt.navy.mil/data/DM", "Air_Temp",
        ...                  date(2015, 2, 3))
        'http://lpo.dt.navy.mil/data/DM/2015/2015_02_03/Air_Temp'
    """
    return f"{base_url.rstrip('/')}/{day:%Y}/{day:%Y_%m_%d}/{path}"


class SourceFetcher:
    """
    Retrieves the three quantity feeds for a day.

    Use as a context manager; a client passed in by the caller is not
    closed by the fetcher.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize fetcher.

        Args:
            config: Feed locations and HTTP settings.
            client: Optional preconfigured HTTP client.
        """
        self.config = config or FetchConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(self.config.timeout),
            follow_redirects=True,
            headers={"User-Agent": self.config.user_agent},
        )

    def __enter__(self) -> "SourceFetcher":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def url_for(self, quantity: Quantity, day: date) -> str:
        """Page address for a quantity and day."""
        return build_source_url(
            self.config.base_url, self.config.path_for(quantity), day
        )

    def fetch(self, quantity: Quantity, day: date) -> RawSource:
        """
        Fetch one quantity feed.

        Args:
            quantity: Quantity to fetch.
            day: Day of readings.

        Returns:
            RawSource holding the page bytes.

        Raises:
            FetchError: On transport failure, HTTP error status, or when
                the server substitutes its error page.
        """
        url = self.url_for(quantity, day)
        log.info("Fetching source", quantity=quantity.value, url=url)

        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            msg = f"Request failed: {e}"
            raise FetchError(msg, url=url) from e

        if response.status_code >= 400:
            msg = f"HTTP status {response.status_code}"
            raise FetchError(msg, url=url)

        content = response.content
        if self.config.error_marker.encode() in content:
            msg = "Web page error reported. Confirm correct date."
            raise FetchError(msg, url=url)

        log.info("Fetched source", quantity=quantity.value, bytes=len(content))
        return RawSource(quantity=quantity, content=content, url=str(response.url))

    def fetch_all(self, day: date) -> tuple[RawSource, RawSource, RawSource]:
        """
        Fetch all three feeds, air temperature first.

        The air temperature page is checked before the others are
        requested, since all three pages go down together.
        """
        air, pressure, wind = (self.fetch(quantity, day) for quantity in Quantity)
        return air, pressure, wind
