"""HTTP access through the ZenRows rendering proxy."""

import asyncio
from typing import Any, Dict, Optional

import requests  # type: ignore[import-untyped]

from pcpp_scrape.config import REQUEST_TIMEOUT, ZENROWS_API_URL
from pcpp_scrape.logging_config import get_logger

__all__ = ["FetchError", "ZenRowsClient", "create_session"]

logger = get_logger("fetcher")


class FetchError(Exception):
    """Raised when a page could not be fetched.

    status_code is the HTTP status returned by the proxy, or None for
    network-level failures (DNS, connection reset, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


def create_session() -> requests.Session:
    """Create a requests Session with connection pooling.

    The API key travels as a query parameter, so no auth headers are set.
    """
    session = requests.Session()
    session.headers.setdefault("Accept-Encoding", "gzip, deflate")
    return session


class ZenRowsClient:
    """Fetches rendered HTML for a target URL via the ZenRows API.

    get() is a coroutine; the blocking request runs in a worker thread so
    callers can await it.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
        api_url: str = ZENROWS_API_URL,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.api_url = api_url
        self._session = session or create_session()

    def build_params(
        self,
        url: str,
        premium_proxy: bool = False,
        js_render: bool = False,
        wait: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Query parameters for one API call."""
        params: Dict[str, Any] = {"apikey": self.api_key, "url": url}
        if js_render:
            params["js_render"] = "true"
        if wait:
            params["wait"] = wait
        if premium_proxy:
            params["premium_proxy"] = "true"
        return params

    def fetch(
        self,
        url: str,
        premium_proxy: bool = False,
        js_render: bool = False,
        wait: Optional[int] = None,
    ) -> str:
        """Blocking fetch. Returns the rendered HTML body.

        Raises:
            FetchError: On any HTTP or network failure
        """
        params = self.build_params(url, premium_proxy=premium_proxy, js_render=js_render, wait=wait)
        try:
            resp = self._session.get(self.api_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise FetchError(f"HTTP Error {status_code} fetching {url}", status_code=status_code, url=url) from e
        except requests.exceptions.Timeout as e:
            raise FetchError(f"Timeout after {self.timeout}s fetching {url}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request error fetching {url}: {type(e).__name__}", url=url) from e
        return str(resp.text)

    async def get(
        self,
        url: str,
        premium_proxy: bool = False,
        js_render: bool = False,
        wait: Optional[int] = None,
    ) -> str:
        """Awaitable wrapper around fetch()."""
        logger.debug(f"GET {url} (js_render={js_render}, wait={wait}, premium_proxy={premium_proxy})")
        return await asyncio.to_thread(
            self.fetch, url, premium_proxy=premium_proxy, js_render=js_render, wait=wait
        )

    def close(self) -> None:
        self._session.close()
