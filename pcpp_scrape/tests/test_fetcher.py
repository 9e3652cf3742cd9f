"""Tests for the ZenRows client with a mocked requests session."""

import asyncio
from unittest.mock import MagicMock

import pytest
import requests  # type: ignore[import-untyped]

from pcpp_scrape.config import ZENROWS_API_URL
from pcpp_scrape.fetcher import FetchError, ZenRowsClient

TARGET = "https://pcpartpicker.com/product/22p7YJ/amd-ryzen-9-7950x"


def _response(status_code=200, text="<html></html>"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if status_code >= 400:
        error_resp = MagicMock(status_code=status_code)
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} error", response=error_resp
        )
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestZenRowsClient:
    def test_detail_params(self, session):
        session.get.return_value = _response(text="<p>ok</p>")
        client = ZenRowsClient("secret", timeout=30, session=session)

        body = asyncio.run(client.get(TARGET, premium_proxy=True))

        assert body == "<p>ok</p>"
        session.get.assert_called_once_with(
            ZENROWS_API_URL,
            params={"apikey": "secret", "url": TARGET, "premium_proxy": "true"},
            timeout=30,
        )

    def test_listing_params(self, session):
        client = ZenRowsClient("secret", session=session)
        params = client.build_params(TARGET, premium_proxy=True, js_render=True, wait=3000)
        assert params == {
            "apikey": "secret",
            "url": TARGET,
            "js_render": "true",
            "wait": 3000,
            "premium_proxy": "true",
        }

    def test_http_error_carries_status(self, session):
        session.get.return_value = _response(status_code=422)
        client = ZenRowsClient("secret", session=session)

        with pytest.raises(FetchError) as exc_info:
            client.fetch(TARGET, premium_proxy=True)

        assert exc_info.value.status_code == 422
        assert exc_info.value.url == TARGET

    def test_connection_error_has_no_status(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError("reset")
        client = ZenRowsClient("secret", session=session)

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(client.get(TARGET))

        assert exc_info.value.status_code is None

    def test_request_error_message_hides_api_key(self, session):
        session.get.side_effect = requests.exceptions.ConnectionError(
            "HTTPConnectionPool(host='127.0.0.1', port=9): Max retries exceeded with url: "
            f"/v1/?apikey=SUPERSECRETKEY&url={TARGET}"
        )
        client = ZenRowsClient("SUPERSECRETKEY", session=session)

        with pytest.raises(FetchError) as exc_info:
            client.fetch(TARGET, premium_proxy=True)

        message = str(exc_info.value)
        assert "SUPERSECRETKEY" not in message
        assert "apikey" not in message
        assert TARGET in message
        assert "ConnectionError" in message

    def test_timeout_has_no_status(self, session):
        session.get.side_effect = requests.exceptions.Timeout("slow")
        client = ZenRowsClient("secret", timeout=5, session=session)

        with pytest.raises(FetchError) as exc_info:
            client.fetch(TARGET)

        assert exc_info.value.status_code is None
        assert "Timeout" in str(exc_info.value)

    def test_close_closes_session(self, session):
        ZenRowsClient("secret", session=session).close()
        session.close.assert_called_once()
