"""Shared fixtures: HTML builders and a fake fetch client."""

import logging
from html import escape
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from pcpp_scrape.fetcher import FetchError
from pcpp_scrape.logging_config import ROOT_LOGGER

SpecValue = Union[str, List[str]]


def detail_page_html(groups: Sequence[Tuple[str, SpecValue]]) -> str:
    """A detail page with the specs block nested the way the site nests it.

    A str value renders as <p>, a list renders as <ul><li>.
    """
    parts = []
    for title, value in groups:
        if isinstance(value, list):
            items = "".join(f"<li> {escape(v)} </li>" for v in value)
            body = f"<ul>{items}</ul>"
        else:
            body = f"<p>\n  {escape(value)}\n</p>"
        parts.append(f'<div class="group"><h3> {escape(title)} </h3><div>{body}</div></div>')

    return (
        '<html><body><div id="product-page">'
        '<div class="main-wrapper xs-col-12">'
        '<div class="wrapper wrapper__pageContent"><section><div>'
        '<div class="main-content col xs-col-12 md-col-8 lg-col-8 xl-col-9">'
        f'<div class="block xs-block md-hide specs">{"".join(parts)}</div>'
        "</div></div></section></div></div></div></body></html>"
    )


def listing_row_html(
    name: Optional[str],
    href: Optional[str] = "/product/abc123/amd-ryzen",
    image: Optional[str] = "https://cdna.pcpartpicker.com/static/img.jpg",
    price: Optional[str] = "$329.00",
) -> str:
    img = f'<div class="td__imageWrapper"><div><img src="{image}"></div></div>' if image else ""
    name_html = f'<div class="td__nameWrapper"><p>{escape(name)}</p></div>' if name else ""
    href_attr = f' href="{href}"' if href else ""
    price_html = (
        f'<td class="td__price">{escape(price)}<button class="button">Add</button></td>'
        if price is not None
        else ""
    )
    return f'<tr><td class="td__name"><a{href_attr}>{img}{name_html}</a></td>{price_html}</tr>'


def listing_page_html(rows: Sequence[str]) -> str:
    return (
        "<html><body><table><tbody id=\"category_content\">"
        + "".join(rows)
        + "</tbody></table></body></html>"
    )


class FakeClient:
    """In-memory PageFetcher.

    responses maps URL -> list of outcomes consumed one per call; an outcome
    is HTML or an exception to raise. The last outcome repeats.
    """

    def __init__(self, responses: Dict[str, List[Union[str, Exception]]]):
        self.responses = responses
        self.calls: List[Tuple[str, dict]] = []

    async def get(self, url, premium_proxy=False, js_render=False, wait=None):
        self.calls.append((url, {"premium_proxy": premium_proxy, "js_render": js_render, "wait": wait}))
        outcomes = self.responses.get(url)
        if not outcomes:
            raise FetchError(f"HTTP Error 404 fetching {url}", status_code=404, url=url)
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]


class RecordingSleep:
    """Awaitable sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def output_csv(tmp_path):
    return str(tmp_path / "cpus_detailed.csv")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers main() installs so they don't leak between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
