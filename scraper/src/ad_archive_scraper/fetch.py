"""Page fetchers: a Playwright browser and a plain HTTP client.

Fetchers only retrieve page content. Retries, pacing and the conversion of
exhausted retries into ``FAILED`` records belong to the pipeline.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

import requests
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .logging import jlog

UTC = getattr(datetime, "UTC", timezone.utc)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
# Any of these means the ad snapshot has rendered enough to scrape.
CONTENT_READY_SELECTOR = 'video, img[src*="fbcdn"], [data-testid]'
CONTENT_READY_TIMEOUT_MS = 10_000
SETTLE_MS = 500

CHROMIUM_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-setuid-sandbox",
    "--disable-gpu",
]


class FetchError(RuntimeError):
    """Transport-level failure retrieving a page; safe to retry."""


@dataclass(frozen=True)
class FetchedPage:
    url: str
    content: str
    fetched_at: datetime


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchedPage: ...

    async def close(self) -> None: ...


async def wait_content_ready(page: Page) -> None:
    """Wait for ad content to attach; a timeout is logged and scraping proceeds anyway."""

    try:
        await page.wait_for_selector(CONTENT_READY_SELECTOR, timeout=CONTENT_READY_TIMEOUT_MS, state="attached")
    except PlaywrightTimeoutError:
        jlog("warning", event="content_selector_timeout", url=page.url)
    await page.wait_for_timeout(SETTLE_MS)


async def _close_context(context: Optional[BrowserContext]) -> None:
    try:
        if context:
            await context.close()
    except PlaywrightError:
        pass


class BrowserFetcher:
    """Renders pages in headless Chromium, one fresh context per URL."""

    def __init__(self, *, user_agent: str = DEFAULT_USER_AGENT, timeout_ms: int, proxy_url: Optional[str] = None) -> None:
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms
        self.proxy_url = proxy_url
        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        # One browser per fetcher; workers share it and open their own contexts.
        self._start_lock = asyncio.Lock()

    async def start(self) -> "BrowserFetcher":
        pw = await async_playwright().start()
        launch_kwargs: dict = {"headless": True, "args": CHROMIUM_LAUNCH_ARGS}
        if self.proxy_url:
            launch_kwargs["proxy"] = {"server": self.proxy_url}
        try:
            browser = await pw.chromium.launch(**launch_kwargs)
        except PlaywrightError:
            await pw.stop()
            raise
        self._pw, self._browser = pw, browser
        jlog("info", event="browser_started", proxy="enabled" if self.proxy_url else "disabled")
        return self

    async def _ensure_started(self) -> Browser:
        async with self._start_lock:
            if self._browser is None:
                await self.start()
        assert self._browser is not None
        return self._browser

    async def fetch(self, url: str) -> FetchedPage:
        context: Optional[BrowserContext] = None
        try:
            browser = await self._ensure_started()
            context = await browser.new_context(user_agent=self.user_agent)
            context.set_default_timeout(self.timeout_ms)
            page = await context.new_page()
            response = await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
            if response is not None and response.status >= 400:
                raise FetchError(f"http_status_{response.status}")
            await wait_content_ready(page)
            content = await page.content()
        except PlaywrightError as exc:
            raise FetchError(str(exc)) from exc
        finally:
            await _close_context(context)
        return FetchedPage(url=url, content=content, fetched_at=datetime.now(UTC))

    async def close(self) -> None:
        try:
            if self._browser:
                await self._browser.close()
        except PlaywrightError:
            pass
        if self._pw:
            await self._pw.stop()
        self._browser = None
        self._pw = None


class HttpFetcher:
    """Fetches raw page HTML without rendering; cheaper, but sees no client-side content."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_ms: int,
        proxy_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_ms = timeout_ms
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept-Language": "en-US,en;q=0.9"})
        if proxy_url:
            self.session.proxies.update({"http": proxy_url, "https": proxy_url})

    def _get(self, url: str) -> str:
        resp = self.session.get(url, timeout=self.timeout_ms / 1000.0)
        resp.raise_for_status()
        return resp.text

    async def fetch(self, url: str) -> FetchedPage:
        try:
            content = await asyncio.to_thread(self._get, url)
        except requests.RequestException as exc:
            raise FetchError(str(exc)) from exc
        return FetchedPage(url=url, content=content, fetched_at=datetime.now(UTC))

    async def close(self) -> None:
        self.session.close()


FETCHER_KINDS = ("browser", "http")


def build_fetcher(kind: str, *, user_agent: str, timeout_ms: int, proxy_url: Optional[str] = None) -> Fetcher:
    if kind == "browser":
        return BrowserFetcher(user_agent=user_agent, timeout_ms=timeout_ms, proxy_url=proxy_url)
    if kind == "http":
        return HttpFetcher(user_agent=user_agent, timeout_ms=timeout_ms, proxy_url=proxy_url)
    raise ValueError(f"unknown fetcher kind: {kind!r}")


__all__ = [
    "CHROMIUM_LAUNCH_ARGS",
    "CONTENT_READY_SELECTOR",
    "DEFAULT_USER_AGENT",
    "FETCHER_KINDS",
    "BrowserFetcher",
    "FetchError",
    "FetchedPage",
    "Fetcher",
    "HttpFetcher",
    "build_fetcher",
    "wait_content_ready",
]
