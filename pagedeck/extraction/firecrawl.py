"""
Firecrawl-backed page scraper.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from pagedeck.configs.config import config
from pagedeck.core.errors import ContentExtractionError
from pagedeck.core.models import ScrapedPage


class FirecrawlScraper:
    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else config.firecrawl_api_key
        self.api_url = (api_url or config.firecrawl_api_url).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def scrape(self, url: str) -> ScrapedPage:
        if not self.is_available():
            raise ContentExtractionError(
                "Firecrawl API key not configured. Please set FIRECRAWL_API_KEY"
            )

        logger.info(f"Scraping {url}...")
        payload = {"url": url, "formats": ["markdown"]}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    f"{self.api_url}/scrape", json=payload, headers=headers
                )
                data: dict[str, Any] = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ContentExtractionError(f"Failed to scrape {url}: {e}") from e

        if not isinstance(data, dict):
            raise ContentExtractionError(f"Unexpected scrape reply for {url}")
        if resp.is_error or not data.get("success"):
            error = data.get("error") or f"HTTP {resp.status_code}"
            raise ContentExtractionError(f"Failed to scrape {url}: {error}")

        result = data.get("data") or {}
        markdown = result.get("markdown") or ""
        if not markdown.strip():
            raise ContentExtractionError(f"Scrape of {url} returned no content")

        page = ScrapedPage(
            url=url, markdown=markdown, metadata=dict(result.get("metadata") or {})
        )
        logger.info(f"Scraped {len(markdown)} characters from {page.source_url}")
        return page


async def scrape_website(url: str) -> ScrapedPage:
    return await FirecrawlScraper().scrape(url)
