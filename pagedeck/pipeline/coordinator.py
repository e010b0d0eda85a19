"""
Pipeline coordinator for PageDeck.

This module sequences the website-to-presentation workflow:

    extract content -> create presentation -> generate outline -> create slides
    -> (persist, create variant, activate variant) for every slide -> share

Every step before the per-slide loop is fatal: a failure there aborts the run
with :class:`PipelineStepFailedError`. Inside the loop each slide is isolated;
its outcome is recorded as a :class:`DraftOutcome` and the loop moves on.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from pagedeck.alai.client import AlaiClient
from pagedeck.configs.config import config
from pagedeck.core.channel import ChannelFactory
from pagedeck.core.errors import PipelineStepFailedError
from pagedeck.core.models import Container, DraftOutcome, PipelineReport, ScrapedPage
from pagedeck.extraction.firecrawl import FirecrawlScraper
from pagedeck.schemas.slides import SlideDraft

from .steps.create_slides import create_slides_step
from .steps.create_variant import create_variant_step
from .steps.generate_outline import generate_outline_step

T = TypeVar("T")

_STEP_DISPLAY_NAMES = {
    "extract_content": "Scraping website content",
    "create_presentation": "Creating presentation",
    "generate_outline": "Generating slide outlines",
    "create_slides": "Creating slides from outlines",
    "process_slides": "Rendering slide variants",
    "share_presentation": "Creating shareable link",
}


class WebsiteDeckPipeline:
    """Builds one Alai presentation from one web page."""

    def __init__(
        self,
        url: str,
        client: AlaiClient,
        scraper: FirecrawlScraper | None = None,
        *,
        title: str | None = None,
        slide_range: str | None = None,
        connect: ChannelFactory | None = None,
    ) -> None:
        self.url = url
        self.client = client
        self.scraper = scraper or FirecrawlScraper()
        self.title = title
        self.slide_range = slide_range
        self.connect = connect

    def get_step_display_name(self, step_name: str) -> str:
        return _STEP_DISPLAY_NAMES.get(step_name, step_name)

    async def _execute_step(
        self, step_name: str, step_func: Callable[..., Awaitable[T]], *args: Any
    ) -> T:
        """Run a fatal step, converting any failure into PipelineStepFailedError."""
        display_name = self.get_step_display_name(step_name)
        logger.info(f"=== Executing: {display_name} ===")
        try:
            return await step_func(*args)
        except Exception as e:
            logger.error(f"Step {step_name} failed: {e}")
            raise PipelineStepFailedError(
                step_name, f"{display_name} failed: {e}"
            ) from e

    async def execute_pipeline(self) -> PipelineReport:
        logger.info(f"Starting presentation creation from {self.url}")

        page: ScrapedPage = await self._execute_step(
            "extract_content", self.scraper.scrape, self.url
        )
        container: Container = await self._execute_step(
            "create_presentation", self.client.create_presentation, self.title
        )
        outlines = await self._execute_step(
            "generate_outline", self._generate_outline, container, page
        )
        drafts = await self._execute_step(
            "create_slides", self._create_slides, container, page, outlines
        )

        display_name = self.get_step_display_name("process_slides")
        logger.info(f"=== Executing: {display_name} ===")
        outcomes = await self._process_drafts(container, drafts)

        token = await self._execute_step(
            "share_presentation", self.client.share_presentation, container.id
        )
        report = PipelineReport(
            presentation_id=container.id,
            share_url=config.share_url(token),
            outcomes=outcomes,
        )
        failed = len(report.failed)
        if failed:
            logger.warning(f"{failed} of {len(outcomes)} slides could not be rendered")
        logger.info("Presentation created successfully!")
        return report

    async def _generate_outline(
        self, container: Container, page: ScrapedPage
    ) -> list[dict[str, Any]]:
        questions = await self.client.get_presentation_questions(container.id)
        return await generate_outline_step(
            container,
            page,
            questions,
            self.client.access_token,
            slide_range=self.slide_range,
            connect=self.connect,
        )

    async def _create_slides(
        self,
        container: Container,
        page: ScrapedPage,
        outlines: list[dict[str, Any]],
    ) -> list[SlideDraft]:
        return await create_slides_step(
            container, page, outlines, self.client.access_token, connect=self.connect
        )

    async def _process_drafts(
        self, container: Container, drafts: list[SlideDraft]
    ) -> list[DraftOutcome]:
        logger.info(f"Processing {len(drafts)} slides...")
        outcomes = []
        for index, draft in enumerate(drafts, start=1):
            outcomes.append(await self._process_draft(index, container, draft))
        return outcomes

    async def _process_draft(
        self, index: int, container: Container, draft: SlideDraft
    ) -> DraftOutcome:
        """Persist, render and activate one draft; never raises."""
        outcome = DraftOutcome(index=index, slide_id=draft.slide_id, title=draft.title)
        step = "update_slide"
        try:
            await self.client.update_slide(draft)

            step = "create_variant"
            variant = await create_variant_step(
                container.id, draft, self.client.access_token, connect=self.connect
            )
            outcome.variant_id = variant.id

            step = "set_active_variant"
            await self.client.set_active_variant(draft.slide_id, variant.id)
        except Exception as e:
            logger.error(f"Error processing slide {index} ({step}): {e}")
            outcome.status = "failed"
            outcome.failed_step = step
            outcome.error = str(e)
        return outcome


async def create_presentation_from_website(
    url: str,
    *,
    title: str | None = None,
    slide_range: str | None = None,
    connect: ChannelFactory | None = None,
) -> PipelineReport:
    """Run the full pipeline for ``url`` and return the report."""
    async with AlaiClient() as client:
        pipeline = WebsiteDeckPipeline(
            url, client, title=title, slide_range=slide_range, connect=connect
        )
        return await pipeline.execute_pipeline()
