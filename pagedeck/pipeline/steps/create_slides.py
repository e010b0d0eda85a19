"""
Create slides step for the website pipeline.

Turns the outline into slide drafts over ``create-slides-from-outlines``.
Alai reports two things on this stream: the id of the placeholder slide it
created with the presentation (the first frame carrying ``slide_id``) and the
batch of drafts (the first frame carrying a non-empty ``slides`` list). The
placeholder is removed from the batch once the session has ended. The batch
ends the session, so a sentinel sent after it is never read; the placeholder
id known from the container is used in that case. Either way the order in
which those two frames arrive does not matter.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from typing import Any

from loguru import logger
from pydantic import ValidationError

from pagedeck.configs.config import config
from pagedeck.core.channel import ChannelFactory
from pagedeck.core.errors import EmptySessionError
from pagedeck.core.models import Container, ScrapedPage
from pagedeck.core.session import SessionSpec, run_session
from pagedeck.schemas.slides import SlideDraft

CREATE_SLIDES_ENDPOINT = "create-slides-from-outlines"


@dataclass
class DraftBatch:
    sentinel_id: str | None = None
    drafts: list[SlideDraft] | None = None
    placeholder_id: str | None = None

    def fold(self, frame: Any) -> bool:
        if not isinstance(frame, dict):
            return False

        slide_id = frame.get("slide_id")
        if slide_id and self.sentinel_id is None:
            self.sentinel_id = str(slide_id)

        slides = frame.get("slides")
        if self.drafts is None and isinstance(slides, list) and slides:
            drafts = _parse_drafts(slides)
            if drafts:
                self.drafts = drafts
        return self.is_done()

    def is_done(self) -> bool:
        return bool(self.drafts)

    def is_empty(self) -> bool:
        return not self.drafts

    def finalize(self) -> list[SlideDraft]:
        """Return the batch without the placeholder slide, preserving order."""
        drafts = self.drafts or []
        excluded = self.excluded_id
        if excluded is None:
            return list(drafts)
        return [d for d in drafts if d.slide_id != excluded]

    @property
    def excluded_id(self) -> str | None:
        return self.sentinel_id or self.placeholder_id


def _parse_drafts(slides: list[Any]) -> list[SlideDraft]:
    drafts = []
    for position, raw in enumerate(slides):
        try:
            drafts.append(SlideDraft.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed slide draft #{position + 1}: {e}")
    return drafts


def build_slides_context(page: ScrapedPage, excerpt_limit: int | None = None) -> str:
    limit = config.excerpt_limit if excerpt_limit is None else excerpt_limit
    return json.dumps(
        {
            "title": page.title,
            "url": page.source_url,
            "excerpt": page.markdown[:limit],
        }
    )


def create_slides_session(
    container: Container,
    page: ScrapedPage,
    outlines: list[dict[str, Any]],
    access_token: str,
    *,
    deadline: float | None = None,
) -> SessionSpec[DraftBatch]:
    def build_frame() -> dict[str, Any]:
        return {
            "auth_token": access_token,
            "presentation_id": container.id,
            "presentation_instructions": "",
            "raw_context": build_slides_context(page),
            "slide_id": container.initial_slide_id,
            "slide_outlines": outlines,
            "starting_slide_order": 0,
            "update_tone_verbosity_calibration_status": True,
        }

    return SessionSpec(
        name="create_slides",
        endpoint=config.ws_endpoint(CREATE_SLIDES_ENDPOINT),
        build_frame=build_frame,
        new_accumulator=partial(DraftBatch, placeholder_id=container.initial_slide_id),
        fold=DraftBatch.fold,
        is_done=DraftBatch.is_done,
        is_empty=DraftBatch.is_empty,
        deadline=config.create_slides_timeout if deadline is None else deadline,
        empty_message="No slides were created",
    )


async def create_slides_step(
    container: Container,
    page: ScrapedPage,
    outlines: list[dict[str, Any]],
    access_token: str,
    *,
    connect: ChannelFactory | None = None,
) -> list[SlideDraft]:
    logger.info("Creating slides from outlines...")
    spec = create_slides_session(container, page, outlines, access_token)
    outcome = await run_session(spec, connect)
    batch = outcome.accumulator

    drafts = batch.finalize()
    if batch.excluded_id is not None:
        logger.info(f"Placeholder slide to remove: {batch.excluded_id}")
    if not drafts:
        raise EmptySessionError("No slides were created", timed_out=outcome.timed_out)
    logger.info(f"Created {len(drafts)} slides successfully")
    return drafts


__all__ = ["DraftBatch", "build_slides_context", "create_slides_step"]
