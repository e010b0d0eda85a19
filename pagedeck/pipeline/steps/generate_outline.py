"""
Generate outline step for the website pipeline.

Alai streams outline fragments over ``generate-slides-outline`` with no
reliable end-of-outline marker, so this session only ends when the remote
side closes it or the deadline elapses.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from pagedeck.configs.config import config
from pagedeck.core.channel import ChannelFactory
from pagedeck.core.models import Container, ScrapedPage
from pagedeck.core.session import SessionSpec, run_session

OUTLINE_ENDPOINT = "generate-slides-outline"


@dataclass
class OutlineFragments:
    fragments: list[dict[str, Any]] = field(default_factory=list)

    def fold(self, frame: Any) -> bool:
        if isinstance(frame, dict) and frame:
            self.fragments.append(frame)
        return False

    def is_empty(self) -> bool:
        return not self.fragments


def build_outline_context(page: ScrapedPage, limit: int | None = None) -> str:
    limit = config.raw_context_limit if limit is None else limit
    return (
        f"markdown: {page.markdown[:limit]},\n"
        f"metadata: {json.dumps(page.metadata or {})}"
    )


def outline_session(
    container: Container,
    page: ScrapedPage,
    questions: Any,
    access_token: str,
    *,
    slide_range: str | None = None,
    deadline: float | None = None,
) -> SessionSpec[OutlineFragments]:
    def build_frame() -> dict[str, Any]:
        return {
            "auth_token": access_token,
            "presentation_id": container.id,
            "presentation_instructions": "",
            "presentation_questions": questions,
            "raw_context": build_outline_context(page),
            "slide_order": 0,
            "slide_range": slide_range or config.slide_range,
        }

    return SessionSpec(
        name="outline",
        endpoint=config.ws_endpoint(OUTLINE_ENDPOINT),
        build_frame=build_frame,
        new_accumulator=OutlineFragments,
        fold=OutlineFragments.fold,
        is_empty=OutlineFragments.is_empty,
        deadline=config.outline_timeout if deadline is None else deadline,
        empty_message="No slide outlines were generated",
    )


async def generate_outline_step(
    container: Container,
    page: ScrapedPage,
    questions: Any,
    access_token: str,
    *,
    slide_range: str | None = None,
    connect: ChannelFactory | None = None,
) -> list[dict[str, Any]]:
    logger.info("Generating slide outlines...")
    spec = outline_session(
        container, page, questions, access_token, slide_range=slide_range
    )
    outcome = await run_session(spec, connect)
    fragments = list(outcome.accumulator.fragments)
    logger.info(f"Received {len(fragments)} outline fragments")
    return fragments


__all__ = ["OutlineFragments", "build_outline_context", "generate_outline_step"]
