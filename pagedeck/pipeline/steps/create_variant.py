"""
Create variant step for the website pipeline.

Requests a rendered variant for one draft over
``create-and-stream-slide-variants`` and keeps the first variant Alai reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from pagedeck.configs.config import config
from pagedeck.core.channel import ChannelFactory
from pagedeck.core.errors import EmptySessionError
from pagedeck.core.models import Variant
from pagedeck.core.session import SessionSpec, run_session
from pagedeck.schemas.slides import SlideDraft

VARIANTS_ENDPOINT = "create-and-stream-slide-variants"


@dataclass
class VariantLatch:
    variant: Variant | None = None

    def fold(self, frame: Any) -> bool:
        if self.variant is None and isinstance(frame, dict):
            if frame.get("slide_id") and frame.get("id"):
                self.variant = Variant(
                    id=str(frame["id"]), slide_id=str(frame["slide_id"])
                )
        return self.is_done()

    def is_done(self) -> bool:
        return self.variant is not None

    def is_empty(self) -> bool:
        return self.variant is None


def create_variant_session(
    container_id: str,
    draft: SlideDraft,
    access_token: str,
    *,
    layout_type: str | None = None,
    deadline: float | None = None,
) -> SessionSpec[VariantLatch]:
    outline = draft.slide_outline

    def build_frame() -> dict[str, Any]:
        return {
            "additional_instructions": outline.slide_instructions or "",
            "auth_token": access_token,
            "images_on_slide": list(outline.images_on_slide or []),
            "layout_type": layout_type or config.layout_type,
            "presentation_id": container_id,
            "slide_id": outline.slide_id,
            "slide_specific_context": outline.slide_context or "",
            "slide_title": draft.title,
            "update_tone_verbosity_calibration_status": False,
        }

    return SessionSpec(
        name=f"variant:{outline.slide_id}",
        endpoint=config.ws_endpoint(VARIANTS_ENDPOINT),
        build_frame=build_frame,
        new_accumulator=VariantLatch,
        fold=VariantLatch.fold,
        is_done=VariantLatch.is_done,
        is_empty=VariantLatch.is_empty,
        deadline=config.variant_timeout if deadline is None else deadline,
        empty_message=f"No variants created for slide {draft.id}",
    )


async def create_variant_step(
    container_id: str,
    draft: SlideDraft,
    access_token: str,
    *,
    connect: ChannelFactory | None = None,
) -> Variant:
    logger.info(f"Creating variants for slide: {draft.title}")
    spec = create_variant_session(container_id, draft, access_token)
    outcome = await run_session(spec, connect)
    variant = outcome.accumulator.variant
    if variant is None:
        raise EmptySessionError(f"No variants created for slide {draft.id}")
    logger.info(f"Got variant: {variant.id}")
    return variant


__all__ = ["VariantLatch", "create_variant_step"]
