"""
Pydantic models for slide drafts returned by Alai.

Unknown fields are kept so a draft can be sent back to ``update-slide-entity``
exactly as it was received.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SlideOutline(BaseModel):
    """Structural proposal for one slide."""

    model_config = ConfigDict(extra="allow")

    slide_id: str = Field(..., description="Identifier of the slide entity")
    slide_title: str | None = Field(None, description="Slide title")
    slide_context: str | None = Field(None, description="Slide specific context")
    slide_instructions: str | None = Field(
        None, description="Additional instructions for rendering"
    )
    images_on_slide: list[Any] | None = Field(
        None, description="Images attached to the slide"
    )


class SlideDraft(BaseModel):
    """A slide draft materialized from an outline."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Draft identifier")
    slide_outline: SlideOutline

    @property
    def slide_id(self) -> str:
        return self.slide_outline.slide_id

    @property
    def title(self) -> str:
        return self.slide_outline.slide_title or "Untitled Slide"

    def to_payload(self) -> dict[str, Any]:
        """Return the draft record as received, for persisting it back."""
        return self.model_dump(mode="json", exclude_unset=True)
