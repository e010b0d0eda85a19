"""
Plain data records passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

DraftStatus = Literal["completed", "failed"]


@dataclass(frozen=True)
class ScrapedPage:
    """Markdown and metadata scraped from one web page."""

    url: str
    markdown: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return str(self.metadata.get("title") or "Website Content")

    @property
    def source_url(self) -> str:
        return str(
            self.metadata.get("url") or self.metadata.get("sourceURL") or self.url
        )


@dataclass(frozen=True)
class Container:
    """A presentation created on Alai.

    ``initial_slide_id`` is the placeholder slide Alai creates with every new
    presentation; it is only kept so it can be dropped from the final deck.
    """

    id: str
    initial_slide_id: str | None


@dataclass(frozen=True)
class Variant:
    """A rendered layout Alai produced for one slide."""

    id: str
    slide_id: str


@dataclass
class DraftOutcome:
    """Result of processing one draft (persist, variant, activate)."""

    index: int
    slide_id: str
    title: str
    status: DraftStatus = "completed"
    variant_id: str | None = None
    failed_step: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"


@dataclass
class PipelineReport:
    """Final result of a run: the share link and every per-slide outcome."""

    presentation_id: str
    share_url: str
    outcomes: list[DraftOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[DraftOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[DraftOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "presentation_id": self.presentation_id,
            "share_url": self.share_url,
            "slides": [asdict(o) for o in self.outcomes],
        }
