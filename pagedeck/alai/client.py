"""
Request/response client for the Alai presentation backend.
"""

from __future__ import annotations

import uuid
from typing import Any

import httpx
from loguru import logger

from pagedeck.configs.config import config
from pagedeck.core.errors import AlaiAPIError
from pagedeck.core.models import Container
from pagedeck.schemas.slides import SlideDraft


class AlaiClient:
    """Thin async wrapper over Alai's REST endpoints.

    Every call carries the bearer token and is bounded by ``timeout``. Use it
    as an async context manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = access_token if access_token is not None else config.access_token
        self._client = httpx.AsyncClient(
            base_url=base_url or config.alai_api_base,
            timeout=timeout if timeout is not None else config.http_timeout,
            headers={"Authorization": f"Bearer {self._token}"},
            transport=transport,
        )

    @property
    def access_token(self) -> str:
        return self._token

    async def __aenter__(self) -> AlaiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Any:
        try:
            resp = await self._client.request(method, path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Error while calling {method} {path}: {e}")
            raise AlaiAPIError(f"{method} {path} failed: {e}") from e

        if resp.is_error:
            detail = resp.text[:500]
            logger.error(f"API error from {path} ({resp.status_code}): {detail}")
            raise AlaiAPIError(
                f"API Error ({resp.status_code}) from {path}: {detail}",
                status_code=resp.status_code,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise AlaiAPIError(f"Invalid JSON from {path}: {e}") from e

    async def create_presentation(
        self, title: str | None = None, theme_id: str | None = None
    ) -> Container:
        presentation_id = str(uuid.uuid4())
        payload = {
            "presentation_id": presentation_id,
            "presentation_title": title or config.presentation_title,
            "create_first_slide": True,
            "theme_id": theme_id or config.theme_id,
            "default_color_set_id": config.color_set_id,
        }
        logger.info(f"Creating new presentation {presentation_id}")
        result = await self._request("POST", "/create-new-presentation", payload)
        if not isinstance(result, dict) or not result.get("id"):
            raise AlaiAPIError(f"Unexpected create-new-presentation reply: {result!r}")

        slides = result.get("slides") or []
        initial_slide_id = slides[0].get("id") if slides else None
        return Container(id=str(result["id"]), initial_slide_id=initial_slide_id)

    async def get_presentation_questions(self, presentation_id: str) -> Any:
        return await self._request(
            "GET", f"/get-presentation-questions/{presentation_id}"
        )

    async def update_slide(self, draft: SlideDraft) -> dict[str, Any]:
        result = await self._request(
            "POST", "/update-slide-entity", draft.to_payload()
        )
        return result if isinstance(result, dict) else {}

    async def set_active_variant(self, slide_id: str, variant_id: str) -> None:
        await self._request(
            "POST",
            "/set-active-variant",
            {"slide_id": slide_id, "variant_id": variant_id},
        )

    async def share_presentation(self, presentation_id: str) -> str:
        """Create (or refresh) a share token and return it."""
        token = await self._request(
            "POST", "/upsert-presentation-share", {"presentation_id": presentation_id}
        )
        if not token or not isinstance(token, str):
            raise AlaiAPIError(f"Unexpected share reply: {token!r}")
        return token
