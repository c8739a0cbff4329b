"""Runtime (published content) API schemas."""

from typing import Any

from app.schemas.common import ApiModel


class PublishedMessageResponse(ApiModel):
    """Published content of one key in one language."""

    message_store_id: int
    message_key: str
    language: str
    version: int
    content: str
    type_settings: dict[str, Any]
