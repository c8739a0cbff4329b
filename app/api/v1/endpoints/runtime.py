"""Runtime API: published content only, served cache-aside."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_runtime_message_service
from app.application.use_cases.runtime import RuntimeMessageService
from app.schemas.runtime import PublishedMessageResponse

router = APIRouter()


@router.get(
    "/message-stores/{store_id}/messages/{message_key}/{language}",
    response_model=PublishedMessageResponse,
)
async def fetch_published_message(
    store_id: int,
    message_key: str,
    language: str,
    service: Annotated[RuntimeMessageService, Depends(get_runtime_message_service)],
):
    """Published content of a key in a language; 404 when nothing is live."""
    message = await service.fetch_message(store_id, message_key, language)
    return PublishedMessageResponse.model_validate(message)


@router.get(
    "/message-stores/{store_id}/languages/{language}",
    response_model=list[PublishedMessageResponse],
)
async def fetch_published_store(
    store_id: int,
    language: str,
    service: Annotated[RuntimeMessageService, Depends(get_runtime_message_service)],
):
    """Every published message of a store in a language."""
    messages = await service.fetch_store(store_id, language)
    return [PublishedMessageResponse.model_validate(m) for m in messages]
