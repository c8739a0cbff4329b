"""Import/export API: preview and commit import batches, export a store."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_export_use_case,
    get_import_preview_service,
    get_import_service,
)
from app.application.use_cases.import_export import (
    ExportMessagesUseCase,
    ImportMessagesService,
)
from app.core.limiter import limit_imports
from app.domain.enums import IncludeVersions
from app.schemas.import_export import (
    ExportResponse,
    ImportCommitResponse,
    ImportPreviewResponse,
    ImportRequest,
)

router = APIRouter()


@router.post("/import/preview", response_model=ImportPreviewResponse)
async def preview_import(
    store_id: int,
    body: ImportRequest,
    service: Annotated[ImportMessagesService, Depends(get_import_preview_service)],
):
    """Classify a batch (create / update / skip / conflict) without writing anything."""
    result = await service.preview(store_id, body.to_items(), body.overwrite)
    return ImportPreviewResponse.model_validate(result)


@router.post("/import", response_model=ImportCommitResponse)
@limit_imports
async def commit_import(
    request: Request,
    store_id: int,
    body: ImportRequest,
    service: Annotated[ImportMessagesService, Depends(get_import_service)],
):
    """Apply a batch key by key; failures are reported per item."""
    result = await service.commit(
        store_id, body.to_items(), body.overwrite, body.imported_by
    )
    return ImportCommitResponse.model_validate(result)


@router.get("/export", response_model=ExportResponse)
async def export_messages(
    store_id: int,
    use_case: Annotated[ExportMessagesUseCase, Depends(get_export_use_case)],
    message_keys: list[str] | None = Query(None, alias="messageKeys"),
    include_versions: str = Query(IncludeVersions.ALL.value, alias="includeVersions"),
):
    """Export keys of a store with all versions or only the published one."""
    document = await use_case.execute(store_id, message_keys, include_versions)
    return ExportResponse.model_validate(document)
