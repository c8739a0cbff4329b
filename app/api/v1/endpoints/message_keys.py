"""Message key API: thin routes delegating to the message key and version use cases."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_audit_history_use_case,
    get_message_key_service,
    get_message_key_service_for_write,
    get_version_service,
)
from app.application.dtos.audit import AuditFilters
from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    CreateVersionCommand,
    UpdateMessageKeyCommand,
)
from app.application.use_cases.message_keys import (
    GetAuditHistoryUseCase,
    MessageKeyService,
    VersionService,
)
from app.core.limiter import limit_writes
from app.schemas.audit import AuditPageResponse
from app.schemas.message_key import (
    MessageKeyCreateRequest,
    MessageKeyResponse,
    MessageKeyUpdateRequest,
    MessageKeyVersionResponse,
    PublishRequest,
    RollbackRequest,
    VersionCreateRequest,
    VersionResponse,
    VersionSummaryResponse,
)

router = APIRouter()


@router.get("", response_model=list[MessageKeyResponse])
async def list_message_keys(
    store_id: int,
    service: Annotated[MessageKeyService, Depends(get_message_key_service)],
):
    """List the keys of a store with their version pointers."""
    keys = await service.list_keys(store_id)
    return [MessageKeyResponse.model_validate(k) for k in keys]


@router.post("", response_model=MessageKeyVersionResponse, status_code=201)
@limit_writes
async def create_message_key(
    request: Request,
    store_id: int,
    body: MessageKeyCreateRequest,
    service: Annotated[MessageKeyService, Depends(get_message_key_service_for_write)],
):
    """Create a key with its first (draft) version. Records 'created'."""
    result = await service.create(
        CreateMessageKeyCommand(
            message_store_id=store_id,
            message_key=body.message_key,
            message_type_id=body.message_type_id,
            category_id=body.category_id,
            languages=[lang.to_block() for lang in body.languages],
            display_name=body.display_name,
            description=body.description,
            version_name=body.version_name,
            created_by=body.created_by,
        )
    )
    return MessageKeyVersionResponse.from_result(result)


@router.get("/{message_key}", response_model=MessageKeyResponse)
async def get_message_key(
    store_id: int,
    message_key: str,
    service: Annotated[MessageKeyService, Depends(get_message_key_service)],
):
    """Get a key by store and name."""
    return MessageKeyResponse.model_validate(await service.get(store_id, message_key))


@router.patch("/{message_key}", response_model=MessageKeyResponse)
@limit_writes
async def update_message_key(
    request: Request,
    store_id: int,
    message_key: str,
    body: MessageKeyUpdateRequest,
    service: Annotated[MessageKeyService, Depends(get_message_key_service_for_write)],
):
    """Update display name and description. Content changes go through new versions."""
    key = await service.update(
        UpdateMessageKeyCommand(
            message_store_id=store_id,
            message_key=message_key,
            display_name=body.display_name,
            description=body.description,
            updated_by=body.updated_by,
        )
    )
    return MessageKeyResponse.model_validate(key)


@router.get("/{message_key}/versions", response_model=list[VersionSummaryResponse])
async def list_versions(
    store_id: int,
    message_key: str,
    service: Annotated[MessageKeyService, Depends(get_message_key_service)],
):
    """List versions of a key, newest first."""
    versions = await service.list_versions(store_id, message_key)
    return [VersionSummaryResponse.model_validate(v) for v in versions]


@router.get("/{message_key}/versions/{version}", response_model=VersionResponse)
async def get_version(
    store_id: int,
    message_key: str,
    version: int,
    service: Annotated[MessageKeyService, Depends(get_message_key_service)],
):
    """Get one version with the content of every language."""
    result = await service.get_version(store_id, message_key, version)
    return VersionResponse.from_result(result)


@router.post(
    "/{message_key}/versions", response_model=MessageKeyVersionResponse, status_code=201
)
@limit_writes
async def create_version(
    request: Request,
    store_id: int,
    message_key: str,
    body: VersionCreateRequest,
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Create a new draft version: base version (default published, else latest) plus overrides."""
    result = await service.create_version(
        CreateVersionCommand(
            message_store_id=store_id,
            message_key=message_key,
            language_updates=[lang.to_block() for lang in body.language_updates],
            base_version=body.base_version,
            version_name=body.version_name,
            created_by=body.created_by,
        )
    )
    return MessageKeyVersionResponse.from_result(result)


@router.post("/{message_key}/publish", response_model=MessageKeyResponse)
@limit_writes
async def publish_version(
    request: Request,
    store_id: int,
    message_key: str,
    body: PublishRequest,
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Publish a version; publishing a lower number than the live one is a rollback."""
    key = await service.publish(
        store_id, message_key, body.version, body.published_by, body.reason
    )
    return MessageKeyResponse.model_validate(key)


@router.post("/{message_key}/rollback", response_model=MessageKeyResponse)
@limit_writes
async def rollback_version(
    request: Request,
    store_id: int,
    message_key: str,
    body: RollbackRequest,
    service: Annotated[VersionService, Depends(get_version_service)],
):
    """Re-publish an earlier version, recorded as 'rollback'."""
    key = await service.rollback(
        store_id, message_key, body.version, body.rolled_back_by, body.reason
    )
    return MessageKeyResponse.model_validate(key)


@router.get("/{message_key}/audit", response_model=AuditPageResponse)
async def get_audit_history(
    store_id: int,
    message_key: str,
    use_case: Annotated[GetAuditHistoryUseCase, Depends(get_audit_history_use_case)],
    action: str | None = Query(None),
    action_by: str | None = Query(None, alias="actionBy"),
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, alias="pageSize", ge=1),
):
    """Audit trail of a key, newest first; filters are combined with AND."""
    result = await use_case.execute(
        store_id,
        message_key,
        AuditFilters(
            action=action,
            action_by=action_by,
            start_date=start_date,
            end_date=end_date,
        ),
        page=page,
        page_size=page_size,
    )
    return AuditPageResponse.model_validate(result)
