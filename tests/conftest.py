"""Pytest configuration and fixtures for the message store.

Uses app.main:app for HTTP tests, in-memory repositories (tests/fakes.py)
for use case tests, and app.infrastructure.persistence.database for
DB-dependent fixtures. All imports use app.*.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1 import dependencies as deps
from app.application.services.message_key_audit import MessageKeyAuditService
from app.application.use_cases.import_export import (
    ExportMessagesUseCase,
    ImportMessagesService,
)
from app.application.use_cases.message_keys import (
    GetAuditHistoryUseCase,
    MessageKeyService,
    VersionService,
)
from app.application.use_cases.runtime import RuntimeMessageService
from app.core.limiter import limiter
from app.infrastructure.persistence import database
from app.main import app
from tests.fakes import (
    InMemoryAuditRepository,
    InMemoryMessageKeyRepository,
    InMemoryRuntimeCache,
    InMemoryStore,
)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI).

    Rate limit counters and dependency overrides are reset after each test.
    """
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@dataclass
class Services:
    """Use cases wired to one shared in-memory store."""

    store: InMemoryStore
    repo: InMemoryMessageKeyRepository
    audit_repo: InMemoryAuditRepository
    runtime_cache: InMemoryRuntimeCache
    keys: MessageKeyService
    versions: VersionService
    imports: ImportMessagesService
    export: ExportMessagesUseCase
    audit: GetAuditHistoryUseCase
    runtime: RuntimeMessageService


@pytest.fixture
def services() -> Services:
    """Fresh in-memory store with every use case wired against it."""
    store = InMemoryStore()
    repo = InMemoryMessageKeyRepository(store)
    audit_repo = InMemoryAuditRepository(store)
    runtime_cache = InMemoryRuntimeCache()
    audit_service = MessageKeyAuditService(audit_repo)
    keys = MessageKeyService(repo, audit_service)
    versions = VersionService(repo, audit_service, runtime_cache=runtime_cache, max_attempts=5)
    return Services(
        store=store,
        repo=repo,
        audit_repo=audit_repo,
        runtime_cache=runtime_cache,
        keys=keys,
        versions=versions,
        imports=ImportMessagesService(repo, keys, versions),
        export=ExportMessagesUseCase(repo),
        audit=GetAuditHistoryUseCase(repo, audit_repo),
        runtime=RuntimeMessageService(repo, runtime_cache),
    )


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL pointing at a migrated Postgres database. Skips
    (pytest.skip) when it is not configured. Use @pytest.mark.requires_db
    to mark tests that need this fixture; run without DB via:
    pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def api_services(services: Services) -> Services:
    """Route every use case dependency of the API to the in-memory services.

    Overrides are cleared by the client fixture on teardown.
    """
    app.dependency_overrides.update(
        {
            deps.get_message_key_service: lambda: services.keys,
            deps.get_message_key_service_for_write: lambda: services.keys,
            deps.get_version_service: lambda: services.versions,
            deps.get_audit_history_use_case: lambda: services.audit,
            deps.get_import_preview_service: lambda: services.imports,
            deps.get_import_service: lambda: services.imports,
            deps.get_export_use_case: lambda: services.export,
            deps.get_runtime_message_service: lambda: services.runtime,
        }
    )
    return services
