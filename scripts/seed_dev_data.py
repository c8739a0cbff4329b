"""Seed dev data: import a batch of messages into a store and publish them.

The seed file is a JSON list of import items, the same shape as the
import API body items:

    [{"messageKey": "WELCOME", "language": "en-GB", "content": "Welcome",
      "messageTypeId": 1, "categoryId": 1}, ...]

Usage:
    uv run python -m scripts.seed_dev_data STORE_ID path/to/seed.json [--publish]

Requires: DATABASE_URL (Postgres) and a migrated schema (alembic upgrade head).
"""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from dotenv import load_dotenv

from app.application.dtos.import_export import ImportItem
from app.application.services.message_key_audit import MessageKeyAuditService
from app.application.use_cases.import_export import ImportMessagesService
from app.application.use_cases.message_keys import MessageKeyService, VersionService
from app.core.config import get_settings
from app.domain.enums import ImportItemStatus
from app.infrastructure.persistence.database import dispose_engine, get_db_transactional
from app.infrastructure.persistence.repositories import (
    MessageKeyAuditRepository,
    MessageKeyRepository,
)
from app.schemas.import_export import ImportItemRequest

SEED_ACTOR = "seed"


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


def _load_items(path: Path) -> list[ImportItem]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise SystemExit(f"{path}: expected a JSON list of import items")
    return [ImportItemRequest.model_validate(item).to_item() for item in raw]


async def seed(store_id: int, items: list[ImportItem], publish: bool) -> None:
    async for session in get_db_transactional():
        repo = MessageKeyRepository(session)
        audit = MessageKeyAuditService(MessageKeyAuditRepository(session))
        versions = VersionService(repo, audit)
        importer = ImportMessagesService(repo, MessageKeyService(repo, audit), versions)

        result = await importer.commit(store_id, items, overwrite=True, imported_by=SEED_ACTOR)
        print(
            f"created={result.created} updated={result.updated} "
            f"skipped={result.skipped} failed={result.failed}"
        )
        for item in result.items:
            if item.status == ImportItemStatus.FAILED.value:
                print(f"  failed {item.message_key}/{item.language}: {item.error}")

        if publish:
            written = {
                item.message_key: item.version
                for item in result.items
                if item.version is not None
            }
            for message_key, version in sorted(written.items()):
                await versions.publish(store_id, message_key, version, SEED_ACTOR, "seed")
                print(f"  published {message_key} v{version}")


async def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("store_id", type=int)
    parser.add_argument("seed_file", type=Path)
    parser.add_argument("--publish", action="store_true", help="publish written versions")
    args = parser.parse_args()

    _load_env()
    try:
        await seed(args.store_id, _load_items(args.seed_file), args.publish)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
