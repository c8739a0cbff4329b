"""Application services: audit recording and import planning."""

from app.application.services.import_classifier import (
    ImportPlan,
    classify_batch,
    classify_item,
    to_content_block,
)
from app.application.services.import_validator import ImportBatchValidator
from app.application.services.message_key_audit import (
    MessageKeyAuditService,
    resolve_actor,
)

__all__ = [
    "ImportBatchValidator",
    "ImportPlan",
    "MessageKeyAuditService",
    "classify_batch",
    "classify_item",
    "resolve_actor",
    "to_content_block",
]
