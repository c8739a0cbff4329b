"""Import/export use cases."""

from app.application.use_cases.import_export.export_messages import ExportMessagesUseCase
from app.application.use_cases.import_export.import_messages import ImportMessagesService

__all__ = [
    "ExportMessagesUseCase",
    "ImportMessagesService",
]
