"""Runtime read path use cases."""

from app.application.use_cases.runtime.published_messages import RuntimeMessageService

__all__ = ["RuntimeMessageService"]
