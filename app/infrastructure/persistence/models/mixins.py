"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, CreatedMixin, UpdatedMixin.
Actor columns hold free-form actor ids (no FK; users live elsewhere).
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.core.constants import ACTOR_MAX_LENGTH
from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CreatedMixin:
    """Mixin for date_created (server default, timezone-aware) and created_by."""

    @declared_attr
    def date_created(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def created_by(cls) -> Mapped[str | None]:
        return mapped_column(String(ACTOR_MAX_LENGTH), nullable=True)


class UpdatedMixin(CreatedMixin):
    """Mixin adding date_updated (bumped on every UPDATE) and updated_by."""

    @declared_attr
    def date_updated(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )

    @declared_attr
    def updated_by(cls) -> Mapped[str | None]:
        return mapped_column(String(ACTOR_MAX_LENGTH), nullable=True)
