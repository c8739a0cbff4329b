"""Message key ORM models: key aggregate, immutable versions, language content."""

from typing import Any

from sqlalchemy import (
    CheckConstraint,
    Connection,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    event,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column, relationship

from app.core.constants import (
    DESCRIPTION_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    LANGUAGE_CODE_MAX_LENGTH,
    MESSAGE_KEY_MAX_LENGTH,
    VERSION_NAME_MAX_LENGTH,
)
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedMixin,
    CuidMixin,
    UpdatedMixin,
)


class MessageKey(UpdatedMixin, Base):
    """Message key aggregate root: owns latest_version and the published pointer.

    latest_version is 0 only between inserting the row and its version 1,
    inside the same transaction.
    """

    __tablename__ = "message_key"
    __table_args__ = (
        UniqueConstraint("message_store_id", "message_key", name="uq_message_key_store_key"),
        CheckConstraint("latest_version >= 0", name="ck_message_key_latest_version"),
        CheckConstraint(
            "published_version IS NULL OR (published_version >= 1 AND published_version <= latest_version)",
            name="ck_message_key_published_version",
        ),
        Index(
            "ix_message_key_store_published",
            "message_store_id",
            postgresql_where="published_version IS NOT NULL",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_store_id: Mapped[int] = mapped_column(Integer, nullable=False)
    message_key: Mapped[str] = mapped_column(String(MESSAGE_KEY_MAX_LENGTH), nullable=False)
    message_type_id: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, nullable=False)
    latest_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_version: Mapped[int | None] = mapped_column(Integer, nullable=True)
    display_name: Mapped[str | None] = mapped_column(
        String(DISPLAY_NAME_MAX_LENGTH), nullable=True
    )
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )

    versions: Mapped[list["MessageKeyVersion"]] = relationship(
        back_populates="key", order_by="MessageKeyVersion.version.desc()"
    )


class MessageKeyVersion(CuidMixin, CreatedMixin, Base):
    """Immutable numbered snapshot of a key's full language set."""

    __tablename__ = "message_key_version"
    __table_args__ = (
        UniqueConstraint("message_key_id", "version", name="uq_message_key_version_number"),
        CheckConstraint("version >= 1", name="ck_message_key_version_positive"),
    )

    message_key_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("message_key.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    version_name: Mapped[str | None] = mapped_column(
        String(VERSION_NAME_MAX_LENGTH), nullable=True
    )

    key: Mapped[MessageKey] = relationship(back_populates="versions")
    contents: Mapped[list["MessageLanguageContent"]] = relationship(
        back_populates="version_row",
        order_by="MessageLanguageContent.id",
        cascade="all, delete-orphan",
    )


class MessageLanguageContent(CreatedMixin, Base):
    """Content block of one language inside a version."""

    __tablename__ = "message_language_content"
    __table_args__ = (
        UniqueConstraint(
            "message_key_version_id", "language", name="uq_message_language_content_lang"
        ),
        CheckConstraint("length(btrim(content)) > 0", name="ck_message_language_content_not_blank"),
        Index("ix_message_language_content_language", "language"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_key_version_id: Mapped[str] = mapped_column(
        String, ForeignKey("message_key_version.id", ondelete="CASCADE"), nullable=False
    )
    language: Mapped[str] = mapped_column(String(LANGUAGE_CODE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type_settings: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    version_row: Mapped[MessageKeyVersion] = relationship(back_populates="contents")


@event.listens_for(MessageKeyVersion, "before_update")
def _prevent_version_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: MessageKeyVersion
) -> None:
    """Versions are immutable once written."""
    raise ValueError("Message key versions are immutable and cannot be updated.")


@event.listens_for(MessageLanguageContent, "before_update")
def _prevent_content_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: MessageLanguageContent
) -> None:
    """Content of a version is immutable; edits create a new version."""
    raise ValueError("Message content is immutable; create a new version instead.")
