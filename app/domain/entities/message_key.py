"""MessageKey aggregate entity.

The aggregate owns the two version pointers: latest_version (highest
version ever created) and published_version (the single live version, if
any). A version's published state is derived from the pointer, so a
publish only ever changes one field.
"""

from dataclasses import dataclass, replace

from app.domain.enums import MessageKeyAuditAction, VersionState
from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class PublishDecision:
    """Outcome of planning a publish on a key.

    action is None when the target is already published (idempotent no-op).
    """

    previous_version: int | None
    target_version: int
    action: MessageKeyAuditAction | None

    @property
    def is_noop(self) -> bool:
        return self.action is None


@dataclass(frozen=True)
class MessageKeyEntity:
    """Immutable snapshot of the version pointers of one message key."""

    message_store_id: int
    message_key: str
    latest_version: int
    published_version: int | None = None

    def __post_init__(self) -> None:
        if self.latest_version < 1:
            raise ValidationException(
                "A message key always has at least version 1", field="latest_version"
            )
        if self.published_version is not None and not (
            1 <= self.published_version <= self.latest_version
        ):
            raise ValidationException(
                f"Published version {self.published_version} does not exist",
                field="published_version",
            )

    def state_of(self, version: int) -> VersionState:
        """Return the derived publication state of a version number."""
        if version == self.published_version:
            return VersionState.PUBLISHED
        return VersionState.DRAFT

    def editing_base(self) -> int:
        """Version new edits start from: the published one, else the latest."""
        return self.published_version or self.latest_version

    def next_version(self, max_versions: int | None = None) -> int:
        """Return the number the next version gets.

        Raises:
            ValidationException: If max_versions is set and already reached.
        """
        if max_versions is not None and self.latest_version >= max_versions:
            raise ValidationException(
                f"Message key '{self.message_key}' has reached the maximum of "
                f"{max_versions} versions",
                field="version",
            )
        return self.latest_version + 1

    def plan_publish(self, version: int, *, as_rollback: bool = False) -> PublishDecision:
        """Decide what publishing `version` means for this key.

        A publish of a number lower than the currently live one is labelled
        a rollback. as_rollback forces the label for an explicit rollback
        request when the target differs from the live version.

        Raises:
            ValidationException: If version is not a positive number.
        """
        if version < 1:
            raise ValidationException("Version must be positive", field="version")
        previous = self.published_version
        if previous == version:
            return PublishDecision(previous, version, None)
        if as_rollback or (previous is not None and version < previous):
            action = MessageKeyAuditAction.ROLLBACK
        else:
            action = MessageKeyAuditAction.PUBLISHED
        return PublishDecision(previous, version, action)

    def with_new_version(self, version: int) -> "MessageKeyEntity":
        """Return a copy whose latest_version is advanced to `version`."""
        if version != self.latest_version + 1:
            raise ValidationException(
                f"Version numbers are contiguous; expected {self.latest_version + 1}, got {version}",
                field="version",
            )
        return replace(self, latest_version=version)

    def published(self, version: int) -> "MessageKeyEntity":
        """Return a copy whose published pointer is `version`."""
        return replace(self, published_version=version)
