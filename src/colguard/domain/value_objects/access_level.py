"""Access level of a collaborator on a single column."""

from enum import StrEnum

from colguard.domain.exceptions import ValidationError


class AccessLevel(StrEnum):
    """What a collaborator may do with one column of a project sheet."""

    HIDDEN = "HIDDEN"
    READ_ONLY = "READ_ONLY"
    READ_WRITE = "READ_WRITE"

    @classmethod
    def parse(cls, token: object) -> "AccessLevel":
        """Parse wire token, raising ValidationError on anything unknown."""
        if isinstance(token, AccessLevel):
            return token
        try:
            return cls(token)
        except ValueError:
            raise ValidationError(f"Invalid access level '{token}'") from None

    @property
    def can_read(self) -> bool:
        return self is not AccessLevel.HIDDEN

    @property
    def can_write(self) -> bool:
        return self is AccessLevel.READ_WRITE
