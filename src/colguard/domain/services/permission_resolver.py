"""Effective per-column access of a subject.

Resolution is pure and total: one entry per recognized column, nothing for
columns that no longer exist, the configured default for anything unset.
Admins resolve to READ_WRITE everywhere without looking at the registry.
"""

from collections.abc import Iterable, Mapping, Sequence

from colguard.domain.entities import PermissionRecord
from colguard.domain.value_objects import AccessLevel, SecurityRole

Registry = Mapping[str, PermissionRecord] | Iterable[PermissionRecord]


def find_record(registry: Registry | None, subject_id: str) -> PermissionRecord | None:
    """Record of subject_id in a mapping or a sequence of records, if any."""
    if registry is None:
        return None
    if isinstance(registry, Mapping):
        return registry.get(subject_id)
    for record in registry:
        if record.collaborator_id == subject_id:
            return record
    return None


def resolve_access(
    subject_role: SecurityRole | str,
    subject_id: str,
    registry: Registry | None,
    recognized_columns: Sequence[str],
    default: AccessLevel = AccessLevel.READ_ONLY,
) -> dict[str, AccessLevel]:
    """Map every recognized column to the subject's effective access level."""
    if SecurityRole(subject_role) is SecurityRole.ADMIN:
        return {name: AccessLevel.READ_WRITE for name in recognized_columns}

    record = find_record(registry, subject_id)
    explicit = record.as_mapping() if record else {}
    return {name: explicit.get(name, default) for name in recognized_columns}
