"""Domain value objects."""

from colguard.domain.value_objects.access_level import AccessLevel
from colguard.domain.value_objects.data_kind import DataKind
from colguard.domain.value_objects.project_role import ProjectRole
from colguard.domain.value_objects.security_role import SecurityRole

__all__ = [
    "AccessLevel",
    "DataKind",
    "ProjectRole",
    "SecurityRole",
]
