"""Project-scoped role label of a collaborator."""

from enum import StrEnum


class ProjectRole(StrEnum):
    """Organizational label only - grants nothing."""

    MANAGER = "MANAGER"
    DEVELOPER = "DEVELOPER"
    ANALYST = "ANALYST"
    DESIGNER = "DESIGNER"
    TESTER = "TESTER"
