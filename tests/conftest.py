"""Pytest fixtures for ColGuard tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from colguard.domain.entities import (
    Collaborator,
    Column,
    ColumnPermission,
    PermissionRecord,
    Project,
    Row,
    Sheet,
    User,
)
from colguard.domain.value_objects import AccessLevel, SecurityRole


# --- Fake repositories ---


class FakeCollaboratorRepository:
    """In-memory project membership."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[UUID, str], Collaborator] = {}

    async def get(self, project_id: UUID, user_id: str) -> Collaborator | None:
        return self._by_key.get((project_id, user_id))

    async def list_by_project(self, project_id: UUID) -> list[Collaborator]:
        return [c for (pid, _), c in self._by_key.items() if pid == project_id]

    async def add(self, collaborator: Collaborator) -> Collaborator:
        self._by_key[(collaborator.project_id, collaborator.user_id)] = collaborator
        return collaborator

    async def remove(self, project_id: UUID, user_id: str) -> bool:
        return self._by_key.pop((project_id, user_id), None) is not None


class FakeProjectRepository:
    """In-memory project repository."""

    def __init__(self, collaborators: FakeCollaboratorRepository) -> None:
        self._by_id: dict[UUID, Project] = {}
        self._collaborators = collaborators
        self.touched: list[UUID] = []

    async def get_by_id(self, project_id: UUID, include_deleted: bool = False) -> Project | None:
        project = self._by_id.get(project_id)
        if not project or (not include_deleted and project.deleted_at):
            return None
        return project

    async def list_by_collaborator(self, user_id: str) -> list[Project]:
        ids = {pid for (pid, uid) in self._collaborators._by_key if uid == user_id}
        items = [p for p in self._by_id.values() if p.id in ids and not p.deleted_at]
        return sorted(items, key=lambda p: p.created_at, reverse=True)

    async def create(self, project: Project) -> Project:
        self._by_id[project.id] = project
        return project

    async def touch(self, project_id: UUID) -> None:
        self.touched.append(project_id)


class FakeSheetRepository:
    """In-memory sheet documents."""

    def __init__(self) -> None:
        self._by_project: dict[UUID, Sheet] = {}
        self.locked: list[UUID] = []

    async def get(self, project_id: UUID, for_update: bool = False) -> Sheet | None:
        if for_update:
            self.locked.append(project_id)
        return self._by_project.get(project_id)

    async def replace(self, sheet: Sheet) -> Sheet:
        self._by_project[sheet.project_id] = sheet
        return sheet


class FakePermissionRepository:
    """In-memory permission records keyed by (project, collaborator)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[UUID, str], PermissionRecord] = {}

    async def get(self, project_id: UUID, collaborator_id: str) -> PermissionRecord | None:
        return self._by_key.get((project_id, collaborator_id))

    async def list_by_project(self, project_id: UUID) -> list[PermissionRecord]:
        return [r for (pid, _), r in self._by_key.items() if pid == project_id]

    async def upsert(self, record: PermissionRecord) -> PermissionRecord:
        self._by_key[(record.project_id, record.collaborator_id)] = record
        return record

    async def delete(self, project_id: UUID, collaborator_id: str) -> bool:
        return self._by_key.pop((project_id, collaborator_id), None) is not None

    async def remove_column(self, project_id: UUID, column_name: str) -> int:
        changed = 0
        for key, record in list(self._by_key.items()):
            if key[0] != project_id:
                continue
            if any(p.column_name == column_name for p in record.permissions):
                self._by_key[key] = record.without_column(column_name)
                changed += 1
        return changed


class FakeUserRepository:
    """In-memory user directory."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def upsert(self, user: User) -> User:
        self._by_id[user.id] = user
        return user


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.collaborators = FakeCollaboratorRepository()
        self.projects = FakeProjectRepository(self.collaborators)
        self.sheets = FakeSheetRepository()
        self.permissions = FakePermissionRepository()
        self.users = FakeUserRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory():
        yield uow

    return _factory


# --- Seeding helpers ---

ADMIN = User(id="admin-1", security_role=SecurityRole.ADMIN, username="admin")
ANA = User(id="ana", username="ana")
BRUNO = User(id="bruno", username="bruno")


def seed_project(
    uow: FakeUnitOfWork,
    columns: list[str],
    rows: list[list[object]],
    collaborators: list[User] | None = None,
) -> UUID:
    """Project with a sheet, its members and their users; returns project id."""
    now = datetime(2025, 3, 1, tzinfo=UTC)
    project_id = uuid4()
    uow.projects._by_id[project_id] = Project(
        id=project_id,
        name="Folha de pagamento",
        created_by=ADMIN.id,
        created_at=now,
        updated_at=now,
    )
    uow.sheets._by_project[project_id] = Sheet(
        project_id=project_id,
        columns=[Column(name=n) for n in columns],
        rows=[Row(dict(zip(columns, r, strict=True)), ADMIN.id, now) for r in rows],
        updated_at=now,
    )
    uow.users._by_id[ADMIN.id] = ADMIN
    for i, user in enumerate(collaborators or []):
        uow.users._by_id[user.id] = user
        uow.collaborators._by_key[(project_id, user.id)] = Collaborator(
            project_id=project_id,
            user_id=user.id,
            joined_at=now + timedelta(minutes=i),
        )
    return project_id


def grant(uow: FakeUnitOfWork, project_id: UUID, user: User, **levels: str) -> PermissionRecord:
    """Store an explicit permission record, e.g. grant(uow, pid, ANA, Salario="HIDDEN")."""
    record = PermissionRecord(
        project_id=project_id,
        collaborator_id=user.id,
        permissions=[ColumnPermission(n, AccessLevel(v)) for n, v in levels.items()],
        updated_at=datetime.now(UTC),
        updated_by=ADMIN.id,
    )
    uow.permissions._by_key[(project_id, user.id)] = record
    return record


def stored_values(uow: FakeUnitOfWork, project_id: UUID) -> list[dict[str, object]]:
    return [r.values for r in uow.sheets._by_project[project_id].rows]


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_factory(fake_uow)


@pytest.fixture
def access_resolver(uow_factory):
    """Resolver over the fake registry with the READ_ONLY default."""
    from colguard.infrastructure.permission.access_resolver import ColumnAccessResolver

    return ColumnAccessResolver(uow_factory)
