"""List projects of the calling collaborator."""

from colguard.domain.entities import Project, User


class ListMyProjectsUseCase:
    """Projects where the user is attached as a collaborator."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user: User) -> list[Project]:
        async with self._uow_factory() as uow:
            return await uow.projects.list_by_collaborator(user.id)
