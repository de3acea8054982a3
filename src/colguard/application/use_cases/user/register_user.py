"""Register authenticated user in the local directory."""

from colguard.domain.entities import User


class RegisterUserUseCase:
    """Keep the local user directory in sync with authenticated subjects."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user: User) -> User:
        async with self._uow_factory() as uow:
            return await uow.users.upsert(user)
