from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserExistsResponse


class CheckUserExistsUseCase:
    """Reports whether an account exists for an email (reveals registration)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[UserExistsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            return Return.ok(UserExistsResponse(exists=user is not None))
