import logging

from sqlalchemy.exc import IntegrityError

from src.libs.result import Error, Result, Return
from src.app.services.password import hash_password, validate_password
from src.app.services.unit_of_work import UnitOfWork
from src.api.utils.jwt import generate_session_token
from src.domain.entities import User
from .dtos import AuthResponse, PublicUser, RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (session token + public user fields)

    Business Logic:
    1. Normalize email and check it is not registered yet
    2. Hash password with bcrypt cost factor 12
    3. Create User
    4. Commit transaction
    5. Issue a session token for the new user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated name, email, password

        Returns:
            Result[AuthResponse] with token and public user fields
            or Error(EMAIL_ALREADY_EXISTS) if email exists
        """
        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        name = command.name.strip()
        if not name:
            return Return.err(Error("VALIDATION_ERROR", "Please add a name"))

        email = User.normalize_email(command.email)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "User already exists"))

            user = User(
                name=name,
                email=email,
                password_hash=hash_password(command.password),
            )

            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration of the same email
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "User already exists"))

            logger.info(f"Registered user {user.id}")

            return Return.ok(
                AuthResponse(
                    token=generate_session_token(user.id),
                    user=PublicUser.from_user(user),
                )
            )
