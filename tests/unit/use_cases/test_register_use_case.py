from unittest.mock import AsyncMock
from uuid import uuid4

import bcrypt
import pytest
from sqlalchemy.exc import IntegrityError

from src.api.utils.jwt import verify_session_token
from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_successful_register(mock_uow):
    """Fresh email creates the user and returns a token for it"""
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="Ann", email="  Ann@Example.com ", password="secret1")
    )

    assert result.is_ok()
    response = result.value
    assert response.success is True
    assert response.user.name == "Ann"
    assert response.user.email == "ann@example.com"
    assert not hasattr(response.user, "password_hash")

    created_user = mock_uow.users.create.call_args.args[0]
    assert created_user.email == "ann@example.com"
    assert created_user.password_hash != "secret1"
    assert bcrypt.checkpw(b"secret1", created_user.password_hash.encode())

    claims = verify_session_token(response.token)
    assert claims["id"] == str(created_user.id)
    assert response.user.id == str(created_user.id)

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_register_existing_email(mock_uow):
    """Already registered email fails with EMAIL_ALREADY_EXISTS"""
    mock_uow.users.get_by_email.return_value = User(
        id=uuid4(), name="Ann", email="ann@example.com", password_hash="x"
    )
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="Other", email="ann@example.com", password="secret1")
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_lost_race_on_unique_email(mock_uow):
    """Unique constraint violation is reported as EMAIL_ALREADY_EXISTS"""
    mock_uow.users.create = AsyncMock(
        side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
    )
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="Ann", email="ann@example.com", password="secret1")
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_short_password(mock_uow):
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="Ann", email="ann@example.com", password="123")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.users.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_register_blank_name_rejected(mock_uow):
    """A name of only whitespace is not stored as an empty string"""
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="   ", email="ann@example.com", password="secret1")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.users.create.assert_not_called()
