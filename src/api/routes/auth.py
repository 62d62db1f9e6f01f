from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field, StringConstraints

from config import ApplicationConfig
from src.libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.cookies import clear_session_cookie, set_session_cookie
from src.app.services.mailer import Mailer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    CheckUserExistsUseCase,
    DirectResetPasswordUseCase,
    AuthResponse,
    MessageResponse,
    CurrentUserResponse,
    UserExistsResponse,
    DirectResetPasswordResponse,
    UserProfile,
)
from src.depends import get_current_user, get_mailer, get_session_claims, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
    ] = Field(..., description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="User password (min 6 chars)")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register User

    Creates an account and signs it in: the session token is returned in
    the body and set as an http-only cookie.

    Raises:
        - 400 Bad Request: Email already registered, or invalid input
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        name=request.name, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_ALREADY_EXISTS", "VALIDATION_ERROR"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, result.value.token)
    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Raises:
        - 400 Bad Request: Missing email or password
        - 401 Unauthorized: Invalid credentials (same for unknown email and wrong password)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_session_cookie(response, result.value.token)
    return result.value


@router.get("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    response: Response,
    claims: Optional[dict] = Depends(get_session_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Clears the session cookie and revokes the presented token, if any.
    Tokens held by other clients remain valid until they expire.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(claims)

    if result.is_err():
        raise ServerError(result.error)

    clear_session_cookie(response)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=CurrentUserResponse)
async def get_me(current_user: UserProfile = Depends(get_current_user)):
    """
    Current User

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or revoked session
    """
    return CurrentUserResponse(data=current_user)


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post("/forgotpassword", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Forgot Password

    Stores a hashed reset secret (10 minute expiry) and emails the reset link.

    Raises:
        - 404 Not Found: No user with that email
        - 500 Internal Server Error: Email could not be sent
    """
    use_case = ForgotPasswordUseCase(uow, mailer)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    password: str = Field(..., min_length=6, description="New password (min 6 chars)")


@router.put(
    "/resetpassword/{token}", status_code=status.HTTP_200_OK, response_model=AuthResponse
)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reset Password

    Consumes the reset secret from the emailed link and signs the user in.

    Raises:
        - 400 Bad Request: Invalid, used or expired token; invalid password
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow)
    result = await use_case.execute(token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "VALIDATION_ERROR"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, result.value.token)
    return result.value


class CheckUserRequest(BaseModel):
    """Check user HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post("/check-user", status_code=status.HTTP_200_OK, response_model=UserExistsResponse)
async def check_user_exists(
    request: CheckUserRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Check User Exists

    Reveals whether an email is registered. Disabled with
    ENABLE_USER_EXISTS_CHECK=False.

    Raises:
        - 404 Not Found: Endpoint disabled
    """
    if not ApplicationConfig.ENABLE_USER_EXISTS_CHECK:
        raise ClientError(
            Error("NOT_FOUND", "Not found"), status_code=status.HTTP_404_NOT_FOUND
        )

    use_case = CheckUserExistsUseCase(uow)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class DirectResetPasswordRequest(BaseModel):
    """Direct reset password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    token: str = Field(..., min_length=1, description="Reset secret sent to the email")
    password: str = Field(..., min_length=6, description="New password (min 6 chars)")


@router.post(
    "/direct-reset-password",
    status_code=status.HTTP_200_OK,
    response_model=DirectResetPasswordResponse,
)
async def direct_reset_password(
    request: DirectResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Direct Reset Password

    Resets the password of the account with this email. The reset secret
    emailed by /forgotpassword is still required.

    Raises:
        - 404 Not Found: No user with that email
        - 400 Bad Request: Invalid or expired token; invalid password
    """
    use_case = DirectResetPasswordUseCase(uow)
    result = await use_case.execute(request.email, request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code in ("INVALID_TOKEN", "VALIDATION_ERROR"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
