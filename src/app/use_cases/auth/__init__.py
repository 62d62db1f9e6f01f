"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .authenticate_session_use_case import AuthenticateSessionUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .check_user_exists_use_case import CheckUserExistsUseCase
from .direct_reset_password_use_case import DirectResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    PublicUser,
    UserProfile,
    AuthResponse,
    MessageResponse,
    CurrentUserResponse,
    UserExistsResponse,
    DirectResetPasswordResponse,
    AuthenticatedSession,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "AuthenticateSessionUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "CheckUserExistsUseCase",
    "DirectResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "MessageResponse",
    "CurrentUserResponse",
    "UserExistsResponse",
    "DirectResetPasswordResponse",
    "AuthenticatedSession",
    # DTOs - Nested Models
    "PublicUser",
    "UserProfile",
]
