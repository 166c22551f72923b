"""
Authentication Use Cases

All authentication-related business logic.
"""

from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    AuthResponse,
    IssuedSession,
    MessageResponse,
    OrganizationInfo,
    SignupCommand,
    UserInfo,
)
from .get_me_use_case import GetMeUseCase
from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .resolve_caller_use_case import ResolveCallerUseCase
from .signup_use_case import SignupUseCase

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "GetMeUseCase",
    "ResolveCallerUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "AuthResponse",
    "IssuedSession",
    "MessageResponse",
    # DTOs - Nested Models
    "UserInfo",
    "OrganizationInfo",
]
