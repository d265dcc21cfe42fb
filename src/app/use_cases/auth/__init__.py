"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .load_current_user_use_case import LoadCurrentUserUseCase
from .send_verification_notification_use_case import SendVerificationNotificationUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    ResetPasswordCommand,
    UserInfo,
    AuthenticatedResponse,
    VerifyEmailResponse,
    MessageResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "LoadCurrentUserUseCase",
    "SendVerificationNotificationUseCase",
    "VerifyEmailUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "ResetPasswordCommand",
    # DTOs - Responses
    "UserInfo",
    "AuthenticatedResponse",
    "VerifyEmailResponse",
    "MessageResponse",
]
