"""
Use Cases

Organized by domain folder:
- auth/: Registration, login, email verification and password reset
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    LoadCurrentUserUseCase,
    SendVerificationNotificationUseCase,
    VerifyEmailUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
)

__all__ = [
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "LoadCurrentUserUseCase",
    "SendVerificationNotificationUseCase",
    "VerifyEmailUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
]
