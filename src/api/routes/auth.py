import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import RedirectResponse
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from config import ApplicationConfig
from src.api.error import ClientError, FieldValidationError, ServerError
from src.api.utils.redirects import is_allowed_redirect, with_query
from src.api.utils.signed_url import has_valid_signature
from src.app.services.authenticator import IAuthenticator
from src.app.services.notification_sender import INotificationSender
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_manager import ISessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    SendVerificationNotificationUseCase,
    VerifyEmailUseCase,
    ForgotPasswordUseCase,
    ResetPasswordCommand,
    ResetPasswordUseCase,
    UserInfo,
)
from src.depends import (
    get_authenticator,
    get_current_user,
    get_notification_sender,
    get_password_hasher,
    get_session_manager,
    get_session_token,
    get_unit_of_work,
)
from src.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = logging.getLogger(__name__)


class StatusMessage(BaseModel):
    message: str
    status_code: int


class AuthenticatedMessage(StatusMessage):
    user: UserInfo


def _set_session_cookie(response: Response, session_token: str):
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=session_token,
        max_age=ApplicationConfig.SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def _check_confirmation(value: str, info: ValidationInfo) -> str:
    if "password" in info.data and value != info.data["password"]:
        raise ValueError("The password field confirmation does not match.")
    return value


def _check_email(value: str) -> str:
    # Format check only; the address is stored and compared exactly as submitted
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: str = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    password_confirmation: str = Field(..., description="Must equal password")

    @field_validator("password_confirmation")
    @classmethod
    def confirmed(cls, value: str, info: ValidationInfo) -> str:
        return _check_confirmation(value, info)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthenticatedMessage
)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    session_manager: ISessionManager = Depends(get_session_manager),
):
    """
    User Registration

    Creates the account and logs the new user in.

    Raises:
        - 422 Unprocessable Entity: Invalid input or email already taken
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        name=request.name, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow, hasher, session_manager)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "UNIQUE_CONSTRAINT_VIOLATION":
            raise FieldValidationError({"email": [error.message]})
        raise ServerError(error)

    _set_session_cookie(response, result.value.session_token)
    return AuthenticatedMessage(
        message="User signup successfully",
        status_code=status.HTTP_201_CREATED,
        user=result.value.user,
    )


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    username: str = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")

    @field_validator("username")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthenticatedMessage)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    authenticator: IAuthenticator = Depends(get_authenticator),
    session_manager: ISessionManager = Depends(get_session_manager),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials (unknown email or wrong password)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, authenticator, session_manager)
    result = await use_case.execute(request.username, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    _set_session_cookie(response, result.value.session_token)
    return AuthenticatedMessage(
        message="User login successfully",
        status_code=status.HTTP_200_OK,
        user=result.value.user,
    )


@router.delete("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: ISessionManager = Depends(get_session_manager),
):
    """User Logout - destroys the session and clears the cookie"""
    result = await LogoutUseCase(uow, session_manager).execute(session_token)

    if result.is_err():
        raise ServerError(result.error)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(ApplicationConfig.SESSION_COOKIE_NAME)
    return response


@router.get("/user", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def current_user(user: UserInfo = Depends(get_current_user)):
    """
    Current User

    Raises:
        - 401 Unauthorized: Missing or expired session
    """
    return user


class VerificationNotificationRequest(BaseModel):
    """Redirect targets embedded in the verification link"""

    success_redirect: str = Field(..., description="Redirect target after verification")
    failed_redirect: str = Field(..., description="Redirect target on failure")

    @field_validator("success_redirect", "failed_redirect")
    @classmethod
    def allowed_origin(cls, value: str) -> str:
        if not is_allowed_redirect(value):
            raise ValueError("Redirect target is not allowed")
        return value


@router.post(
    "/email/verification-notification",
    status_code=status.HTTP_200_OK,
    response_model=StatusMessage,
)
async def send_email_verification_notification(
    request: VerificationNotificationRequest,
    user: UserInfo = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationSender = Depends(get_notification_sender),
):
    """
    Send Email Verification Link

    Raises:
        - 401 Unauthorized: Not logged in
        - 422 Unprocessable Entity: Redirect target not allowed
        - 502 Bad Gateway: Mail could not be delivered
    """
    use_case = SendVerificationNotificationUseCase(uow, notifier)
    result = await use_case.execute(user.id, request.success_redirect, request.failed_redirect)

    if result.is_err():
        error = result.error
        if error.code == "DELIVERY_FAILED":
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        if error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return StatusMessage(message=result.value.message, status_code=status.HTTP_200_OK)


@router.get("/verify-email/{user_id}/{identifier}", status_code=status.HTTP_302_FOUND)
async def verify_email(
    user_id: str,
    identifier: str,
    success_redirect: str = Query(..., alias="successRedirect"),
    failed_redirect: str = Query(..., alias="failedRedirect"),
    signature: Optional[str] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Email Verification (signed link)

    Every failure (bad signature, malformed or unknown user id, wrong hash) redirects to
    failedRedirect?error=bad_request; success and repeat verification
    redirect to successRedirect?verified=1.

    Raises:
        - 400 Bad Request: Redirect target not allowed
    """
    if not (is_allowed_redirect(success_redirect) and is_allowed_redirect(failed_redirect)):
        raise ClientError(
            Error("VALIDATION_ERROR", "Redirect target is not allowed"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    failed_url = with_query(failed_redirect, error="bad_request")

    # A malformed id names no user
    if not (user_id.isascii() and user_id.isdigit()):
        return RedirectResponse(failed_url, status_code=status.HTTP_302_FOUND)

    if not has_valid_signature(
        signature, int(user_id), identifier, success_redirect, failed_redirect
    ):
        return RedirectResponse(failed_url, status_code=status.HTTP_302_FOUND)

    result = await VerifyEmailUseCase(uow).execute(int(user_id), identifier)

    if result.is_err():
        error = result.error
        if error.code in ("NOT_FOUND", "INVALID_TOKEN"):
            return RedirectResponse(failed_url, status_code=status.HTTP_302_FOUND)
        raise ServerError(error)

    return RedirectResponse(
        with_query(success_redirect, verified="1"), status_code=status.HTTP_302_FOUND
    )


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: str = Field(..., description="User email address")

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=StatusMessage)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationSender = Depends(get_notification_sender),
):
    """
    Forgot Password

    Security:
        - No email enumeration (same response for known and unknown emails,
          including when the mail could not be delivered)
        - A new request invalidates the previous token for that email

    Raises:
        - 500 Internal Server Error: Server error
    """
    use_case = ForgotPasswordUseCase(uow, notifier, ApplicationConfig.FRONTEND_RESET_URL)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code != "DELIVERY_FAILED":
            raise ServerError(error)
        # Only registered emails reach the mailer, so a failure must look like success
        logger.error(f"Forgot password: {error.code}")

    return StatusMessage(
        message="password reset link has been sent", status_code=status.HTTP_200_OK
    )


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")
    email: str = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="New password (min 8 chars)")
    password_confirmation: str = Field(..., description="Must equal password")

    @field_validator("password_confirmation")
    @classmethod
    def confirmed(cls, value: str, info: ValidationInfo) -> str:
        return _check_confirmation(value, info)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=StatusMessage)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    session_manager: ISessionManager = Depends(get_session_manager),
):
    """
    Reset Password

    Security:
        - Token must match the latest token issued for the email
        - Token expires after PASSWORD_RESET_TOKEN_TTL_MINUTES
        - Token is deleted after use
        - All sessions of the user are revoked

    Raises:
        - 400 Bad Request: Invalid, superseded, used or expired token
        - 422 Unprocessable Entity: Invalid input
        - 500 Internal Server Error: Server error
    """
    command = ResetPasswordCommand(
        email=request.email, token=request.token, password=request.password
    )
    use_case = ResetPasswordUseCase(
        uow,
        hasher,
        session_manager,
        token_ttl_minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES,
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "VALIDATION_ERROR":
            raise FieldValidationError({"password": [error.message]})
        raise ServerError(error)

    return StatusMessage(message=result.value.message, status_code=status.HTTP_200_OK)
