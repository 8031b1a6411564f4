"""Application error taxonomy. Each error knows the HTTP status it maps to at the boundary."""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are translated into client-visible responses."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "app_error"
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# Authentication service


class InvalidCredentialsError(AppError):
    # Same message for unknown user and wrong password.
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid username or password."


class InvalidRefreshTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_refresh_token"
    default_message = "Refresh token is invalid or expired."


class RefreshTokenRevokedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "refresh_token_revoked"
    default_message = "Refresh token has been revoked."


class UserNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "user_not_found"
    default_message = "User not found."


class UsernameTakenError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "username_taken"
    default_message = "Username already exists."


class EmailTakenError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "email_taken"
    default_message = "Email already exists."


# Access control gate


class MissingAuthHeaderError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "missing_auth_header"
    default_message = "Authorization header required."


class MalformedAuthHeaderError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "malformed_auth_header"
    default_message = "Invalid authorization header format."


class TokenRevokedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "token_revoked"
    default_message = "Token has been invalidated."


class InvalidOrExpiredTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_or_expired_token"
    default_message = "Invalid or expired token."


class RoleMissingError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "role_missing"
    default_message = "User role not found."


class InsufficientPermissionsError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "insufficient_permissions"
    default_message = "Insufficient permissions."


# Content services


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found."


class NewsNotFoundError(NotFoundError):
    code = "news_not_found"
    default_message = "News not found."


class MemberNotFoundError(NotFoundError):
    code = "member_not_found"
    default_message = "Member not found."


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"
    default_message = "Invalid input."


class InvalidNewsStatusError(InvalidInputError):
    code = "invalid_news_status"
    default_message = "Invalid news status."


class NewsNotDraftError(InvalidInputError):
    code = "news_not_draft"
    default_message = "Only draft news can be published."


class RateLimitExceededError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limit_exceeded"
    default_message = "Too many requests. Please try again later."


# Storage


class StoreFailureError(AppError):
    """Collaborator I/O failure. The client only ever sees a generic message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"
    default_message = "Internal server error"
