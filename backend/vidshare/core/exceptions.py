class AppError(Exception):
    """Base error carrying the HTTP status and the message safe to show callers."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ConfigurationError(AppError):
    detail = "Invalid configuration"


class DatabaseConnectionError(AppError):
    status_code = 503
    detail = "Database connection failed."


class BadRequestError(AppError):
    status_code = 400
    detail = "Bad request"


class ConflictError(AppError):
    status_code = 400
    detail = "Resource already exists"


class AuthenticationError(AppError):
    status_code = 401
    detail = "Failed to log in"


class UserNotFoundError(AuthenticationError):
    detail = "User not found"


class InvalidCredentialsError(AuthenticationError):
    detail = "Invalid password"
