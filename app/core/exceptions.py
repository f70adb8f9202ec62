"""
exceptions.py

도메인(서비스) 계층 예외 정의.

서비스 함수는 HTTP에 대해 알지 못하며, 실패 시 아래 예외를 raise 한다.
각 예외는 status_code를 갖고 있어 app.core.errors 의 중앙 핸들러가
HTTP 응답(JSON: status / message / timestamp)으로 변환한다.

분류:
- NotFound          : 사용자 / 프로필 / 리소스 없음 (404, ResourceNotFoundError)
- BadCredentials    : 아이디 또는 비밀번호 불일치 (401)
- ExpiredToken / InvalidToken / RefreshTokenNotFound (401)
- AccessDenied / InvalidRole / AccountDisabled (403)
- Conflict          : 중복 username / 중복 프로필 (409)
- ValidationFailed  : 필드 단위 검증 실패 (422)
- LogoutFailed      : 로그아웃 요청 실패 (400)

"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class AppError(Exception):
    status_code: int = 400
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ResourceNotFoundError(NotFoundError):
    pass


class BadCredentialsError(AppError):
    status_code = 401
    default_message = "Invalid username or password"


class ExpiredTokenError(AppError):
    status_code = 401
    default_message = "Jwt Token has expired"


class InvalidTokenError(AppError):
    status_code = 401
    default_message = "Invalid Jwt Token"


class RefreshTokenNotFoundError(AppError):
    status_code = 401
    default_message = "Refresh Token not found or invalid"


class AccessDeniedError(AppError):
    status_code = 403
    default_message = "Access denied"


class InvalidRoleError(AccessDeniedError):
    def __init__(self, role: str):
        super().__init__(f"Invalid or insufficient role: {role}")


class AccountDisabledError(AccessDeniedError):
    default_message = "Account is disabled"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class UsernameAlreadyExistsError(ConflictError):
    def __init__(self, username: str):
        super().__init__(f"Username '{username}' already exists")


class ProfileAlreadyExistsError(ConflictError):
    def __init__(self, user_id: int):
        super().__init__(f"Translator profile already exists for user ID: {user_id}")


class ValidationFailedError(AppError):
    status_code = 422
    default_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None):
        self.errors = errors
        super().__init__(message)


class LogoutFailedError(AppError):
    status_code = 400

    def __init__(self, reason: str):
        super().__init__(f"Logout failed: {reason}")
