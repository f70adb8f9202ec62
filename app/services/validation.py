"""
services/validation.py

요청 단위 의미(semantic) 검증 함수 모음.

형식 / 길이 같은 모양(shape) 검증은 Pydantic 스키마가 담당하고,
여기서는 요청 타입별로 비즈니스 규칙을 검사하여 FieldError 목록을 반환한다.

- 빈 목록이면 통과
- raise_if_errors()로 ValidationFailedError(422) 변환

설계 원칙:
- 검증 함수는 DB에 접근하지 않는 순수 함수
- 한 번에 모든 필드 오류를 모아서 반환 (첫 오류에서 멈추지 않음)

"""

import re
from datetime import date
from decimal import Decimal

from app.core.config import settings
from app.core.exceptions import FieldError, ValidationFailedError
from app.models.user import RoleName
from app.schemas.call import CallCreate, CallUpdate
from app.schemas.finance import DepositCreate, DepositUpdate, WithdrawalCreate, WithdrawalUpdate
from app.schemas.rating import RatingCreate, RatingUpdate
from app.schemas.translator_profile import TranslatorProfileCreate, TranslatorProfileUpdate
from app.schemas.user import UserCreate, UserUpdate

_USERNAME_RE = re.compile(r"^\d{9,20}$")

MIN_PASSWORD_LENGTH = 6
MIN_SCORE = 1
MAX_SCORE = 5


def raise_if_errors(errors: list[FieldError]) -> None:
    if errors:
        raise ValidationFailedError(errors)


def _check_username(username: str | None, errors: list[FieldError]) -> None:
    if username is None:
        return
    if not _USERNAME_RE.match(username):
        errors.append(FieldError("username", "Username must be a phone number of 9 to 20 digits"))


def _check_password(password: str | None, errors: list[FieldError], *, required: bool) -> None:
    if password is None or password == "":
        if required:
            errors.append(FieldError("password", "Password is required"))
        return
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(FieldError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters"))


def _check_roles(roles: list[str] | None, errors: list[FieldError]) -> None:
    if roles is None:
        return
    if not roles:
        errors.append(FieldError("roles", "At least one role is required"))
        return
    for role in roles:
        try:
            RoleName.parse(role)
        except ValueError:
            errors.append(FieldError("roles", f"Unknown role: {role}"))


def _check_non_negative(name: str, value: Decimal | int | None, errors: list[FieldError]) -> None:
    if value is not None and value < 0:
        errors.append(FieldError(name, f"{name} must not be negative"))


def validate_user_create(data: UserCreate) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_username(data.username, errors)
    _check_password(data.password, errors, required=True)
    _check_roles(data.roles, errors)
    _check_non_negative("balance", data.balance, errors)
    return errors


def validate_user_update(data: UserUpdate) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_username(data.username, errors)
    _check_password(data.password, errors, required=False)
    _check_roles(data.roles, errors)
    _check_non_negative("balance", data.balance, errors)
    return errors


def validate_translator_profile(data: TranslatorProfileCreate | TranslatorProfileUpdate) -> list[FieldError]:
    errors: list[FieldError] = []
    if data.date_of_birth is not None and data.date_of_birth >= date.today():
        errors.append(FieldError("dateOfBirth", "Date of birth must be in the past"))
    if data.language_ids is not None and any(i <= 0 for i in data.language_ids):
        errors.append(FieldError("languageIds", "Language ids must be positive"))
    if data.theme_ids is not None and any(i <= 0 for i in data.theme_ids):
        errors.append(FieldError("themeIds", "Theme ids must be positive"))
    return errors


def validate_rating(data: RatingCreate | RatingUpdate) -> list[FieldError]:
    errors: list[FieldError] = []
    if isinstance(data, RatingCreate) or data.score is not None:
        if data.score is None or not MIN_SCORE <= data.score <= MAX_SCORE:
            errors.append(FieldError("score", f"Score must be between {MIN_SCORE} and {MAX_SCORE}"))
    return errors


def validate_deposit(data: DepositCreate | DepositUpdate) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_non_negative("coinDecimal", data.coin_decimal, errors)
    _check_non_negative("wonDecimal", data.won_decimal, errors)
    return errors


def validate_withdrawal(data: WithdrawalCreate | WithdrawalUpdate) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_non_negative("sumDecimal", data.sum_decimal, errors)
    return errors


def validate_call(data: CallCreate | CallUpdate, *, caller_id: int | None = None) -> list[FieldError]:
    errors: list[FieldError] = []
    if isinstance(data, CallCreate):
        if caller_id is not None and caller_id == data.recipient_id:
            errors.append(FieldError("recipientId", "Caller and recipient must be different users"))
        return errors

    _check_non_negative("duration", data.duration, errors)
    _check_non_negative("sumDecimal", data.sum_decimal, errors)
    _check_non_negative("commission", data.commission, errors)
    return errors


def validate_pagination(page: int, size: int) -> list[FieldError]:
    errors: list[FieldError] = []
    if page < 1:
        errors.append(FieldError("page", "Page must be 1 or greater"))
    if size < 1 or size > settings.MAX_PAGE_SIZE:
        errors.append(FieldError("size", f"Size must be between 1 and {settings.MAX_PAGE_SIZE}"))
    return errors
