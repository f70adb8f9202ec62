from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationFailedError
from app.schemas.call import CallCreate, CallUpdate
from app.schemas.finance import DepositCreate, WithdrawalUpdate
from app.schemas.rating import RatingCreate, RatingUpdate
from app.schemas.translator_profile import TranslatorProfileCreate
from app.schemas.user import UserCreate, UserUpdate
from app.services import validation


def _fields(errors):
    return {e.field for e in errors}


def test_valid_user_create_has_no_errors():
    data = UserCreate(username="01012345678", password="123456", roles=["USER"])
    assert validation.validate_user_create(data) == []


def test_user_create_collects_every_field_error():
    data = UserCreate(username="abc", password="123", roles=["PILOT"], balance=Decimal("-1"))

    errors = validation.validate_user_create(data)

    assert _fields(errors) == {"username", "password", "roles", "balance"}


def test_user_create_requires_password():
    errors = validation.validate_user_create(UserCreate(username="01012345678", roles=["USER"]))
    assert _fields(errors) == {"password"}


def test_user_update_allows_partial_and_rejects_empty_roles():
    assert validation.validate_user_update(UserUpdate(first_name="Kim")) == []
    assert _fields(validation.validate_user_update(UserUpdate(roles=[]))) == {"roles"}


def test_translator_profile_birth_date_must_be_past():
    data = TranslatorProfileCreate(
        user_id=1,
        email="t@example.com",
        date_of_birth=date.today() + timedelta(days=1),
        language_ids=[0],
    )

    assert _fields(validation.validate_translator_profile(data)) == {"dateOfBirth", "languageIds"}


@pytest.mark.parametrize("score", [0, 6, -1])
def test_rating_score_out_of_range(score):
    errors = validation.validate_rating(RatingCreate(translator_profile_id=1, score=score))
    assert _fields(errors) == {"score"}


def test_rating_update_without_score_is_valid():
    assert validation.validate_rating(RatingUpdate(comment="good")) == []


def test_negative_amounts_rejected():
    deposit = DepositCreate(coin_decimal=Decimal("-1"), won_decimal=Decimal("10"))
    assert _fields(validation.validate_deposit(deposit)) == {"coinDecimal"}

    withdrawal = WithdrawalUpdate(sum_decimal=Decimal("-0.01"))
    assert _fields(validation.validate_withdrawal(withdrawal)) == {"sumDecimal"}


def test_call_caller_and_recipient_must_differ():
    assert _fields(validation.validate_call(CallCreate(recipient_id=5), caller_id=5)) == {"recipientId"}
    assert validation.validate_call(CallCreate(recipient_id=5), caller_id=6) == []


def test_call_update_rejects_negative_duration():
    assert _fields(validation.validate_call(CallUpdate(duration=-3))) == {"duration"}


def test_pagination_bounds():
    assert validation.validate_pagination(1, 20) == []
    assert _fields(validation.validate_pagination(0, 0)) == {"page", "size"}
    assert _fields(validation.validate_pagination(1, 10_000)) == {"size"}


def test_raise_if_errors_wraps_field_errors():
    errors = validation.validate_pagination(0, 20)

    with pytest.raises(ValidationFailedError) as exc:
        validation.raise_if_errors(errors)

    assert exc.value.status_code == 422
    assert exc.value.errors == errors
    validation.raise_if_errors([])
