from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.models.finance import TransactionStatus
from app.schemas.common import CamelModel


class DepositCreate(CamelModel):
    # 관리자만 다른 사용자 대상으로 생성 가능, 생략 시 본인
    user_id: int | None = None
    account_holder: str | None = Field(default=None, max_length=200)
    name_of_bank: str | None = Field(default=None, max_length=200)
    coin_decimal: Decimal | None = None
    won_decimal: Decimal | None = None


class DepositUpdate(CamelModel):
    account_holder: str | None = Field(default=None, max_length=200)
    name_of_bank: str | None = Field(default=None, max_length=200)
    coin_decimal: Decimal | None = None
    won_decimal: Decimal | None = None
    status: TransactionStatus | None = None


class DepositResponse(CamelModel):
    id: int
    user_id: int
    account_holder: str | None = None
    name_of_bank: str | None = None
    coin_decimal: Decimal | None = None
    won_decimal: Decimal | None = None
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime


class WithdrawalCreate(CamelModel):
    user_id: int | None = None
    account_number: str = Field(min_length=1, max_length=200)
    account_holder: str = Field(min_length=1, max_length=200)
    name_of_bank: str = Field(min_length=1, max_length=200)
    sum_decimal: Decimal


class WithdrawalUpdate(CamelModel):
    account_number: str | None = Field(default=None, max_length=200)
    account_holder: str | None = Field(default=None, max_length=200)
    name_of_bank: str | None = Field(default=None, max_length=200)
    sum_decimal: Decimal | None = None
    status: TransactionStatus | None = None


class WithdrawalResponse(CamelModel):
    id: int
    user_id: int
    account_number: str
    account_holder: str
    name_of_bank: str
    sum_decimal: Decimal
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime
