"""
services/finance.py

입금(Deposit) / 출금(Withdrawal) 요청 비즈니스 로직.

- 일반 사용자는 본인 명의 요청만 생성 / 조회
- 관리자는 모든 요청 조회 및 상태 변경(PENDING → APPROVED / REJECTED), 삭제
- 금액은 음수 불가

"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.policy import Principal, enforce
from app.models.finance import Deposit, TransactionStatus, Withdrawal
from app.models.user import User
from app.repositories.common import paginate
from app.schemas.finance import DepositCreate, DepositUpdate, WithdrawalCreate, WithdrawalUpdate
from app.services import validation
from app.services.common import commit, get_or_404

logger = logging.getLogger(__name__)


def _target_user_id(principal: Principal, requested: int | None) -> int:
    return requested if requested is not None else principal.user_id


def _apply(obj, data, fields: tuple[str, ...]) -> None:
    # None 이 아닌 값만 반영
    for name in fields:
        value = getattr(data, name)
        if value is not None:
            setattr(obj, name, value)


# ---------- Deposit ----------

def create_deposit(db: Session, data: DepositCreate, principal: Principal) -> Deposit:
    user_id = _target_user_id(principal, data.user_id)
    enforce(principal, "deposits:create", user_id)
    validation.raise_if_errors(validation.validate_deposit(data))
    get_or_404(db, User, user_id, "User")

    deposit = Deposit(
        user_id=user_id,
        account_holder=data.account_holder,
        name_of_bank=data.name_of_bank,
        coin_decimal=data.coin_decimal,
        won_decimal=data.won_decimal,
        status=TransactionStatus.PENDING,
    )
    db.add(deposit)
    commit(db)
    db.refresh(deposit)

    logger.info("Deposit requested: id=%s user=%s won=%s", deposit.id, user_id, deposit.won_decimal)
    return deposit


def list_deposits(db: Session, principal: Principal, *, page: int, size: int) -> tuple[list[Deposit], int]:
    stmt = select(Deposit).order_by(Deposit.id.desc())
    if not principal.is_admin:
        stmt = stmt.where(Deposit.user_id == principal.user_id)
    return paginate(db, stmt, page=page, size=size)


def get_deposit(db: Session, deposit_id: int, principal: Principal) -> Deposit:
    deposit = get_or_404(db, Deposit, deposit_id, "Deposit")
    enforce(principal, "deposits:read", deposit.user_id)
    return deposit


def update_deposit(db: Session, deposit_id: int, data: DepositUpdate) -> Deposit:
    deposit = get_or_404(db, Deposit, deposit_id, "Deposit")
    validation.raise_if_errors(validation.validate_deposit(data))

    _apply(deposit, data, ("account_holder", "name_of_bank", "coin_decimal", "won_decimal", "status"))
    commit(db)
    db.refresh(deposit)

    logger.info("Deposit updated: id=%s status=%s", deposit.id, deposit.status.value)
    return deposit


def delete_deposit(db: Session, deposit_id: int) -> None:
    deposit = get_or_404(db, Deposit, deposit_id, "Deposit")
    db.delete(deposit)
    commit(db)
    logger.info("Deposit deleted: id=%s", deposit_id)


# ---------- Withdrawal ----------

def create_withdrawal(db: Session, data: WithdrawalCreate, principal: Principal) -> Withdrawal:
    user_id = _target_user_id(principal, data.user_id)
    enforce(principal, "withdrawals:create", user_id)
    validation.raise_if_errors(validation.validate_withdrawal(data))
    get_or_404(db, User, user_id, "User")

    withdrawal = Withdrawal(
        user_id=user_id,
        account_number=data.account_number,
        account_holder=data.account_holder,
        name_of_bank=data.name_of_bank,
        sum_decimal=data.sum_decimal,
        status=TransactionStatus.PENDING,
    )
    db.add(withdrawal)
    commit(db)
    db.refresh(withdrawal)

    logger.info("Withdrawal requested: id=%s user=%s sum=%s", withdrawal.id, user_id, withdrawal.sum_decimal)
    return withdrawal


def list_withdrawals(db: Session, principal: Principal, *, page: int, size: int) -> tuple[list[Withdrawal], int]:
    stmt = select(Withdrawal).order_by(Withdrawal.id.desc())
    if not principal.is_admin:
        stmt = stmt.where(Withdrawal.user_id == principal.user_id)
    return paginate(db, stmt, page=page, size=size)


def get_withdrawal(db: Session, withdrawal_id: int, principal: Principal) -> Withdrawal:
    withdrawal = get_or_404(db, Withdrawal, withdrawal_id, "Withdrawal")
    enforce(principal, "withdrawals:read", withdrawal.user_id)
    return withdrawal


def update_withdrawal(db: Session, withdrawal_id: int, data: WithdrawalUpdate) -> Withdrawal:
    withdrawal = get_or_404(db, Withdrawal, withdrawal_id, "Withdrawal")
    validation.raise_if_errors(validation.validate_withdrawal(data))

    _apply(withdrawal, data, ("account_number", "account_holder", "name_of_bank", "sum_decimal", "status"))
    commit(db)
    db.refresh(withdrawal)

    logger.info("Withdrawal updated: id=%s status=%s", withdrawal.id, withdrawal.status.value)
    return withdrawal


def delete_withdrawal(db: Session, withdrawal_id: int) -> None:
    withdrawal = get_or_404(db, Withdrawal, withdrawal_id, "Withdrawal")
    db.delete(withdrawal)
    commit(db)
    logger.info("Withdrawal deleted: id=%s", withdrawal_id)
