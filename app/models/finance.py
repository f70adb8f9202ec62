"""
finance.py

입금(Deposit) / 출금(Withdrawal) 요청 모델.

- 두 요청 모두 PENDING 상태로 생성되고 관리자가 APPROVED / REJECTED 로 변경
- 금액은 Numeric(10, 2), 음수 불가 (서비스 계층 검증)

"""

from decimal import Decimal
from enum import Enum

from sqlalchemy import Enum as SAEnum, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Deposit(TimestampMixin, Base):
    """입금 요청 (코인 충전).

    coin_decimal: 충전 코인
    won_decimal : 입금 원화 금액
    """

    __tablename__ = "deposits"
    __table_args__ = (
        Index("ix_deposits_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    account_holder: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_of_bank: Mapped[str | None] = mapped_column(String(200), nullable=True)

    coin_decimal: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    won_decimal: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(TransactionStatus, name="transaction_status"), nullable=False, default=TransactionStatus.PENDING
    )


class Withdrawal(TimestampMixin, Base):
    """출금 요청 (통역사 정산)."""

    __tablename__ = "withdrawals"
    __table_args__ = (
        Index("ix_withdrawals_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    account_number: Mapped[str] = mapped_column(String(200), nullable=False)
    account_holder: Mapped[str] = mapped_column(String(200), nullable=False)
    name_of_bank: Mapped[str] = mapped_column(String(200), nullable=False)

    sum_decimal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(TransactionStatus, name="transaction_status"), nullable=False, default=TransactionStatus.PENDING
    )
