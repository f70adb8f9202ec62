"""
call.py

통화(Call) 기록 모델.

- caller / recipient 는 모두 User
- theme 은 선택 사항
- call_status 로 통화 생명주기 관리 (CONNECT_NOT_SET 에서 시작)
- is_end_call=True 가 되면 종료된 통화 (더 이상 진행 중 아님)

"""

from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Enum as SAEnum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class CallStatus(str, Enum):
    CONNECT_NOT_SET = "CONNECT_NOT_SET"
    SUCCESSFUL = "SUCCESSFUL"
    MISSED_CALL = "MISSED_CALL"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


# 통역사가 "통화 중"으로 간주되는 상태
ACTIVE_CALL_STATUSES = (CallStatus.CONNECT_NOT_SET, CallStatus.SUCCESSFUL)


class Call(TimestampMixin, Base):
    __tablename__ = "calls"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    caller_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    recipient_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    theme_id: Mapped[int | None] = mapped_column(ForeignKey("themes.id", ondelete="SET NULL"), nullable=True)

    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # seconds
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # successful 여부

    sum_decimal: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    commission: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    translator_has_joined: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    user_has_rated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    channel_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    call_status: Mapped[CallStatus] = mapped_column(
        SAEnum(CallStatus, name="call_status"), nullable=False, default=CallStatus.CONNECT_NOT_SET
    )
    is_end_call: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
