"""
user.py

사용자(User) 및 권한(Role) 모델 정의 파일.

이 파일은 서비스 이용자(통역사 / 일반 사용자 / 관리자)의 기본 정보와
권한(Role, 다대다), 잔액, 활성화 상태를 관리한다.

모든 인증, 권한, 프로필, 입출금, 통화 기능의 기준이 되는 핵심 모델이다.

"""

from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Column, Enum as SAEnum, ForeignKey, Numeric, SmallInteger, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin



"""
사용자 권한(Role) 정의

- ROLE_TRANSLATOR : 통역사 (TranslatorProfile 보유)
- ROLE_USER       : 일반 사용자 (통역 요청 / 평가)
- ROLE_ADMIN      : 관리자

"""

class RoleName(str, Enum):
    ROLE_TRANSLATOR = "ROLE_TRANSLATOR"
    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"

    @classmethod
    def parse(cls, value: str) -> "RoleName":
        """'ADMIN' / 'role_admin' / 'ROLE_ADMIN' 모두 허용."""
        normalized = value.strip().upper()
        if not normalized.startswith("ROLE_"):
            normalized = f"ROLE_{normalized}"
        return cls(normalized)


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(TimestampMixin, Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[RoleName] = mapped_column(SAEnum(RoleName, name="role_name"), unique=True, nullable=False)



"""
사용자(User) 모델

- username 은 전화번호 형태의 고유 식별자 (로그인 ID)
- roles 를 통해 접근 권한 제어 (다대다)
- balance 는 통화 요금 정산용 잔액
- is_active=False 인 계정은 로그인 불가

"""

class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    balance: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    on_boarding_status: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)

    roles: Mapped[list[Role]] = relationship(secondary=user_roles, lazy="selectin")

    @property
    def role_names(self) -> set[str]:
        return {r.name.value for r in self.roles}

    def has_role(self, role: RoleName) -> bool:
        return any(r.name == role for r in self.roles)
