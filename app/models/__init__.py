"""ORM 모델 모음. import 시 Base.metadata에 모든 테이블이 등록된다."""

from app.db.base import Base
from app.models.user import Role, RoleName, User, user_roles
from app.models.refresh_token import RefreshToken
from app.models.user_profile import UserProfile
from app.models.translator_profile import Language, Theme, TranslatorProfile
from app.models.call import Call, CallStatus
from app.models.rating import Rating
from app.models.finance import Deposit, TransactionStatus, Withdrawal

__all__ = [
    "Base",
    "Role",
    "RoleName",
    "User",
    "user_roles",
    "RefreshToken",
    "UserProfile",
    "Language",
    "Theme",
    "TranslatorProfile",
    "Call",
    "CallStatus",
    "Rating",
    "Deposit",
    "TransactionStatus",
    "Withdrawal",
]
