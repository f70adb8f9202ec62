"""
policy.py

역할 기반 접근 제어(RBAC) 정책.

라우터에 흩어진 권한 조건 대신, (액션 이름 → 규칙 함수) 매핑 한 곳에서
접근 허용 여부를 판단한다.

- Principal : 검증된 access 토큰에서 얻은 호출자 정보 (user_id, username, roles)
- ACTIONS   : "리소스:동작" → rule(principal, owner) -> bool
- owner     : 리소스 소유자 user id (통화처럼 참여자가 여럿이면 id 목록)

라우터는 app.core.deps.require(action) 의존성으로 핸들러 실행 전에 검사하거나,
리소스를 먼저 로드해야 소유자를 알 수 있는 경우 enforce(..., owner=...)를 직접 호출한다.

"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from app.core.exceptions import AccessDeniedError
from app.models.user import RoleName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    user_id: int | None
    username: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: RoleName) -> bool:
        return role.value in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(RoleName.ROLE_ADMIN)


Owner = int | Iterable[int] | None
Rule = Callable[[Principal, Owner], bool]


def _owns(principal: Principal, owner: Owner) -> bool:
    if owner is None or principal.user_id is None:
        return False
    if isinstance(owner, int):
        return owner == principal.user_id
    return principal.user_id in set(owner)


def authenticated(principal: Principal, owner: Owner) -> bool:
    return True


def admin_only(principal: Principal, owner: Owner) -> bool:
    return principal.is_admin


def admin_or_owner(principal: Principal, owner: Owner) -> bool:
    return principal.is_admin or _owns(principal, owner)


def admin_or_translator_self(principal: Principal, owner: Owner) -> bool:
    # 통역사는 본인 프로필만 생성 가능
    if principal.is_admin:
        return True
    return principal.has_role(RoleName.ROLE_TRANSLATOR) and _owns(principal, owner)


ACTIONS: dict[str, Rule] = {
    "users:create": admin_only,
    "users:list": admin_only,
    "users:read": admin_or_owner,
    "users:update": admin_or_owner,
    "users:manage": admin_only,  # roles / balance / isActive 변경
    "users:delete": admin_only,

    "translator_profiles:create": admin_or_translator_self,
    "translator_profiles:read": authenticated,
    "translator_profiles:update": admin_or_owner,
    "translator_profiles:delete": admin_or_owner,

    "catalog:read": authenticated,
    "catalog:write": admin_only,

    "user_profiles:list": admin_only,
    "user_profiles:read": admin_or_owner,
    "user_profiles:update": admin_only,

    "deposits:create": admin_or_owner,
    "deposits:list": authenticated,
    "deposits:read": admin_or_owner,
    "deposits:update": admin_only,
    "deposits:delete": admin_only,

    "withdrawals:create": admin_or_owner,
    "withdrawals:list": authenticated,
    "withdrawals:read": admin_or_owner,
    "withdrawals:update": admin_only,
    "withdrawals:delete": admin_only,

    "ratings:create": admin_or_owner,
    "ratings:read": authenticated,
    "ratings:update": admin_or_owner,
    "ratings:delete": admin_or_owner,

    "calls:create": admin_or_owner,
    "calls:list": authenticated,
    "calls:read": admin_or_owner,
    "calls:update": admin_or_owner,
    "calls:delete": admin_only,
}


def is_allowed(principal: Principal, action: str, owner: Owner = None) -> bool:
    rule = ACTIONS.get(action)
    if rule is None:
        # 등록되지 않은 액션은 거부
        return False
    return rule(principal, owner)


def enforce(principal: Principal, action: str, owner: Owner = None) -> None:
    if not is_allowed(principal, action, owner):
        logger.warning("Access denied: user=%s action=%s", principal.username, action)
        raise AccessDeniedError()
