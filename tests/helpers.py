# tests/helpers.py
import random

from sqlalchemy.orm import Session

from app.models.refresh_token import RefreshToken
from app.models.user import User
from app.repositories import refresh_token_repository
from app.schemas.user import UserCreate
from app.services import users as user_service

DEFAULT_PASSWORD = "123456"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def random_username() -> str:
    return "010" + "".join(random.choices("0123456789", k=8))


def create_user_in_db(
    db: Session,
    *,
    username: str | None = None,
    password: str = DEFAULT_PASSWORD,
    roles: tuple[str, ...] = ("USER",),
    first_name: str = "Test",
    last_name: str = "User",
    is_active: bool = True,
) -> User:
    return user_service.create_user(
        db,
        UserCreate(
            username=username or random_username(),
            password=password,
            first_name=first_name,
            last_name=last_name,
            is_active=is_active,
            roles=list(roles),
        ),
    )


def login(client, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def create_and_login(client, db: Session, *, roles: tuple[str, ...] = ("USER",), **kwargs) -> dict:
    """
    사용자 생성 + 로그인 → {"user_id", "username", "access", "refresh"}
    """
    user = create_user_in_db(db, roles=roles, **kwargs)
    tokens = login(client, user.username)
    return {
        "user_id": user.id,
        "username": user.username,
        "access": tokens["accessToken"],
        "refresh": tokens["refreshToken"],
    }


def ledger_rows(db: Session, user_id: int) -> list[RefreshToken]:
    db.expire_all()
    return refresh_token_repository.list_for_user(db, user_id)
