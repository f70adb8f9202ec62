"""RefreshToken(원장) Repository. DB 쿼리만 수행."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.refresh_token import RefreshToken
from app.models.user import User


def add(db: Session, row: RefreshToken) -> RefreshToken:
    db.add(row)
    db.flush()
    return row


def get_by_token(db: Session, token: str) -> RefreshToken | None:
    """token 문자열로 원장 조회. 소유 유저와 roles까지 함께 로드."""
    stmt = (
        select(RefreshToken)
        .options(joinedload(RefreshToken.user).selectinload(User.roles))
        .where(RefreshToken.token == token)
    )
    return db.scalar(stmt)


def delete_by_token(db: Session, token: str) -> int:
    """
    조건부 DELETE. 삭제된 행 수를 반환.
    동시에 같은 토큰으로 회전을 시도하면 한쪽만 1을 받는다.
    """
    result = db.execute(
        delete(RefreshToken).where(RefreshToken.token == token).execution_options(synchronize_session=False)
    )
    return result.rowcount


def delete_by_user(db: Session, user_id: int) -> int:
    """해당 유저의 모든 refresh token 삭제 (로그아웃)."""
    result = db.execute(
        delete(RefreshToken).where(RefreshToken.user_id == user_id).execution_options(synchronize_session=False)
    )
    return result.rowcount


def list_for_user(db: Session, user_id: int) -> list[RefreshToken]:
    return list(db.scalars(select(RefreshToken).where(RefreshToken.user_id == user_id).order_by(RefreshToken.id)))
