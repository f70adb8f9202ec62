"""서비스 공통 헬퍼: 트랜잭션 커밋 / 단건 조회."""

import logging
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AppError, ConflictError, ResourceNotFoundError

logger = logging.getLogger(__name__)

M = TypeVar("M")


def commit(db: Session, *, conflict: AppError | None = None) -> None:
    """
    커밋 실패 시 롤백 후 예외 전파.
    - 무결성 위반(unique 등) → conflict (기본 ConflictError, 409)
    - 그 외 DB 오류 → 그대로 전파 (500)
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Integrity error on commit: %s", e.orig)
        raise conflict or ConflictError()
    except SQLAlchemyError:
        db.rollback()
        raise


def get_or_404(db: Session, model: type[M], entity_id: int, label: str) -> M:
    obj = db.get(model, entity_id)
    if obj is None:
        raise ResourceNotFoundError(f"{label} not found with id {entity_id}")
    return obj
