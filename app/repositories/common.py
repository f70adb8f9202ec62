"""Repository 공통 헬퍼."""

from sqlalchemy import Select, func
from sqlalchemy.orm import Session


def paginate(db: Session, stmt: Select, *, page: int, size: int, options=()) -> tuple[list, int]:
    """
    (items, total) 반환. page는 1부터 시작.
    loader option은 count 쿼리가 아닌 목록 쿼리에만 적용.
    """
    count_stmt = stmt.with_only_columns(func.count(), maintain_column_froms=True).order_by(None)
    total = db.scalar(count_stmt) or 0
    items = db.scalars(stmt.options(*options).offset((page - 1) * size).limit(size)).unique().all()
    return list(items), total
