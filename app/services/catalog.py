"""언어(Language) / 주제(Theme) 카탈로그 서비스."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.models.translator_profile import Language, Theme
from app.repositories.common import paginate
from app.services.common import commit

logger = logging.getLogger(__name__)


def list_languages(db: Session, *, page: int, size: int) -> tuple[list[Language], int]:
    return paginate(db, select(Language).order_by(Language.name), page=page, size=size)


def create_language(db: Session, name: str) -> Language:
    name = name.strip()
    if db.scalar(select(Language.id).where(func.lower(Language.name) == name.lower())):
        raise ConflictError(f"Language '{name}' already exists")

    language = Language(name=name)
    db.add(language)
    commit(db, conflict=ConflictError(f"Language '{name}' already exists"))
    db.refresh(language)
    logger.info("Language created: %s", name)
    return language


def list_themes(db: Session, *, page: int, size: int) -> tuple[list[Theme], int]:
    return paginate(db, select(Theme).order_by(Theme.name), page=page, size=size)


def create_theme(db: Session, name: str, description: str | None = None) -> Theme:
    name = name.strip()
    if db.scalar(select(Theme.id).where(func.lower(Theme.name) == name.lower())):
        raise ConflictError(f"Theme '{name}' already exists")

    theme = Theme(name=name, description=description)
    db.add(theme)
    commit(db, conflict=ConflictError(f"Theme '{name}' already exists"))
    db.refresh(theme)
    logger.info("Theme created: %s", name)
    return theme
