from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.deps import PageParams, get_current_principal, get_db, get_page_params, require
from app.core.policy import Principal
from app.schemas.common import Page
from app.schemas.rating import RatingCreate, RatingResponse, RatingUpdate
from app.services import ratings as rating_service

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.post("", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def create_rating(
    data: RatingCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return rating_service.create_rating(db, data, principal)


# translatorProfileId 를 주면 해당 통역사 평가만
@router.get("", response_model=Page[RatingResponse])
def list_ratings(
    translator_profile_id: int | None = Query(None, alias="translatorProfileId"),
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: Principal = Depends(require("ratings:read")),
):
    items, total = rating_service.list_ratings(
        db, translator_profile_id=translator_profile_id, page=params.page, size=params.size
    )
    return Page.build([RatingResponse.model_validate(i) for i in items], total, params.page, params.size)


@router.get("/{rating_id}", response_model=RatingResponse)
def get_rating(
    rating_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require("ratings:read")),
):
    return rating_service.get_rating(db, rating_id)


@router.put("/{rating_id}", response_model=RatingResponse)
def update_rating(
    rating_id: int,
    data: RatingUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return rating_service.update_rating(db, rating_id, data, principal)


@router.delete("/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rating(
    rating_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rating_service.delete_rating(db, rating_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
