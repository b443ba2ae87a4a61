# src/app/routers/recommendations.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.app.deps import get_recommendation_service, get_verified_caller
from src.app.domain.errors import (
    ForbiddenError,
    RecommendationNotFoundError,
    RepositoryError,
    UnauthenticatedError,
)
from src.app.domain.models import ALL_GENRES, GENRES, VerifiedCaller
from src.app.schemas.recommendations import (
    GenreList,
    RecommendationCreate,
    RecommendationCreated,
    RecommendationResponse,
)
from src.app.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("/public", response_model=list[RecommendationResponse])
async def list_public(
    service: RecommendationService = Depends(get_recommendation_service),
) -> list[RecommendationResponse]:
    try:
        recs = service.list_public()
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return [RecommendationResponse.from_domain(rec) for rec in recs]


@router.get("/genres", response_model=GenreList)
async def list_genres() -> GenreList:
    return GenreList(genres=list(GENRES), allGenres=ALL_GENRES)


@router.get("", response_model=list[RecommendationResponse])
async def list_all(
    genre: Optional[str] = Query(default=None),
    author: Optional[str] = Query(default=None),
    service: RecommendationService = Depends(get_recommendation_service),
) -> list[RecommendationResponse]:
    try:
        recs = service.list_all(genre=genre, author=author)
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return [RecommendationResponse.from_domain(rec) for rec in recs]


@router.post("", response_model=RecommendationCreated, status_code=status.HTTP_201_CREATED)
async def create_recommendation(
    payload: RecommendationCreate,
    caller: Optional[VerifiedCaller] = Depends(get_verified_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationCreated:
    try:
        rec_id = service.create(
            caller,
            title=payload.title,
            genre=payload.genre,
            link=payload.link,
            blurb=payload.blurb,
        )
    except UnauthenticatedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return RecommendationCreated(id=rec_id)


@router.delete("/{recommendation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recommendation(
    recommendation_id: str,
    caller: Optional[VerifiedCaller] = Depends(get_verified_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> Response:
    try:
        service.remove(caller, recommendation_id)
    except UnauthenticatedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except RecommendationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{recommendation_id}/staff-pick", status_code=status.HTTP_204_NO_CONTENT)
async def toggle_staff_pick(
    recommendation_id: str,
    caller: Optional[VerifiedCaller] = Depends(get_verified_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> Response:
    try:
        service.toggle_staff_pick(caller, recommendation_id)
    except UnauthenticatedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except ForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    except RecommendationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
