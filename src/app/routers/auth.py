from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from src.app.deps import get_recommendation_service, get_verified_caller
from src.app.domain.errors import RepositoryError, UnauthenticatedError
from src.app.domain.models import VerifiedCaller
from src.app.schemas.recommendations import MeResponse, RoleResponse
from src.app.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
async def me(
    caller: Optional[VerifiedCaller] = Depends(get_verified_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> MeResponse:
    try:
        resolved = service.require_auth(caller)
    except UnauthenticatedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return MeResponse(
        id=resolved.user_id,
        username=resolved.username,
        role=resolved.role.value,
        email=caller.email,
    )


@router.get("/role", response_model=RoleResponse)
async def my_role(
    caller: Optional[VerifiedCaller] = Depends(get_verified_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RoleResponse:
    # Only the role string leaves the server, never the users row
    try:
        role = service.get_my_role(caller)
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return RoleResponse(role=role.value if role else None)
