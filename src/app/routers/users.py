from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.app.deps import get_recommendation_service, get_verified_caller
from src.app.domain.errors import ForbiddenError, RepositoryError, UnauthenticatedError
from src.app.domain.models import Role, VerifiedCaller
from src.app.schemas.recommendations import SetRoleRequest
from src.app.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/{user_id}/role", status_code=status.HTTP_204_NO_CONTENT)
async def set_role(
    user_id: str,
    payload: SetRoleRequest,
    caller: Optional[VerifiedCaller] = Depends(get_verified_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> Response:
    try:
        service.set_role(caller, user_id, Role(payload.role))
    except UnauthenticatedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except ForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
