# src/app/deps.py

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client, create_client

from src.app.config import settings
from src.app.domain.models import VerifiedCaller
from src.app.infra.db.supabase_repo import (
    SupabaseRecommendationRepository,
    SupabaseUserRoleRepository,
)
from src.app.services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


auth_scheme = HTTPBearer(auto_error=False)


def _metadata_str(meta: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = meta.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


async def get_verified_caller(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    supa: Client = Depends(get_supabase),
) -> Optional[VerifiedCaller]:
    """
    Validates Authorization: Bearer <access_token> against Supabase GoTrue.
    Returns None when there is no token or the token does not verify;
    the service decides whether the operation needs a caller.
    """
    if cred is None or cred.scheme.lower() != "bearer":
        return None

    try:
        res = supa.auth.get_user(cred.credentials)
    except Exception as exc:
        logger.warning("Token verification failed: %s", exc)
        return None

    user = res.user if res else None
    if not user:
        return None

    meta = getattr(user, "user_metadata", None) or {}
    if not isinstance(meta, dict):
        meta = {}

    return VerifiedCaller(
        subject=str(user.id),
        name=_metadata_str(meta, "name", "full_name"),
        nickname=_metadata_str(meta, "nickname", "user_name", "preferred_username"),
        email=user.email,
    )


def get_recommendation_service(
    supa: Client = Depends(get_supabase),
) -> RecommendationService:
    return RecommendationService(
        recommendations=SupabaseRecommendationRepository(supa),
        users=SupabaseUserRoleRepository(supa),
        public_list_limit=settings.PUBLIC_LIST_LIMIT,
    )
