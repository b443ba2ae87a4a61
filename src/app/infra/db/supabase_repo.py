from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from src.app.domain.errors import RepositoryError
from src.app.domain.models import NewRecommendation, Recommendation, Role, UserRole
from src.app.infra.db.base import RecommendationRepository, UserRoleRepository

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


def _row_to_recommendation(row: dict[str, Any]) -> Recommendation:
    return Recommendation(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        genre=str(row.get("genre") or ""),
        link=str(row.get("link") or ""),
        blurb=str(row.get("blurb") or ""),
        user_id=str(row["user_id"]),
        username=str(row.get("username") or ""),
        is_staff_pick=bool(row.get("is_staff_pick")),
        created_at=_parse_datetime(row.get("created_at")),
    )


def _recommendation_to_row(recommendation: NewRecommendation, created_at: datetime) -> dict[str, Any]:
    return {
        "id": str(uuid4()),
        "title": recommendation.title,
        "genre": recommendation.genre,
        "link": recommendation.link,
        "blurb": recommendation.blurb,
        "user_id": recommendation.user_id,
        "username": recommendation.username,
        "is_staff_pick": recommendation.is_staff_pick,
        "created_at": created_at.isoformat(),
    }


def _row_to_user_role(row: dict[str, Any]) -> UserRole:
    return UserRole(user_id=str(row["user_id"]), role=Role(str(row["role"])))


def _execute(operation: str, query: Any) -> list[dict[str, Any]]:
    try:
        result = query.execute()
    except APIError as error:
        logger.error("Database error during %s: %s (code=%s)", operation, error.message, error.code)
        raise RepositoryError(operation, str(error.message or error)) from error
    except (httpx.HTTPError, ConnectionError, TimeoutError) as error:
        logger.error("Network error during %s: %s", operation, error)
        raise RepositoryError(operation, str(error)) from error
    return result.data or []


class SupabaseRecommendationRepository(RecommendationRepository):
    TABLE_NAME = "recommendations"
    TOGGLE_FUNCTION = "toggle_staff_pick"

    def __init__(self, client: Client):
        self._client = client

    def insert(self, recommendation: NewRecommendation) -> Recommendation:
        row = _recommendation_to_row(recommendation, _now_utc())
        data = _execute("insert_recommendation", self._client.table(self.TABLE_NAME).insert(row))
        if not data:
            raise RepositoryError("insert_recommendation", "No row returned")
        return _row_to_recommendation(data[0])

    def insert_many(self, recommendations: list[NewRecommendation]) -> list[Recommendation]:
        if not recommendations:
            return []
        # Later entries get later timestamps so they list first.
        base = _now_utc()
        rows = [
            _recommendation_to_row(rec, base + timedelta(microseconds=index))
            for index, rec in enumerate(recommendations)
        ]
        data = _execute("insert_recommendations", self._client.table(self.TABLE_NAME).insert(rows))
        if len(data) != len(rows):
            raise RepositoryError("insert_recommendations", f"Expected {len(rows)} rows, got {len(data)}")
        return [_row_to_recommendation(row) for row in data]

    def get(self, recommendation_id: str) -> Optional[Recommendation]:
        if not _is_uuid(recommendation_id):
            return None
        data = _execute(
            "get_recommendation",
            self._client.table(self.TABLE_NAME).select("*").eq("id", recommendation_id).limit(1),
        )
        return _row_to_recommendation(data[0]) if data else None

    def delete(self, recommendation_id: str) -> None:
        if not _is_uuid(recommendation_id):
            return
        _execute(
            "delete_recommendation",
            self._client.table(self.TABLE_NAME).delete().eq("id", recommendation_id),
        )

    def set_staff_pick(self, recommendation_id: str, value: bool) -> None:
        if not _is_uuid(recommendation_id):
            return
        _execute(
            "set_staff_pick",
            self._client.table(self.TABLE_NAME).update({"is_staff_pick": value}).eq("id", recommendation_id),
        )

    def toggle_staff_pick(self, recommendation_id: str) -> Optional[Recommendation]:
        if not _is_uuid(recommendation_id):
            return None
        data = _execute(
            "toggle_staff_pick",
            self._client.rpc(self.TOGGLE_FUNCTION, {"p_id": recommendation_id}),
        )
        return _row_to_recommendation(data[0]) if data else None

    def list_recent(
        self,
        limit: Optional[int] = None,
        genre: Optional[str] = None,
    ) -> list[Recommendation]:
        query = self._client.table(self.TABLE_NAME).select("*")
        if genre is not None:
            query = query.eq("genre", genre)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        return [_row_to_recommendation(row) for row in _execute("list_recommendations", query)]

    def exists_for_user(self, user_id: str) -> bool:
        data = _execute(
            "recommendation_exists_for_user",
            self._client.table(self.TABLE_NAME).select("id").eq("user_id", user_id).limit(1),
        )
        return bool(data)


class SupabaseUserRoleRepository(UserRoleRepository):
    TABLE_NAME = "users"

    def __init__(self, client: Client):
        self._client = client

    def get(self, user_id: str) -> Optional[UserRole]:
        data = _execute(
            "get_user_role",
            self._client.table(self.TABLE_NAME).select("user_id, role").eq("user_id", user_id).limit(1),
        )
        return _row_to_user_role(data[0]) if data else None

    def list_admin_ids(self) -> set[str]:
        data = _execute(
            "list_admins",
            self._client.table(self.TABLE_NAME).select("user_id").eq("role", Role.ADMIN.value),
        )
        return {str(row["user_id"]) for row in data}

    def upsert(self, user_id: str, role: Role) -> UserRole:
        data = _execute(
            "upsert_user_role",
            self._client.table(self.TABLE_NAME).upsert(
                {"user_id": user_id, "role": role.value},
                on_conflict="user_id",
            ),
        )
        return _row_to_user_role(data[0]) if data else UserRole(user_id=user_id, role=role)
