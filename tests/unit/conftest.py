from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Optional
from uuid import uuid4

import pytest

# Settings() is built at import time of src.app.config
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")

from src.app.domain.errors import RepositoryError
from src.app.domain.models import NewRecommendation, Recommendation, Role, UserRole
from src.app.infra.db.base import RecommendationRepository, UserRoleRepository
from src.app.services.recommendation_service import RecommendationService
from src.app.services.seed_service import SeedService

_EPOCH = datetime(2024, 1, 15, tzinfo=timezone.utc)


class RecommendationRepositoryStub(RecommendationRepository):
    def __init__(self) -> None:
        self.rows: dict[str, Recommendation] = {}
        self.inserted: list[NewRecommendation] = []
        self.deleted: list[str] = []
        self.patched: list[tuple[str, bool]] = []
        self.toggled: list[str] = []
        self.fail_next_batch = False

    def insert(self, recommendation: NewRecommendation) -> Recommendation:
        self.inserted.append(recommendation)
        rec = Recommendation(
            id=str(uuid4()),
            title=recommendation.title,
            genre=recommendation.genre,
            link=recommendation.link,
            blurb=recommendation.blurb,
            user_id=recommendation.user_id,
            username=recommendation.username,
            is_staff_pick=recommendation.is_staff_pick,
            created_at=_EPOCH + timedelta(seconds=len(self.inserted)),
        )
        self.rows[rec.id] = rec
        return rec

    def insert_many(self, recommendations: list[NewRecommendation]) -> list[Recommendation]:
        if self.fail_next_batch:
            self.fail_next_batch = False
            raise RepositoryError("insert_recommendations", "Connection reset by peer")
        return [self.insert(rec) for rec in recommendations]

    def get(self, recommendation_id: str) -> Optional[Recommendation]:
        return self.rows.get(recommendation_id)

    def delete(self, recommendation_id: str) -> None:
        self.deleted.append(recommendation_id)
        self.rows.pop(recommendation_id, None)

    def set_staff_pick(self, recommendation_id: str, value: bool) -> None:
        self.patched.append((recommendation_id, value))
        self.rows[recommendation_id].is_staff_pick = value

    def toggle_staff_pick(self, recommendation_id: str) -> Optional[Recommendation]:
        rec = self.rows.get(recommendation_id)
        if rec is None:
            return None
        self.toggled.append(recommendation_id)
        rec.is_staff_pick = not rec.is_staff_pick
        return rec

    def list_recent(
        self,
        limit: Optional[int] = None,
        genre: Optional[str] = None,
    ) -> list[Recommendation]:
        recs = sorted(self.rows.values(), key=lambda rec: rec.created_at, reverse=True)
        if genre is not None:
            recs = [rec for rec in recs if rec.genre == genre]
        return recs[:limit] if limit is not None else recs

    def exists_for_user(self, user_id: str) -> bool:
        return any(rec.user_id == user_id for rec in self.rows.values())

    def add(
        self,
        user_id: str,
        *,
        title: str = "Heat",
        genre: str = "action",
        username: str = "someone",
        is_staff_pick: bool = False,
    ) -> Recommendation:
        return self.insert(
            NewRecommendation(
                title=title,
                genre=genre,
                link="https://www.imdb.com/title/tt0113277/",
                blurb="Best shootout ever filmed.",
                user_id=user_id,
                username=username,
                is_staff_pick=is_staff_pick,
            )
        )


class UserRoleRepositoryStub(UserRoleRepository):
    def __init__(self) -> None:
        self.rows: dict[str, UserRole] = {}
        self.upserts: list[tuple[str, Role]] = []

    def get(self, user_id: str) -> Optional[UserRole]:
        return self.rows.get(user_id)

    def list_admin_ids(self) -> set[str]:
        return {row.user_id for row in self.rows.values() if row.is_admin}

    def upsert(self, user_id: str, role: Role) -> UserRole:
        self.upserts.append((user_id, role))
        row = self.rows.get(user_id)
        if row is not None:
            row.role = role
        else:
            row = UserRole(user_id=user_id, role=role)
            self.rows[user_id] = row
        return row


class QueryStub:
    """Chainable stand-in for a PostgREST query builder."""

    def __init__(self, client: "SupabaseClientStub", target: str) -> None:
        self.client = client
        self.target = target
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def __getattr__(self, name: str):
        def method(*args: Any, **kwargs: Any) -> "QueryStub":
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self) -> SimpleNamespace:
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.responses.pop(0) if self.client.responses else [])


class SupabaseClientStub:
    def __init__(self) -> None:
        self.queries: list[QueryStub] = []
        self.responses: list[list[dict[str, Any]]] = []
        self.error: Exception | None = None

    def table(self, name: str) -> QueryStub:
        query = QueryStub(self, name)
        self.queries.append(query)
        return query

    def rpc(self, name: str, params: dict[str, Any]) -> QueryStub:
        query = QueryStub(self, name)
        query.calls.append(("rpc", (name, params), {}))
        self.queries.append(query)
        return query


@pytest.fixture
def recommendation_repo() -> RecommendationRepositoryStub:
    return RecommendationRepositoryStub()


@pytest.fixture
def user_repo() -> UserRoleRepositoryStub:
    return UserRoleRepositoryStub()


@pytest.fixture
def service(
    recommendation_repo: RecommendationRepositoryStub,
    user_repo: UserRoleRepositoryStub,
) -> RecommendationService:
    return RecommendationService(recommendations=recommendation_repo, users=user_repo, public_list_limit=3)


@pytest.fixture
def seed_service(
    recommendation_repo: RecommendationRepositoryStub,
    user_repo: UserRoleRepositoryStub,
) -> SeedService:
    return SeedService(recommendations=recommendation_repo, users=user_repo)


@pytest.fixture
def supabase_client() -> SupabaseClientStub:
    return SupabaseClientStub()
