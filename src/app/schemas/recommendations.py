# src/app/schemas/recommendations.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.app.domain.models import Recommendation

RoleName = Literal["admin", "user"]


class RecommendationResponse(BaseModel):
    id: str
    title: str
    genre: str
    link: str
    blurb: str
    userId: str
    username: str
    isStaffPick: bool = False
    createdAt: Optional[str] = None

    @classmethod
    def from_domain(cls, rec: Recommendation) -> RecommendationResponse:
        return cls(
            id=rec.id,
            title=rec.title,
            genre=rec.genre,
            link=rec.link,
            blurb=rec.blurb,
            userId=rec.user_id,
            username=rec.username,
            isStaffPick=rec.is_staff_pick,
            createdAt=rec.created_at.isoformat() if rec.created_at else None,
        )


class RecommendationCreate(BaseModel):
    # Unknown keys (userId, username, isStaffPick...) are dropped by pydantic
    title: str
    genre: str
    link: str
    blurb: str


class RecommendationCreated(BaseModel):
    id: str


class GenreList(BaseModel):
    genres: list[str] = Field(default_factory=list)
    allGenres: str


class RoleResponse(BaseModel):
    role: Optional[RoleName] = None


class SetRoleRequest(BaseModel):
    role: RoleName


class MeResponse(BaseModel):
    id: str
    username: str
    role: RoleName
    email: Optional[str] = None
