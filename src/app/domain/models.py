# src/app/domain/models.py
"""
Domain models for recommendations and user roles.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional


GENRES = ("horror", "action", "comedy", "drama", "sci-fi", "documentary")

# Genre filter value meaning "every genre"
ALL_GENRES = "all"

ANONYMOUS_USERNAME = "Anonymous"


class Role(str, Enum):
    """Privilege level stored in the users table."""
    ADMIN = "admin"
    USER = "user"


@dataclass
class Recommendation:
    """A movie recommendation posted by a user."""
    id: str
    title: str
    genre: str
    link: str
    blurb: str
    user_id: str
    username: str
    is_staff_pick: bool = False
    created_at: Optional[datetime] = None

    def with_staff_pick(self, value: bool) -> Recommendation:
        """Copy of this recommendation carrying a different staff-pick flag."""
        return replace(self, is_staff_pick=value)


@dataclass
class NewRecommendation:
    """Fields needed to insert a recommendation; the store assigns id and timestamp."""
    title: str
    genre: str
    link: str
    blurb: str
    user_id: str
    username: str
    is_staff_pick: bool = False


@dataclass
class UserRole:
    """Role row keyed by the identity provider's subject."""
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class VerifiedCaller:
    """
    Trusted identity of the caller, produced by the transport after the
    identity provider verified the session token.
    """
    subject: str
    name: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.nickname or ANONYMOUS_USERNAME


@dataclass(frozen=True)
class ResolvedCaller:
    """Caller identity plus the role read from the users table."""
    user_id: str
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass
class SeedResult:
    """Outcome of the sample-data seeding command."""
    skipped: bool
    count: int


@dataclass
class BackfillResult:
    """Outcome of the staff-pick backfill command."""
    updated: int
