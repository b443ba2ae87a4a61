# src/app/infra/db/base.py
"""
Abstract base classes for the two HypeShelf tables.
The policy layer only talks to these interfaces, so the backing store can be swapped.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from src.app.domain.models import NewRecommendation, Recommendation, Role, UserRole


class RecommendationRepository(ABC):
    """
    Abstract interface for the recommendations table.

    Implementations:
    - SupabaseRecommendationRepository: Postgres table via Supabase
    """

    @abstractmethod
    def insert(self, recommendation: NewRecommendation) -> Recommendation:
        """
        Store a new recommendation.

        Args:
            recommendation: Fields of the new row

        Returns:
            The stored Recommendation, including its generated id
        """
        pass

    @abstractmethod
    def insert_many(self, recommendations: list[NewRecommendation]) -> list[Recommendation]:
        """
        Store several recommendations in a single write.

        Either every row is stored or none is.

        Args:
            recommendations: Fields of the new rows, oldest first

        Returns:
            The stored Recommendations
        """
        pass

    @abstractmethod
    def get(self, recommendation_id: str) -> Optional[Recommendation]:
        """
        Point lookup by id.

        Returns:
            The recommendation, or None if it does not exist
        """
        pass

    @abstractmethod
    def delete(self, recommendation_id: str) -> None:
        """Permanently remove a recommendation."""
        pass

    @abstractmethod
    def set_staff_pick(self, recommendation_id: str, value: bool) -> None:
        """Patch the stored staff-pick flag of one recommendation."""
        pass

    @abstractmethod
    def toggle_staff_pick(self, recommendation_id: str) -> Optional[Recommendation]:
        """
        Flip the stored staff-pick flag in one statement.

        Returns:
            The updated recommendation, or None if it does not exist
        """
        pass

    @abstractmethod
    def list_recent(
        self,
        limit: Optional[int] = None,
        genre: Optional[str] = None,
    ) -> list[Recommendation]:
        """
        List recommendations ordered most recent first.

        Args:
            limit: Max rows to return (None = unbounded)
            genre: Exact-match genre filter (None = every genre)

        Returns:
            List of recommendations
        """
        pass

    @abstractmethod
    def exists_for_user(self, user_id: str) -> bool:
        """Check whether any recommendation was authored by the given subject."""
        pass


class UserRoleRepository(ABC):
    """
    Abstract interface for the users (role) table.
    """

    @abstractmethod
    def get(self, user_id: str) -> Optional[UserRole]:
        """
        Point lookup by identity subject.

        Returns:
            The role row, or None if the subject was never assigned a role
        """
        pass

    @abstractmethod
    def list_admin_ids(self) -> set[str]:
        """Subjects whose stored role is admin."""
        pass

    @abstractmethod
    def upsert(self, user_id: str, role: Role) -> UserRole:
        """
        Write the role row in one statement, replacing any existing role for the user.

        Args:
            user_id: Identity subject
            role: Role to store

        Returns:
            The stored row
        """
        pass
