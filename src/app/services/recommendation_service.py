# src/app/services/recommendation_service.py
"""
Access policy for recommendations and user roles.
Every role decision is made here from the users table, never from request data.
"""
from __future__ import annotations

import logging
from typing import Optional

from src.app.domain.errors import (
    ForbiddenError,
    RecommendationNotFoundError,
    UnauthenticatedError,
)
from src.app.domain.models import (
    ALL_GENRES,
    NewRecommendation,
    Recommendation,
    ResolvedCaller,
    Role,
    VerifiedCaller,
)
from src.app.infra.db.base import RecommendationRepository, UserRoleRepository

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_LIST_LIMIT = 50


class RecommendationService:
    """
    Service enforcing who may read, create, delete and promote records.

    Responsibilities:
    - Resolve the caller's role from the users table
    - Annotate listings with the live "author is admin" flag
    - Gate mutations on authentication, ownership and admin role
    """

    def __init__(
        self,
        recommendations: RecommendationRepository,
        users: UserRoleRepository,
        public_list_limit: int = DEFAULT_PUBLIC_LIST_LIMIT,
    ):
        self._recommendations = recommendations
        self._users = users
        self.public_list_limit = public_list_limit

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def resolve_role(self, user_id: str) -> Role:
        row = self._users.get(user_id)
        return row.role if row else Role.USER

    def require_auth(self, caller: Optional[VerifiedCaller]) -> ResolvedCaller:
        """
        Resolve the verified caller into {user_id, username, role}.

        A subject with no role row is a plain user, not an error.

        Raises:
            UnauthenticatedError: If there is no verified caller
        """
        if caller is None:
            raise UnauthenticatedError()

        return ResolvedCaller(
            user_id=caller.subject,
            username=caller.display_name,
            role=self.resolve_role(caller.subject),
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_public(self) -> list[Recommendation]:
        """Latest recommendations for the landing page."""
        recs = self._recommendations.list_recent(limit=self.public_list_limit)
        return self._with_live_staff_picks(recs)

    def list_all(
        self,
        genre: Optional[str] = None,
        author: Optional[str] = None,
    ) -> list[Recommendation]:
        """
        Every recommendation, most recent first.

        Args:
            genre: Exact genre to keep; None or "all" keeps every genre
            author: Case-insensitive substring of the author's username
        """
        genre_filter = genre if genre and genre != ALL_GENRES else None
        recs = self._recommendations.list_recent(genre=genre_filter)

        needle = (author or "").strip().lower()
        if needle:
            recs = [rec for rec in recs if needle in rec.username.lower()]

        return self._with_live_staff_picks(recs)

    def get_my_role(self, caller: Optional[VerifiedCaller]) -> Optional[Role]:
        if caller is None:
            return None
        return self.resolve_role(caller.subject)

    def _with_live_staff_picks(self, recs: list[Recommendation]) -> list[Recommendation]:
        # Display flag follows the author's current role, stored flag is left alone
        admin_ids = self._users.list_admin_ids()
        return [rec.with_staff_pick(rec.user_id in admin_ids) for rec in recs]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(
        self,
        caller: Optional[VerifiedCaller],
        *,
        title: str,
        genre: str,
        link: str,
        blurb: str,
    ) -> str:
        """
        Create a recommendation authored by the caller.

        Returns:
            The new recommendation id

        Raises:
            UnauthenticatedError: If there is no verified caller
        """
        resolved = self.require_auth(caller)

        rec = self._recommendations.insert(
            NewRecommendation(
                title=title,
                genre=genre,
                link=link,
                blurb=blurb,
                user_id=resolved.user_id,
                username=resolved.username,
                is_staff_pick=resolved.is_admin,
            )
        )
        logger.info(
            "Recommendation created: id=%s, user=%s, staff_pick=%s",
            rec.id,
            resolved.user_id,
            rec.is_staff_pick,
        )
        return rec.id

    def remove(self, caller: Optional[VerifiedCaller], recommendation_id: str) -> None:
        """
        Delete a recommendation. Admins may delete any, users only their own.

        Raises:
            UnauthenticatedError: If there is no verified caller
            RecommendationNotFoundError: If the id does not exist
            ForbiddenError: If the caller is neither admin nor owner
        """
        resolved = self.require_auth(caller)

        rec = self._recommendations.get(recommendation_id)
        if rec is None:
            raise RecommendationNotFoundError(recommendation_id)

        if not resolved.is_admin and rec.user_id != resolved.user_id:
            logger.warning(
                "Delete denied: user=%s attempted to delete recommendation %s owned by %s",
                resolved.user_id,
                recommendation_id,
                rec.user_id,
            )
            raise ForbiddenError("Forbidden: you can only delete your own recommendations")

        self._recommendations.delete(recommendation_id)
        logger.info("Recommendation deleted: id=%s, by=%s", recommendation_id, resolved.user_id)

    def toggle_staff_pick(self, caller: Optional[VerifiedCaller], recommendation_id: str) -> None:
        """
        Flip the stored staff-pick flag. Admin only.

        Raises:
            UnauthenticatedError: If there is no verified caller
            ForbiddenError: If the caller is not an admin
            RecommendationNotFoundError: If the id does not exist
        """
        resolved = self.require_auth(caller)
        if not resolved.is_admin:
            logger.warning("Staff pick toggle denied: user=%s", resolved.user_id)
            raise ForbiddenError("Forbidden: only admins can set Staff Picks")

        rec = self._recommendations.toggle_staff_pick(recommendation_id)
        if rec is None:
            raise RecommendationNotFoundError(recommendation_id)

        logger.info(
            "Staff pick toggled: id=%s, value=%s, by=%s",
            recommendation_id,
            rec.is_staff_pick,
            resolved.user_id,
        )

    def set_role(self, caller: Optional[VerifiedCaller], user_id: str, role: Role) -> None:
        """
        Assign a role to a user. Admin only, so nobody can promote themselves.

        Raises:
            UnauthenticatedError: If there is no verified caller
            ForbiddenError: If the caller is not an admin
        """
        resolved = self.require_auth(caller)
        if not resolved.is_admin:
            logger.warning("Role change denied: user=%s, target=%s", resolved.user_id, user_id)
            raise ForbiddenError("Forbidden: only admins can assign roles")

        self._users.upsert(user_id, Role(role))
        logger.info("Role assigned: target=%s, role=%s, by=%s", user_id, Role(role).value, resolved.user_id)
