from __future__ import annotations

from datetime import datetime, timezone

from src.app.domain.models import (
    ALL_GENRES,
    GENRES,
    Recommendation,
    ResolvedCaller,
    Role,
    UserRole,
    VerifiedCaller,
)


class TestRole:
    def test_role_values(self) -> None:
        assert Role.ADMIN.value == "admin"
        assert Role.USER.value == "user"

    def test_role_is_string_enum(self) -> None:
        assert isinstance(Role.ADMIN, str)
        assert Role("admin") is Role.ADMIN


class TestGenres:
    def test_vocabulary(self) -> None:
        assert GENRES == ("horror", "action", "comedy", "drama", "sci-fi", "documentary")
        assert ALL_GENRES not in GENRES


class TestRecommendation:
    def test_with_staff_pick_returns_copy(self) -> None:
        rec = Recommendation(
            id="r1",
            title="Alien",
            genre="horror",
            link="https://www.imdb.com/title/tt0078748/",
            blurb="Classic.",
            user_id="alice",
            username="Alice",
            created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )

        flagged = rec.with_staff_pick(True)

        assert flagged.is_staff_pick is True
        assert rec.is_staff_pick is False
        assert flagged.id == rec.id
        assert flagged.created_at == rec.created_at


class TestVerifiedCaller:
    def test_display_name_prefers_name(self) -> None:
        caller = VerifiedCaller(subject="s", name="Name", nickname="nick")
        assert caller.display_name == "Name"

    def test_display_name_falls_back_to_nickname(self) -> None:
        assert VerifiedCaller(subject="s", nickname="nick").display_name == "nick"

    def test_display_name_defaults_to_anonymous(self) -> None:
        assert VerifiedCaller(subject="s").display_name == "Anonymous"


class TestRoleHolders:
    def test_user_role_is_admin(self) -> None:
        assert UserRole(user_id="a", role=Role.ADMIN).is_admin is True
        assert UserRole(user_id="a", role=Role.USER).is_admin is False

    def test_resolved_caller_is_admin(self) -> None:
        assert ResolvedCaller(user_id="a", username="A", role=Role.ADMIN).is_admin is True
        assert ResolvedCaller(user_id="a", username="A", role=Role.USER).is_admin is False
