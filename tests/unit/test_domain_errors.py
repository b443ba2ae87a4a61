from __future__ import annotations

from src.app.domain.errors import (
    ForbiddenError,
    HypeShelfError,
    RecommendationNotFoundError,
    RepositoryError,
    UnauthenticatedError,
)


class TestHypeShelfError:
    def test_base_exception(self) -> None:
        error = HypeShelfError("Base error")
        assert str(error) == "Base error"
        assert isinstance(error, Exception)


class TestUnauthenticatedError:
    def test_default_message(self) -> None:
        assert str(UnauthenticatedError()) == "Unauthenticated"


class TestForbiddenError:
    def test_default_message(self) -> None:
        assert str(ForbiddenError()) == "Forbidden"

    def test_custom_message(self) -> None:
        error = ForbiddenError("Forbidden: only admins can assign roles")
        assert "only admins" in str(error)


class TestRecommendationNotFoundError:
    def test_includes_recommendation_id(self) -> None:
        error = RecommendationNotFoundError("abc-123")
        assert "abc-123" in str(error)
        assert error.recommendation_id == "abc-123"


class TestRepositoryError:
    def test_includes_operation_and_reason(self) -> None:
        error = RepositoryError("list_admins", "Connection refused")
        assert "list_admins" in str(error)
        assert "Connection refused" in str(error)
        assert error.operation == "list_admins"
        assert error.reason == "Connection refused"


class TestExceptionHierarchy:
    def test_all_errors_inherit_from_hypeshelf_error(self) -> None:
        assert issubclass(UnauthenticatedError, HypeShelfError)
        assert issubclass(ForbiddenError, HypeShelfError)
        assert issubclass(RecommendationNotFoundError, HypeShelfError)
        assert issubclass(RepositoryError, HypeShelfError)
