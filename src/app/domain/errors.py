from __future__ import annotations


class HypeShelfError(Exception):
    pass


class UnauthenticatedError(HypeShelfError):
    def __init__(self, message: str = "Unauthenticated"):
        super().__init__(message)


class ForbiddenError(HypeShelfError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class RecommendationNotFoundError(HypeShelfError):
    def __init__(self, recommendation_id: str):
        super().__init__(f"Recommendation not found: {recommendation_id}")
        self.recommendation_id = recommendation_id


class RepositoryError(HypeShelfError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Repository error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
