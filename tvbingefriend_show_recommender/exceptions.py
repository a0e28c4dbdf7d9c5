"""Errors raised by the recommendation core."""


class RecommendationError(Exception):
    """Base class for recommendation errors."""


class InvalidInputError(RecommendationError, ValueError):
    """Seed ids, limit or offset are malformed."""


class CatalogUnavailableError(RecommendationError):
    """The show catalog could not be queried."""
