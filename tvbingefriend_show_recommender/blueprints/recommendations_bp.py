"""Get recommendations for a set of liked shows."""
import azure.functions as func
import logging
import json

from tvbingefriend_show_recommender import __version__
from tvbingefriend_show_recommender.config import get_default_page_size, get_max_page_size
from tvbingefriend_show_recommender.exceptions import CatalogUnavailableError, InvalidInputError
from tvbingefriend_show_recommender.services import RecommendationService

# Initialize blueprint
bp = func.Blueprint()

# Initialize service (singleton pattern)
recommendation_service = RecommendationService()

logger = logging.getLogger(__name__)


def _error_response(message: str, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"error": message}),
        status_code=status_code,
        mimetype="application/json"
    )


def _parse_int(value, name: str) -> int:
    """Parse an integer body field, accepting whole-number strings such as "2"."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().removeprefix("-").isdecimal():
        return int(value)
    raise InvalidInputError(f"{name} must be an integer")


def parse_recommendation_body(body) -> tuple[list[int], int, int]:
    """
    Validate a recommendations request body.

    Args:
        body: Decoded JSON body, e.g. {"shows": [1, 2], "page": 1, "limit": 6}

    Returns:
        (show_ids, page, limit) tuple

    Raises:
        InvalidInputError: If the body is malformed
    """
    if not isinstance(body, dict):
        raise InvalidInputError("Request body must be a JSON object")

    show_ids = body.get("shows")
    if not isinstance(show_ids, list) or not show_ids:
        raise InvalidInputError("shows must be a non-empty list of show IDs")
    if not all(isinstance(show_id, int) and not isinstance(show_id, bool) for show_id in show_ids):
        raise InvalidInputError("shows must contain only integers")

    page = _parse_int(body.get("page", 1), "page")
    if page < 1:
        raise InvalidInputError("page must be at least 1")

    max_limit = get_max_page_size()
    limit = _parse_int(body.get("limit", get_default_page_size()), "limit")
    if limit < 1 or limit > max_limit:
        raise InvalidInputError(f"limit must be between 1 and {max_limit}")

    return show_ids, page, limit


@bp.route(route="shows/recommendations", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def get_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get recommendations for the shows a user likes.

    JSON body:
        - shows: List of liked show IDs (required)
        - page: Page number (default: 1)
        - limit: Recommendations per page (default: 6, max: 24)
    """
    try:
        try:
            body = req.get_json()
        except ValueError:
            return _error_response("Request body must be valid JSON", 400)

        try:
            show_ids, page, limit = parse_recommendation_body(body)
        except InvalidInputError as e:
            return _error_response(str(e), 400)

        offset = (page - 1) * limit

        # One extra item tells us whether another page exists
        recommendations = recommendation_service.get_recommendations(
            show_ids,
            limit=limit + 1,
            offset=offset
        )

        has_more = len(recommendations) > limit
        if has_more:
            recommendations = recommendations[:limit]

        response = {
            "shows": [recommendation.to_dict() for recommendation in recommendations],
            "hasMore": has_more,
            "page": page
        }

        return func.HttpResponse(
            json.dumps(response, default=str),  # default=str handles dates
            status_code=200,
            mimetype="application/json"
        )

    except InvalidInputError as e:
        return _error_response(str(e), 400)

    except CatalogUnavailableError as e:
        logger.error(f"Catalog unavailable: {str(e)}", exc_info=True)
        return _error_response("Show catalog unavailable", 503)

    except Exception as e:
        logger.error(f"Error getting recommendations: {str(e)}", exc_info=True)
        return _error_response("Internal server error", 500)


# noinspection PyUnusedLocal
@bp.route(route="recommendations/health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint."""
    return func.HttpResponse(
        json.dumps({
            "status": "healthy",
            "service": "tv-show-recommender",
            "version": __version__
        }),
        status_code=200,
        mimetype="application/json"
    )
