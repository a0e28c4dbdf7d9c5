"""
Print recommendations for a set of liked shows.

Usage:
    python scripts/recommend.py 169 82
    python scripts/recommend.py 169 82 --limit 5 --offset 5
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging

from tvbingefriend_show_recommender.exceptions import RecommendationError
from tvbingefriend_show_recommender.recommender import CRITERIA, RecommendedShow
from tvbingefriend_show_recommender.services import RecommendationService

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def format_recommendation(position: int, recommendation: RecommendedShow) -> str:
    """Render one recommendation as a few lines of text."""
    show = recommendation.show
    criteria = ", ".join(
        f"{criterion}={recommendation.criteria_scores[criterion]}" for criterion in CRITERIA
    )
    lines = [f"{position:>3}. {show.name} (id={show.id}) - match {recommendation.match_score}%"]
    lines.extend(f"       - {reason}" for reason in recommendation.recommendation_reasons)
    lines.append(f"       [{criteria}]")
    return "\n".join(lines)


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(description="Recommend shows similar to the given shows")
    parser.add_argument("seed_ids", type=int, nargs="+", help="IDs of shows you like")
    parser.add_argument(
        "--limit", type=int, default=10, help="Number of recommendations (default: 10)"
    )
    parser.add_argument(
        "--offset", type=int, default=0, help="Number of top recommendations to skip (default: 0)"
    )

    args = parser.parse_args()

    service = RecommendationService()

    try:
        recommendations = service.get_recommendations(
            args.seed_ids, limit=args.limit, offset=args.offset
        )
    except RecommendationError as e:
        logger.error(f"Could not get recommendations: {str(e)}")
        sys.exit(1)

    if not recommendations:
        logger.info("No recommendations found for these shows")
        return recommendations

    for position, recommendation in enumerate(recommendations, start=args.offset + 1):
        logger.info("\n" + format_recommendation(position, recommendation))

    return recommendations


if __name__ == "__main__":
    main()
