"""
Create the show catalog tables and optionally load shows from a JSON file.

Usage:
    python scripts/init_database.py
    python scripts/init_database.py --catalog-file data/catalog.json

The catalog file holds a list of show dicts as accepted by
CatalogRepository.store_show (show columns plus "genres" and "people").
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import json
import logging
from datetime import date

from tvbingefriend_show_recommender.models import Base
from tvbingefriend_show_recommender.models.database import SessionLocal, engine
from tvbingefriend_show_recommender.repos import CatalogRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def load_catalog_file(path: Path) -> list[dict]:
    """
    Read show records from a JSON file.

    Args:
        path: Path to a JSON list of show dicts

    Returns:
        List of show dicts with premiered dates parsed
    """
    with open(path) as f:
        shows = json.load(f)

    if not isinstance(shows, list):
        raise ValueError(f"{path} must contain a JSON list of shows")

    for show in shows:
        if show.get("premiered"):
            show["premiered"] = date.fromisoformat(show["premiered"])

    return shows


def load_catalog(shows: list[dict]) -> int:
    """
    Store shows in the catalog.

    Args:
        shows: Show dicts

    Returns:
        Number of shows in the catalog afterwards
    """
    db = SessionLocal()
    try:
        repo = CatalogRepository(db)
        for i, show in enumerate(shows, start=1):
            repo.store_show(show)
            if i % 100 == 0:
                logger.info(f"  Stored {i}/{len(shows)} shows...")
        return repo.count_shows()
    finally:
        db.close()


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(description="Create the show catalog tables")
    parser.add_argument(
        "--catalog-file",
        type=str,
        default=None,
        help="JSON file with shows to load into the catalog",
    )

    args = parser.parse_args()

    logger.info("=" * 70)
    logger.info("INITIALIZING SHOW CATALOG")
    logger.info("=" * 70)

    try:
        Base.metadata.create_all(engine)
        logger.info(f"✓ Created tables: {', '.join(sorted(Base.metadata.tables))}")

        if args.catalog_file:
            shows = load_catalog_file(Path(args.catalog_file))
            logger.info(f"Loaded {len(shows)} shows from {args.catalog_file}")
            total = load_catalog(shows)
            logger.info(f"✓ Catalog now holds {total} shows")

    except Exception as e:
        logger.error(f"Error initializing catalog: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
