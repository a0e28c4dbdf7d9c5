"""Repository classes"""

from tvbingefriend_show_recommender.repos.catalog_repository import CatalogRepository

__all__ = [
    "CatalogRepository",
]
