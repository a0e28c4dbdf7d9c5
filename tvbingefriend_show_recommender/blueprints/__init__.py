"""Azure Functions blueprints"""

from tvbingefriend_show_recommender.blueprints.recommendations_bp import bp as recommendations_bp

__all__ = ["recommendations_bp"]
