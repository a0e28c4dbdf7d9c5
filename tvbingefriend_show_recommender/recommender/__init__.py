"""Candidate selection, similarity scoring and ranking."""

from .candidate_selector import CandidateSelector, ShowCatalog
from .ranker import rank
from .schemas import CRITERIA, GenreRef, PersonRole, RecommendedShow, ScoredCandidate, ShowSnapshot
from .similarity_scorer import SeedProfile, SimilarityScorer

__all__ = [
    "CRITERIA",
    "CandidateSelector",
    "GenreRef",
    "PersonRole",
    "RecommendedShow",
    "ScoredCandidate",
    "SeedProfile",
    "ShowCatalog",
    "ShowSnapshot",
    "SimilarityScorer",
    "rank",
]
