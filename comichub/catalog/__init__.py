"""Catalog: recommendations, reviews, votes, saves and reports."""

from comichub.catalog.engagement_service import EngagementService
from comichub.catalog.recommendation_service import RecommendationService
from comichub.catalog.report_service import ReportService
from comichub.catalog.review_service import ReviewService

__all__ = [
    "EngagementService",
    "RecommendationService",
    "ReportService",
    "ReviewService",
]
