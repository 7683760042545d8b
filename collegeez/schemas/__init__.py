"""
Schemas module - Request/Response schemas for API endpoints.
"""
from collegeez.schemas.schemas import (
    CollegeRatingResponse,
    TopCollegeResponse,
    CollegeReviewsResponse,
    ResearchPapersResponse,
    StudentCreate,
    InsertResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "CollegeRatingResponse",
    "TopCollegeResponse",
    "CollegeReviewsResponse",
    "ResearchPapersResponse",
    "StudentCreate",
    "InsertResponse",
    "HealthResponse",
    "ErrorResponse",
]
