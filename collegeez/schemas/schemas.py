"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Stored documents have no enforced schema, so loosely typed fields
(dates, counts, embedded records) are accepted as-is.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any, Dict


# ============================================================
# COLLEGE SCHEMAS
# ============================================================

class CollegeRatingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    collegeName: Optional[str] = None
    collegeImage: Optional[str] = None
    admissionDate: Optional[Any] = None
    researchCount: Optional[Any] = None
    totalReviews: int = 0
    totalRatings: float = 0
    averageRating: float = 0

class TopCollegeResponse(BaseModel):
    id: str
    collegeName: Optional[str] = None
    collegeImage: Optional[str] = None
    admissionDate: Optional[Any] = None
    collegeAvgRating: float
    totalReviews: int
    events: Optional[List[Any]] = None
    researchPapers: Optional[List[Any]] = None
    sportsFacilities: Optional[List[Any]] = None

class CollegeReviewsResponse(BaseModel):
    id: str
    collegeName: Optional[str] = None
    logo: Optional[str] = None
    collegeRating: float
    events: Optional[List[Any]] = None
    reviews: List[Any] = []

class ResearchPapersResponse(BaseModel):
    id: str
    collegeName: Optional[str] = None
    researchPapers: List[Any] = []


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentCreate(BaseModel):
    """Any extra fields the client sends are stored with the student."""
    model_config = ConfigDict(extra="allow")

    email: str
    college: Optional[str] = None

class InsertResponse(BaseModel):
    acknowledged: bool
    insertedId: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class HealthResponse(BaseModel):
    status: str
    mongodb: str

class ErrorResponse(BaseModel):
    detail: str
    code: str
    details: Optional[Dict[str, Any]] = None
