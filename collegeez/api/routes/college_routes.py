"""
College Routes

GET /all - Raw college documents
GET /colleges - Average rating for every college
GET /topCollege - Three best rated colleges
GET /reviews - Rating and reviews per reviewed college
GET /researchPapers - Research papers per college
GET /search?name= - Case-insensitive name search
GET /college/{collegeId} - Average rating view for one college

Handlers are sync so FastAPI runs them in its threadpool;
pymongo calls block and must stay off the event loop.
"""

from fastapi import APIRouter, Query
from typing import List

from collegeez.services.mongo_service import get_college_service
from collegeez.schemas.schemas import (
    CollegeRatingResponse, TopCollegeResponse, CollegeReviewsResponse,
    ResearchPapersResponse, ErrorResponse
)

router = APIRouter(tags=["Colleges"])


@router.get("/all")
def get_all_colleges():
    """Every college document, unprocessed."""
    return get_college_service().get_all()


@router.get("/colleges", response_model=List[CollegeRatingResponse])
def get_colleges():
    """
    Colleges with their average rating.

    averageRating is 0 for a college without reviews.
    """
    return get_college_service().get_average_ratings()


@router.get("/topCollege", response_model=List[TopCollegeResponse])
def get_top_colleges():
    """
    Top 3 colleges by average rating, ties broken by review count.

    Colleges without reviews are not ranked.
    """
    return get_college_service().get_top_colleges()


@router.get("/reviews", response_model=List[CollegeReviewsResponse])
def get_reviews():
    """All reviews grouped by college, with the college's mean rating."""
    return get_college_service().get_reviews()


@router.get("/researchPapers", response_model=List[ResearchPapersResponse])
def get_research_papers():
    return get_college_service().get_research_papers()


@router.get("/search")
def search_colleges(name: str = Query("", description="Part of the college name")):
    """Colleges whose name contains `name`, ignoring case."""
    return get_college_service().search_by_name(name)


@router.get(
    "/college/{collegeId}",
    response_model=CollegeRatingResponse,
    responses={404: {"model": ErrorResponse}}
)
def get_college(collegeId: str):
    """Single college with its average rating."""
    return get_college_service().get_by_id(collegeId)
