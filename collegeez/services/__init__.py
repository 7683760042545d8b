"""
Services - MongoDB access and the aggregation pipelines behind each view.
"""
from collegeez.services.mongo_service import (
    CollegeService,
    StudentService,
    get_college_service,
    get_student_service,
)

__all__ = [
    "CollegeService",
    "StudentService",
    "get_college_service",
    "get_student_service",
]
