"""
Student Routes

GET /students/{email} - Student with their college's logo
POST /updateUser - Register a student
"""

from fastapi import APIRouter

from collegeez.services.mongo_service import get_student_service
from collegeez.schemas.schemas import StudentCreate, InsertResponse, ErrorResponse

router = APIRouter(tags=["Students"])


@router.get("/students/{email}", responses={404: {"model": ErrorResponse}})
def get_student(email: str):
    """
    Fetch a student by email.

    Adds `logo` when a college named like the student's `college` exists.
    """
    return get_student_service().get_by_email(email)


@router.post("/updateUser", response_model=InsertResponse, responses={409: {"model": ErrorResponse}})
def register_student(data: StudentCreate):
    """Register a student. Fails with 409 if the email is taken."""
    return get_student_service().register(data.model_dump(exclude_unset=True))
