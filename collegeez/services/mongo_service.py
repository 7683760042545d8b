"""
MongoDB Service - queries and writes for the two collections.

Collections in this database:
1. colleges - college documents with embedded reviews, events,
               research papers and sports facilities
2. students - registered students; `college` holds a college NAME,
               not an id, so the logo lookup is a name match

Derived views are aggregation pipelines built in
collegeez.services.pipelines and evaluated by MongoDB.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from collegeez.core.exceptions import (
    CollegeNotFoundError,
    InvalidCollegeIdError,
    StudentAlreadyExistsError,
    StudentNotFoundError,
)
from collegeez.db.mongodb import COLLECTIONS, ensure_email_index, get_collection
from collegeez.services import pipelines

logger = logging.getLogger(__name__)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def _json_safe(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    return _json_safe(doc)


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# COLLEGES COLLECTION
# ============================================================

class CollegeService:
    """
    Read-only access to colleges and the views derived from them.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["colleges"])

    def get_all(self) -> List[dict]:
        """Raw college documents, newest first."""
        cursor = self.collection.find().sort([("createdAt", -1), ("_id", 1)])
        return serialize_docs(list(cursor))

    def get_average_ratings(self) -> List[dict]:
        """Average rating, review count and rating sum for every college."""
        docs = self.collection.aggregate(pipelines.average_rating_pipeline())
        return serialize_docs(list(docs))

    def get_top_colleges(self, limit: int = pipelines.TOP_COLLEGE_LIMIT) -> List[dict]:
        """Best rated colleges; unreviewed colleges are not ranked."""
        docs = self.collection.aggregate(pipelines.top_colleges_pipeline(limit))
        return serialize_docs(list(docs))

    def get_reviews(self) -> List[dict]:
        """Rating and full review list for every reviewed college."""
        docs = self.collection.aggregate(pipelines.reviews_pipeline())
        return serialize_docs(list(docs))

    def get_research_papers(self) -> List[dict]:
        docs = self.collection.aggregate(pipelines.research_papers_pipeline())
        return serialize_docs(list(docs))

    def get_by_id(self, college_id: str) -> dict:
        """
        Average rating view for a single college.

        Raises:
            InvalidCollegeIdError: college_id is not an ObjectId
            CollegeNotFoundError: no college has that id
        """
        try:
            oid = ObjectId(college_id)
        except (InvalidId, TypeError):
            raise InvalidCollegeIdError(college_id)

        docs = list(self.collection.aggregate(
            pipelines.average_rating_pipeline(match={"_id": oid})
        ))
        if not docs:
            raise CollegeNotFoundError(college_id)
        return serialize_doc(docs[0])

    def search_by_name(self, term: str) -> List[dict]:
        """Case-insensitive substring match on collegeName."""
        query = {"collegeName": {"$regex": re.escape(term or ""), "$options": "i"}}
        return serialize_docs(list(self.collection.find(query)))

    def get_logo(self, college_name: str) -> Optional[str]:
        """Image of the college with exactly this name, if any."""
        doc = self.collection.find_one(
            {"collegeName": college_name},
            {"collegeImage": 1}
        )
        if doc:
            return doc.get("collegeImage")
        return None


# ============================================================
# STUDENTS COLLECTION
# ============================================================

class StudentService:
    """
    Student registration and lookup.

    Email uniqueness relies on the unique index on students.email,
    ensured before every insert. The email pre-check still rejects
    duplicates while that index cannot be built.
    """

    def __init__(self, collection: Optional[Collection] = None, colleges: Optional[CollegeService] = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["students"])
        self.colleges = colleges or CollegeService()

    def register(self, payload: Dict[str, Any]) -> dict:
        """
        Insert a new student.

        createdAt is always set here, overriding anything the client sent.
        A client-supplied _id is dropped; MongoDB assigns one.

        Returns:
            {"acknowledged": bool, "insertedId": str}

        Raises:
            StudentAlreadyExistsError: the email is already registered
            DuplicateKeyError: some other unique index rejected the insert
        """
        doc = dict(payload)
        doc.pop("_id", None)
        doc["createdAt"] = datetime.now(timezone.utc)
        email = doc.get("email")

        ensure_email_index(self.collection)
        if self.collection.find_one({"email": email}, {"_id": 1}) is not None:
            logger.info(f"Registration rejected, email already exists: {email}")
            raise StudentAlreadyExistsError(email)

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            if not self._is_email_conflict(e, email):
                raise
            logger.info(f"Registration rejected, email already exists: {email}")
            raise StudentAlreadyExistsError(email)

        logger.info(f"Registered student {result.inserted_id}")
        return {
            "acknowledged": result.acknowledged,
            "insertedId": str(result.inserted_id),
        }

    def _is_email_conflict(self, error: DuplicateKeyError, email: Optional[str]) -> bool:
        """Whether a duplicate key error came from the email index."""
        key_pattern = (error.details or {}).get("keyPattern")
        if key_pattern is not None:
            return "email" in key_pattern
        # Older servers omit keyPattern
        return self.collection.find_one({"email": email}, {"_id": 1}) is not None

    def get_by_email(self, email: str) -> dict:
        """
        Fetch a student plus the logo of the college they named.

        `logo` is only present when a college with that exact name exists
        and has an image.
        """
        student = self.collection.find_one({"email": email})
        if student is None:
            raise StudentNotFoundError(email)

        college_name = student.get("college")
        if college_name:
            logo = self.colleges.get_logo(college_name)
            if logo:
                student["logo"] = logo
        return serialize_doc(student)


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_college_service() -> CollegeService:
    return CollegeService()


def get_student_service() -> StudentService:
    return StudentService()
