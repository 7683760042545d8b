# =============================================================================
# tests/test_routes.py - HTTP Surface
# =============================================================================
# Exercises every route through FastAPI's TestClient, including the
# shared error mapping (404 / 409 / 500).
# =============================================================================

from unittest.mock import patch

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from collegeez.services.mongo_service import CollegeService, StudentService


# =============================================================================
# Liveness
# =============================================================================

class TestRoot:

    def test_root_text(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "CollegeEZNow is running"
        assert response.headers["content-type"].startswith("text/plain")

    def test_health(self, client):
        with patch("collegeez.main.test_mongo_connection", return_value=True):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "mongodb": "connected"}


# =============================================================================
# College Routes
# =============================================================================

class TestCollegeRoutes:

    def test_all(self, client, sample_colleges):
        response = client.get("/all")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == len(sample_colleges)
        assert body[0]["collegeName"] == "Tech Institute"
        assert "reviews" in body[0]

    def test_colleges(self, client):
        response = client.get("/colleges")

        assert response.status_code == 200
        rows = {row["collegeName"]: row for row in response.json()}
        assert rows["Tech Institute"]["averageRating"] == 4
        assert rows["Arts Academy"]["averageRating"] == 0
        assert "_id" in rows["Arts Academy"]

    def test_top_college(self, client):
        response = client.get("/topCollege")

        assert response.status_code == 200
        body = response.json()
        assert [row["collegeName"] for row in body] == [
            "Law School",
            "Tech Institute",
            "Science University",
        ]
        assert all("id" in row for row in body)

    def test_reviews(self, client):
        response = client.get("/reviews")

        assert response.status_code == 200
        names = [row["collegeName"] for row in response.json()]
        assert "Arts Academy" not in names
        assert len(names) == 4

    def test_research_papers(self, client, sample_colleges):
        response = client.get("/researchPapers")

        assert response.status_code == 200
        assert len(response.json()) == len(sample_colleges)

    def test_search(self, client):
        response = client.get("/search", params={"name": "tech"})

        assert response.status_code == 200
        assert [doc["collegeName"] for doc in response.json()] == ["Tech Institute"]

    def test_single_college(self, client):
        college_id = client.get("/search", params={"name": "Tech"}).json()[0]["_id"]

        response = client.get(f"/college/{college_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == college_id
        assert body["averageRating"] == 4
        assert body["totalReviews"] == 3

    def test_single_college_not_found(self, client):
        response = client.get(f"/college/{ObjectId()}")

        assert response.status_code == 404
        assert response.json()["code"] == "COLLEGE_NOT_FOUND"

    def test_single_college_malformed_id(self, client):
        response = client.get("/college/abc")

        assert response.status_code == 500
        assert response.json()["code"] == "INVALID_COLLEGE_ID"


# =============================================================================
# Student Routes
# =============================================================================

class TestStudentRoutes:

    def test_register_and_fetch(self, client):
        response = client.post("/updateUser", json={
            "email": "a@example.com",
            "name": "Asha",
            "college": "Medical College",
        })

        assert response.status_code == 200
        assert response.json()["acknowledged"] is True

        student = client.get("/students/a@example.com").json()
        assert student["name"] == "Asha"
        assert student["logo"] == "https://img.example.com/medical-college.png"
        assert "createdAt" in student

    def test_register_duplicate(self, client, seeded_db):
        client.post("/updateUser", json={"email": "a@example.com"})

        response = client.post("/updateUser", json={"email": "a@example.com"})

        assert response.status_code == 409
        assert response.json()["code"] == "STUDENT_EXISTS"
        assert seeded_db["students"].count_documents({}) == 1

    def test_register_requires_email(self, client):
        response = client.post("/updateUser", json={"name": "No Email"})
        assert response.status_code == 422

    def test_student_not_found(self, client):
        response = client.get("/students/missing@example.com")

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Student not found",
            "code": "STUDENT_NOT_FOUND",
            "details": {"email": "missing@example.com"},
        }


# =============================================================================
# Database Faults
# =============================================================================

class TestDatabaseFaults:
    """Store errors become a generic 500 without leaking the cause."""

    def test_colleges_fault(self, client):
        with patch.object(
            CollegeService, "get_average_ratings",
            side_effect=ServerSelectionTimeoutError("cluster0 unreachable")
        ):
            response = client.get("/colleges")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error", "code": "DATABASE_ERROR"}
        assert "cluster0" not in response.text

    def test_top_college_fault(self, client):
        with patch.object(
            CollegeService, "get_top_colleges",
            side_effect=ServerSelectionTimeoutError("timeout")
        ):
            response = client.get("/topCollege")

        assert response.status_code == 500

    def test_student_fault(self, client):
        with patch.object(
            StudentService, "get_by_email",
            side_effect=ServerSelectionTimeoutError("timeout")
        ):
            response = client.get("/students/a@example.com")

        assert response.status_code == 500


# =============================================================================
# Edge Cases
# =============================================================================

class TestUnratedReviewRoutes:
    """A college whose reviews carry no rating still renders."""

    def test_views_render(self, client, seeded_db):
        seeded_db["colleges"].insert_one({
            "collegeName": "Never Rated",
            "reviews": [{"comment": "no rating"}],
        })

        top = client.get("/topCollege")
        reviews = client.get("/reviews")

        assert top.status_code == 200
        assert reviews.status_code == 200
        rows = {row["collegeName"]: row for row in reviews.json()}
        assert rows["Never Rated"]["collegeRating"] == 0


class TestRegistrationIds:

    def test_client_id_does_not_collide(self, client):
        first = client.post("/updateUser", json={"email": "a@example.com", "_id": "fixed"})
        second = client.post("/updateUser", json={"email": "b@example.com", "_id": "fixed"})

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["insertedId"] != "fixed"

    def test_other_duplicate_key_is_server_error(self, client, seeded_db):
        seeded_db["students"].create_index("studentId", unique=True)
        client.post("/updateUser", json={"email": "a@example.com", "studentId": "S1"})

        response = client.post("/updateUser", json={"email": "b@example.com", "studentId": "S1"})

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"


class TestOpenApi:

    def test_error_schema_has_details(self, client):
        schemas = client.get("/openapi.json").json()["components"]["schemas"]
        assert "details" in schemas["ErrorResponse"]["properties"]
