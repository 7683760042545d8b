# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# - Sets environment variables before collegeez.core.config is imported
# - Swaps the shared MongoClient for an in-memory mongomock client
# - Provides sample colleges and an HTTP test client
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB", "collegeez_test")
os.environ.setdefault("DEBUG", "false")

from datetime import datetime, timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from collegeez.db import mongodb
from collegeez.db.mongodb import COLLECTIONS


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def mongo_db(monkeypatch):
    """Fresh in-memory database with the application indexes."""
    client = mongomock.MongoClient()
    monkeypatch.setattr(mongodb, "_client", client)
    monkeypatch.setattr(mongodb, "_db", None)
    monkeypatch.setattr(mongodb, "_email_index_ready", False)
    mongodb.init_mongo_indexes()
    return mongodb.get_mongo_db()


def _college(name, ratings, created_at, **extra):
    doc = {
        "collegeName": name,
        "collegeImage": f"https://img.example.com/{name.lower().replace(' ', '-')}.png",
        "admissionDate": "2024-08-01",
        "researchCount": 10,
        "events": [{"name": f"{name} Fest"}],
        "researchPapers": [{"title": f"{name} Paper"}],
        "sportsFacilities": [{"name": "Football ground"}],
        "reviews": [{"name": f"reviewer{i}", "rating": r} for i, r in enumerate(ratings)],
        "createdAt": created_at,
    }
    doc.update(extra)
    return doc


@pytest.fixture
def sample_colleges():
    """
    Ratings chosen so that ranking needs the review-count tie-break:

    Law School      [5]        avg 5, 1 review
    Tech Institute  [5, 3, 4]  avg 4, 3 reviews
    Science Univ    [4, 4]     avg 4, 2 reviews
    Medical College [4]        avg 4, 1 review
    Arts Academy    []         no reviews
    """
    base = datetime(2024, 1, 1)
    return [
        _college("Tech Institute", [5, 3, 4], base + timedelta(days=5)),
        _college("Medical College", [4], base + timedelta(days=4)),
        _college("Arts Academy", [], base + timedelta(days=3)),
        _college("Science University", [4, 4], base + timedelta(days=2)),
        _college("Law School", [5], base + timedelta(days=1)),
    ]


@pytest.fixture
def seeded_db(mongo_db, sample_colleges):
    """Database with the sample colleges inserted."""
    mongo_db[COLLECTIONS["colleges"]].insert_many(sample_colleges)
    return mongo_db


# =============================================================================
# HTTP Fixtures
# =============================================================================

@pytest.fixture
def client(seeded_db):
    """TestClient over the seeded database (startup hooks not run)."""
    from collegeez.main import app
    return TestClient(app)
