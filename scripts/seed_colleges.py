#!/usr/bin/env python3
"""
Seed Script

Inserts sample colleges and a student for local development,
then prints the derived views.
Run: python scripts/seed_colleges.py
"""
import sys
sys.path.insert(0, '.')

from datetime import datetime, timedelta, timezone

from collegeez.db.mongodb import test_mongo_connection, init_mongo_indexes, get_mongo_db, COLLECTIONS
from collegeez.core.exceptions import StudentAlreadyExistsError
from collegeez.services.mongo_service import CollegeService, StudentService

SEED_TAG = "seed"


def sample_colleges():
    now = datetime.now(timezone.utc)
    return [
        {
            "collegeName": "Tech Institute",
            "collegeImage": "https://i.ibb.co/tech-institute.png",
            "admissionDate": "2024-08-01",
            "researchCount": 42,
            "events": [{"name": "Hackathon", "date": "2024-09-10"}],
            "researchPapers": [{"title": "Graph Databases at Scale", "year": 2023}],
            "sportsFacilities": [{"name": "Basketball court"}],
            "reviews": [
                {"name": "Asha", "rating": 5, "comment": "Great labs"},
                {"name": "Ravi", "rating": 3, "comment": "Crowded hostel"},
                {"name": "Meera", "rating": 4, "comment": "Good faculty"},
            ],
            "createdAt": now,
            "tag": SEED_TAG,
        },
        {
            "collegeName": "Medical College",
            "collegeImage": "https://i.ibb.co/medical-college.png",
            "admissionDate": "2024-07-15",
            "researchCount": 87,
            "events": [{"name": "Health Camp", "date": "2024-10-02"}],
            "researchPapers": [{"title": "Rural Vaccination Outcomes", "year": 2022}],
            "sportsFacilities": [{"name": "Swimming pool"}],
            "reviews": [
                {"name": "Kiran", "rating": 4, "comment": "Tough but worth it"},
            ],
            "createdAt": now - timedelta(days=1),
            "tag": SEED_TAG,
        },
        {
            "collegeName": "Arts Academy",
            "collegeImage": "https://i.ibb.co/arts-academy.png",
            "admissionDate": "2024-06-20",
            "researchCount": 5,
            "events": [],
            "researchPapers": [],
            "sportsFacilities": [],
            "reviews": [],
            "createdAt": now - timedelta(days=2),
            "tag": SEED_TAG,
        },
    ]


def seed():
    print("\n[1] Inserting colleges...")
    db = get_mongo_db()
    result = db[COLLECTIONS["colleges"]].insert_many(sample_colleges())
    print(f"    ✅ Inserted {len(result.inserted_ids)} colleges")

    print("\n[2] Registering a student...")
    try:
        ack = StudentService().register({
            "email": "seed.student@example.com",
            "name": "Seed Student",
            "college": "Tech Institute",
            "tag": SEED_TAG,
        })
        print(f"    ✅ Registered: {ack['insertedId']}")
    except StudentAlreadyExistsError:
        print("    ⚠️  Student already registered")


def show_views():
    service = CollegeService()

    print("\n[3] Average ratings...")
    for college in service.get_average_ratings():
        print(f"    {college['collegeName']}: {college['averageRating']} ({college['totalReviews']} reviews)")

    print("\n[4] Top colleges...")
    for college in service.get_top_colleges():
        print(f"    {college['collegeName']}: {college['collegeAvgRating']}")

    print("\n[5] Student lookup...")
    student = StudentService().get_by_email("seed.student@example.com")
    print(f"    {student['email']} -> logo: {student.get('logo')}")


def cleanup_seed_data():
    """Remove seeded documents."""
    print("\n[6] Cleaning up seed data...")
    db = get_mongo_db()
    db[COLLECTIONS["colleges"]].delete_many({"tag": SEED_TAG})
    db[COLLECTIONS["students"]].delete_many({"tag": SEED_TAG})
    print("    ✅ Seed data cleaned up")


def main():
    print("=" * 60)
    print("COLLEGEEZNOW SEED")
    print("=" * 60)

    if not test_mongo_connection():
        print("❌ MongoDB connection failed!")
        return

    print("✅ MongoDB connected!")
    init_mongo_indexes()

    try:
        seed()
        show_views()

        response = input("\nClean up seed data? (y/n): ").strip().lower()
        if response == 'y':
            cleanup_seed_data()
        else:
            print("Seed data retained in MongoDB.")

    except Exception as e:
        print(f"\n❌ Seeding failed with error: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
