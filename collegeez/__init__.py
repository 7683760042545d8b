"""
CollegeEZNow
College, review and student data over HTTP.

Architecture:
- MongoDB: colleges (with embedded reviews/events/papers) and students
- Aggregation pipelines: average ratings, top colleges, review listings
- FastAPI: thin JSON routes over the services
"""

__version__ = "1.0.0"
