"""
Aggregation pipelines over the colleges collection.

Every college embeds its reviews as an array of {rating, ...} objects.
The views below are computed by MongoDB from that shape:

- average_rating_pipeline: one row per college, average 0 when unreviewed
- top_colleges_pipeline: best rated colleges, review count as tie-break
- reviews_pipeline: per-college rating plus the flattened review list
- research_papers_pipeline: name and research papers for every college

The top colleges and reviews views group on unwound reviews, so a college
with an empty reviews array produces no row in either of them.

All builders are pure functions returning a new list on every call.
"""

from typing import Any, Dict, List, Optional

Pipeline = List[Dict[str, Any]]

TOP_COLLEGE_LIMIT = 3


def average_rating_pipeline(match: Optional[Dict[str, Any]] = None) -> Pipeline:
    """
    Average rating per college.

    Unlike the other views, reviews are unwound with
    preserveNullAndEmptyArrays so colleges without reviews keep their row.
    averageRating is the $avg of numeric ratings, the same accumulator the
    other views use, and 0 when no review carries a numeric rating.
    totalReviews counts every review entry.

    Output fields: _id, collegeName, collegeImage, admissionDate,
    researchCount, totalReviews, totalRatings, averageRating.
    Newest first by createdAt; colleges without a timestamp keep _id order.
    """
    pipeline: Pipeline = []
    if match:
        pipeline.append({"$match": match})

    pipeline.extend([
        {"$addFields": {"totalReviews": {"$size": {"$ifNull": ["$reviews", []]}}}},
        {"$unwind": {"path": "$reviews", "preserveNullAndEmptyArrays": True}},
        {
            "$group": {
                "_id": "$_id",
                "collegeName": {"$first": "$collegeName"},
                "collegeImage": {"$first": "$collegeImage"},
                "admissionDate": {"$first": "$admissionDate"},
                "researchCount": {"$first": "$researchCount"},
                "createdAt": {"$first": "$createdAt"},
                "totalReviews": {"$first": "$totalReviews"},
                "totalRatings": {"$sum": "$reviews.rating"},
                "averageRating": {"$avg": "$reviews.rating"},
            }
        },
        {"$sort": {"createdAt": -1, "_id": 1}},
        {
            "$project": {
                "collegeName": 1,
                "collegeImage": 1,
                "admissionDate": 1,
                "researchCount": 1,
                "totalReviews": 1,
                "totalRatings": 1,
                "averageRating": {"$ifNull": ["$averageRating", 0]},
            }
        },
    ])
    return pipeline


def top_colleges_pipeline(limit: int = TOP_COLLEGE_LIMIT) -> Pipeline:
    """
    Colleges ranked by average rating, then by number of reviews.

    Colleges with no reviews never appear. Reviews without a numeric
    rating count towards totalReviews but not towards the average.
    """
    return [
        {"$unwind": "$reviews"},
        {
            "$group": {
                "_id": "$_id",
                "collegeName": {"$first": "$collegeName"},
                "collegeImage": {"$first": "$collegeImage"},
                "admissionDate": {"$first": "$admissionDate"},
                "events": {"$first": "$events"},
                "researchPapers": {"$first": "$researchPapers"},
                "sportsFacilities": {"$first": "$sportsFacilities"},
                "collegeAvgRating": {"$avg": "$reviews.rating"},
                "totalReviews": {"$sum": 1},
            }
        },
        {
            "$project": {
                "_id": 0,
                "id": "$_id",
                "collegeName": 1,
                "collegeImage": 1,
                "admissionDate": 1,
                "collegeAvgRating": {"$ifNull": ["$collegeAvgRating", 0]},
                "totalReviews": 1,
                "events": 1,
                "researchPapers": 1,
                "sportsFacilities": 1,
            }
        },
        {"$sort": {"collegeAvgRating": -1, "totalReviews": -1, "id": 1}},
        {"$limit": limit},
    ]


def reviews_pipeline() -> Pipeline:
    """Per-college mean rating and every review, ordered by college name."""
    return [
        {"$unwind": "$reviews"},
        {
            "$group": {
                "_id": "$_id",
                "collegeName": {"$first": "$collegeName"},
                "logo": {"$first": "$collegeImage"},
                "events": {"$first": "$events"},
                "collegeRating": {"$avg": "$reviews.rating"},
                "reviews": {"$push": "$reviews"},
            }
        },
        {"$sort": {"collegeName": 1, "_id": 1}},
        {
            "$project": {
                "_id": 0,
                "id": "$_id",
                "collegeName": 1,
                "logo": 1,
                "collegeRating": {"$ifNull": ["$collegeRating", 0]},
                "events": 1,
                "reviews": 1,
            }
        },
    ]


def research_papers_pipeline() -> Pipeline:
    return [
        {
            "$project": {
                "_id": 0,
                "id": "$_id",
                "collegeName": 1,
                "researchPapers": {"$ifNull": ["$researchPapers", []]},
            }
        },
    ]
