"""Primary API router definition."""

from fastapi import APIRouter

from . import activities, categories, courses, enrollments, groups, peer_reviews

api_router = APIRouter()

api_router.include_router(courses.router)
api_router.include_router(categories.router)
api_router.include_router(groups.router)
api_router.include_router(activities.router)
api_router.include_router(enrollments.router)
api_router.include_router(peer_reviews.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
