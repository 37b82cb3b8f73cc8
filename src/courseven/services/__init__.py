"""Service layer exports."""

from . import (
	activity_service,
	assessment_service,
	assignment_service,
	category_service,
	course_service,
	enrollment_service,
	group_service,
	membership_service,
	peer_review_service,
)

__all__ = [
	"activity_service",
	"assessment_service",
	"assignment_service",
	"category_service",
	"course_service",
	"enrollment_service",
	"group_service",
	"membership_service",
	"peer_review_service",
]
