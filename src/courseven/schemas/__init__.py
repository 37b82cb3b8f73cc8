"""Public schema exports."""

from .activity import ActivityCreate, ActivityReviewUpdate, ActivityUpdate, CourseActivity
from .assessment import SCORE_SCALE, Assessment, AssessmentCreate
from .category import Category, CategoryCreate
from .course import Course, CourseActiveUpdate, CourseCreate
from .enrollment import Enrollment, EnrollmentCreate
from .group import Group, GroupCreate, GroupCreated, Membership, MembershipCreate
from .peer_review import (
	ActivityPeerReviewSummary,
	CoursePeerReviewSummary,
	GroupActivityReviewStats,
	GroupCrossActivityStats,
	ScoreAverages,
	StudentActivityReviewStats,
	StudentCrossActivityStats,
	StudentPeerReviewResults,
)

__all__ = [
	"ActivityCreate",
	"ActivityPeerReviewSummary",
	"ActivityReviewUpdate",
	"ActivityUpdate",
	"Assessment",
	"AssessmentCreate",
	"Category",
	"CategoryCreate",
	"Course",
	"CourseActiveUpdate",
	"CourseActivity",
	"CourseCreate",
	"CoursePeerReviewSummary",
	"Enrollment",
	"EnrollmentCreate",
	"Group",
	"GroupActivityReviewStats",
	"GroupCreate",
	"GroupCreated",
	"GroupCrossActivityStats",
	"Membership",
	"MembershipCreate",
	"SCORE_SCALE",
	"ScoreAverages",
	"StudentActivityReviewStats",
	"StudentCrossActivityStats",
	"StudentPeerReviewResults",
]
