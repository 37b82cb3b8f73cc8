"""Observable controllers for client front-ends."""

from .base import StateController
from .enrollment_controller import EnrollmentController, EnrollmentState
from .membership_controller import MembershipController, MembershipState
from .peer_review_controller import PeerReviewController, PeerReviewState

__all__ = [
	"EnrollmentController",
	"EnrollmentState",
	"MembershipController",
	"MembershipState",
	"PeerReviewController",
	"PeerReviewState",
	"StateController",
]
