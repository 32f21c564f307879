# This project was developed with assistance from AI tools.
"""
Domain enums for the SBA loan portal.

Shared domain types used by both SQLAlchemy models (portal_db package)
and Pydantic schemas (portal_api package).
"""

import enum


class UserRole(str, enum.Enum):
    BORROWER = "borrower"
    REFERRAL = "referral"
    ADMIN = "admin"


class ApplicationStatus(str, enum.Enum):
    STARTED = "started"
    DOCUMENTS_PENDING = "documents_pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    FUNDED = "funded"
    DECLINED = "declined"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses with no outgoing transition."""
        return frozenset({cls.FUNDED, cls.DECLINED})


class ApplicationAction(str, enum.Enum):
    SUBMIT = "submit"
    START_REVIEW = "start_review"
    APPROVE = "approve"
    DECLINE = "decline"
    FUND = "fund"


class DocumentStatus(str, enum.Enum):
    UPLOADED = "uploaded"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def terminal_statuses(cls) -> frozenset["DocumentStatus"]:
        """Review outcomes. Neither moves back to uploaded."""
        return frozenset({cls.APPROVED, cls.REJECTED})


class DocumentDecision(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


class MeetingType(str, enum.Enum):
    CALLBACK = "callback"
    IN_PERSON = "in_person"


class MeetingStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class LeadStatus(str, enum.Enum):
    NEW = "new"
    CONTACTED = "contacted"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    FUNDED = "funded"
    DECLINED = "declined"


class StepStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
